import pytest

from unixkit import seekio
from unixkit.numbers import NumberArgumentError


def test_write_seek_read(tmp_path):
    path = str(tmp_path / "tfile")
    lines = list(seekio.run_commands(path, ["s0", "wHello there", "s0", "r5"]))
    assert lines == [
        "s0: seek succeded",
        "wHello there: wrote 11 bytes",
        "s0: seek succeded",
        "r5: Hello",
    ]
    assert (tmp_path / "tfile").read_bytes() == b"Hello there"


def test_hex_read_round_trip(tmp_path):
    path = tmp_path / "f"
    path.write_bytes(b"AB")
    lines = list(seekio.run_commands(str(path), ["R2"]))
    assert lines == ["R2: " + "".join(f"{b:02x} " for b in b"AB")]


def test_nonprintable_shown_as_question_mark(tmp_path):
    path = tmp_path / "f"
    path.write_bytes(b"a\x01b")
    assert list(seekio.run_commands(str(path), ["r3"])) == ["r3: a?b"]


def test_end_of_file(tmp_path):
    path = str(tmp_path / "empty")
    assert list(seekio.run_commands(path, ["r5"])) == ["r5: end-of-file"]


def test_any_base_length(tmp_path):
    path = tmp_path / "f"
    path.write_bytes(b"xyz")
    assert list(seekio.run_commands(str(path), ["r0x2", "s0", "r02"])) == [
        "r0x2: xy",
        "s0: seek succeded",
        "r02: xy",
    ]


def test_unknown_command(tmp_path):
    lines = list(seekio.run_commands(str(tmp_path / "f"), ["x1", ""]))
    assert lines == [
        "Argument must start with [rRws]: x1",
        "Argument must start with [rRws]: ",
    ]


def test_bad_number_raises(tmp_path):
    with pytest.raises(NumberArgumentError):
        list(seekio.run_commands(str(tmp_path / "f"), ["rzz"]))


def test_negative_seek_raises(tmp_path):
    with pytest.raises(OSError):
        list(seekio.run_commands(str(tmp_path / "f"), ["s-1"]))


def test_main_prints_output(tmp_path, capsys):
    path = str(tmp_path / "f")
    assert seekio.main([path, "wabc", "s1", "r2"]) == 0
    out = capsys.readouterr().out.splitlines()
    assert out == ["wabc: wrote 3 bytes", "s1: seek succeded", "r2: bc"]


def test_main_usage(capsys):
    assert seekio.main(["--help"]) == 0
    assert "r<length> | R<length> | w<string> | s<offset>" in capsys.readouterr().out


def test_main_reports_number_error(tmp_path, capsys):
    assert seekio.main([str(tmp_path / "f"), "s1q"]) == 1
    assert "nonnumeric characters" in capsys.readouterr().err