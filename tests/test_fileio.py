import os

import pytest

from unixkit import fileio


def _make(path, data):
    path.write_bytes(data)
    return str(path)


def test_copy_file_round_trip(tmp_path):
    data = bytes(range(256)) * 10
    src = _make(tmp_path / "src", data)
    dst = str(tmp_path / "dst")
    assert fileio.copy_file(src, dst, 7) == len(data)
    assert (tmp_path / "dst").read_bytes() == data


def test_copy_file_truncates_destination(tmp_path):
    src = _make(tmp_path / "src", b"short")
    dst = _make(tmp_path / "dst", b"a much longer existing content")
    assert fileio.copy_file(src, dst) == 5
    assert (tmp_path / "dst").read_bytes() == b"short"


def test_copy_file_missing_source(tmp_path):
    with pytest.raises(FileNotFoundError):
        fileio.copy_file(str(tmp_path / "nope"), str(tmp_path / "dst"))


def test_copy_file_rejects_zero_buffer(tmp_path):
    src = _make(tmp_path / "src", b"x")
    with pytest.raises(ValueError):
        fileio.copy_file(src, str(tmp_path / "dst"), 0)


@pytest.mark.parametrize("sync", [None, "o_sync", "fsync", "fdatasync"])
def test_write_bytes_size(tmp_path, sync):
    path = str(tmp_path / "out")
    assert fileio.write_bytes(path, 1000, 64, sync) == 1000
    assert os.path.getsize(path) == 1000


def test_write_bytes_does_not_truncate(tmp_path):
    path = _make(tmp_path / "out", b"z" * 50)
    assert fileio.write_bytes(path, 10, 4) == 10
    content = (tmp_path / "out").read_bytes()
    assert len(content) == 50
    assert content[10:] == b"z" * 40


def test_write_bytes_errors(tmp_path):
    with pytest.raises(ValueError):
        fileio.write_bytes(str(tmp_path / "out"), 10, 0)
    with pytest.raises(ValueError):
        fileio.write_bytes(str(tmp_path / "out"), 10, 4, "bogus")


def test_write_at_offset(tmp_path):
    path = str(tmp_path / "large")
    assert fileio.write_at_offset(path, 5000) == 4
    content = (tmp_path / "large").read_bytes()
    assert len(content) == 5000 + 4
    assert content[5000:] == b"test"
    assert content[:5000] == bytes(5000)


def test_write_at_negative_offset(tmp_path):
    with pytest.raises(OSError):
        fileio.write_at_offset(str(tmp_path / "f"), -1)


def test_append_text_goes_to_end(tmp_path):
    path = _make(tmp_path / "f", b"abc")
    assert fileio.append_text(path, "XYZ") == 3
    assert (tmp_path / "f").read_bytes() == b"abcXYZ"


def test_append_text_requires_existing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        fileio.append_text(str(tmp_path / "missing"), "hi")


@pytest.mark.parametrize("use_seek", [False, True])
def test_append_bytes(tmp_path, use_seek):
    path = _make(tmp_path / "f", b"head")
    assert fileio.append_bytes(path, 25, use_seek) == 25
    assert (tmp_path / "f").read_bytes() == b"head" + b"s" * 25


def test_read_vector_short_file(tmp_path):
    path = _make(tmp_path / "f", b"0123456789")
    requested, num_read = fileio.read_vector(path)
    assert requested == 104
    assert num_read == 10


def test_read_vector_long_file(tmp_path):
    path = _make(tmp_path / "f", b"q" * 500)
    requested, num_read = fileio.read_vector(path)
    assert num_read == requested


def test_direct_read_errors(tmp_path):
    with pytest.raises(FileNotFoundError):
        fileio.direct_read(str(tmp_path / "missing"), 512)
    path = _make(tmp_path / "f", b"data")
    with pytest.raises(ValueError):
        fileio.direct_read(path, 512, 0, 0)


def test_main_copy(tmp_path):
    src = _make(tmp_path / "src", b"hello world")
    dst = str(tmp_path / "dst")
    assert fileio.main(["copy", src, dst]) == 0
    assert (tmp_path / "dst").read_bytes() == b"hello world"


def test_main_append_text_output(tmp_path, capsys):
    path = _make(tmp_path / "f", b"abc")
    assert fileio.main(["append-text", path, "Hi"]) == 0
    out = capsys.readouterr().out
    assert f"{path} file\n" in out
    assert "Hi | total: 2 bytes, wrote: 2 bytes" in out


def test_main_append_bytes_output(tmp_path, capsys):
    path = str(tmp_path / "f")
    assert fileio.main(["append-bytes", path, "3", "x"]) == 0
    out = capsys.readouterr().out
    assert "Number of bytes: 3" in out
    assert f"File {path} | Num. Bytes: 3, Wrote: 3" in out


def test_main_reports_error(tmp_path, capsys):
    assert fileio.main(["readv", str(tmp_path / "missing")]) == 1
    assert "readv - errno prints:" in capsys.readouterr().err