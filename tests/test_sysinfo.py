import mmap
import os

import pytest

from unixkit.sysinfo import (
    Credentials,
    format_credentials,
    format_limit,
    fpathconf_value,
    main,
    process_credentials,
    processes_of_user,
    sysconf_value,
)


def test_format_limit_determinate():
    assert format_limit("_SC_OPEN_MAX:         ", 1024) == "_SC_OPEN_MAX:          1024"


def test_format_limit_indeterminate():
    assert format_limit("_PC_PATH_MAX: ", None) == "_PC_PATH_MAX:  (indeterminate)"


def test_sysconf_pagesize_matches_mmap():
    assert sysconf_value("SC_PAGESIZE") == mmap.PAGESIZE


def test_sysconf_unknown_name():
    with pytest.raises(ValueError):
        sysconf_value("SC_NO_SUCH_LIMIT")


def test_fpathconf_name_max_positive(tmp_path):
    path = tmp_path / "f"
    path.write_bytes(b"")
    fd = os.open(path, os.O_RDONLY)
    try:
        value = fpathconf_value(fd, "PC_NAME_MAX")
    finally:
        os.close(fd)
    assert value is not None and value > 0


def test_process_credentials_match_os():
    creds = process_credentials()
    assert creds.ruid == os.getuid()
    assert creds.euid == os.geteuid()
    assert creds.rgid == os.getgid()
    assert creds.egid == os.getegid()
    assert set(creds.groups) == set(os.getgroups())


def test_format_credentials_layout():
    uid = os.getuid()
    gid = os.getgid()
    creds = Credentials(uid, uid, uid, uid, gid, gid, gid, gid, (gid, gid))
    lines = format_credentials(creds).split("\n")
    assert lines[0].startswith("UID: real=")
    assert lines[0].endswith(f"fs={lines[0].split('fs=')[1]}")
    assert f"({uid}); " in lines[0]
    assert lines[1].startswith("GID: real=")
    assert lines[2].startswith("Supplementary groups (2): ")
    assert lines[2].count(f"({gid})") == 2


def _make_proc(tmp_path, pid, name, uid):
    d = tmp_path / str(pid)
    d.mkdir()
    (d / "status").write_text(
        f"Name:\t{name}\nState:\tS\nUid:\t{uid}\t{uid}\t{uid}\t{uid}\n"
    )


def test_processes_of_user_filters_by_uid(tmp_path):
    _make_proc(tmp_path, 123, "shell", 1000)
    _make_proc(tmp_path, 45, "editor", 1000)
    _make_proc(tmp_path, 456, "daemon", 2000)
    (tmp_path / "999").mkdir()
    (tmp_path / "self").mkdir()
    (tmp_path / "789").write_text("not a directory")
    assert processes_of_user("1000", tmp_path) == [(45, "editor"), (123, "shell")]


def test_processes_of_user_invalid_user(tmp_path):
    with pytest.raises(ValueError, match="Invalid user name"):
        processes_of_user("", tmp_path)


def test_main_limits_prints_pagesize(capsys):
    assert main(["limits"]) == 0
    out = capsys.readouterr().out
    line = next(l for l in out.splitlines() if l.startswith("_SC_PAGESIZE:"))
    assert line.split()[-1] == str(mmap.PAGESIZE)


def test_main_procs_invalid_user(capsys):
    assert main(["procs", "no-such-user-anywhere-xyz"]) == 1
    assert "Invalid user name" in capsys.readouterr().out


def test_main_ids(capsys):
    assert main(["ids"]) == 0
    out = capsys.readouterr().out
    assert out.startswith("UID: real=")
    assert "Supplementary groups (" in out