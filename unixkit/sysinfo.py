"""System limits, process credentials and per-user process listings."""

from __future__ import annotations

import argparse
import os
import sys
from dataclasses import dataclass, field
from pathlib import Path

from unixkit.ugid import group_name_from_id, user_id_from_name, user_name_from_id

SYSCONF_LIMITS = (
    ("_SG_ARG_MAX           ", "SC_ARG_MAX"),
    ("_SC_LOGIN_NAME_MAX    ", "SC_LOGIN_NAME_MAX"),
    ("_SC_OPEN_MAX:         ", "SC_OPEN_MAX"),
    ("_SC_NGROUPS_MAX:      ", "SC_NGROUPS_MAX"),
    ("_SC_PAGESIZE:         ", "SC_PAGESIZE"),
    ("_SC_RTSIG_MAX:        ", "SC_RTSIG_MAX"),
)

PATHCONF_LIMITS = (
    ("_PC_NAME_MAX: ", "PC_NAME_MAX"),
    ("_PC_PATH_MAX: ", "PC_PATH_MAX"),
    ("_PC_PIPE_BUF: ", "PC_PIPE_BUF"),
)

_UNKNOWN = "???"


@dataclass(frozen=True)
class Credentials:
    """User and group IDs of a process."""

    ruid: int
    euid: int
    suid: int
    fsuid: int
    rgid: int
    egid: int
    sgid: int
    fsgid: int
    groups: tuple[int, ...] = field(default_factory=tuple)


def sysconf_value(name: str | int) -> int | None:
    """Return the sysconf() value for 'name', or None if it is indeterminate."""
    value = os.sysconf(name)
    return None if value == -1 else value


def fpathconf_value(fd: int, name: str | int) -> int | None:
    """Return the fpathconf() value for 'name' on 'fd', or None if indeterminate."""
    value = os.fpathconf(fd, name)
    return None if value == -1 else value


def format_limit(msg: str, value: int | None) -> str:
    """Format a limit line as '<msg> <value>' or '<msg> (indeterminate)'."""
    if value is None:
        return f"{msg} (indeterminate)"
    return f"{msg} {value}"


def _fs_ids() -> tuple[int | None, int | None]:
    fsuid = fsgid = None
    try:
        with open("/proc/self/status", encoding="utf-8") as status:
            for line in status:
                key, _, rest = line.partition(":")
                fields = rest.split()
                if key == "Uid" and len(fields) >= 4:
                    fsuid = int(fields[3])
                elif key == "Gid" and len(fields) >= 4:
                    fsgid = int(fields[3])
    except OSError:
        pass
    return fsuid, fsgid


def process_credentials() -> Credentials:
    """Collect the real, effective, saved and file-system IDs of this process."""
    ruid, euid, suid = os.getresuid()
    rgid, egid, sgid = os.getresgid()
    fsuid, fsgid = _fs_ids()
    return Credentials(
        ruid=ruid,
        euid=euid,
        suid=suid,
        fsuid=euid if fsuid is None else fsuid,
        rgid=rgid,
        egid=egid,
        sgid=sgid,
        fsgid=egid if fsgid is None else fsgid,
        groups=tuple(os.getgroups()),
    )


def _label(name: str | None, ident: int) -> str:
    return f"{name if name is not None else _UNKNOWN} ({ident})"


def format_credentials(creds: Credentials) -> str:
    """Render credentials with names looked up in the user and group databases."""
    uid_line = "UID: " + "".join(
        f"{kind}={_label(user_name_from_id(ident), ident)}; "
        for kind, ident in (
            ("real", creds.ruid),
            ("eff", creds.euid),
            ("saved", creds.suid),
            ("fs", creds.fsuid),
        )
    )
    gid_line = "GID: " + "".join(
        f"{kind}={_label(group_name_from_id(ident), ident)}; "
        for kind, ident in (
            ("real", creds.rgid),
            ("eff", creds.egid),
            ("saved", creds.sgid),
            ("fs", creds.fsgid),
        )
    )
    groups_line = f"Supplementary groups ({len(creds.groups)}): " + "".join(
        f"{_label(group_name_from_id(gid), gid)} " for gid in creds.groups
    )
    return f"{uid_line}\n{gid_line}\n{groups_line}\n"


def _read_status(path: Path) -> tuple[str | None, int | None]:
    name = uid = None
    with path.open(encoding="utf-8", errors="replace") as status:
        for line in status:
            key, _, rest = line.partition(":")
            if key == "Name":
                name = rest.strip()
            elif key == "Uid":
                fields = rest.split()
                if fields:
                    uid = int(fields[0])
            if name is not None and uid is not None:
                break
    return name, uid


def processes_of_user(
    user: str, proc_root: str | os.PathLike[str] = "/proc"
) -> list[tuple[int, str]]:
    """List (pid, command name) of processes whose real UID belongs to 'user'.

    Directories that vanish while being scanned are skipped.
    """
    uid = user_id_from_name(user)
    if uid is None:
        raise ValueError("Invalid user name")
    root = Path(proc_root)
    found = []
    for entry in root.iterdir():
        if not entry.name.isdigit():
            continue
        try:
            name, owner = _read_status(entry / "status")
        except (OSError, ValueError):
            continue
        if owner == uid and name is not None:
            found.append((int(entry.name), name))
    return sorted(found)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="unixkit-sysinfo", description=__doc__)
    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("limits", help="show sysconf() limits")
    sub.add_parser("pathconf", help="show fpathconf() limits for standard input")
    p = sub.add_parser("procs", help="list processes of a user")
    p.add_argument("user")
    sub.add_parser("ids", help="show process credentials")
    return parser


def _print_limits(label: str, entries, lookup) -> int:
    for msg, name in entries:
        try:
            value = lookup(name)
        except (OSError, ValueError) as exc:
            detail = exc.strerror if isinstance(exc, OSError) and exc.strerror else exc
            print(f"{label} {msg} - errno prints: {detail}")
            return 1
        print(format_limit(msg, value))
    return 0


def main(argv: list[str] | None = None) -> int:
    """Run one of the system information commands."""
    args = _build_parser().parse_args(argv)
    if args.command == "limits":
        return _print_limits("sysconf", SYSCONF_LIMITS, sysconf_value)
    if args.command == "pathconf":
        return _print_limits(
            "fpathconf", PATHCONF_LIMITS, lambda name: fpathconf_value(0, name)
        )
    if args.command == "procs":
        try:
            processes = processes_of_user(args.user)
        except ValueError as exc:
            print(exc)
            return 1
        except OSError:
            print("Can't open /proc/ ")
            return 1
        for pid, name in processes:
            print(f"{pid} {name}")
        return 0
    try:
        sys.stdout.write(format_credentials(process_credentials()))
    except OSError as exc:
        print(exc.strerror or exc)
        return 1
    return 0