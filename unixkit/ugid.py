"""Conversions between user/group names and numeric IDs."""

from __future__ import annotations

import grp
import pwd
import re
import sys

_NUMERIC = re.compile(r"[ \t\n\v\f\r]*[+-]?[0-9]+")
_ID_MODULUS = 2**32


def _numeric_id(name: str) -> int | None:
    if _NUMERIC.fullmatch(name):
        return int(name) % _ID_MODULUS
    return None


def user_name_from_id(uid: int) -> str | None:
    """Return the login name for 'uid', or None if there is none."""
    try:
        return pwd.getpwuid(uid).pw_name
    except (KeyError, OverflowError):
        return None


def user_id_from_name(name: str | None) -> int | None:
    """Return the UID for a user name or numeric string, or None."""
    if not name:
        return None
    numeric = _numeric_id(name)
    if numeric is not None:
        return numeric
    try:
        return pwd.getpwnam(name).pw_uid
    except KeyError:
        return None


def group_name_from_id(gid: int) -> str | None:
    """Return the group name for 'gid', or None if there is none."""
    try:
        return grp.getgrgid(gid).gr_name
    except (KeyError, OverflowError):
        return None


def group_id_from_name(name: str | None) -> int | None:
    """Return the GID for a group name or numeric string, or None."""
    if not name:
        return None
    numeric = _numeric_id(name)
    if numeric is not None:
        return numeric
    try:
        return grp.getgrnam(name).gr_gid
    except KeyError:
        return None


def find_user(name: str) -> pwd.struct_passwd | None:
    """Scan the password database for the first record named 'name'."""
    return next((entry for entry in pwd.getpwall() if entry.pw_name == name), None)


def main(argv: list[str] | None = None) -> int:
    """Look up a user by scanning the password database and print the result."""
    args = sys.argv[1:] if argv is None else list(argv)
    if not args:
        print("Usage: find-user name", file=sys.stderr)
        return 1
    entry = find_user(args[0])
    if entry is not None:
        print(f"{entry.pw_name:<8} {entry.pw_uid}")
    else:
        print(f"{args[0]} Not found")
    return 0