"""Environment list manipulation and display."""

from __future__ import annotations

import argparse
import os
import re
import sys
from collections.abc import Iterable, Mapping, MutableMapping


def _check_name(name: str) -> None:
    if not name or "=" in name:
        raise ValueError(f"invalid environment variable name: {name!r}")


def set_env(
    env: MutableMapping[str, str], name: str, value: str, overwrite: bool = True
) -> None:
    """Set 'name' to 'value' unless it exists and 'overwrite' is false."""
    _check_name(name)
    if name not in env or overwrite:
        env[name] = value


def unset_env(env: MutableMapping[str, str], name: str) -> None:
    """Remove every definition of 'name'; a missing name is not an error."""
    _check_name(name)
    env.pop(name, None)


def format_environment(env: Mapping[str, str]) -> str:
    """Render the environment as NAME=VALUE lines."""
    return "".join(f"{name}={value}\n" for name, value in env.items())


def _put(env: MutableMapping[str, str], assignment: str) -> None:
    name, sep, value = assignment.partition("=")
    if not name:
        raise ValueError(f"invalid environment assignment: {assignment!r}")
    if sep:
        env[name] = value
    else:
        env.pop(name, None)


def modify_environment(assignments: Iterable[str]) -> dict[str, str]:
    """Build a fresh environment from NAME=VALUE strings.

    A string without '=' removes that name. GREET is then set to
    "Hello World" if absent, and BYE is removed.
    """
    env: dict[str, str] = {}
    for assignment in assignments:
        _put(env, assignment)
    set_env(env, "GREET", "Hello World", False)
    unset_env(env, "BYE")
    return env


def _atoi(text: str) -> int:
    match = re.match(r"\s*[+-]?\d+", text)
    return int(match.group()) if match else 0


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="unixkit-env", description=__doc__)
    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("show", help="print the environment")
    p = sub.add_parser("modify", help="print a fresh environment built from NAME=VALUE")
    p.add_argument("assignments", nargs="*")
    p = sub.add_parser("set", help="set a variable")
    p.add_argument("name")
    p.add_argument("value")
    p.add_argument("overwrite")
    p = sub.add_parser("unset", help="remove a variable")
    p.add_argument("name")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Show, rebuild, set or unset environment variables."""
    args = _build_parser().parse_args(argv)
    try:
        if args.command == "show":
            sys.stdout.write(format_environment(os.environ))
        elif args.command == "modify":
            sys.stdout.write(format_environment(modify_environment(args.assignments)))
        else:
            env = dict(os.environ)
            env["LOL"] = "1"
            env["DELL"] = "3"
            print("Before operation:")
            sys.stdout.write(format_environment(env))
            if args.command == "set":
                set_env(env, args.name, args.value, _atoi(args.overwrite) != 0)
            else:
                unset_env(env, args.name)
            print("After operation:")
            sys.stdout.write(format_environment(env))
    except ValueError as exc:
        print(exc, file=sys.stderr)
        return 1
    return 0