"""Calendar time and process time reporting."""

from __future__ import annotations

import os
import re
import sys
import time

SECONDS_IN_TROPICAL_YEAR = 365.2419 * 24 * 60 * 60
CLOCKS_PER_SEC = 1_000_000
_BUF_SIZE = 1000


def curr_time(fmt: str | None = None) -> str:
    """Return the current local time formatted with 'fmt' (default "%c")."""
    text = time.strftime("%c" if fmt is None else fmt, time.localtime())
    if not text or len(text) >= _BUF_SIZE:
        raise ValueError("formatted time is empty or too long")
    return text


def format_broken_down(tm: time.struct_time) -> str:
    """Render a struct_time with the field conventions of a C struct tm."""
    return (
        f"year={tm.tm_year - 1900} mon={tm.tm_mon - 1} mday={tm.tm_mday} "
        f"hour={tm.tm_hour} min={tm.tm_min} sec={tm.tm_sec} "
        f"wday={(tm.tm_wday + 1) % 7} yday={tm.tm_yday - 1} isdst={tm.tm_isdst}"
    )


def calendar_report(t: float | None = None) -> str:
    """Describe time 't' (default: now) in the various calendar forms."""
    if t is None:
        t = time.time()
    secs = int(t)
    usecs = int(round((t - secs) * 1_000_000))
    gm = time.gmtime(secs)
    loc = time.localtime(secs)
    lines = [
        f"Seconds since the Epoch (1 Jan 1970): {secs} "
        f"(about {secs / SECONDS_IN_TROPICAL_YEAR:6.3f} years)",
        f"    gettimeofday() returned {secs} secs, {usecs} microsecs",
        "Broken down by gmtime():",
        f"    {format_broken_down(gm)}",
        "Broken down by localtime():",
        f" {format_broken_down(loc)}",
        "",
        f"asctime() formats the gmtime() value as:    {time.asctime(gm)}",
        f"ctime() formats the time as:                {time.ctime(secs)}",
        f"mktime() of gmtime() value:     {int(time.mktime(gm))} sec",
        f"mktime() of localtime() value: {int(time.mktime(loc))} secs",
    ]
    return "\n".join(lines) + "\n"


def process_times_report(msg: str | None = None) -> str:
    """Describe the CPU time used so far by this process."""
    parts = []
    if msg is not None:
        parts.append(f"{msg}\n")
    clock = time.process_time()
    parts.append(
        f"    clock() returns: {int(clock * CLOCKS_PER_SEC)} clocks-per-sec "
        f"({clock:.2f} secs)\n"
    )
    times = os.times()
    parts.append(
        f"    times() yields: user CPU={times.user:.2f}; "
        f"system CPU: {times.system:.2f}\n"
    )
    return "".join(parts)


def _atoi(text: str) -> int:
    match = re.match(r"\s*[+-]?\d+", text)
    return int(match.group()) if match else 0


def calendar_main(argv: list[str] | None = None) -> int:
    """Print the calendar time report for the current time."""
    sys.stdout.write(calendar_report())
    return 0


def process_main(argv: list[str] | None = None) -> int:
    """Print process times before and after a loop of getppid() calls."""
    args = sys.argv[1:] if argv is None else list(argv)
    clock_ticks = os.sysconf("SC_CLK_TCK")
    sys.stdout.write(
        f"CLOCKS_PER_SEC={CLOCKS_PER_SEC} sysconf(_SC_CLK_TCK)={clock_ticks}\n\n"
    )
    sys.stdout.write(process_times_report("At program start:\n"))
    num_calls = _atoi(args[0]) if args else 100000
    for _ in range(num_calls):
        os.getppid()
    sys.stdout.write(process_times_report("\nAfter getppid() loop:\n"))
    return 0