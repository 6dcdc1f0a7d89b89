"""Create many one-byte files with random names and time it."""

from __future__ import annotations

import argparse
import os
import random
import re
import time
from collections.abc import Iterator
from pathlib import Path

DEFAULT_DIRECTORY = "testfd"
_ID_RANGE = 999999


def random_file_names(count: int, rng: random.Random | None = None) -> Iterator[str]:
    """Yield 'count' names of the form xNNNNNNN.txt with random numbers."""
    rng = rng if rng is not None else random.Random()
    for _ in range(count):
        yield f"x{rng.randrange(_ID_RANGE):07d}.txt"


def create_files(
    directory: str | os.PathLike[str],
    count: int,
    rng: random.Random | None = None,
) -> tuple[list[Path], float]:
    """Create 'count' one-byte files in 'directory' in random-name order.

    Returns the paths in creation order and the CPU seconds taken.
    """
    base = Path(directory)
    start = time.process_time()
    paths = []
    for name in random_file_names(count, rng):
        path = base / name
        fd = os.open(path, os.O_WRONLY | os.O_CREAT, 0o600)
        try:
            if os.write(fd, b"a") != 1:
                raise OSError(f"short write to {path}")
        finally:
            os.close(fd)
        paths.append(path)
    return paths, time.process_time() - start


def _atoi(text: str) -> int:
    match = re.match(r"\s*[+-]?\d+", text)
    return int(match.group()) if match else 0


def main(argv: list[str] | None = None) -> int:
    """Create the requested number of files and report the time taken."""
    parser = argparse.ArgumentParser(prog="unixkit-createfiles", description=__doc__)
    parser.add_argument("num_files")
    parser.add_argument("directory", nargs="?", default=DEFAULT_DIRECTORY)
    args = parser.parse_args(argv)
    num_files = _atoi(args.num_files)
    try:
        paths, elapsed = create_files(args.directory, num_files)
    except OSError as exc:
        print(f"write: {exc.strerror or exc}")
        return 1
    for path in paths:
        print(path)
    print(
        f"Time taken to create {num_files} files: "
        f"{int(elapsed * 1000)} milliseconds"
    )
    return 0