"""Small UNIX system-programming tools: file I/O, users and groups, time, limits, environment and TCP servers."""

__version__ = "0.1.0"