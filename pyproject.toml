[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "unixkit"
version = "0.1.0"
description = "Small UNIX system-programming tools: file I/O, users and groups, time, limits, environment and TCP servers"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "unix",
    "linux",
    "posix",
    "file-io",
    "sockets",
    "tcp",
    "tls",
    "environment",
    "sysconf",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: POSIX",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Systems Administration",
    "Topic :: System :: Networking",
    "Topic :: System :: Filesystems",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
unixkit-finduser = "unixkit.ugid:main"
unixkit-calendar = "unixkit.timeutil:calendar_main"
unixkit-proctimes = "unixkit.timeutil:process_main"
unixkit-fileio = "unixkit.fileio:main"
unixkit-seekio = "unixkit.seekio:main"
unixkit-sysinfo = "unixkit.sysinfo:main"
unixkit-env = "unixkit.environ:main"
unixkit-createfiles = "unixkit.createfiles:main"
unixkit-daytime = "unixkit.daytime:client_main"
unixkit-daytimed = "unixkit.daytime:server_main"
unixkit-echo = "unixkit.echo:client_main"
unixkit-echod = "unixkit.echo:server_main"
unixkit-tlsd = "unixkit.tlsserver:main"
unixkit-webd = "unixkit.listener:main"

[tool.hatch.build.targets.wheel]
packages = ["unixkit"]

[tool.hatch.build.targets.sdist]
include = ["unixkit", "tests", "README.md", "pyproject.toml"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
