# unixkit

A set of small UNIX system-programming tools, usable both as a library
and from the command line. It covers plain file I/O, user and group
lookups, calendar and process time, system limits, process credentials,
the environment list, and a handful of TCP servers and clients.

It needs Python 3.10 or later and a POSIX system; several tools read
`/proc` or use Linux-only calls such as `O_DIRECT`, `getresuid()` and
`fdatasync()`. There are no third-party dependencies.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Library overview

| Module                | What it offers |
|-----------------------|----------------|
| `unixkit.numbers`     | `get_long(arg, flags, name)` and `get_int(arg, flags, name)`: strict parsing of numeric arguments in the style of `strtol`, controlled by `NumberFlags` (`NONNEG`, `GT_0`, `ANY_BASE`, `BASE_8`, `BASE_16`). Failures raise `NumberArgumentError`, a `ValueError`. `get_int` also rejects values outside the 32-bit range. |
| `unixkit.ugid`        | `user_name_from_id`, `user_id_from_name`, `group_name_from_id`, `group_id_from_name` (numeric strings are accepted as IDs; unknown names give `None`), and `find_user`, which scans the password database. |
| `unixkit.timeutil`    | `curr_time(fmt)` (default format `%c`), `format_broken_down` (fields shown as in a C `struct tm`), `calendar_report`, `process_times_report`. |
| `unixkit.fileio`      | `copy_file`, `write_bytes` (optional `sync` of `"o_sync"`, `"fsync"` or `"fdatasync"`), `write_at_offset`, `append_text`, `append_bytes`, `read_vector`, `direct_read`. |
| `unixkit.seekio`      | `run_commands(path, commands)`: a generator that runs `r`, `R`, `w` and `s` commands against a file and yields one output line each. |
| `unixkit.sysinfo`     | `sysconf_value`, `fpathconf_value` (`None` when a limit is indeterminate), `format_limit`, `process_credentials` returning a `Credentials` record, `format_credentials`, `processes_of_user`. |
| `unixkit.environ`     | `set_env`, `unset_env`, `format_environment`, `modify_environment`; all work on a mapping you pass in or get back. |
| `unixkit.createfiles` | `random_file_names`, `create_files` (returns the paths and the CPU seconds taken). |
| `unixkit.sockets`     | `read_n`, `write_n`, `inet_pton_loose` (falls back to `inet_aton` rules, giving an IPv4-mapped address for `AF_INET6`), `byte_order`, `sock_ntop`. |
| `unixkit.daytime`     | `daytime_string`, `serve_daytime`, `fetch_daytime`. |
| `unixkit.echo`        | `echo_session`, `answer_once`, `serve_echo`, `serve_forking`, `echo_client`. |
| `unixkit.tlsserver`   | `create_context`, `create_socket`, `serve_tls`. |
| `unixkit.listener`    | `TcpListener` (abstract), with the `MultiClientChat` and `WebServer` subclasses, and `http_response`. |

A short example:

```python
from unixkit.numbers import NumberFlags, get_long
from unixkit.ugid import user_id_from_name
from unixkit.timeutil import curr_time

size = get_long("0x400", NumberFlags.ANY_BASE, "size")   # 1024
uid = user_id_from_name("root")                          # 0
print(curr_time("%T"))
```

`TcpListener` is meant to be subclassed: override `on_client_connected`,
`on_client_disconnected` and `on_message_received`, then call `open()`
and `run()`; `stop()`, which may be called from another thread, ends the
loop and closes every socket. `address` gives the bound address once
the listener is open.

## Commands

Each command is a thin wrapper over the functions above.

| Command | Purpose |
|---------|---------|
| `unixkit-finduser NAME` | Look a user up in the password database and print its name and UID. |
| `unixkit-calendar` | Show the current time in its various calendar forms. |
| `unixkit-proctimes [N]` | Show process CPU times before and after N `getppid()` calls (default 100000). |
| `unixkit-fileio copy SRC DST` | Copy a file. |
| `unixkit-fileio write-bytes FILE N BUFSIZE [--sync MODE]` | Write N bytes in writes of BUFSIZE; MODE is `o_sync`, `fsync` or `fdatasync`. |
| `unixkit-fileio large-file FILE OFFSET` | Write `test` at OFFSET. |
| `unixkit-fileio append-text FILE TEXT` | Write TEXT to an existing file opened in append mode. |
| `unixkit-fileio append-bytes FILE N [seek]` | Append N single bytes; with any third argument, seek to the end before each write instead of using `O_APPEND`. |
| `unixkit-fileio readv FILE` | Scatter-read 104 bytes and report how many were read. |
| `unixkit-fileio direct-read FILE LENGTH [OFFSET] [ALIGNMENT]` | Read with `O_DIRECT` into an aligned buffer. |
| `unixkit-seekio FILE CMD...` | Apply commands to FILE: `r<len>` read as text, `R<len>` read as hex, `w<text>` write, `s<offset>` seek. |
| `unixkit-sysinfo limits` | Show `sysconf()` limits. |
| `unixkit-sysinfo pathconf` | Show `fpathconf()` limits for standard input. |
| `unixkit-sysinfo ids` | Show real, effective, saved and file-system IDs and supplementary groups. |
| `unixkit-sysinfo procs USER` | List PID and command name of every process owned by USER. |
| `unixkit-env show` | Print the environment. |
| `unixkit-env modify NAME=VALUE...` | Print a fresh environment built from the assignments, with `GREET` added if absent and `BYE` removed. |
| `unixkit-env set NAME VALUE OVERWRITE` / `unixkit-env unset NAME` | Print a copy of the environment before and after the change. |
| `unixkit-createfiles N [DIR]` | Create N one-byte files with random names in DIR (default `testfd`) and report the time taken. |
| `unixkit-daytime HOST [PORT] [--count]` | Fetch the time from a daytime server (default port 12001); `--count` reports each read. |
| `unixkit-daytimed [PORT] [--byte-at-a-time]` | Run a daytime server. |
| `unixkit-echo [HOST] [PORT] [--once]` | Send lines typed on standard input to a server (default 127.0.0.1:54003) and print the replies. |
| `unixkit-echod [PORT] [--mode echo\|once\|fork]` | Run an echo server, a single-reply server, or a server that answers each client in a child process. |
| `unixkit-tlsd [--cert FILE] [--key FILE] [--port N]` | Run a TLS server that replies `test` to every client; defaults are `cert.pem`, `key.pem` and port 12001. |
| `unixkit-webd PORT [--document FILE]` | Serve one HTML document (default `wwwroot/index.html`) to every request. |

Numeric arguments to `unixkit-fileio`, `unixkit-proctimes`,
`unixkit-createfiles` and `unixkit-env set` are read from their leading
digits; text without digits counts as 0.

For example:

```
unixkit-seekio notes.txt s0 w"Hello there" s0 r5
```

writes `Hello there` at the start of `notes.txt` and reads back its first
five bytes.

When a command fails it prints a message and exits with a non-zero
status.

## What it does not do

- `unixkit-webd` does not look at the request: every message from a
  client gets the same document, or a `404 Not Found` heading in a
  `200 OK` response if the file cannot be read.
- `unixkit-env set` and `unset` change only a copy of the environment
  that is printed; they do not affect the calling shell.
- Nothing here runs on Windows.