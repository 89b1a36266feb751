# sysprog

Small systems-programming tools built on the Python standard library:

- **adder** – a minimal CGI program that adds the two numbers in
  `QUERY_STRING` (for example `15000&213`).
- **proxy** – prints the `User-Agent` header a proxy sends upstream.
- **tsh** – a tiny shell with job control: foreground, background and
  stopped jobs, and the built-ins `quit`, `jobs`, `bg` and `fg`.
- **myspin**, **mysplit**, **myint**, **mystop** – helper programs for
  exercising a job-control shell.

## Installing

```
pip install .
```

For the test suite:

```
pip install ".[test]"
pytest
```

## The CGI adder

`adder` reads `QUERY_STRING`, splits it at the first `&`, reads a leading
integer from each side and writes a CGI response (`Connection`,
`Content-length` and `Content-type` headers, then an HTML body):

```
QUERY_STRING='15000&213' adder
```

Without `QUERY_STRING` it adds zero to zero. A query without `&` is an
error and the program exits with status 1.

## The proxy

```
proxy
```

prints the `User-Agent` header line and exits.

## The shell and its helpers

```
tsh -p
```

Options: `-h` prints help, `-v` prints diagnostics (such as each job as it
is added), `-p` suppresses the `tsh> ` prompt. Each job runs in its own
process group; ctrl-c and ctrl-z are forwarded to the foreground job, and
SIGQUIT ends the shell. `bg` and `fg` take a PID or a `%jobid`.

```
myspin 3     # sleep 3 seconds, one second at a time
mysplit 3    # fork a child that sleeps 3 seconds and wait for it
myint 2      # sleep 2 seconds, then send SIGINT to itself
mystop 2     # sleep 2 seconds, then send SIGTSTP to its process group
```

## Library use

- `sysprog.rio` – `RioReader` (`read`, `readnb`, `readlineb`, and iteration
  over lines) for buffered reads from streams, sockets or file descriptors,
  plus `readn` and `writen` for whole-count reads and writes; failures raise
  `RioError`.
- `sysprog.sio` – `format_long`, `puts` and `putl` for simple output.
- `sysprog.adder` – `parse_query`, `make_content` and `render_response`.
- `sysprog.jobs` – `JobList`, `Job`, `JobState` and `parseline`.
- `sysprog.tsh` – `Shell` (`eval`, `run`) and `usage`.
- `sysprog.testprogs` – `atoi`, `spin` and the helper programs' entry points.

## What this package does not do

It has no web server: nothing here listens on a port, serves files or runs
`adder` in answer to an HTTP request, and there are no helpers for opening
client or listening sockets. `adder` has to be started by a CGI-capable
server of your own, or by hand as shown above.