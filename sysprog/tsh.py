"""A tiny shell with job control."""

from __future__ import annotations

import getopt
import os
import signal
import sys
import threading
from typing import IO, Any

from sysprog.jobs import JobList, JobState, parseline

PROMPT = "tsh> "


def usage(out: IO[str] | None = None) -> None:
    """Write the help message."""
    target = sys.stdout if out is None else out
    target.write(
        "Usage: shell [-hvp]\n"
        "   -h   print this message\n"
        "   -v   print additional diagnostic information\n"
        "   -p   do not emit a command prompt\n"
    )


class Shell:
    """Reads command lines and runs them as foreground or background jobs.

    Each job runs in its own process group, so keyboard signals reach the
    shell, which forwards them to the foreground job.
    """

    def __init__(
        self,
        verbose: bool = False,
        emit_prompt: bool = True,
        out: IO[str] | None = None,
    ) -> None:
        self.verbose = verbose
        self.emit_prompt = emit_prompt
        self._out = out
        self.jobs = JobList(verbose, out)

    @property
    def out(self) -> IO[str]:
        return sys.stdout if self._out is None else self._out

    def _write(self, text: str) -> None:
        self.out.write(text)

    def eval(self, cmdline: str) -> None:
        """Run one command line: a built-in now, anything else as a job.

        Foreground jobs are waited for until they end or stop. The
        ``quit`` built-in raises :class:`SystemExit`.
        """
        argv, background = parseline(cmdline)
        if not argv or self._builtin(argv):
            return
        self._reap()
        blocked = {signal.SIGINT, signal.SIGTSTP}
        previous = signal.pthread_sigmask(signal.SIG_BLOCK, blocked)
        try:
            try:
                pid = os.posix_spawnp(
                    argv[0],
                    argv,
                    dict(os.environ),
                    setpgroup=0,
                    setsigmask=previous,
                    setsigdef=(signal.SIGPIPE,),
                )
            except OSError:
                self._write(f"{argv[0]}: Command not found\n")
                return
            state = JobState.BG if background else JobState.FG
            self.jobs.add(pid, state, cmdline)
        finally:
            signal.pthread_sigmask(signal.SIG_SETMASK, previous)
        if background:
            self._write(f"[{self.jobs.pid_to_jid(pid)}] ({pid}) {cmdline}")
        else:
            self._waitfg(pid)

    def _builtin(self, argv: list[str]) -> bool:
        name = argv[0]
        if name == "quit":
            raise SystemExit(0)
        if name == "jobs":
            self._reap()
            self._write(self.jobs.listing())
            return True
        if name in ("bg", "fg"):
            self._reap()
            self._do_bgfg(argv)
            return True
        return False

    def _do_bgfg(self, argv: list[str]) -> None:
        name = argv[0]
        if len(argv) < 2:
            self._write(f"{name} command requires PID or %jobid argument\n")
            return
        arg = argv[1]
        number = arg[1:] if arg.startswith("%") else arg
        if not (number.isascii() and number.isdigit()):
            self._write(f"{name}: argument must be a PID or %jobid\n")
            return
        if arg.startswith("%"):
            job = self.jobs.by_jid(int(number))
            if job is None:
                self._write(f"{arg}: No such job\n")
                return
        else:
            job = self.jobs.by_pid(int(number))
            if job is None:
                self._write(f"({arg}): No such process\n")
                return
        try:
            os.killpg(job.pid, signal.SIGCONT)
        except ProcessLookupError:
            pass
        if name == "bg":
            job.state = JobState.BG
            self._write(f"[{job.jid}] ({job.pid}) {job.cmdline}")
        else:
            job.state = JobState.FG
            self._waitfg(job.pid)

    def _waitfg(self, pid: int) -> None:
        while True:
            job = self.jobs.by_pid(pid)
            if job is None or job.state is not JobState.FG:
                return
            try:
                _, status = os.waitpid(pid, os.WUNTRACED)
            except ChildProcessError:
                self.jobs.delete(pid)
                return
            self._update(pid, status)

    def _reap(self) -> None:
        for job in list(self.jobs):
            try:
                pid, status = os.waitpid(job.pid, os.WNOHANG | os.WUNTRACED)
            except ChildProcessError:
                self.jobs.delete(job.pid)
                continue
            if pid:
                self._update(pid, status)

    def _update(self, pid: int, status: int) -> None:
        job = self.jobs.by_pid(pid)
        if job is None:
            return
        if os.WIFSTOPPED(status):
            job.state = JobState.ST
            self._write(
                f"Job [{job.jid}] ({pid}) stopped by signal {os.WSTOPSIG(status)}\n"
            )
        elif os.WIFSIGNALED(status):
            self._write(
                f"Job [{job.jid}] ({pid}) terminated by signal {os.WTERMSIG(status)}\n"
            )
            self.jobs.delete(pid)
        elif os.WIFEXITED(status):
            self.jobs.delete(pid)

    def _forward(self, signum: int, _frame: Any) -> None:
        pid = self.jobs.fg_pid()
        if pid:
            try:
                os.killpg(pid, signum)
            except ProcessLookupError:
                pass

    def _quit(self, _signum: int, _frame: Any) -> None:
        self._write("Terminating after receipt of SIGQUIT signal\n")
        self.out.flush()
        raise SystemExit(1)

    def run(self, stdin: IO[str] | None = None) -> int:
        """Run the read/eval loop until end of input or ``quit``; return the exit code."""
        stream = sys.stdin if stdin is None else stdin
        previous: dict[int, Any] = {}
        if threading.current_thread() is threading.main_thread():
            for signum, handler in (
                (signal.SIGINT, self._forward),
                (signal.SIGTSTP, self._forward),
                (signal.SIGQUIT, self._quit),
            ):
                previous[signum] = signal.signal(signum, handler)
        try:
            while True:
                if self.emit_prompt:
                    self._write(PROMPT)
                    self.out.flush()
                try:
                    line = stream.readline()
                except OSError:
                    self._write("fgets error\n")
                    return 1
                if not line:
                    self.out.flush()
                    return 0
                self.eval(line)
                self.out.flush()
        except SystemExit as exc:
            self.out.flush()
            return exc.code if isinstance(exc.code, int) else 0
        finally:
            for signum, handler in previous.items():
                signal.signal(signum, handler)


def main(argv: list[str] | None = None) -> int:
    """Start the shell; options are -h, -v and -p."""
    args = sys.argv[1:] if argv is None else list(argv)
    try:
        opts, _ = getopt.getopt(args, "hvp")
    except getopt.GetoptError:
        usage()
        return 1
    verbose = False
    emit_prompt = True
    for opt, _value in opts:
        if opt == "-h":
            usage()
            return 1
        if opt == "-v":
            verbose = True
        elif opt == "-p":
            emit_prompt = False
    # Send error output down the same pipe as normal output.
    try:
        sys.stdout.flush()
        os.dup2(1, 2)
    except OSError:
        pass
    return Shell(verbose, emit_prompt).run(sys.stdin)