"""The job table of a job-control shell and its command-line parser."""

from __future__ import annotations

import enum
import sys
from dataclasses import dataclass
from typing import IO, Iterator, NamedTuple

MAXJOBS = 16


class JobState(enum.IntEnum):
    """Where a job runs: undefined, foreground, background or stopped."""

    UNDEF = 0
    FG = 1
    BG = 2
    ST = 3


_STATE_NAMES = {
    JobState.BG: "Running ",
    JobState.FG: "Foreground ",
    JobState.ST: "Stopped ",
}


@dataclass
class Job:
    """One job: its process id, job id, state and command line."""

    pid: int
    jid: int
    state: JobState
    cmdline: str


class JobList:
    """A fixed-size table of jobs, filled from the first free slot."""

    def __init__(self, verbose: bool = False, out: IO[str] | None = None) -> None:
        self.verbose = verbose
        self._out = out
        self._slots: list[Job | None] = [None] * MAXJOBS
        self._next_jid = 1

    def _write(self, text: str) -> None:
        (sys.stdout if self._out is None else self._out).write(text)

    def __iter__(self) -> Iterator[Job]:
        return (job for job in self._slots if job is not None)

    def __len__(self) -> int:
        return sum(1 for _ in self)

    def add(self, pid: int, state: JobState, cmdline: str) -> bool:
        """Add a job; return False if ``pid`` is invalid or the table is full."""
        if pid < 1:
            return False
        slot = next((i for i, job in enumerate(self._slots) if job is None), None)
        if slot is None:
            self._write("Tried to create too many jobs\n")
            return False
        job = Job(pid, self._next_jid, JobState(state), cmdline)
        self._slots[slot] = job
        self._next_jid += 1
        if self._next_jid > MAXJOBS:
            self._next_jid = 1
        if self.verbose:
            self._write(f"Added job [{job.jid}] {job.pid} {job.cmdline}\n")
        return True

    def delete(self, pid: int) -> bool:
        """Remove the job with process id ``pid``; return whether it existed."""
        if pid < 1:
            return False
        for slot, job in enumerate(self._slots):
            if job is not None and job.pid == pid:
                self._slots[slot] = None
                self._next_jid = self.max_jid() + 1
                return True
        return False

    def max_jid(self) -> int:
        """Return the largest job id in use, or 0."""
        return max((job.jid for job in self), default=0)

    def fg_pid(self) -> int:
        """Return the process id of the foreground job, or 0."""
        return next((job.pid for job in self if job.state is JobState.FG), 0)

    def by_pid(self, pid: int) -> Job | None:
        """Find a job by process id."""
        if pid < 1:
            return None
        return next((job for job in self if job.pid == pid), None)

    def by_jid(self, jid: int) -> Job | None:
        """Find a job by job id."""
        if jid < 1:
            return None
        return next((job for job in self if job.jid == jid), None)

    def pid_to_jid(self, pid: int) -> int:
        """Map a process id to its job id, or 0."""
        job = self.by_pid(pid)
        return 0 if job is None else job.jid

    def listing(self) -> str:
        """Render the table the way the ``jobs`` command shows it."""
        lines = []
        for slot, job in enumerate(self._slots):
            if job is None:
                continue
            state = _STATE_NAMES.get(
                job.state,
                f"listjobs: Internal error: job[{slot}].state={int(job.state)} ",
            )
            lines.append(f"[{job.jid}] ({job.pid}) {state}{job.cmdline}")
        return "".join(lines)


class ParsedLine(NamedTuple):
    """Arguments of a command line and whether it runs in the background."""

    argv: list[str]
    background: bool


def parseline(cmdline: str) -> ParsedLine:
    """Split a newline-terminated command line into arguments.

    Text in single quotes forms one argument. A last argument starting
    with ``&`` asks for a background job and is dropped. A blank line
    counts as a background request with no arguments.
    """
    buf = (cmdline[:-1] if cmdline else "") + " "
    buf = buf.lstrip(" ")
    argv: list[str] = []
    while True:
        if buf.startswith("'"):
            buf = buf[1:]
            delim = buf.find("'")
        else:
            delim = buf.find(" ")
        if delim < 0:
            break
        argv.append(buf[:delim])
        buf = buf[delim + 1:].lstrip(" ")
    if not argv:
        return ParsedLine([], True)
    background = argv[-1].startswith("&")
    if background:
        argv.pop()
    return ParsedLine(argv, background)