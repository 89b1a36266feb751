"""Small programs used to exercise a job-control shell."""

from __future__ import annotations

import os
import re
import signal
import sys
import time
from typing import Callable

_ATOI = re.compile(r"[ \t\n\v\f\r]*([+-]?[0-9]+)")


def atoi(text: str) -> int:
    """Read a leading decimal integer the way C's ``atoi`` does; 0 if none."""
    match = _ATOI.match(text)
    return int(match.group(1)) if match else 0


def spin(seconds: int, sleep: Callable[[float], object] = time.sleep) -> None:
    """Sleep for ``seconds`` seconds in one-second steps."""
    for _ in range(seconds):
        sleep(1)


def _seconds(argv: list[str] | None, name: str) -> int | None:
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) != 1:
        sys.stderr.write(f"Usage: {name} <n>\n")
        return None
    return atoi(args[0])


def myspin_main(argv: list[str] | None = None) -> int:
    """Sleep for the given number of seconds."""
    secs = _seconds(argv, "myspin")
    if secs is not None:
        spin(secs)
    return 0


def mysplit_main(argv: list[str] | None = None) -> int:
    """Fork a child that sleeps for the given seconds, and wait for it."""
    secs = _seconds(argv, "mysplit")
    if secs is None:
        return 0
    pid = os.fork()
    if pid == 0:
        try:
            spin(secs)
        finally:
            os._exit(0)
    os.waitpid(pid, 0)
    return 0


def myint_main(argv: list[str] | None = None) -> int:
    """Sleep for the given seconds, then send SIGINT to this process."""
    secs = _seconds(argv, "myint")
    if secs is None:
        return 0
    spin(secs)
    try:
        os.kill(os.getpid(), signal.SIGINT)
    except OSError:
        sys.stderr.write("kill (int) error")
    return 0


def mystop_main(argv: list[str] | None = None) -> int:
    """Sleep for the given seconds, then send SIGTSTP to this process group."""
    secs = _seconds(argv, "mystop")
    if secs is None:
        return 0
    spin(secs)
    try:
        os.killpg(os.getpid(), signal.SIGTSTP)
    except OSError:
        sys.stderr.write("kill (tstp) error")
    return 0