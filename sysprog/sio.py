"""Small, direct output helpers that avoid formatting machinery."""

from __future__ import annotations

import io
import sys
from typing import IO, Any

_DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"


def format_long(value: int, base: int = 10) -> str:
    """Render an integer in ``base`` (2 to 36) with lower-case digits."""
    if not 2 <= base <= 36:
        raise ValueError("base must be between 2 and 36")
    negative = value < 0
    magnitude = -value if negative else value
    digits = []
    while True:
        magnitude, digit = divmod(magnitude, base)
        digits.append(_DIGITS[digit])
        if magnitude == 0:
            break
    if negative:
        digits.append("-")
    return "".join(reversed(digits))


def _is_binary(out: Any) -> bool:
    if isinstance(out, (io.RawIOBase, io.BufferedIOBase)):
        return True
    return "b" in getattr(out, "mode", "")


def puts(text: str, out: IO[Any] | None = None) -> int:
    """Write ``text`` straight to ``out`` (stdout by default); return its length."""
    target = sys.stdout if out is None else out
    if _is_binary(target):
        data = text.encode()
        target.write(data)
        written = len(data)
    else:
        target.write(text)
        written = len(text)
    target.flush()
    return written


def putl(value: int, out: IO[Any] | None = None) -> int:
    """Write ``value`` in decimal to ``out``; return the number of characters."""
    return puts(format_long(value, 10), out)