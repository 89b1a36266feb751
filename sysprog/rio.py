"""Robust buffered and unbuffered byte I/O over streams, sockets and descriptors."""

from __future__ import annotations

import errno
import os
from typing import Any

RIO_BUFSIZE = 8192
MAXLINE = 8192


class RioError(OSError):
    """Raised when an underlying read or write fails."""


def _raw_read(stream: Any, n: int) -> bytes:
    if isinstance(stream, int):
        return os.read(stream, n)
    if hasattr(stream, "recv"):
        return stream.recv(n)
    reader = getattr(stream, "read1", None) or stream.read
    chunk = reader(n)
    if chunk is None:
        raise RioError(errno.EAGAIN, "stream would block")
    return bytes(chunk)


def _raw_write(stream: Any, data: memoryview) -> int:
    if isinstance(stream, int):
        return os.write(stream, data)
    if hasattr(stream, "send"):
        return stream.send(data)
    written = stream.write(data)
    return len(data) if written is None else written


def _wrap(exc: OSError, action: str) -> RioError:
    return RioError(exc.errno, f"{action} error: {exc.strerror or exc}")


def readn(stream: Any, n: int) -> bytes:
    """Read up to ``n`` bytes without buffering, stopping early only at EOF."""
    parts: list[bytes] = []
    left = n
    while left > 0:
        try:
            chunk = _raw_read(stream, left)
        except InterruptedError:
            continue
        except RioError:
            raise
        except OSError as exc:
            raise _wrap(exc, "read") from exc
        if not chunk:
            break
        parts.append(chunk)
        left -= len(chunk)
    return b"".join(parts)


def writen(stream: Any, data: bytes) -> int:
    """Write all of ``data``, retrying on short writes; return its length."""
    view = memoryview(data).cast("B")
    while view:
        try:
            written = _raw_write(stream, view)
        except InterruptedError:
            continue
        except OSError as exc:
            raise _wrap(exc, "write") from exc
        if written <= 0:
            raise RioError(errno.EIO, "write error: no bytes written")
        view = view[written:]
    flush = getattr(stream, "flush", None)
    if flush is not None and not isinstance(stream, int):
        try:
            flush()
        except OSError as exc:
            raise _wrap(exc, "write") from exc
    return len(data)


class RioReader:
    """A read buffer tied to one stream, socket or file descriptor."""

    def __init__(self, stream: Any, bufsize: int = RIO_BUFSIZE) -> None:
        if bufsize < 1:
            raise ValueError("bufsize must be positive")
        self._stream = stream
        self._bufsize = bufsize
        self._buf = b""
        self._pos = 0

    @property
    def pending(self) -> int:
        """Number of unread bytes held in the internal buffer."""
        return len(self._buf) - self._pos

    def _fill(self) -> bool:
        while True:
            try:
                chunk = _raw_read(self._stream, self._bufsize)
            except InterruptedError:
                continue
            except RioError:
                raise
            except OSError as exc:
                raise _wrap(exc, "read") from exc
            if not chunk:
                return False
            self._buf = chunk
            self._pos = 0
            return True

    def read(self, n: int) -> bytes:
        """Return at most ``n`` bytes, refilling the buffer once if it is empty."""
        if n <= 0:
            return b""
        if self.pending <= 0 and not self._fill():
            return b""
        end = min(self._pos + n, len(self._buf))
        chunk = self._buf[self._pos:end]
        self._pos = end
        return chunk

    def readnb(self, n: int) -> bytes:
        """Read up to ``n`` bytes through the buffer, stopping early only at EOF."""
        parts: list[bytes] = []
        left = n
        while left > 0:
            chunk = self.read(left)
            if not chunk:
                break
            parts.append(chunk)
            left -= len(chunk)
        return b"".join(parts)

    def readlineb(self, maxlen: int = MAXLINE) -> bytes:
        """Read one line of at most ``maxlen - 1`` bytes, newline included.

        Returns ``b""`` at end of input when nothing was read.
        """
        limit = maxlen - 1
        parts: list[bytes] = []
        got = 0
        while got < limit:
            if self.pending <= 0 and not self._fill():
                break
            end = min(len(self._buf), self._pos + (limit - got))
            newline = self._buf.find(b"\n", self._pos, end)
            if newline >= 0:
                end = newline + 1
            parts.append(self._buf[self._pos:end])
            got += end - self._pos
            self._pos = end
            if newline >= 0:
                break
        return b"".join(parts)

    def __iter__(self):
        while True:
            line = self.readlineb()
            if not line:
                return
            yield line