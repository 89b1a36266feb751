import errno
import io
import os
import socket

import pytest

from sysprog.rio import RIO_BUFSIZE, RioError, RioReader, readn, writen


class ChunkStream:
    """Hands out data in small pieces, with optional interruptions."""

    def __init__(self, data, chunk=3, interrupts=0):
        self.data = data
        self.chunk = chunk
        self.interrupts = interrupts
        self.calls = 0

    def read(self, n):
        self.calls += 1
        if self.interrupts:
            self.interrupts -= 1
            raise InterruptedError()
        piece = self.data[: min(n, self.chunk)]
        self.data = self.data[len(piece):]
        return piece


class FailingStream:
    def read(self, n):
        raise OSError(errno.EIO, "boom")

    def write(self, data):
        raise OSError(errno.EPIPE, "broken")


class ShortWriter:
    def __init__(self, step=2, interrupts=0):
        self.buf = bytearray()
        self.step = step
        self.interrupts = interrupts

    def write(self, data):
        if self.interrupts:
            self.interrupts -= 1
            raise InterruptedError()
        piece = bytes(data[: self.step])
        self.buf += piece
        return len(piece)


class ZeroWriter:
    def write(self, data):
        return 0


def test_readn_reads_everything_across_chunks():
    data = b"abcdefghijklmnop"
    assert readn(ChunkStream(data), len(data)) == data


def test_readn_stops_at_eof():
    data = b"short"
    assert readn(io.BytesIO(data), 100) == data


def test_readn_retries_after_interrupt():
    data = b"hello world"
    assert readn(ChunkStream(data, interrupts=2), len(data)) == data


def test_readn_wraps_errors():
    with pytest.raises(RioError) as info:
        readn(FailingStream(), 4)
    assert info.value.errno == errno.EIO


def test_writen_handles_short_writes():
    out = ShortWriter(step=3, interrupts=1)
    data = b"the quick brown fox"
    assert writen(out, data) == len(data)
    assert bytes(out.buf) == data


def test_writen_raises_on_error():
    with pytest.raises(RioError) as info:
        writen(FailingStream(), b"x")
    assert info.value.errno == errno.EPIPE


def test_writen_raises_when_no_progress():
    with pytest.raises(RioError):
        writen(ZeroWriter(), b"data")


def test_writen_and_readn_over_pipe_fds():
    r, w = os.pipe()
    try:
        data = b"pipe payload\n" * 10
        assert writen(w, data) == len(data)
        os.close(w)
        w = -1
        assert readn(r, len(data) + 50) == data
    finally:
        os.close(r)
        if w >= 0:
            os.close(w)


def test_writen_and_reader_over_socketpair():
    a, b = socket.socketpair()
    with a, b:
        writen(a, b"GET / HTTP/1.0\r\nHost: x\r\n\r\n")
        a.shutdown(socket.SHUT_WR)
        reader = RioReader(b)
        lines = list(reader)
    assert lines == [b"GET / HTTP/1.0\r\n", b"Host: x\r\n", b"\r\n"]


def test_readlineb_splits_lines():
    reader = RioReader(io.BytesIO(b"one\ntwo\nthree"))
    assert reader.readlineb() == b"one\n"
    assert reader.readlineb() == b"two\n"
    assert reader.readlineb() == b"three"
    assert reader.readlineb() == b""


def test_readlineb_respects_maxlen():
    reader = RioReader(io.BytesIO(b"abcdefgh\n"))
    first = reader.readlineb(4)
    assert len(first) == 3
    assert first + reader.readlineb(100) == b"abcdefgh\n"


def test_readlineb_maxlen_one_reads_nothing():
    reader = RioReader(io.BytesIO(b"abc\n"))
    assert reader.readlineb(1) == b""
    assert reader.readlineb() == b"abc\n"


def test_readlineb_across_small_buffer_refills():
    data = b"a fairly long line that spans buffers\nnext\n"
    reader = RioReader(ChunkStream(data, chunk=5), bufsize=4)
    assert reader.readlineb() + reader.readlineb() == data


def test_read_returns_at_most_buffered_bytes():
    reader = RioReader(ChunkStream(b"0123456789", chunk=4))
    first = reader.read(10)
    assert len(first) == 4
    assert reader.pending == 0
    assert first + reader.readnb(10) == b"0123456789"


def test_read_zero_returns_empty():
    stream = ChunkStream(b"abc")
    reader = RioReader(stream)
    assert reader.read(0) == b""
    assert stream.calls == 0


def test_readnb_mixes_with_lines():
    reader = RioReader(io.BytesIO(b"header\nBODYBYTES"))
    assert reader.readlineb() == b"header\n"
    assert reader.readnb(4) == b"BODY"
    assert reader.readnb(100) == b"BYTES"
    assert reader.readnb(5) == b""


def test_reader_retries_after_interrupt():
    reader = RioReader(ChunkStream(b"line\n", interrupts=3))
    assert reader.readlineb() == b"line\n"


def test_reader_wraps_errors():
    reader = RioReader(FailingStream())
    with pytest.raises(RioError):
        reader.readlineb()
    with pytest.raises(RioError):
        reader.readnb(3)


def test_reader_rejects_bad_bufsize():
    with pytest.raises(ValueError):
        RioReader(io.BytesIO(b""), bufsize=0)


def test_default_buffer_limits_single_read():
    data = bytes(range(256)) * (RIO_BUFSIZE // 256 + 4)
    reader = RioReader(io.BytesIO(data))
    chunk = reader.read(len(data))
    assert len(chunk) == RIO_BUFSIZE
    assert chunk + reader.readnb(len(data)) == data