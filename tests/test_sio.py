import io

import pytest

from sysprog.sio import format_long, putl, puts


@pytest.mark.parametrize("value", [0, 7, -7, 10, -10, 123456789, -987654321, 2**62, -(2**63)])
def test_format_long_decimal_matches_str(value):
    assert format_long(value) == str(value)


@pytest.mark.parametrize("base", [2, 8, 10, 16, 36])
@pytest.mark.parametrize("value", [0, 1, -1, 35, 255, -4096, 99999])
def test_format_long_round_trip(value, base):
    assert int(format_long(value, base), base) == value


def test_format_long_hex_uses_lowercase():
    for value in (10, 255, 48879, -3054):
        assert format_long(value, 16) == format(value, "x")


@pytest.mark.parametrize("base", [0, 1, 37])
def test_format_long_rejects_bad_base(base):
    with pytest.raises(ValueError):
        format_long(5, base)


def test_puts_text_stream():
    out = io.StringIO()
    text = "hello signal handler\n"
    assert puts(text, out) == len(text)
    assert out.getvalue() == text


def test_puts_binary_stream():
    out = io.BytesIO()
    text = "bytes out\n"
    assert puts(text, out) == len(text)
    assert out.getvalue() == text.encode()


def test_puts_default_stdout(capsys):
    puts("to stdout")
    assert capsys.readouterr().out == "to stdout"


@pytest.mark.parametrize("value", [0, 42, -42, 1234567])
def test_putl_writes_decimal(value):
    out = io.StringIO()
    assert putl(value, out) == len(str(value))
    assert out.getvalue() == str(value)


def test_putl_concatenates_with_puts():
    out = io.StringIO()
    puts("Job ", out)
    putl(-3, out)
    puts(" done", out)
    assert out.getvalue() == "Job " + str(-3) + " done"