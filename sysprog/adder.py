"""A minimal CGI program that adds the two numbers in its query string."""

from __future__ import annotations

import os
import sys

from sysprog.testprogs import atoi


def parse_query(query: str) -> tuple[int, int]:
    """Split ``query`` at the first ``&`` and read an integer from each side."""
    first, sep, second = query.partition("&")
    if not sep:
        raise ValueError("query string must hold two arguments separated by '&'")
    return atoi(first), atoi(second)


def make_content(n1: int, n2: int) -> str:
    """Build the HTML body that reports ``n1 + n2``."""
    return (
        "Welcome to add.com: "
        "THE Internet addition portal.\r\n<p>"
        f"The answer is: {n1} + {n2} = {n1 + n2}\r\n<p>"
        "Thanks for visiting!\r\n"
    )


def render_response(query: str | None) -> str:
    """Return the CGI output (headers and body) for ``query``.

    A missing query adds zero to zero.
    """
    n1, n2 = (0, 0) if query is None else parse_query(query)
    content = make_content(n1, n2)
    return (
        "Connection: close\r\n"
        f"Content-length: {len(content.encode())}\r\n"
        "Content-type: text/html\r\n\r\n"
        f"{content}"
    )


def main(argv: list[str] | None = None) -> int:
    """Answer the request described by the ``QUERY_STRING`` variable."""
    try:
        response = render_response(os.environ.get("QUERY_STRING"))
    except ValueError as exc:
        sys.stderr.write(f"adder: {exc}\n")
        return 1
    sys.stdout.write(response)
    sys.stdout.flush()
    return 0