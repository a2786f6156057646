"""Candidate line source."""

from __future__ import annotations

from typing import Iterator, TextIO


def read_lines(stream: TextIO) -> Iterator[str]:
    """Yield lines from stream without their line endings, until EOF."""
    for line in stream:
        yield line.rstrip("\r\n")
