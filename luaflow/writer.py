"""Output sink: an append-only text destination for emitted Lua."""

from __future__ import annotations

import io
from abc import ABC, abstractmethod
from typing import TextIO


class Writer(ABC):
    """Append-only text sink.

    ``write`` raises ``OSError`` on failure; callers never catch it, so the
    first failed write aborts whatever emission was in progress.
    """

    @abstractmethod
    def write(self, text: str) -> None: ...

    def writeln(self, line: str = "") -> None:
        self.write(f"{line}\n")


class StreamWriter(Writer):
    """Writes through to an already-open text stream (file, stdout, ...)."""

    def __init__(self, stream: TextIO):
        self._stream = stream

    def write(self, text: str) -> None:
        self._stream.write(text)


class StringWriter(Writer):
    """Accumulates emitted text in memory."""

    def __init__(self):
        self._buffer = io.StringIO()

    def write(self, text: str) -> None:
        self._buffer.write(text)

    def getvalue(self) -> str:
        return self._buffer.getvalue()
