"""Line reader working through a stream with a bounded buffer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import IO, Iterator

from cpufeat.string_view import index_of_char

DEFAULT_BUFFER_SIZE = 1024


@dataclass(frozen=True)
class LineResult:
    """One line read from a stream.

    ``eof`` is set on the final result; ``full_line`` is False when the
    line did not fit in the buffer and was truncated.
    """

    line: str
    eof: bool
    full_line: bool


class StackLineReader:
    """Reads lines from a text or binary stream, never holding more than
    ``buffer_size`` characters at once. Longer lines are truncated and the
    rest of them skipped."""

    def __init__(self, stream: IO, buffer_size: int = DEFAULT_BUFFER_SIZE) -> None:
        if buffer_size <= 0:
            raise ValueError("buffer_size must be positive")
        self._stream = stream
        self._buffer_size = buffer_size
        self._view = ""
        self._skip_mode = False

    def _read(self, size: int) -> str:
        data = self._stream.read(size)
        if isinstance(data, (bytes, bytearray)):
            return bytes(data).decode("latin-1")
        return data or ""

    def _skip_to_next_line(self) -> None:
        while True:
            self._view = self._read(self._buffer_size)
            if not self._view:
                return
            eol = index_of_char(self._view, "\n")
            if eol >= 0:
                self._view = self._view[eol + 1:]
                return

    def next_line(self) -> LineResult:
        """Return the next line, flagged as truncated or end of file."""
        if self._skip_mode:
            self._skip_to_next_line()
            self._skip_mode = False
        eol = index_of_char(self._view, "\n")
        if eol < 0 and len(self._view) < self._buffer_size:
            data = self._read(self._buffer_size - len(self._view))
            if not data:
                return LineResult(self._view, eof=True, full_line=True)
            self._view += data
            eol = index_of_char(self._view, "\n")
        if eol < 0:
            self._skip_mode = True
            return LineResult(self._view, eof=False, full_line=False)
        line = self._view[:eol]
        self._view = self._view[eol + 1:]
        return LineResult(line, eof=False, full_line=True)

    def __iter__(self) -> Iterator[LineResult]:
        """Yield results up to and including the end-of-file one."""
        while True:
            result = self.next_line()
            yield result
            if result.eof:
                return