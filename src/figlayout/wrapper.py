"""Word-wrapping state machine layered over a :class:`Smusher`."""
from __future__ import annotations

from enum import Enum
from typing import Callable, List, Sequence

from .errors import LineFullError
from .smusher import Smusher

FlushCallback = Callable[[Sequence[str]], None]


class Align(Enum):
    """Horizontal placement of a rendered line inside the wrap width."""

    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


class WrapState(Enum):
    """Whether the current line can still accept text."""

    OPEN = "open"
    FULL = "full"


def add_padding(rows: Sequence[str], size: int) -> List[str]:
    pad = " " * size
    return [pad + row for row in rows]


class Wrapper:
    """Render FIGcharacters into lines no wider than ``width`` columns.

    ``push`` and ``push_str`` refuse text that would overflow the line and
    raise :class:`LineFullError`, leaving the line as it was. ``wrap_str``
    handles the overflow itself: finished lines are handed to a flush
    callback and the wrapper carries on with an empty line.
    """

    def __init__(self, smusher: Smusher, width: int, align: Align = Align.LEFT) -> None:
        if width < 1:
            raise ValueError(f"wrap width must be positive, got {width}")
        self.smusher = smusher
        self.width = width
        self.align = align
        self.state = WrapState.OPEN
        self._buffer: List[str] = []
        self._has_space = True

    @property
    def buffer(self) -> str:
        """Plain text of everything composed on the current line."""

        return "".join(self._buffer)

    def clear(self) -> None:
        self.smusher.clear()
        self._buffer.clear()
        self._has_space = True
        self.state = WrapState.OPEN

    def get(self) -> List[str]:
        """Return the current line's rows padded for the alignment."""

        if len(self) > self.width:
            self.smusher.trim(self.width)

        slack = self.width - len(self)
        rows = self.smusher.get()
        if self.align is Align.CENTER:
            return add_padding(rows, slack // 2)
        if self.align is Align.RIGHT:
            return add_padding(rows, slack)
        return rows

    def is_empty(self) -> bool:
        return self.smusher.is_empty()

    def __len__(self) -> int:
        return len(self.smusher)

    def _attempt(self, text: str) -> None:
        saved = self.smusher.snapshot()
        self.smusher.push_str(text)
        if len(self.smusher) > self.width:
            self.smusher.restore(saved)
            self.state = WrapState.FULL
            raise LineFullError(f"{text!r} does not fit in {self.width} columns")
        self._buffer.append(text)
        self.state = WrapState.OPEN

    def push(self, char: str) -> None:
        """Add one character, raising :class:`LineFullError` on overflow."""

        self._attempt(char)

    def push_str(self, text: str) -> None:
        """Add ``text`` as a unit, raising :class:`LineFullError` on overflow."""

        self._attempt(text)

    def _flush(self, flush: FlushCallback) -> None:
        if self._buffer:
            flush(self.get())
            self.clear()

    def wrap_str(self, token: str, flush: FlushCallback) -> None:
        """Add a word or whitespace run, flushing full lines to ``flush``."""

        blank = not token.strip()
        if not self._has_space and not blank:
            try:
                self.push(" ")
            except LineFullError:
                # The word below retries on a fresh line.
                pass
        self._has_space = blank

        try:
            self.push_str(token)
        except LineFullError:
            self._flush(flush)
            try:
                self.push_str(token)
            except LineFullError:
                self.wrap_word(token, flush)
            self._has_space = False

    def wrap_word(self, word: str, flush: FlushCallback) -> None:
        """Add ``word`` one character at a time, breaking it across lines.

        A character too wide for an empty line is added anyway; characters
        are never split.
        """

        for char in word:
            try:
                self.push(char)
            except LineFullError:
                self._flush(flush)
                self.smusher.push(char)
                self._buffer.append(char)
                self.state = WrapState.OPEN


__all__ = ["Align", "FlushCallback", "WrapState", "Wrapper", "add_padding"]
