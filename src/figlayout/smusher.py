"""Compose FIGcharacters into a block of output rows."""
from __future__ import annotations

from typing import List, Sequence

from .font import FigFont, Glyph
from .line_smush import smush_amount, smush_rows


class Smusher:
    """Append glyphs to ``height`` parallel output rows.

    Every glyph overlaps the existing output by a single amount shared by
    all of its rows, so multi-row glyphs never shear. The layout ``mode``,
    ``full_width`` and ``right_to_left`` settings start from the font and
    may be overridden per instance.
    """

    def __init__(self, font: FigFont) -> None:
        self.font = font
        self.mode = font.layout
        self.full_width = font.full_width
        self.right_to_left = font.right_to_left
        self._output: List[str] = [""] * font.height

    @property
    def output(self) -> tuple[str, ...]:
        """Raw rows, hardblanks still in place."""

        return tuple(self._output)

    def amount(self, glyph: Glyph) -> int:
        """Return the overlap every row of ``glyph`` can support."""

        if self.full_width:
            return 0
        hardblank = self.font.hardblank
        return min(
            smush_amount(row, glyph_row, hardblank, self.mode)
            for row, glyph_row in zip(self._output, glyph.rows)
        )

    def push(self, char: str | int) -> None:
        if isinstance(char, int):
            char = chr(char)
        if char == "\t":
            char = " "
        glyph = self.font.get(char)

        if self.full_width:
            self._output = [row + glyph_row for row, glyph_row in zip(self._output, glyph.rows)]
            return

        amount = self.amount(glyph)
        hardblank = self.font.hardblank
        self._output = [
            smush_rows(
                row,
                glyph_row,
                amount,
                hardblank,
                self.mode,
                right_to_left=self.right_to_left,
            )
            for row, glyph_row in zip(self._output, glyph.rows)
        ]

    def push_str(self, text: str) -> None:
        for char in text:
            self.push(char)

    def get(self) -> List[str]:
        """Return the output rows with hardblanks rendered as spaces."""

        hardblank = self.font.hardblank
        return [row.replace(hardblank, " ") for row in self._output]

    def clear(self) -> None:
        self._output = [""] * self.font.height

    def trim(self, width: int) -> None:
        """Cut every row down to its first ``width`` code points."""

        self._output = [row[:width] for row in self._output]

    def snapshot(self) -> tuple[str, ...]:
        return tuple(self._output)

    def restore(self, rows: Sequence[str]) -> None:
        if len(rows) != self.font.height:
            raise ValueError(
                f"snapshot has {len(rows)} rows, font height is {self.font.height}"
            )
        self._output = list(rows)

    def is_empty(self) -> bool:
        return len(self) == 0

    def __len__(self) -> int:
        return len(self._output[0])


__all__ = ["Smusher"]
