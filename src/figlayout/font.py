"""In-memory FIGfont model: header metadata plus the code point glyph table."""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import TYPE_CHECKING, BinaryIO, Final, Iterable, Iterator, Mapping, Sequence

from .errors import FontFormatError

if TYPE_CHECKING:
    from os import PathLike


SMUSH_EQUAL: Final[int] = 1
SMUSH_UNDERSCORE: Final[int] = 2
SMUSH_HIERARCHY: Final[int] = 4
SMUSH_PAIR: Final[int] = 8
SMUSH_BIGX: Final[int] = 16
SMUSH_HARDBLANK: Final[int] = 32
SMUSH_KERN: Final[int] = 64
SMUSH_ENABLE: Final[int] = 128

SMUSH_RULES: Final[int] = (
    SMUSH_EQUAL
    | SMUSH_UNDERSCORE
    | SMUSH_HIERARCHY
    | SMUSH_PAIR
    | SMUSH_BIGX
    | SMUSH_HARDBLANK
)

# ``old_layout`` value that requests glyph concatenation without overlap.
FULL_WIDTH_OLD_LAYOUT: Final[int] = -1

MISSING_CODE_POINT: Final[int] = 0
# Placeholder for code tags the font marks as unused translation slots.
UNUSED_CODE_POINT: Final[int] = 1

REQUIRED_CODE_POINTS: Final[tuple[int, ...]] = tuple(range(32, 127))
# Ä Ö Ü ä ö ü ß, in the order FIGfonts store them after the ASCII set.
GERMAN_CODE_POINTS: Final[tuple[int, ...]] = (196, 214, 220, 228, 246, 252, 223)


@dataclass(frozen=True)
class Glyph:
    """A FIGcharacter: ``height`` rows of equal code point width."""

    rows: tuple[str, ...]

    @classmethod
    def from_lines(cls, lines: Iterable[str], height: int | None = None) -> "Glyph":
        """Build a glyph from ``lines`` after validating the row geometry."""

        rows = tuple(lines)
        if height is not None and len(rows) != height:
            raise FontFormatError(
                f"glyph has {len(rows)} rows, font height is {height}"
            )
        widths = {len(row) for row in rows}
        if len(widths) > 1:
            raise FontFormatError(
                f"glyph rows have mismatched widths {sorted(widths)}"
            )
        return cls(rows)

    @classmethod
    def blank(cls, height: int) -> "Glyph":
        return cls(("",) * height)

    @property
    def height(self) -> int:
        return len(self.rows)

    @property
    def width(self) -> int:
        return len(self.rows[0]) if self.rows else 0

    def __str__(self) -> str:
        return "".join(f"{row}\n" for row in self.rows)


@dataclass(frozen=True)
class FontHeader:
    """Parsed first line of a FIGfont file."""

    signature: str
    hardblank: str
    height: int
    baseline: int
    max_length: int
    old_layout: int
    comment_lines: int
    right_to_left: bool = False
    layout: int = 0
    codetag_count: int = 0

    @property
    def version(self) -> str:
        return self.signature[4]


@dataclass(frozen=True)
class FigFont:
    """A loaded FIGfont shared read-only by every compositor that uses it."""

    header: FontHeader
    glyphs: Mapping[int, Glyph] = field(default_factory=dict)
    comments: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        glyphs = dict(self.glyphs)
        glyphs.setdefault(MISSING_CODE_POINT, Glyph.blank(self.header.height))
        for code, glyph in glyphs.items():
            if glyph.height != self.header.height:
                raise FontFormatError(
                    f"glyph U+{code:04X} has {glyph.height} rows, "
                    f"font height is {self.header.height}"
                )
        object.__setattr__(self, "glyphs", MappingProxyType(glyphs))
        object.__setattr__(self, "comments", tuple(self.comments))

    @classmethod
    def from_path(cls, path: "str | PathLike[str]", *, encoding: str = "utf-8") -> "FigFont":
        from .font_loader import load_font_path

        return load_font_path(Path(path), encoding=encoding)

    @classmethod
    def from_file(cls, stream: BinaryIO, *, encoding: str = "utf-8") -> "FigFont":
        from .font_loader import load_font

        return load_font(stream, encoding=encoding)

    @classmethod
    def from_bytes(cls, data: bytes, *, encoding: str = "utf-8") -> "FigFont":
        from .font_loader import load_font_bytes

        return load_font_bytes(data, encoding=encoding)

    @property
    def height(self) -> int:
        return self.header.height

    @property
    def hardblank(self) -> str:
        return self.header.hardblank

    @property
    def old_layout(self) -> int:
        return self.header.old_layout

    @property
    def layout(self) -> int:
        return self.header.layout

    @property
    def right_to_left(self) -> bool:
        return self.header.right_to_left

    @property
    def full_width(self) -> bool:
        return self.header.old_layout == FULL_WIDTH_OLD_LAYOUT

    def get(self, char: str | int) -> Glyph:
        """Return the glyph for ``char``, or the missing-character glyph."""

        code = ord(char) if isinstance(char, str) else int(char)
        glyph = self.glyphs.get(code)
        if glyph is None:
            return self.glyphs[MISSING_CODE_POINT]
        return glyph

    def code_points(self) -> Sequence[int]:
        return sorted(self.glyphs)

    def __contains__(self, char: object) -> bool:
        if isinstance(char, str):
            return len(char) == 1 and ord(char) in self.glyphs
        return char in self.glyphs

    def __iter__(self) -> Iterator[int]:
        return iter(self.code_points())

    def __len__(self) -> int:
        return len(self.glyphs)


__all__ = [
    "FULL_WIDTH_OLD_LAYOUT",
    "FigFont",
    "FontHeader",
    "GERMAN_CODE_POINTS",
    "Glyph",
    "MISSING_CODE_POINT",
    "REQUIRED_CODE_POINTS",
    "SMUSH_BIGX",
    "SMUSH_ENABLE",
    "SMUSH_EQUAL",
    "SMUSH_HARDBLANK",
    "SMUSH_HIERARCHY",
    "SMUSH_KERN",
    "SMUSH_PAIR",
    "SMUSH_RULES",
    "SMUSH_UNDERSCORE",
    "UNUSED_CODE_POINT",
]
