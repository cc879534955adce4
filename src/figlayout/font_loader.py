"""Parse FIGlet (``flf2``) and TOIlet (``tlf2``) font files into :class:`FigFont`."""
from __future__ import annotations

import io
import logging
import re
from pathlib import Path
from typing import IO, Any, Dict, Final, List

from .errors import (
    CodeTagError,
    FontFormatError,
    FontIOError,
    FontNotFoundError,
    FontParseError,
)
from .font import (
    FULL_WIDTH_OLD_LAYOUT,
    GERMAN_CODE_POINTS,
    MISSING_CODE_POINT,
    REQUIRED_CODE_POINTS,
    SMUSH_ENABLE,
    SMUSH_KERN,
    UNUSED_CODE_POINT,
    FigFont,
    FontHeader,
    Glyph,
)

LOGGER = logging.getLogger(__name__)

FONT_MAGIC: Final[tuple[str, ...]] = ("flf2", "tlf2")

_INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")
_DECIMAL_TAG_PATTERN = re.compile(r"[0-9]+")
_HEX_TAG_PATTERN = re.compile(r"0[xX]([0-9A-Fa-f]+)")
_MAX_CODE_POINT = 0x10FFFF
_SURROGATES = range(0xD800, 0xE000)


class _FontLines:
    """Line reader that decodes one raw line at a time."""

    def __init__(self, stream: IO[Any], encoding: str) -> None:
        self._stream = stream
        self._encoding = encoding
        self.line_number = 0

    def next_line(self) -> str | None:
        """Return the next decoded line, or ``None`` at end of stream."""

        try:
            raw = self._stream.readline()
        except OSError as exc:
            raise FontIOError(
                f"read failed after line {self.line_number}: {exc}"
            ) from exc
        if not raw:
            return None
        self.line_number += 1
        if isinstance(raw, str):
            return raw
        try:
            return raw.decode(self._encoding)
        except UnicodeDecodeError as exc:
            raise FontIOError(
                f"line {self.line_number} is not valid {self._encoding}"
            ) from exc


def _parse_int(field: str, text: str) -> int:
    if not _INTEGER_PATTERN.fullmatch(text):
        raise FontParseError(field, text)
    try:
        return int(text, 10)
    except ValueError as exc:  # pragma: no cover - guarded by the pattern
        raise FontParseError(field, text) from exc


def layout_from_old_layout(old_layout: int) -> int:
    """Derive a full layout mask for headers that omit it."""

    if old_layout == FULL_WIDTH_OLD_LAYOUT:
        return 0
    if old_layout == 0:
        return SMUSH_KERN
    return (old_layout & 31) | SMUSH_ENABLE


def parse_header(line: str) -> FontHeader:
    """Parse the first line of a font file."""

    if not line.startswith(FONT_MAGIC):
        raise FontFormatError("unsupported font format (expected flf2 or tlf2 header)")

    fields = line.split()
    signature = fields[0]
    if len(signature) < 6:
        raise FontFormatError(f"font signature {signature!r} has no hardblank")
    if len(fields) < 6:
        raise FontFormatError(
            f"font header has {len(fields)} fields, at least 6 are required"
        )

    height = _parse_int("height", fields[1])
    baseline = _parse_int("baseline", fields[2])
    max_length = _parse_int("max_length", fields[3])
    old_layout = _parse_int("old_layout", fields[4])
    comment_lines = _parse_int("comment_lines", fields[5])

    if height < 1:
        raise FontFormatError(f"font height must be at least 1, got {height}")
    if comment_lines < 0:
        raise FontFormatError(f"comment line count must not be negative, got {comment_lines}")

    right_to_left = len(fields) > 6 and fields[6] == "1"
    if len(fields) > 7:
        layout = _parse_int("full_layout", fields[7])
        if layout < 0:
            raise FontFormatError(f"full layout must not be negative, got {layout}")
    else:
        layout = layout_from_old_layout(old_layout)
    codetag_count = _parse_int("codetag_count", fields[8]) if len(fields) > 8 else 0

    return FontHeader(
        signature=signature,
        hardblank=signature[5],
        height=height,
        baseline=baseline,
        max_length=max_length,
        old_layout=old_layout,
        comment_lines=comment_lines,
        right_to_left=right_to_left,
        layout=layout,
        codetag_count=codetag_count,
    )


def parse_code_tag(token: str) -> int:
    """Return the code point named by the first token of a code tag line."""

    text = token.strip()
    if text.startswith("-"):
        body = text[1:]
        if not (_DECIMAL_TAG_PATTERN.fullmatch(body) or _HEX_TAG_PATTERN.fullmatch(body)):
            raise FontParseError("code tag", token)
        return UNUSED_CODE_POINT

    hex_match = _HEX_TAG_PATTERN.fullmatch(text)
    if hex_match:
        code = int(hex_match.group(1), 16)
    elif _DECIMAL_TAG_PATTERN.fullmatch(text):
        code = int(text, 10)
    else:
        raise FontParseError("code tag", token)

    if code > _MAX_CODE_POINT or code in _SURROGATES:
        raise CodeTagError(code)
    return code


def trim_row(raw: str, line_number: int = 0) -> str:
    """Strip the line terminator and the trailing end-marker run of ``raw``."""

    row = raw.rstrip()
    if row:
        row = row.rstrip(row[-1])
    if not row:
        raise FontFormatError(f"invalid character width at line {line_number}")
    return row


def _read_glyph(
    lines: _FontLines, height: int, code: int, *, allow_eof: bool = False
) -> Glyph | None:
    rows: List[str] = []
    failure: FontIOError | None = None
    for index in range(height):
        try:
            raw = lines.next_line()
        except FontIOError as exc:
            failure = failure or exc
            continue
        if raw is None:
            if index == 0 and allow_eof:
                return None
            raise FontFormatError(
                f"unexpected end of font inside glyph U+{code:04X}"
            )
        if failure is None:
            rows.append(trim_row(raw, lines.line_number))

    if failure is not None:
        LOGGER.warning(
            "Substituting blank rows for glyph U+%04X: %s", code, failure
        )
        return Glyph.blank(height)
    return Glyph.from_lines(rows, height)


def load_font(stream: IO[Any], *, encoding: str = "utf-8") -> FigFont:
    """Read a complete font definition from ``stream``."""

    lines = _FontLines(stream, encoding)
    first = lines.next_line()
    if first is None:
        raise FontFormatError("font file is empty")
    header = parse_header(first)
    height = header.height

    comments: List[str] = []
    for _ in range(header.comment_lines):
        comment = lines.next_line()
        if comment is None:
            raise FontFormatError("unexpected end of font inside the comment block")
        comments.append(comment.rstrip("\r\n"))

    glyphs: Dict[int, Glyph] = {MISSING_CODE_POINT: Glyph.blank(height)}
    for code in REQUIRED_CODE_POINTS:
        glyph = _read_glyph(lines, height, code)
        assert glyph is not None  # ``allow_eof`` is off for the ASCII set
        glyphs[code] = glyph

    complete = True
    for code in GERMAN_CODE_POINTS:
        glyph = _read_glyph(lines, height, code, allow_eof=True)
        if glyph is None:
            LOGGER.warning(
                "Font ends before glyph U+%04X; German glyphs are missing", code
            )
            complete = False
            break
        glyphs[code] = glyph

    tagged = 0
    while complete:
        line = lines.next_line()
        if line is None:
            break
        if not line.strip():
            continue
        code = parse_code_tag(line.split()[0])
        glyph = _read_glyph(lines, height, code)
        assert glyph is not None
        glyphs[code] = glyph
        tagged += 1

    if tagged != header.codetag_count:
        LOGGER.debug(
            "Header announces %d code-tagged glyphs, read %d",
            header.codetag_count,
            tagged,
        )
    LOGGER.debug(
        "Loaded %s font: height=%d layout=%d glyphs=%d",
        header.signature,
        height,
        header.layout,
        len(glyphs),
    )
    return FigFont(header=header, glyphs=glyphs, comments=tuple(comments))


def load_font_bytes(data: bytes, *, encoding: str = "utf-8") -> FigFont:
    """Parse a font held in memory."""

    return load_font(io.BytesIO(data), encoding=encoding)


def load_font_path(path: Path, *, encoding: str = "utf-8") -> FigFont:
    """Open ``path`` and parse the font it contains."""

    try:
        stream = path.open("rb")
    except FileNotFoundError as exc:
        raise FontNotFoundError(f"font file not found: {path}") from exc
    except OSError as exc:
        raise FontIOError(f"can't open font file {path}: {exc}") from exc

    LOGGER.debug("Loading font from %s", path)
    with stream:
        return load_font(stream, encoding=encoding)


__all__ = [
    "FONT_MAGIC",
    "layout_from_old_layout",
    "load_font",
    "load_font_bytes",
    "load_font_path",
    "parse_code_tag",
    "parse_header",
    "trim_row",
]
