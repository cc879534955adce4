"""Pytest configuration: put ``src/`` on ``sys.path`` and provide font fixtures."""
from __future__ import annotations

import sys
from pathlib import Path
from typing import Callable, Mapping, Sequence

import pytest

_REPO_ROOT = Path(__file__).resolve().parents[1]
_src_str = str(_REPO_ROOT / "src")
if _src_str not in sys.path:
    sys.path.insert(0, _src_str)

from figlayout.font import FigFont, GERMAN_CODE_POINTS, REQUIRED_CODE_POINTS  # noqa: E402
from figlayout.font_loader import load_font_bytes, load_font_path  # noqa: E402

FONTS_DIR = _REPO_ROOT / "tests" / "fonts"

# Letter "A" from FIGlet's standard font.
STANDARD_A = (
    "    _    ",
    "   / \\   ",
    "  / _ \\  ",
    " / ___ \\ ",
    "/_/   \\_\\",
    "         ",
)

FontTextBuilder = Callable[..., str]


def _glyph_lines(rows: Sequence[str]) -> list[str]:
    mark = "#" if any(row.endswith("@") for row in rows) else "@"
    lines = [f"{row}{mark}" for row in rows]
    lines[-1] += mark
    return lines


def _default_rows(char: str, height: int, hardblank: str) -> tuple[str, ...]:
    face = hardblank if char == " " else char
    return (face,) * height


def build_font_text(
    height: int = 1,
    glyphs: Mapping[str, Sequence[str]] | None = None,
    *,
    hardblank: str = "$",
    old_layout: int = 0,
    layout: int | None = 64,
    comments: Sequence[str] = (),
    tagged: Sequence[tuple[str, Sequence[str]]] = (),
    german: bool = True,
    signature: str = "flf2a",
) -> str:
    """Return the text of a valid font file.

    Characters missing from ``glyphs`` get ``height`` rows of the character
    itself; ``tagged`` holds ``(tag line, rows)`` pairs appended at the end.
    """

    glyphs = dict(glyphs or {})
    fields = [f"{signature}{hardblank}", str(height), str(height), "10", str(old_layout)]
    fields.append(str(len(comments)))
    if layout is not None:
        fields.extend(["0", str(layout), str(len(tagged))])
    lines = [" ".join(fields), *comments]

    codes = list(REQUIRED_CODE_POINTS)
    if german:
        codes.extend(GERMAN_CODE_POINTS)
    stray = sorted(set(glyphs) - {chr(code) for code in codes})
    if stray:
        raise ValueError(f"glyphs outside the written code points: {stray!r}; use tagged")
    for code in codes:
        char = chr(code)
        rows = glyphs.get(char, _default_rows(char, height, hardblank))
        lines.extend(_glyph_lines(rows))
    for tag_line, rows in tagged:
        lines.append(tag_line)
        lines.extend(_glyph_lines(rows))
    return "\n".join(lines) + "\n"


@pytest.fixture()
def font_text() -> FontTextBuilder:
    return build_font_text


@pytest.fixture()
def make_font() -> Callable[..., FigFont]:
    def _make(*args: object, **kwargs: object) -> FigFont:
        return load_font_bytes(build_font_text(*args, **kwargs).encode("utf-8"))

    return _make


@pytest.fixture(scope="session")
def test_font() -> FigFont:
    """One-row font whose glyphs are the characters themselves."""

    return load_font_path(FONTS_DIR / "test.flf")


@pytest.fixture()
def standard_a_font() -> FigFont:
    return load_font_bytes(
        build_font_text(6, {"A": STANDARD_A}, layout=24463).encode("utf-8")
    )
