"""Render text as FIGlet-style banners: font loading, smushing and wrapping."""
from __future__ import annotations

from .char_smush import smush_chars
from .errors import (
    CodeTagError,
    FigError,
    FontError,
    FontFormatError,
    FontIOError,
    FontNotFoundError,
    FontParseError,
    LineFullError,
    RenderConfigError,
)
from .font import (
    SMUSH_BIGX,
    SMUSH_ENABLE,
    SMUSH_EQUAL,
    SMUSH_HARDBLANK,
    SMUSH_HIERARCHY,
    SMUSH_KERN,
    SMUSH_PAIR,
    SMUSH_UNDERSCORE,
    FigFont,
    FontHeader,
    Glyph,
)
from .font_loader import load_font, load_font_bytes, load_font_path, parse_header
from .line_smush import smush_amount, smush_rows
from .smusher import Smusher
from .wrapper import Align, WrapState, Wrapper

__all__ = [
    "Align",
    "CodeTagError",
    "FigError",
    "FigFont",
    "FontError",
    "FontFormatError",
    "FontHeader",
    "FontIOError",
    "FontNotFoundError",
    "FontParseError",
    "Glyph",
    "LineFullError",
    "RenderConfigError",
    "SMUSH_BIGX",
    "SMUSH_ENABLE",
    "SMUSH_EQUAL",
    "SMUSH_HARDBLANK",
    "SMUSH_HIERARCHY",
    "SMUSH_KERN",
    "SMUSH_PAIR",
    "SMUSH_UNDERSCORE",
    "Smusher",
    "WrapState",
    "Wrapper",
    "load_font",
    "load_font_bytes",
    "load_font_path",
    "parse_header",
    "smush_amount",
    "smush_chars",
    "smush_rows",
]
