"""Exception hierarchy shared by the font loader, compositor and wrapper."""
from __future__ import annotations


class FigError(Exception):
    """Base class for every error raised by :mod:`figlayout`."""


class FontError(FigError):
    """Raised when a font definition cannot be loaded."""


class FontFormatError(FontError, ValueError):
    """Raised when a font file does not follow the FIGfont grammar."""


class FontIOError(FontError, OSError):
    """Raised when the underlying stream fails while loading a font."""


class FontParseError(FontError, ValueError):
    """Raised when a header field or code tag is not a valid integer."""

    def __init__(self, field: str, value: str) -> None:
        super().__init__(f"can't parse {field}: {value!r}")
        self.field = field
        self.value = value


class CodeTagError(FontError, ValueError):
    """Raised when a code tag does not name a Unicode scalar value."""

    def __init__(self, code: int) -> None:
        super().__init__(f"invalid code tag: {code}")
        self.code = code


class FontNotFoundError(FontError, FileNotFoundError):
    """Raised when font discovery exhausts every candidate path."""


class LineFullError(FigError):
    """Signals that a wrapper push did not fit inside the configured width."""

    def __init__(self, message: str = "line is full") -> None:
        super().__init__(message)


class RenderConfigError(FigError, ValueError):
    """Raised when a render configuration file fails validation."""


__all__ = [
    "CodeTagError",
    "FigError",
    "FontError",
    "FontFormatError",
    "FontIOError",
    "FontNotFoundError",
    "FontParseError",
    "LineFullError",
    "RenderConfigError",
]
