"""Resolve font names given on the command line to font files."""
from __future__ import annotations

from pathlib import Path
from typing import Final, Iterable, List

from .errors import FontNotFoundError

DEFAULT_FONT_DIR: Final[Path] = Path("/usr/share/figlet")
DEFAULT_FONT: Final[str] = "standard"
FONT_SUFFIXES: Final[tuple[str, ...]] = (".flf", ".tlf")


def font_file_name(name: str) -> str:
    """Append ``.flf`` unless ``name`` already carries a font suffix."""

    if name.endswith(FONT_SUFFIXES):
        return name
    return f"{name}.flf"


def font_candidates(name: str, search_dirs: Iterable[Path]) -> List[Path]:
    """Return every path tried for ``name``, in lookup order."""

    file_name = Path(font_file_name(name)).expanduser()
    if file_name.is_absolute():
        return [file_name]
    candidates = [Path(directory) / file_name for directory in search_dirs]
    candidates.append(file_name)
    return candidates


def find_font(name: str, search_dirs: Iterable[Path] = (DEFAULT_FONT_DIR,)) -> Path:
    """Return the first existing font file for ``name``."""

    candidates = font_candidates(name, search_dirs)
    for candidate in candidates:
        if candidate.is_file():
            return candidate
    tried = ", ".join(str(candidate) for candidate in candidates)
    raise FontNotFoundError(f"font {name!r} not found (tried {tried})")


__all__ = [
    "DEFAULT_FONT",
    "DEFAULT_FONT_DIR",
    "FONT_SUFFIXES",
    "find_font",
    "font_candidates",
    "font_file_name",
]
