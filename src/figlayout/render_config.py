"""Render settings loaded from a TOML file."""
from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Final, Mapping, Tuple

import tomllib

from .errors import RenderConfigError
from .font_search import DEFAULT_FONT, DEFAULT_FONT_DIR
from .wrapper import Align

DEFAULT_WIDTH: Final[int] = 79
LAYOUT_CHOICES: Final[tuple[str, ...]] = ("smush", "kern", "overlap", "full-width")

_KNOWN_KEYS: Final[frozenset[str]] = frozenset(
    {"font", "font_dirs", "width", "align", "layout", "encoding", "paragraph"}
)


@dataclass(frozen=True)
class RenderConfig:
    """Settings shared by the command line front end."""

    font: str = DEFAULT_FONT
    font_dirs: Tuple[Path, ...] = (DEFAULT_FONT_DIR,)
    width: int = DEFAULT_WIDTH
    align: Align = Align.LEFT
    # ``None`` keeps the font's own layout; otherwise a name or a mode mask.
    layout: str | int | None = None
    encoding: str = "utf-8"
    paragraph: bool = False

    @classmethod
    def default(cls) -> "RenderConfig":
        return cls()

    def with_overrides(self, **changes: Any) -> "RenderConfig":
        """Return a copy with every non-``None`` entry of ``changes`` applied."""

        applied = {key: value for key, value in changes.items() if value is not None}
        return replace(self, **applied)


def load_render_config(config_path: Path) -> RenderConfig:
    """Parse and validate the ``[render]`` table of ``config_path``."""

    try:
        with config_path.open("rb") as stream:
            raw_data = tomllib.load(stream)
    except tomllib.TOMLDecodeError as exc:
        raise RenderConfigError(f"{config_path}: {exc}") from exc
    except OSError as exc:
        raise RenderConfigError(f"can't read {config_path}: {exc}") from exc

    section = _parse_render_section(raw_data)
    unknown = sorted(set(section) - _KNOWN_KEYS)
    if unknown:
        raise RenderConfigError(f"unknown [render] keys: {', '.join(unknown)}")

    defaults = RenderConfig.default()
    return RenderConfig(
        font=_coerce_text(section, "font", defaults.font),
        font_dirs=_parse_font_dirs(section.get("font_dirs"), base=config_path.parent)
        or defaults.font_dirs,
        width=_coerce_width(section.get("width", defaults.width)),
        align=_coerce_align(section.get("align", defaults.align.value)),
        layout=_coerce_layout(section.get("layout")),
        encoding=_coerce_text(section, "encoding", defaults.encoding),
        paragraph=_coerce_flag(section.get("paragraph", defaults.paragraph)),
    )


def _parse_render_section(data: Mapping[str, Any]) -> Mapping[str, Any]:
    section = data.get("render")
    if section is None:
        raise RenderConfigError("render configuration requires a [render] table")
    if not isinstance(section, Mapping):
        raise RenderConfigError("[render] section must be a mapping")
    return section


def _coerce_text(section: Mapping[str, Any], key: str, default: str) -> str:
    value = section.get(key, default)
    if not isinstance(value, str) or not value.strip():
        raise RenderConfigError(f"{key} must be a non-empty string")
    return value


def _parse_font_dirs(entries: Any, *, base: Path) -> Tuple[Path, ...]:
    if entries is None:
        return ()
    if isinstance(entries, str):
        entries = [entries]
    if not isinstance(entries, list):
        raise RenderConfigError("font_dirs must be a string or an array of strings")

    resolved = []
    for index, entry in enumerate(entries, start=1):
        if not isinstance(entry, str):
            raise RenderConfigError(
                f"font_dirs entry #{index} must be a string, received {type(entry)!r}"
            )
        path = Path(entry).expanduser()
        if not path.is_absolute():
            path = (base / path).resolve()
        resolved.append(path)
    return tuple(resolved)


def _coerce_width(raw_width: Any) -> int:
    if isinstance(raw_width, bool) or not isinstance(raw_width, int):
        raise RenderConfigError(f"width must be an integer, received {raw_width!r}")
    if raw_width < 1:
        raise RenderConfigError(f"width must be at least 1, received {raw_width}")
    return raw_width


def _coerce_align(raw_align: Any) -> Align:
    if not isinstance(raw_align, str):
        raise RenderConfigError("align must be a string")
    try:
        return Align(raw_align.strip().lower())
    except ValueError as exc:
        choices = ", ".join(align.value for align in Align)
        raise RenderConfigError(
            f"align {raw_align!r} is not one of {choices}"
        ) from exc


def _coerce_layout(raw_layout: Any) -> str | int | None:
    if raw_layout is None:
        return None
    if isinstance(raw_layout, bool):
        raise RenderConfigError("layout must be a name or an integer mode")
    if isinstance(raw_layout, int):
        if raw_layout < 0:
            raise RenderConfigError(f"layout mode must not be negative, received {raw_layout}")
        return raw_layout
    if isinstance(raw_layout, str) and raw_layout in LAYOUT_CHOICES:
        return raw_layout
    raise RenderConfigError(
        f"layout {raw_layout!r} is not one of {', '.join(LAYOUT_CHOICES)} or an integer"
    )


def _coerce_flag(raw_flag: Any) -> bool:
    if not isinstance(raw_flag, bool):
        raise RenderConfigError("paragraph must be a boolean")
    return raw_flag


__all__ = [
    "DEFAULT_WIDTH",
    "LAYOUT_CHOICES",
    "RenderConfig",
    "load_render_config",
]
