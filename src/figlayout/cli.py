"""Render text as FIGlet banners on standard output."""
from __future__ import annotations

import argparse
import logging
import re
import sys
from functools import partial
from pathlib import Path
from typing import IO, Iterable, List, Sequence

from .errors import FigError
from .font import SMUSH_ENABLE, SMUSH_KERN, SMUSH_RULES
from .font_loader import load_font_path
from .font_search import find_font
from .render_config import RenderConfig, load_render_config
from .smusher import Smusher
from .wrapper import Align, FlushCallback, Wrapper

LOGGER = logging.getLogger(__name__)

_TOKEN_PATTERN = re.compile(r"\S+|\s+")


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"expected an integer, got {value!r}") from exc
    if number < 1:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {number}")
    return number


def _layout_mode(value: str) -> int:
    try:
        mode = int(value, 0)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"expected a layout mask, got {value!r}") from exc
    if mode < 0:
        raise argparse.ArgumentTypeError(f"layout mask must not be negative, got {mode}")
    return mode


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Return parsed command-line arguments for the banner renderer."""

    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("message", nargs="*", help="Text to render (default: read stdin)")
    parser.add_argument("-f", "--font", default=None, help="Font name or path")
    parser.add_argument(
        "-d",
        "--dir",
        type=Path,
        action="append",
        default=None,
        help="Font directory to search (repeatable; replaces the defaults)",
    )
    parser.add_argument(
        "-w", "--width", type=_positive_int, default=None, help="Output width in columns"
    )

    align_group = parser.add_mutually_exclusive_group()
    align_group.add_argument(
        "-c", "--center", dest="align", action="store_const", const=Align.CENTER,
        help="Center the output horizontally",
    )
    align_group.add_argument(
        "-l", "--left", dest="align", action="store_const", const=Align.LEFT,
        help="Left-align the output",
    )
    align_group.add_argument(
        "-r", "--right", dest="align", action="store_const", const=Align.RIGHT,
        help="Right-align the output",
    )

    layout_group = parser.add_mutually_exclusive_group()
    layout_group.add_argument(
        "-S", "--smush", dest="layout", action="store_const", const="smush",
        help="Smush characters using the font's rules",
    )
    layout_group.add_argument(
        "-k", "--kern", dest="layout", action="store_const", const="kern",
        help="Place characters edge to edge",
    )
    layout_group.add_argument(
        "-o", "--overlap", dest="layout", action="store_const", const="overlap",
        help="Overlap characters, later ones in front",
    )
    layout_group.add_argument(
        "-W", "--full-width", dest="layout", action="store_const", const="full-width",
        help="Display characters at full width",
    )
    parser.add_argument(
        "-m",
        "--mode",
        type=_layout_mode,
        default=None,
        help="Override the font layout mask (wins over the layout flags)",
    )
    parser.add_argument(
        "-p",
        "--paragraph",
        action="store_true",
        default=None,
        help="Join input lines; only lines starting with whitespace break paragraphs",
    )
    parser.add_argument(
        "--config", type=Path, default=None, help="TOML file with a [render] table"
    )
    parser.add_argument("--encoding", default=None, help="Font file text encoding")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging verbosity",
    )
    return parser.parse_args(argv)


def resolve_config(args: argparse.Namespace) -> RenderConfig:
    """Merge command-line flags over the configuration file or the defaults."""

    config = load_render_config(args.config) if args.config else RenderConfig.default()
    layout = args.mode if args.mode is not None else args.layout
    return config.with_overrides(
        font=args.font,
        font_dirs=tuple(args.dir) if args.dir else None,
        width=args.width,
        align=args.align,
        layout=layout,
        encoding=args.encoding,
        paragraph=args.paragraph,
    )


def apply_layout(smusher: Smusher, layout: str | int | None) -> None:
    """Override the smusher's layout with a named choice or a mode mask."""

    if layout is None:
        return
    font = smusher.font
    if isinstance(layout, int):
        smusher.mode = layout
        smusher.full_width = False
    elif layout == "full-width":
        smusher.full_width = True
    elif layout == "kern":
        smusher.mode = SMUSH_KERN
        smusher.full_width = False
    elif layout == "overlap":
        smusher.mode = 0
        smusher.full_width = False
    elif layout == "smush":
        # Fonts without smushing rules fall back to universal smushing.
        smusher.mode = font.layout | SMUSH_ENABLE if font.layout & SMUSH_RULES else 0
        smusher.full_width = False
    else:
        raise ValueError(f"unknown layout {layout!r}")


def tokenize(text: str) -> List[str]:
    """Split ``text`` into alternating runs of words and whitespace."""

    return _TOKEN_PATTERN.findall(text)


def write_tokens(wrapper: Wrapper, text: str, flush: FlushCallback) -> None:
    for token in tokenize(text):
        wrapper.wrap_str(token, flush)


def write_line(wrapper: Wrapper, text: str, flush: FlushCallback) -> None:
    """Render ``text`` as a line of its own, flushing everything."""

    wrapper.clear()
    write_tokens(wrapper, text, flush)
    flush(wrapper.get())


def write_paragraph(wrapper: Wrapper, text: str, flush: FlushCallback) -> None:
    """Continue the current paragraph with ``text``."""

    if (not text or text[0].isspace()) and not wrapper.is_empty():
        flush(wrapper.get())
        wrapper.clear()
    write_tokens(wrapper, text, flush)


def print_rows(rows: Sequence[str], *, stream: IO[str]) -> None:
    for row in rows:
        stream.write(f"{row}\n")


def render_input(
    wrapper: Wrapper,
    lines: Iterable[str],
    flush: FlushCallback,
    *,
    paragraph: bool = False,
) -> None:
    """Render every input line in line or paragraph mode."""

    for raw in lines:
        text = raw.rstrip("\r\n")
        if paragraph:
            write_paragraph(wrapper, text, flush)
        else:
            write_line(wrapper, text, flush)
    if paragraph and not wrapper.is_empty():
        flush(wrapper.get())


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for the ``figlayout`` command."""

    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level))

    try:
        config = resolve_config(args)
        font_path = find_font(config.font, config.font_dirs)
        LOGGER.info("Using font %s", font_path)
        font = load_font_path(font_path, encoding=config.encoding)
    except FigError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    smusher = Smusher(font)
    apply_layout(smusher, config.layout)
    wrapper = Wrapper(smusher, config.width, config.align)
    flush = partial(print_rows, stream=sys.stdout)

    message = " ".join(args.message)
    if message:
        write_line(wrapper, message, flush)
    else:
        render_input(wrapper, sys.stdin, flush, paragraph=config.paragraph)
    return 0


if __name__ == "__main__":  # pragma: no cover - exercised via python -m
    raise SystemExit(main())
