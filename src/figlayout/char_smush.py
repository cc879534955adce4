"""Decide how two overlapping sub-characters combine under a layout mask.

Each rule function returns the merged sub-character, or ``None`` when the
rule is disabled in ``mode`` or does not apply to the pair.
"""
from __future__ import annotations

from typing import Final

from .font import (
    SMUSH_BIGX,
    SMUSH_EQUAL,
    SMUSH_HARDBLANK,
    SMUSH_HIERARCHY,
    SMUSH_PAIR,
    SMUSH_UNDERSCORE,
)

_UNDERSCORE_PARTNERS: Final[str] = "|/\\[]{}()<>"

# Ranked lowest to highest; the sub-character from the later class wins.
_HIERARCHY_CLASSES: Final[tuple[str, ...]] = ("|", "/\\", "[]", "{}", "()", "<>")

_OPPOSITE_PAIRS: Final[frozenset[tuple[str, str]]] = frozenset(
    {("[", "]"), ("]", "["), ("{", "}"), ("}", "{"), ("(", ")"), (")", "(")}
)

_BIGX_PAIRS: Final[dict[tuple[str, str], str]] = {
    ("/", "\\"): "|",
    ("\\", "/"): "Y",
    (">", "<"): "X",
}


def _hierarchy_rank(char: str) -> int | None:
    for rank, members in enumerate(_HIERARCHY_CLASSES):
        if char in members:
            return rank
    return None


def rule_equal(left: str, right: str, mode: int) -> str | None:
    """EQUAL CHARACTER SMUSHING: identical sub-characters merge into one."""

    if mode & SMUSH_EQUAL and left == right:
        return left
    return None


def rule_underscore(left: str, right: str, mode: int) -> str | None:
    """UNDERSCORE SMUSHING: ``_`` gives way to a border sub-character."""

    if not mode & SMUSH_UNDERSCORE:
        return None
    if left == "_" and right in _UNDERSCORE_PARTNERS:
        return right
    if right == "_" and left in _UNDERSCORE_PARTNERS:
        return left
    return None


def rule_hierarchy(left: str, right: str, mode: int) -> str | None:
    """HIERARCHY SMUSHING: the sub-character from the higher class wins."""

    if not mode & SMUSH_HIERARCHY:
        return None
    left_rank = _hierarchy_rank(left)
    right_rank = _hierarchy_rank(right)
    if left_rank is None or right_rank is None or left_rank == right_rank:
        return None
    return right if right_rank > left_rank else left


def rule_pair(left: str, right: str, mode: int) -> str | None:
    """OPPOSITE PAIR SMUSHING: facing brackets, braces or parens become ``|``."""

    if mode & SMUSH_PAIR and (left, right) in _OPPOSITE_PAIRS:
        return "|"
    return None


def rule_bigx(left: str, right: str, mode: int) -> str | None:
    """BIG X SMUSHING: ``/\\`` → ``|``, ``\\/`` → ``Y``, ``><`` → ``X``."""

    if not mode & SMUSH_BIGX:
        return None
    return _BIGX_PAIRS.get((left, right))


_RULES: Final = (rule_equal, rule_underscore, rule_hierarchy, rule_pair, rule_bigx)


def smush_chars(
    left: str,
    right: str,
    hardblank: str,
    mode: int,
    *,
    right_to_left: bool = False,
) -> str | None:
    """Return the sub-character ``left`` and ``right`` merge into, if any.

    A plain space always yields the other side. A ``mode`` of zero selects
    universal smushing, where the later sub-character overrides the earlier
    one unless it is a hardblank. Otherwise the rules are tried in priority
    order and the first match wins.
    """

    if left == " ":
        return right
    if right == " ":
        return left

    if mode == 0:
        if left == hardblank:
            return right
        if right == hardblank:
            return left
        return left if right_to_left else right

    if left == hardblank and right == hardblank:
        return hardblank if mode & SMUSH_HARDBLANK else None

    for rule in _RULES:
        merged = rule(left, right, mode)
        if merged is not None:
            return merged
    return None


__all__ = [
    "rule_bigx",
    "rule_equal",
    "rule_hierarchy",
    "rule_pair",
    "rule_underscore",
    "smush_chars",
]
