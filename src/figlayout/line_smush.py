"""Overlap one row of composed output with one row of an incoming glyph.

Rows are Python strings, so every index below counts code points.
"""
from __future__ import annotations

from .char_smush import smush_chars


def _trailing_whitespace(row: str) -> int:
    return len(row) - len(row.rstrip())


def _leading_whitespace(row: str) -> int:
    return len(row) - len(row.lstrip())


def smush_amount(left: str, right: str, hardblank: str, mode: int) -> int:
    """Return how many columns ``right`` can slide into ``left``.

    Whitespace on both sides of the boundary is always consumed. One more
    column is taken when the first visible sub-characters that would then
    touch can be merged.
    """

    left_blank = _trailing_whitespace(left)
    right_blank = _leading_whitespace(right)
    amount = left_blank + right_blank

    if left_blank == len(left) or right_blank == len(right):
        return amount

    boundary_left = left[len(left) - left_blank - 1]
    boundary_right = right[right_blank]
    if smush_chars(boundary_left, boundary_right, hardblank, mode) is not None:
        return amount + 1
    return amount


def smush_rows(
    left: str,
    right: str,
    amount: int,
    hardblank: str,
    mode: int,
    *,
    right_to_left: bool = False,
) -> str:
    """Merge ``right`` onto the end of ``left`` overlapping ``amount`` columns."""

    if not right:
        return left

    if amount > len(left):
        right = right[amount - len(left):]
        amount = len(left)

    keep = len(left) - amount
    merged = [left[:keep]]
    for index, right_char in enumerate(right):
        position = keep + index
        left_char = left[position] if position < len(left) else " "
        if left_char != " " and right_char != " ":
            combined = smush_chars(
                left_char, right_char, hardblank, mode, right_to_left=right_to_left
            )
            merged.append(right_char if combined is None else combined)
        else:
            merged.append(right_char if left_char == " " else left_char)

    tail = keep + len(right)
    if tail < len(left):
        merged.append(left[tail:])
    return "".join(merged)


__all__ = ["smush_amount", "smush_rows"]
