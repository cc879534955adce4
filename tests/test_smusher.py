from __future__ import annotations

from typing import Callable

import pytest

from conftest import STANDARD_A
from figlayout.font import SMUSH_HARDBLANK, SMUSH_KERN, FigFont, Glyph
from figlayout.smusher import Smusher

MakeFont = Callable[..., FigFont]


def test_new_smusher_is_empty_with_font_defaults(test_font: FigFont) -> None:
    smusher = Smusher(test_font)

    assert smusher.is_empty()
    assert len(smusher) == 0
    assert smusher.get() == [""]
    assert smusher.mode == test_font.layout
    assert not smusher.full_width
    assert not smusher.right_to_left


def test_single_letter_reproduces_font_bitmap(standard_a_font: FigFont) -> None:
    smusher = Smusher(standard_a_font)
    smusher.push("A")
    assert smusher.get() == list(STANDARD_A)


def test_push_str_in_kerning_mode_concatenates_one_row_glyphs(test_font: FigFont) -> None:
    smusher = Smusher(test_font)
    smusher.push_str("this is")
    assert smusher.get() == ["this is"]
    assert smusher.output == ("this$is",)
    assert len(smusher) == 7


def test_hardblank_is_rendered_as_space_only_on_read(make_font: MakeFont) -> None:
    font = make_font(1, {"-": ("$-$",)}, layout=SMUSH_KERN)
    smusher = Smusher(font)
    smusher.push_str("--")
    assert smusher.output == ("$-$$-$",)
    assert smusher.get() == [" -  - "]


def test_unknown_code_point_uses_blank_fallback(test_font: FigFont) -> None:
    smusher = Smusher(test_font)
    smusher.push_str("a☃b")
    assert smusher.get() == ["ab"]


def test_tab_renders_as_space_glyph(test_font: FigFont) -> None:
    smusher = Smusher(test_font)
    smusher.push_str("a\tb")
    assert smusher.get() == ["a b"]


def test_shared_amount_keeps_rows_aligned(make_font: MakeFont) -> None:
    font = make_font(
        2,
        {"L": ("L ", "LL"), "R": (" R", "RR")},
        layout=0xBF,
    )
    smusher = Smusher(font)
    smusher.push("L")

    glyph = font.get("R")
    # Row 0 alone could slide two columns, row 1 cannot slide at all.
    assert smusher.amount(glyph) == 0
    smusher.push("R")
    assert smusher.get() == ["L  R", "LLRR"]


def test_smushing_rules_merge_boundary_columns(make_font: MakeFont) -> None:
    font = make_font(1, {"/": ("/",), "\\": ("\\",), "_": ("_",)}, layout=0xBF)
    smusher = Smusher(font)
    smusher.push_str("/\\")
    assert smusher.get() == ["|"]
    smusher.clear()
    smusher.push_str("__")
    assert smusher.get() == ["_"]


def test_universal_smushing_overlaps_later_glyph(make_font: MakeFont) -> None:
    font = make_font(1, {"a": ("aa",), "b": ("bb",)}, layout=0)
    smusher = Smusher(font)
    smusher.push_str("ab")
    assert smusher.get() == ["abb"]


def test_right_to_left_flag_keeps_earlier_glyph_in_front(make_font: MakeFont) -> None:
    font = make_font(1, {"a": ("aa",), "b": ("bb",)}, layout=0)
    smusher = Smusher(font)
    smusher.right_to_left = True
    smusher.push_str("ab")
    assert smusher.get() == ["aab"]


@pytest.mark.parametrize("mode", [0, SMUSH_KERN, SMUSH_HARDBLANK, 0xBF])
def test_full_width_is_plain_concatenation(make_font: MakeFont, mode: int) -> None:
    font = make_font(2, {"a": ("a ", "aa"), "b": (" b", "bb")}, layout=mode)
    smusher = Smusher(font)
    smusher.full_width = True
    smusher.push_str("ab")
    assert smusher.get() == ["a  b", "aabb"]


def test_full_width_defaults_from_old_layout(make_font: MakeFont) -> None:
    font = make_font(1, old_layout=-1, layout=None)
    assert Smusher(font).full_width


def test_trim_cuts_rows_by_code_point(make_font: MakeFont) -> None:
    font = make_font(2, tagged=[("233", ("éé", "éé"))], layout=SMUSH_KERN)
    smusher = Smusher(font)
    smusher.push_str("éé")
    smusher.trim(3)
    assert smusher.get() == ["ééé", "ééé"]
    assert len(smusher) == 3


def test_snapshot_and_restore(test_font: FigFont) -> None:
    smusher = Smusher(test_font)
    smusher.push_str("ab")
    saved = smusher.snapshot()
    smusher.push_str("cd")
    smusher.restore(saved)
    assert smusher.get() == ["ab"]

    with pytest.raises(ValueError):
        smusher.restore(("a", "b"))


def test_clear_resets_rows(test_font: FigFont) -> None:
    smusher = Smusher(test_font)
    smusher.push_str("abc")
    smusher.clear()
    assert smusher.is_empty()
    assert smusher.get() == [""]


def test_glyphs_are_shared_not_copied(test_font: FigFont) -> None:
    first = Smusher(test_font)
    second = Smusher(test_font)
    first.push("x")
    assert second.is_empty()
    assert test_font.get("x") == Glyph(("x",))


def test_push_accepts_code_points(test_font: FigFont) -> None:
    smusher = Smusher(test_font)
    smusher.push("a")
    smusher.push(9)
    smusher.push(ord("b"))
    assert smusher.get() == ["a b"]
