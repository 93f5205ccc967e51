"""Color harmony rule tests."""
from __future__ import annotations

import sys
from itertools import product
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from models.color_theory import (
    GOOD_PAIRS,
    can_pair_colors,
    evaluate_color_combination,
    generate_color_reasoning,
    is_bold,
    is_neutral,
    score_color_combination,
    suggest_shoe_colors,
)
from models.taxonomy import BOLD_COLORS, NEUTRAL_COLORS, PALETTE


def test_palette_partitions_into_neutral_and_bold() -> None:
    assert set(NEUTRAL_COLORS).isdisjoint(BOLD_COLORS)
    assert len(PALETTE) == 13
    for color in PALETTE:
        assert is_neutral(color) != is_bold(color)


def test_neutral_and_bold_are_case_insensitive() -> None:
    assert is_neutral("Navy")
    assert is_bold("RED")
    assert not is_neutral("teal")
    assert not is_bold("teal")


def test_can_pair_colors_is_symmetric_over_palette() -> None:
    for first, second in product(PALETTE, repeat=2):
        assert can_pair_colors(first, second) == can_pair_colors(second, first), (first, second)


def test_every_color_pairs_with_itself_and_with_neutrals() -> None:
    for color in PALETTE:
        assert can_pair_colors(color, color)
        for neutral in NEUTRAL_COLORS:
            assert can_pair_colors(color, neutral)
            assert can_pair_colors(neutral, color)


@pytest.mark.parametrize(
    "first,second,expected",
    [
        ("red", "green", False),
        ("red", "blue", False),
        ("blue", "brown", True),
        ("brown", "blue", True),
        ("pink", "brown", True),
        ("orange", "purple", False),
        ("Red", "WHITE", True),
    ],
)
def test_can_pair_colors_uses_good_pairs(first: str, second: str, expected: bool) -> None:
    assert can_pair_colors(first, second) is expected


def test_good_pairs_lookup_works_in_both_directions() -> None:
    # Pairs listed on only one side still match.
    assert "brown" in GOOD_PAIRS["green"]
    assert can_pair_colors("brown", "green")
    assert "yellow" not in GOOD_PAIRS["brown"]
    assert can_pair_colors("brown", "yellow")


def test_unknown_colors_only_pair_with_neutrals_or_themselves() -> None:
    assert can_pair_colors("teal", "black")
    assert can_pair_colors("teal", "teal")
    assert not can_pair_colors("teal", "red")


def test_score_is_bounded_over_palette() -> None:
    for top, bottom, shoes in product(PALETTE, repeat=3):
        score = score_color_combination(top, bottom, shoes)
        assert 0 <= score <= 100


@pytest.mark.parametrize(
    "top,bottom,shoes,expected",
    [
        ("black", "white", "gray", 100),
        ("blue", "white", "gray", 100),
        ("pink", "brown", "black", 100),
        ("red", "green", "yellow", 10),
        ("red", "green", "black", 60),
        ("red", "blue", "white", 60),
    ],
)
def test_score_color_combination_known_cases(top: str, bottom: str, shoes: str, expected: int) -> None:
    assert score_color_combination(top, bottom, shoes) == expected


def test_harmonious_triples_score_high_and_clashes_low() -> None:
    assert score_color_combination("pink", "brown", "black") >= 80
    assert score_color_combination("red", "green", "yellow") < 60


def test_every_all_neutral_triple_scores_at_least_95() -> None:
    for top, bottom, shoes in product(NEUTRAL_COLORS, repeat=3):
        assert score_color_combination(top, bottom, shoes) >= 95, (top, bottom, shoes)


def test_pairable_bold_colors_on_neutral_shoes_score_at_least_80() -> None:
    pairs = [(top, bottom) for top, bottom in product(BOLD_COLORS, repeat=2) if can_pair_colors(top, bottom)]
    assert ("pink", "brown") in pairs
    for (top, bottom), shoes in product(pairs, NEUTRAL_COLORS):
        assert score_color_combination(top, bottom, shoes) >= 80, (top, bottom, shoes)


def test_reasoning_for_bold_pair_on_neutral_shoes() -> None:
    reasons = generate_color_reasoning("pink", "brown", "black")
    assert reasons == [
        "black shoes work with any color combination",
        "pink and brown are complementary colors",
        "Neutral shoes balance the bold top and bottom",
    ]


def test_reasoning_for_all_neutrals() -> None:
    reasons = generate_color_reasoning("black", "white", "gray")
    assert reasons[0] == "gray shoes work with any color combination"
    assert reasons[1] == "black and white create a balanced look"
    assert "All neutral colors create a classic, timeless look" in reasons


def test_reasoning_warns_about_clash() -> None:
    reasons = generate_color_reasoning("red", "green", "yellow")
    assert reasons == ["Warning: red and green may clash"]


def test_evaluate_color_combination_combines_score_and_reasons() -> None:
    result = evaluate_color_combination("blue", "white", "gray")
    assert result.score == 100
    assert "blue and white create a balanced look" in result.reasons


def test_suggest_shoe_colors_for_two_bold_colors() -> None:
    assert suggest_shoe_colors("red", "green") == ["black", "white", "gray", "brown"]


def test_suggest_shoe_colors_starts_with_neutrals_and_filters_bold() -> None:
    suggestions = suggest_shoe_colors("blue", "white")
    assert suggestions[: len(NEUTRAL_COLORS)] == NEUTRAL_COLORS
    assert "blue" in suggestions
    assert "brown" in suggestions
    assert "red" not in suggestions
    assert len(suggestions) == len(set(suggestions))
