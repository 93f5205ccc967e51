"""Outfit scoring tests."""
from __future__ import annotations

import sys
from pathlib import Path
from typing import List, Optional

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from logic.outfit_scoring import score_candidate, score_item_variety, score_outfit
from models.clothing_item import ClothingItem
from models.outfit import OutfitCandidate


def _item(item_id: str, item_type: str, color: str, seasons: Optional[List[str]] = None) -> ClothingItem:
    return ClothingItem(item_id=item_id, user_id="demo", type=item_type, color=color, seasons=seasons or ["all"])


def _candidate(
    top: str,
    bottom: str,
    shoes: str,
    accessory: Optional[str] = None,
    seasons: Optional[List[str]] = None,
) -> OutfitCandidate:
    return OutfitCandidate(
        top=_item("t", "top", top, seasons),
        bottom=_item("b", "bottom", bottom, seasons),
        shoes=_item("s", "shoes", shoes, seasons),
        accessory=_item("a", "accessory", accessory, ["all"]) if accessory else None,
    )


def test_summer_example_scores_full_marks() -> None:
    candidate = _candidate("blue", "white", "gray", accessory="black", seasons=["summer"])
    result = score_outfit(candidate, season_preference="summer")
    assert result.score == 100
    assert "Perfect for summer weather" in result.reasoning
    assert len(result.reasoning) <= 3


def test_scoring_is_deterministic_and_leaves_candidate_untouched() -> None:
    candidate = _candidate("red", "green", "black")
    first = score_candidate(candidate, recent_item_ids={"t"})
    second = score_candidate(candidate, recent_item_ids={"t"})
    assert first.score == second.score
    assert first.reasoning == second.reasoning
    assert first.breakdown == second.breakdown
    assert candidate.score == 0
    assert candidate.reasoning == ()


def test_no_season_preference_uses_neutral_season_score() -> None:
    result = score_outfit(_candidate("red", "green", "black"))
    assert result.breakdown.season == pytest.approx(30.0)
    assert result.score == 72


def test_breakdown_sums_to_raw_total() -> None:
    candidate = _candidate("blue", "white", "gray", accessory="brown", seasons=["winter"])
    result = score_outfit(candidate, season_preference="summer", recent_item_ids={"b"})
    breakdown = result.breakdown
    assert breakdown.style == 0.0
    assert breakdown.raw_total == pytest.approx(
        breakdown.color
        + breakdown.season
        + breakdown.variety
        + breakdown.freshness
        + breakdown.accessory
        + breakdown.penalties
    )
    assert breakdown.total == result.score
    assert breakdown.total == int(max(0.0, min(100.0, breakdown.raw_total)) + 0.5)


def test_total_is_clamped_to_one_hundred() -> None:
    candidate = _candidate("blue", "white", "gray", accessory="black", seasons=["summer"])
    result = score_outfit(candidate, season_preference="summer")
    assert result.breakdown.raw_total > 100
    assert result.score == 100


def test_half_points_round_up() -> None:
    # 45 color + 30 season + 13.5 variety
    result = score_outfit(_candidate("black", "black", "white"))
    assert result.breakdown.raw_total == pytest.approx(88.5)
    assert result.score == 89


def test_fresh_candidates_outscore_repeats() -> None:
    candidate = _candidate("red", "green", "black")
    fresh = score_outfit(candidate, recent_item_ids={"other"})
    one_repeat = score_outfit(candidate, recent_item_ids={"t"})
    all_repeat = score_outfit(candidate, recent_item_ids={"t", "b", "s"})

    assert fresh.score == 82
    assert one_repeat.score == 64
    assert all_repeat.score == 48
    assert fresh.score - all_repeat.score >= 10
    assert fresh.breakdown.freshness == 10
    assert all_repeat.breakdown.freshness == -24


def test_empty_recent_set_means_no_freshness_factor() -> None:
    result = score_outfit(_candidate("red", "green", "black"), recent_item_ids=set())
    assert result.breakdown.freshness == 0
    assert result.score == 72


def test_repeat_note_needs_two_repeated_items() -> None:
    candidate = _candidate("black", "white", "gray")
    one = score_outfit(candidate, recent_item_ids={"t"}, reasoning_limit=10)
    two = score_outfit(candidate, recent_item_ids={"t", "b"}, reasoning_limit=10)
    assert "Some items repeated from recent outfits" not in one.reasoning
    assert "Some items repeated from recent outfits" in two.reasoning


def test_fresh_note() -> None:
    result = score_outfit(_candidate("black", "white", "gray"), recent_item_ids={"x"}, reasoning_limit=10)
    assert "Fresh picks not worn recently" in result.reasoning


def test_accessory_bonus_with_harmony() -> None:
    result = score_outfit(_candidate("red", "green", "black", accessory="black"), reasoning_limit=10)
    assert result.breakdown.accessory == 10
    assert result.score == 82
    assert result.reasoning[-1] == "black accessory complements the outfit"


def test_accessory_bonus_without_harmony() -> None:
    result = score_outfit(_candidate("red", "green", "black", accessory="brown"), reasoning_limit=10)
    assert result.breakdown.accessory == 5
    assert result.score == 74
    assert "brown accessory complements the outfit" not in result.reasoning


def test_wrong_season_items_are_penalised() -> None:
    candidate = OutfitCandidate(
        top=_item("t", "top", "blue", ["winter"]),
        bottom=_item("b", "bottom", "white", ["summer"]),
        shoes=_item("s", "shoes", "gray", ["summer"]),
    )
    result = score_outfit(candidate, season_preference="summer", reasoning_limit=10)
    assert result.breakdown.penalties == -30
    assert result.score == 59
    assert "Warning: some items not ideal for summer" in result.reasoning
    assert "Perfect for summer weather" not in result.reasoning


def test_broad_items_are_suitable() -> None:
    result = score_outfit(_candidate("black", "white", "gray"), season_preference="fall", reasoning_limit=10)
    assert "Suitable for fall" in result.reasoning
    assert result.breakdown.penalties == 0


def test_reasoning_respects_limit_and_order() -> None:
    candidate = _candidate("red", "green", "black", accessory="black")
    full = score_outfit(candidate, recent_item_ids={"x"}, reasoning_limit=10).reasoning
    limited = score_outfit(candidate, recent_item_ids={"x"}).reasoning

    assert full == [
        "black shoes work with any color combination",
        "Neutral shoes balance the bold top and bottom",
        "Warning: red and green may clash",
        "Good variety in clothing types",
        "Fresh picks not worn recently",
        "black accessory complements the outfit",
    ]
    assert limited == full[:3]


@pytest.mark.parametrize(
    "colors,expected",
    [
        (["black", "black", "black"], 70),
        (["black", "white", "black"], 90),
        (["black", "white", "gray"], 100),
    ],
)
def test_score_item_variety(colors: List[str], expected: int) -> None:
    items = [
        _item("t", "top", colors[0]),
        _item("b", "bottom", colors[1]),
        _item("s", "shoes", colors[2]),
    ]
    assert score_item_variety(items) == expected


def test_score_item_variety_with_four_colors() -> None:
    items = [
        _item("t", "top", "black"),
        _item("b", "bottom", "white"),
        _item("s", "shoes", "gray"),
        _item("a", "accessory", "red"),
    ]
    assert score_item_variety(items) == 80
