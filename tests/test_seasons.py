"""Season appropriateness and season-match scoring tests."""
from __future__ import annotations

import sys
from pathlib import Path
from typing import List

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from logic.seasons import is_broadly_wearable, is_season_appropriate, score_season_match
from models.clothing_item import ClothingItem


def _item(seasons: List[str], item_id: str = "item", item_type: str = "top") -> ClothingItem:
    return ClothingItem(item_id=item_id, user_id="demo", type=item_type, color="black", seasons=seasons)


@pytest.mark.parametrize("target", ["spring", "summer", "fall", "winter"])
def test_broad_items_fit_every_season(target: str) -> None:
    assert is_season_appropriate(_item(["all"]), target)
    assert is_season_appropriate(_item(["spring", "summer", "fall"]), target)


def test_is_broadly_wearable() -> None:
    assert is_broadly_wearable(["all"])
    assert is_broadly_wearable(["spring", "summer", "winter"])
    assert not is_broadly_wearable(["spring", "summer"])


@pytest.mark.parametrize(
    "seasons,target,expected",
    [
        (["summer"], "summer", True),
        (["summer"], "spring", True),
        (["spring"], "summer", True),
        (["fall"], "winter", True),
        (["winter"], "fall", True),
        (["summer"], "fall", False),
        (["summer"], "winter", False),
        (["spring", "fall"], "summer", False),
        (["spring", "fall"], "fall", True),
        (["Autumn"], "fall", True),
    ],
)
def test_is_season_appropriate(seasons: List[str], target: str, expected: bool) -> None:
    assert is_season_appropriate(_item(seasons), target) is expected


def test_two_season_items_do_not_borrow_adjacent_seasons() -> None:
    item = _item(["summer", "winter"])
    assert not is_season_appropriate(item, "spring")
    assert not is_season_appropriate(item, "fall")


def test_unknown_season_tags_never_match() -> None:
    item = _item(["monsoon"])
    assert item.seasons == ["monsoon"]
    assert not is_season_appropriate(item, "summer")
    assert score_season_match([item], "summer") == 20


def test_score_season_match_averages_item_scores() -> None:
    items = [_item(["all"], "a"), _item(["summer"], "b"), _item(["winter"], "c")]
    assert score_season_match(items, "summer") == pytest.approx((60 + 100 + 20) / 3)


def test_score_season_match_exact_match() -> None:
    items = [_item(["summer"], "a"), _item(["summer"], "b"), _item(["summer"], "c")]
    assert score_season_match(items, "summer") == 100


def test_scoring_adjacency_is_broader_than_appropriateness() -> None:
    """A summer item is graded as adjacent to fall but still fails the fall filter."""

    summer_item = _item(["summer"])
    assert not is_season_appropriate(summer_item, "fall")
    assert score_season_match([summer_item], "fall") == 40

    fall_item = _item(["fall"])
    assert not is_season_appropriate(fall_item, "summer")
    assert score_season_match([fall_item], "summer") == 40


def test_spring_scoring_does_not_borrow_from_winter() -> None:
    assert score_season_match([_item(["winter"])], "spring") == 20
    assert score_season_match([_item(["summer"])], "spring") == 40


def test_score_season_match_empty_list() -> None:
    assert score_season_match([], "summer") == 0.0
