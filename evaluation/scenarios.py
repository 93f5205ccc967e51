"""Evaluation scenarios exercising seasons, color harmony and wear history."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional


@dataclass
class EvaluationScenario:
    name: str
    description: str
    wardrobe_items: List[Dict[str, object]]
    expectations: Dict[str, object]
    season_preference: Optional[str] = None
    include_accessories: bool = True
    worn_item_ids: List[str] = field(default_factory=list)


def _item(item_id: str, item_type: str, color: str, seasons: List[str]) -> Dict[str, object]:
    return {
        "item_id": item_id,
        "type": item_type,
        "color": color,
        "seasons": seasons,
        "image_url": f"https://example.com/{item_id}.jpg",
    }


def _summer_capsule() -> List[Dict[str, object]]:
    return [
        _item("top_blue_tee", "top", "blue", ["summer"]),
        _item("bottom_white_shorts", "bottom", "white", ["summer"]),
        _item("shoes_gray_sneakers", "shoes", "gray", ["summer"]),
        _item("acc_black_cap", "accessory", "black", ["all"]),
    ]


def _neutral_basics() -> List[Dict[str, object]]:
    return [
        _item("top_white_shirt", "top", "white", ["all"]),
        _item("top_gray_tee", "top", "gray", ["all"]),
        _item("bottom_navy_chinos", "bottom", "navy", ["all"]),
        _item("bottom_black_jeans", "bottom", "black", ["all"]),
        _item("shoes_black_boots", "shoes", "black", ["all"]),
        _item("shoes_white_sneakers", "shoes", "white", ["all"]),
    ]


def _mixed_wardrobe() -> List[Dict[str, object]]:
    return [
        _item("top_red_knit", "top", "red", ["winter"]),
        _item("top_white_shirt", "top", "white", ["all"]),
        _item("top_green_tee", "top", "green", ["summer"]),
        _item("bottom_navy_chinos", "bottom", "navy", ["spring", "fall"]),
        _item("bottom_green_cargo", "bottom", "green", ["summer"]),
        _item("shoes_black_boots", "shoes", "black", ["fall", "winter"]),
        _item("shoes_yellow_runners", "shoes", "yellow", ["summer"]),
        _item("acc_brown_belt", "accessory", "brown", ["all"]),
        _item("acc_black_scarf", "accessory", "black", ["fall", "winter"]),
        _item("outer_beige_trench", "outerwear", "beige", ["spring", "fall"]),
    ]


SCENARIOS: List[EvaluationScenario] = [
    EvaluationScenario(
        name="summer_capsule",
        description="A minimal all-summer wardrobe yields a perfect summer look.",
        wardrobe_items=_summer_capsule(),
        season_preference="summer",
        expectations={
            "min_suggestions": 1,
            "top_color": "blue",
            "reason_contains": "summer",
            "min_score": 65,
        },
    ),
    EvaluationScenario(
        name="winter_fallback",
        description="No bottom suits winter, so filtering falls back to the full catalog and penalties decide.",
        wardrobe_items=_mixed_wardrobe(),
        season_preference="winter",
        expectations={
            "min_suggestions": 1,
            "min_score": 65,
            "season_fallback": True,
            "excludes_item": "shoes_yellow_runners",
        },
    ),
    EvaluationScenario(
        name="fresh_rotation",
        description="Recently worn items are pushed below fresh combinations.",
        wardrobe_items=_neutral_basics(),
        include_accessories=False,
        worn_item_ids=["top_white_shirt", "bottom_navy_chinos", "shoes_black_boots"],
        expectations={"min_suggestions": 1, "first_is_fresh": True},
    ),
    EvaluationScenario(
        name="missing_shoes",
        description="A catalog without shoes is reported as insufficient instead of returning nothing.",
        wardrobe_items=[
            _item("top_white_shirt", "top", "white", ["all"]),
            _item("bottom_navy_chinos", "bottom", "navy", ["all"]),
        ],
        expectations={"insufficient": True},
    ),
]


__all__ = ["EvaluationScenario", "SCENARIOS"]
