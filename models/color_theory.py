"""Rule-based color harmony helpers for outfit scoring.

Every score produced here traces back to an enumerable rule: neutral
membership, same-color pairing or an entry of :data:`GOOD_PAIRS`. Unknown
color names never raise; they simply fail the non-neutral rules.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Tuple

from models.taxonomy import BOLD_COLORS, NEUTRAL_COLORS

logger = logging.getLogger(__name__)

GOOD_PAIRS: Dict[str, Tuple[str, ...]] = {
    "red": ("white", "black", "gray", "navy", "beige"),
    "blue": ("white", "gray", "brown", "beige", "navy"),
    "green": ("brown", "beige", "white", "gray", "navy"),
    "yellow": ("gray", "navy", "brown", "white"),
    "orange": ("brown", "navy", "gray", "white"),
    "purple": ("gray", "white", "black"),
    "pink": ("gray", "white", "navy", "brown"),
    "brown": ("beige", "white", "gray", "green", "blue", "orange", "pink"),
}

TOP_BOTTOM_CLASH_PENALTY = 40
SHOE_CLASH_PENALTY = 15
NEUTRAL_SHOES_ANCHOR_BONUS = 20
ALL_NEUTRAL_BONUS = 15
SINGLE_ACCENT_BONUS = 10
BOLD_DISHARMONY_PENALTY = 20

# Shoe colors offered when both top and bottom are bold.
CORE_SHOE_NEUTRALS: List[str] = ["black", "white", "gray", "brown"]


@dataclass(frozen=True)
class ColorHarmonyResult:
    """Score and explanation for a top, bottom and shoes color triple."""

    score: int
    reasons: List[str]


def _key(color: str) -> str:
    return str(color or "").strip().lower()


def is_neutral(color: str) -> bool:
    """Return True for black, white, gray, beige and navy."""

    return _key(color) in NEUTRAL_COLORS


def is_bold(color: str) -> bool:
    """Return True for the non-neutral palette colors."""

    return _key(color) in BOLD_COLORS


def can_pair_colors(color1: str, color2: str) -> bool:
    """Return True when two colors may be worn together.

    Neutrals pair with anything, a color pairs with itself, and bold colors
    pair only through :data:`GOOD_PAIRS` (looked up in both directions).
    """

    c1, c2 = _key(color1), _key(color2)
    if is_neutral(c1) or is_neutral(c2):
        return True
    if c1 == c2:
        return True
    return c2 in GOOD_PAIRS.get(c1, ()) or c1 in GOOD_PAIRS.get(c2, ())


def score_color_combination(top: str, bottom: str, shoes: str) -> int:
    """Score a top, bottom and shoes color triple on a 0-100 scale."""

    score = 100
    top_bottom = can_pair_colors(top, bottom)
    top_shoes = can_pair_colors(top, shoes)
    bottom_shoes = can_pair_colors(bottom, shoes)

    if not top_bottom:
        score -= TOP_BOTTOM_CLASH_PENALTY
    if not top_shoes:
        score -= SHOE_CLASH_PENALTY
    if not bottom_shoes:
        score -= SHOE_CLASH_PENALTY

    if is_bold(top) and is_bold(bottom) and is_neutral(shoes):
        score += NEUTRAL_SHOES_ANCHOR_BONUS
    if is_neutral(top) and is_neutral(bottom) and is_neutral(shoes):
        score += ALL_NEUTRAL_BONUS

    bold_count = sum(1 for color in (top, bottom, shoes) if is_bold(color))
    if bold_count == 1:
        score += SINGLE_ACCENT_BONUS
    if bold_count >= 2 and not (top_bottom and top_shoes and bottom_shoes):
        score -= BOLD_DISHARMONY_PENALTY

    result = max(0, min(100, score))
    logger.debug("color score (%s, %s, %s) -> %s", top, bottom, shoes, result)
    return result


def generate_color_reasoning(top: str, bottom: str, shoes: str) -> List[str]:
    """Explain a color triple using the same rules as the score, in priority order."""

    reasons: List[str] = []
    if is_neutral(shoes):
        reasons.append(f"{shoes} shoes work with any color combination")

    if can_pair_colors(top, bottom):
        if is_neutral(top) or is_neutral(bottom):
            reasons.append(f"{top} and {bottom} create a balanced look")
        else:
            reasons.append(f"{top} and {bottom} are complementary colors")

    if is_bold(top) and is_bold(bottom) and is_neutral(shoes):
        reasons.append("Neutral shoes balance the bold top and bottom")

    if all(is_neutral(color) for color in (top, bottom, shoes)):
        reasons.append("All neutral colors create a classic, timeless look")

    if not can_pair_colors(top, bottom):
        reasons.append(f"Warning: {top} and {bottom} may clash")
    return reasons


def evaluate_color_combination(top: str, bottom: str, shoes: str) -> ColorHarmonyResult:
    """Return the score and reasoning for a color triple together."""

    return ColorHarmonyResult(
        score=score_color_combination(top, bottom, shoes),
        reasons=generate_color_reasoning(top, bottom, shoes),
    )


def suggest_shoe_colors(top: str, bottom: str) -> List[str]:
    """Suggest shoe colors that keep a top and bottom combination harmonious."""

    if is_bold(top) and is_bold(bottom):
        return list(CORE_SHOE_NEUTRALS)

    suggestions: List[str] = list(NEUTRAL_COLORS)
    for color in NEUTRAL_COLORS + BOLD_COLORS:
        if color in suggestions:
            continue
        if can_pair_colors(color, top) and can_pair_colors(color, bottom):
            suggestions.append(color)
    return suggestions


__all__ = [
    "GOOD_PAIRS",
    "ColorHarmonyResult",
    "is_neutral",
    "is_bold",
    "can_pair_colors",
    "score_color_combination",
    "generate_color_reasoning",
    "evaluate_color_combination",
    "suggest_shoe_colors",
]
