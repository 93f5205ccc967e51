"""Outfit candidate, saved outfit and wear log schemas."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Dict, List, Optional, Tuple

from models.clothing_item import ClothingItem

CandidateKey = Tuple[str, str, str, Optional[str]]


@dataclass(frozen=True)
class ScoreBreakdown:
    """Weighted contribution of every scoring factor to an outfit score.

    ``total`` is the rounded, clamped score; the other fields sum to the raw
    total before clamping.
    """

    color: float = 0.0
    season: float = 0.0
    style: float = 0.0
    variety: float = 0.0
    freshness: float = 0.0
    accessory: float = 0.0
    penalties: float = 0.0
    total: int = 0

    @property
    def raw_total(self) -> float:
        return (
            self.color
            + self.season
            + self.style
            + self.variety
            + self.freshness
            + self.accessory
            + self.penalties
        )


@dataclass(frozen=True)
class OutfitCandidate:
    """A generated top, bottom and shoes combination with an optional accessory."""

    top: ClothingItem
    bottom: ClothingItem
    shoes: ClothingItem
    accessory: Optional[ClothingItem] = None
    score: int = 0
    reasoning: Tuple[str, ...] = ()
    breakdown: Optional[ScoreBreakdown] = None

    @property
    def key(self) -> CandidateKey:
        accessory_id = self.accessory.item_id if self.accessory else None
        return (self.top.item_id, self.bottom.item_id, self.shoes.item_id, accessory_id)

    @property
    def candidate_id(self) -> str:
        return "|".join(part for part in self.key if part)

    @property
    def core_items(self) -> List[ClothingItem]:
        return [self.top, self.bottom, self.shoes]

    @property
    def present_items(self) -> List[ClothingItem]:
        items = self.core_items
        if self.accessory is not None:
            items.append(self.accessory)
        return items

    def items_by_role(self) -> Dict[str, ClothingItem]:
        roles = {"top": self.top, "bottom": self.bottom, "shoes": self.shoes}
        if self.accessory is not None:
            roles["accessory"] = self.accessory
        return roles

    def with_score(
        self, score: int, reasoning: List[str], breakdown: Optional[ScoreBreakdown] = None
    ) -> "OutfitCandidate":
        """Return a scored copy; the original candidate is left untouched."""

        return replace(self, score=score, reasoning=tuple(reasoning), breakdown=breakdown)


@dataclass
class SavedOutfit:
    """A persisted outfit referencing three or four items by role."""

    outfit_id: str
    user_id: str
    name: str
    items: Dict[str, str] = field(default_factory=dict)
    created_at: Optional[str] = None


@dataclass
class WearLogEntry:
    """Records that an outfit (or loose set of items) was worn on a date."""

    log_id: str
    user_id: str
    worn_date: str
    outfit_id: Optional[str] = None
    item_ids: List[str] = field(default_factory=list)
    created_at: Optional[str] = None


__all__ = ["CandidateKey", "ScoreBreakdown", "OutfitCandidate", "SavedOutfit", "WearLogEntry"]
