"""Deterministic outfit candidate generation with transparent diagnostics."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Set, Union

from models.clothing_item import ClothingItem
from models.outfit import CandidateKey, OutfitCandidate
from logic.seasons import is_season_appropriate

logger = logging.getLogger(__name__)

ACCESSORY_SAMPLE_LIMIT = 2
INSUFFICIENT_ITEMS = "INSUFFICIENT_ITEMS"


class InsufficientItemsError(ValueError):
    """Raised when a catalog lacks a top, a bottom or a pair of shoes."""

    code = INSUFFICIENT_ITEMS

    def __init__(self, missing: Iterable[str] = ()) -> None:
        self.missing = list(missing)
        detail = f" (missing: {', '.join(self.missing)})" if self.missing else ""
        super().__init__(f"{INSUFFICIENT_ITEMS}{detail}")


@dataclass(frozen=True)
class CatalogPartition:
    tops: List[ClothingItem]
    bottoms: List[ClothingItem]
    shoes: List[ClothingItem]
    accessories: List[ClothingItem]

    def missing_required(self) -> List[str]:
        missing = []
        if not self.tops:
            missing.append("top")
        if not self.bottoms:
            missing.append("bottom")
        if not self.shoes:
            missing.append("shoes")
        return missing

    def counts(self) -> Dict[str, int]:
        return {
            "top": len(self.tops),
            "bottom": len(self.bottoms),
            "shoes": len(self.shoes),
            "accessory": len(self.accessories),
        }


@dataclass(frozen=True)
class SeasonFilterResult:
    partition: CatalogPartition
    diagnostics: Dict[str, object]


@dataclass(frozen=True)
class CandidateGenerationResult:
    candidates: List[OutfitCandidate]
    diagnostics: Dict[str, object]


def partition_catalog(items: Iterable[ClothingItem]) -> CatalogPartition:
    """Group catalog items into the outfit slots, keeping catalog order."""

    grouped: Dict[str, List[ClothingItem]] = {"top": [], "bottom": [], "shoes": [], "accessory": []}
    skipped = 0
    for item in items:
        if item.type in grouped:
            grouped[item.type].append(item)
        else:
            skipped += 1
    if skipped:
        logger.debug("Ignored %s items outside the outfit slots", skipped)
    return CatalogPartition(
        tops=grouped["top"],
        bottoms=grouped["bottom"],
        shoes=grouped["shoes"],
        accessories=grouped["accessory"],
    )


def require_core_items(partition: CatalogPartition) -> None:
    missing = partition.missing_required()
    if missing:
        logger.info("Insufficient items for required slots: %s", missing)
        raise InsufficientItemsError(missing)


def apply_season_filter(partition: CatalogPartition, season: Optional[str]) -> SeasonFilterResult:
    """Keep season-appropriate items, falling back to everything when a slot empties."""

    diagnostics: Dict[str, object] = {
        "season": season,
        "initial_counts": partition.counts(),
        "fallback": False,
    }
    if not season:
        diagnostics["filtered_counts"] = partition.counts()
        return SeasonFilterResult(partition=partition, diagnostics=diagnostics)

    filtered = CatalogPartition(
        tops=[item for item in partition.tops if is_season_appropriate(item, season)],
        bottoms=[item for item in partition.bottoms if is_season_appropriate(item, season)],
        shoes=[item for item in partition.shoes if is_season_appropriate(item, season)],
        accessories=[item for item in partition.accessories if is_season_appropriate(item, season)],
    )
    diagnostics["filtered_counts"] = filtered.counts()
    if filtered.missing_required():
        logger.info(
            "Not enough %s items (%s), using all items with season penalties",
            season,
            filtered.missing_required(),
        )
        diagnostics["fallback"] = True
        return SeasonFilterResult(partition=partition, diagnostics=diagnostics)

    logger.info("Season filter '%s' kept %s", season, filtered.counts())
    return SeasonFilterResult(partition=filtered, diagnostics=diagnostics)


def enumerate_candidates(
    partition: CatalogPartition,
    include_accessories: bool = True,
    accessory_sample_limit: int = ACCESSORY_SAMPLE_LIMIT,
) -> List[OutfitCandidate]:
    """Build every top x bottom x shoes triple plus a few accessory variants."""

    accessories = partition.accessories[: max(0, accessory_sample_limit)] if include_accessories else []
    seen: Set[CandidateKey] = set()
    candidates: List[OutfitCandidate] = []

    def _emit(candidate: OutfitCandidate) -> None:
        if candidate.key in seen:
            return
        seen.add(candidate.key)
        candidates.append(candidate)

    for top in partition.tops:
        for bottom in partition.bottoms:
            for shoes in partition.shoes:
                _emit(OutfitCandidate(top=top, bottom=bottom, shoes=shoes))
                for accessory in accessories:
                    _emit(OutfitCandidate(top=top, bottom=bottom, shoes=shoes, accessory=accessory))
    return candidates


def generate_candidates(
    catalog: Union[Iterable[ClothingItem], CatalogPartition],
    season_preference: Optional[str] = None,
    include_accessories: bool = True,
    accessory_sample_limit: int = ACCESSORY_SAMPLE_LIMIT,
) -> CandidateGenerationResult:
    """Generate unscored outfit candidates from a catalog.

    Raises :class:`InsufficientItemsError` when the catalog has no top, bottom
    or shoes. Season filtering never starves generation: if it would empty a
    required slot the unfiltered catalog is used and the season fit is left to
    the scorer.
    """

    partition = catalog if isinstance(catalog, CatalogPartition) else partition_catalog(catalog)
    require_core_items(partition)

    season_result = apply_season_filter(partition, season_preference)
    candidates = enumerate_candidates(
        season_result.partition,
        include_accessories=include_accessories,
        accessory_sample_limit=accessory_sample_limit,
    )
    diagnostics: Dict[str, object] = {
        **season_result.diagnostics,
        "include_accessories": include_accessories,
        "accessory_sample_limit": accessory_sample_limit,
        "candidate_count": len(candidates),
    }
    logger.info("Generated %s outfit candidates", len(candidates))
    return CandidateGenerationResult(candidates=candidates, diagnostics=diagnostics)


__all__ = [
    "ACCESSORY_SAMPLE_LIMIT",
    "INSUFFICIENT_ITEMS",
    "InsufficientItemsError",
    "CatalogPartition",
    "SeasonFilterResult",
    "CandidateGenerationResult",
    "partition_catalog",
    "require_core_items",
    "apply_season_filter",
    "enumerate_candidates",
    "generate_candidates",
]
