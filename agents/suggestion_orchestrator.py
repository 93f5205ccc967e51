"""Suggestion orchestrator driving generation, scoring and ranking of outfits."""
from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from datetime import date
from typing import AbstractSet, Dict, Iterable, List, Optional, Set

from closet_app.config import SuggestionSettings
from closet_app.logging_config import get_logger, log_event, operation_context
from logic.outfit_builder import (
    InsufficientItemsError,
    generate_candidates,
    partition_catalog,
    require_core_items,
)
from logic.outfit_naming import generate_outfit_name
from logic.outfit_scoring import score_candidate
from models.clothing_item import ClothingItem
from models.outfit import OutfitCandidate, SavedOutfit, WearLogEntry
from tools.wardrobe_tools import WardrobeTools

logger = get_logger(__name__)


class SuggestionGenerationError(RuntimeError):
    """Raised when suggestions cannot be produced for reasons other than a thin catalog."""


class OutfitSaveError(RuntimeError):
    """Raised when an accepted suggestion cannot be persisted."""


@dataclass(frozen=True)
class SuggestionResult:
    suggestions: List[OutfitCandidate]
    diagnostics: Dict[str, object]


def rank_candidates(
    candidates: Iterable[OutfitCandidate], min_score: int, max_suggestions: int
) -> List[OutfitCandidate]:
    """Drop candidates below ``min_score``, sort by score and keep the top entries.

    Sorting is stable, so equal scores keep generation order.
    """

    kept = [candidate for candidate in candidates if candidate.score >= min_score]
    kept.sort(key=lambda candidate: candidate.score, reverse=True)
    return kept[: max(0, max_suggestions)]


class SuggestionOrchestrator:
    """Builds ranked outfit suggestions from a user's catalog and wear history."""

    def __init__(self, wardrobe_tools: WardrobeTools, settings: Optional[SuggestionSettings] = None) -> None:
        self.wardrobe_tools = wardrobe_tools
        self.settings = settings or SuggestionSettings()

    def suggest(
        self,
        items: Iterable[ClothingItem],
        recent_item_ids: Optional[AbstractSet[str]] = None,
        season_preference: Optional[str] = None,
        include_accessories: bool = True,
        max_suggestions: Optional[int] = None,
    ) -> SuggestionResult:
        """Run the pure pipeline over an explicit catalog and recency set."""

        limit = self.settings.max_suggestions if max_suggestions is None else max_suggestions
        generation = generate_candidates(
            list(items),
            season_preference=season_preference,
            include_accessories=include_accessories,
            accessory_sample_limit=self.settings.accessory_sample_limit,
        )
        recent = frozenset(recent_item_ids or ())
        scored = [
            score_candidate(
                candidate,
                season_preference=season_preference,
                recent_item_ids=recent,
                reasoning_limit=self.settings.reasoning_limit,
            )
            for candidate in generation.candidates
        ]
        min_score = self.settings.min_score(season_preference)
        ranked = rank_candidates(scored, min_score, limit)
        diagnostics: Dict[str, object] = {
            **generation.diagnostics,
            "recent_item_count": len(recent),
            "min_score": min_score,
            "above_threshold": sum(1 for candidate in scored if candidate.score >= min_score),
            "returned": len(ranked),
        }
        return SuggestionResult(suggestions=ranked, diagnostics=diagnostics)

    def generate_suggestions(
        self,
        user_id: str,
        season_preference: Optional[str] = None,
        include_accessories: bool = True,
        max_suggestions: Optional[int] = None,
        recent_wear_limit: Optional[int] = None,
    ) -> SuggestionResult:
        """Return ranked suggestions for ``user_id``.

        Raises :class:`InsufficientItemsError` when the catalog has no top,
        bottom or shoes; other failures surface as
        :class:`SuggestionGenerationError`. An empty suggestion list is a
        normal outcome.
        """

        with operation_context("orchestrator.generate_suggestions", season=season_preference) as correlation_id:
            log_event(
                logger,
                logging.INFO,
                "suggestions_started",
                correlation_id=correlation_id,
                user_id=user_id,
                season=season_preference,
                include_accessories=include_accessories,
            )
            try:
                items = self.wardrobe_tools.get_items(user_id)
                require_core_items(partition_catalog(items))
                limit = self.settings.recent_wear_limit if recent_wear_limit is None else recent_wear_limit
                recent = self._recent_item_ids(user_id, limit)
                result = self.suggest(
                    items,
                    recent_item_ids=recent,
                    season_preference=season_preference,
                    include_accessories=include_accessories,
                    max_suggestions=max_suggestions,
                )
            except InsufficientItemsError as exc:
                log_event(
                    logger,
                    logging.INFO,
                    "suggestions_insufficient_items",
                    correlation_id=correlation_id,
                    missing=exc.missing,
                )
                raise
            except Exception as exc:
                log_event(
                    logger,
                    logging.ERROR,
                    "suggestions_failed",
                    correlation_id=correlation_id,
                    exc_info=True,
                )
                raise SuggestionGenerationError("Failed to generate outfit suggestions") from exc

            log_event(
                logger,
                logging.INFO,
                "suggestions_completed",
                correlation_id=correlation_id,
                candidate_count=result.diagnostics.get("candidate_count"),
                returned=len(result.suggestions),
                season_fallback=result.diagnostics.get("fallback"),
            )
            return result

    def _recent_item_ids(self, user_id: str, limit: int) -> Set[str]:
        """Best-effort recency lookup; failures only disable the freshness bonus."""

        if limit <= 0:
            return set()
        try:
            return set(self.wardrobe_tools.get_recent_worn_item_ids(user_id, limit))
        except Exception:  # noqa: BLE001
            log_event(logger, logging.WARNING, "recent_wear_lookup_failed", exc_info=True)
            return set()

    def save_outfit(
        self,
        user_id: str,
        candidate: OutfitCandidate,
        custom_name: Optional[str] = None,
        rng: Optional[random.Random] = None,
    ) -> SavedOutfit:
        """Persist an accepted suggestion under a custom or generated name."""

        name = (custom_name or "").strip() or generate_outfit_name(candidate, rng=rng)
        items_by_role = {role: item.item_id for role, item in candidate.items_by_role().items()}
        with operation_context("orchestrator.save_outfit") as correlation_id:
            try:
                saved = self.wardrobe_tools.save_outfit(user_id, name=name, items_by_role=items_by_role)
            except Exception as exc:
                log_event(logger, logging.ERROR, "outfit_save_failed", correlation_id=correlation_id, exc_info=True)
                raise OutfitSaveError("Failed to save outfit") from exc
            log_event(
                logger,
                logging.INFO,
                "outfit_saved",
                correlation_id=correlation_id,
                outfit_id=saved.outfit_id,
                roles=sorted(items_by_role),
            )
            return saved

    def log_wear(self, user_id: str, outfit_id: str, worn_date: Optional[date] = None) -> WearLogEntry:
        """Record that a saved outfit was worn, feeding the freshness heuristic."""

        outfit = self.wardrobe_tools.get_outfit(user_id, outfit_id)
        if outfit is None:
            raise LookupError(f"Unknown outfit '{outfit_id}'")
        return self.wardrobe_tools.log_wear(
            user_id,
            outfit_id=outfit_id,
            item_ids=list(outfit.items.values()),
            worn_date=worn_date,
        )


__all__ = [
    "SuggestionOrchestrator",
    "SuggestionResult",
    "SuggestionGenerationError",
    "OutfitSaveError",
    "rank_candidates",
]
