"""Pydantic schemas for validating adapter inputs and API payloads."""

from __future__ import annotations

from datetime import date
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from models.outfit import OutfitCandidate
from models.taxonomy import (
    CLOTHING_TYPES,
    OUTFIT_ROLES,
    REQUIRED_ROLES,
    normalize_color_name,
    normalize_season,
)


class CatalogFilters(BaseModel):
    """Optional catalog filters accepted by the wardrobe adapter."""

    type: Optional[str] = None
    color: Optional[str] = None
    season: Optional[str] = None
    style: Optional[str] = None

    @field_validator("type")
    @classmethod
    def _validate_type(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        key = value.strip().lower()
        if key not in CLOTHING_TYPES:
            raise ValueError(f"type must be one of {CLOTHING_TYPES}")
        return key

    @field_validator("color")
    @classmethod
    def _normalise_color(cls, value: Optional[str]) -> Optional[str]:
        return normalize_color_name(value) if value else None

    @field_validator("season")
    @classmethod
    def _normalise_season(cls, value: Optional[str]) -> Optional[str]:
        return normalize_season(value) if value else None

    @field_validator("style")
    @classmethod
    def _normalise_style(cls, value: Optional[str]) -> Optional[str]:
        return value.strip().lower().replace(" ", "_") if value else None


class SaveOutfitInput(BaseModel):
    """Input contract for persisting an outfit."""

    name: str = Field(min_length=1)
    items_by_role: Dict[str, str]

    @field_validator("items_by_role")
    @classmethod
    def _validate_roles(cls, value: Dict[str, str]) -> Dict[str, str]:
        unknown = sorted(set(value) - set(OUTFIT_ROLES))
        if unknown:
            raise ValueError(f"unknown outfit roles: {unknown}")
        missing = [role for role in REQUIRED_ROLES if not value.get(role)]
        if missing:
            raise ValueError(f"missing outfit roles: {missing}")
        return value


class WearLogInput(BaseModel):
    """Input contract for recording a wear-log entry."""

    outfit_id: Optional[str] = None
    item_ids: List[str] = []
    worn_date: Optional[date] = None

    @model_validator(mode="after")
    def _require_reference(self) -> "WearLogInput":
        if not self.outfit_id and not self.item_ids:
            raise ValueError("a wear log needs an outfit_id or item_ids")
        return self


class ClothingItemCreate(BaseModel):
    """Payload for cataloguing a new item."""

    item_id: Optional[str] = None
    type: str
    color: str = Field(min_length=1)
    seasons: List[str] = Field(min_length=1)
    styles: List[str] = []
    image_url: str = ""


class ClothingItemUpdate(BaseModel):
    """Partial item update; fields left out keep their stored value."""

    type: Optional[str] = None
    color: Optional[str] = Field(None, min_length=1)
    seasons: Optional[List[str]] = Field(None, min_length=1)
    styles: Optional[List[str]] = None
    image_url: Optional[str] = None


class SuggestionRequest(BaseModel):
    """Options for a suggestion run."""

    user_id: str = Field(min_length=1)
    season_preference: Optional[str] = None
    include_accessories: bool = True
    max_suggestions: Optional[int] = Field(None, ge=1, le=50)
    recent_wear_limit: Optional[int] = Field(None, ge=0)

    @field_validator("season_preference")
    @classmethod
    def _normalise_season(cls, value: Optional[str]) -> Optional[str]:
        return normalize_season(value) if value else None


class SaveOutfitRequest(BaseModel):
    """Accept a suggestion by its item references."""

    user_id: str = Field(min_length=1)
    top_id: str = Field(min_length=1)
    bottom_id: str = Field(min_length=1)
    shoes_id: str = Field(min_length=1)
    accessory_id: Optional[str] = None
    name: Optional[str] = None


class WearLogRequest(WearLogInput):
    user_id: str = Field(min_length=1)


def candidate_to_payload(candidate: OutfitCandidate) -> Dict[str, Any]:
    """Serialise a scored candidate for API and CLI output."""

    payload: Dict[str, Any] = {
        "id": candidate.candidate_id,
        "items": {
            role: {
                "item_id": item.item_id,
                "type": item.type,
                "color": item.color,
                "seasons": list(item.seasons),
                "image_url": item.image_url,
            }
            for role, item in candidate.items_by_role().items()
        },
        "score": candidate.score,
        "reasoning": list(candidate.reasoning),
    }
    if candidate.breakdown is not None:
        breakdown = candidate.breakdown
        payload["breakdown"] = {
            "color": breakdown.color,
            "season": breakdown.season,
            "style": breakdown.style,
            "variety": breakdown.variety,
            "freshness": breakdown.freshness,
            "accessory": breakdown.accessory,
            "penalties": breakdown.penalties,
            "total": breakdown.total,
        }
    return payload


__all__ = [
    "CatalogFilters",
    "SaveOutfitInput",
    "WearLogInput",
    "ClothingItemCreate",
    "ClothingItemUpdate",
    "SuggestionRequest",
    "SaveOutfitRequest",
    "WearLogRequest",
    "candidate_to_payload",
]
