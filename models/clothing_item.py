"""Clothing item data model and helpers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from models.taxonomy import normalise_seasons, normalise_tags, normalize_color_name, validate_type


def _ensure_list(value: Any) -> List[Any]:
    """Coerce a scalar or iterable into a list."""

    if value is None:
        return []
    if isinstance(value, (list, tuple, set, frozenset)):
        return list(value)
    return [value]


@dataclass
class ClothingItem:
    """Represents a photographed, color and season tagged item in a closet."""

    item_id: str
    user_id: str
    type: str
    color: str
    seasons: List[str] = field(default_factory=list)
    styles: List[str] = field(default_factory=list)
    image_url: str = ""
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    def __post_init__(self) -> None:
        self.type = validate_type(self.type)
        self.color = normalize_color_name(str(self.color or ""))
        self.seasons = normalise_seasons(_ensure_list(self.seasons))
        if not self.seasons:
            raise ValueError(f"Clothing item '{self.item_id}' needs at least one season tag")
        self.styles = normalise_tags(_ensure_list(self.styles))


def from_raw_metadata(metadata: Dict[str, Any]) -> ClothingItem:
    """Factory to build a :class:`ClothingItem` from loose upload metadata."""

    required_fields = ["item_id", "user_id", "type", "color"]
    missing = [field for field in required_fields if not metadata.get(field)]
    if missing:
        raise ValueError(f"Missing required fields for ClothingItem: {missing}")

    return ClothingItem(
        item_id=str(metadata["item_id"]),
        user_id=str(metadata["user_id"]),
        type=str(metadata["type"]),
        color=str(metadata["color"]),
        seasons=_ensure_list(metadata.get("seasons")),
        styles=_ensure_list(metadata.get("styles")),
        image_url=str(metadata.get("image_url") or ""),
        created_at=metadata.get("created_at"),
        updated_at=metadata.get("updated_at"),
    )


__all__ = ["ClothingItem", "from_raw_metadata"]
