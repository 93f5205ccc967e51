"""Instrumented adapter exposing wardrobe storage to the suggestion pipeline."""

from __future__ import annotations

from datetime import date
from typing import Any, Dict, List, Optional, Set

from models.clothing_item import ClothingItem, from_raw_metadata
from models.outfit import SavedOutfit, WearLogEntry
from logic.validation import CatalogFilters, ClothingItemUpdate, SaveOutfitInput, WearLogInput
from tools.observability import instrument_tool
from tools.wardrobe_store import SQLiteWardrobeStore, WardrobeStore


def _default_store() -> SQLiteWardrobeStore:
    return SQLiteWardrobeStore()


class WardrobeTools:
    """Catalog source, wear-history source and outfit sink over a :class:`WardrobeStore`."""

    def __init__(self, store: Optional[WardrobeStore] = None) -> None:
        self.store = store or _default_store()

    @instrument_tool("add_item")
    def add_item(self, user_id: str, item_data: Dict[str, Any]) -> ClothingItem:
        item = from_raw_metadata({**item_data, "user_id": user_id})
        return self.store.create_item(item)

    @instrument_tool("get_item")
    def get_item(self, user_id: str, item_id: str) -> Optional[ClothingItem]:
        return self.store.get_item(user_id, item_id)

    @instrument_tool("get_items", input_model=CatalogFilters)
    def get_items(
        self,
        user_id: str,
        *,
        type: Optional[str] = None,
        color: Optional[str] = None,
        season: Optional[str] = None,
        style: Optional[str] = None,
    ) -> List[ClothingItem]:
        filters = {"type": type, "color": color, "season": season, "style": style}
        if not any(filters.values()):
            return self.store.list_items_for_user(user_id)
        return self.store.search_items(user_id, filters)

    @instrument_tool("update_item", input_model=ClothingItemUpdate)
    def update_item(
        self,
        user_id: str,
        item_id: str,
        *,
        type: Optional[str] = None,
        color: Optional[str] = None,
        seasons: Optional[List[str]] = None,
        styles: Optional[List[str]] = None,
        image_url: Optional[str] = None,
    ) -> Optional[ClothingItem]:
        changes = {"type": type, "color": color, "seasons": seasons, "styles": styles, "image_url": image_url}
        return self.store.update_item(user_id, item_id, {key: value for key, value in changes.items() if value is not None})

    @instrument_tool("delete_item")
    def delete_item(self, user_id: str, item_id: str) -> bool:
        return self.store.delete_item(user_id, item_id)

    @instrument_tool("get_stats")
    def get_stats(self, user_id: str) -> Dict[str, object]:
        return self.store.get_stats(user_id)

    @instrument_tool("get_recent_worn_item_ids")
    def get_recent_worn_item_ids(self, user_id: str, limit: int = 3) -> Set[str]:
        return self.store.get_recent_worn_item_ids(user_id, limit)

    @instrument_tool("save_outfit", input_model=SaveOutfitInput)
    def save_outfit(self, user_id: str, *, name: str, items_by_role: Dict[str, str]) -> SavedOutfit:
        return self.store.save_outfit(user_id, name, items_by_role)

    @instrument_tool("get_outfit")
    def get_outfit(self, user_id: str, outfit_id: str) -> Optional[SavedOutfit]:
        return self.store.get_outfit(user_id, outfit_id)

    @instrument_tool("list_saved_outfits")
    def list_saved_outfits(self, user_id: str) -> List[SavedOutfit]:
        return self.store.list_saved_outfits(user_id)

    @instrument_tool("log_wear", input_model=WearLogInput)
    def log_wear(
        self,
        user_id: str,
        *,
        outfit_id: Optional[str] = None,
        item_ids: Optional[List[str]] = None,
        worn_date: Optional[date] = None,
    ) -> WearLogEntry:
        return self.store.log_wear(
            user_id,
            outfit_id=outfit_id,
            item_ids=item_ids,
            worn_date=worn_date.isoformat() if worn_date else None,
        )

    @instrument_tool("get_wear_history")
    def get_wear_history(self, user_id: str, limit: Optional[int] = None) -> List[WearLogEntry]:
        return self.store.get_wear_history(user_id, limit)


__all__ = ["WardrobeTools"]
