"""Closet Stylist app bootstrap."""

from __future__ import annotations

import logging
from typing import Optional

from closet_app.config import AppConfig
from closet_app.logging_config import configure_logging, get_logger, log_event
from agents.suggestion_orchestrator import SuggestionOrchestrator
from models.outfit import OutfitCandidate
from tools.wardrobe_store import SQLiteWardrobeStore, WardrobeStore
from tools.wardrobe_tools import WardrobeTools

LOGGER = get_logger(__name__)


class ClosetApp:
    """Wires together configuration, storage and the suggestion orchestrator."""

    def __init__(self, config: AppConfig | None = None, store: WardrobeStore | None = None) -> None:
        self.config = config or AppConfig.from_env()
        configure_logging(self.config.log_level)

        self.wardrobe_store = store or SQLiteWardrobeStore(self.config.wardrobe_db_path)
        self.wardrobe_tools = WardrobeTools(self.wardrobe_store)
        self.orchestrator = SuggestionOrchestrator(
            wardrobe_tools=self.wardrobe_tools,
            settings=self.config.suggestion_settings(),
        )
        log_event(
            LOGGER,
            logging.INFO,
            "app_initialised",
            environment=self.config.environment or "local",
            database=str(self.config.wardrobe_db_path),
        )

    def build_candidate(
        self,
        user_id: str,
        top_id: str,
        bottom_id: str,
        shoes_id: str,
        accessory_id: Optional[str] = None,
    ) -> OutfitCandidate:
        """Resolve item ids into an outfit candidate, checking each item fits its role."""

        roles = {"top": top_id, "bottom": bottom_id, "shoes": shoes_id}
        if accessory_id:
            roles["accessory"] = accessory_id

        resolved = {}
        for role, item_id in roles.items():
            item = self.wardrobe_tools.get_item(user_id, item_id)
            if item is None:
                raise LookupError(f"Unknown item '{item_id}'")
            if item.type != role:
                raise ValueError(f"Item '{item_id}' is a {item.type}, not a {role}")
            resolved[role] = item
        return OutfitCandidate(**resolved)


__all__ = ["ClosetApp"]
