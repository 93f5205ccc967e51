"""Wardrobe storage abstractions and SQLite implementation.

Covers the clothing catalog, saved outfits (an ``outfits`` row plus one
``outfit_items`` row per role) and the wear log.
"""
from __future__ import annotations

import json
import logging
import sqlite3
import uuid
from dataclasses import asdict
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Dict, List, Optional, Set

from models.clothing_item import ClothingItem
from models.outfit import SavedOutfit, WearLogEntry
from models.taxonomy import normalize_color_name, normalize_season

logger = logging.getLogger(__name__)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class WardrobeStore:
    """Persistence interface for clothing items, outfits and wear logs."""

    def create_item(self, item: ClothingItem) -> ClothingItem:
        raise NotImplementedError

    def get_item(self, user_id: str, item_id: str) -> Optional[ClothingItem]:
        raise NotImplementedError

    def list_items_for_user(self, user_id: str) -> List[ClothingItem]:
        raise NotImplementedError

    def update_item(self, user_id: str, item_id: str, updated_fields: Dict[str, object]) -> Optional[ClothingItem]:
        raise NotImplementedError

    def delete_item(self, user_id: str, item_id: str) -> bool:
        raise NotImplementedError

    def search_items(self, user_id: str, filters: Dict[str, object]) -> List[ClothingItem]:
        raise NotImplementedError

    def get_stats(self, user_id: str) -> Dict[str, object]:
        raise NotImplementedError

    def save_outfit(self, user_id: str, name: str, items_by_role: Dict[str, str]) -> SavedOutfit:
        raise NotImplementedError

    def get_outfit(self, user_id: str, outfit_id: str) -> Optional[SavedOutfit]:
        raise NotImplementedError

    def list_saved_outfits(self, user_id: str) -> List[SavedOutfit]:
        raise NotImplementedError

    def log_wear(
        self,
        user_id: str,
        outfit_id: Optional[str] = None,
        item_ids: Optional[List[str]] = None,
        worn_date: Optional[str] = None,
    ) -> WearLogEntry:
        raise NotImplementedError

    def get_wear_history(self, user_id: str, limit: Optional[int] = None) -> List[WearLogEntry]:
        raise NotImplementedError

    def get_recent_worn_item_ids(self, user_id: str, limit: int = 3) -> Set[str]:
        raise NotImplementedError


class SQLiteWardrobeStore(WardrobeStore):
    """Local SQLite-backed store."""

    def __init__(self, database_path: str | Path = "data/wardrobe.db") -> None:
        self.database_path = Path(database_path)
        if self.database_path.parent and not self.database_path.parent.exists():
            self.database_path.parent.mkdir(parents=True, exist_ok=True)
        self._ensure_tables()

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.database_path)
        conn.row_factory = sqlite3.Row
        return conn

    def _ensure_tables(self) -> None:
        with self._connect() as conn:
            conn.executescript(
                """
                CREATE TABLE IF NOT EXISTS clothing_items (
                    user_id TEXT NOT NULL,
                    item_id TEXT NOT NULL,
                    type TEXT NOT NULL,
                    color TEXT NOT NULL,
                    seasons TEXT,
                    styles TEXT,
                    image_url TEXT,
                    created_at TEXT,
                    updated_at TEXT,
                    PRIMARY KEY (user_id, item_id)
                );
                CREATE TABLE IF NOT EXISTS outfits (
                    outfit_id TEXT PRIMARY KEY,
                    user_id TEXT NOT NULL,
                    name TEXT NOT NULL,
                    created_at TEXT
                );
                CREATE TABLE IF NOT EXISTS outfit_items (
                    outfit_id TEXT NOT NULL,
                    item_id TEXT NOT NULL,
                    role TEXT NOT NULL,
                    PRIMARY KEY (outfit_id, role)
                );
                CREATE TABLE IF NOT EXISTS wear_logs (
                    log_id TEXT PRIMARY KEY,
                    user_id TEXT NOT NULL,
                    outfit_id TEXT,
                    item_ids TEXT,
                    worn_date TEXT NOT NULL,
                    created_at TEXT
                );
                """
            )

    @staticmethod
    def _serialise_list(values: Optional[List[object]]) -> str:
        return json.dumps(values or [])

    @staticmethod
    def _deserialise_list(raw: str) -> List[object]:
        return json.loads(raw) if raw else []

    # Catalog

    def create_item(self, item: ClothingItem) -> ClothingItem:
        timestamp = _now()
        item.created_at = item.created_at or timestamp
        item.updated_at = item.updated_at or timestamp
        with self._connect() as conn:
            conn.execute(
                """
                INSERT OR REPLACE INTO clothing_items (
                    user_id, item_id, type, color, seasons, styles, image_url, created_at, updated_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    item.user_id,
                    item.item_id,
                    item.type,
                    item.color,
                    self._serialise_list(item.seasons),
                    self._serialise_list(item.styles),
                    item.image_url,
                    item.created_at,
                    item.updated_at,
                ),
            )
        return item

    def _row_to_item(self, row: sqlite3.Row) -> ClothingItem:
        return ClothingItem(
            item_id=row["item_id"],
            user_id=row["user_id"],
            type=row["type"],
            color=row["color"],
            seasons=self._deserialise_list(row["seasons"]),
            styles=self._deserialise_list(row["styles"]),
            image_url=row["image_url"] or "",
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )

    def get_item(self, user_id: str, item_id: str) -> Optional[ClothingItem]:
        with self._connect() as conn:
            cursor = conn.execute(
                "SELECT * FROM clothing_items WHERE user_id = ? AND item_id = ?",
                (user_id, item_id),
            )
            row = cursor.fetchone()
            return self._row_to_item(row) if row else None

    def list_items_for_user(self, user_id: str) -> List[ClothingItem]:
        with self._connect() as conn:
            cursor = conn.execute(
                "SELECT * FROM clothing_items WHERE user_id = ? ORDER BY created_at DESC, item_id",
                (user_id,),
            )
            return [self._row_to_item(row) for row in cursor.fetchall()]

    def update_item(self, user_id: str, item_id: str, updated_fields: Dict[str, object]) -> Optional[ClothingItem]:
        current = self.get_item(user_id, item_id)
        if not current:
            return None

        for key, value in updated_fields.items():
            if key in {"user_id", "item_id", "created_at"}:
                continue
            if hasattr(current, key):
                setattr(current, key, value)
        current.updated_at = _now()

        validated = ClothingItem(**asdict(current))
        return self.create_item(validated)

    def delete_item(self, user_id: str, item_id: str) -> bool:
        # Saved outfits keep their references; the caller decides what to do with them.
        with self._connect() as conn:
            cursor = conn.execute(
                "DELETE FROM clothing_items WHERE user_id = ? AND item_id = ?",
                (user_id, item_id),
            )
            return cursor.rowcount > 0

    def search_items(self, user_id: str, filters: Dict[str, object]) -> List[ClothingItem]:
        items = self.list_items_for_user(user_id)
        filters = filters or {}
        item_type = str(filters["type"]).strip().lower() if filters.get("type") else None
        color = normalize_color_name(str(filters["color"])) if filters.get("color") else None
        season = normalize_season(str(filters["season"])) if filters.get("season") else None
        style = str(filters["style"]).strip().lower().replace(" ", "_") if filters.get("style") else None

        def matches(item: ClothingItem) -> bool:
            if item_type and item.type != item_type:
                return False
            if color and item.color != color:
                return False
            if season and season not in item.seasons:
                return False
            if style and style not in item.styles:
                return False
            return True

        return [item for item in items if matches(item)]

    def get_stats(self, user_id: str) -> Dict[str, object]:
        by_type: Dict[str, int] = {}
        by_color: Dict[str, int] = {}
        with self._connect() as conn:
            rows = conn.execute(
                "SELECT type, color FROM clothing_items WHERE user_id = ?", (user_id,)
            ).fetchall()
        for row in rows:
            by_type[row["type"]] = by_type.get(row["type"], 0) + 1
            by_color[row["color"]] = by_color.get(row["color"], 0) + 1
        return {"total": len(rows), "by_type": by_type, "by_color": by_color}

    # Outfits

    def save_outfit(self, user_id: str, name: str, items_by_role: Dict[str, str]) -> SavedOutfit:
        outfit = SavedOutfit(
            outfit_id=str(uuid.uuid4()),
            user_id=user_id,
            name=name,
            items=dict(items_by_role),
            created_at=_now(),
        )
        with self._connect() as conn:
            conn.execute(
                "INSERT INTO outfits (outfit_id, user_id, name, created_at) VALUES (?, ?, ?, ?)",
                (outfit.outfit_id, user_id, name, outfit.created_at),
            )
            try:
                conn.executemany(
                    "INSERT INTO outfit_items (outfit_id, item_id, role) VALUES (?, ?, ?)",
                    [(outfit.outfit_id, item_id, role) for role, item_id in items_by_role.items()],
                )
            except sqlite3.Error:
                # Leaving the connection context rolls the outfit row back too.
                logger.warning("Outfit item insert failed, discarding outfit %s", outfit.outfit_id)
                raise
        return outfit

    def _outfit_items(self, conn: sqlite3.Connection, outfit_id: str) -> Dict[str, str]:
        rows = conn.execute(
            "SELECT role, item_id FROM outfit_items WHERE outfit_id = ?", (outfit_id,)
        ).fetchall()
        return {row["role"]: row["item_id"] for row in rows}

    def get_outfit(self, user_id: str, outfit_id: str) -> Optional[SavedOutfit]:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT * FROM outfits WHERE user_id = ? AND outfit_id = ?", (user_id, outfit_id)
            ).fetchone()
            if not row:
                return None
            return SavedOutfit(
                outfit_id=row["outfit_id"],
                user_id=row["user_id"],
                name=row["name"],
                items=self._outfit_items(conn, row["outfit_id"]),
                created_at=row["created_at"],
            )

    def list_saved_outfits(self, user_id: str) -> List[SavedOutfit]:
        with self._connect() as conn:
            rows = conn.execute(
                "SELECT * FROM outfits WHERE user_id = ? ORDER BY created_at DESC", (user_id,)
            ).fetchall()
            return [
                SavedOutfit(
                    outfit_id=row["outfit_id"],
                    user_id=row["user_id"],
                    name=row["name"],
                    items=self._outfit_items(conn, row["outfit_id"]),
                    created_at=row["created_at"],
                )
                for row in rows
            ]

    # Wear log

    def log_wear(
        self,
        user_id: str,
        outfit_id: Optional[str] = None,
        item_ids: Optional[List[str]] = None,
        worn_date: Optional[str] = None,
    ) -> WearLogEntry:
        entry = WearLogEntry(
            log_id=str(uuid.uuid4()),
            user_id=user_id,
            outfit_id=outfit_id,
            item_ids=list(item_ids or []),
            worn_date=worn_date or date.today().isoformat(),
            created_at=_now(),
        )
        with self._connect() as conn:
            conn.execute(
                """
                INSERT INTO wear_logs (log_id, user_id, outfit_id, item_ids, worn_date, created_at)
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                (
                    entry.log_id,
                    user_id,
                    outfit_id,
                    self._serialise_list(entry.item_ids),
                    entry.worn_date,
                    entry.created_at,
                ),
            )
        return entry

    def get_wear_history(self, user_id: str, limit: Optional[int] = None) -> List[WearLogEntry]:
        query = "SELECT * FROM wear_logs WHERE user_id = ? ORDER BY worn_date DESC, created_at DESC"
        params: tuple = (user_id,)
        if limit is not None:
            query += " LIMIT ?"
            params = (user_id, int(limit))
        with self._connect() as conn:
            rows = conn.execute(query, params).fetchall()
        return [
            WearLogEntry(
                log_id=row["log_id"],
                user_id=row["user_id"],
                outfit_id=row["outfit_id"],
                item_ids=[str(item_id) for item_id in self._deserialise_list(row["item_ids"])],
                worn_date=row["worn_date"],
                created_at=row["created_at"],
            )
            for row in rows
        ]

    def get_recent_worn_item_ids(self, user_id: str, limit: int = 3) -> Set[str]:
        """Item ids of the outfits in the latest ``limit`` wear logs.

        Outfit item rows are preferred; a log without them contributes its own
        ``item_ids``.
        """

        recent: Set[str] = set()
        if limit <= 0:
            return recent
        entries = self.get_wear_history(user_id, limit=limit)
        with self._connect() as conn:
            for entry in entries:
                outfit_items = self._outfit_items(conn, entry.outfit_id) if entry.outfit_id else {}
                if outfit_items:
                    recent.update(outfit_items.values())
                else:
                    recent.update(entry.item_ids)
        return recent


__all__ = ["WardrobeStore", "SQLiteWardrobeStore"]
