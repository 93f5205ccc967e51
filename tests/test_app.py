"""App bootstrap and CLI tests."""
from __future__ import annotations

import json
import sys
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

import main
from closet_app.app import ClosetApp
from closet_app.config import AppConfig
from models.clothing_item import ClothingItem


@pytest.fixture()
def closet(tmp_path: Path) -> ClosetApp:
    app = ClosetApp(config=AppConfig(wardrobe_db_path=str(tmp_path / "closet.db"), max_suggestions=1))
    for item_id, item_type, color in [
        ("top1", "top", "blue"),
        ("bottom1", "bottom", "white"),
        ("shoes1", "shoes", "gray"),
    ]:
        app.wardrobe_store.create_item(
            ClothingItem(item_id=item_id, user_id="demo", type=item_type, color=color, seasons=["summer"])
        )
    return app


def test_app_wires_settings_from_config(closet: ClosetApp) -> None:
    assert closet.orchestrator.settings.max_suggestions == 1
    assert closet.wardrobe_tools.store is closet.wardrobe_store


def test_build_candidate_resolves_items(closet: ClosetApp) -> None:
    candidate = closet.build_candidate("demo", "top1", "bottom1", "shoes1")
    assert candidate.candidate_id == "top1|bottom1|shoes1"
    assert candidate.accessory is None


def test_build_candidate_rejects_unknown_and_mismatched_items(closet: ClosetApp) -> None:
    with pytest.raises(LookupError):
        closet.build_candidate("demo", "top1", "bottom1", "missing")
    with pytest.raises(ValueError):
        closet.build_candidate("demo", "bottom1", "bottom1", "shoes1")


def test_cli_prints_suggestions(closet: ClosetApp, monkeypatch: pytest.MonkeyPatch, capsys) -> None:
    monkeypatch.setenv("WARDROBE_DB_PATH", str(closet.config.wardrobe_db_path))
    monkeypatch.setenv("MAX_SUGGESTIONS", "1")

    assert main.main(["suggest", "demo", "--season", "summer"]) == 0
    payload = json.loads(capsys.readouterr().out)
    assert len(payload) == 1
    assert payload[0]["id"] == "top1|bottom1|shoes1"


def test_cli_reports_insufficient_items(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys) -> None:
    monkeypatch.setenv("WARDROBE_DB_PATH", str(tmp_path / "empty.db"))

    assert main.main(["suggest", "nobody"]) == 2
    assert "INSUFFICIENT_ITEMS" in capsys.readouterr().err
