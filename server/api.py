"""FastAPI server exposing catalog, suggestion and outfit endpoints."""

from __future__ import annotations

import uuid
from functools import lru_cache
from typing import List

from fastapi import Depends, FastAPI, HTTPException, Query, Response
from pydantic import ValidationError

from agents.suggestion_orchestrator import OutfitSaveError, SuggestionGenerationError
from closet_app.app import ClosetApp
from logic.outfit_builder import InsufficientItemsError
from logic.validation import (
    ClothingItemCreate,
    ClothingItemUpdate,
    SaveOutfitRequest,
    SuggestionRequest,
    WearLogRequest,
    candidate_to_payload,
)

app = FastAPI(title="Closet Stylist", version="0.1.0")


@lru_cache(maxsize=1)
def get_closet_app() -> ClosetApp:
    """Lazily build the app so tests can override the dependency."""

    return ClosetApp()


def _item_payload(item) -> dict:
    return {
        "item_id": item.item_id,
        "type": item.type,
        "color": item.color,
        "seasons": list(item.seasons),
        "styles": list(item.styles),
        "image_url": item.image_url,
        "created_at": item.created_at,
    }


@app.get("/healthz")
async def healthcheck(closet: ClosetApp = Depends(get_closet_app)) -> dict:
    """Lightweight readiness check."""

    return {
        "status": "ok",
        "service": "closet-stylist",
        "environment": closet.config.environment or "local",
    }


@app.get("/users/{user_id}/items")
def list_items(
    user_id: str,
    type: str | None = None,
    color: str | None = None,
    season: str | None = None,
    style: str | None = None,
    closet: ClosetApp = Depends(get_closet_app),
) -> List[dict]:
    try:
        items = closet.wardrobe_tools.get_items(user_id, type=type, color=color, season=season, style=style)
    except ValidationError as exc:
        raise HTTPException(status_code=422, detail=exc.errors(include_url=False, include_context=False)) from exc
    return [_item_payload(item) for item in items]


@app.post("/users/{user_id}/items", status_code=201)
def add_item(user_id: str, request: ClothingItemCreate, closet: ClosetApp = Depends(get_closet_app)) -> dict:
    payload = request.model_dump()
    if not payload.get("item_id"):
        payload["item_id"] = str(uuid.uuid4())
    try:
        item = closet.wardrobe_tools.add_item(user_id, payload)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return _item_payload(item)


@app.get("/users/{user_id}/items/{item_id}")
def get_item(user_id: str, item_id: str, closet: ClosetApp = Depends(get_closet_app)) -> dict:
    item = closet.wardrobe_tools.get_item(user_id, item_id)
    if item is None:
        raise HTTPException(status_code=404, detail=f"item {item_id} not found")
    return _item_payload(item)


@app.patch("/users/{user_id}/items/{item_id}")
def update_item(
    user_id: str, item_id: str, request: ClothingItemUpdate, closet: ClosetApp = Depends(get_closet_app)
) -> dict:
    """Change the stored attributes of an item; omitted fields stay as they are."""

    try:
        item = closet.wardrobe_tools.update_item(user_id, item_id, **request.model_dump(exclude_unset=True))
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    if item is None:
        raise HTTPException(status_code=404, detail=f"item {item_id} not found")
    return _item_payload(item)


@app.delete("/users/{user_id}/items/{item_id}", status_code=204, response_class=Response)
def delete_item(user_id: str, item_id: str, closet: ClosetApp = Depends(get_closet_app)) -> Response:
    if not closet.wardrobe_tools.delete_item(user_id, item_id):
        raise HTTPException(status_code=404, detail=f"item {item_id} not found")
    return Response(status_code=204)


@app.get("/users/{user_id}/stats")
def item_stats(user_id: str, closet: ClosetApp = Depends(get_closet_app)) -> dict:
    return closet.wardrobe_tools.get_stats(user_id)


@app.post("/suggestions")
def suggest_outfits(request: SuggestionRequest, closet: ClosetApp = Depends(get_closet_app)) -> dict:
    """Generate ranked outfit suggestions for a user."""

    try:
        result = closet.orchestrator.generate_suggestions(
            request.user_id,
            season_preference=request.season_preference,
            include_accessories=request.include_accessories,
            max_suggestions=request.max_suggestions,
            recent_wear_limit=request.recent_wear_limit,
        )
    except InsufficientItemsError as exc:
        raise HTTPException(
            status_code=422, detail={"code": exc.code, "missing": exc.missing}
        ) from exc
    except SuggestionGenerationError as exc:
        raise HTTPException(status_code=502, detail=str(exc)) from exc
    return {
        "suggestions": [candidate_to_payload(candidate) for candidate in result.suggestions],
        "count": len(result.suggestions),
    }


@app.post("/outfits", status_code=201)
def save_outfit(request: SaveOutfitRequest, closet: ClosetApp = Depends(get_closet_app)) -> dict:
    """Accept a suggestion and persist it as a saved outfit."""

    try:
        candidate = closet.build_candidate(
            request.user_id,
            request.top_id,
            request.bottom_id,
            request.shoes_id,
            request.accessory_id,
        )
    except LookupError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    try:
        saved = closet.orchestrator.save_outfit(request.user_id, candidate, custom_name=request.name)
    except OutfitSaveError as exc:
        raise HTTPException(status_code=502, detail=str(exc)) from exc
    return {"outfit_id": saved.outfit_id, "name": saved.name, "items": saved.items}


@app.get("/users/{user_id}/outfits")
def list_outfits(user_id: str, closet: ClosetApp = Depends(get_closet_app)) -> List[dict]:
    return [
        {"outfit_id": outfit.outfit_id, "name": outfit.name, "items": outfit.items, "created_at": outfit.created_at}
        for outfit in closet.wardrobe_tools.list_saved_outfits(user_id)
    ]


@app.post("/wear-logs", status_code=201)
def log_wear(request: WearLogRequest, closet: ClosetApp = Depends(get_closet_app)) -> dict:
    """Record that a saved outfit was worn."""

    if not request.outfit_id:
        entry = closet.wardrobe_tools.log_wear(
            request.user_id, item_ids=request.item_ids, worn_date=request.worn_date
        )
    else:
        try:
            entry = closet.orchestrator.log_wear(request.user_id, request.outfit_id, worn_date=request.worn_date)
        except LookupError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc
    return {"log_id": entry.log_id, "worn_date": entry.worn_date, "item_ids": entry.item_ids}


@app.get("/users/{user_id}/wear-logs")
def wear_history(
    user_id: str,
    limit: int | None = Query(None, ge=1),
    closet: ClosetApp = Depends(get_closet_app),
) -> List[dict]:
    """Most recent wear first."""

    return [
        {"log_id": entry.log_id, "outfit_id": entry.outfit_id, "worn_date": entry.worn_date, "item_ids": entry.item_ids}
        for entry in closet.wardrobe_tools.get_wear_history(user_id, limit)
    ]


def get_app() -> FastAPI:
    """Expose the FastAPI instance for ASGI servers."""

    return app


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("server.api:app", host="0.0.0.0", port=int("8080"), reload=False)
