"""Instrumentation for wardrobe adapter calls."""

from __future__ import annotations

import logging
import time
from functools import wraps
from typing import Any, Callable, Dict, Mapping, ParamSpec, TypeVar

from pydantic import BaseModel, ValidationError

from closet_app.logging_config import (
    CORRELATION_ID,
    correlation_context,
    get_logger,
    log_event,
    redact_for_log,
    summarise_items_by_role,
)
from models.clothing_item import ClothingItem
from models.outfit import SavedOutfit, WearLogEntry

LOGGER = get_logger(__name__)
P = ParamSpec("P")
R = TypeVar("R")

_MAX_LOGGED_ARGS = 6


def _call_fields(kwargs: Dict[str, Any]) -> Dict[str, Any]:
    fields = dict(list(kwargs.items())[:_MAX_LOGGED_ARGS])
    if len(kwargs) > _MAX_LOGGED_ARGS:
        fields["truncated"] = True
    return redact_for_log(fields)


def summarise_result(result: Any) -> Dict[str, Any]:
    """Size up a tool result without logging the wardrobe contents."""

    if result is None:
        return {"found": False}
    if isinstance(result, bool):
        return {"changed": result}
    if isinstance(result, ClothingItem):
        return {"item_type": result.type}
    if isinstance(result, SavedOutfit):
        return {"outfit": summarise_items_by_role(result.items)}
    if isinstance(result, WearLogEntry):
        return {"worn_item_count": len(result.item_ids), "from_outfit": bool(result.outfit_id)}
    if isinstance(result, Mapping) and "total" in result:
        return {"catalog_total": result["total"]}
    if isinstance(result, (list, tuple, set, frozenset)):
        return {"result_count": len(result)}
    return {"result_type": type(result).__name__}


def instrument_tool(
    tool_name: str,
    input_model: type[BaseModel] | None = None,
) -> Callable[[Callable[P, R]], Callable[P, R]]:
    """Log a wardrobe tool call and optionally validate its keyword inputs.

    When ``input_model`` is given, keyword arguments are validated and replaced
    by the model's dump; a :class:`ValidationError` is logged and re-raised.
    The call runs under the caller's correlation id, or a fresh one scoped to
    the call when there is none.
    """

    def decorator(func: Callable[P, R]) -> Callable[P, R]:
        @wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            with correlation_context(CORRELATION_ID.get()) as correlation_id:
                start = time.perf_counter()

                if input_model:
                    try:
                        kwargs = input_model.model_validate(kwargs).model_dump()
                    except ValidationError as exc:
                        log_event(
                            LOGGER,
                            logging.WARNING,
                            "tool_validation_failed",
                            tool=tool_name,
                            correlation_id=correlation_id,
                            errors=[error.get("msg") for error in exc.errors()],
                        )
                        raise

                log_event(
                    LOGGER,
                    logging.INFO,
                    "tool_call_started",
                    tool=tool_name,
                    correlation_id=correlation_id,
                    kwargs=_call_fields(kwargs),
                )
                try:
                    result = func(*args, **kwargs)
                except Exception:
                    log_event(
                        LOGGER,
                        logging.ERROR,
                        "tool_call_failed",
                        tool=tool_name,
                        correlation_id=correlation_id,
                        duration_ms=round((time.perf_counter() - start) * 1000, 2),
                        exc_info=True,
                    )
                    raise
                log_event(
                    LOGGER,
                    logging.INFO,
                    "tool_call_completed",
                    tool=tool_name,
                    correlation_id=correlation_id,
                    duration_ms=round((time.perf_counter() - start) * 1000, 2),
                    **summarise_result(result),
                )
                return result

        return wrapper

    return decorator


__all__ = ["instrument_tool", "summarise_result"]
