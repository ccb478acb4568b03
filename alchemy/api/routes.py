# alchemy/api/routes.py
from __future__ import annotations

import logging
from typing import Any, Dict, Tuple

from flask import Blueprint, current_app, jsonify, request

from alchemy import limiter
from alchemy.errors import AlchemyError, InvalidInput
from alchemy.core.coerce_utils import coerce_flag, coerce_id, coerce_id_list, optional_id
from alchemy.core.hints import next_hint, recipe_hint, shortest_path
from alchemy.core.store_registry import get_resolver, get_store

logger = logging.getLogger(__name__)
bp = Blueprint("alchemy", __name__, url_prefix="/alchemy")


@bp.errorhandler(AlchemyError)
def _alchemy_error(e: AlchemyError):
    if e.status_code >= 500:
        logger.warning("%s: %s", e.code, e)
    return jsonify(e.to_payload()), e.status_code


# -----------------------------------------------------------------------------
# Small per-request helpers
# -----------------------------------------------------------------------------
def _body() -> Dict[str, Any]:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def _hint_args() -> Tuple[int, list, bool]:
    data = _body()
    target = optional_id(data.get("targetElementId"))
    if target is None:
        raise InvalidInput("targetElementId must be a positive integer id")
    discovered = coerce_id_list(data.get("discoveredElementIds"))
    return target, discovered, coerce_flag(data.get("fromDiscovered"))


def _snapshot():
    store = get_store()
    elements = store.list_elements()
    base_ids = sorted(e.id for e in elements if e.is_base)
    return store, elements, base_ids


def _combine_limit() -> str:
    return current_app.config.get("COMBINE_RATE_LIMIT", "30 per minute")


# -----------------------------------------------------------------------------
# Routes
# -----------------------------------------------------------------------------
@bp.get("/api/elements")
def api_elements():
    store = get_store()
    return jsonify({
        "success": True,
        "elements": [e.to_payload() for e in store.list_elements()],
        "durable": store.durable,
    }), 200


@bp.post("/api/combine")
@limiter.limit(_combine_limit)
def api_combine():
    data = _body()
    a, b = data.get("elementAId"), data.get("elementBId")
    if not a or not b:
        return jsonify({"success": False, "error": "elementAId and elementBId are required",
                        "code": InvalidInput.code}), 400
    result = get_resolver().resolve(coerce_id(a), coerce_id(b))
    return jsonify(result.to_payload()), 200


@bp.post("/api/hint")
def api_hint():
    target, discovered, from_discovered = _hint_args()
    store, elements, base_ids = _snapshot()
    step = next_hint(
        target, discovered, store.list_recipes(), base_ids,
        elements=elements, start_from_discovered=from_discovered,
    )
    already = target in discovered
    return jsonify({
        "success": True,
        "hint": step.to_payload() if step else None,
        "alreadyDiscovered": already,
        "reachable": already or step is not None,
    }), 200


@bp.post("/api/hint/path")
def api_hint_path():
    target, discovered, from_discovered = _hint_args()
    store, elements, base_ids = _snapshot()
    path = shortest_path(
        target, discovered, store.list_recipes(), base_ids,
        elements=elements, start_from_discovered=from_discovered,
    )
    return jsonify({
        "success": True,
        "path": [s.to_payload() for s in path] if path is not None else None,
        "steps": len(path) if path is not None else None,
    }), 200


@bp.post("/api/hint/recipe")
def api_hint_recipe():
    target, discovered, _ = _hint_args()
    store, elements, _ = _snapshot()
    hint = recipe_hint(target, discovered, store.list_recipes_by_result(target), elements=elements)
    return jsonify({"success": True, "hint": hint.to_payload()}), 200
