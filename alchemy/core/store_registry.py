# alchemy/core/store_registry.py
"""
Per-app component wiring.

The store, generator, result cache and resolver are built once in
create_app() and parked in app.extensions, so their lifetime is the Flask
app's. Nothing here is a module global; two apps (or two tests) never share
a cache.
"""
from __future__ import annotations
import logging
from typing import Any, Callable, Mapping, Optional, TypeVar

from flask import Flask, current_app

from ..errors import StoreUnavailable
from .cache import ResultCache
from .generator import OpenAIGenerator, RuleTableGenerator
from .resolver import CombinationResolver
from .store import ElementStore, InMemoryStore

logger = logging.getLogger(__name__)

T = TypeVar("T")

STORE_KEY = "alchemy.store"
GENERATOR_KEY = "alchemy.generator"
RESOLVER_KEY = "alchemy.resolver"


def get_component(key: str, factory: Optional[Callable[[], T]] = None) -> T:
    ext = current_app.extensions
    component = ext.get(key)
    if component is None:
        if factory is None:
            raise RuntimeError(f"{key} is not configured on this app")
        component = factory()
        ext[key] = component
    return component


def get_store() -> ElementStore:
    return get_component(STORE_KEY)


def get_resolver() -> CombinationResolver:
    return get_component(RESOLVER_KEY)


# -------- builders (called once, from create_app) --------
def build_store(config: Mapping[str, Any]) -> ElementStore:
    kind = str(config.get("ELEMENT_STORE", "sql")).lower()
    if kind == "memory":
        return InMemoryStore()
    if kind == "sql":
        from .sql_store import SqlStore  # needs the ORM models registered on db
        return SqlStore()
    raise ValueError(f"unknown ELEMENT_STORE {kind!r} (expected 'sql' or 'memory')")


def build_generator(config: Mapping[str, Any]):
    kind = str(config.get("ELEMENT_GENERATOR", "openai")).lower()
    if kind == "table":
        return RuleTableGenerator()
    if kind == "openai":
        return OpenAIGenerator(
            api_key=config.get("OPENAI_API_KEY"),
            model=config.get("OPENAI_MODEL", "gpt-4o-mini"),
            temperature=float(config.get("OPENAI_TEMPERATURE", 0.7)),
            max_tokens=int(config.get("OPENAI_MAX_TOKENS", 100)),
            timeout=float(config.get("OPENAI_TIMEOUT", 15)),
        )
    raise ValueError(f"unknown ELEMENT_GENERATOR {kind!r} (expected 'openai' or 'table')")


def warmup_store(app: Flask, store: ElementStore) -> ElementStore:
    """
    Create tables (SQL only) and seed the base elements.

    If the durable store is unreachable and STORE_FALLBACK_TO_MEMORY is set,
    hand back an in-memory store instead; results from it are tagged
    non-durable, so nobody mistakes them for replay-safe.
    """
    with app.app_context():
        try:
            if hasattr(store, "create_schema"):
                store.create_schema()
            store.seed_base_elements()
            return store
        except StoreUnavailable:
            if not app.config.get("STORE_FALLBACK_TO_MEMORY", True):
                raise
            logger.warning("durable store unreachable at startup; falling back to in-memory store")
            fallback = InMemoryStore()
            fallback.seed_base_elements()
            return fallback


def install(app: Flask, store: ElementStore, generator: Any) -> CombinationResolver:
    resolver = CombinationResolver(store=store, generator=generator, cache=ResultCache())
    app.extensions[STORE_KEY] = store
    app.extensions[GENERATOR_KEY] = generator
    app.extensions[RESOLVER_KEY] = resolver
    logger.info("element store=%s durable=%s generator=%s",
                store.kind, store.durable, type(generator).__name__)
    return resolver
