# alchemy/core/resolver.py
"""
Combination resolution: "what does A + B make?"

Lookup order, each tier short-circuiting the next:
    1. result cache         (process local, keyed by the normalized pair)
    2. stored recipe        (durable, one per unordered pair)
    3. generator            (non-deterministic; only step allowed to be slow)

Generated names are deduplicated against the store, so the same conceptual
result reached from different pairs is one element. The recipe insert is
insert-if-absent; losing that race means someone else already fixed the
answer for this pair, and we return theirs.
"""
from __future__ import annotations
import logging
from typing import Any, Optional

from ..errors import DuplicateElement, GenerationFailed, StoreUnavailable, UnknownElement
from .cache import ResultCache
from .pair_key import normalize
from .store import ElementStore
from .types import Element, ResolveResult

logger = logging.getLogger(__name__)


class CombinationResolver:
    def __init__(self, store: ElementStore, generator: Any, cache: Optional[ResultCache] = None):
        self.store = store
        self.generator = generator
        self.cache = cache if cache is not None else ResultCache()

    def _result(self, element: Element, is_new: bool, is_first: bool) -> ResolveResult:
        return ResolveResult(
            element=element,
            is_new_element=is_new,
            is_first_discovery=is_first,
            durable=self.store.durable,
        )

    def resolve(self, element_a_id: Any, element_b_id: Any) -> ResolveResult:
        pair = normalize(element_a_id, element_b_id)

        cached = self.cache.get(pair.key)
        if cached is not None:
            logger.debug("cache hit %s -> %s", pair.key, cached.name)
            return self._result(cached, False, False)

        low = self.store.get_element(pair.low)
        high = self.store.get_element(pair.high)
        if low is None or high is None:
            missing = pair.low if low is None else pair.high
            raise UnknownElement(f"element {missing} not found", element_id=missing)

        recipe = self.store.get_recipe(pair.low, pair.high)
        if recipe is not None:
            element = self._recipe_result(recipe.result_id)
            return self._result(self.cache.put(pair.key, element), False, False)

        candidate = self.generator.generate(low.name, high.name)
        if candidate is None:
            raise GenerationFailed("generator returned nothing")

        element, is_first = self._find_or_create(candidate.name, candidate.glyph)

        if not self.store.insert_recipe(pair.low, pair.high, element.id):
            winner = self.store.get_recipe(pair.low, pair.high)
            if winner is None:
                # the store said the pair exists but can't show it to us
                raise StoreUnavailable(f"recipe {pair.key} vanished after conflict")
            logger.info("recipe %s already stored by a concurrent resolve; using it", pair.key)
            winning = self._recipe_result(winner.result_id)
            keep_first = is_first and winning.id == element.id
            return self._result(self.cache.put(pair.key, winning), False, keep_first)

        logger.info("%s + %s -> %s%s", low.name, high.name, element.name,
                    " (first discovery)" if is_first else "")
        return self._result(self.cache.put(pair.key, element), True, is_first)

    # -------- internals --------
    def _recipe_result(self, result_id: int) -> Element:
        element = self.store.get_element(result_id)
        if element is None:
            raise UnknownElement(f"recipe result {result_id} not found", element_id=result_id)
        return element

    def _find_or_create(self, name: str, glyph: str):
        """Return (element, created_by_this_call). Names are the identity key."""
        existing = self.store.get_element_by_name(name)
        if existing is not None:
            return existing, False
        try:
            return self.store.insert_element(name, glyph, is_base=False), True
        except DuplicateElement:
            logger.info("element %r created concurrently; reusing it", name)
            existing = self.store.get_element_by_name(name)
            if existing is None:
                raise
            return existing, False
