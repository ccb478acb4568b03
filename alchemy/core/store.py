# alchemy/core/store.py
from __future__ import annotations
import logging
import threading
from typing import Dict, List, Optional, Sequence, Tuple

from ..errors import DuplicateElement
from .types import Element, Recipe

logger = logging.getLogger(__name__)

# Seeded in this order, so an empty store hands out ids 1..4.
BASE_ELEMENTS: Sequence[Tuple[str, str]] = (
    ("Water", "💧"),
    ("Fire",  "🔥"),
    ("Earth", "🌍"),
    ("Air",   "💨"),
)


class ElementStore:
    """
    Storage contract shared by the durable (SQL) and in-memory stores.

    Uniqueness rules every implementation enforces:
      - one element per name (insert_element raises DuplicateElement)
      - one recipe per (input_low, input_high) (insert_recipe returns False)
    """
    kind = "abstract"
    durable = True

    # -------- elements --------
    def get_element(self, element_id: int) -> Optional[Element]:
        raise NotImplementedError

    def get_element_by_name(self, name: str) -> Optional[Element]:
        raise NotImplementedError

    def list_elements(self) -> List[Element]:
        raise NotImplementedError

    def insert_element(self, name: str, glyph: str, is_base: bool = False) -> Element:
        raise NotImplementedError

    # -------- recipes --------
    def get_recipe(self, low: int, high: int) -> Optional[Recipe]:
        raise NotImplementedError

    def insert_recipe(self, low: int, high: int, result_id: int) -> bool:
        """Insert-if-absent. True if this call stored it, False if the pair already had one."""
        raise NotImplementedError

    def list_recipes_by_result(self, result_id: int) -> List[Recipe]:
        raise NotImplementedError

    def list_recipes(self) -> List[Recipe]:
        raise NotImplementedError

    # -------- shared helpers --------
    def seed_base_elements(self, base: Sequence[Tuple[str, str]] = BASE_ELEMENTS) -> int:
        """Insert any missing base elements. Idempotent; returns how many were added."""
        added = 0
        for name, glyph in base:
            if self.get_element_by_name(name) is not None:
                continue
            try:
                self.insert_element(name, glyph, is_base=True)
                added += 1
            except DuplicateElement:
                # another worker seeded it between our check and insert
                continue
        if added:
            logger.info("seeded %d base elements into %s store", added, self.kind)
        return added

    def base_element_ids(self) -> List[int]:
        return sorted(e.id for e in self.list_elements() if e.is_base)

    def stats(self) -> Dict[str, object]:
        elements = self.list_elements()
        return {
            "store": self.kind,
            "durable": self.durable,
            "elements": len(elements),
            "base_elements": sum(1 for e in elements if e.is_base),
            "recipes": len(self.list_recipes()),
        }


class InMemoryStore(ElementStore):
    """
    Non-durable store: everything lives in dicts and is gone on restart.
    One lock guards all state, which makes both insert-if-absent rules atomic
    within the process.
    """
    kind = "memory"
    durable = False

    def __init__(self):
        self.by_id: Dict[int, Element] = {}
        self.by_name: Dict[str, Element] = {}
        self.recipes: Dict[Tuple[int, int], Recipe] = {}
        self._next_id = 1
        self._lock = threading.RLock()

    def get_element(self, element_id: int) -> Optional[Element]:
        with self._lock:
            return self.by_id.get(element_id)

    def get_element_by_name(self, name: str) -> Optional[Element]:
        with self._lock:
            return self.by_name.get(name)

    def list_elements(self) -> List[Element]:
        with self._lock:
            return sorted(self.by_id.values(), key=lambda e: e.id)

    def insert_element(self, name: str, glyph: str, is_base: bool = False) -> Element:
        with self._lock:
            if name in self.by_name:
                raise DuplicateElement(name)
            element = Element(id=self._next_id, name=name, glyph=glyph, is_base=is_base)
            self._next_id += 1
            self.by_id[element.id] = element
            self.by_name[name] = element
            return element

    def get_recipe(self, low: int, high: int) -> Optional[Recipe]:
        with self._lock:
            return self.recipes.get((low, high))

    def insert_recipe(self, low: int, high: int, result_id: int) -> bool:
        with self._lock:
            if (low, high) in self.recipes:
                return False
            self.recipes[(low, high)] = Recipe(low, high, result_id)
            return True

    def list_recipes_by_result(self, result_id: int) -> List[Recipe]:
        with self._lock:
            return [r for r in self.recipes.values() if r.result_id == result_id]

    def list_recipes(self) -> List[Recipe]:
        with self._lock:
            return list(self.recipes.values())
