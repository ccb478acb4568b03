# alchemy/core/types.py
"""
Plain value types shared by the store, the resolver and the hint engine.

These are snapshots: the ORM rows in alchemy.models never leave the SQL
store, callers only ever see these frozen dataclasses.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class Element:
    id: int
    name: str
    glyph: str
    is_base: bool = False

    def to_payload(self) -> Dict[str, Any]:
        return {"id": self.id, "name": self.name, "glyph": self.glyph, "isBase": self.is_base}


@dataclass(frozen=True)
class Recipe:
    """Unordered pair -> result. input_low <= input_high always."""
    input_low: int
    input_high: int
    result_id: int

    @property
    def inputs(self) -> tuple:
        return (self.input_low, self.input_high)


@dataclass(frozen=True)
class CombinationStep:
    element_a: Element
    element_b: Element
    result: Element
    step: int = 1

    def to_payload(self) -> Dict[str, Any]:
        return {
            "step": self.step,
            "elementA": self.element_a.to_payload(),
            "elementB": self.element_b.to_payload(),
            "result": self.result.to_payload(),
        }


@dataclass(frozen=True)
class ResolveResult:
    element: Element
    is_new_element: bool
    is_first_discovery: bool
    durable: bool = True

    def to_payload(self) -> Dict[str, Any]:
        return {
            "success": True,
            "result": self.element.to_payload(),
            "isNew": self.is_new_element,
            "isFirstDiscovery": self.is_first_discovery,
            "durable": self.durable,
        }


@dataclass(frozen=True)
class RecipeHint:
    kind: str  # 'direct' | 'missing' | 'unknown'
    element_a: Optional[Element] = None
    element_b: Optional[Element] = None
    missing: List[Element] = field(default_factory=list)

    def to_payload(self) -> Dict[str, Any]:
        return {
            "kind": self.kind,
            "elementA": self.element_a.to_payload() if self.element_a else None,
            "elementB": self.element_b.to_payload() if self.element_b else None,
            "missing": [e.to_payload() for e in self.missing],
        }
