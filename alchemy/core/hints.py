# alchemy/core/hints.py
"""
Hint engine: shortest chain of combinations from the base elements to a target.

Breadth-first over the reachability relation the recipes induce. A frontier
node is (element just produced, steps taken so far, everything producible
along that path). From a node, any recipe whose two inputs are both
producible yields its result. Nodes are expanded level by level and an
element id is visited only once, so the first time the target is produced
its path has the fewest steps.

Pure functions over snapshots: callers pass recipes and an element catalog,
nothing here touches a store.
"""
from __future__ import annotations
from collections import deque
from dataclasses import dataclass
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

from ..errors import UnknownElement
from .types import CombinationStep, Element, Recipe, RecipeHint

BASE_ELEMENT_IDS: Tuple[int, ...] = (1, 2, 3, 4)

Catalog = Union[Mapping[int, Element], Iterable[Element]]


@dataclass(frozen=True)
class _Node:
    element_id: int
    path: Tuple[CombinationStep, ...]
    available: Tuple[int, ...]


def _as_ids(items: Iterable) -> List[int]:
    # accepts ids or Element snapshots
    return [getattr(i, "id", i) for i in items]


def _as_catalog(elements: Catalog) -> Mapping[int, Element]:
    if isinstance(elements, Mapping):
        return elements
    return {e.id: e for e in elements}


def _lookup(catalog: Mapping[int, Element], element_id: int) -> Element:
    element = catalog.get(element_id)
    if element is None:
        raise UnknownElement(f"element {element_id} is not in the catalog", element_id=element_id)
    return element


def _index_by_pair(recipes: Iterable[Recipe]) -> Dict[Tuple[int, int], Recipe]:
    index: Dict[Tuple[int, int], Recipe] = {}
    for r in recipes:
        a, b = r.input_low, r.input_high
        index.setdefault((a, b) if a <= b else (b, a), r)
    return index


def shortest_path(
    target_id: int,
    discovered: Iterable,
    recipes: Iterable[Recipe],
    base_ids: Sequence[int] = BASE_ELEMENT_IDS,
    *,
    elements: Catalog,
    start_from_discovered: bool = False,
) -> Optional[List[CombinationStep]]:
    """
    Fewest combination steps that produce target_id.

    Returns [] if the target is already discovered, None if no chain of known
    recipes reaches it. By default the search restarts from base_ids and may
    re-derive things the player already has; start_from_discovered=True adds
    the discovered ids to the starting set instead.
    """
    discovered_ids = _as_ids(discovered)
    if target_id in discovered_ids:
        return []

    catalog = _as_catalog(elements)
    by_pair = _index_by_pair(recipes)

    start = list(dict.fromkeys(base_ids))
    if start_from_discovered:
        start += [i for i in dict.fromkeys(discovered_ids) if i not in start]

    visited = set(start)
    queue = deque([_Node(element_id=0, path=(), available=tuple(start))])

    while queue:
        node = queue.popleft()
        available = node.available
        for i, a in enumerate(available):
            for b in available[i:]:
                recipe = by_pair.get((a, b) if a <= b else (b, a))
                if recipe is None or recipe.result_id in visited:
                    continue
                visited.add(recipe.result_id)

                step = CombinationStep(
                    element_a=_lookup(catalog, a),
                    element_b=_lookup(catalog, b),
                    result=_lookup(catalog, recipe.result_id),
                    step=len(node.path) + 1,
                )
                path = node.path + (step,)
                if recipe.result_id == target_id:
                    return list(path)
                queue.append(_Node(recipe.result_id, path, available + (recipe.result_id,)))

    return None


def next_hint(
    target_id: int,
    discovered: Iterable,
    recipes: Iterable[Recipe],
    base_ids: Sequence[int] = BASE_ELEMENT_IDS,
    *,
    elements: Catalog,
    start_from_discovered: bool = False,
) -> Optional[CombinationStep]:
    """Only the first step of the shortest path, so the hint doesn't spoil the rest."""
    path = shortest_path(
        target_id, discovered, recipes, base_ids,
        elements=elements, start_from_discovered=start_from_discovered,
    )
    return path[0] if path else None


def recipe_hint(
    target_id: int,
    discovered: Iterable,
    recipes_for_target: Iterable[Recipe],
    *,
    elements: Catalog,
) -> RecipeHint:
    """One-level hint from the recipes that directly produce target_id."""
    discovered_ids = set(_as_ids(discovered))
    catalog = _as_catalog(elements)
    producing = [r for r in recipes_for_target if r.result_id == target_id]
    if not producing:
        return RecipeHint(kind="unknown")

    for r in producing:
        if r.input_low in discovered_ids and r.input_high in discovered_ids:
            return RecipeHint(
                kind="direct",
                element_a=_lookup(catalog, r.input_low),
                element_b=_lookup(catalog, r.input_high),
            )

    first = producing[0]
    a = _lookup(catalog, first.input_low)
    b = _lookup(catalog, first.input_high)
    missing = [e for e in dict.fromkeys((a, b)) if e.id not in discovered_ids]
    return RecipeHint(kind="missing", element_a=a, element_b=b, missing=missing)
