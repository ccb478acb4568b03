from .types import Element, Recipe, CombinationStep, ResolveResult, RecipeHint
from .pair_key import PairKey, normalize
from .cache import ResultCache
from .store import ElementStore, InMemoryStore, BASE_ELEMENTS
from .generator import Candidate, OpenAIGenerator, RuleTableGenerator
from .resolver import CombinationResolver
from .hints import shortest_path, next_hint, recipe_hint

__all__ = [
    "Element", "Recipe", "CombinationStep", "ResolveResult", "RecipeHint",
    "PairKey", "normalize",
    "ResultCache",
    "ElementStore", "InMemoryStore", "BASE_ELEMENTS",
    "Candidate", "OpenAIGenerator", "RuleTableGenerator",
    "CombinationResolver",
    "shortest_path", "next_hint", "recipe_hint",
]
