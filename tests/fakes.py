"""Deterministic stand-ins for the generator and a few awkward stores."""
import threading

from alchemy.core.generator import Candidate
from alchemy.core.store import InMemoryStore
from alchemy.errors import GenerationFailed, StoreUnavailable


class StubGenerator:
    """Answers from a table keyed by the unordered pair of names; otherwise
    invents a name from the two inputs. Records every call."""
    def __init__(self, answers=None):
        self.answers = dict(answers or {})
        self.calls = []
        self._lock = threading.Lock()

    def generate(self, name_a, name_b):
        with self._lock:
            self.calls.append((name_a, name_b))
        hit = self.answers.get(frozenset({name_a, name_b}))
        if hit is not None:
            return Candidate(*hit)
        return Candidate(name="+".join(sorted((name_a, name_b))), glyph="✨")


class FailingGenerator:
    def __init__(self):
        self.calls = 0

    def generate(self, name_a, name_b):
        self.calls += 1
        raise GenerationFailed("model timed out")


class BarrierGenerator(StubGenerator):
    """Holds every caller until `parties` of them are inside generate() at once."""
    def __init__(self, parties, answers=None, timeout=5.0):
        super().__init__(answers)
        self.barrier = threading.Barrier(parties, timeout=timeout)

    def generate(self, name_a, name_b):
        self.barrier.wait()
        return super().generate(name_a, name_b)


class RacingStore(InMemoryStore):
    """Lets a 'concurrent writer' commit a recipe for the pair right before our insert."""
    def __init__(self, rival_name="Vapor", rival_glyph="🌫️"):
        super().__init__()
        self.rival_name = rival_name
        self.rival_glyph = rival_glyph

    def insert_recipe(self, low, high, result_id):
        rival = self.get_element_by_name(self.rival_name)
        if rival is None:
            rival = super().insert_element(self.rival_name, self.rival_glyph)
        super().insert_recipe(low, high, rival.id)
        return super().insert_recipe(low, high, result_id)


class DownStore(InMemoryStore):
    """Every element read fails as if the database went away."""
    def get_element(self, element_id):
        raise StoreUnavailable("element store unavailable (get_element)")


def seeded_store(cls=InMemoryStore, **kwargs):
    store = cls(**kwargs)
    store.seed_base_elements()
    return store


WATER, FIRE, EARTH, AIR = 1, 2, 3, 4

STEAM_ANSWERS = {
    frozenset({"Water", "Fire"}): ("Steam", "♨️"),
    frozenset({"Water", "Earth"}): ("Mud", "🟤"),
    frozenset({"Steam", "Earth"}): ("Geyser", "⛲"),
}


def memory_config(**extra):
    cfg = {
        "TESTING": True,
        "SQLALCHEMY_DATABASE_URI": "sqlite://",
        "ELEMENT_STORE": "memory",
        "RATELIMIT_ENABLED": False,
    }
    cfg.update(extra)
    return cfg


def sql_config(db_path, **extra):
    cfg = {
        "TESTING": True,
        "SQLALCHEMY_DATABASE_URI": f"sqlite:///{db_path}",
        "ELEMENT_STORE": "sql",
        "STORE_FALLBACK_TO_MEMORY": False,
        "RATELIMIT_ENABLED": False,
    }
    cfg.update(extra)
    return cfg
