# alchemy/core/generator.py
"""
Generator adapters: given two element names, propose a result name + glyph.

The contract is deliberately narrow so the resolver never cares which one
it talks to:

    generate(name_a, name_b) -> Candidate      # or raise GenerationFailed

OpenAIGenerator asks a chat model and is non-deterministic. RuleTableGenerator
is a fixed lookup table for offline play.
"""
from __future__ import annotations
import json
import logging
import re
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Tuple

import openai
from openai import OpenAI

from ..errors import GenerationFailed

logger = logging.getLogger(__name__)

MAX_NAME_LENGTH = 60

_SYSTEM_PROMPT = """You are a creative alchemist. You combine two elements into a new one.
Rules:
1. The result must be a noun.
2. Abstract concepts are allowed.
3. Always include exactly one emoji.
4. The result must follow logically from combining the two elements.
5. Answer with JSON only."""

_USER_PROMPT = """What do you get when you combine "{a}" and "{b}"?
Answer as JSON: {{"result": "name of the result", "emoji": "one emoji"}}"""

_JSON_BLOCK = re.compile(r"\{.*\}", re.S)


@dataclass(frozen=True)
class Candidate:
    name: str
    glyph: str


def parse_candidate(content: str) -> Candidate:
    """Pull the first {...} block out of a model reply and validate it."""
    m = _JSON_BLOCK.search(content or "")
    if not m:
        raise GenerationFailed("generator reply contained no JSON object")
    try:
        data = json.loads(m.group(0))
    except ValueError as e:
        raise GenerationFailed(f"generator reply was not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise GenerationFailed("generator reply was not a JSON object")

    name = data.get("result")
    glyph = data.get("emoji") or data.get("glyph")
    if not isinstance(name, str) or not name.strip():
        raise GenerationFailed("generator reply had no result name")
    if not isinstance(glyph, str) or not glyph.strip():
        raise GenerationFailed("generator reply had no emoji")
    name = " ".join(name.split())[:MAX_NAME_LENGTH]
    return Candidate(name=name, glyph=glyph.strip())


class OpenAIGenerator:
    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = "gpt-4o-mini",
        temperature: float = 0.7,
        max_tokens: int = 100,
        timeout: float = 15.0,
        client: Any = None,
    ):
        self.api_key = api_key
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.timeout = timeout
        self._client = client

    @property
    def client(self):
        # built on first use so the app can start without a key configured
        if self._client is None:
            if not self.api_key:
                raise GenerationFailed("OPENAI_API_KEY is not configured")
            # retries are the caller's call, not ours
            self._client = OpenAI(api_key=self.api_key, timeout=self.timeout, max_retries=0)
        return self._client

    def generate(self, name_a: str, name_b: str) -> Candidate:
        try:
            completion = self.client.chat.completions.create(
                model=self.model,
                temperature=self.temperature,
                max_tokens=self.max_tokens,
                messages=[
                    {"role": "system", "content": _SYSTEM_PROMPT},
                    {"role": "user", "content": _USER_PROMPT.format(a=name_a, b=name_b)},
                ],
            )
        except openai.OpenAIError as e:
            logger.warning("openai combine %r + %r failed: %s", name_a, name_b, e)
            raise GenerationFailed(f"generator call failed: {e.__class__.__name__}") from e

        choices = getattr(completion, "choices", None) or []
        content = choices[0].message.content if choices else ""
        return parse_candidate(content or "")


# Classic starter table, keyed by the unordered pair of lowercase names.
DEFAULT_RULES: Dict[frozenset, Tuple[str, str]] = {
    frozenset({"air", "water"}):    ("Rain",   "🌧️"),
    frozenset({"air", "fire"}):     ("Energy", "⚡"),
    frozenset({"air", "earth"}):    ("Dust",   "🌫️"),
    frozenset({"earth", "water"}):  ("Mud",    "🟤"),
    frozenset({"earth", "fire"}):   ("Lava",   "🌋"),
    frozenset({"fire", "water"}):   ("Steam",  "♨️"),
    frozenset({"water"}):           ("Lake",   "🏞️"),
    frozenset({"fire"}):            ("Heat",   "🔥"),
    frozenset({"rain", "earth"}):   ("Plant",  "🌱"),
    frozenset({"mud", "plant"}):    ("Swamp",  "🐊"),
    frozenset({"lava", "water"}):   ("Stone",  "🪨"),
    frozenset({"energy", "air"}):   ("Wind",   "🌬️"),
    frozenset({"plant", "water"}):  ("Algae",  "🦠"),
    frozenset({"stone", "fire"}):   ("Metal",  "⚙️"),
    frozenset({"stone", "air"}):    ("Sand",   "⏳"),
    frozenset({"sand", "fire"}):    ("Glass",  "🪟"),
    frozenset({"plant", "fire"}):   ("Ash",    "⚱️"),
    frozenset({"steam", "air"}):    ("Cloud",  "☁️"),
    frozenset({"cloud", "water"}):  ("Rain",   "🌧️"),
    frozenset({"energy", "plant"}): ("Tree",   "🌳"),
    frozenset({"tree", "fire"}):    ("Charcoal", "🪵"),
}


class RuleTableGenerator:
    """Deterministic generator backed by a fixed table. Unknown pairs fail."""
    def __init__(self, rules: Optional[Mapping[frozenset, Tuple[str, str]]] = None):
        self.rules = dict(DEFAULT_RULES if rules is None else rules)

    def generate(self, name_a: str, name_b: str) -> Candidate:
        key = frozenset({name_a.strip().lower(), name_b.strip().lower()})
        hit = self.rules.get(key)
        if hit is None:
            raise GenerationFailed(f"no rule combines {name_a!r} and {name_b!r}")
        name, glyph = hit
        return Candidate(name=name, glyph=glyph)
