from types import SimpleNamespace

import openai
import pytest

from alchemy.core.generator import (
    MAX_NAME_LENGTH, Candidate, OpenAIGenerator, RuleTableGenerator, parse_candidate,
)
from alchemy.errors import GenerationFailed


# ── Helpers ──────────────────────────────────────────────────────────────────

class FakeCompletions:
    def __init__(self, content=None, error=None):
        self.content = content
        self.error = error
        self.requests = []

    def create(self, **kwargs):
        self.requests.append(kwargs)
        if self.error is not None:
            raise self.error
        message = SimpleNamespace(content=self.content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


def fake_client(content=None, error=None):
    completions = FakeCompletions(content, error)
    return SimpleNamespace(chat=SimpleNamespace(completions=completions)), completions


# ── parse_candidate ──────────────────────────────────────────────────────────

class TestParseCandidate:
    def test_plain_json(self):
        assert parse_candidate('{"result": "Steam", "emoji": "♨️"}') == Candidate("Steam", "♨️")

    def test_json_wrapped_in_prose(self):
        content = 'Sure!\n```json\n{"result": "Mud", "emoji": "🟤", "is_new": true}\n```'
        assert parse_candidate(content) == Candidate("Mud", "🟤")

    def test_whitespace_collapsed(self):
        assert parse_candidate('{"result": "  Hot   Spring ", "emoji": " ♨️ "}') == Candidate("Hot Spring", "♨️")

    def test_long_name_truncated(self):
        cand = parse_candidate('{"result": "%s", "emoji": "x"}' % ("A" * 200))
        assert len(cand.name) == MAX_NAME_LENGTH

    @pytest.mark.parametrize("content", [
        "",
        "no json here",
        "{not json}",
        '{"emoji": "♨️"}',
        '{"result": "", "emoji": "♨️"}',
        '{"result": "Steam"}',
        '{"result": 42, "emoji": "♨️"}',
    ])
    def test_unusable_replies_fail(self, content):
        with pytest.raises(GenerationFailed):
            parse_candidate(content)


# ── OpenAIGenerator ──────────────────────────────────────────────────────────

class TestOpenAIGenerator:
    def test_generates_candidate(self):
        client, completions = fake_client('{"result": "Steam", "emoji": "♨️"}')
        gen = OpenAIGenerator(model="gpt-4o-mini", temperature=0.7, max_tokens=100, client=client)
        assert gen.generate("Water", "Fire") == Candidate("Steam", "♨️")

        req = completions.requests[0]
        assert req["model"] == "gpt-4o-mini"
        assert req["max_tokens"] == 100
        user = req["messages"][-1]["content"]
        assert '"Water"' in user and '"Fire"' in user

    def test_sdk_error_becomes_generation_failed(self):
        client, _ = fake_client(error=openai.OpenAIError("connection reset"))
        with pytest.raises(GenerationFailed):
            OpenAIGenerator(client=client).generate("Water", "Fire")

    def test_empty_reply_fails(self):
        client, _ = fake_client(content=None)
        with pytest.raises(GenerationFailed):
            OpenAIGenerator(client=client).generate("Water", "Fire")

    def test_missing_api_key_fails_on_use(self):
        gen = OpenAIGenerator(api_key=None)
        with pytest.raises(GenerationFailed):
            gen.generate("Water", "Fire")

    def test_client_built_lazily_from_key(self):
        gen = OpenAIGenerator(api_key="sk-test", timeout=3)
        assert gen._client is None
        assert isinstance(gen.client, openai.OpenAI)
        assert gen.client is gen.client


# ── RuleTableGenerator ───────────────────────────────────────────────────────

class TestRuleTableGenerator:
    def test_lookup_is_unordered_and_case_insensitive(self):
        gen = RuleTableGenerator()
        assert gen.generate("Water", "Fire") == gen.generate("fire", "WATER")
        assert gen.generate("Water", "Fire").name == "Steam"

    def test_unknown_pair_fails(self):
        with pytest.raises(GenerationFailed):
            RuleTableGenerator().generate("Water", "Glass")

    def test_custom_rules(self):
        gen = RuleTableGenerator({frozenset({"a", "b"}): ("C", "©")})
        assert gen.generate("B", "A") == Candidate("C", "©")
