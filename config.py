import os
import secrets


def _flag(name: str, default: str) -> bool:
    return os.environ.get(name, default).strip().lower() in ("1", "true", "yes", "on")


class Config:
    SECRET_KEY = os.environ.get("SECRET_KEY") or secrets.token_hex(32)
    SQLALCHEMY_DATABASE_URI = os.environ.get("DATABASE_URL", "sqlite:///alchemy.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ECHO = _flag("SQLALCHEMY_ECHO", "false")

    # 'sql' (durable) or 'memory' (lost on restart, results tagged durable=False)
    ELEMENT_STORE = os.environ.get("ELEMENT_STORE", "sql")
    STORE_FALLBACK_TO_MEMORY = _flag("STORE_FALLBACK_TO_MEMORY", "true")
    ALCHEMY_WARMUP = _flag("ALCHEMY_WARMUP", "true")

    # 'openai' or 'table' (fixed rules, no network)
    ELEMENT_GENERATOR = os.environ.get("ELEMENT_GENERATOR", "openai")
    OPENAI_API_KEY = os.environ.get("OPENAI_API_KEY")
    OPENAI_MODEL = os.environ.get("OPENAI_MODEL", "gpt-4o-mini")
    OPENAI_TEMPERATURE = float(os.environ.get("OPENAI_TEMPERATURE", "0.7"))
    OPENAI_MAX_TOKENS = int(os.environ.get("OPENAI_MAX_TOKENS", "100"))
    OPENAI_TIMEOUT = float(os.environ.get("OPENAI_TIMEOUT", "15"))

    RATELIMIT_DEFAULT = "200 per hour; 50 per minute"
    COMBINE_RATE_LIMIT = os.environ.get("COMBINE_RATE_LIMIT", "30 per minute")

    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
