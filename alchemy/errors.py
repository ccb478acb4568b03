# alchemy/errors.py
from __future__ import annotations


class AlchemyError(Exception):
    """Base for every failure the engines surface to a caller."""
    status_code = 500
    code = "alchemy_error"

    def __init__(self, message: str = "", **detail):
        super().__init__(message or self.code)
        self.detail = detail

    def to_payload(self) -> dict:
        payload = {"success": False, "error": str(self), "code": self.code}
        if self.detail:
            payload["detail"] = self.detail
        return payload


class InvalidInput(AlchemyError):
    status_code = 400
    code = "invalid_input"


class UnknownElement(AlchemyError):
    status_code = 404
    code = "unknown_element"


class GenerationFailed(AlchemyError):
    """The generator errored, timed out or answered something unusable. Retryable."""
    status_code = 502
    code = "generation_failed"


class StoreUnavailable(AlchemyError):
    status_code = 503
    code = "store_unavailable"


class DuplicateElement(AlchemyError):
    """Raised by a store when an element name is already taken."""
    status_code = 409
    code = "duplicate_element"

    def __init__(self, name: str):
        super().__init__(f"element {name!r} already exists", name=name)
        self.name = name
