"""
Error type shared by every JsonBank operation.

Server-reported codes (e.g. ``name.exists``, ``notFound``) are carried
through unmodified so callers can match on them.
"""

from typing import Any, Dict

# Code used when the failure did not come from a server error envelope
DEFAULT_ERROR_CODE = "500"


class JsbError(Exception):
    """JsonBank error with a machine-readable code and a human message."""

    def __init__(self, code: str, message: str):
        super().__init__(message)
        self.code = code
        self.message = message

    def __repr__(self) -> str:
        return f"JsbError(code={self.code!r}, message={self.message!r})"

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, JsbError):
            return NotImplemented
        return self.code == other.code and self.message == other.message

    __hash__ = Exception.__hash__

    def to_dict(self) -> Dict[str, str]:
        return {"code": self.code, "message": self.message}

    @classmethod
    def from_exception(cls, exc: BaseException, code: str = DEFAULT_ERROR_CODE) -> "JsbError":
        """Wrap a collaborator exception (transport, decoder, filesystem)."""
        if isinstance(exc, JsbError):
            return exc
        return cls(code, str(exc) or exc.__class__.__name__)


# --- Shared errors ---


def err_bad_request(message: str) -> JsbError:
    return JsbError("bad_request", message)


def err_invalid_json() -> JsbError:
    """Returned when supplied content is not parseable JSON."""
    return JsbError("invalid_json_content", "Content is not a valid JSON string")


def err_not_authenticated() -> JsbError:
    return JsbError(
        "not_authenticated",
        "Not authenticated. Call authenticate() first.",
    )
