"""Optional shape check for decoded chat records.

``validate_message(value)`` holds one decoded JSON value to the
:class:`~chatlog.models.message.ChatMessage` shape and returns the typed
model or raises a typed error.  It only runs when strict parsing is
enabled; the default pass accepts any well-formed JSON value.

Error hierarchy (all inherit from ValueError for easy catch-all handling):

    ShapeMismatchError
    ├── MissingFieldError   — a required field is absent
    └── InvalidFieldError   — the value is not an object, or a field has the
                              wrong type
"""

from typing import Any

from pydantic import ValidationError as _PydanticError

from chatlog.models.message import ChatMessage

# ---------------------------------------------------------------------------
# Typed error classes
# ---------------------------------------------------------------------------


class ShapeMismatchError(ValueError):
    """Base class for decoded values that do not look like a chat record."""


class MissingFieldError(ShapeMismatchError):
    """A required field is absent from the record."""


class InvalidFieldError(ShapeMismatchError):
    """The record, or one of its fields, has the wrong JSON type."""


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------


def validate_message(value: Any) -> ChatMessage:
    """Validate one decoded JSON value as a ``ChatMessage``.

    Raises:
        MissingFieldError: A required field is absent.
        InvalidFieldError: *value* is not a JSON object, or a field has the
                           wrong type (e.g. ``reactions`` is not a list of
                           strings).
    """
    if not isinstance(value, dict):
        raise InvalidFieldError(f"expected JSON object, got {_json_type(value)}")
    try:
        return ChatMessage.model_validate(value)
    except _PydanticError as exc:
        raise _convert_pydantic_error(exc) from exc


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _json_type(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    return type(value).__name__


def _convert_pydantic_error(exc: _PydanticError) -> ShapeMismatchError:
    """Map the first Pydantic validation error to one of our typed errors.

    Only the first error is reported to keep ParseError messages short.
    The full Pydantic error is preserved as ``__cause__``.
    """
    first = exc.errors(include_url=False)[0]
    field = ".".join(str(loc) for loc in first.get("loc", ()))
    msg = first.get("msg", str(exc))

    if first.get("type") == "missing":
        return MissingFieldError(f"required field missing: {field!r}")
    return InvalidFieldError(f"invalid value for {field!r}: {msg}")
