"""
Field-presence checks for request payloads.

A field counts as present when the client sent a truthy value: `""`, `0`,
`false` and `null` are all missing. Present values are kept exactly as sent.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel

from . import errors


def falsy_to_none(value: Any) -> Any:
    """
    Pydantic `mode="before"` hook: map falsy JSON values to None before
    number-to-string coercion turns `0` into `"0"`.
    """
    return value if value else None


def require_text_fields(payload: BaseModel | None, *, fields: tuple[str, ...], message: str) -> dict[str, str]:
    """
    Return the values of `fields`, or raise `ValidationError(message)` if any
    of them is absent or empty.
    """
    if payload is None:
        raise errors.ValidationError(message)

    values: dict[str, str] = {}
    for name in fields:
        text = getattr(payload, name, None)
        if not text:
            raise errors.ValidationError(message, error=f"Missing value for '{name}'.")
        values[name] = text
    return values
