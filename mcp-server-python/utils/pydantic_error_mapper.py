"""Convert Pydantic validation errors to project ToolError contract."""

from __future__ import annotations

from typing import Any

from pydantic import ValidationError

from models.errors import ToolError, create_validation_error


def _loc_to_field(loc: tuple[Any, ...]) -> str:
    """Render an error location as ``status_items[0].status``."""
    field = ""
    for part in loc:
        if part == "__root__":
            continue
        if isinstance(part, int):
            field += f"[{part}]"
        elif field:
            field += f".{part}"
        else:
            field = str(part)
    return field


def _clean_pydantic_message(message: str) -> str:
    for prefix in ("Value error, ", "Assertion failed, "):
        if message.startswith(prefix):
            return message[len(prefix):]
    return message


def map_pydantic_validation_error(error: ValidationError) -> ToolError:
    """
    Map Pydantic ValidationError to a VALIDATION_ERROR ToolError.

    Only the first issue is reported. Model-level validator failures carry no
    field and keep their bare message; required-field messages that already
    name the field ("Company is required.") are not prefixed again.
    """
    issues = error.errors()
    if not issues:
        return create_validation_error("Invalid input")

    first = issues[0]
    field = _loc_to_field(first.get("loc", ()))
    message = _clean_pydantic_message(first.get("msg", "Invalid input"))

    if not field or message.endswith(" is required."):
        return create_validation_error(message)
    return create_validation_error(f"Invalid {field}: {message}")
