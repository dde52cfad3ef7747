"""Checks shared by every analytics tool between the HTTP call and rendering.

- `require_argument` rejects a missing required argument before any request.
- `ensure_payload` enforces that a response carries data and is exactly a 200.
- `parse_payload` validates the data against a response model.
"""
from __future__ import annotations

from typing import Any

from pydantic import TypeAdapter, ValidationError

from core.errors import ToolArgumentError, UnexpectedResponseError  # type: ignore


def require_argument(value: Any, message: str) -> Any:
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ToolArgumentError(message)
    return value


def has_payload(data: Any) -> bool:
    """False for null, false, zero and the empty string. Empty lists and objects count as data."""
    if data is None:
        return False
    if isinstance(data, (bool, int, float, str)):
        return bool(data)
    return True


def ensure_payload(response) -> Any:
    """Return the response data, or raise if it is missing or the status is not 200.

    Only 200 is accepted. Other 2xx codes are rejected too.
    """
    if response is None or not has_payload(response.data):
        raise UnexpectedResponseError("No data received from the API")
    if response.status_code != 200:
        raise UnexpectedResponseError(f"Unexpected status code: {response.status_code}")
    return response.data


def parse_payload(model: Any, data: Any) -> Any:
    """Validate `data` against a pydantic model or any type TypeAdapter accepts."""
    try:
        return TypeAdapter(model).validate_python(data)
    except ValidationError as e:
        name = getattr(model, "__name__", str(model))
        raise UnexpectedResponseError(f"Unexpected response shape for {name}: {e}") from e
