"""Helpers shared by the media server HTTP clients."""

from typing import Any, TypeVar

import httpx
from pydantic import TypeAdapter, ValidationError

from librarian.domain.error import (
    RemoteAuthenticationError,
    RemoteResponseError,
    RemoteServiceError,
    RemoteViolationError,
)
from librarian.version import __version__

USER_AGENT = f"K-Librarian/{__version__} (+https://github.com/noaione/klibrarian)"

# Applied to every request; there are no retries
REQUEST_TIMEOUT = 30.0

T = TypeVar("T")


def decode_json(platform: str, response: httpx.Response) -> Any:
    """Decode a JSON response body.

    Raises:
        RemoteResponseError: If the body is not JSON
    """
    try:
        return response.json()
    except ValueError as e:
        raise RemoteResponseError(platform, f"invalid JSON: {e}") from e


def validate_response(
    platform: str, response: httpx.Response, adapter: TypeAdapter[T]
) -> T:
    """Decode a JSON response body into a model.

    Raises:
        RemoteResponseError: If the body does not match the model
    """
    data = decode_json(platform, response)
    try:
        return adapter.validate_python(data)
    except ValidationError as e:
        raise RemoteResponseError(platform, str(e)) from e


def extract_violations(response: httpx.Response) -> list[tuple[str, str]]:
    """Read field violations from an error body, if it has any."""
    try:
        body = response.json()
    except ValueError:
        return []
    if not isinstance(body, dict) or not isinstance(body.get("violations"), list):
        return []
    return [
        (
            str(item.get("fieldName") or item.get("field_name") or ""),
            str(item.get("message", "")),
        )
        for item in body["violations"]
        if isinstance(item, dict)
    ]


def raise_for_error(platform: str, response: httpx.Response) -> None:
    """Raise the matching remote error for a non-success response.

    Raises:
        RemoteAuthenticationError: On 401
        RemoteViolationError: If the body lists field violations
        RemoteServiceError: If the body carries an ``error`` field
        RemoteResponseError: For any other failure
    """
    if response.is_success:
        return

    if response.status_code == 401:
        raise RemoteAuthenticationError(platform, "credentials were rejected")

    violations = extract_violations(response)
    if violations:
        raise RemoteViolationError(platform, violations)

    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and "error" in body:
        raise RemoteServiceError(
            platform,
            response.status_code,
            str(body["error"]),
            str(body.get("message", "")),
        )

    raise RemoteResponseError(
        platform, f"unexpected status {response.status_code}"
    )
