"""Response envelope shared by every API route."""

from typing import Generic, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class Envelope(BaseModel, Generic[T]):
    """``{"ok": true, "data": ...}`` wrapper for successful responses."""

    ok: bool = True
    data: T | None = None
    error: str | None = None


def ok(data: T | None = None) -> Envelope[T]:
    """Wrap a successful result."""
    return Envelope(ok=True, data=data)
