"""Komga adapter."""

from .client import HttpKomgaClient, MockKomgaClient

__all__ = ["HttpKomgaClient", "MockKomgaClient"]
