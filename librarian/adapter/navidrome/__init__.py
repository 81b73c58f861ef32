"""Navidrome adapter."""

from .client import HttpNavidromeClient, MockNavidromeClient, NavidromeClaims

__all__ = ["HttpNavidromeClient", "MockNavidromeClient", "NavidromeClaims"]
