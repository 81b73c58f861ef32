"""Mock providers for testing."""

from .komga import MockKomgaProvider
from .navidrome import MockNavidromeProvider
from .persistence import MockPersistenceProvider
from .container import build_test_container

__all__ = [
    "MockKomgaProvider",
    "MockNavidromeProvider",
    "MockPersistenceProvider",
    "build_test_container",
]
