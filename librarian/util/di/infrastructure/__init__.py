"""Infrastructure providers."""

# Import bases
from .komga import KomgaProvider
from .navidrome import NavidromeProvider
from .persistence import PersistenceProvider
from .platforms import PlatformAggregatorProvider

# Import implementations (needed for __subclasses__())
from .komga import ProdKomgaProvider  # noqa: F401
from .navidrome import ProdNavidromeProvider  # noqa: F401
from .persistence import ProdPersistenceProvider  # noqa: F401

__all__ = [
    "KomgaProvider",
    "NavidromeProvider",
    "PersistenceProvider",
    "PlatformAggregatorProvider",
    "ProdKomgaProvider",
    "ProdNavidromeProvider",
    "ProdPersistenceProvider",
]
