"""Domain services."""

from .base import Service
from .invite_service import InviteService
from .platform import KomgaClient, NavidromeClient, RemotePlatformClient
from .redemption_service import RedemptionService

__all__ = [
    "InviteService",
    "KomgaClient",
    "NavidromeClient",
    "RedemptionService",
    "RemotePlatformClient",
    "Service",
]
