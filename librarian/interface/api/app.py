"""FastAPI application."""

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

import logfire
from dishka import AsyncContainer
from fastapi import FastAPI

from librarian.domain.repository import InviteRepository
from librarian.domain.service import RemotePlatformClient
from librarian.domain.value import InviteKind
from librarian.interface.api.routes import auth, health, invites
from librarian.interface.error import register_error_handlers
from librarian.util.di.container import create_container, setup_di
from librarian.util.error import ConfigurationError
from librarian.util.observability import instrument_fastapi, instrument_httpx
from librarian.version import __version__


async def prepare_backends(container: AsyncContainer) -> None:
    """Create the invite table and check every media server account.

    Args:
        container: Application DI container

    Raises:
        ConfigurationError: If a configured account is not an administrator
        RemotePlatformError: If a media server cannot be reached
    """
    invite_repository = await container.get(InviteRepository)
    await invite_repository.initialize()
    logfire.info("Invite store ready")

    platform_clients = await container.get(dict[InviteKind, RemotePlatformClient])
    for kind, client in platform_clients.items():
        admin = await client.get_current_admin()
        if not admin.is_admin:
            logfire.error(
                "Configured account is not an administrator",
                platform=kind.value,
                account=admin.id,
            )
            raise ConfigurationError(
                f"{kind.value} account {admin.id} is not an administrator"
            )
        logfire.info("Platform connected", platform=kind.value, account=admin.id)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Prepare backends on start-up and close the container on shutdown."""
    container: AsyncContainer = app.state.dishka_container
    await prepare_backends(container)
    yield
    await container.close()


def create_app(
    container: Optional[AsyncContainer] = None, instrument: bool = True
) -> FastAPI:
    """Create FastAPI application.

    Note: Logfire should be configured before calling this function.
    In production, start_app.py handles this.

    Args:
        container: DI container (defaults to the production container)
        instrument: Whether to instrument FastAPI and httpx with Logfire

    Returns:
        Configured application
    """
    if instrument:
        instrument_httpx()

    app_instance = FastAPI(
        title="K-Librarian",
        description="Invite tokens for self-service Komga and Navidrome accounts",
        version=__version__,
        lifespan=lifespan,
    )

    if instrument:
        instrument_fastapi(app_instance)

    setup_di(app_instance, container or create_container())
    register_error_handlers(app_instance)

    app_instance.include_router(health.router)
    app_instance.include_router(auth.router)
    app_instance.include_router(invites.router)

    return app_instance
