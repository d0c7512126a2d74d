# ABOUTME: Builds the single profile state controller that lives for one application session.
# ABOUTME: Seeds the store from configuration and tears the controller down on exit.

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import structlog

from profile_directory.config import Settings, get_settings
from profile_directory.controller.state import ProfileStateController
from profile_directory.store.service import ProfileStore

logger = structlog.get_logger(__name__)


def build_store(settings: Settings) -> ProfileStore:
    """Create a store seeded from the configured seed file.

    Raises:
        SeedDataError: If the seed file is missing or malformed.
    """
    return ProfileStore.from_seed_file(settings.seed_file, delays=settings.store_delays())


@asynccontextmanager
async def profile_session(
    settings: Settings | None = None,
    store: ProfileStore | None = None,
) -> AsyncIterator[ProfileStateController]:
    """Open a session: seed the store, start the controller, close it on exit.

    Args:
        settings: Settings to use. Defaults to get_settings().
        store: Store to use instead of one seeded from settings.seed_file.

    Yields:
        The started ProfileStateController for this session.
    """
    settings = settings if settings is not None else get_settings()
    store = store if store is not None else build_store(settings)
    controller = ProfileStateController(store, debounce_seconds=settings.search_debounce_seconds)
    logger.debug("session_started", profiles=len(store))
    async with controller:
        yield controller
    logger.debug("session_closed")
