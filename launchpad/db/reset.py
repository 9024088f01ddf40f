"""Store reset — drop and recreate the users and trips tables.

Run with ``python -m launchpad.db.reset``. Destructive: meant for test
fixtures and local bootstrap, not for schema evolution.
"""

import asyncio
import logging

from launchpad.config import get_settings
from launchpad.infrastructure.database import DatabaseSessionManager
from launchpad.infrastructure.observability import setup_logging
from launchpad.infrastructure.store import Store
from launchpad.services.user_api import UserAPI

logger = logging.getLogger(__name__)


async def reset_store(database_url: str) -> bool:
    db_manager = DatabaseSessionManager(database_url)
    try:
        return await UserAPI(Store(db_manager)).init()
    finally:
        await db_manager.dispose()


def main() -> None:
    settings = get_settings()
    setup_logging(settings.log_level, "text")
    if not asyncio.run(reset_store(settings.database_url)):
        raise SystemExit("Failed to reset users/trips tables")
    logger.info("users and trips tables recreated")


if __name__ == "__main__":
    main()
