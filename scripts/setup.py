#!/usr/bin/env python3
"""Setup script for the Tour Guide API: migrate the schema and seed sample data."""

import asyncio
import logging
import sys
from pathlib import Path

# Add the server directory to the Python path
server_dir = Path(__file__).parent.parent / "server"
sys.path.insert(0, str(server_dir))

from alembic import command
from alembic.config import Config
from tourguide.core.config import settings
from tourguide.core.database import Database
from tourguide.services.business_service import BusinessService

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def run_migrations():
    """Upgrade the database to the latest schema revision."""
    alembic_cfg = Config(str(server_dir / "db" / "alembic.ini"))
    alembic_cfg.set_main_option("script_location", str(server_dir / "db" / "alembic"))

    logger.info("Running database migrations...")
    command.upgrade(alembic_cfg, "head")
    logger.info("Database migrations completed")


async def create_sample_data():
    """Insert the sample business directory when it is empty."""
    database = Database(settings.database_url)
    try:
        async with database.session() as session:
            inserted = await BusinessService(session).seed_sample_businesses()
        if inserted:
            logger.info(f"Inserted {inserted} sample businesses")
        else:
            logger.info("Sample data already exists, skipping...")
    finally:
        await database.dispose()


def main():
    """Main setup function."""
    logger.info("Starting Tour Guide API setup...")

    run_migrations()
    asyncio.run(create_sample_data())

    logger.info("Setup completed successfully!")
    logger.info("You can now start the API server with: cd server && uvicorn tourguide.main:app --reload")


if __name__ == "__main__":
    main()
