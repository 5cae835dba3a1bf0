"""
Database connection lifecycle for the raw pricing store.
"""
import asyncio
import logging
import os
from typing import Optional

from cloud_price_compare.utils.db_config import get_connect_retry_settings, resolve_database_url

logger = logging.getLogger(__name__)


class DatabaseConnection:
    def __init__(self, connection_url: Optional[str] = None):
        """
        Initialize database connection with flexible configuration options.

        Args:
            connection_url: Optional explicit connection URL
        """
        # generated client, only importable after `prisma generate`
        from prisma import Prisma

        self.connection_url = connection_url or resolve_database_url()

        # Override Prisma's database connection URL
        os.environ["DATABASE_URL"] = self.connection_url
        self.prisma = Prisma()

    async def connect(self, retry_count: Optional[int] = None, retry_delay: Optional[float] = None):
        """
        Connect to database with retry logic.

        Args:
            retry_count: Number of connection attempts
            retry_delay: Seconds between retry attempts

        Returns:
            Prisma client instance

        Raises:
            ConnectionError: If connection fails after all retries
        """
        default_count, default_delay = get_connect_retry_settings()
        retry_count = retry_count or default_count
        retry_delay = default_delay if retry_delay is None else retry_delay

        for attempt in range(1, retry_count + 1):
            try:
                logger.info(f"Connecting to database (attempt {attempt}/{retry_count})...")
                await self.prisma.connect()
                logger.info("Database connection established")
                return self.prisma
            except Exception as e:
                logger.warning(f"Connection failed: {str(e)}")
                if attempt == retry_count:
                    raise ConnectionError(f"Failed to connect to database after {retry_count} attempts") from e
                logger.info(f"Retrying in {retry_delay} seconds...")
                await asyncio.sleep(retry_delay)

    async def disconnect(self):
        """Safely disconnect from the database"""
        try:
            logger.info("Disconnecting from database")
            await self.prisma.disconnect()
        except Exception as e:
            logger.error(f"Error during disconnect: {str(e)}")
