#!/usr/bin/env python3
"""
Database setup script for Cloud Price Compare.

Generates the Prisma client and pushes the raw pricing tables
(aws_pricing_raw, azure_pricing_raw) to the configured database. The tables
are filled by the ingestion jobs, not by this service.
"""
import logging
import os
import subprocess
import sys

from cloud_price_compare.utils.db_config import get_connection_params, get_database_url, resolve_database_url

logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
logger = logging.getLogger("setup_db")

SCHEMA_PATH = os.path.join(os.path.dirname(os.path.abspath(__file__)), "prisma", "schema.prisma")


def setup_database() -> bool:
    """Set up the database schema using Prisma."""
    logger.info("Setting up database schema...")

    try:
        database_url = resolve_database_url()
        try:
            get_database_url()
            logger.info(f"Using DATABASE_URL from environment: {database_url.split('@')[-1]}")
        except ValueError:
            params = get_connection_params()
            logger.info(f"Using database connection: {params['host']}:{params['port']}/{params['database']}")

        # Set the environment variable for Prisma
        os.environ["DATABASE_URL"] = database_url

        logger.info("Generating Prisma client...")
        subprocess.run([sys.executable, "-m", "prisma", "generate", f"--schema={SCHEMA_PATH}"], check=True)

        logger.info("Applying database schema...")
        subprocess.run([sys.executable, "-m", "prisma", "db", "push", f"--schema={SCHEMA_PATH}"], check=True)

        logger.info("Database setup complete!")
        return True

    except (subprocess.CalledProcessError, OSError) as e:
        logger.error(f"Error setting up database: {str(e)}")
        return False


if __name__ == "__main__":
    success = setup_database()
    sys.exit(0 if success else 1)
