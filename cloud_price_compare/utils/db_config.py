"""
Configuration utilities.

Settings come from environment variables, optionally loaded from a .env file.
"""
import logging
import os
from urllib.parse import urlparse, ParseResult

import dotenv

dotenv.load_dotenv()

logger = logging.getLogger(__name__)

_TRUE_VALUES = {"1", "true", "yes", "on"}


def get_database_url() -> str:
    """
    Get the database URL from environment variables.

    Returns:
        str: The database URL

    Raises:
        ValueError: If DATABASE_URL is not set
    """
    database_url = os.environ.get("DATABASE_URL")
    if not database_url:
        raise ValueError("DATABASE_URL environment variable is required")
    return database_url


def parse_database_url() -> ParseResult:
    """
    Parse the database URL into components.

    Returns:
        ParseResult: The parsed database URL
    """
    return urlparse(get_database_url())


def format_connection_string(
    user: str, password: str, host: str, port: str, database: str
) -> str:
    """
    Format a connection string from components.

    Args:
        user: Database username
        password: Database password
        host: Database host
        port: Database port
        database: Database name

    Returns:
        str: Formatted connection string
    """
    return f"postgresql://{user}:{password}@{host}:{port}/{database}"


def get_connection_params() -> dict:
    """
    Get database connection parameters from the environment.

    Uses the DB_* variables when all of them are set, otherwise the parts of
    DATABASE_URL, otherwise local defaults. resolve_database_url only falls
    back to these params when DATABASE_URL is unset.

    Returns:
        dict: Database connection parameters
    """
    db_host = os.getenv("DB_HOST")
    db_port = os.getenv("DB_PORT", "5432")
    db_user = os.getenv("DB_USER")
    db_pass = os.getenv("DB_PASSWORD")
    db_name = os.getenv("DB_NAME")

    if all([db_host, db_user, db_pass, db_name]):
        logger.debug(f"Using DB_* settings: {db_host}:{db_port}/{db_name}")
        return {
            "host": db_host,
            "port": db_port,
            "user": db_user,
            "password": db_pass,
            "database": db_name,
        }

    try:
        parsed = parse_database_url()
        return {
            "host": parsed.hostname or "localhost",
            "port": str(parsed.port or 5432),
            "user": parsed.username or "clouduser",
            "password": parsed.password or "cloudpassword",
            "database": parsed.path.lstrip("/") or "cloudcosts",
        }
    except ValueError:
        return {
            "host": "localhost",
            "port": "5432",
            "user": "clouduser",
            "password": "cloudpassword",
            "database": "cloudcosts",
        }


def resolve_database_url() -> str:
    """DATABASE_URL if set, otherwise a URL built from the connection params."""
    try:
        return get_database_url()
    except ValueError:
        return format_connection_string(**get_connection_params())


def _get_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in _TRUE_VALUES


def get_default_aws_region() -> str:
    return os.getenv("DEFAULT_AWS_REGION", "us-east-1")


def get_default_azure_region() -> str:
    return os.getenv("DEFAULT_AZURE_REGION", "eastus")


def is_aws_live_egress_enabled() -> bool:
    """Whether AWS egress is looked up in the raw store instead of using the fixed price."""
    return _get_bool("AWS_LIVE_EGRESS")


def get_log_level() -> str:
    return os.getenv("LOG_LEVEL", "INFO").upper()


def get_port() -> int:
    return int(os.getenv("PORT", "8002"))


def get_connect_retry_settings() -> tuple:
    """
    Returns:
        tuple: (retry_count, retry_delay_seconds) for the startup connection
    """
    return (
        int(os.getenv("DB_CONNECT_RETRIES", "5")),
        float(os.getenv("DB_CONNECT_RETRY_DELAY", "2")),
    )
