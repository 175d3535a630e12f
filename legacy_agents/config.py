"""
Connection settings for the legacy SUMARIOPMD database.

Settings are read from the environment after loading a .env file:
- DB_SUMARIOPMD_HOST, DB_SUMARIOPMD_NAME, DB_SUMARIOPMD_USER (required)
- DB_SUMARIOPMD_PASSWORD (falls back to the system keyring)
- DB_SUMARIOPMD_PORT (default 3306)
- DB_SUMARIOPMD_CONNECT_TIMEOUT (seconds, default 10)
"""

import logging
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from legacy_agents.utils.credential_manager import load_db_password

logger = logging.getLogger(__name__)


DEFAULT_PORT = 3306
DEFAULT_CONNECT_TIMEOUT = 10


class ConfigurationError(Exception):
    """Raised when the database settings are incomplete or invalid."""
    pass


@dataclass(frozen=True)
class DatabaseSettings:
    """Connection parameters for the legacy database."""

    host: str
    database: str
    username: str
    password: str
    port: int = DEFAULT_PORT
    connect_timeout: int = DEFAULT_CONNECT_TIMEOUT

    def __repr__(self) -> str:
        return (
            f"DatabaseSettings(host={self.host!r}, database={self.database!r}, "
            f"username={self.username!r}, port={self.port}, connect_timeout={self.connect_timeout})"
        )


def _int_setting(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError as e:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from e
    if value <= 0:
        raise ConfigurationError(f"{name} must be positive, got {value}")
    return value


def load_settings(env_file: Optional[str] = None) -> DatabaseSettings:
    """
    Load database settings from the environment.

    Args:
        env_file: Path to a .env file; the default lookup is used when None

    Returns:
        DatabaseSettings

    Raises:
        ConfigurationError: If a required value is missing or invalid
    """
    load_dotenv(dotenv_path=env_file)

    host = os.getenv('DB_SUMARIOPMD_HOST')
    database = os.getenv('DB_SUMARIOPMD_NAME')
    username = os.getenv('DB_SUMARIOPMD_USER')

    missing = [
        name for name, value in (
            ('DB_SUMARIOPMD_HOST', host),
            ('DB_SUMARIOPMD_NAME', database),
            ('DB_SUMARIOPMD_USER', username),
        ) if not value
    ]
    if missing:
        raise ConfigurationError(f"Missing database settings: {', '.join(missing)}")

    password = os.getenv('DB_SUMARIOPMD_PASSWORD')
    if not password:
        logger.debug("DB_SUMARIOPMD_PASSWORD not set, looking up keyring")
        password = load_db_password(host, database, username)
    if not password:
        raise ConfigurationError(
            f"No password for {username}@{host}/{database}: set DB_SUMARIOPMD_PASSWORD or store it in the keyring"
        )

    settings = DatabaseSettings(
        host=host,
        database=database,
        username=username,
        password=password,
        port=_int_setting('DB_SUMARIOPMD_PORT', DEFAULT_PORT),
        connect_timeout=_int_setting('DB_SUMARIOPMD_CONNECT_TIMEOUT', DEFAULT_CONNECT_TIMEOUT),
    )
    logger.info(f"Database settings loaded: {username}@{host}:{settings.port}/{database}")
    return settings
