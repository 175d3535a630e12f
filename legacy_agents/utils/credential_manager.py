"""
Credential storage for the legacy SUMARIOPMD database.

Connection metadata (host, database, username) comes from the environment;
the password can be kept in the system keyring instead of a .env file.
Keyring entries use the composite identifier "host|database|username".
"""

import logging
from typing import Optional

import keyring
from keyring.errors import KeyringError, PasswordDeleteError

logger = logging.getLogger(__name__)


DB_SERVICE_NAME = "LegacyAgents_SumarioPMD"


class CredentialStorageError(Exception):
    """Raised when there's a problem storing or reading credentials."""
    pass


def _identifier(host: str, database: str, username: str) -> str:
    return f"{host}|{database}|{username}"


def save_db_credentials(host: str, database: str, username: str, password: str) -> None:
    """
    Save the database password to the system keyring.

    Raises:
        CredentialStorageError: If storage fails
        ValueError: If any parameter is empty
    """
    if not all([host, database, username, password]):
        raise ValueError("All database credentials must be provided")

    try:
        keyring.set_password(DB_SERVICE_NAME, _identifier(host, database, username), password)
        logger.info(f"Database credentials saved: {username}@{host}/{database}")
    except KeyringError as e:
        logger.error(f"Failed to store database credentials: {e}")
        raise CredentialStorageError(f"Failed to store database credentials: {str(e)}") from e


def load_db_password(host: str, database: str, username: str) -> Optional[str]:
    """
    Look up the database password in the system keyring.

    Returns:
        The password, or None if nothing is stored

    Raises:
        CredentialStorageError: If the keyring cannot be read
    """
    identifier = _identifier(host, database, username)
    try:
        password = keyring.get_password(DB_SERVICE_NAME, identifier)
    except KeyringError as e:
        logger.error(f"Failed to load database credentials: {e}")
        raise CredentialStorageError(f"Failed to load database credentials: {str(e)}") from e

    if password is None:
        logger.warning(f"Password not found in keyring for: {identifier}")
    return password


def delete_db_credentials(host: str, database: str, username: str) -> bool:
    """
    Delete the stored database password.

    Returns:
        True if deleted, False if not found

    Raises:
        CredentialStorageError: If deletion fails
    """
    try:
        keyring.delete_password(DB_SERVICE_NAME, _identifier(host, database, username))
        logger.info(f"Database credentials deleted: {username}@{host}/{database}")
        return True
    except PasswordDeleteError:
        logger.warning(f"Database credentials not found: {username}@{host}/{database}")
        return False
    except KeyringError as e:
        logger.error(f"Failed to delete database credentials: {e}")
        raise CredentialStorageError(f"Failed to delete database credentials: {str(e)}") from e
