"""
Tests for database credential storage in the keyring.
"""

import pytest
from unittest.mock import patch

from keyring.errors import KeyringError, PasswordDeleteError

from legacy_agents.utils.credential_manager import (
    DB_SERVICE_NAME,
    CredentialStorageError,
    delete_db_credentials,
    load_db_password,
    save_db_credentials,
)


@pytest.fixture
def mock_keyring():
    """Mock keyring module."""
    with patch('legacy_agents.utils.credential_manager.keyring') as mock:
        yield mock


class TestSaveDBCredentials:
    """Tests for save_db_credentials function."""

    def test_save_valid_credentials(self, mock_keyring):
        save_db_credentials("db-host", "sumario-pmd", "reader", "secret")

        mock_keyring.set_password.assert_called_once_with(
            DB_SERVICE_NAME, "db-host|sumario-pmd|reader", "secret"
        )

    def test_save_empty_password_raises_error(self, mock_keyring):
        with pytest.raises(ValueError, match="All database credentials must be provided"):
            save_db_credentials("db-host", "sumario-pmd", "reader", "")

        mock_keyring.set_password.assert_not_called()

    def test_save_keyring_failure(self, mock_keyring):
        mock_keyring.set_password.side_effect = KeyringError("No backend")

        with pytest.raises(CredentialStorageError, match="Failed to store"):
            save_db_credentials("db-host", "sumario-pmd", "reader", "secret")


class TestLoadDBPassword:
    """Tests for load_db_password function."""

    def test_load_existing(self, mock_keyring):
        mock_keyring.get_password.return_value = "secret"

        assert load_db_password("db-host", "sumario-pmd", "reader") == "secret"
        mock_keyring.get_password.assert_called_once_with(DB_SERVICE_NAME, "db-host|sumario-pmd|reader")

    def test_load_missing(self, mock_keyring):
        mock_keyring.get_password.return_value = None

        assert load_db_password("db-host", "sumario-pmd", "reader") is None

    def test_load_keyring_failure(self, mock_keyring):
        mock_keyring.get_password.side_effect = KeyringError("Locked")

        with pytest.raises(CredentialStorageError, match="Failed to load"):
            load_db_password("db-host", "sumario-pmd", "reader")


class TestDeleteDBCredentials:
    """Tests for delete_db_credentials function."""

    def test_delete_existing(self, mock_keyring):
        assert delete_db_credentials("db-host", "sumario-pmd", "reader") is True

    def test_delete_missing(self, mock_keyring):
        mock_keyring.delete_password.side_effect = PasswordDeleteError("not found")

        assert delete_db_credentials("db-host", "sumario-pmd", "reader") is False

    def test_delete_keyring_failure(self, mock_keyring):
        mock_keyring.delete_password.side_effect = KeyringError("Locked")

        with pytest.raises(CredentialStorageError, match="Failed to delete"):
            delete_db_credentials("db-host", "sumario-pmd", "reader")
