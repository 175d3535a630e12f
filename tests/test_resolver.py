"""Tests for ContributorResolver entry points."""

import pytest
from unittest.mock import Mock

from legacy_agents.db.legacy_store import ConnectionError, DatabaseError
from legacy_agents.models import (
    LegacyAffiliation,
    LegacyAgent,
    LegacyContactInfo,
    LegacyRole,
    LegacySnapshot,
)
from legacy_agents.services.resolver import ContributorResolver, to_payload, validate_dataset_id


def _snapshot():
    """Creator + contact, free-text creator, hosting institution, and a drifted contact row."""
    agents = (
        LegacyAgent(42, 1, "Mikhailova, Natalya", "Natalya", "Mikhailova"),
        LegacyAgent(42, 2, "Poleshko, N.N."),
        LegacyAgent(42, 3, "GFZ Data Services"),
        LegacyAgent(42, 4, "Uhlemann, Steffi"),
        LegacyAgent(42, 5, "Uhlemann Steffi"),
    )
    roles = (
        LegacyRole(42, 1, "Creator"),
        LegacyRole(42, 1, "ContactPerson"),
        LegacyRole(42, 2, "Creator"),
        LegacyRole(42, 3, "HostingInstitution"),
        LegacyRole(42, 4, "DataCurator"),
        LegacyRole(42, 5, "pointOfContact"),
    )
    affiliations = (
        LegacyAffiliation(42, 1, 1, "Institute of Geophysical Research"),
    )
    contacts = (
        LegacyContactInfo(42, 5, email="steffi@example.org", owner_name="Uhlemann Steffi"),
    )
    return LegacySnapshot(42, agents, roles, affiliations, contacts)


@pytest.fixture
def store():
    store = Mock()
    store.fetch_snapshot.return_value = _snapshot()
    return store


class TestResolveContributors:
    """Tests for resolve_contributors()."""

    def test_all_agents_with_roles_in_order(self, store):
        contributors = ContributorResolver(store).resolve_contributors(42)

        assert [c.order for c in contributors] == [1, 2, 3, 4, 5]

    def test_drifted_contact_row_is_found_by_name(self, store):
        contributors = ContributorResolver(store).resolve_contributors(42)

        curator = contributors[3]
        assert curator.roles == ("data-curator",)
        assert curator.is_contact is True
        assert curator.email == "steffi@example.org"

    def test_not_found_is_none(self, store):
        store.fetch_snapshot.return_value = None

        assert ContributorResolver(store).resolve_contributors(999) is None

    def test_empty_dataset_is_empty_list(self, store):
        store.fetch_snapshot.return_value = LegacySnapshot(7)

        assert ContributorResolver(store).resolve_contributors(7) == []

    def test_connection_failure_propagates(self, store):
        store.fetch_snapshot.side_effect = ConnectionError("Database connection failed")

        with pytest.raises(ConnectionError):
            ContributorResolver(store).resolve_contributors(42)

    def test_query_failure_propagates(self, store):
        store.fetch_snapshot.side_effect = DatabaseError("Failed to fetch agent records")

        with pytest.raises(DatabaseError):
            ContributorResolver(store).resolve_contributors(42)


class TestResolveAuthors:
    """Tests for resolve_authors()."""

    def test_only_creators(self, store):
        authors = ContributorResolver(store).resolve_authors(42)

        assert [a.name for a in authors] == ["Mikhailova, Natalya", "Poleshko, N.N."]
        assert all("creator" in a.roles for a in authors)

    def test_author_payload(self, store):
        payload = to_payload(ContributorResolver(store).resolve_authors(42))

        assert payload[0]["givenName"] == "Natalya"
        assert payload[0]["familyName"] == "Mikhailova"
        assert payload[0]["roles"] == ["creator", "contact-person"]
        assert payload[0]["isContact"] is True
        assert payload[0]["affiliations"] == [{"value": "Institute of Geophysical Research", "rorId": None}]
        assert payload[1]["isContact"] is False
        assert payload[1]["affiliations"] == []
        assert "institutionName" not in payload[0]

    def test_not_found_is_none(self, store):
        store.fetch_snapshot.return_value = None

        assert ContributorResolver(store).resolve_authors(999) is None


class TestValidateDatasetId:
    """Tests for validate_dataset_id()."""

    @pytest.mark.parametrize("bad", [0, -1, "42", 4.2, None, True])
    def test_rejects_non_positive_integers(self, bad):
        with pytest.raises(ValueError, match="positive integer"):
            validate_dataset_id(bad)

    def test_rejected_before_any_query(self, store):
        with pytest.raises(ValueError):
            ContributorResolver(store).resolve_contributors(0)

        store.fetch_snapshot.assert_not_called()

    def test_accepts_positive_integer(self):
        assert validate_dataset_id(42) == 42
