"""Tests for the legacy role taxonomy."""

import logging

import pytest

from legacy_agents.utils.role_mapper import (
    ROLE_TAXONOMY,
    RoleMapping,
    canonical_slugs,
    canonicalize,
    canonicalize_all,
    derive_slug,
    is_institutional_role_set,
)


class TestCanonicalize:
    """Tests for canonicalize()."""

    @pytest.mark.parametrize("legacy, slug", [
        ("DataCurator", "data-curator"),
        ("DataManager", "data-manager"),
        ("ContactPerson", "contact-person"),
        ("pointOfContact", "contact-person"),
        ("Creator", "creator"),
        ("Distributor", "distributor"),
        ("HostingInstitution", "hosting-institution"),
        ("WorkPackageLeader", "work-package-leader"),
    ])
    def test_known_roles(self, legacy, slug):
        assert canonicalize(legacy).slug == slug

    def test_surrounding_whitespace_is_ignored(self):
        assert canonicalize("  Creator ") == RoleMapping("creator")

    @pytest.mark.parametrize("legacy", ["Distributor", "HostingInstitution"])
    def test_institution_only_roles(self, legacy):
        assert canonicalize(legacy).is_institutional is True

    @pytest.mark.parametrize("legacy", ["Creator", "ContactPerson", "pointOfContact", "DataCurator"])
    def test_person_roles_are_not_institutional(self, legacy):
        assert canonicalize(legacy).is_institutional is False

    def test_unknown_role_degrades_to_derived_slug(self, caplog):
        """Unknown roles never raise."""
        with caplog.at_level(logging.WARNING):
            mapping = canonicalize("FieldAssistant")

        assert mapping == RoleMapping("field-assistant", is_institutional=False)
        assert "Unknown legacy role" in caplog.text

    def test_separator_only_role_keeps_a_slug(self):
        assert canonicalize("--") == RoleMapping("other")

    def test_every_taxonomy_slug_is_lowercase_hyphenated(self):
        for mapping in ROLE_TAXONOMY.values():
            assert mapping.slug == mapping.slug.lower()
            assert " " not in mapping.slug


class TestDeriveSlug:
    """Tests for derive_slug()."""

    @pytest.mark.parametrize("raw, slug", [
        ("WorkshopHost", "workshop-host"),
        ("field assistant", "field-assistant"),
        ("Lab_Technician", "lab-technician"),
        ("  sampler  ", "sampler"),
        ("GIS Expert", "gis-expert"),
        ("--", "other"),
        ("_", "other"),
    ])
    def test_derivation(self, raw, slug):
        assert derive_slug(raw) == slug


class TestRoleSets:
    """Tests for canonical_slugs() and is_institutional_role_set()."""

    def test_slugs_keep_row_order(self):
        mappings = canonicalize_all(["Creator", "ContactPerson"])
        assert canonical_slugs(mappings) == ["creator", "contact-person"]

    def test_slugs_are_deduplicated_within_agent(self):
        """pointOfContact and ContactPerson collapse into one slug."""
        mappings = canonicalize_all(["pointOfContact", "Creator", "ContactPerson"])
        assert canonical_slugs(mappings) == ["contact-person", "creator"]

    def test_any_institutional_role_makes_institution(self):
        assert is_institutional_role_set(canonicalize_all(["DataManager", "HostingInstitution"])) is True

    def test_person_role_set(self):
        assert is_institutional_role_set(canonicalize_all(["Creator", "DataManager"])) is False

    def test_empty_role_set(self):
        assert is_institutional_role_set([]) is False

    def test_unknown_role_warns_once_per_row(self, caplog):
        with caplog.at_level(logging.WARNING, logger="legacy_agents.utils.role_mapper"):
            mappings = canonicalize_all(["FieldAssistant", "Creator"])
            canonical_slugs(mappings)
            is_institutional_role_set(mappings)

        warnings = [r for r in caplog.records if "Unknown legacy role" in r.getMessage()]
        assert len(warnings) == 1
