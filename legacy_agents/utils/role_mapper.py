"""
Role taxonomy for legacy role strings.

Maps the free-text values of the legacy `role` table onto the canonical role
slugs used by the metadata editor, and tells whether a role can only be held
by an institution.
"""

import logging
import re
from dataclasses import dataclass
from typing import Dict, Iterable, List

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RoleMapping:
    """Canonical form of a legacy role."""

    slug: str
    is_institutional: bool = False


CREATOR_SLUG = "creator"
CONTACT_PERSON_SLUG = "contact-person"
FALLBACK_SLUG = "other"

ROLE_TAXONOMY: Dict[str, RoleMapping] = {
    "Creator": RoleMapping(CREATOR_SLUG),
    "ContactPerson": RoleMapping(CONTACT_PERSON_SLUG),
    "pointOfContact": RoleMapping(CONTACT_PERSON_SLUG),  # GFZ-internal type
    "DataCollector": RoleMapping("data-collector"),
    "DataCurator": RoleMapping("data-curator"),
    "DataManager": RoleMapping("data-manager"),
    "Editor": RoleMapping("editor"),
    "Producer": RoleMapping("producer"),
    "ProjectLeader": RoleMapping("project-leader"),
    "ProjectManager": RoleMapping("project-manager"),
    "ProjectMember": RoleMapping("project-member"),
    "RelatedPerson": RoleMapping("related-person"),
    "Researcher": RoleMapping("researcher"),
    "RightsHolder": RoleMapping("rights-holder"),
    "Supervisor": RoleMapping("supervisor"),
    "Translator": RoleMapping("translator"),
    "WorkPackageLeader": RoleMapping("work-package-leader"),
    "Other": RoleMapping(FALLBACK_SLUG),
    # Institution-only roles
    "Distributor": RoleMapping("distributor", is_institutional=True),
    "HostingInstitution": RoleMapping("hosting-institution", is_institutional=True),
    "RegistrationAgency": RoleMapping("registration-agency", is_institutional=True),
    "RegistrationAuthority": RoleMapping("registration-authority", is_institutional=True),
    "ResearchGroup": RoleMapping("research-group", is_institutional=True),
    "Sponsor": RoleMapping("sponsor", is_institutional=True),
}

_CAMEL_BOUNDARY = re.compile(r'(?<=[a-z0-9])(?=[A-Z])')
_SEPARATORS = re.compile(r'[\s_\-]+')


def derive_slug(legacy_role: str) -> str:
    """
    Derive a slug for a role string that is not in the taxonomy.

    "WorkshopHost" -> "workshop-host", "field assistant" -> "field-assistant".
    A string made only of separators ("--", "_") becomes "other".
    """
    hyphenated = _CAMEL_BOUNDARY.sub('-', legacy_role.strip())
    slug = _SEPARATORS.sub('-', hyphenated).strip('-').lower()
    return slug or FALLBACK_SLUG


def canonicalize(legacy_role: str) -> RoleMapping:
    """
    Map a legacy role string to its canonical form.

    Never raises: unknown roles get a derived slug and are treated as
    non-institutional.
    """
    key = (legacy_role or '').strip()
    mapping = ROLE_TAXONOMY.get(key)
    if mapping is not None:
        return mapping

    slug = derive_slug(key)
    logger.warning(f"Unknown legacy role '{legacy_role}', using derived slug '{slug}'")
    return RoleMapping(slug)


def canonicalize_all(legacy_roles: Iterable[str]) -> List[RoleMapping]:
    """Canonicalize every role of an agent once, keeping row order."""
    return [canonicalize(role) for role in legacy_roles]


def canonical_slugs(mappings: Iterable[RoleMapping]) -> List[str]:
    """Slugs in first-seen order, without duplicates."""
    slugs: List[str] = []
    for mapping in mappings:
        if mapping.slug not in slugs:
            slugs.append(mapping.slug)
    return slugs


def is_institutional_role_set(mappings: Iterable[RoleMapping]) -> bool:
    """True if any of the roles can only be held by an institution."""
    return any(mapping.is_institutional for mapping in mappings)
