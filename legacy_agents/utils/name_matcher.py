"""
Name matching between resourceagent rows and contactinfo owners.

Legacy contactinfo rows are keyed by resourceagent order, and some of them
point at the wrong order. When the direct key lookup fails, the owner name of
each contactinfo row is compared against the agent's name.

Only exact comparison after normalization is done. Two forms are compared:
1. trimmed, whitespace collapsed, case-folded
2. the same with all commas removed ("Uhlemann, Steffi" == "Uhlemann Steffi")
"""

import re
from typing import Optional

from legacy_agents.models import LegacyContactInfo

_WHITESPACE = re.compile(r'\s+')


def normalize_name(name: Optional[str]) -> str:
    """Trim, collapse internal whitespace and case-fold."""
    if not name:
        return ''
    return _WHITESPACE.sub(' ', name).strip().casefold()


def normalize_name_without_commas(name: Optional[str]) -> str:
    """normalize_name() with every comma removed first."""
    if not name:
        return ''
    return normalize_name(name.replace(',', ' '))


def structured_name(given: Optional[str], family: Optional[str]) -> Optional[str]:
    """Build "family, given" or None when either part is missing."""
    given = (given or '').strip()
    family = (family or '').strip()
    if not given or not family:
        return None
    return f"{family}, {given}"


def contact_owner_name(contact: LegacyContactInfo) -> Optional[str]:
    """Free-text owner name of a contactinfo row, falling back to its structured fields."""
    if contact.owner_name:
        return contact.owner_name
    if contact.owner_lastname and contact.owner_firstname:
        return structured_name(contact.owner_firstname, contact.owner_lastname)
    return contact.owner_lastname


def is_contact_match(
    agent_name: Optional[str],
    agent_given: Optional[str],
    agent_family: Optional[str],
    contact_owner: Optional[str]
) -> bool:
    """
    Decide whether a contactinfo owner is the same person as an agent.

    If the agent has given and family name, "family, given" is compared,
    otherwise the free-text name. Empty names never match.
    """
    candidate = structured_name(agent_given, agent_family) or agent_name

    normalized_candidate = normalize_name(candidate)
    normalized_owner = normalize_name(contact_owner)
    if not normalized_candidate or not normalized_owner:
        return False

    if normalized_candidate == normalized_owner:
        return True

    return normalize_name_without_commas(candidate) == normalize_name_without_commas(contact_owner)
