"""
Contributor consolidation for legacy datasets.

Turns the four legacy row-sets of one resource into an ordered list of
Contributor records:
1. Agents are stably sorted by `order` (duplicate orders keep row order).
2. Roles and affiliations are grouped by agent order in memory.
3. Agents without any role are dropped.
4. Person/Institution is decided by the role taxonomy.
5. Contact status comes from the roles, the contactinfo row keyed to the
   agent, or a name match against the other contactinfo rows.
   A contactinfo row with email, website and position all NULL counts as absent.

Each agent row yields exactly one record; agents with the same name at
different orders are never merged.
"""

import logging
from collections import defaultdict
from typing import Dict, List, Optional, Sequence, Tuple

from legacy_agents.models import (
    PERSON,
    INSTITUTION,
    Affiliation,
    Contributor,
    LegacyAffiliation,
    LegacyAgent,
    LegacyContactInfo,
    LegacySnapshot,
)
from legacy_agents.utils.name_matcher import contact_owner_name, is_contact_match
from legacy_agents.utils.role_mapper import (
    CONTACT_PERSON_SLUG,
    canonical_slugs,
    canonicalize_all,
    is_institutional_role_set,
)

logger = logging.getLogger(__name__)


def group_roles(snapshot: LegacySnapshot) -> Dict[int, List[str]]:
    """Legacy role strings per agent order, in row order."""
    roles_by_order: Dict[int, List[str]] = defaultdict(list)
    for role in snapshot.roles:
        roles_by_order[role.agent_order].append(role.role)
    return roles_by_order


def group_affiliations(snapshot: LegacySnapshot) -> Dict[int, List[LegacyAffiliation]]:
    """Affiliations per agent order, sorted by sub order."""
    affiliations_by_order: Dict[int, List[LegacyAffiliation]] = defaultdict(list)
    for affiliation in snapshot.affiliations:
        if affiliation.name:
            affiliations_by_order[affiliation.agent_order].append(affiliation)
    for affiliations in affiliations_by_order.values():
        affiliations.sort(key=lambda a: a.sub_order)
    return affiliations_by_order


def index_contact_infos(snapshot: LegacySnapshot) -> Dict[int, LegacyContactInfo]:
    """First contactinfo row per agent order."""
    contacts_by_order: Dict[int, LegacyContactInfo] = {}
    for contact in snapshot.contact_infos:
        contacts_by_order.setdefault(contact.agent_order, contact)
    return contacts_by_order


def build_affiliations(affiliations: Sequence[LegacyAffiliation]) -> Tuple[Affiliation, ...]:
    return tuple(Affiliation(value=a.name, ror_id=a.ror_id) for a in affiliations)


def find_contact_info(
    agent: LegacyAgent,
    contacts_by_order: Dict[int, LegacyContactInfo],
    all_contacts: Sequence[LegacyContactInfo]
) -> Optional[LegacyContactInfo]:
    """
    Find the contactinfo row of an agent.

    The direct (resource_id, order) row wins. Only when there is none are the
    dataset's contactinfo rows scanned for a matching owner name.
    """
    direct = contacts_by_order.get(agent.order)
    if direct is not None:
        return direct

    for contact in all_contacts:
        if is_contact_match(agent.name, agent.firstname, agent.lastname, contact_owner_name(contact)):
            logger.debug(
                f"Matched contactinfo of order {contact.agent_order} to agent order {agent.order} "
                f"by name '{agent.name}'"
            )
            return contact
    return None


def extract_orcid(agent: LegacyAgent) -> Optional[str]:
    """ORCID of an agent, only when the identifier type is ORCID."""
    if agent.identifier and (agent.identifiertype or '').upper() == 'ORCID':
        return agent.identifier
    return None


def build_contributor(
    agent: LegacyAgent,
    legacy_roles: Sequence[str],
    affiliations: Sequence[LegacyAffiliation],
    contact: Optional[LegacyContactInfo]
) -> Contributor:
    """Build the finished record of one agent with at least one role."""
    mappings = canonicalize_all(legacy_roles)
    roles = tuple(canonical_slugs(mappings))
    institutional = is_institutional_role_set(mappings)
    is_contact = CONTACT_PERSON_SLUG in roles or contact is not None

    if institutional:
        identity = {
            'type': INSTITUTION,
            'institution_name': agent.name,
        }
    else:
        # Free-text names are not split here; the editor does that.
        identity = {
            'type': PERSON,
            'given_name': agent.firstname,
            'family_name': agent.lastname,
        }

    return Contributor(
        name=agent.name,
        roles=roles,
        affiliations=build_affiliations(affiliations),
        orcid=extract_orcid(agent),
        orcid_type=agent.identifiertype,
        is_contact=is_contact,
        email=contact.email if contact else None,
        website=contact.website if contact else None,
        position=contact.position if contact else None,
        order=agent.order,
        **identity
    )


class ContributorConsolidator:
    """Builds ordered Contributor lists from legacy agent records."""

    def __init__(self, store=None):
        """
        Args:
            store: LegacyRecordStore used by resolve(); not needed for consolidate()
        """
        self.store = store

    def consolidate(self, snapshot: LegacySnapshot) -> List[Contributor]:
        """
        Consolidate the rows of one resource into Contributor records.

        Args:
            snapshot: All legacy rows of the resource

        Returns:
            Contributors in ascending agent order
        """
        roles_by_order = group_roles(snapshot)
        affiliations_by_order = group_affiliations(snapshot)
        contacts_by_order = index_contact_infos(snapshot)

        contributors: List[Contributor] = []
        skipped = 0

        for agent in sorted(snapshot.agents, key=lambda a: a.order):
            legacy_roles = [role for role in roles_by_order.get(agent.order, []) if role.strip()]
            if not legacy_roles:
                logger.debug(f"Skipping agent order {agent.order} ('{agent.name}'): no roles")
                skipped += 1
                continue

            contact = find_contact_info(agent, contacts_by_order, snapshot.contact_infos)
            contributors.append(
                build_contributor(
                    agent,
                    legacy_roles,
                    affiliations_by_order.get(agent.order, []),
                    contact
                )
            )

        logger.info(
            f"Consolidated {len(contributors)} contributors for resource_id {snapshot.resource_id}"
            + (f" ({skipped} agents without roles skipped)" if skipped else "")
        )
        return contributors

    def resolve(self, resource_id: int) -> Optional[List[Contributor]]:
        """
        Fetch and consolidate the contributors of a resource.

        Returns:
            Contributors in agent order, [] for a resource without agents,
            None if the resource does not exist

        Raises:
            ConnectionError: If the legacy database is unreachable
            DatabaseError: If a query fails
        """
        if self.store is None:
            raise ValueError("ContributorConsolidator.resolve() needs a record store")

        snapshot = self.store.fetch_snapshot(resource_id)
        if snapshot is None:
            return None
        return self.consolidate(snapshot)
