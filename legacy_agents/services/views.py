"""
Author and contributor views over consolidated records.

The author view assumes every Creator is a person. That holds for the legacy
corpus; an institutional Creator would lose its institution name here.
"""

from typing import Iterable, List

from legacy_agents.models import Author, Contributor
from legacy_agents.utils.role_mapper import CREATOR_SLUG


def to_author(contributor: Contributor) -> Author:
    """Reshape a Creator record into the author shape."""
    return Author(
        name=contributor.name,
        roles=contributor.roles,
        given_name=contributor.given_name,
        family_name=contributor.family_name,
        affiliations=contributor.affiliations,
        orcid=contributor.orcid,
        orcid_type=contributor.orcid_type,
        is_contact=contributor.is_contact,
        email=contributor.email,
        website=contributor.website,
    )


def authors_of(contributors: Iterable[Contributor]) -> List[Author]:
    """Creators only, in the order given."""
    return [to_author(c) for c in contributors if c.has_role(CREATOR_SLUG)]


def contributors_of(contributors: Iterable[Contributor]) -> List[Contributor]:
    """
    Every record, in the order given.

    Creators that also hold other roles stay in, so the same agent can show up
    in both views.
    """
    return [c for c in contributors if c.roles]
