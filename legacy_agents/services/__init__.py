"""Consolidation services for legacy agent records."""

from legacy_agents.services.consolidator import ContributorConsolidator
from legacy_agents.services.resolver import ContributorResolver, to_payload
from legacy_agents.services.views import authors_of, contributors_of

__all__ = ['ContributorConsolidator', 'ContributorResolver', 'to_payload', 'authors_of', 'contributors_of']
