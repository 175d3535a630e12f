"""
Entry points for resolving the authors and contributors of a legacy dataset.

Both entry points return None when the dataset does not exist and an empty
list when it exists without matching agents. Connection and query failures
are raised, never turned into empty results.
"""

import logging
from typing import Any, Dict, List, Optional

from legacy_agents.models import Author, Contributor, records_to_dicts
from legacy_agents.services.consolidator import ContributorConsolidator
from legacy_agents.services.views import authors_of, contributors_of

logger = logging.getLogger(__name__)


def validate_dataset_id(dataset_id: Any) -> int:
    """
    Check that a dataset id is a positive integer.

    Raises:
        ValueError: For anything else (bool included)
    """
    if isinstance(dataset_id, bool) or not isinstance(dataset_id, int) or dataset_id <= 0:
        raise ValueError(f"Dataset id must be a positive integer, got {dataset_id!r}")
    return dataset_id


class ContributorResolver:
    """Resolves author and contributor views for legacy datasets."""

    def __init__(self, store):
        """
        Args:
            store: LegacyRecordStore to read the agent tables from
        """
        self.store = store
        self.consolidator = ContributorConsolidator(store)

    def resolve_contributors(self, dataset_id: int) -> Optional[List[Contributor]]:
        """
        All contributors of a dataset, in agent order.

        Returns:
            List of Contributor, or None if the dataset does not exist

        Raises:
            ValueError: If dataset_id is not a positive integer
            ConnectionError: If the legacy database is unreachable
            DatabaseError: If a query fails
        """
        validate_dataset_id(dataset_id)
        contributors = self.consolidator.resolve(dataset_id)
        if contributors is None:
            logger.warning(f"Dataset {dataset_id} not found")
            return None
        return contributors_of(contributors)

    def resolve_authors(self, dataset_id: int) -> Optional[List[Author]]:
        """
        Creators of a dataset in the author shape, in agent order.

        Returns:
            List of Author, or None if the dataset does not exist

        Raises:
            ValueError: If dataset_id is not a positive integer
            ConnectionError: If the legacy database is unreachable
            DatabaseError: If a query fails
        """
        validate_dataset_id(dataset_id)
        contributors = self.consolidator.resolve(dataset_id)
        if contributors is None:
            logger.warning(f"Dataset {dataset_id} not found")
            return None
        authors = authors_of(contributors)
        logger.info(f"Resolved {len(authors)} authors for dataset {dataset_id}")
        return authors


def to_payload(records: List[Any]) -> List[Dict[str, Any]]:
    """Plain dictionaries for the serialization layer."""
    return records_to_dicts(records)
