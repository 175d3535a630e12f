"""
Legacy Record Store for the SUMARIOPMD database - PyMySQL Version.

Read-only access to the agent metadata of legacy datasets. Nothing in this
module writes to the legacy database.

Table Structure:
- resource: one row per dataset (id)
- resourceagent: contributor slots (resource_id, order, name, firstname, lastname, identifier)
- role: roles per resourceagent (resourceagent_resource_id, resourceagent_order, role)
- affiliation: affiliations per resourceagent, ordered by its own `order` column
- contactinfo: email/website/position keyed by (resourceagent_resource_id, resourceagent_order)
"""

import logging
from typing import Optional, List, Dict, Tuple, Any
from contextlib import contextmanager

import pymysql
from pymysql.cursors import DictCursor

from legacy_agents.models import (
    LegacyAgent,
    LegacyRole,
    LegacyAffiliation,
    LegacyContactInfo,
    LegacySnapshot,
)

logger = logging.getLogger(__name__)


class DatabaseError(Exception):
    """Base exception for database operations."""
    pass


class ConnectionError(DatabaseError):
    """Exception raised when database connection fails."""
    pass


AGENTS_QUERY = """
    SELECT
        ra.resource_id,
        ra.order AS `order`,
        ra.name,
        ra.firstname,
        ra.lastname,
        ra.identifier,
        ra.identifiertype
    FROM resourceagent ra
    WHERE ra.resource_id = %s
    ORDER BY ra.order ASC
"""

ROLES_QUERY = """
    SELECT
        r.resourceagent_resource_id,
        r.resourceagent_order,
        r.role
    FROM role r
    WHERE r.resourceagent_resource_id = %s
        {agent_filter}
    ORDER BY r.resourceagent_order ASC
"""

AFFILIATIONS_QUERY = """
    SELECT
        a.resourceagent_resource_id,
        a.resourceagent_order,
        a.order AS `order`,
        a.name,
        a.identifier,
        a.identifiertype
    FROM affiliation a
    WHERE a.resourceagent_resource_id = %s
        {agent_filter}
        AND a.name IS NOT NULL
        AND a.name != ''
    ORDER BY a.resourceagent_order ASC, a.order ASC
"""

# LEFT JOIN: contact rows keyed to an order without a resourceagent row are
# still returned, they just carry no owner name.
CONTACTINFO_QUERY = """
    SELECT
        ci.resourceagent_resource_id,
        ci.resourceagent_order,
        ci.email,
        ci.website,
        ci.position,
        ra.name,
        ra.firstname,
        ra.lastname
    FROM contactinfo ci
    LEFT JOIN resourceagent ra
        ON ra.resource_id = ci.resourceagent_resource_id
        AND ra.order = ci.resourceagent_order
    WHERE ci.resourceagent_resource_id = %s
        {agent_filter}
        AND (ci.email IS NOT NULL OR ci.website IS NOT NULL OR ci.position IS NOT NULL)
    ORDER BY ci.resourceagent_order ASC
"""


def _build_query(template: str, alias: str, by_agent: bool) -> str:
    """Fill in the optional per-agent filter of a query template."""
    agent_filter = f"AND {alias}.resourceagent_order = %s" if by_agent else ""
    return template.format(agent_filter=agent_filter)


class LegacyRecordStore:
    """
    Read-only client for the legacy SUMARIOPMD agent tables.

    Offers per-agent lookups (roles_for, affiliations_for, contactinfo_for)
    and fetch_snapshot(), which loads every row-set of a resource on one
    connection so consolidation never has to go back to the database.
    """

    def __init__(
        self,
        host: str,
        database: str,
        username: str,
        password: str,
        port: int = 3306,
        connect_timeout: int = 10
    ):
        """
        Initialize store with connection parameters.

        Args:
            host: Database host
            database: Database name (e.g., sumario-pmd)
            username: Database username
            password: Database password
            port: Database port
            connect_timeout: Seconds before a connection attempt is abandoned

        No connection is opened here; connections are created on demand.
        """
        self.host = host
        self.database = database
        self.username = username
        self.password = password
        self.port = port
        self.connect_timeout = connect_timeout

        logger.info(f"LegacyRecordStore initialized for {self.host}/{self.database} using PyMySQL")

    @classmethod
    def from_settings(cls, settings) -> 'LegacyRecordStore':
        """Create a store from a DatabaseSettings instance."""
        return cls(
            host=settings.host,
            database=settings.database,
            username=settings.username,
            password=settings.password,
            port=settings.port,
            connect_timeout=settings.connect_timeout,
        )

    @contextmanager
    def get_connection(self):
        """
        Context manager for getting a database connection.

        Yields:
            connection: PyMySQL connection

        Raises:
            ConnectionError: If connection cannot be established
        """
        connection = None
        try:
            connection = pymysql.connect(
                host=self.host,
                port=self.port,
                database=self.database,
                user=self.username,
                password=self.password,
                connect_timeout=self.connect_timeout,
                charset='utf8mb4',
                cursorclass=DictCursor
            )
        except pymysql.Error as e:
            # Only connection errors here, query errors are raised as DatabaseError
            logger.error(f"Failed to connect to database: {e}")
            raise ConnectionError(f"Database connection failed: {e}") from e

        try:
            yield connection
        finally:
            if connection:
                connection.close()

    def test_connection(self) -> Tuple[bool, str]:
        """
        Test database connection.

        Returns:
            Tuple of (success: bool, message: str)
        """
        try:
            with self.get_connection() as conn:
                with conn.cursor() as cursor:
                    cursor.execute("SELECT VERSION()")
                    result = cursor.fetchone()
                    version = result['VERSION()']
                    message = f"✓ Connected to MySQL {version}"
                    logger.info(message)
                    return True, message
        except (DatabaseError, pymysql.Error) as e:
            message = f"✗ Connection failed: {str(e)}"
            logger.error(message)
            return False, message

    def _fetch_all(self, query: str, params: tuple, what: str) -> List[Dict[str, Any]]:
        """Run one read query on a fresh connection."""
        try:
            with self.get_connection() as conn:
                with conn.cursor() as cursor:
                    cursor.execute(query, params)
                    return list(cursor.fetchall())
        except pymysql.Error as e:
            logger.error(f"Database error fetching {what}: {e}")
            raise DatabaseError(f"Failed to fetch {what}: {e}") from e

    def dataset_exists(self, resource_id: int) -> bool:
        """
        Check whether a resource row exists for the given id.

        Raises:
            DatabaseError: If query fails
        """
        rows = self._fetch_all(
            "SELECT id FROM resource WHERE id = %s LIMIT 1",
            (resource_id,),
            f"resource {resource_id}"
        )
        if not rows:
            logger.warning(f"No resource found for resource_id {resource_id}")
        return bool(rows)

    def agents_for(self, resource_id: int) -> List[LegacyAgent]:
        """
        Fetch all resourceagent rows of a resource, ordered by `order`.

        Raises:
            DatabaseError: If query fails
        """
        rows = self._fetch_all(AGENTS_QUERY, (resource_id,), "resourceagents")
        logger.info(f"Fetched {len(rows)} resourceagents for resource_id {resource_id}")
        return [LegacyAgent.from_row(row) for row in rows]

    def roles_for(self, resource_id: int, agent_order: int) -> List[LegacyRole]:
        """Fetch the role rows of one resourceagent."""
        query = _build_query(ROLES_QUERY, 'r', by_agent=True)
        rows = self._fetch_all(query, (resource_id, agent_order), "roles")
        return [LegacyRole.from_row(row) for row in rows]

    def affiliations_for(self, resource_id: int, agent_order: int) -> List[LegacyAffiliation]:
        """Fetch the affiliations of one resourceagent, ordered by their sub order."""
        query = _build_query(AFFILIATIONS_QUERY, 'a', by_agent=True)
        rows = self._fetch_all(query, (resource_id, agent_order), "affiliations")
        return [LegacyAffiliation.from_row(row) for row in rows]

    def contactinfo_for(self, resource_id: int, agent_order: int) -> Optional[LegacyContactInfo]:
        """
        Fetch the contactinfo row keyed to one resourceagent.

        Returns:
            LegacyContactInfo or None if there is no row with any contact data
        """
        query = _build_query(CONTACTINFO_QUERY, 'ci', by_agent=True)
        rows = self._fetch_all(query, (resource_id, agent_order), "contactinfo")
        if not rows:
            logger.debug(f"No contactinfo for resource_id {resource_id}, order {agent_order}")
            return None
        return LegacyContactInfo.from_row(rows[0])

    def all_contactinfo_for(self, resource_id: int) -> List[LegacyContactInfo]:
        """
        Fetch every contactinfo row of a resource, regardless of role.

        Used by the name-matching fallback when the direct key join finds nothing.
        """
        query = _build_query(CONTACTINFO_QUERY, 'ci', by_agent=False)
        rows = self._fetch_all(query, (resource_id,), "contactinfo")
        logger.info(f"Fetched {len(rows)} contactinfo entries for resource_id {resource_id}")
        return [LegacyContactInfo.from_row(row) for row in rows]

    def fetch_snapshot(self, resource_id: int) -> Optional[LegacySnapshot]:
        """
        Load all agent row-sets of a resource on a single connection.

        Args:
            resource_id: Resource ID from resource table

        Returns:
            LegacySnapshot, or None if the resource does not exist

        Raises:
            ConnectionError: If the database is unreachable
            DatabaseError: If any query fails
        """
        try:
            with self.get_connection() as conn:
                with conn.cursor() as cursor:
                    cursor.execute("SELECT id FROM resource WHERE id = %s LIMIT 1", (resource_id,))
                    if cursor.fetchone() is None:
                        logger.warning(f"No resource found for resource_id {resource_id}")
                        return None

                    cursor.execute(AGENTS_QUERY, (resource_id,))
                    agents = tuple(LegacyAgent.from_row(row) for row in cursor.fetchall())

                    cursor.execute(_build_query(ROLES_QUERY, 'r', by_agent=False), (resource_id,))
                    roles = tuple(LegacyRole.from_row(row) for row in cursor.fetchall())

                    cursor.execute(_build_query(AFFILIATIONS_QUERY, 'a', by_agent=False), (resource_id,))
                    affiliations = tuple(LegacyAffiliation.from_row(row) for row in cursor.fetchall())

                    cursor.execute(_build_query(CONTACTINFO_QUERY, 'ci', by_agent=False), (resource_id,))
                    contact_infos = tuple(LegacyContactInfo.from_row(row) for row in cursor.fetchall())

        except pymysql.Error as e:
            logger.error(f"Database error fetching agent records for resource_id {resource_id}: {e}")
            raise DatabaseError(f"Failed to fetch agent records: {e}") from e

        logger.info(
            f"Fetched snapshot for resource_id {resource_id}: {len(agents)} agents, "
            f"{len(roles)} roles, {len(affiliations)} affiliations, {len(contact_infos)} contactinfo entries"
        )
        return LegacySnapshot(
            resource_id=resource_id,
            agents=agents,
            roles=roles,
            affiliations=affiliations,
            contact_infos=contact_infos,
        )
