"""Database access for the legacy SUMARIOPMD record store."""

from legacy_agents.db.legacy_store import (
    LegacyRecordStore,
    LegacySnapshot,
    DatabaseError,
    ConnectionError,
)

__all__ = ['LegacyRecordStore', 'LegacySnapshot', 'DatabaseError', 'ConnectionError']
