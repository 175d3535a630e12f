"""
Record types for legacy agent rows and the resolved editor records.

The legacy side mirrors the four SUMARIOPMD tables as they come out of a
PyMySQL DictCursor:
- resourceagent: one row per contributor slot (name, firstname, lastname, identifier)
- role: one row per role of a resourceagent
- affiliation: ordered affiliations of a resourceagent
- contactinfo: email/website/position, keyed by resourceagent order

The output side is what the metadata editor consumes (camelCase payload keys).
All records are immutable.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple


PERSON = "Person"
INSTITUTION = "Institution"


def _clean(value: Any) -> Optional[str]:
    """Return a stripped string or None for NULL/empty database values."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


@dataclass(frozen=True)
class LegacyAgent:
    """A resourceagent row."""

    resource_id: int
    order: int
    name: str
    firstname: Optional[str] = None
    lastname: Optional[str] = None
    identifier: Optional[str] = None
    identifiertype: Optional[str] = None

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> 'LegacyAgent':
        """Create instance from a DictCursor row."""
        return cls(
            resource_id=row['resource_id'],
            order=row['order'],
            name=(row.get('name') or '').strip(),
            firstname=_clean(row.get('firstname')),
            lastname=_clean(row.get('lastname')),
            identifier=_clean(row.get('identifier')),
            identifiertype=_clean(row.get('identifiertype')),
        )


@dataclass(frozen=True)
class LegacyRole:
    """A role row linked to a resourceagent by (resource_id, order)."""

    resource_id: int
    agent_order: int
    role: str

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> 'LegacyRole':
        return cls(
            resource_id=row['resourceagent_resource_id'],
            agent_order=row['resourceagent_order'],
            role=(row.get('role') or '').strip(),
        )


@dataclass(frozen=True)
class LegacyAffiliation:
    """An affiliation row; sub_order is the affiliation's own `order` column."""

    resource_id: int
    agent_order: int
    sub_order: int
    name: str
    identifier: Optional[str] = None
    identifiertype: Optional[str] = None

    @property
    def ror_id(self) -> Optional[str]:
        """ROR id, only when the identifier type says so."""
        if self.identifier and (self.identifiertype or '').upper() == 'ROR':
            return self.identifier
        return None

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> 'LegacyAffiliation':
        return cls(
            resource_id=row['resourceagent_resource_id'],
            agent_order=row['resourceagent_order'],
            sub_order=row['order'] if row.get('order') is not None else 0,
            name=(row.get('name') or '').strip(),
            identifier=_clean(row.get('identifier')),
            identifiertype=_clean(row.get('identifiertype')),
        )


@dataclass(frozen=True)
class LegacyContactInfo:
    """
    A contactinfo row together with the name of the agent it is keyed to.

    The owner_* fields come from the resourceagent row at the same
    (resource_id, order). Because of historical data entry drift that row is
    not always the person the contact info belongs to.
    """

    resource_id: int
    agent_order: int
    email: Optional[str] = None
    website: Optional[str] = None
    position: Optional[str] = None
    owner_name: Optional[str] = None
    owner_firstname: Optional[str] = None
    owner_lastname: Optional[str] = None

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> 'LegacyContactInfo':
        return cls(
            resource_id=row['resourceagent_resource_id'],
            agent_order=row['resourceagent_order'],
            email=_clean(row.get('email')),
            website=_clean(row.get('website')),
            position=_clean(row.get('position')),
            owner_name=_clean(row.get('name')),
            owner_firstname=_clean(row.get('firstname')),
            owner_lastname=_clean(row.get('lastname')),
        )


@dataclass(frozen=True)
class LegacySnapshot:
    """All legacy rows of one resource, fetched up front on a single connection."""

    resource_id: int
    agents: Tuple[LegacyAgent, ...] = ()
    roles: Tuple[LegacyRole, ...] = ()
    affiliations: Tuple[LegacyAffiliation, ...] = ()
    contact_infos: Tuple[LegacyContactInfo, ...] = ()


@dataclass(frozen=True)
class Affiliation:
    """Resolved affiliation."""

    value: str
    ror_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {'value': self.value, 'rorId': self.ror_id}


@dataclass(frozen=True)
class Contributor:
    """A consolidated contributor: one per resourceagent row with at least one role."""

    type: str
    name: str
    roles: Tuple[str, ...]
    given_name: Optional[str] = None
    family_name: Optional[str] = None
    institution_name: Optional[str] = None
    affiliations: Tuple[Affiliation, ...] = field(default_factory=tuple)
    orcid: Optional[str] = None
    orcid_type: Optional[str] = None
    is_contact: bool = False
    email: Optional[str] = None
    website: Optional[str] = None
    position: Optional[str] = None
    order: int = 0

    def __post_init__(self):
        """Validate type after initialization."""
        if self.type not in (PERSON, INSTITUTION):
            raise ValueError(f"Invalid contributor type: {self.type}. Must be '{PERSON}' or '{INSTITUTION}'.")

    def has_role(self, slug: str) -> bool:
        return slug in self.roles

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the editor payload shape."""
        return {
            'type': self.type,
            'givenName': self.given_name,
            'familyName': self.family_name,
            'name': self.name,
            'institutionName': self.institution_name,
            'affiliations': [affiliation.to_dict() for affiliation in self.affiliations],
            'roles': list(self.roles),
            'orcid': self.orcid,
            'orcidType': self.orcid_type,
            'isContact': self.is_contact,
            'email': self.email,
            'website': self.website,
            'position': self.position,
        }


@dataclass(frozen=True)
class Author:
    """
    Author view of a Creator.

    Every Creator in the legacy corpus is a person, so there is no type and no
    institutionName here.
    """

    name: str
    roles: Tuple[str, ...]
    given_name: Optional[str] = None
    family_name: Optional[str] = None
    affiliations: Tuple[Affiliation, ...] = field(default_factory=tuple)
    orcid: Optional[str] = None
    orcid_type: Optional[str] = None
    is_contact: bool = False
    email: Optional[str] = None
    website: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'givenName': self.given_name,
            'familyName': self.family_name,
            'name': self.name,
            'affiliations': [affiliation.to_dict() for affiliation in self.affiliations],
            'roles': list(self.roles),
            'isContact': self.is_contact,
            'email': self.email,
            'website': self.website,
            'orcid': self.orcid,
            'orcidType': self.orcid_type,
        }


def records_to_dicts(records: List[Any]) -> List[Dict[str, Any]]:
    """Convert resolved records into plain dictionaries, keeping their order."""
    return [record.to_dict() for record in records]
