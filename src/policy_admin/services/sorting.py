"""Sort-field allow-list for policy term searches.

External sort names are mapped to ORM columns through a static table and
validated before any query is built.
"""

from enum import Enum

from attrs import field, frozen
from beartype import beartype
from sqlalchemy.orm import InstrumentedAttribute

from ..core.result_types import Err, Ok, Result, ServiceError
from ..models.policy import Policy, PolicyTerm


class SortDirection(str, Enum):
    """Ordering direction."""

    ASC = "asc"
    DESC = "desc"

    @classmethod
    @beartype
    def parse(cls, raw: str | None) -> "SortDirection":
        """Parse a direction, falling back to ascending for anything unknown."""
        if raw is None:
            return cls.ASC
        try:
            return cls(raw.strip().lower())
        except ValueError:
            return cls.ASC


SORT_FIELDS: dict[str, InstrumentedAttribute] = {
    "effective_to_date": PolicyTerm.effective_to_date,
    "effective_from_date": PolicyTerm.effective_from_date,
    "policy_number": Policy.policy_number,
    "insured_name": Policy.insured_name,
    "state": PolicyTerm.state,
    "status": PolicyTerm.status,
    "term_number": PolicyTerm.term_number,
}

DEFAULT_SORT_FIELD = "effective_to_date"


@frozen
class SortSpec:
    """A validated single-key ordering."""

    name: str = field()
    direction: SortDirection = field(default=SortDirection.ASC)

    @name.validator
    def _check_name(self, attribute: object, value: str) -> None:
        if value not in SORT_FIELDS:
            raise ValueError(f"Unsupported sort field: {value}")

    @property
    def column(self) -> InstrumentedAttribute:
        """ORM column to order by."""
        return SORT_FIELDS[self.name]

    @property
    def descending(self) -> bool:
        """Check if the ordering is descending."""
        return self.direction is SortDirection.DESC

    def __str__(self) -> str:
        return f"{self.name},{self.direction.value}"


DEFAULT_SORT = SortSpec(DEFAULT_SORT_FIELD, SortDirection.ASC)


@beartype
def parse_sort(raw: str | None) -> Result[SortSpec, ServiceError]:
    """Parse ``"<field>,<direction>"`` against the allow-list.

    Blank input selects the default ordering. An unknown field is a
    validation error; an unknown or missing direction means ascending.
    """
    if raw is None or not raw.strip():
        return Ok(DEFAULT_SORT)

    parts = raw.split(",")
    name = parts[0].strip()
    if name not in SORT_FIELDS:
        return Err(ServiceError.validation(f"Unsupported sort field: {name}"))

    direction = parts[1] if len(parts) > 1 else None
    return Ok(SortSpec(name, SortDirection.parse(direction)))
