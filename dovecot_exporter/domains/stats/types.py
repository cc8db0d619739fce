"""Types produced by the stats decoder and collector."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

# Row label substituted for detail rows whose label field is empty.
EMPTY_ROW_LABEL = "empty_user"


class ScopeKind(str, Enum):
    """Response format a scope answers with."""

    GLOBAL = "global"  # one aggregate row, whitespace separated
    DETAIL = "detail"  # one tab separated row per entity


@dataclass(frozen=True)
class ColumnDescriptor:
    """One measurement series: a column name inside a scope namespace."""

    scope: str
    name: str


@dataclass(frozen=True)
class MeasurementRecord:
    """A single decoded value.

    ``row_label`` is only set for detail scopes, where it names the entity
    (usually a mailbox user) the row belongs to.
    """

    column: ColumnDescriptor
    value: float
    row_label: Optional[str] = None


@dataclass(frozen=True)
class ScopeHealth:
    """Outcome of collecting one scope."""

    scope: str
    healthy: bool
