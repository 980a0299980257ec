"""Mini README: Entry records and the derived analytics summary.

Structure:
    * EntryKind - enum representing income versus expense entries.
    * Entry - dataclass for a single persisted record.
    * AnalyticsSummary - statistics over an analytics window.

Entries are deliberately not validated on construction: the HTTP layer
validates client input and the database constraints guard everything that
reaches the store by other routes.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, replace
from datetime import datetime
from enum import Enum
from typing import Dict, Optional, Union


class EntryKind(str, Enum):
    """Enumerate the supported entry classifications."""

    INCOME = "income"
    EXPENSE = "expense"


@dataclass(slots=True)
class Entry:
    """A single income or expense record."""

    kind: Union[EntryKind, str]
    amount: float
    occurred_at: datetime
    category: str
    id: Optional[int] = None

    @property
    def kind_value(self) -> str:
        """Return the kind as its stored string form."""

        return self.kind.value if isinstance(self.kind, EntryKind) else self.kind

    def with_id(self, entry_id: int) -> "Entry":
        return replace(self, id=entry_id)

    def as_dict(self) -> Dict[str, object]:
        """Export the entry with JSON serialisable values."""

        return {
            "id": self.id,
            "kind": self.kind_value,
            "amount": self.amount,
            "occurred_at": self.occurred_at.isoformat(),
            "category": self.category,
        }


@dataclass(frozen=True, slots=True)
class AnalyticsSummary:
    """Statistics over the amounts inside an analytics window."""

    sum: float = 0.0
    average: float = 0.0
    count: int = 0
    median: float = 0.0
    percentile90: float = 0.0

    def as_dict(self) -> Dict[str, object]:
        return asdict(self)
