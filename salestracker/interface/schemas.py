"""Mini README: Request validation for the JSON API.

Structure:
    * parse_timestamp - strict RFC3339 parser shared by bodies and queries.
    * EntryPayload - validated body for creating or replacing an entry.

Bodies also accept ``type`` and ``date``, the field names used by the first
version of the browser client; responses always use ``kind`` and
``occurred_at``. Amounts must be JSON numbers that fit ``NUMERIC(10,2)``.
"""

from __future__ import annotations

import re
from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from ..ledger import Entry, EntryKind

_RFC3339 = re.compile(
    r"^(?P<date>\d{4}-\d{2}-\d{2})[Tt]"
    r"(?P<time>\d{2}:\d{2}:\d{2})(?:\.(?P<fraction>\d{1,9}))?"
    r"(?P<offset>[Zz]|[+-]\d{2}:\d{2})$"
)


def parse_timestamp(value: str) -> datetime:
    """Parse an RFC3339 timestamp, insisting on an explicit offset.

    Fractions beyond microseconds are cut to six digits, the resolution of
    ``datetime``.
    """

    match = _RFC3339.match(value.strip())
    if match is None:
        raise ValueError(f"Invalid timestamp '{value}', expected RFC3339 with an offset")
    fraction = (match["fraction"] or "")[:6].ljust(6, "0")
    offset = "+00:00" if match["offset"] in {"Z", "z"} else match["offset"]
    try:
        return datetime.fromisoformat(f"{match['date']}T{match['time']}.{fraction}{offset}")
    except ValueError as error:
        raise ValueError(f"Invalid timestamp '{value}': {error}") from error


class EntryPayload(BaseModel):
    """Client supplied fields of an entry; the id never comes from the body."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    kind: EntryKind = Field(..., validation_alias=AliasChoices("kind", "type"))
    amount: Decimal = Field(..., gt=0, max_digits=10, decimal_places=2, allow_inf_nan=False)
    occurred_at: datetime = Field(..., validation_alias=AliasChoices("occurred_at", "date"))
    category: str = Field(..., min_length=1, max_length=255)

    @field_validator("amount", mode="before")
    @classmethod
    def _require_number(cls, value: object) -> object:
        # bool is an int subclass; JSON true must not become 1.
        if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
            raise ValueError("amount must be a number")
        return value

    @field_validator("occurred_at", mode="before")
    @classmethod
    def _parse_occurred_at(cls, value: object) -> datetime:
        if not isinstance(value, str):
            raise ValueError("occurred_at must be an RFC3339 string")
        return parse_timestamp(value)

    @field_validator("category")
    @classmethod
    def _reject_blank_category(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("category must not be blank")
        return value

    def to_entry(self, entry_id: Optional[int] = None) -> Entry:
        return Entry(
            id=entry_id,
            kind=self.kind,
            amount=float(self.amount),
            occurred_at=self.occurred_at,
            category=self.category,
        )
