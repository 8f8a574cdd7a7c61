"""
In-memory record types
======================

NominationRecord is the immutable, framework-free form of a stored
nomination. Every row that reaches the application shell, whether from a
full-table read or from an insert notification, goes through
record_from_row(), which fills in defaults for missing columns.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone as dt_timezone
from typing import Any, Dict, Mapping, Optional
import hashlib

from django.utils import timezone # pyright: ignore[reportMissingModuleSource]
from django.utils.dateparse import parse_datetime # pyright: ignore[reportMissingModuleSource]


DEFAULT_NOMINEE_NAME = 'Anonymous Associate'
DEFAULT_DEPARTMENT = 'General'
DEFAULT_LOCATION = 'Asia Hub'
DEFAULT_CATEGORY_ID = 'c1'
DEFAULT_NOMINATOR = 'Associate'


@dataclass(frozen=True)
class NominationRecord:
    """A single peer nomination, never mutated once created."""

    id: str
    nominee_name: str
    nominee_department: str
    nominee_location: str
    category_id: str
    nominator_name: str
    reason: str
    timestamp: datetime

    def as_row(self) -> Dict[str, Any]:
        """Column mapping in the shape stored rows and notifications use."""
        return {
            'id': self.id,
            'nominee_name': self.nominee_name,
            'nominee_department': self.nominee_department,
            'nominee_location': self.nominee_location,
            'category_id': self.category_id,
            'nominator_name': self.nominator_name,
            'reason': self.reason,
            'created_at': self.timestamp,
        }

    def as_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'nominee_name': self.nominee_name,
            'nominee_department': self.nominee_department,
            'nominee_location': self.nominee_location,
            'category_id': self.category_id,
            'nominator_name': self.nominator_name,
            'reason': self.reason,
            'timestamp': self.timestamp.isoformat(),
        }


@dataclass
class AggregatedNominee:
    """
    Per-nominee totals derived from a list of records.

    Display fields come from the first record seen for the normalized key.
    Recomputed on every aggregation pass, never stored.
    """

    key: str
    nominee_name: str
    nominee_department: str
    nominee_location: str
    count: int = 0
    category_votes: Dict[str, int] = field(default_factory=dict)


def fallback_record_id(row: Mapping[str, Any], arrival_index: Optional[int] = None) -> str:
    """
    Build a stable identifier for a row that arrived without one.

    The identifier is a hash of the content columns (created_at included),
    so delivering the same payload twice always yields the same id. Rows
    read together in one batch also hash their position in the batch, which
    keeps identical rows from the same read apart.
    """
    parts = [
        str(row.get(column) or '')
        for column in (
            'nominee_name', 'nominee_department', 'nominee_location',
            'category_id', 'nominator_name', 'reason', 'created_at',
        )
    ]
    if arrival_index is not None:
        parts.append(str(arrival_index))
    digest = hashlib.sha256('\x1f'.join(parts).encode()).hexdigest()
    return f"local-{digest[:12]}"


def _parse_timestamp(value: Any) -> Optional[datetime]:
    if isinstance(value, datetime):
        moment = value
    elif isinstance(value, str) and value:
        moment = parse_datetime(value)
        if moment is None:
            return None
    else:
        return None
    if timezone.is_naive(moment):
        moment = timezone.make_aware(moment, dt_timezone.utc)
    return moment


def record_from_row(row: Mapping[str, Any], arrival_index: Optional[int] = None) -> NominationRecord:
    """
    Map a stored row (column names as in the nominations table) to a record.

    Args:
        row: Mapping with snake_case column names; any column may be missing
        arrival_index: Position of the row within a batch read, used only
            when the row has no identifier. Single notifications leave it
            out so a redelivered payload maps to the same id.

    Returns:
        NominationRecord with defaults applied to missing or empty columns
    """
    record_id = row.get('id')
    return NominationRecord(
        id=str(record_id) if record_id else fallback_record_id(row, arrival_index),
        nominee_name=row.get('nominee_name') or DEFAULT_NOMINEE_NAME,
        nominee_department=row.get('nominee_department') or DEFAULT_DEPARTMENT,
        nominee_location=row.get('nominee_location') or DEFAULT_LOCATION,
        category_id=row.get('category_id') or DEFAULT_CATEGORY_ID,
        nominator_name=row.get('nominator_name') or DEFAULT_NOMINATOR,
        reason=row.get('reason') or '',
        timestamp=_parse_timestamp(row.get('created_at')) or timezone.now(),
    )
