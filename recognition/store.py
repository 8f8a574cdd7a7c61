"""
Record Store
============

Thin gateway between the application shell and the nominations table:
- insert(): append one nomination
- list_all(): full-table read, newest first
- list_since(): rows created at or after a moment, newest first
- subscribe_inserts(): callback for every committed insert

Database errors are wrapped in RecordStoreError so callers can recover
without knowing about Django's exception hierarchy.
"""

from datetime import datetime
from typing import Any, Callable, Dict, List, Mapping
import logging

from django.db import DatabaseError # pyright: ignore[reportMissingModuleSource]

from .models import Nomination
from .records import NominationRecord, record_from_row
from .signals import nomination_inserted

logger = logging.getLogger(__name__)

InsertCallback = Callable[[Dict[str, Any]], None]

INSERT_FIELDS = (
    'nominee_name', 'nominee_department', 'nominee_location',
    'category_id', 'nominator_name', 'reason',
)


class RecordStoreError(Exception):
    """A read or write against the nominations table failed."""


class Subscription:
    """
    Handle for a standing insert subscription.

    release() stops delivery. Calling it more than once is harmless.
    """

    def __init__(self, callback: InsertCallback):
        self._callback = callback
        self.active = False

    def _receive(self, sender, row, **kwargs):
        self._callback(row)

    def start(self):
        nomination_inserted.connect(self._receive, weak=False, dispatch_uid=id(self))
        self.active = True
        return self

    def release(self):
        if not self.active:
            return
        nomination_inserted.disconnect(dispatch_uid=id(self))
        self.active = False


class RecordStore:
    """Nominations table accessed through the Django ORM."""

    def insert(self, fields: Mapping[str, Any]) -> NominationRecord:
        """
        Insert one nomination.

        Args:
            fields: nominee_name, nominee_department, nominee_location,
                category_id, reason and optionally nominator_name

        Returns:
            The stored record with its server-assigned id and timestamp

        Raises:
            RecordStoreError: If the database rejects the insert
        """
        values = {name: fields[name] for name in INSERT_FIELDS if name in fields}
        try:
            nomination = Nomination.objects.create(**values)
        except DatabaseError as e:
            logger.error(f"Error inserting nomination: {str(e)}")
            raise RecordStoreError("Could not save nomination.") from e

        logger.info(f"Nomination stored: {nomination.id} ({nomination.category_id})")
        return nomination.to_record()

    def list_all(self) -> List[NominationRecord]:
        """Every stored nomination, newest first."""
        return self._fetch(Nomination.objects.order_by('-created_at'))

    def list_since(self, moment: datetime) -> List[NominationRecord]:
        """Nominations created at or after `moment`, newest first."""
        return self._fetch(
            Nomination.objects.filter(created_at__gte=moment).order_by('-created_at')
        )

    def subscribe_inserts(self, callback: InsertCallback) -> Subscription:
        """Deliver the row of every committed insert to `callback`."""
        return Subscription(callback).start()

    def _fetch(self, queryset) -> List[NominationRecord]:
        try:
            rows = list(queryset.values(*(('id', 'created_at') + INSERT_FIELDS)))
        except DatabaseError as e:
            logger.error(f"Error reading nominations: {str(e)}")
            raise RecordStoreError("Could not read nominations.") from e
        return [record_from_row(row, index) for index, row in enumerate(rows)]
