"""
Application Shell
=================

Owns the in-memory list of nomination records and keeps it in step with the
Record Store:

- load(): full-table read (LOADING -> READY, or LOADING -> ERROR -> READY
  with an empty list when the read fails)
- on_insert(): idempotent merge of one insert notification
- catch_up(): pulls rows committed by other processes, re-reading a short
  window before the newest known record so late commits are not missed
- submit(): fire-and-forget insert; the new record shows up locally only via
  the insert notification, never from the submit call itself

The record list is a tuple that gets replaced, never mutated, so a snapshot
handed to the aggregation engine or a template stays consistent.
"""

from dataclasses import dataclass
from enum import Enum
from datetime import timedelta
from typing import Any, List, Mapping, Optional, Tuple
import logging
import threading

from django.conf import settings # pyright: ignore[reportMissingModuleSource]

from .records import NominationRecord, record_from_row
from .store import RecordStore, RecordStoreError

logger = logging.getLogger(__name__)


class ShellState(Enum):
    LOADING = 'loading'
    READY = 'ready'
    ERROR = 'error'


@dataclass(frozen=True)
class Notification:
    """A transient, dismissible message for the user."""

    level: str  # 'success', 'error' or 'info'
    message: str


@dataclass(frozen=True)
class SubmissionResult:
    ok: bool
    notification: Notification


LOAD_FAILED = Notification('error', 'Could not load recognitions. Showing an empty list for now.')
SUBMIT_OK = Notification('success', 'Recognition submitted successfully!')
SUBMIT_FAILED = Notification('error', 'Submission failed. Check your internet connection.')
NEW_RECOGNITION = Notification('info', 'New recognition received!')


class ApplicationShell:
    """
    Process-wide owner of the record list.

    Args:
        store: Record Store gateway (a fresh RecordStore by default)
        lookback: How far before the newest known record catch_up() reads
            again (settings.CATCH_UP_LOOKBACK_SECONDS by default)
    """

    def __init__(self, store: Optional[RecordStore] = None, lookback: Optional[timedelta] = None):
        self.store = store or RecordStore()
        if lookback is None:
            lookback = timedelta(seconds=settings.CATCH_UP_LOOKBACK_SECONDS)
        self.lookback = lookback
        self.state = ShellState.LOADING
        self._records: Tuple[NominationRecord, ...] = ()
        self._lock = threading.Lock()
        self._loaded = False
        # Records merged while a full-table read is in flight
        self._merged_during_load: Optional[List[NominationRecord]] = None
        self._subscription = self.store.subscribe_inserts(self.on_insert)

    def snapshot(self) -> Tuple[NominationRecord, ...]:
        """Current record list, newest first."""
        return self._records

    def _set_state(self, state: ShellState):
        if state != self.state:
            logger.debug(f"Shell state {self.state.value} -> {state.value}")
        self.state = state

    def load(self) -> Optional[Notification]:
        """
        Replace the record list with a fresh full-table read.

        Notifications merged while the read is running are kept when the
        read does not already contain them.

        Returns:
            None on success, or the notification to show when the read failed
        """
        self._set_state(ShellState.LOADING)
        with self._lock:
            self._merged_during_load = []
        try:
            records = tuple(self.store.list_all())
        except RecordStoreError as e:
            logger.error(f"Initial load failed: {str(e)}")
            self._set_state(ShellState.ERROR)
            with self._lock:
                self._records = ()
                self._merged_during_load = None
                self._loaded = True
            self._set_state(ShellState.READY)
            return LOAD_FAILED

        with self._lock:
            fetched_ids = {r.id for r in records}
            late = [r for r in self._merged_during_load if r.id not in fetched_ids]
            self._records = tuple(reversed(late)) + records
            self._merged_during_load = None
            self._loaded = True
        logger.info(f"Loaded {len(records)} nominations")
        self._set_state(ShellState.READY)
        return None

    def ensure_loaded(self) -> Optional[Notification]:
        """Run the first load if it has not happened yet."""
        if self._loaded:
            return None
        return self.load()

    def reload(self) -> Optional[Notification]:
        return self.load()

    def on_insert(self, row: Mapping[str, Any]) -> bool:
        """
        Merge one insert notification into the record list.

        Args:
            row: Column mapping of the inserted nomination

        Returns:
            True if the record was new, False if it was already present
        """
        record = record_from_row(row)
        with self._lock:
            if any(existing.id == record.id for existing in self._records):
                logger.debug(f"Duplicate delivery ignored for {record.id}")
                return False
            self._records = (record,) + self._records
            if self._merged_during_load is not None:
                self._merged_during_load.append(record)
        logger.info(f"New nomination merged: {record.id}")
        return True

    def catch_up(self) -> int:
        """
        Merge rows committed by other processes since the last read.

        Reads again from `lookback` before the newest known record, so rows
        whose timestamp is older than one already seen but which committed
        later are still picked up. Merged rows are placed by timestamp.
        Returns the number of records added.
        """
        records = self._records
        if not records:
            since = None
        else:
            since = max(r.timestamp for r in records) - self.lookback

        try:
            fresh = self.store.list_all() if since is None else self.store.list_since(since)
        except RecordStoreError as e:
            logger.warning(f"Catch-up skipped: {str(e)}")
            return 0

        with self._lock:
            known = {r.id for r in self._records}
            added = [r for r in fresh if r.id not in known]
            if added:
                merged = sorted(added + list(self._records), key=lambda r: r.timestamp, reverse=True)
                self._records = tuple(merged)
        return len(added)

    def submit(self, fields: Mapping[str, Any]) -> SubmissionResult:
        """
        Insert a nomination and report the outcome.

        The in-memory list is left alone; the record arrives through the
        insert subscription once the write commits.
        """
        try:
            self.store.insert(fields)
        except RecordStoreError:
            return SubmissionResult(ok=False, notification=SUBMIT_FAILED)
        return SubmissionResult(ok=True, notification=SUBMIT_OK)

    def close(self):
        """Stop listening for insert notifications."""
        self._subscription.release()


_shell: Optional[ApplicationShell] = None
_shell_lock = threading.Lock()


def get_shell() -> ApplicationShell:
    """Return the process-wide shell, creating it on first use."""
    global _shell
    with _shell_lock:
        if _shell is None:
            _shell = ApplicationShell()
        return _shell


def reset_shell():
    """Close and discard the process-wide shell."""
    global _shell
    with _shell_lock:
        if _shell is not None:
            _shell.close()
        _shell = None
