from datetime import datetime, timedelta, timezone as dt_timezone
from unittest.mock import MagicMock

import pytest

from recognition.records import NominationRecord
from recognition.shell import reset_shell
from recognition.store import RecordStoreError

BASE_TIME = datetime(2024, 5, 1, 12, 0, tzinfo=dt_timezone.utc)


@pytest.fixture(autouse=True)
def fresh_shell():
    """Every test starts without a process-wide shell."""
    reset_shell()
    yield
    reset_shell()


@pytest.fixture
def make_record():
    """
    Build NominationRecord objects for aggregation and shell tests.

    Each call gets a unique id and a timestamp one minute older than the
    previous one, so a list built in call order is newest first.
    """
    counter = {'n': 0}

    def _make(nominee_name='Sarah Chen', category_id='c1', **overrides):
        counter['n'] += 1
        n = counter['n']
        values = {
            'id': f'rec-{n}',
            'nominee_name': nominee_name,
            'nominee_department': 'Sales',
            'nominee_location': 'Singapore',
            'category_id': category_id,
            'nominator_name': 'Associate',
            'reason': 'Went above and beyond.',
            'timestamp': BASE_TIME - timedelta(minutes=n),
        }
        values.update(overrides)
        return NominationRecord(**values)

    return _make


@pytest.fixture
def nomination_data():
    return {
        'nominee_name': 'Sarah Chen',
        'nominee_department': 'Sales',
        'nominee_location': 'Singapore',
        'category_id': 'c2',
        'reason': 'Rebuilt the demand forecasting model in two weeks.',
    }


class FakeStore:
    """In-memory stand-in for RecordStore used by the shell tests."""

    def __init__(self, records=(), fail_reads=False, fail_writes=False):
        self.records = list(records)
        self.fail_reads = fail_reads
        self.fail_writes = fail_writes
        self.inserted = []
        self.callbacks = []
        self.subscription = MagicMock()
        # Called in the middle of list_all(), before the rows are returned
        self.during_read = None

    def list_all(self):
        if self.fail_reads:
            raise RecordStoreError("Could not read nominations.")
        rows = list(self.records)
        if self.during_read is not None:
            self.during_read()
        return rows

    def list_since(self, moment):
        if self.fail_reads:
            raise RecordStoreError("Could not read nominations.")
        return [r for r in self.records if r.timestamp >= moment]

    def insert(self, fields):
        if self.fail_writes:
            raise RecordStoreError("Could not save nomination.")
        self.inserted.append(dict(fields))

    def subscribe_inserts(self, callback):
        self.callbacks.append(callback)
        return self.subscription


@pytest.fixture
def fake_store():
    return FakeStore()
