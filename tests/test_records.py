from datetime import datetime, timezone as dt_timezone

from freezegun import freeze_time

from recognition.records import (
    DEFAULT_CATEGORY_ID,
    DEFAULT_DEPARTMENT,
    DEFAULT_LOCATION,
    DEFAULT_NOMINATOR,
    DEFAULT_NOMINEE_NAME,
    fallback_record_id,
    record_from_row,
)


def test_record_from_full_row():
    created = datetime(2024, 3, 2, 9, 30, tzinfo=dt_timezone.utc)
    record = record_from_row({
        'id': 'abc',
        'nominee_name': 'Raj Patel',
        'nominee_department': 'Finance',
        'nominee_location': 'Malaysia',
        'category_id': 'c3',
        'nominator_name': 'Associate',
        'reason': 'Closed the books early.',
        'created_at': created,
    })

    assert record.id == 'abc'
    assert record.nominee_name == 'Raj Patel'
    assert record.category_id == 'c3'
    assert record.timestamp == created


@freeze_time('2024-06-01 08:00:00')
def test_record_from_empty_row_uses_defaults():
    record = record_from_row({})

    assert record.nominee_name == DEFAULT_NOMINEE_NAME
    assert record.nominee_department == DEFAULT_DEPARTMENT
    assert record.nominee_location == DEFAULT_LOCATION
    assert record.category_id == DEFAULT_CATEGORY_ID
    assert record.nominator_name == DEFAULT_NOMINATOR
    assert record.reason == ''
    assert record.timestamp == datetime(2024, 6, 1, 8, 0, tzinfo=dt_timezone.utc)
    assert record.id.startswith('local-')


def test_record_keeps_raw_name():
    record = record_from_row({'id': 1, 'nominee_name': '  sarah CHEN '})

    assert record.nominee_name == '  sarah CHEN '
    assert record.id == '1'


def test_iso_timestamp_is_parsed():
    record = record_from_row({'id': 'x', 'created_at': '2024-02-10T14:05:00+00:00'})

    assert record.timestamp == datetime(2024, 2, 10, 14, 5, tzinfo=dt_timezone.utc)


def test_naive_timestamp_is_treated_as_utc():
    record = record_from_row({'id': 'x', 'created_at': '2024-02-10T14:05:00'})

    assert record.timestamp.tzinfo is not None
    assert record.timestamp == datetime(2024, 2, 10, 14, 5, tzinfo=dt_timezone.utc)


def test_fallback_id_is_deterministic():
    row = {'nominee_name': 'Ana', 'category_id': 'c2', 'reason': 'Helped onboard the team.'}

    assert fallback_record_id(row, 0) == fallback_record_id(dict(row), 0)
    assert fallback_record_id(row, 0) != fallback_record_id(row, 1)
    assert record_from_row(row, 4).id == fallback_record_id(row, 4)


def test_as_dict_serializes_timestamp(make_record):
    record = make_record('Ana')

    data = record.as_dict()

    assert data['nominee_name'] == 'Ana'
    assert data['timestamp'] == record.timestamp.isoformat()


def test_as_row_round_trips(make_record):
    record = make_record('Ana', 'c5')

    assert record_from_row(record.as_row()) == record


def test_fallback_id_without_position_depends_on_content_only():
    row = {'nominee_name': 'Ana', 'category_id': 'c2', 'created_at': '2024-05-01T12:00:00+00:00'}

    assert record_from_row(row).id == record_from_row(dict(row)).id
    assert record_from_row(row).id != record_from_row(dict(row, created_at='2024-05-01T12:00:01+00:00')).id
