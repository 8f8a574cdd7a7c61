from datetime import datetime, timezone as dt_timezone
from unittest.mock import patch

import pytest
from django.contrib import admin
from django.urls import reverse
from freezegun import freeze_time

from recognition.models import Nomination
from recognition.shell import LOAD_FAILED, NEW_RECOGNITION, SUBMIT_FAILED, SUBMIT_OK
from recognition.store import RecordStore, RecordStoreError

pytestmark = pytest.mark.django_db


def _nominate(nomination_data, **overrides):
    return Nomination.objects.create(**dict(nomination_data, **overrides))


def test_vote_page_lists_categories(client):
    response = client.get(reverse('recognition:vote'))

    assert response.status_code == 200
    content = response.content.decode()
    assert 'Customer Obsession' in content
    assert 'Inspiring Leadership' in content


def test_submit_nomination(client, nomination_data):
    response = client.post(reverse('recognition:vote'), dict(nomination_data, action='submit'), follow=True)

    assert response.redirect_chain == [(reverse('recognition:vote'), 302)]
    assert Nomination.objects.count() == 1
    assert SUBMIT_OK.message in response.content.decode()


def test_submitted_nomination_shows_up_on_next_request(client, nomination_data, django_capture_on_commit_callbacks):
    with django_capture_on_commit_callbacks(execute=True):
        client.post(reverse('recognition:vote'), dict(nomination_data, action='submit'))

    response = client.get(reverse('recognition:analytics'))

    assert response.context['total'] == 1
    assert response.context['recent_records'][0].nominee_name == 'Sarah Chen'


def test_incomplete_form_keeps_input(client, nomination_data):
    response = client.post(reverse('recognition:vote'), dict(nomination_data, reason='', action='submit'))

    assert response.status_code == 200
    content = response.content.decode()
    assert 'Please complete all fields.' in content
    assert 'value="Sarah Chen"' in content
    assert Nomination.objects.count() == 0


def test_store_failure_keeps_input(client, nomination_data):
    with patch.object(RecordStore, 'insert', side_effect=RecordStoreError('down')):
        response = client.post(reverse('recognition:vote'), dict(nomination_data, action='submit'))

    assert response.status_code == 200
    content = response.content.decode()
    assert SUBMIT_FAILED.message in content
    assert 'Rebuilt the demand forecasting model' in content


def test_draft_requires_name_and_keywords(client):
    response = client.post(reverse('recognition:vote'), {'nominee_name': 'Ana', 'keywords': ' ', 'action': 'draft'})

    assert response.status_code == 200
    assert 'Please enter a name and a few keywords.' in response.content.decode()


def test_draft_fills_reason(client):
    with patch('recognition.views.generate_nomination_draft', return_value='Ana set a new standard.') as draft:
        response = client.post(reverse('recognition:vote'), {
            'nominee_name': 'Ana',
            'category_id': 'c3',
            'keywords': 'audits',
            'action': 'draft',
        })

    draft.assert_called_once_with('Ana', 'Quality First', 'audits')
    content = response.content.decode()
    assert 'Ana set a new standard.' in content
    assert 'value="Ana"' in content
    assert response.context['selected_category'].id == 'c3'
    assert Nomination.objects.count() == 0


def test_analytics_empty(client):
    response = client.get(reverse('recognition:analytics'))

    assert response.status_code == 200
    assert response.context['stats'] is None
    assert response.context['total'] == 0


def test_analytics_dashboard(client, nomination_data):
    for _ in range(3):
        _nominate(nomination_data, nominee_name='Mei Ling', category_id='c4', nominee_location='Taiwan')
    _nominate(nomination_data, nominee_name='Raj Patel', category_id='c1')

    response = client.get(reverse('recognition:analytics'))

    stats = response.context['stats']
    assert stats.leader == 'Mei Ling'
    assert stats.category.id == 'c4'
    assert stats.location == 'Taiwan'
    assert [(t.value, t.count) for t in response.context['top_nominees']] == [('Mei Ling', 3), ('Raj Patel', 1)]
    assert [d.percentage for d in response.context['distribution']] == [75, 25]


def test_analytics_shows_ten_most_recent(client, nomination_data):
    for minute in range(12):
        with freeze_time(datetime(2024, 1, 1, 9, minute, tzinfo=dt_timezone.utc)):
            _nominate(nomination_data, nominee_name=f'Nominee {minute}')

    response = client.get(reverse('recognition:analytics'))

    recent = response.context['recent_records']
    assert len(recent) == 10
    assert recent[0].nominee_name == 'Nominee 11'
    assert response.context['total'] == 12


def test_analytics_summary(client, nomination_data):
    _nominate(nomination_data)

    with patch('recognition.views.generate_summary', return_value='Sarah leads the pack.') as summary:
        response = client.post(reverse('recognition:analytics'), {'action': 'summary'})

    summary.assert_called_once()
    assert 'Sarah leads the pack.' in response.content.decode()


def test_analytics_summary_skipped_without_records(client):
    with patch('recognition.views.generate_summary') as summary:
        response = client.post(reverse('recognition:analytics'), {'action': 'summary'})

    summary.assert_not_called()
    assert response.context['summary'] is None


def test_analytics_refresh(client, nomination_data):
    response = client.post(reverse('recognition:analytics'), {'action': 'refresh'})

    assert response.status_code == 302
    assert response.url == reverse('recognition:analytics')


def test_load_failure_shows_notice(client):
    with patch.object(RecordStore, 'list_all', side_effect=RecordStoreError('down')):
        response = client.get(reverse('recognition:analytics'))

    assert response.status_code == 200
    assert LOAD_FAILED.message in response.content.decode()
    assert response.context['total'] == 0


def test_winners(client, nomination_data):
    _nominate(nomination_data, nominee_name='Mei Ling', category_id='c4')
    _nominate(nomination_data, nominee_name='mei ling ', category_id='c5')
    _nominate(nomination_data, nominee_name='Raj Patel', category_id='c1')

    response = client.get(reverse('recognition:winners'))

    assert response.status_code == 200
    leaderboard = response.context['leaderboard']
    assert [e.count for e in leaderboard] == [2, 1]
    assert [spot['place'] for spot in response.context['podium']] == [2, 1]
    assert {c.category.id for c in response.context['champions']} == {'c1', 'c4', 'c5'}


def test_winners_empty(client):
    response = client.get(reverse('recognition:winners'))

    assert response.status_code == 200
    assert response.context['podium'] == []
    assert response.context['champions'] == []


def test_feed(client, nomination_data):
    with freeze_time('2024-01-01 09:00:00'):
        _nominate(nomination_data, nominee_name='Older')
    with freeze_time('2024-01-01 10:00:00'):
        _nominate(nomination_data, nominee_name='Newer')

    data = client.get(reverse('recognition:api_feed')).json()
    assert data['total'] == 2
    assert [r['nominee_name'] for r in data['records']] == ['Newer', 'Older']
    assert data['notice'] == NEW_RECOGNITION.message
    assert data['latest'].startswith('2024-01-01T10:00:00')

    data = client.get(reverse('recognition:api_feed'), {'since': '2024-01-01T09:30:00+00:00'}).json()
    assert [r['nominee_name'] for r in data['records']] == ['Newer']


def test_feed_rejects_bad_timestamp(client):
    response = client.get(reverse('recognition:api_feed'), {'since': 'yesterday'})

    assert response.status_code == 400


def test_feed_only_allows_get(client):
    assert client.post(reverse('recognition:api_feed')).status_code == 405


def test_admin_is_read_only(rf):
    model_admin = admin.site._registry[Nomination]
    request = rf.get('/admin/')

    assert not model_admin.has_add_permission(request)
    assert not model_admin.has_change_permission(request)
    assert not model_admin.has_delete_permission(request)
