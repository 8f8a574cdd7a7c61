"""
View functions for the Recognition Platform
===========================================

HTTP request handlers for:
- Vote: nomination form with an AI draft helper
- Analytics: headline stats, charts, AI summary, recent records
- Winners: podium, category champions, full leaderboard
- Live feed: JSON list of records newer than a timestamp

Every view reads the record snapshot from the application shell that
RecordSyncMiddleware attaches to the request. Failures end in a flash
message and a safe page, never an error page.
"""

from django.shortcuts import render, redirect
from django.views.decorators.http import require_http_methods
from django.views.decorators.csrf import csrf_protect
from django.contrib import messages
from django.http import JsonResponse
from django.utils.dateparse import parse_datetime
from django.utils import timezone
import logging

from .aggregation import (
    compute_category_champions, compute_category_distribution,
    compute_global_leaderboard, compute_headline_stats, compute_top_entities,
)
from .catalog import CATALOG
from .forms import NominationForm
from .shell import NEW_RECOGNITION
from .textgen import generate_nomination_draft, generate_summary

logger = logging.getLogger(__name__)

RECENT_RECORDS_LIMIT = 10
TOP_NOMINEES_LIMIT = 5


def _notify(request, notification):
    level = getattr(messages, notification.level.upper())
    messages.add_message(request, level, notification.message)


def _render_vote(request, form):
    context = {
        'form': form,
        'categories': CATALOG.categories,
        'selected_category': form.selected_category(),
    }
    return render(request, 'recognition/vote.html', context)


def _draft_reason(request):
    """
    Fill the reason field with an AI draft, keeping everything else as typed.

    Uses an unbound form seeded with the submitted values so the page does
    not show "required" errors for fields the user has not reached yet.
    """
    data = request.POST.dict()
    data.pop('csrfmiddlewaretoken', None)
    nominee_name = data.get('nominee_name', '')
    keywords = data.get('keywords', '')

    if not nominee_name.strip() or not keywords.strip():
        messages.error(request, 'Please enter a name and a few keywords.')
        return _render_vote(request, NominationForm(initial=data))

    category = NominationForm(initial=data).selected_category()
    data['reason'] = generate_nomination_draft(nominee_name, category.title, keywords)
    logger.info(f"Drafted nomination narrative for category {category.id}")
    return _render_vote(request, NominationForm(initial=data))


@require_http_methods(["GET", "POST"])
@csrf_protect
def vote(request):
    """
    Nomination form.

    GET: Display an empty form
    POST action=draft: Generate a narrative from name + keywords
    POST action=submit: Validate and insert the nomination

    Returns:
        Redirect back to an empty form after a successful submission,
        otherwise the form re-rendered with the user's input
    """
    if request.method == 'POST':
        if request.POST.get('action') == 'draft':
            return _draft_reason(request)

        form = NominationForm(request.POST)
        if form.is_valid():
            result = request.shell.submit(form.nomination_fields())
            _notify(request, result.notification)
            if result.ok:
                return redirect('recognition:vote')
            # Submission failed: fall through and keep the input for a retry
        else:
            messages.error(request, 'Please complete all fields.')
    else:
        form = NominationForm()

    return _render_vote(request, form)


@require_http_methods(["GET", "POST"])
@csrf_protect
def analytics(request):
    """
    Admin dashboard.

    Displays:
    - Total recognitions and headline stats
    - Top 5 nominees by raw name, category distribution
    - AI summary panel (POST action=summary)
    - The 10 most recent records

    POST action=refresh reloads the record list from the store.
    """
    shell = request.shell
    summary = None

    if request.method == 'POST':
        action = request.POST.get('action')
        if action == 'refresh':
            notice = shell.reload()
            if notice is not None:
                _notify(request, notice)
            return redirect('recognition:analytics')
        if action == 'summary' and shell.snapshot():
            summary = generate_summary(shell.snapshot(), CATALOG)

    records = shell.snapshot()
    top_nominees = compute_top_entities(records, 'nominee_name', limit=TOP_NOMINEES_LIMIT)

    context = {
        'total': len(records),
        'stats': compute_headline_stats(records, CATALOG),
        'top_nominees': top_nominees,
        'top_nominee_max': top_nominees[0].count if top_nominees else 1,
        'distribution': compute_category_distribution(records, CATALOG),
        'summary': summary,
        'recent_records': records[:RECENT_RECORDS_LIMIT],
    }
    return render(request, 'recognition/analytics.html', context)


@require_http_methods(["GET"])
def winners(request):
    """
    Winners gallery.

    Displays:
    - Podium for the top 3 of the global leaderboard
    - Champion of each category that has nominations
    - The complete leaderboard with ranks
    """
    records = request.shell.snapshot()
    leaderboard = compute_global_leaderboard(records)
    top3 = leaderboard[:3]

    # Podium order on screen: 2nd, 1st, 3rd
    podium = []
    for place in (2, 1, 3):
        if len(top3) >= place:
            podium.append({'place': place, 'nominee': top3[place - 1]})

    context = {
        'podium': podium,
        'champions': compute_category_champions(records, CATALOG.categories),
        'leaderboard': leaderboard,
    }
    return render(request, 'recognition/winners.html', context)


@require_http_methods(["GET"])
def feed(request):
    """
    Live feed endpoint (JSON).

    Query parameters:
        since: ISO timestamp; only records strictly newer are returned

    Returns:
        JSON with the total count, the newer records (newest first), the
        newest timestamp and the notice text for new arrivals
    """
    records = request.shell.snapshot()

    since_param = request.GET.get('since')
    since = None
    if since_param:
        since = parse_datetime(since_param)
        if since is None:
            return JsonResponse({'error': 'Invalid since timestamp.'}, status=400)
        if timezone.is_naive(since):
            since = timezone.make_aware(since)

    fresh = [r for r in records if since is None or r.timestamp > since]
    latest = max((r.timestamp for r in records), default=None)

    return JsonResponse({
        'total': len(records),
        'records': [r.as_dict() for r in fresh],
        'latest': latest.isoformat() if latest else None,
        'notice': NEW_RECOGNITION.message,
    })
