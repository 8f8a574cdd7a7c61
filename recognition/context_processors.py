"""Template context shared by every recognition screen."""

from django.conf import settings # pyright: ignore[reportMissingModuleSource]

from .catalog import CATALOG


def platform(request):
    match = getattr(request, 'resolver_match', None)
    return {
        'site_name': settings.SITE_NAME,
        'catalog': CATALOG,
        'feed_poll_seconds': settings.FEED_POLL_SECONDS,
        'current_view': match.url_name if match else '',
    }
