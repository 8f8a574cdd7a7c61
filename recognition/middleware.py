"""
Custom middleware for the Recognition Platform
==============================================

RecordSyncMiddleware keeps the application shell's record list current
before any recognition view runs:
1. First request in the process: full-table load
2. Every request: merge rows committed by other worker processes
3. Load failures become a one-off error message, never a 500
"""

from django.contrib import messages # pyright: ignore[reportMissingModuleSource]
from django.utils.deprecation import MiddlewareMixin # pyright: ignore[reportMissingModuleSource]
import logging

from .shell import get_shell

logger = logging.getLogger(__name__)


class RecordSyncMiddleware(MiddlewareMixin):
    """
    Attach the synchronized shell to recognition requests as `request.shell`.

    Admin, static and other apps' requests are left untouched.
    """

    APP_NAMESPACE = 'recognition'

    def process_view(self, request, view_func, view_args, view_kwargs):
        match = getattr(request, 'resolver_match', None)
        if match is None or match.namespace != self.APP_NAMESPACE:
            return None

        shell = get_shell()
        notice = shell.ensure_loaded()
        if notice is not None:
            messages.add_message(request, getattr(messages, notice.level.upper()), notice.message)
        else:
            added = shell.catch_up()
            if added:
                logger.debug(f"Caught up {added} nominations from other workers")

        request.shell = shell
        return None
