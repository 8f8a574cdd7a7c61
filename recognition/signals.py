"""
Insert notifications for the nominations table.

`nomination_inserted` is sent once per committed insert with
`row=<column mapping>`. Receivers must tolerate seeing the same row more than
once; the application shell merges by id.
"""

import logging

from django.db import transaction # pyright: ignore[reportMissingModuleSource]
from django.db.models.signals import post_save # pyright: ignore[reportMissingModuleSource]
from django.dispatch import Signal, receiver # pyright: ignore[reportMissingModuleSource]

from .models import Nomination

logger = logging.getLogger(__name__)

nomination_inserted = Signal()


@receiver(post_save, sender=Nomination, dispatch_uid='recognition.nomination_inserted')
def announce_nomination(sender, instance, created, **kwargs):
    if not created:
        return
    row = instance.as_row()

    def send():
        logger.debug(f"Broadcasting insert of nomination {row['id']}")
        nomination_inserted.send(sender=Nomination, row=row)

    # Subscribers only hear about rows that are actually visible to readers
    transaction.on_commit(send)
