"""
Database models for the Recognition Platform
============================================

Defines the data structure for:
- Nomination: one peer recognition record

The nominations table is append-only from the application's point of view:
rows are created by the vote form and never updated or deleted afterwards.
Names and other free-text fields are stored exactly as submitted; case and
whitespace are only normalized when aggregating.
"""

from django.db import models # pyright: ignore[reportMissingModuleSource]
from django.core.validators import MaxLengthValidator # pyright: ignore[reportMissingModuleSource]
import uuid

from .catalog import CATALOG
from .records import DEFAULT_NOMINATOR, NominationRecord, record_from_row


class Nomination(models.Model):
    """
    A single peer nomination.

    Attributes:
        id: UUID primary key assigned at insert time
        nominee_name: Free-text name of the colleague being recognized
        nominee_department: Department picked from the catalog
        nominee_location: Location hub picked from the catalog
        category_id: Award category identifier from the catalog
        nominator_name: Placeholder, nominator identity is not collected
        reason: Recognition narrative (required)
        created_at: Timestamp assigned by the database layer
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    nominee_name = models.CharField(
        max_length=200,
        validators=[MaxLengthValidator(200)],
        help_text="Name of the colleague being recognized"
    )
    nominee_department = models.CharField(max_length=100)
    nominee_location = models.CharField(max_length=100)
    category_id = models.CharField(
        max_length=20,
        choices=CATALOG.category_choices(),
        help_text="Award category"
    )
    nominator_name = models.CharField(max_length=100, default=DEFAULT_NOMINATOR)
    reason = models.TextField(max_length=4000, help_text="Recognition narrative")
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['-created_at'], name='nomination_created_idx'),
            models.Index(fields=['category_id'], name='nomination_category_idx'),
        ]

    def __str__(self):
        return f"{self.nominee_name} ({self.category_id}) at {self.created_at}"

    def save(self, *args, **kwargs):
        """Insert only; an existing nomination is never rewritten."""
        if not self._state.adding:
            raise ValueError("Nominations are immutable once created.")
        super().save(*args, **kwargs)

    def as_row(self):
        """Column-name mapping of this row, the shape insert notifications carry."""
        return {
            'id': str(self.id),
            'nominee_name': self.nominee_name,
            'nominee_department': self.nominee_department,
            'nominee_location': self.nominee_location,
            'category_id': self.category_id,
            'nominator_name': self.nominator_name,
            'reason': self.reason,
            'created_at': self.created_at,
        }

    def to_record(self) -> NominationRecord:
        return record_from_row(self.as_row())
