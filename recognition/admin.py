"""
Django Admin Configuration for the Recognition Platform
=======================================================

Nominations are append-only, so the admin is a read-only browser:
- No adding, editing or deleting nominations
- Filters by category, department and location
- Search by nominee and nominator
"""

from django.contrib import admin # pyright: ignore[reportMissingModuleSource, reportMissingImports]
from .catalog import CATALOG
from .models import Nomination


@admin.register(Nomination)
class NominationAdmin(admin.ModelAdmin):
    """
    Admin interface for Nomination model.

    IMPORTANT: Nominations are READ-ONLY in admin
    """

    list_display = ('nominee_name', 'get_category_title', 'nominee_department',
                    'nominee_location', 'nominator_name', 'created_at')
    list_filter = ('category_id', 'nominee_department', 'nominee_location', 'created_at')
    search_fields = ('nominee_name', 'nominator_name', 'reason')
    readonly_fields = ('id', 'nominee_name', 'nominee_department', 'nominee_location',
                       'category_id', 'nominator_name', 'reason', 'created_at')
    date_hierarchy = 'created_at'

    def has_add_permission(self, request):
        """Nominations are only created through the nomination form."""
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False

    def get_category_title(self, obj):
        """Display the catalog title instead of the category id."""
        return CATALOG.category_title(obj.category_id)
    get_category_title.short_description = 'Category'
