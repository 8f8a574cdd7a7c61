"""
Django app configuration for the recognition module
===================================================

AppConfig subclass that defines the recognition app.
"""

from django.apps import AppConfig # pyright: ignore[reportMissingModuleSource]


class RecognitionConfig(AppConfig):
    """Configuration class for the recognition application."""
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'recognition'
    verbose_name = 'Associate Recognition'

    def ready(self):
        """
        Method called when Django app is ready.
        Registers the insert notification signal handlers.
        """
        from . import signals  # noqa: F401
