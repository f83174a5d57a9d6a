"""
Django app configuration for Notifications app
"""

from django.apps import AppConfig


class NotificationsConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.notifications'
    verbose_name = 'Notifications'

    def ready(self) -> None:
        """Connect order signal receivers when Django starts"""
        from . import receivers  # noqa: F401, PLC0415 - Django app ready() pattern
