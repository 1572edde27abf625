"""Common Geography App Configuration."""
from django.apps import AppConfig


class GeographyConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.common.geography'
    label = 'geography'
    verbose_name = 'Geography'

    def ready(self):
        from . import signals  # noqa
