from django.apps import AppConfig


class IdentityConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.users.identity'
    label = 'identity'
    verbose_name = 'Identity'

    def ready(self):
        from . import signals  # noqa
