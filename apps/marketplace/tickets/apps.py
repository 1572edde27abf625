from django.apps import AppConfig


class TicketsConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.marketplace.tickets'
    label = 'tickets'
    verbose_name = 'Tickets'
