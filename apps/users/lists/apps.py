from django.apps import AppConfig


class ListsConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.users.lists'
    label = 'lists'
    verbose_name = 'Blacklists and Favorites'
