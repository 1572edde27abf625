"""Common Geography - Signal Handlers.

Reference data changes invalidate the cached lookup lists.
"""
from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from .models import City, Community, District, Province, Settlement, Suburb, Village
from .services import GeographySelector

REFERENCE_MODELS = (Province, City, Suburb, District, Settlement, Community, Village)


@receiver(post_save)
@receiver(post_delete)
def on_reference_changed(sender, **kwargs):
    if sender in REFERENCE_MODELS:
        GeographySelector.invalidate()
