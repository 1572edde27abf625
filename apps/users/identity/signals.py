"""Users Identity - Signal Handlers."""
import logging
from django.contrib.auth.signals import user_login_failed
from django.db.models.signals import post_save
from django.dispatch import receiver

from .models import User

logger = logging.getLogger('apps.identity')


@receiver(post_save, sender=User)
def on_user_saved(sender, instance, created, **kwargs):
    if created:
        logger.info(f"User created: {instance.id} ({instance.role})")


@receiver(user_login_failed)
def on_login_failed(sender, credentials, **kwargs):
    logger.warning(f"Login failed for {credentials.get('email') or credentials.get('username')}")
