"""Users Lists - Domain Models.

Every member keeps at most one blacklist and one favorites list, each made of
clients, masters and tickets.
"""
from django.conf import settings
from django.db import models
from django.db.models import Q

from apps.common.core.models import TimeStampedModel


class MemberListQuerySet(models.QuerySet):
    def of(self, user):
        return self.filter(owner=user)

    def listing(self, owner, user):
        """Lists of ``owner`` that name ``user`` as a client or a master."""
        return self.filter(owner=owner).filter(Q(clients=user) | Q(masters=user))


class MemberList(TimeStampedModel):
    owner = models.OneToOneField(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='%(class)s', verbose_name='Owner')
    clients = models.ManyToManyField(settings.AUTH_USER_MODEL, blank=True, related_name='%(class)s_clients', verbose_name='Clients')
    masters = models.ManyToManyField(settings.AUTH_USER_MODEL, blank=True, related_name='%(class)s_masters', verbose_name='Masters')
    tickets = models.ManyToManyField('tickets.Ticket', blank=True, related_name='%(class)s_entries', verbose_name='Tickets')

    objects = MemberListQuerySet.as_manager()

    class Meta:
        abstract = True
        ordering = ['-created_at']

    def __str__(self) -> str:
        return f"{self._meta.verbose_name} of {self.owner_id}"


class BlackList(MemberList):
    """Members and tickets the owner refuses to deal with."""

    class Meta:
        verbose_name = 'Blacklist'
        verbose_name_plural = 'Blacklists'
        ordering = ['-created_at']


class Favorite(MemberList):

    class Meta:
        verbose_name = 'Favorites'
        verbose_name_plural = 'Favorites'
        ordering = ['-created_at']
