"""Marketplace Chats - Domain Models."""
from django.conf import settings
from django.db import models
from django.db.models import Q

from apps.common.core.models import ActiveMixin, TimeStampedModel


class ChatQuerySet(models.QuerySet):
    def involving(self, user):
        return self.filter(Q(author=user) | Q(reply_author=user))

    def between(self, first, second, ticket=None):
        """Chats between two users about ``ticket`` (or about nothing), in either direction."""
        return self.filter(
            Q(author=first, reply_author=second) | Q(author=second, reply_author=first),
            ticket=ticket,
        )


class Chat(TimeStampedModel, ActiveMixin):
    """Conversation opened by ``author`` with ``reply_author``, optionally about a ticket."""
    author = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='authored_chats', verbose_name='Author')
    reply_author = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='replied_chats', verbose_name='Reply Author')
    ticket = models.ForeignKey('tickets.Ticket', on_delete=models.SET_NULL, null=True, blank=True, related_name='chats', verbose_name='Ticket')

    objects = ChatQuerySet.as_manager()

    class Meta:
        verbose_name = 'Chat'
        verbose_name_plural = 'Chats'
        ordering = ['-created_at']
        indexes = [models.Index(fields=['author', 'reply_author'])]

    def __str__(self) -> str:
        return f"Chat #{self.pk}: {self.author_id} -> {self.reply_author_id}"

    def involves(self, user) -> bool:
        return user is not None and user.pk in (self.author_id, self.reply_author_id)
