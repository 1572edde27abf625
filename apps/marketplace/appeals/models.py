"""Marketplace Appeals - Domain Models."""
from django.conf import settings
from django.db import models

from apps.common.core.models import ImageMixin, TimeStampedModel
from apps.common.core.storage import appeal_image_path
from .reasons import complaint_reasons


class Appeal(TimeStampedModel):
    """Complaint one member files against another about a ticket or a chat."""

    class Type(models.TextChoices):
        TICKET = 'ticket', 'Ticket'
        CHAT = 'chat', 'Chat'

    class Status(models.TextChoices):
        NEW = 'new', 'New'
        IN_PROGRESS = 'in_progress', 'In Progress'
        CLOSED = 'closed', 'Closed'

    type = models.CharField(max_length=10, choices=Type.choices, verbose_name='Type')
    title = models.CharField(max_length=255, verbose_name='Title')
    description = models.TextField(verbose_name='Description')
    reason = models.CharField(max_length=50, choices=[(r['code'], r['title']) for r in complaint_reasons()], verbose_name='Complaint Reason')
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.NEW, db_index=True, verbose_name='Status')
    author = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='filed_appeals', verbose_name='Author')
    respondent = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='received_appeals', verbose_name='Respondent')
    ticket = models.ForeignKey('tickets.Ticket', on_delete=models.SET_NULL, null=True, blank=True, related_name='appeals', verbose_name='Ticket')
    chat = models.ForeignKey('chats.Chat', on_delete=models.SET_NULL, null=True, blank=True, related_name='appeals', verbose_name='Chat')

    class Meta:
        verbose_name = 'Appeal'
        verbose_name_plural = 'Appeals'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['respondent', 'status']),
            models.Index(fields=['author', '-created_at']),
        ]

    def __str__(self) -> str:
        return f"Appeal #{self.pk} ({self.type}): {self.title}"


class AppealImage(ImageMixin):
    appeal = models.ForeignKey(Appeal, on_delete=models.CASCADE, related_name='images', verbose_name='Appeal')
    image = models.ImageField(upload_to=appeal_image_path, verbose_name='Image')

    class Meta:
        verbose_name = 'Appeal Image'
        verbose_name_plural = 'Appeal Images'
        ordering = ['sort_order', 'id']

    def __str__(self) -> str:
        return f"Image for {self.appeal}"
