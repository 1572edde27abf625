"""Marketplace Reviews - Domain Models."""
from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.db.models import Q

from apps.common.core.models import ImageMixin, TimeStampedModel
from apps.common.core.storage import review_image_path


class ReviewQuerySet(models.QuerySet):
    def about(self, user_id):
        """Reviews rating the given user, whichever side they were on."""
        return self.filter(
            Q(type=Review.Type.MASTER, master_id=user_id) | Q(type=Review.Type.CLIENT, client_id=user_id)
        )


class Review(TimeStampedModel):
    """A rating one side of a ticket leaves about the other side."""

    class Type(models.TextChoices):
        # the side being rated
        CLIENT = 'client', 'Client'
        MASTER = 'master', 'Master'

    type = models.CharField(max_length=10, choices=Type.choices, verbose_name='Type')
    rating = models.PositiveSmallIntegerField(validators=[MinValueValidator(1), MaxValueValidator(5)], verbose_name='Rating')
    description = models.TextField(blank=True, verbose_name='Description')
    ticket = models.ForeignKey('tickets.Ticket', on_delete=models.SET_NULL, null=True, blank=True, related_name='reviews', verbose_name='Ticket')
    master = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='master_reviews', verbose_name='Master')
    client = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='client_reviews', verbose_name='Client')

    objects = ReviewQuerySet.as_manager()

    class Meta:
        verbose_name = 'Review'
        verbose_name_plural = 'Reviews'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['type', 'master', '-created_at']),
            models.Index(fields=['type', 'client', '-created_at']),
        ]

    def __str__(self) -> str:
        return f"{self.get_type_display()} review {self.rating}★ ({self.master_id} / {self.client_id})"

    @property
    def reviewer(self):
        return self.client if self.type == self.Type.MASTER else self.master

    @property
    def reviewer_id(self):
        return self.client_id if self.type == self.Type.MASTER else self.master_id

    @property
    def target_id(self):
        return self.master_id if self.type == self.Type.MASTER else self.client_id


class ReviewImage(ImageMixin):
    review = models.ForeignKey(Review, on_delete=models.CASCADE, related_name='images', verbose_name='Review')
    image = models.ImageField(upload_to=review_image_path, verbose_name='Image')

    class Meta:
        verbose_name = 'Review Image'
        verbose_name_plural = 'Review Images'
        ordering = ['sort_order', 'id']

    def __str__(self) -> str:
        return f"Image for {self.review}"
