"""Marketplace Tickets - Domain Models.

A ticket is either a service offered by a master (``service=True``) or a
request posted by a client (``service=False``).
"""
from django.conf import settings
from django.db import models

from apps.common.core.models import ActiveMixin, ImageMixin, SearchableMixin, TimeStampedModel, TitledModel
from apps.common.core.storage import ticket_image_path


class Category(TitledModel):
    image = models.ImageField(upload_to='categories/', blank=True, null=True, verbose_name='Image')

    class Meta:
        verbose_name = 'Category'
        verbose_name_plural = 'Categories'
        ordering = ['title']


class Occupation(TitledModel):
    """Profession tag narrowing a category (ticket subcategory)."""
    categories = models.ManyToManyField(Category, blank=True, related_name='occupations', verbose_name='Categories')

    class Meta:
        verbose_name = 'Occupation'
        verbose_name_plural = 'Occupations'
        ordering = ['title']


class Unit(TitledModel):
    """Budget unit (per hour, per m2, per job...)."""

    class Meta:
        verbose_name = 'Unit'
        verbose_name_plural = 'Units'
        ordering = ['title']


class TicketQuerySet(models.QuerySet):
    def active(self):
        return self.filter(active=True)

    def services(self):
        return self.filter(service=True)

    def requests(self):
        return self.filter(service=False)

    def with_relations(self):
        return self.select_related('category', 'subcategory', 'unit', 'author', 'master').prefetch_related(
            'addresses__province', 'addresses__city', 'addresses__suburb', 'addresses__district',
            'addresses__settlement', 'addresses__community', 'addresses__village', 'images',
        )


class Ticket(TimeStampedModel, ActiveMixin, SearchableMixin):
    title = models.CharField(max_length=255, verbose_name='Title')
    description = models.TextField(blank=True, verbose_name='Description')
    notice = models.TextField(blank=True, verbose_name='Notice')
    budget = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True, verbose_name='Budget')
    negotiable_budget = models.BooleanField(default=False, verbose_name='Negotiable Budget')
    unit = models.ForeignKey(Unit, on_delete=models.SET_NULL, null=True, blank=True, related_name='tickets', verbose_name='Unit')
    category = models.ForeignKey(Category, on_delete=models.PROTECT, related_name='tickets', verbose_name='Category')
    subcategory = models.ForeignKey(Occupation, on_delete=models.SET_NULL, null=True, blank=True, related_name='tickets', verbose_name='Subcategory')
    addresses = models.ManyToManyField('geography.Address', blank=True, related_name='tickets', verbose_name='Addresses')
    author = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, null=True, blank=True, related_name='authored_tickets', verbose_name='Author')
    master = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, null=True, blank=True, related_name='mastered_tickets', verbose_name='Master')
    service = models.BooleanField(default=False, db_index=True, verbose_name='Service')

    search_fields = ('description',)

    objects = TicketQuerySet.as_manager()

    class Meta:
        verbose_name = 'Ticket'
        verbose_name_plural = 'Tickets'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['category', 'service', 'active']),
            models.Index(fields=['author', 'active']),
            models.Index(fields=['master', 'active']),
        ]

    def __str__(self) -> str:
        kind = 'Service' if self.service else 'Request'
        return f"{kind} #{self.pk}: {self.title}"

    @property
    def owner(self):
        """User who published the ticket: the master of a service, the author of a request."""
        return self.master if self.service else self.author

    @property
    def owner_id(self):
        return self.master_id if self.service else self.author_id

    def involves(self, user) -> bool:
        return user is not None and user.pk in (self.author_id, self.master_id)


class TicketImage(ImageMixin):
    ticket = models.ForeignKey(Ticket, on_delete=models.CASCADE, related_name='images', verbose_name='Ticket')
    image = models.ImageField(upload_to=ticket_image_path, verbose_name='Image')

    class Meta:
        verbose_name = 'Ticket Image'
        verbose_name_plural = 'Ticket Images'
        ordering = ['sort_order', 'id']

    def __str__(self) -> str:
        return f"Image for {self.ticket}"
