"""Common Core - Base Models and Mixins."""
from django.db import models
from django.utils import timezone


class TimeStampedModel(models.Model):
    """Abstract base model with automatic created/updated timestamps."""
    created_at = models.DateTimeField(default=timezone.now, db_index=True, verbose_name='Created At')
    updated_at = models.DateTimeField(auto_now=True, verbose_name='Updated At')

    class Meta:
        abstract = True
        ordering = ['-created_at']


def search_key(*parts) -> str:
    """Casefolded text for partial matching that ignores case in any alphabet."""
    return ' '.join(str(part) for part in parts if part).casefold()


class SearchableMixin(models.Model):
    """Keeps ``search_text`` in sync with ``search_fields`` on every save."""
    search_text = models.TextField(blank=True, editable=False, verbose_name='Search Text')

    search_fields = ()

    class Meta:
        abstract = True

    def save(self, *args, **kwargs):
        self.search_text = search_key(*(getattr(self, name) for name in self.search_fields))
        update_fields = kwargs.get('update_fields')
        if update_fields is not None and set(update_fields) & set(self.search_fields):
            kwargs['update_fields'] = set(update_fields) | {'search_text'}
        super().save(*args, **kwargs)


class TitledModel(SearchableMixin):
    """Reference data row with a title and optional description."""
    title = models.CharField(max_length=255, verbose_name='Title')
    description = models.TextField(blank=True, verbose_name='Description')

    search_fields = ('title', 'description')

    class Meta:
        abstract = True
        ordering = ['title']

    def __str__(self) -> str:
        return self.title


class ActiveMixin(models.Model):
    """Simple active toggle mixin."""
    active = models.BooleanField(default=True, db_index=True, verbose_name='Active')

    class Meta:
        abstract = True


class ImageMixin(models.Model):
    """Uploaded photo attached to a parent record; subclasses set `image`."""
    sort_order = models.PositiveSmallIntegerField(default=0, verbose_name='Sort Order')
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        abstract = True
        ordering = ['sort_order', 'id']
