"""Common Geography - Administrative Units Models.

Two branches hang under a Province:
- City -> Suburb
- District -> Settlement -> Village, District -> Community
"""
from django.db import models

from apps.common.core.models import TitledModel
from .formatting import format_full_address, format_short_address


class Province(TitledModel):
    """Top of the hierarchy."""

    class Meta:
        verbose_name = 'Province'
        verbose_name_plural = 'Provinces'
        ordering = ['title']


class City(TitledModel):
    province = models.ForeignKey(Province, on_delete=models.CASCADE, related_name='cities', verbose_name='Province')

    class Meta:
        verbose_name = 'City'
        verbose_name_plural = 'Cities'
        ordering = ['title']
        indexes = [models.Index(fields=['province', 'title'])]


class Suburb(TitledModel):
    city = models.ForeignKey(City, on_delete=models.CASCADE, related_name='suburbs', verbose_name='City')

    class Meta:
        verbose_name = 'Suburb'
        verbose_name_plural = 'Suburbs'
        ordering = ['title']


class District(TitledModel):
    province = models.ForeignKey(Province, on_delete=models.CASCADE, related_name='districts', verbose_name='Province')

    class Meta:
        verbose_name = 'District'
        verbose_name_plural = 'Districts'
        ordering = ['title']
        indexes = [models.Index(fields=['province', 'title'])]


class Settlement(TitledModel):
    district = models.ForeignKey(District, on_delete=models.CASCADE, related_name='settlements', verbose_name='District')

    class Meta:
        verbose_name = 'Settlement'
        verbose_name_plural = 'Settlements'
        ordering = ['title']


class Community(TitledModel):
    district = models.ForeignKey(District, on_delete=models.CASCADE, related_name='communities', verbose_name='District')

    class Meta:
        verbose_name = 'Community'
        verbose_name_plural = 'Communities'
        ordering = ['title']


class Village(TitledModel):
    settlement = models.ForeignKey(Settlement, on_delete=models.CASCADE, related_name='villages', verbose_name='Settlement')

    class Meta:
        verbose_name = 'Village'
        verbose_name_plural = 'Villages'
        ordering = ['title']


class Address(models.Model):
    """Persisted address selection owned by tickets and users."""
    province = models.ForeignKey(Province, on_delete=models.CASCADE, related_name='addresses', verbose_name='Province')
    city = models.ForeignKey(City, on_delete=models.SET_NULL, null=True, blank=True, related_name='addresses', verbose_name='City')
    suburb = models.ForeignKey(Suburb, on_delete=models.SET_NULL, null=True, blank=True, related_name='addresses', verbose_name='Suburb')
    district = models.ForeignKey(District, on_delete=models.SET_NULL, null=True, blank=True, related_name='addresses', verbose_name='District')
    settlement = models.ForeignKey(Settlement, on_delete=models.SET_NULL, null=True, blank=True, related_name='addresses', verbose_name='Settlement')
    community = models.ForeignKey(Community, on_delete=models.SET_NULL, null=True, blank=True, related_name='addresses', verbose_name='Community')
    village = models.ForeignKey(Village, on_delete=models.SET_NULL, null=True, blank=True, related_name='addresses', verbose_name='Village')

    class Meta:
        verbose_name = 'Address'
        verbose_name_plural = 'Addresses'
        ordering = ['id']

    def __str__(self) -> str:
        return self.full_address

    @property
    def full_address(self) -> str:
        return format_full_address(self)

    @property
    def short_address(self) -> str:
        return format_short_address(self)

    def as_ids(self) -> dict:
        return {
            'province': self.province_id,
            'city': self.city_id,
            'suburb': self.suburb_id,
            'district': self.district_id,
            'settlement': self.settlement_id,
            'community': self.community_id,
            'village': self.village_id,
        }
