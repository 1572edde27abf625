"""Common Geography - Admin Configuration."""
from django.contrib import admin
from django.utils.html import format_html
from unfold.admin import ModelAdmin, TabularInline

from .models import Address, City, Community, District, Province, Settlement, Suburb, Village


class CityInline(TabularInline):
    model = City
    extra = 0
    fields = ['title', 'description']


class DistrictInline(TabularInline):
    model = District
    extra = 0
    fields = ['title', 'description']


class SuburbInline(TabularInline):
    model = Suburb
    extra = 0
    fields = ['title', 'description']


class SettlementInline(TabularInline):
    model = Settlement
    extra = 0
    fields = ['title', 'description']


class CommunityInline(TabularInline):
    model = Community
    extra = 0
    fields = ['title', 'description']


class VillageInline(TabularInline):
    model = Village
    extra = 0
    fields = ['title', 'description']


@admin.register(Province)
class ProvinceAdmin(ModelAdmin):
    list_display = ['id', 'title', 'branch_count_display']
    search_fields = ['title', 'description']
    inlines = [CityInline, DistrictInline]

    @admin.display(description='Cities / Districts')
    def branch_count_display(self, obj):
        return format_html('<span style="font-weight: bold;">{} / {}</span>', obj.cities.count(), obj.districts.count())


@admin.register(City)
class CityAdmin(ModelAdmin):
    list_display = ['id', 'title', 'province']
    list_filter = ['province']
    search_fields = ['title', 'description', 'province__title']
    autocomplete_fields = ['province']
    inlines = [SuburbInline]


@admin.register(District)
class DistrictAdmin(ModelAdmin):
    list_display = ['id', 'title', 'province']
    list_filter = ['province']
    search_fields = ['title', 'description', 'province__title']
    autocomplete_fields = ['province']
    inlines = [SettlementInline, CommunityInline]


@admin.register(Suburb)
class SuburbAdmin(ModelAdmin):
    list_display = ['id', 'title', 'city']
    search_fields = ['title', 'city__title']
    autocomplete_fields = ['city']


@admin.register(Settlement)
class SettlementAdmin(ModelAdmin):
    list_display = ['id', 'title', 'district']
    search_fields = ['title', 'district__title']
    autocomplete_fields = ['district']
    inlines = [VillageInline]


@admin.register(Community)
class CommunityAdmin(ModelAdmin):
    list_display = ['id', 'title', 'district']
    search_fields = ['title', 'district__title']
    autocomplete_fields = ['district']


@admin.register(Village)
class VillageAdmin(ModelAdmin):
    list_display = ['id', 'title', 'settlement']
    search_fields = ['title', 'settlement__title']
    autocomplete_fields = ['settlement']


@admin.register(Address)
class AddressAdmin(ModelAdmin):
    list_display = ['id', 'full_address']
    list_filter = ['province']
    raw_id_fields = ['province', 'city', 'suburb', 'district', 'settlement', 'community', 'village']
