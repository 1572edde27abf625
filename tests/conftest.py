"""Shared fixtures for the marketplace test suite."""
import io

import pytest
from django.core.cache import cache
from django.core.files.uploadedfile import SimpleUploadedFile
from PIL import Image
from rest_framework.test import APIClient

from apps.common.geography.models import City, Community, District, Province, Settlement, Suburb, Village
from apps.marketplace.tickets.models import Category, Occupation, Ticket, Unit
from apps.users.identity.models import User

PASSWORD = 'Strong-pass-2024'


@pytest.fixture(autouse=True)
def clear_cache():
    cache.clear()
    yield
    cache.clear()


@pytest.fixture(autouse=True)
def media_root(settings, tmp_path):
    settings.MEDIA_ROOT = tmp_path / 'media'


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def make_user(db):
    def _make(email, role=User.Role.CLIENT, first_name='', last_name='', **extra):
        return User.objects.create_user(email=email, password=PASSWORD, role=role,
                                        first_name=first_name, last_name=last_name, **extra)
    return _make


@pytest.fixture
def client_user(make_user):
    return make_user('client@example.com', User.Role.CLIENT, first_name='Иван', last_name='Петров')


@pytest.fixture
def other_client(make_user):
    return make_user('client2@example.com', User.Role.CLIENT, first_name='Пётр')


@pytest.fixture
def master_user(make_user):
    return make_user('master@example.com', User.Role.MASTER, first_name='Сергей', last_name='Мастеров')


@pytest.fixture
def other_master(make_user):
    return make_user('master2@example.com', User.Role.MASTER, first_name='Олег')


@pytest.fixture
def admin_user(make_user):
    return make_user('admin@example.com', User.Role.ADMIN, is_staff=True)


@pytest.fixture
def auth(api_client):
    """Authenticate the shared API client as ``user`` (or anonymous with None)."""
    def _auth(user):
        api_client.force_authenticate(user=user)
        return api_client
    return _auth


@pytest.fixture
def geo(db):
    """Two provinces; the first has a city branch and a district branch."""
    moscow_region = Province.objects.create(title='Московская область')
    tver_region = Province.objects.create(title='Тверская область')
    city = City.objects.create(title='Москва', province=moscow_region)
    suburb = Suburb.objects.create(title='Хамовники', city=city)
    district = District.objects.create(title='Одинцовский район', province=moscow_region)
    settlement = Settlement.objects.create(title='Кубинка', district=district)
    village = Village.objects.create(title='Наро-Осаново', settlement=settlement)
    community = Community.objects.create(title='Жаворонки', district=district)
    tver = City.objects.create(title='Тверь', province=tver_region)
    return {
        'province': moscow_region,
        'other_province': tver_region,
        'city': city,
        'suburb': suburb,
        'district': district,
        'settlement': settlement,
        'village': village,
        'community': community,
        'other_city': tver,
    }


@pytest.fixture
def category(db):
    return Category.objects.create(title='Ремонт')


@pytest.fixture
def other_category(db):
    return Category.objects.create(title='Уборка')


@pytest.fixture
def occupation(category):
    occupation = Occupation.objects.create(title='Электрик')
    occupation.categories.add(category)
    return occupation


@pytest.fixture
def unit(db):
    return Unit.objects.create(title='за час')


@pytest.fixture
def make_ticket(category):
    def _make(owner, title='Ticket', budget=None, active=True, ticket_category=None, **extra):
        fields = {'title': title, 'budget': budget, 'active': active, 'category': ticket_category or category}
        if owner.is_master:
            fields.update(master=owner, service=True)
        else:
            fields.update(author=owner, service=False)
        fields.update(extra)
        return Ticket.objects.create(**fields)
    return _make


@pytest.fixture
def image_file():
    def _image(name='photo.png'):
        buffer = io.BytesIO()
        Image.new('RGB', (8, 8), color='red').save(buffer, format='PNG')
        return SimpleUploadedFile(name, buffer.getvalue(), content_type='image/png')
    return _image
