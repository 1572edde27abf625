"""Ticket directory, publishing and photo upload."""
from datetime import timedelta

import pytest
from django.utils import timezone

from apps.common.geography.services import AddressService
from apps.marketplace.reviews.models import Review
from apps.marketplace.tickets.directory import build_directory_query
from apps.marketplace.tickets.models import Ticket

pytestmark = pytest.mark.django_db


def _ids(response):
    return [item['id'] for item in response.json()]


class TestDirectory:

    def test_master_query_returns_other_clients_requests(self, api_client, master_user, client_user, other_master,
                                                        make_ticket, category, other_category):
        request = make_ticket(client_user, 'Нужен электрик')
        make_ticket(master_user, 'Мои услуги')
        make_ticket(other_master, 'Чужие услуги')
        make_ticket(client_user, 'Другая категория', ticket_category=other_category)
        make_ticket(client_user, 'Закрытая заявка', active=False)

        response = api_client.get('/api/tickets', build_directory_query('master', master_user.pk, category.pk))

        assert response.status_code == 200
        assert _ids(response) == [request.pk]

    def test_client_query_returns_masters_services(self, api_client, master_user, client_user, make_ticket, category):
        service = make_ticket(master_user, 'Электромонтаж')
        make_ticket(client_user, 'Моя заявка')

        response = api_client.get('/api/tickets', build_directory_query('client', client_user.pk, category.pk))

        assert _ids(response) == [service.pk]
        assert response.json()[0]['master']['id'] == str(master_user.pk)

    def test_subcategory_narrows_the_category(self, api_client, client_user, make_ticket, occupation):
        electric = make_ticket(client_user, 'Проводка', subcategory=occupation)
        make_ticket(client_user, 'Покраска')

        response = api_client.get('/api/tickets', {'subcategory': f'/api/occupations/{occupation.pk}'})

        assert _ids(response) == [electric.pk]

    def test_owner_statistics(self, api_client, master_user, client_user, other_client, make_ticket):
        service = make_ticket(master_user, 'Сантехника')
        Review.objects.create(type=Review.Type.MASTER, rating=4, master=master_user, client=client_user)
        Review.objects.create(type=Review.Type.MASTER, rating=2, master=master_user, client=other_client)
        Review.objects.create(type=Review.Type.CLIENT, rating=5, master=master_user, client=client_user)

        item = api_client.get(f'/api/tickets/{service.pk}').json()

        assert item['reviewsCount'] == 2
        assert item['rating'] == 3.0

    def test_sort_and_secondary_sort(self, api_client, client_user, make_ticket):
        created = timezone.now() - timedelta(hours=2)
        cheap = make_ticket(client_user, 'Дёшево', budget=100, created_at=created)
        expensive = make_ticket(client_user, 'Дорого', budget=900, created_at=created)
        newest = make_ticket(client_user, 'Новое', budget=50)

        response = api_client.get('/api/tickets', {'sort': 'newest', 'secondarySort': 'price-desc'})

        assert _ids(response) == [newest.pk, expensive.pk, cheap.pk]

    def test_period(self, api_client, client_user, make_ticket):
        fresh = make_ticket(client_user, 'Свежая')
        make_ticket(client_user, 'Старая', created_at=timezone.now() - timedelta(days=45))

        assert _ids(api_client.get('/api/tickets', {'period': 'month'})) == [fresh.pk]

    def test_unknown_period(self, api_client):
        response = api_client.get('/api/tickets', {'period': 'decade'})

        assert response.status_code == 400

    def test_hydra_envelope(self, api_client, client_user, make_ticket):
        make_ticket(client_user)

        body = api_client.get('/api/tickets', HTTP_ACCEPT='application/ld+json').json()

        assert body['hydra:totalItems'] == 1

    def test_malformed_user_reference_matches_nothing(self, api_client, client_user, make_ticket):
        make_ticket(client_user)

        assert api_client.get('/api/tickets', {'author': 'not-a-uuid'}).json() == []

    @pytest.mark.parametrize('value', ['моск', 'МОСКВА', 'Моск', 'москва'])
    def test_city_text_ignores_case(self, api_client, client_user, make_ticket, geo, value):
        in_moscow = make_ticket(client_user, 'В Москве')
        in_moscow.addresses.add(AddressService.resolve_payload({'province': geo['province'].pk, 'city': geo['city'].pk}))
        in_tver = make_ticket(client_user, 'В Твери')
        in_tver.addresses.add(AddressService.resolve_payload(
            {'province': geo['other_province'].pk, 'city': geo['other_city'].pk}))

        assert _ids(api_client.get('/api/tickets', {'city': value})) == [in_moscow.pk]

    def test_geography_id_and_district_text(self, api_client, client_user, make_ticket, geo):
        rural = make_ticket(client_user, 'В районе')
        rural.addresses.add(AddressService.resolve_payload({'province': geo['province'].pk, 'district': geo['district'].pk}))
        make_ticket(client_user, 'Без адреса')

        assert _ids(api_client.get('/api/tickets', {'district': str(geo['district'].pk)})) == [rural.pk]
        assert _ids(api_client.get('/api/tickets', {'district': 'одинцовский'})) == [rural.pk]
        assert _ids(api_client.get('/api/tickets', {'city': str(geo['city'].pk)})) == []

    def test_budget_bounds(self, api_client, client_user, make_ticket):
        make_ticket(client_user, 'Дёшево', budget=100)
        middle = make_ticket(client_user, 'Средне', budget=500)
        make_ticket(client_user, 'Дорого', budget=900)
        make_ticket(client_user, 'Без бюджета')

        response = api_client.get('/api/tickets', {'budget[gte]': 200, 'budget[lte]': 800})

        assert _ids(response) == [middle.pk]

    def test_description_ignores_case(self, api_client, client_user, make_ticket):
        wiring = make_ticket(client_user, 'Проводка', description='Заменить Проводку в квартире')
        make_ticket(client_user, 'Покраска', description='Покрасить стены')

        assert _ids(api_client.get('/api/tickets', {'description': 'проводк'})) == [wiring.pk]

    def test_edited_description_is_searchable(self, auth, api_client, client_user, make_ticket):
        ticket = make_ticket(client_user, 'Ремонт', description='Старое описание')

        auth(client_user).patch(f'/api/tickets/{ticket.pk}', {'description': 'Нужен Сантехник'}, format='json')

        assert _ids(api_client.get('/api/tickets', {'description': 'сантехник'})) == [ticket.pk]


class TestPublishing:

    def _payload(self, category, geo, **extra):
        payload = {
            'title': 'Замена проводки',
            'description': 'Двухкомнатная квартира',
            'budget': '15000.00',
            'negotiableBudget': True,
            'category': f'/api/categories/{category.pk}',
            'addresses': [{
                'province': f"/api/provinces/{geo['province'].pk}",
                'city': f"/api/cities/{geo['city'].pk}",
            }],
        }
        payload.update(extra)
        return payload

    def test_master_publishes_a_service(self, auth, master_user, category, geo):
        response = auth(master_user).post('/api/tickets', self._payload(category, geo), format='json')

        assert response.status_code == 201
        body = response.json()
        assert body['service'] is True
        assert body['master']['id'] == str(master_user.pk)
        assert body['author'] is None
        assert body['negotiableBudget'] is True
        assert body['addresses'][0]['full_address'] == 'Московская область, Москва'

    def test_client_publishes_a_request(self, auth, client_user, category, geo, unit):
        response = auth(client_user).post('/api/tickets', self._payload(category, geo, unit=f'/api/units/{unit.pk}'),
                                          format='json')

        assert response.status_code == 201
        ticket = Ticket.objects.get(pk=response.json()['id'])
        assert (ticket.service, ticket.author, ticket.unit) == (False, client_user, unit)

    def test_invalid_address_is_rejected(self, auth, client_user, category, geo):
        payload = self._payload(category, geo, addresses=[{
            'province': f"/api/provinces/{geo['province'].pk}",
            'city': f"/api/cities/{geo['other_city'].pk}",
        }])

        response = auth(client_user).post('/api/tickets', payload, format='json')

        assert response.status_code == 400
        assert response.json()['code'] == 'INVALID_ADDRESS'
        assert not Ticket.objects.exists()

    def test_anonymous_cannot_publish(self, api_client, category, geo):
        response = api_client.post('/api/tickets', self._payload(category, geo), format='json')

        assert response.status_code == 401

    def test_admin_cannot_publish(self, auth, admin_user, category, geo):
        response = auth(admin_user).post('/api/tickets', self._payload(category, geo), format='json')

        assert response.status_code == 403

    def test_only_the_owner_edits(self, auth, client_user, other_client, make_ticket):
        ticket = make_ticket(client_user, 'Старое название')

        denied = auth(other_client).patch(f'/api/tickets/{ticket.pk}', {'title': 'Чужое'}, format='json')
        assert denied.status_code == 403
        assert denied.json()['code'] == 'PERMISSION_DENIED'

        allowed = auth(client_user).patch(f'/api/tickets/{ticket.pk}', {'title': 'Новое', 'active': False}, format='json')
        assert allowed.status_code == 200
        assert (allowed.json()['title'], allowed.json()['active']) == ('Новое', False)

    def test_unknown_ticket(self, api_client):
        response = api_client.get('/api/tickets/999999')

        assert response.status_code == 404
        assert response.json()['code'] == 'TICKET_NOT_FOUND'


class TestPhotos:

    def test_owner_uploads(self, auth, master_user, make_ticket, image_file):
        ticket = make_ticket(master_user)

        response = auth(master_user).post(f'/api/tickets/{ticket.pk}/upload-photo', {'imageFile': image_file()},
                                          format='multipart')

        assert response.status_code == 201
        assert ticket.images.count() == 1

    def test_stranger_cannot_upload(self, auth, master_user, client_user, make_ticket, image_file):
        ticket = make_ticket(master_user)

        response = auth(client_user).post(f'/api/tickets/{ticket.pk}/upload-photo', {'imageFile': image_file()},
                                          format='multipart')

        assert response.status_code == 403


class TestCatalog:

    def test_occupations_of_a_category(self, api_client, occupation, other_category):
        response = api_client.get('/api/occupations', {'category': occupation.categories.first().pk})

        assert [o['title'] for o in response.json()] == ['Электрик']
        assert api_client.get('/api/occupations', {'category': other_category.pk}).json() == []

    def test_categories_and_units(self, api_client, category, unit):
        assert [c['title'] for c in api_client.get('/api/categories').json()] == ['Ремонт']
        assert [u['title'] for u in api_client.get('/api/units').json()] == ['за час']
