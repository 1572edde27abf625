"""Blacklists, favorites and their effect on the directory."""
import pytest

from apps.users.lists.models import BlackList, Favorite

pytestmark = pytest.mark.django_db


def _user_iri(user):
    return f'/api/users/{user.pk}'


def _ids(refs):
    return {ref['id'] for ref in refs}


class TestBlackList:

    def test_create_reports_skipped_entries(self, auth, client_user, master_user, other_client, make_ticket):
        service = make_ticket(master_user)

        response = auth(client_user).post('/api/black-lists', {
            'masters': [_user_iri(master_user), _user_iri(other_client)],
            'clients': [_user_iri(client_user), _user_iri(other_client)],
            'tickets': [f'/api/tickets/{service.pk}', '/api/tickets/999999'],
        }, format='json')

        assert response.status_code == 201
        body = response.json()
        assert body['author'] == {'id': str(client_user.pk)}
        assert _ids(body['masters']) == {str(master_user.pk)}
        assert _ids(body['clients']) == {str(other_client.pk)}
        assert body['tickets'] == [{'id': service.pk}]
        assert body['messages'] == [
            'Cannot add yourself to blacklist',
            f'Master #{_user_iri(other_client)} not found',
            'Ticket #/api/tickets/999999 not found',
        ]

    def test_second_blacklist_is_rejected(self, auth, client_user, master_user):
        BlackList.objects.create(owner=client_user)

        response = auth(client_user).post('/api/black-lists', {'masters': [_user_iri(master_user)]}, format='json')

        assert response.status_code == 400
        assert response.json() == {'code': 'LIST_ALREADY_EXISTS', 'message': 'This user has blacklist, patch instead'}

    def test_at_least_one_collection(self, auth, client_user):
        response = auth(client_user).post('/api/black-lists', {'masters': None}, format='json')

        assert response.status_code == 400
        body = response.json()
        assert body['code'] == 'MISSING_REQUIRED_FIELDS'
        assert body['message'] == 'At least one field (clients, masters, or tickets) must be provided'

    def test_me(self, auth, api_client, client_user, master_user):
        assert auth(client_user).get('/api/black-lists/me').status_code == 404

        BlackList.objects.create(owner=client_user).masters.add(master_user)
        body = api_client.get('/api/black-lists/me').json()

        assert _ids(body['masters']) == {str(master_user.pk)}
        assert 'messages' not in body

    def test_anonymous(self, api_client):
        assert api_client.get('/api/black-lists/me').status_code == 401

    def test_patch_replaces_only_passed_collections(self, auth, client_user, master_user, other_master, other_client):
        blacklist = BlackList.objects.create(owner=client_user)
        blacklist.masters.add(master_user)
        blacklist.clients.add(other_client)

        response = auth(client_user).patch(f'/api/black-lists/{blacklist.pk}',
                                           {'masters': [_user_iri(other_master)]}, format='json')

        assert response.status_code == 200
        assert set(blacklist.masters.all()) == {other_master}
        assert set(blacklist.clients.all()) == {other_client}
        assert response.json()['messages'] == []

    def test_patch_of_another_members_list(self, auth, client_user, other_client, master_user):
        blacklist = BlackList.objects.create(owner=other_client)

        response = auth(client_user).patch(f'/api/black-lists/{blacklist.pk}',
                                           {'masters': [_user_iri(master_user)]}, format='json')

        assert response.status_code == 403
        assert not blacklist.masters.exists()

    def test_delete_by_owner_or_admin(self, auth, client_user, other_client, admin_user):
        mine = BlackList.objects.create(owner=client_user)
        theirs = BlackList.objects.create(owner=other_client)

        assert auth(client_user).delete(f'/api/black-lists/{theirs.pk}').status_code == 403
        assert auth(client_user).delete(f'/api/black-lists/{mine.pk}').status_code == 204
        assert auth(admin_user).delete(f'/api/black-lists/{theirs.pk}').status_code == 204
        assert not BlackList.objects.exists()

    def test_unknown_list(self, auth, client_user):
        response = auth(client_user).delete('/api/black-lists/999999')

        assert response.status_code == 404
        assert response.json()['code'] == 'BLACKLIST_NOT_FOUND'


class TestDirectoryVisibility:

    def test_blacklisted_tickets_and_members_are_hidden(self, auth, client_user, master_user, other_master,
                                                        make_ticket):
        hidden = make_ticket(master_user, 'Скрытая услуга')
        make_ticket(other_master, 'Услуга заблокированного мастера')
        visible = make_ticket(master_user, 'Видимая услуга')
        blacklist = BlackList.objects.create(owner=client_user)
        blacklist.tickets.add(hidden)
        blacklist.masters.add(other_master)

        response = auth(client_user).get('/api/tickets', {'service': 'true'})

        assert [item['id'] for item in response.json()] == [visible.pk]

    def test_anonymous_directory_is_unaffected(self, api_client, client_user, master_user, make_ticket):
        service = make_ticket(master_user)
        BlackList.objects.create(owner=client_user).tickets.add(service)

        assert [item['id'] for item in api_client.get('/api/tickets').json()] == [service.pk]


class TestFavorites:

    def test_create(self, auth, client_user, master_user, make_ticket):
        service = make_ticket(master_user)

        response = auth(client_user).post('/api/favorites', {
            'masters': [_user_iri(master_user)], 'tickets': [service.pk],
        }, format='json')

        assert response.status_code == 201
        body = response.json()
        assert body['user'] == {'id': str(client_user.pk)}
        assert _ids(body['masters']) == {str(master_user.pk)}
        assert body['tickets'] == [{'id': service.pk}]
        assert body['clients'] == []
        assert 'messages' not in body

    def test_unknown_entry_rejects_the_request(self, auth, client_user, other_client):
        response = auth(client_user).post('/api/favorites', {'masters': [_user_iri(other_client)]}, format='json')

        assert response.status_code == 404
        body = response.json()
        assert (body['code'], body['message']) == ('USER_NOT_FOUND', f'Master #{_user_iri(other_client)} not found')
        assert not Favorite.objects.exists()

    def test_second_favorites_list_is_rejected(self, auth, client_user, master_user):
        Favorite.objects.create(owner=client_user)

        response = auth(client_user).post('/api/favorites', {'masters': [_user_iri(master_user)]}, format='json')

        assert response.status_code == 400
        assert response.json()['message'] == 'This user has favorites, patch instead'

    def test_patch_clears_a_collection(self, auth, client_user, master_user, make_ticket):
        favorite = Favorite.objects.create(owner=client_user)
        favorite.masters.add(master_user)
        favorite.tickets.add(make_ticket(master_user))

        response = auth(client_user).patch(f'/api/favorites/{favorite.pk}', {'tickets': []}, format='json')

        assert response.status_code == 200
        assert response.json()['tickets'] == []
        assert set(favorite.masters.all()) == {master_user}

    def test_patch_with_unknown_ticket_keeps_the_list(self, auth, client_user, master_user, make_ticket):
        favorite = Favorite.objects.create(owner=client_user)
        service = make_ticket(master_user)
        favorite.tickets.add(service)

        response = auth(client_user).patch(f'/api/favorites/{favorite.pk}', {'tickets': ['/api/tickets/999999']},
                                           format='json')

        assert response.status_code == 404
        assert response.json()['code'] == 'TICKET_NOT_FOUND'
        assert set(favorite.tickets.all()) == {service}

    def test_me_and_delete(self, auth, client_user):
        favorite = Favorite.objects.create(owner=client_user)
        api = auth(client_user)

        assert api.get('/api/favorites/me').json()['id'] == favorite.pk
        assert api.delete(f'/api/favorites/{favorite.pk}').status_code == 204
        assert api.get('/api/favorites/me').json()['code'] == 'FAVORITE_NOT_FOUND'
