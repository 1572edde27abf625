"""Chats between members."""
import pytest

from apps.marketplace.chats.models import Chat
from apps.users.lists.models import BlackList

pytestmark = pytest.mark.django_db


def _user_iri(user):
    return f'/api/users/{user.pk}'


def test_open_a_chat(auth, client_user, master_user):
    response = auth(client_user).post('/api/chats', {'replyAuthor': _user_iri(master_user)}, format='json')

    assert response.status_code == 201
    body = response.json()
    assert body['author'] == _user_iri(client_user)
    assert body['replyAuthor'] == _user_iri(master_user)
    assert body['ticket'] is None


def test_one_chat_per_pair_in_either_direction(auth, client_user, master_user):
    Chat.objects.create(author=master_user, reply_author=client_user)

    response = auth(client_user).post('/api/chats', {'replyAuthor': _user_iri(master_user)}, format='json')

    assert response.status_code == 409
    assert response.json()['code'] == 'CHAT_ALREADY_EXISTS'


def test_chat_with_yourself(auth, client_user):
    response = auth(client_user).post('/api/chats', {'replyAuthor': _user_iri(client_user)}, format='json')

    assert response.status_code == 403
    assert response.json()['code'] == 'SELF_ACTION_FORBIDDEN'


def test_unknown_reply_author(auth, client_user):
    response = auth(client_user).post('/api/chats', {'replyAuthor': '/api/users/not-a-user'}, format='json')

    assert response.status_code == 404
    assert response.json()['code'] == 'USER_NOT_FOUND'


def test_ticket_chat_addresses_the_ticket_master(auth, client_user, master_user, make_ticket):
    service = make_ticket(master_user)

    response = auth(client_user).post('/api/chats', {
        'replyAuthor': _user_iri(master_user), 'ticket': f'/api/tickets/{service.pk}',
    }, format='json')

    assert response.status_code == 201
    assert response.json()['ticket'] == f'/api/tickets/{service.pk}'


def test_ticket_of_another_master(auth, client_user, master_user, other_master, make_ticket):
    foreign = make_ticket(other_master)

    response = auth(client_user).post('/api/chats', {
        'replyAuthor': _user_iri(master_user), 'ticket': f'/api/tickets/{foreign.pk}',
    }, format='json')

    assert response.status_code == 400
    assert response.json()['code'] == 'TICKET_MISMATCH'


def test_list_chats_with_a_participant(auth, client_user, master_user, other_master):
    with_master = Chat.objects.create(author=client_user, reply_author=master_user)
    Chat.objects.create(author=other_master, reply_author=client_user)
    Chat.objects.create(author=other_master, reply_author=master_user)

    api = auth(client_user)

    assert len(api.get('/api/chats').json()) == 2
    assert [c['id'] for c in api.get('/api/chats', {'participant': _user_iri(master_user)}).json()] == [with_master.pk]


def test_participant_must_be_a_user_reference(auth, client_user):
    response = auth(client_user).get('/api/chats', {'participant': '/api/tickets/1'})

    assert response.status_code == 400


def test_outsiders_do_not_see_a_chat(auth, client_user, master_user, other_client):
    chat = Chat.objects.create(author=client_user, reply_author=master_user)

    assert auth(master_user).get(f'/api/chats/{chat.pk}').status_code == 200
    assert auth(other_client).get(f'/api/chats/{chat.pk}').status_code == 404


class TestBlacklist:

    def test_blocked_member_cannot_be_addressed(self, auth, client_user, master_user):
        BlackList.objects.create(owner=client_user).masters.add(master_user)

        response = auth(client_user).post('/api/chats', {'replyAuthor': _user_iri(master_user)}, format='json')

        assert response.status_code == 403
        body = response.json()
        assert (body['code'], body['message']) == ('BLACKLISTED', 'You blacklisted this user')
        assert not Chat.objects.exists()

    def test_blocked_member_cannot_open_a_chat(self, auth, client_user, master_user):
        BlackList.objects.create(owner=master_user).clients.add(client_user)

        response = auth(client_user).post('/api/chats', {'replyAuthor': _user_iri(master_user)}, format='json')

        assert response.status_code == 403
        assert response.json()['message'] == 'You are blacklisted by this user'

    def test_blacklisted_ticket(self, auth, client_user, master_user, make_ticket):
        service = make_ticket(master_user)
        BlackList.objects.create(owner=client_user).tickets.add(service)

        response = auth(client_user).post('/api/chats', {
            'replyAuthor': _user_iri(master_user), 'ticket': f'/api/tickets/{service.pk}',
        }, format='json')

        assert response.status_code == 403
        assert response.json()['message'] == 'You blacklisted this ticket'

    def test_other_lists_do_not_interfere(self, auth, client_user, master_user, other_client):
        BlackList.objects.create(owner=other_client).masters.add(master_user)

        response = auth(client_user).post('/api/chats', {'replyAuthor': _user_iri(master_user)}, format='json')

        assert response.status_code == 201
