"""Complaints and the reason catalogue."""
import pytest

from apps.marketplace.appeals.models import Appeal
from apps.marketplace.appeals.reasons import CHAT_REASONS, TICKET_REASONS, complaint_reasons, is_valid_reason
from apps.marketplace.chats.models import Chat

pytestmark = pytest.mark.django_db


def _iri(collection, pk):
    return f'/api/{collection}/{pk}'


def _complaint(respondent, **extra):
    payload = {
        'title': 'Жалоба на пользователя',
        'description': 'Не пришёл в назначенное время',
        'complaintReason': 'lateness',
        'respondent': _iri('users', respondent.pk),
    }
    payload.update(extra)
    return payload


class TestReasons:

    def test_catalogue_has_no_duplicate_codes(self):
        reasons = complaint_reasons()
        codes = [reason['code'] for reason in reasons]

        assert len(codes) == len(set(codes)) == len({code for code, _ in CHAT_REASONS + TICKET_REASONS})
        assert [reason['id'] for reason in reasons] == list(range(1, len(reasons) + 1))
        assert codes[0] == 'offend'

    def test_endpoint(self, api_client):
        response = api_client.get('/api/appeals/reasons')

        assert response.status_code == 200
        assert {'id': 5, 'code': 'other', 'title': 'Другое'} in response.json()

    def test_validity(self):
        assert is_valid_reason('fraud')
        assert not is_valid_reason('boredom')


def test_ticket_complaint(auth, client_user, master_user, make_ticket):
    service = make_ticket(master_user)

    response = auth(client_user).post('/api/appeals', _complaint(
        master_user, type='ticket', ticket=_iri('tickets', service.pk)), format='json')

    assert response.status_code == 201
    body = response.json()
    assert (body['type'], body['status'], body['complaintReason']) == ('ticket', 'new', 'lateness')
    assert body['respondent'] == _iri('users', master_user.pk)
    assert body['author'] == _iri('users', client_user.pk)


def test_ticket_must_involve_the_respondent(auth, client_user, master_user, other_master, make_ticket):
    foreign = make_ticket(other_master)

    response = auth(client_user).post('/api/appeals', _complaint(
        master_user, type='ticket', ticket=_iri('tickets', foreign.pk)), format='json')

    assert response.status_code == 400
    assert response.json()['code'] == 'TICKET_MISMATCH'


def test_chat_complaint(auth, client_user, other_client):
    chat = Chat.objects.create(author=client_user, reply_author=other_client)

    response = auth(client_user).post('/api/appeals', _complaint(
        other_client, type='chat', chat=_iri('chats', chat.pk), complaintReason='offend'), format='json')

    assert response.status_code == 201
    assert Appeal.objects.get().chat == chat


def test_chat_opened_by_the_respondent_is_accepted(auth, client_user, other_client):
    chat = Chat.objects.create(author=other_client, reply_author=client_user)

    response = auth(client_user).post('/api/appeals', _complaint(
        other_client, type='chat', chat=_iri('chats', chat.pk), complaintReason='offend'), format='json')

    assert response.status_code == 201
    assert Appeal.objects.get().chat == chat


def test_chat_must_link_complainant_and_respondent(auth, client_user, other_client, master_user):
    chat = Chat.objects.create(author=other_client, reply_author=master_user)

    response = auth(client_user).post('/api/appeals', _complaint(
        other_client, type='chat', chat=_iri('chats', chat.pk)), format='json')

    assert response.status_code == 400
    assert response.json()['code'] == 'CHAT_MISMATCH'
    assert not Appeal.objects.exists()



def test_missing_fields_are_all_reported(auth, client_user):
    response = auth(client_user).post('/api/appeals', {}, format='json')

    assert response.status_code == 400
    body = response.json()
    assert body['code'] == 'MISSING_REQUIRED_FIELDS'
    assert body['details']['fields'] == ['type', 'title', 'description', 'complaintReason', 'respondent']


def test_unknown_reason(auth, client_user, master_user):
    response = auth(client_user).post('/api/appeals', _complaint(master_user, type='chat', complaintReason='boredom'),
                                      format='json')

    assert response.status_code == 400
    assert response.json()['code'] == 'INVALID_COMPLAINT_REASON'


def test_complaint_about_yourself(auth, client_user):
    response = auth(client_user).post('/api/appeals', _complaint(client_user, type='chat'), format='json')

    assert response.status_code == 403
    assert response.json()['code'] == 'SELF_ACTION_FORBIDDEN'


def test_wrong_type(auth, client_user, master_user):
    response = auth(client_user).post('/api/appeals', _complaint(master_user, type='review'), format='json')

    assert response.status_code == 400
    assert response.json()['code'] == 'VALIDATION_ERROR'


def test_list_shows_own_complaints_only(auth, client_user, other_client, master_user):
    Appeal.objects.create(type='chat', title='A', description='d', reason='other', author=client_user,
                          respondent=master_user)
    Appeal.objects.create(type='chat', title='B', description='d', reason='other', author=other_client,
                          respondent=master_user)

    response = auth(client_user).get('/api/appeals')

    assert [a['title'] for a in response.json()] == ['A']


def test_author_uploads_photos(auth, client_user, master_user, image_file):
    appeal = Appeal.objects.create(type='chat', title='A', description='d', reason='other', author=client_user,
                                   respondent=master_user)

    assert auth(master_user).post(f'/api/appeals/{appeal.pk}/upload-photo', {'imageFile': image_file()},
                                  format='multipart').status_code == 403
    assert auth(client_user).post(f'/api/appeals/{appeal.pk}/upload-photo', {'imageFile': image_file()},
                                  format='multipart').status_code == 201
