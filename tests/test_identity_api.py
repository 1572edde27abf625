"""Registration, login and profiles."""
import pytest

from apps.marketplace.reviews.models import Review
from apps.users.lists.models import Favorite

PASSWORD = 'Strong-pass-2024'  # matches the user fixtures

pytestmark = pytest.mark.django_db


def test_register_a_master(api_client):
    response = api_client.post('/api/auth/register', {
        'email': 'New.Master@Example.com',
        'password': 'Sup3r-secret-pw',
        'passwordConfirm': 'Sup3r-secret-pw',
        'firstName': 'Антон',
        'role': 'master',
    }, format='json')

    assert response.status_code == 201
    body = response.json()
    assert (body['email'], body['role'], body['fullName']) == ('new.master@example.com', 'master', 'Антон')


def test_register_rejects_mismatched_passwords(api_client):
    response = api_client.post('/api/auth/register', {
        'email': 'x@example.com', 'password': 'Sup3r-secret-pw', 'passwordConfirm': 'other-Secret-9',
    }, format='json')

    assert response.status_code == 400


def test_register_rejects_admin_role(api_client):
    response = api_client.post('/api/auth/register', {
        'email': 'x@example.com', 'password': 'Sup3r-secret-pw', 'passwordConfirm': 'Sup3r-secret-pw', 'role': 'admin',
    }, format='json')

    assert response.status_code == 400


def test_login_and_use_the_bearer_token(api_client, client_user):
    tokens = api_client.post('/api/auth/login', {'email': client_user.email, 'password': PASSWORD}, format='json').json()

    api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {tokens['access']}")
    response = api_client.get('/api/users/me')

    assert response.status_code == 200
    assert response.json()['id'] == str(client_user.pk)
    assert tokens['user']['role'] == 'client'


def test_login_with_a_wrong_password(api_client, client_user):
    response = api_client.post('/api/auth/login', {'email': client_user.email, 'password': 'nope'}, format='json')

    assert response.status_code == 401
    assert response.json()['code'] == 'INVALID_CREDENTIALS'


def test_refresh(api_client, client_user):
    tokens = api_client.post('/api/auth/login', {'email': client_user.email, 'password': PASSWORD}, format='json').json()

    assert 'access' in api_client.post('/api/auth/token/refresh', {'refresh': tokens['refresh']}, format='json').json()
    bad = api_client.post('/api/auth/token/refresh', {'refresh': 'garbage'}, format='json')
    assert bad.status_code == 401
    assert bad.json()['code'] == 'INVALID_TOKEN'


def test_me_requires_authentication(api_client):
    assert api_client.get('/api/users/me').status_code == 401


def test_update_profile(auth, master_user, occupation, geo):
    response = auth(master_user).patch('/api/users/me', {
        'firstName': 'Семён',
        'phone': '+79991234567',
        'occupations': [occupation.pk],
        'addresses': [{'province': f"/api/provinces/{geo['province'].pk}", 'district': f"/api/districts/{geo['district'].pk}"}],
    }, format='json')

    assert response.status_code == 200
    body = response.json()
    assert body['firstName'] == 'Семён'
    assert [o['title'] for o in body['occupations']] == ['Электрик']
    assert body['addresses'][0]['short_address'] == 'Одинцовский район'


def test_update_profile_with_unknown_occupation(auth, master_user):
    response = auth(master_user).patch('/api/users/me', {'occupations': [999999]}, format='json')

    assert response.status_code == 404


def test_public_profile(api_client, master_user, client_user, make_ticket):
    service = make_ticket(master_user, 'Укладка плитки')
    make_ticket(master_user, 'Снятая услуга', active=False)
    Review.objects.create(type=Review.Type.MASTER, rating=5, master=master_user, client=client_user)

    response = api_client.get(f'/api/users/{master_user.pk}')

    assert response.status_code == 200
    body = response.json()
    assert 'email' not in body and 'phone' not in body
    assert (body['reviewsCount'], body['rating']) == (1, 5.0)
    assert [t['id'] for t in body['activeTickets']] == [service.pk]
    assert body['activeTickets'][0]['reviewsCount'] == 1


def test_public_profile_marks_favorites(api_client, auth, master_user, client_user):
    assert api_client.get(f'/api/users/{master_user.pk}').json()['isFavorite'] is False

    Favorite.objects.create(owner=client_user).masters.add(master_user)

    assert auth(client_user).get(f'/api/users/{master_user.pk}').json()['isFavorite'] is True
    assert auth(client_user).get(f'/api/users/{client_user.pk}').json()['isFavorite'] is False


def test_unknown_profile(api_client, db):
    response = api_client.get('/api/users/00000000-0000-0000-0000-000000000000')

    assert response.status_code == 404
    assert response.json()['code'] == 'USER_NOT_FOUND'
