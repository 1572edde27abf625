"""Who may review or complain about whom."""
import pytest

from apps.marketplace.reviews.eligibility import (
    build_review_payload, can_complain, can_review, review_type_for, validate_rating,
)


def test_master_may_review_a_client():
    assert can_review('m1', 'master', 'c1', 'client')


def test_client_may_review_a_master():
    assert can_review('c1', 'client', 'm1', 'master')


def test_client_may_not_review_a_client():
    decision = can_review('c1', 'client', 'c2', 'client')

    assert not decision
    assert decision.code == 'ROLE_MISMATCH'


@pytest.mark.parametrize('actor_id,actor_role,target_id,target_role,code', [
    (None, None, 'c1', 'client', 'AUTHENTICATION_ERROR'),
    ('m1', 'master', None, None, 'USER_NOT_FOUND'),
    ('m1', 'master', 'm1', 'master', 'SELF_REVIEW_FORBIDDEN'),
    ('a1', 'admin', 'c1', 'client', 'ROLE_MISMATCH'),
    ('m1', 'master', 'm2', 'master', 'ROLE_MISMATCH'),
])
def test_review_rejections(actor_id, actor_role, target_id, target_role, code):
    assert can_review(actor_id, actor_role, target_id, target_role).code == code


@pytest.mark.parametrize('rating', [0, 6, -1, 3.5, '4', True, None])
def test_invalid_ratings(rating):
    assert validate_rating(rating).code == 'INVALID_RATING'


@pytest.mark.parametrize('rating', [1, 3, 5])
def test_valid_ratings(rating):
    assert validate_rating(rating)


def test_review_type_names_the_rated_side():
    assert review_type_for('master') == 'client'
    assert review_type_for('client') == 'master'
    assert review_type_for('admin') is None


def test_review_payload_from_a_master():
    assert build_review_payload('m1', 'master', 'c1', 5, 'Всё отлично', 12) == {
        'type': 'client',
        'rating': 5,
        'description': 'Всё отлично',
        'ticket': '/api/tickets/12',
        'master': '/api/users/m1',
        'client': '/api/users/c1',
    }


def test_review_payload_from_a_client():
    payload = build_review_payload('c1', 'client', 'm1', 4, 'Хорошо', 3)

    assert (payload['type'], payload['master'], payload['client']) == ('master', '/api/users/m1', '/api/users/c1')


def test_any_member_may_complain_about_another():
    assert can_complain('c1', 'client', 'c2')
    assert can_complain('m1', 'master', 'c1')


@pytest.mark.parametrize('actor_id,actor_role,respondent_id,code', [
    (None, None, 'c1', 'AUTHENTICATION_ERROR'),
    ('a1', 'admin', 'c1', 'ROLE_MISMATCH'),
    ('c1', 'client', None, 'USER_NOT_FOUND'),
    ('c1', 'client', 'c1', 'SELF_ACTION_FORBIDDEN'),
])
def test_complaint_rejections(actor_id, actor_role, respondent_id, code):
    assert can_complain(actor_id, actor_role, respondent_id).code == code
