import pytest
from django.urls import reverse
from rest_framework.authtoken.models import Token
from rest_framework.test import APIClient
from rest_framework_simplejwt.token_blacklist.models import BlacklistedToken

from registry.models import AuditEvent, User

pytestmark = pytest.mark.django_db


def login(client, username, password):
    return client.post(reverse('login_view'), {'username': username, 'password': password}, format='json')


def test_login_returns_jwt_and_legacy_token(facility_user):
    client = APIClient()
    r = login(client, 'phchiranagar', 'P@ssw0rd1')
    assert r.status_code == 200
    data = r.data['data']
    assert data['token'] and data['jwt_access'] and data['jwt_refresh']
    assert data['user'] == {
        'id': facility_user.id,
        'username': 'phchiranagar',
        'role': 'FACILITY',
        'facilityId': facility_user.facility_id,
        'facilityName': facility_user.facility.name,
    }
    assert AuditEvent.objects.filter(action='login', user=facility_user, detail__result='ok').exists()


def test_bad_credentials_are_400(facility_user):
    r = login(APIClient(), 'phchiranagar', 'wrong')
    assert r.status_code == 400
    assert r.data == {'success': False, 'error': 'Invalid username or password'}
    assert AuditEvent.objects.filter(action='login', detail__result='fail').exists()


def test_no_role_bypass_in_login(facility_user):
    client = APIClient()
    r = client.post(
        reverse('login_view'),
        {'username': 'phchiranagar', 'password': 'P@ssw0rd1', 'role': 'ADMIN'},
        format='json',
    )
    assert r.status_code == 200
    facility_user.refresh_from_db()
    assert facility_user.role == User.ROLE_FACILITY


def test_token_and_jwt_authenticate(facility_user):
    data = login(APIClient(), 'phchiranagar', 'P@ssw0rd1').data['data']

    client = APIClient()
    client.credentials(HTTP_AUTHORIZATION=f"Token {data['token']}")
    r = client.get(reverse('me_view'))
    assert r.status_code == 200
    assert r.data['data']['username'] == 'phchiranagar'

    client = APIClient()
    client.credentials(HTTP_AUTHORIZATION=f"Bearer {data['jwt_access']}")
    assert client.get(reverse('me_view')).status_code == 200


def test_login_opens_session(admin_user):
    client = APIClient()
    assert login(client, 'admin1', 'P@ssw0rd1').status_code == 200
    r = client.get('/api/admin/districts')
    assert r.status_code == 200


def test_logout_blacklists_refresh_and_drops_token(facility_user):
    data = login(APIClient(), 'phchiranagar', 'P@ssw0rd1').data['data']
    client = APIClient()
    client.credentials(HTTP_AUTHORIZATION=f"Token {data['token']}")
    r = client.post(reverse('logout_view'), {'refresh': data['jwt_refresh']}, format='json')
    assert r.status_code == 200
    assert r.data['data'] == {'blacklisted': 1}
    assert BlacklistedToken.objects.count() == 1
    assert not Token.objects.filter(user=facility_user).exists()


def test_logout_rejects_invalid_refresh(facility_client):
    r = facility_client.post(reverse('logout_view'), {'refresh': 'not-a-token'}, format='json')
    assert r.status_code == 400


def test_login_is_throttled(facility_user):
    client = APIClient()
    statuses = [login(client, 'phchiranagar', 'wrong').status_code for _ in range(11)]
    assert statuses[:10] == [400] * 10
    assert statuses[10] == 429


def test_inactive_user_cannot_login(facility_user):
    facility_user.is_active = False
    facility_user.save(update_fields=['is_active'])
    assert login(APIClient(), 'phchiranagar', 'P@ssw0rd1').status_code == 400


def test_healthz():
    r = APIClient().get('/healthz')
    assert r.status_code == 200
    assert r.json() == {'ok': True, 'db': True}
