"""
Administrator endpoints: districts, facility types, facilities and users.
"""
import pytest
from rest_framework.test import APIClient

from registry.models import AuditEvent, District, Facility, User

pytestmark = pytest.mark.django_db


def test_anonymous_gets_401():
    r = APIClient().get('/api/admin/districts')
    assert r.status_code == 401


def test_facility_user_gets_403_on_admin_endpoints(facility_client):
    for url in ('/api/admin/districts', '/api/admin/facility-types', '/api/admin/facilities',
                '/api/admin/users', '/api/admin/patient-registrations', '/api/admin/dashboard'):
        r = facility_client.get(url)
        assert r.status_code == 403, url
        assert r.data['success'] is False


def test_district_crud(admin_client):
    r = admin_client.post('/api/admin/districts', {'name': '  Jammu  '}, format='json')
    assert r.status_code == 201
    district_id = r.data['data']['id']
    assert r.data['data']['name'] == 'Jammu'

    r = admin_client.get('/api/admin/districts')
    assert [d['name'] for d in r.data['data']] == ['Jammu']

    r = admin_client.put(f'/api/admin/districts/{district_id}', {'name': 'Jammu North'}, format='json')
    assert r.status_code == 200
    assert District.objects.get(pk=district_id).name == 'Jammu North'

    r = admin_client.delete(f'/api/admin/districts/{district_id}')
    assert r.status_code == 200
    assert not District.objects.filter(pk=district_id).exists()


def test_duplicate_district_name_is_conflict(admin_client, district):
    r = admin_client.post('/api/admin/districts', {'name': district.name}, format='json')
    assert r.status_code == 409
    assert r.data == {'success': False, 'error': 'District with this name already exists'}

    other = District.objects.create(name='Samba')
    r = admin_client.put(f'/api/admin/districts/{other.id}', {'name': district.name}, format='json')
    assert r.status_code == 409


def test_district_in_use_cannot_be_deleted(admin_client, facility):
    r = admin_client.delete(f'/api/admin/districts/{facility.district_id}')
    assert r.status_code == 409
    assert r.data['error'] == 'Cannot delete district as it is being used by facilities'


def test_unknown_district_is_404(admin_client):
    assert admin_client.put('/api/admin/districts/999', {'name': 'X'}, format='json').status_code == 404
    assert admin_client.delete('/api/admin/districts/999').status_code == 404


def test_blank_district_name_is_400(admin_client):
    r = admin_client.post('/api/admin/districts', {'name': '   '}, format='json')
    assert r.status_code == 400
    assert r.data['success'] is False


def test_facility_types(admin_client):
    r = admin_client.post('/api/admin/facility-types', {'name': 'Sub Centre'}, format='json')
    assert r.status_code == 201
    r = admin_client.post('/api/admin/facility-types', {'name': 'Sub Centre'}, format='json')
    assert r.status_code == 409
    r = admin_client.get('/api/admin/facility-types')
    assert [t['name'] for t in r.data['data']] == ['Sub Centre']


def test_facility_crud(admin_client, district, facility_type):
    payload = {'name': 'CHC Billawar', 'districtId': district.id, 'facilityTypeId': facility_type.id}
    r = admin_client.post('/api/admin/facilities', payload, format='json')
    assert r.status_code == 201
    data = r.data['data']
    assert data['district'] == {'id': district.id, 'name': district.name}
    assert data['facilityType'] == {'id': facility_type.id, 'name': facility_type.name}

    payload['name'] = 'CHC Billawar (Upgraded)'
    r = admin_client.put(f"/api/admin/facilities/{data['id']}", payload, format='json')
    assert r.status_code == 200
    assert Facility.objects.get(pk=data['id']).name == 'CHC Billawar (Upgraded)'

    r = admin_client.get('/api/admin/facilities')
    assert [f['name'] for f in r.data['data']] == ['CHC Billawar (Upgraded)']

    r = admin_client.delete(f"/api/admin/facilities/{data['id']}")
    assert r.status_code == 200
    assert not Facility.objects.exists()


def test_facility_with_unknown_district_is_400(admin_client, facility_type):
    r = admin_client.post(
        '/api/admin/facilities',
        {'name': 'PHC Nowhere', 'districtId': 999, 'facilityTypeId': facility_type.id},
        format='json',
    )
    assert r.status_code == 400
    assert 'Invalid facility type or district' in r.data['error']


def test_facility_in_use_cannot_be_deleted(admin_client, facility, facility_user):
    r = admin_client.delete(f'/api/admin/facilities/{facility.id}')
    assert r.status_code == 409
    assert Facility.objects.filter(pk=facility.id).exists()


def test_user_create_hashes_password_and_hides_it(admin_client, facility):
    r = admin_client.post(
        '/api/admin/users',
        {'username': 'chcbillawar', 'password': 'secret1', 'role': 'FACILITY', 'facilityId': facility.id},
        format='json',
    )
    assert r.status_code == 201
    data = r.data['data']
    assert 'password' not in data
    assert data['facilityId'] == facility.id
    assert data['facility']['name'] == facility.name
    user = User.objects.get(username='chcbillawar')
    assert user.check_password('secret1')
    assert user.password != 'secret1'
    assert AuditEvent.objects.filter(action='user_create', object_id=user.id).exists()

    r = admin_client.get('/api/admin/users')
    assert all('password' not in u for u in r.data['data'])


def test_user_create_requires_six_character_password(admin_client):
    r = admin_client.post('/api/admin/users', {'username': 'short', 'password': '12345'}, format='json')
    assert r.status_code == 400
    r = admin_client.post('/api/admin/users', {'username': 'nopass'}, format='json')
    assert r.status_code == 400
    assert not User.objects.filter(username__in=['short', 'nopass']).exists()


def test_duplicate_username_is_conflict(admin_client, facility_user):
    r = admin_client.post(
        '/api/admin/users', {'username': facility_user.username, 'password': 'secret1'}, format='json'
    )
    assert r.status_code == 409


def test_user_update_keeps_password_when_omitted(admin_client, facility_user, other_facility):
    r = admin_client.put(
        f'/api/admin/users/{facility_user.id}',
        {'username': facility_user.username, 'role': 'FACILITY', 'facilityId': other_facility.id},
        format='json',
    )
    assert r.status_code == 200
    facility_user.refresh_from_db()
    assert facility_user.facility_id == other_facility.id
    assert facility_user.check_password('P@ssw0rd1')

    r = admin_client.put(
        f'/api/admin/users/{facility_user.id}',
        {'username': facility_user.username, 'password': 'newpass1'},
        format='json',
    )
    assert r.status_code == 200
    facility_user.refresh_from_db()
    assert facility_user.check_password('newpass1')


def test_user_update_rejects_short_password(admin_client, facility_user):
    r = admin_client.put(
        f'/api/admin/users/{facility_user.id}',
        {'username': facility_user.username, 'password': '123'},
        format='json',
    )
    assert r.status_code == 400
    facility_user.refresh_from_db()
    assert facility_user.check_password('P@ssw0rd1')


def test_user_delete(admin_client, admin_user, facility_user):
    r = admin_client.delete(f'/api/admin/users/{facility_user.id}')
    assert r.status_code == 200
    assert not User.objects.filter(pk=facility_user.id).exists()

    r = admin_client.delete(f'/api/admin/users/{admin_user.id}')
    assert r.status_code == 400
    assert admin_client.delete('/api/admin/users/999').status_code == 404

