import pytest
from django.core.cache import cache
from rest_framework.test import APIClient

from registry.models import District, Facility, FacilityType, ICD10Condition, User


@pytest.fixture(autouse=True)
def _clear_throttle_cache():
    # throttle history lives in the default cache
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def district(db):
    return District.objects.create(name='Kathua')


@pytest.fixture
def facility_type(db):
    return FacilityType.objects.create(name='Primary Health Centre')


@pytest.fixture
def facility(district, facility_type):
    return Facility.objects.create(name='PHC Hiranagar', district=district, facility_type=facility_type)


@pytest.fixture
def other_facility(district, facility_type):
    return Facility.objects.create(name='PHC Marheen', district=district, facility_type=facility_type)


@pytest.fixture
def admin_user(db):
    return User.objects.create_user(username='admin1', password='P@ssw0rd1', role=User.ROLE_ADMIN)


@pytest.fixture
def facility_user(facility):
    return User.objects.create_user(
        username='phchiranagar', password='P@ssw0rd1', role=User.ROLE_FACILITY, facility=facility
    )


@pytest.fixture
def other_facility_user(other_facility):
    return User.objects.create_user(
        username='phcmarheen', password='P@ssw0rd1', role=User.ROLE_FACILITY, facility=other_facility
    )


@pytest.fixture
def admin_client(admin_user):
    client = APIClient()
    client.force_authenticate(user=admin_user)
    return client


@pytest.fixture
def facility_client(facility_user):
    client = APIClient()
    client.force_authenticate(user=facility_user)
    return client


@pytest.fixture
def other_facility_client(other_facility_user):
    client = APIClient()
    client.force_authenticate(user=other_facility_user)
    return client


@pytest.fixture
def conditions(db):
    """A small chapter: one block with two leaf codes."""
    chapter = ICD10Condition.objects.create(code='IV', description='Endocrine, nutritional and metabolic diseases')
    block = ICD10Condition.objects.create(code='E70-E88', description='Metabolic disorders', parent=chapter)
    e78 = ICD10Condition.objects.create(code='E78.0', description='Pure hypercholesterolaemia', parent=block)
    e86 = ICD10Condition.objects.create(code='E86', description='Volume depletion', parent=block)
    return {'chapter': chapter, 'block': block, 'E78.0': e78, 'E86': e86}
