import pytest
from django.db import DatabaseError
from rest_framework.test import APIClient

from registry.models import ICD10Condition
from registry.services.icd10 import import_outline, search_leaves
from registry.views import icd10 as icd10_views

pytestmark = pytest.mark.django_db

URL = '/api/icd10/search'


def test_search_returns_only_leaves(conditions):
    assert search_leaves('metabolic') == []
    assert [c.code for c in search_leaves('E7')] == ['E78.0']


def test_search_matches_code_or_description_case_insensitively(conditions):
    assert [c.code for c in search_leaves('CHOLESTEROL')] == ['E78.0']
    assert [c.code for c in search_leaves('e86')] == ['E86']
    for c in search_leaves('ol'):
        assert 'ol' in c.code.lower() or 'ol' in c.description.lower()
        assert not c.children.exists()


def test_search_after_import_finds_cholera():
    import_outline([
        "I Certain infectious and parasitic diseases\n",
        "\tA00-A09 Intestinal infectious diseases\n",
        "\t\tA00 Cholera\n",
    ])
    assert [c.code for c in search_leaves('chol')] == ['A00']


def test_search_is_limited_and_ordered_by_code():
    parent = ICD10Condition.objects.create(code='Z00-Z99', description='Factors influencing health status')
    for i in reversed(range(25)):
        ICD10Condition.objects.create(code=f'Z{i:02d}', description='Screening encounter', parent=parent)
    results = search_leaves('screening')
    assert len(results) == 20
    assert [c.code for c in results] == [f'Z{i:02d}' for i in range(20)]


@pytest.mark.parametrize('query', [None, '', 'a', ' '])
def test_short_query_never_touches_database(query, django_assert_num_queries):
    with django_assert_num_queries(0):
        assert search_leaves(query) == []


def test_query_whitespace_is_significant():
    import_outline([
        "I Certain infectious and parasitic diseases\n",
        "\tA00-A09 Intestinal infectious diseases\n",
        "\t\tA00 Cholera\n",
        "\t\tA01 Typhoid and paratyphoid fevers\n",
    ])
    for c in search_leaves(' chol'):
        assert ' chol' in c.code.lower() or ' chol' in c.description.lower()
    assert search_leaves(' chol') == []
    # two characters, one of them a space
    assert [c.code for c in search_leaves('d ')] == ['A01']
    assert [c.code for c in search_leaves('chol')] == ['A00']


def test_search_view_is_open_to_anonymous_callers(conditions):
    r = APIClient().get(URL, {'q': 'chol'})
    assert r.status_code == 200
    assert [c['code'] for c in r.data['data']] == ['E78.0']
    r = APIClient().get(URL, {'q': 'c'})
    assert r.data == {'success': True, 'data': []}


def test_search_view_returns_envelope(facility_client, conditions):
    r = facility_client.get(URL, {'q': 'chol'})
    assert r.status_code == 200
    assert r.data['success'] is True
    assert r.data['data'] == [{
        'id': conditions['E78.0'].id,
        'code': 'E78.0',
        'description': 'Pure hypercholesterolaemia',
        'parentId': conditions['block'].id,
    }]


def test_search_view_short_query_returns_empty(admin_client, conditions):
    r = admin_client.get(URL, {'q': 'c'})
    assert r.status_code == 200
    assert r.data == {'success': True, 'data': []}
    r = admin_client.get(URL)
    assert r.data == {'success': True, 'data': []}


def test_search_view_storage_fault_returns_500(admin_client, monkeypatch):
    def broken(query):
        raise DatabaseError('connection lost')

    monkeypatch.setattr(icd10_views, 'search_leaves', broken)
    r = admin_client.get(URL, {'q': 'chol'})
    assert r.status_code == 500
    assert r.data == {'success': False, 'error': 'Failed to search ICD-10 codes'}
