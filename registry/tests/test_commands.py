from io import StringIO

import pytest
from django.core.management import call_command

from registry.models import ICD10Condition, User

pytestmark = pytest.mark.django_db

OUTLINE = (
    "I Certain infectious and parasitic diseases\n"
    "\tA00-A09 Intestinal infectious diseases\n"
    "\t\tA00 Cholera\n"
    "\t\tA01 Typhoid and paratyphoid fevers\n"
)


def run(name, *args, **kwargs):
    out = StringIO()
    call_command(name, *args, stdout=out, stderr=out, **kwargs)
    return out.getvalue()


def test_import_icd10(tmp_path):
    path = tmp_path / 'ICD10.md'
    path.write_text(OUTLINE, encoding='utf-8')
    output = run('import_icd10', str(path))
    assert 'Imported 4 ICD-10 codes' in output
    assert ICD10Condition.objects.count() == 4

    output = run('import_icd10', str(path))
    assert '0 created, 4 updated' in output
    assert ICD10Condition.objects.count() == 4


def test_import_icd10_missing_file_is_not_an_error(tmp_path):
    output = run('import_icd10', str(tmp_path / 'missing.md'))
    assert 'not found' in output
    assert not ICD10Condition.objects.exists()


def test_import_icd10_uses_configured_path(tmp_path, settings):
    path = tmp_path / 'outline.md'
    path.write_text(OUTLINE, encoding='utf-8')
    settings.ICD10_SOURCE_PATH = str(path)
    run('import_icd10')
    assert ICD10Condition.objects.count() == 4


def test_verify_icd10(tmp_path):
    path = tmp_path / 'ICD10.md'
    path.write_text(OUTLINE, encoding='utf-8')
    run('import_icd10', str(path))
    output = run('verify_icd10')
    assert 'Total ICD-10 nodes: 4' in output
    assert 'Chapter I: Certain infectious and parasitic diseases' in output
    assert 'Children: 1' in output
    assert 'First child: A00-A09' in output

    assert 'not found' in run('verify_icd10', '--code', 'XXII')


def test_ensure_admin_is_idempotent(settings):
    settings.DEFAULT_ADMIN_PASSWORD = 'first-pass'
    run('ensure_admin')
    admin = User.objects.get(username='admin')
    assert admin.role == User.ROLE_ADMIN
    assert admin.check_password('first-pass')

    settings.DEFAULT_ADMIN_PASSWORD = 'second-pass'
    run('ensure_admin')
    admin.refresh_from_db()
    assert admin.check_password('first-pass')
    assert User.objects.filter(username='admin').count() == 1


def test_seed_facilities_reports_missing_csv(tmp_path):
    output = run('seed_facilities', '--facilities', str(tmp_path / 'nope.csv'), '--users', str(tmp_path / 'nope.csv'))
    assert 'CSV file not found' in output
    assert not User.objects.exists()


def test_seed_runs_all_steps(tmp_path, settings):
    outline = tmp_path / 'ICD10.md'
    outline.write_text(OUTLINE, encoding='utf-8')
    facilities = tmp_path / 'facilities.csv'
    facilities.write_text("Facility Name,District,Facility Type\nPHC Hiranagar,Kathua,PHC\n", encoding='utf-8')
    users = tmp_path / 'users.csv'
    users.write_text("Username,Role\nphchiranagar,FACILITY\n", encoding='utf-8')
    settings.ICD10_SOURCE_PATH = str(outline)
    settings.FACILITIES_CSV_PATH = str(facilities)
    settings.USERS_CSV_PATH = str(users)

    output = run('seed')
    assert 'Seeding complete.' in output
    assert User.objects.get(username='admin').role == User.ROLE_ADMIN
    assert User.objects.get(username='phchiranagar').facility.name == 'PHC Hiranagar'
    assert ICD10Condition.objects.count() == 4
