"""
One-shot seeding of the administrative hierarchy from CSV reports.

The facilities report has ``Facility Name``, ``District`` and
``Facility Type`` columns; the users report has ``Username`` and ``Role``.
Facility accounts are usually named after their facility, so users are
bound by comparing names reduced to lowercase alphanumerics.
"""
import csv
import logging
import re
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from django.contrib.auth.hashers import make_password
from django.db import transaction

from registry.models import District, Facility, FacilityType, User

logger = logging.getLogger(__name__)

_NON_ALNUM = re.compile(r'[^a-zA-Z0-9]')


def normalize_name(value: str) -> str:
    return _NON_ALNUM.sub('', value or '').lower()


@dataclass
class SeedSummary:
    districts: int = 0
    facility_types: int = 0
    facilities_created: int = 0
    users: int = 0
    unmatched_users: List[str] = field(default_factory=list)


def read_csv(path: str) -> List[Dict[str, str]]:
    with open(path, newline='', encoding='utf-8-sig') as fh:
        return [row for row in csv.DictReader(fh) if any((v or '').strip() for v in row.values())]


def _cell(row: dict, key: str) -> str:
    return (row.get(key) or '').strip()


def seed_hierarchy(rows: Iterable[dict], summary: SeedSummary) -> None:
    rows = list(rows)
    district_names = {_cell(r, 'District') for r in rows} - {''}
    type_names = {_cell(r, 'Facility Type') for r in rows} - {''}

    for name in sorted(district_names):
        District.objects.get_or_create(name=name)
    summary.districts = len(district_names)
    for name in sorted(type_names):
        FacilityType.objects.get_or_create(name=name)
    summary.facility_types = len(type_names)

    district_ids = dict(District.objects.values_list('name', 'id'))
    type_ids = dict(FacilityType.objects.values_list('name', 'id'))

    for row in rows:
        name = _cell(row, 'Facility Name')
        district_id = district_ids.get(_cell(row, 'District'))
        type_id = type_ids.get(_cell(row, 'Facility Type'))
        if not (name and district_id and type_id):
            continue
        _, created = Facility.objects.get_or_create(
            name=name, district_id=district_id, facility_type_id=type_id
        )
        if created:
            summary.facilities_created += 1


def seed_users(rows: Iterable[dict], summary: SeedSummary, default_password: str) -> None:
    facility_by_name: Dict[str, int] = {}
    for facility_id, name in Facility.objects.order_by('id').values_list('id', 'name'):
        # later facilities win on a normalised-name collision
        facility_by_name[normalize_name(name)] = facility_id

    password_hash = make_password(default_password)
    for row in rows:
        username = _cell(row, 'Username')
        # the admin account is managed by ensure_admin
        if not username or username == 'admin':
            continue
        role = User.ROLE_ADMIN if _cell(row, 'Role').upper() == User.ROLE_ADMIN else User.ROLE_FACILITY
        facility_id: Optional[int] = facility_by_name.get(normalize_name(username))
        if facility_id is None:
            summary.unmatched_users.append(username)
            logger.warning("No facility matches user %r", username)

        user = User.objects.filter(username=username).first()
        if user is None:
            User.objects.create(username=username, password=password_hash, role=role, facility_id=facility_id)
        elif facility_id is not None and user.facility_id != facility_id:
            user.facility_id = facility_id
            user.save(update_fields=['facility'])
        summary.users += 1


def seed_from_csv(facilities_path: str, users_path: str, default_password: str) -> SeedSummary:
    summary = SeedSummary()
    facility_rows = read_csv(facilities_path)
    user_rows = read_csv(users_path)
    logger.info("Found %d facilities and %d users in CSVs", len(facility_rows), len(user_rows))
    with transaction.atomic():
        seed_hierarchy(facility_rows, summary)
    with transaction.atomic():
        seed_users(user_rows, summary, default_password)
    return summary
