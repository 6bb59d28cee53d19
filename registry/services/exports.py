"""
CSV exports for administrators.

Rows are streamed through :class:`django.http.StreamingHttpResponse` so a
large registration export does not have to be materialised in memory.
"""
import csv
from typing import Iterable, Iterator

from django.http import StreamingHttpResponse
from django.utils import timezone

REGISTRATION_COLUMNS = [
    'type', 'name', 'fatherHusbandWifeName', 'dob', 'address', 'gender',
    'referredFrom', 'referredTo', 'complaints', 'diagnoses', 'entryDate',
    'facilityName', 'facilityType', 'district',
]

USER_COLUMNS = ['username', 'role', 'facilityName', 'facilityType', 'district', 'createdAt']


class Echo:
    """File-like object whose ``write`` returns the value instead of storing it."""

    def write(self, value):
        return value


def registration_row(reg) -> dict:
    facility = reg.facility
    complaints = list(reg.complaints or [])
    if reg.other_complaint:
        complaints.append(reg.other_complaint)
    return {
        'type': reg.type,
        'name': reg.name,
        'fatherHusbandWifeName': reg.father_husband_wife_name,
        'dob': reg.dob.strftime('%Y-%m-%d'),
        'address': reg.address,
        'gender': reg.gender,
        'referredFrom': reg.referred_from,
        'referredTo': reg.referred_to,
        'complaints': '; '.join(complaints),
        'diagnoses': '; '.join(f"{c.code} {c.description}" for c in reg.diagnoses.all()),
        'entryDate': timezone.localtime(reg.entry_date).strftime('%Y-%m-%d'),
        'facilityName': facility.name if facility else '',
        'facilityType': facility.facility_type.name if facility else '',
        'district': facility.district.name if facility else '',
    }


def user_row(user) -> dict:
    facility = user.facility
    return {
        'username': user.username,
        'role': user.role,
        'facilityName': facility.name if facility else '',
        'facilityType': facility.facility_type.name if facility else '',
        'district': facility.district.name if facility else '',
        'createdAt': timezone.localtime(user.date_joined).strftime('%Y-%m-%d'),
    }


def iter_csv(columns: list, rows: Iterable[dict]) -> Iterator[str]:
    writer = csv.DictWriter(Echo(), fieldnames=columns)
    yield writer.writeheader()
    for row in rows:
        yield writer.writerow(row)


def csv_response(filename: str, columns: list, rows: Iterable[dict]) -> StreamingHttpResponse:
    resp = StreamingHttpResponse(iter_csv(columns, rows), content_type='text/csv; charset=utf-8')
    resp['Content-Disposition'] = f'attachment; filename="{filename}"'
    return resp


def export_filename(prefix: str) -> str:
    return f"{prefix}-{timezone.localdate():%Y-%m-%d}.csv"
