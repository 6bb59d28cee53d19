"""
Patient registration queries and writes.

Facility users only ever see their own facility's registrations;
administrators query across facilities with optional filters.  Lists are
newest entry first and paginated with ``page``/``limit``.
"""
import math
from typing import Optional, Tuple

from django.db import transaction
from django.db.models import Q
from django.utils import timezone

from registry.models import Facility, PatientRegistration
from registry.services.audit import log_action
from registry.services.icd10 import format_condition


def base_queryset():
    return (
        PatientRegistration.objects
        .select_related('facility__district', 'facility__facility_type')
        .prefetch_related('diagnoses')
        .order_by('-entry_date', '-id')
    )


def admin_queryset(*, facility_id=None, facility_type_id=None, date_from=None, date_to=None):
    qs = base_queryset()
    if facility_id:
        qs = qs.filter(facility_id=facility_id)
    if facility_type_id:
        qs = qs.filter(facility__facility_type_id=facility_type_id)
    if date_from:
        qs = qs.filter(entry_date__date__gte=date_from)
    if date_to:
        # inclusive of the whole ``date_to`` day
        qs = qs.filter(entry_date__date__lte=date_to)
    return qs


def facility_queryset(facility_id: int, search: str = ''):
    qs = base_queryset().filter(facility_id=facility_id)
    search = (search or '').strip()
    if search:
        qs = qs.filter(Q(name__icontains=search) | Q(father_husband_wife_name__icontains=search))
    return qs


def paginate(qs, page: int, limit: int) -> Tuple[list, dict]:
    total = qs.count()
    start = (page - 1) * limit
    items = list(qs[start:start + limit])
    return items, {
        'page': page,
        'limit': limit,
        'total': total,
        'totalPages': math.ceil(total / limit) if limit else 0,
    }


def format_registration(reg: PatientRegistration) -> dict:
    facility = reg.facility
    return {
        'id': reg.id,
        'type': reg.type,
        'name': reg.name,
        'fatherHusbandWifeName': reg.father_husband_wife_name,
        'dob': reg.dob.isoformat(),
        'address': reg.address,
        'gender': reg.gender,
        'referredFrom': reg.referred_from,
        'referredTo': reg.referred_to,
        'complaints': list(reg.complaints or []),
        'otherComplaint': reg.other_complaint,
        'diagnoses': [format_condition(c) for c in reg.diagnoses.all()],
        'entryDate': reg.entry_date.isoformat(),
        'facilityId': reg.facility_id,
        'facility': {
            'id': facility.id,
            'name': facility.name,
            'facilityType': {'id': facility.facility_type_id, 'name': facility.facility_type.name},
            'district': {'id': facility.district_id, 'name': facility.district.name},
        },
        'createdAt': reg.created_at.isoformat(),
        'updatedAt': reg.updated_at.isoformat(),
    }


def save_registration(user, facility: Facility, data: dict,
                      instance: Optional[PatientRegistration] = None) -> PatientRegistration:
    """Create or fully replace a registration from validated serializer data.

    On update the diagnosis set is replaced, not merged, and a missing
    ``entryDate`` keeps the stored one.
    """
    creating = instance is None
    reg = instance or PatientRegistration(facility=facility)
    reg.type = data['type']
    reg.name = data['name']
    reg.father_husband_wife_name = data['fatherHusbandWifeName']
    reg.dob = data['dob']
    reg.address = data['address']
    reg.gender = data['gender']
    reg.referred_from = data.get('referredFrom') or 'NA'
    reg.referred_to = data.get('referredTo') or 'NA'
    reg.complaints = list(data.get('complaints') or [])
    reg.other_complaint = data.get('otherComplaint') or ''
    entry_date = data.get('entryDate')
    if entry_date:
        reg.entry_date = entry_date
    elif creating:
        reg.entry_date = timezone.now()
    with transaction.atomic():
        reg.save()
        reg.diagnoses.set(data.get('diagnosisIds') or [])
        log_action(
            user=user,
            action='registration_create' if creating else 'registration_update',
            object_type='patient_registration', object_id=reg.id,
            detail={'facilityId': facility.id, 'type': reg.type},
        )
    return reg


def delete_registration(user, reg: PatientRegistration) -> None:
    with transaction.atomic():
        reg_id = reg.id
        facility_id = reg.facility_id
        reg.delete()
        log_action(
            user=user, action='registration_delete',
            object_type='patient_registration', object_id=reg_id,
            detail={'facilityId': facility_id},
        )
