"""
Dashboard aggregates.

Counts are computed with conditional aggregation so each dashboard costs
a handful of queries regardless of how many buckets it reports.
"""
import calendar
import datetime
from typing import Optional

from django.db.models import Count, Q
from django.utils import timezone

from registry.models import District, Facility, FacilityType, PatientRegistration, User

TYPES = [value for value, _ in PatientRegistration.TYPE_CHOICES]
GENDERS = [value for value, _ in PatientRegistration.GENDER_CHOICES]
OUTCOMES = ['IPD', 'HIGHER_CENTRE', 'HOME', 'DEATH']


def _periods(today: datetime.date):
    last_day = calendar.monthrange(today.year, today.month)[1]
    return today, (today.replace(day=1), today.replace(day=last_day))


def registration_counts(qs, today: Optional[datetime.date] = None, *, today_by_type: bool = False) -> dict:
    today = today or timezone.localdate()
    day, (month_start, month_end) = _periods(today)
    today_q = Q(entry_date__date=day)
    aggregates = {
        'total': Count('id'),
        'today': Count('id', filter=today_q),
        'month': Count('id', filter=Q(entry_date__date__range=(month_start, month_end))),
    }
    for t in TYPES:
        aggregates[f'type_{t}'] = Count('id', filter=Q(type=t))
        if today_by_type:
            aggregates[f'today_{t}'] = Count('id', filter=today_q & Q(type=t))
    for g in GENDERS:
        aggregates[f'gender_{g}'] = Count('id', filter=Q(gender=g))
    for o in OUTCOMES:
        aggregates[f'outcome_{o}'] = Count('id', filter=Q(referred_to=o))
    row = qs.aggregate(**aggregates)
    counts = {
        'total': row['total'],
        'today': row['today'],
        'thisMonth': row['month'],
        'byType': {t: row[f'type_{t}'] for t in TYPES},
        'byGender': {g: row[f'gender_{g}'] for g in GENDERS},
        'outcomes': {o: row[f'outcome_{o}'] for o in OUTCOMES},
    }
    if today_by_type:
        counts['todayByType'] = {t: row[f'today_{t}'] for t in TYPES}
    return counts


def admin_summary(today: Optional[datetime.date] = None) -> dict:
    top_facilities = (
        Facility.objects.select_related('district')
        .annotate(registration_count=Count('patient_registrations'))
        .order_by('-registration_count', 'name')[:5]
    )
    districts = (
        District.objects
        .annotate(
            facility_count=Count('facilities', distinct=True),
            registration_count=Count('facilities__patient_registrations'),
        )
        .order_by('-registration_count', 'name')
    )
    return {
        'system': {
            'districts': District.objects.count(),
            'facilityTypes': FacilityType.objects.count(),
            'facilities': Facility.objects.count(),
            'users': User.objects.count(),
        },
        'registrations': registration_counts(PatientRegistration.objects.all(), today),
        'topFacilities': [
            {
                'id': f.id,
                'name': f.name,
                'district': f.district.name,
                'registrationCount': f.registration_count,
            }
            for f in top_facilities
        ],
        'districts': [
            {
                'id': d.id,
                'name': d.name,
                'facilityCount': d.facility_count,
                'registrationCount': d.registration_count,
            }
            for d in districts
        ],
    }


def facility_summary(facility: Facility, today: Optional[datetime.date] = None) -> dict:
    qs = PatientRegistration.objects.filter(facility=facility)
    return {
        'facility': {
            'id': facility.id,
            'name': facility.name,
            'district': facility.district.name,
            'facilityType': facility.facility_type.name,
        },
        'registrations': registration_counts(qs, today, today_by_type=True),
    }
