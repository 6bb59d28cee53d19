from typing import Optional

from registry.models import District, Facility, FacilityType, User


def format_district(d: District) -> dict:
    return {
        'id': d.id,
        'name': d.name,
        'createdAt': d.created_at.isoformat(),
        'updatedAt': d.updated_at.isoformat(),
    }


def format_facility_type(t: FacilityType) -> dict:
    return {
        'id': t.id,
        'name': t.name,
        'createdAt': t.created_at.isoformat(),
        'updatedAt': t.updated_at.isoformat(),
    }


def format_facility(f: Optional[Facility]) -> Optional[dict]:
    if f is None:
        return None
    return {
        'id': f.id,
        'name': f.name,
        'districtId': f.district_id,
        'facilityTypeId': f.facility_type_id,
        'district': {'id': f.district.id, 'name': f.district.name},
        'facilityType': {'id': f.facility_type.id, 'name': f.facility_type.name},
        'createdAt': f.created_at.isoformat(),
        'updatedAt': f.updated_at.isoformat(),
    }


def format_user(u: User) -> dict:
    """User payload; the password hash is never included."""
    return {
        'id': u.id,
        'username': u.username,
        'role': u.role,
        'facilityId': u.facility_id,
        'facility': format_facility(u.facility) if u.facility_id else None,
        'createdAt': u.date_joined.isoformat(),
    }


def facilities_with_relations():
    return Facility.objects.select_related('district', 'facility_type')


def users_with_relations():
    return User.objects.select_related('facility__district', 'facility__facility_type')
