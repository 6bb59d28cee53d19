"""
Facility management views (administrator only).
"""
from __future__ import annotations

from django.db.models import ProtectedError
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated

from registry.models import Facility
from registry.permissions import IsAdminRole
from registry.responses import success, failure, not_found
from registry.serializers.admin import FacilityWriteSerializer
from registry.services.facilities import facilities_with_relations, format_facility


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, IsAdminRole])
def facilities(request):
    if request.method == 'GET':
        qs = facilities_with_relations().order_by('name')
        return success([format_facility(f) for f in qs])

    s = FacilityWriteSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    facility = Facility.objects.create(
        name=s.validated_data['name'],
        facility_type=s.validated_data['facilityTypeId'],
        district=s.validated_data['districtId'],
    )
    return success(format_facility(facility), status=201)


@api_view(['PUT', 'DELETE'])
@permission_classes([IsAuthenticated, IsAdminRole])
def facility_detail(request, pk: int):
    facility = facilities_with_relations().filter(pk=pk).first()
    if not facility:
        return not_found('Facility not found')

    if request.method == 'DELETE':
        try:
            facility.delete()
        except ProtectedError:
            return failure('Cannot delete facility as it is being used', status=409)
        return success({'message': 'Facility deleted successfully'})

    s = FacilityWriteSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    facility.name = s.validated_data['name']
    facility.facility_type = s.validated_data['facilityTypeId']
    facility.district = s.validated_data['districtId']
    facility.save()
    return success(format_facility(facility))
