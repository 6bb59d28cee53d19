"""
District and facility type management.

Administrator only.  Names are unique; a duplicate name is reported as a
conflict and a district still referenced by facilities cannot be
deleted.
"""
from __future__ import annotations

from django.db import IntegrityError, transaction
from django.db.models import ProtectedError
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated

from registry.models import District, FacilityType
from registry.permissions import IsAdminRole
from registry.responses import success, failure, not_found
from registry.serializers.admin import NameSerializer
from registry.services.facilities import format_district, format_facility_type


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, IsAdminRole])
def districts(request):
    if request.method == 'GET':
        return success([format_district(d) for d in District.objects.order_by('name')])

    s = NameSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    try:
        with transaction.atomic():
            district = District.objects.create(name=s.validated_data['name'])
    except IntegrityError:
        return failure('District with this name already exists', status=409)
    return success(format_district(district), status=201)


@api_view(['PUT', 'DELETE'])
@permission_classes([IsAuthenticated, IsAdminRole])
def district_detail(request, pk: int):
    district = District.objects.filter(pk=pk).first()
    if not district:
        return not_found('District not found')

    if request.method == 'DELETE':
        try:
            district.delete()
        except ProtectedError:
            return failure('Cannot delete district as it is being used by facilities', status=409)
        return success({'message': 'District deleted successfully'})

    s = NameSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    district.name = s.validated_data['name']
    try:
        with transaction.atomic():
            district.save(update_fields=['name', 'updated_at'])
    except IntegrityError:
        return failure('District with this name already exists', status=409)
    return success(format_district(district))


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, IsAdminRole])
def facility_types(request):
    if request.method == 'GET':
        return success([format_facility_type(t) for t in FacilityType.objects.order_by('name')])

    s = NameSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    try:
        with transaction.atomic():
            facility_type = FacilityType.objects.create(name=s.validated_data['name'])
    except IntegrityError:
        return failure('Facility type with this name already exists', status=409)
    return success(format_facility_type(facility_type), status=201)
