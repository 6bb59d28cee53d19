"""
Patient registration endpoints.

Facility users create and maintain the registrations of their own
facility; administrators list and export across every facility.
"""
from __future__ import annotations

from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated

from registry.models import PatientRegistration
from registry.permissions import IsAdminRole, IsFacilityUser, IsOwnFacility
from registry.responses import success, failure, not_found
from registry.serializers.registration import (
    AdminRegistrationQuerySerializer,
    RegistrationListQuerySerializer,
    RegistrationWriteSerializer,
)
from registry.services.exports import REGISTRATION_COLUMNS, csv_response, export_filename, registration_row
from registry.services.registrations import (
    admin_queryset,
    delete_registration,
    facility_queryset,
    format_registration,
    paginate,
    save_registration,
)


def _admin_filters(request):
    q = AdminRegistrationQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    return q.validated_data


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsAdminRole])
def admin_registrations(request):
    """Paginated registrations across facilities.

    Query params: ``facilityId``, ``facilityTypeId``, ``dateFrom``,
    ``dateTo`` (both inclusive), ``page``, ``limit``.
    """
    f = _admin_filters(request)
    qs = admin_queryset(
        facility_id=f.get('facilityId'),
        facility_type_id=f.get('facilityTypeId'),
        date_from=f.get('dateFrom'),
        date_to=f.get('dateTo'),
    )
    items, pagination = paginate(qs, f['page'], f['limit'])
    return success({
        'registrations': [format_registration(r) for r in items],
        'pagination': pagination,
    })


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsAdminRole])
def export_registrations(request):
    f = _admin_filters(request)
    qs = admin_queryset(
        facility_id=f.get('facilityId'),
        facility_type_id=f.get('facilityTypeId'),
        date_from=f.get('dateFrom'),
        date_to=f.get('dateTo'),
    )
    rows = (registration_row(r) for r in qs)
    return csv_response(export_filename('patient-registrations'), REGISTRATION_COLUMNS, rows)


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, IsFacilityUser])
def facility_registrations(request):
    facility = request.user.facility
    if request.method == 'GET':
        q = RegistrationListQuerySerializer(data=request.query_params)
        q.is_valid(raise_exception=True)
        qs = facility_queryset(facility.id, q.validated_data['search'])
        items, pagination = paginate(qs, q.validated_data['page'], q.validated_data['limit'])
        return success({
            'registrations': [format_registration(r) for r in items],
            'pagination': pagination,
        })

    s = RegistrationWriteSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    reg = save_registration(request.user, facility, s.validated_data)
    reg = facility_queryset(facility.id).get(pk=reg.pk)
    return success(format_registration(reg), status=201)


@api_view(['PUT', 'DELETE'])
@permission_classes([IsAuthenticated, IsFacilityUser])
def facility_registration_detail(request, pk: int):
    reg = PatientRegistration.objects.filter(pk=pk).first()
    if not reg:
        return not_found('Patient registration not found')
    if not IsOwnFacility().has_object_permission(request, None, reg):
        return failure(IsOwnFacility.message, status=403)

    facility = request.user.facility
    if request.method == 'DELETE':
        delete_registration(request.user, reg)
        return success({'message': 'Patient registration deleted successfully'})

    s = RegistrationWriteSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    save_registration(request.user, facility, s.validated_data, instance=reg)
    reg = facility_queryset(facility.id).get(pk=pk)
    return success(format_registration(reg))
