"""
Dashboard endpoints: system wide for administrators, per facility for
facility users.
"""
from __future__ import annotations

from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated

from registry.permissions import IsAdminRole, IsFacilityUser
from registry.responses import success
from registry.services.dashboard import admin_summary, facility_summary


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsAdminRole])
def admin_dashboard(request):
    return success(admin_summary())


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsFacilityUser])
def facility_dashboard(request):
    facility = request.user.facility
    return success(facility_summary(facility))
