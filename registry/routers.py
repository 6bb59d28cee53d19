"""
URL mappings for the registry API.

Trailing slashes are deliberately omitted so the paths match the ones
the front-end calls.
"""
from django.urls import path, include

from .auth_views import login_view, logout_view, me_view
from .views import health
from .views.dashboard import admin_dashboard, facility_dashboard
from .views.districts import districts, district_detail, facility_types
from .views.facilities import facilities, facility_detail
from .views.icd10 import icd10_search
from .views.registrations import (
    admin_registrations,
    export_registrations,
    facility_registrations,
    facility_registration_detail,
)
from .views.users import users, user_detail, export_users

urlpatterns = [
    path('', include('django_prometheus.urls')),
    path('healthz', health.healthz, name='healthz'),

    path('api/auth/login', login_view, name='login_view'),
    path('api/auth/logout', logout_view, name='logout_view'),
    path('api/auth/me', me_view, name='me_view'),

    path('api/icd10/search', icd10_search, name='icd10_search'),

    path('api/admin/districts', districts, name='admin_districts'),
    path('api/admin/districts/<int:pk>', district_detail, name='admin_district_detail'),
    path('api/admin/facility-types', facility_types, name='admin_facility_types'),
    path('api/admin/facilities', facilities, name='admin_facilities'),
    path('api/admin/facilities/<int:pk>', facility_detail, name='admin_facility_detail'),
    path('api/admin/users', users, name='admin_users'),
    path('api/admin/users/export', export_users, name='admin_users_export'),
    path('api/admin/users/<int:pk>', user_detail, name='admin_user_detail'),
    path('api/admin/patient-registrations', admin_registrations, name='admin_registrations'),
    path('api/admin/patient-registrations/export', export_registrations, name='admin_registrations_export'),
    path('api/admin/dashboard', admin_dashboard, name='admin_dashboard'),

    path('api/facility/patient-registrations', facility_registrations, name='facility_registrations'),
    path('api/facility/patient-registrations/<int:pk>', facility_registration_detail,
         name='facility_registration_detail'),
    path('api/facility/dashboard', facility_dashboard, name='facility_dashboard'),
]
