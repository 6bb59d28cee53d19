"""
Django admin registrations for the registry models.

Only minimal configuration is applied; the admin site is mainly useful
for inspecting imported ICD-10 nodes and seeded facilities during
development.
"""

from django.contrib import admin

from .models import (
    AuditEvent,
    District,
    Facility,
    FacilityType,
    ICD10Condition,
    PatientRegistration,
    User,
)


@admin.register(District)
class DistrictAdmin(admin.ModelAdmin):
    list_display = ('id', 'name', 'created_at')
    search_fields = ('name',)


@admin.register(FacilityType)
class FacilityTypeAdmin(admin.ModelAdmin):
    list_display = ('id', 'name', 'created_at')
    search_fields = ('name',)


@admin.register(Facility)
class FacilityAdmin(admin.ModelAdmin):
    list_display = ('id', 'name', 'district', 'facility_type')
    list_filter = ('district', 'facility_type')
    search_fields = ('name',)


@admin.register(User)
class UserAdmin(admin.ModelAdmin):
    list_display = ('username', 'role', 'facility', 'is_active', 'is_superuser')
    list_filter = ('role',)
    search_fields = ('username',)
    exclude = ('password',)


@admin.register(ICD10Condition)
class ICD10ConditionAdmin(admin.ModelAdmin):
    list_display = ('code', 'description', 'parent')
    search_fields = ('code', 'description')
    raw_id_fields = ('parent',)


@admin.register(PatientRegistration)
class PatientRegistrationAdmin(admin.ModelAdmin):
    list_display = ('id', 'name', 'type', 'gender', 'facility', 'entry_date')
    list_filter = ('type', 'gender', 'referred_to')
    search_fields = ('name', 'father_husband_wife_name')
    filter_horizontal = ('diagnoses',)


@admin.register(AuditEvent)
class AuditEventAdmin(admin.ModelAdmin):
    list_display = ('action', 'user', 'object_type', 'object_id', 'created_at')
    list_filter = ('action',)
