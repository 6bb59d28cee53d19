"""
Input validation for the administrator CRUD endpoints.

Payload keys follow the client's camelCase naming (``facilityTypeId``,
``districtId``, ``facilityId``); serializers only validate, the views
build the response dicts.
"""
import bleach
from rest_framework import serializers

from registry.models import District, Facility, FacilityType, User


def clean_text(v: str) -> str:
    return bleach.clean((v or '').strip(), strip=True)


class NameSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255)

    def validate_name(self, v):
        v = clean_text(v)
        if not v:
            raise serializers.ValidationError('Name is required')
        return v


class FacilityWriteSerializer(NameSerializer):
    facilityTypeId = serializers.PrimaryKeyRelatedField(
        queryset=FacilityType.objects.all(),
        error_messages={'does_not_exist': 'Invalid facility type or district', 'required': 'Facility type is required'},
    )
    districtId = serializers.PrimaryKeyRelatedField(
        queryset=District.objects.all(),
        error_messages={'does_not_exist': 'Invalid facility type or district', 'required': 'District is required'},
    )


class UserWriteSerializer(serializers.Serializer):
    username = serializers.CharField(max_length=150)
    password = serializers.CharField(required=False, allow_blank=True, write_only=True, trim_whitespace=False)
    role = serializers.ChoiceField(choices=[c[0] for c in User.ROLE_CHOICES], required=False, default=User.ROLE_FACILITY)
    facilityId = serializers.PrimaryKeyRelatedField(
        queryset=Facility.objects.all(), required=False, allow_null=True,
        error_messages={'does_not_exist': 'Invalid facility'},
    )

    def validate_username(self, v):
        v = (v or '').strip()
        if not v:
            raise serializers.ValidationError('Username is required')
        return v

    def validate_password(self, v):
        creating = self.instance is None
        if creating and (not v or len(v) < 6):
            raise serializers.ValidationError('Password is required and must be at least 6 characters')
        if not creating and v and len(v) < 6:
            raise serializers.ValidationError('Password must be at least 6 characters')
        return v

    def validate(self, attrs):
        if self.instance is None and 'password' not in attrs:
            raise serializers.ValidationError({'password': 'Password is required and must be at least 6 characters'})
        return attrs
