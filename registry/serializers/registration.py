import bleach
from rest_framework import serializers

from registry.models import COMPLAINT_OPTIONS, ICD10Condition, PatientRegistration


def _choices(pairs):
    return [value for value, _label in pairs]


class RegistrationWriteSerializer(serializers.Serializer):
    type = serializers.ChoiceField(choices=_choices(PatientRegistration.TYPE_CHOICES))
    name = serializers.CharField(max_length=255)
    fatherHusbandWifeName = serializers.CharField(max_length=255)
    dob = serializers.DateField()
    address = serializers.CharField()
    gender = serializers.ChoiceField(choices=_choices(PatientRegistration.GENDER_CHOICES))
    referredFrom = serializers.ChoiceField(
        choices=_choices(PatientRegistration.REFERRED_FROM_CHOICES), required=False, default='NA'
    )
    referredTo = serializers.ChoiceField(
        choices=_choices(PatientRegistration.REFERRED_TO_CHOICES), required=False, default='NA'
    )
    complaints = serializers.ListField(
        child=serializers.ChoiceField(choices=COMPLAINT_OPTIONS), required=False, default=list
    )
    otherComplaint = serializers.CharField(required=False, allow_blank=True, allow_null=True, default='')
    diagnosisIds = serializers.ListField(
        child=serializers.IntegerField(min_value=1), required=False, default=list
    )
    entryDate = serializers.DateTimeField(required=False, allow_null=True)

    def validate_name(self, v):
        return self._clean_required(v)

    def validate_fatherHusbandWifeName(self, v):
        return self._clean_required(v)

    def validate_address(self, v):
        return self._clean_required(v)

    def validate_otherComplaint(self, v):
        return bleach.clean((v or '').strip(), strip=True)

    def validate_diagnosisIds(self, ids):
        ids = list(dict.fromkeys(ids))
        if not ids:
            return []
        found = {
            c.id: c for c in ICD10Condition.objects.filter(id__in=ids, children__isnull=True)
        }
        missing = [i for i in ids if i not in found]
        if missing:
            raise serializers.ValidationError(f'Unknown or non-leaf diagnosis ids: {missing}')
        return [found[i] for i in ids]

    def validate(self, attrs):
        # Admission source cannot be the registration's own desk
        reg_type = attrs.get('type')
        referred_from = attrs.get('referredFrom')
        if reg_type in (PatientRegistration.TYPE_OPD, PatientRegistration.TYPE_CASUALTY) and referred_from == reg_type:
            raise serializers.ValidationError({'referredFrom': f'{reg_type} registrations cannot be referred from {reg_type}'})
        if 'Others' not in attrs.get('complaints', []):
            attrs['otherComplaint'] = ''
        return attrs

    @staticmethod
    def _clean_required(v):
        v = bleach.clean((v or '').strip(), strip=True)
        if not v:
            raise serializers.ValidationError('This field may not be blank.')
        return v


class RegistrationListQuerySerializer(serializers.Serializer):
    page = serializers.IntegerField(required=False, min_value=1, default=1)
    limit = serializers.IntegerField(required=False, min_value=1, max_value=500, default=50)
    search = serializers.CharField(required=False, allow_blank=True, default='')


class AdminRegistrationQuerySerializer(serializers.Serializer):
    facilityId = serializers.IntegerField(required=False, allow_null=True)
    facilityTypeId = serializers.IntegerField(required=False, allow_null=True)
    dateFrom = serializers.DateField(required=False, allow_null=True)
    dateTo = serializers.DateField(required=False, allow_null=True)
    page = serializers.IntegerField(required=False, min_value=1, default=1)
    limit = serializers.IntegerField(required=False, min_value=1, max_value=500, default=50)
