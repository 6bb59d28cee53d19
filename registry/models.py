"""
Database models for the district health registry.

These models capture the administrative hierarchy (districts, facility
types, facilities and their user accounts), the patient registrations
entered at each facility and the ICD-10 diagnosis catalogue.  The
catalogue is a forest of :class:`ICD10Condition` rows linked through a
self-referencing ``parent`` key; children are only ever reached through
the reverse relation.
"""
from __future__ import annotations

from django.contrib.auth.models import AbstractUser, UserManager as DjangoUserManager
from django.db import models
from django.utils import timezone


class TimestampedModel(models.Model):
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True


class District(TimestampedModel):
    name = models.CharField(max_length=255, unique=True)

    class Meta:
        ordering = ['name']

    def __str__(self) -> str:
        return self.name


class FacilityType(TimestampedModel):
    """Category of facility, e.g. 'Rural Health Centre' or 'DHQ Hospital'."""
    name = models.CharField(max_length=255, unique=True)

    class Meta:
        ordering = ['name']

    def __str__(self) -> str:
        return self.name


class Facility(TimestampedModel):
    """A health facility located in a district.

    Facilities are referenced by user accounts and patient registrations,
    so deleting one that is still in use is refused at the database level.
    """
    name = models.CharField(max_length=255)
    district = models.ForeignKey(District, on_delete=models.PROTECT, related_name='facilities')
    facility_type = models.ForeignKey(FacilityType, on_delete=models.PROTECT, related_name='facilities')

    class Meta:
        ordering = ['name']
        verbose_name_plural = 'facilities'
        indexes = [
            models.Index(fields=['name', 'district', 'facility_type'], name='registry_fa_name_0c6f2e_idx'),
        ]

    def __str__(self) -> str:
        return f"{self.name} ({self.district_id})"


class UserManager(DjangoUserManager):
    def create_superuser(self, username, email=None, password=None, **extra_fields):
        extra_fields.setdefault('role', User.ROLE_ADMIN)
        return super().create_superuser(username, email, password, **extra_fields)


class User(AbstractUser):
    """Account with a role and an optional facility binding.

    ``ADMIN`` users manage the administrative hierarchy and see every
    facility's registrations.  ``FACILITY`` users enter registrations for
    the single facility they are bound to.
    """
    ROLE_ADMIN = 'ADMIN'
    ROLE_FACILITY = 'FACILITY'
    ROLE_CHOICES = [
        (ROLE_ADMIN, 'Administrator'),
        (ROLE_FACILITY, 'Facility user'),
    ]
    role = models.CharField(max_length=10, choices=ROLE_CHOICES, default=ROLE_FACILITY, db_index=True)
    facility = models.ForeignKey(
        Facility, null=True, blank=True, on_delete=models.PROTECT, related_name='users'
    )

    objects = UserManager()

    def __str__(self) -> str:
        return f"{self.username} ({self.role})"

    @property
    def is_admin_role(self) -> bool:
        return self.role == self.ROLE_ADMIN


class ICD10Condition(models.Model):
    """One entry of the ICD-10 classification outline.

    Depth-0 rows are chapters and have no parent.  Whether a row is a
    leaf (a code valid for diagnosis) is derived from the absence of
    children, never stored.
    """
    code = models.CharField(max_length=32, unique=True)
    description = models.TextField()
    parent = models.ForeignKey(
        'self', null=True, blank=True, on_delete=models.CASCADE, related_name='children'
    )

    class Meta:
        db_table = 'icd10_condition'
        ordering = ['code']
        verbose_name = 'ICD-10 condition'

    def __str__(self) -> str:
        return f"{self.code} {self.description}"


COMPLAINT_OPTIONS = [
    'General Ailment',
    'ANC Antenatal Care',
    'PNC Postnatal Care',
    'NCD Hypertension',
    'NCD Diabetes Mellitus',
    'NCD Common Cancer',
    'Others',
]


class PatientRegistration(TimestampedModel):
    TYPE_OPD = 'OPD'
    TYPE_IPD = 'IPD'
    TYPE_CASUALTY = 'CASUALTY'
    TYPE_CHOICES = [
        (TYPE_OPD, 'Outpatient'),
        (TYPE_IPD, 'Inpatient'),
        (TYPE_CASUALTY, 'Casualty'),
    ]

    GENDER_CHOICES = [
        ('MALE', 'Male'),
        ('FEMALE', 'Female'),
        ('OTHER', 'Other'),
    ]

    # Admission source
    REFERRED_FROM_CHOICES = [
        ('NA', 'NA / Direct'),
        ('OPD', 'From OPD'),
        ('CASUALTY', 'From Casualty'),
        ('OTHER_FACILITY', 'From Other Facility'),
    ]

    # Outcome
    REFERRED_TO_CHOICES = [
        ('NA', 'NA / Under Treatment'),
        ('IPD', 'Admit to Ward (IPD)'),
        ('HIGHER_CENTRE', 'Referred to Higher Centre'),
        ('HOME', 'Discharged / Home'),
        ('DEATH', 'Expired / Death'),
    ]

    type = models.CharField(max_length=10, choices=TYPE_CHOICES, db_index=True)
    name = models.CharField(max_length=255)
    father_husband_wife_name = models.CharField(max_length=255)
    dob = models.DateField()
    address = models.TextField()
    gender = models.CharField(max_length=10, choices=GENDER_CHOICES, db_index=True)
    referred_from = models.CharField(max_length=20, choices=REFERRED_FROM_CHOICES, default='NA')
    referred_to = models.CharField(max_length=20, choices=REFERRED_TO_CHOICES, default='NA', db_index=True)
    complaints = models.JSONField(default=list, blank=True)
    other_complaint = models.TextField(blank=True, default='')
    diagnoses = models.ManyToManyField(ICD10Condition, blank=True, related_name='registrations')
    entry_date = models.DateTimeField(default=timezone.now, db_index=True)
    facility = models.ForeignKey(Facility, on_delete=models.PROTECT, related_name='patient_registrations')

    class Meta:
        ordering = ['-entry_date']
        indexes = [
            models.Index(fields=['facility', 'entry_date'], name='registry_pa_facilit_5b1d7a_idx'),
        ]

    def __str__(self) -> str:
        return f"{self.name} [{self.type}] @ {self.facility_id}"


class AuditEvent(models.Model):
    user = models.ForeignKey(User, on_delete=models.SET_NULL, null=True, blank=True)
    action = models.CharField(max_length=64)
    object_type = models.CharField(max_length=64, blank=True, null=True)
    object_id = models.BigIntegerField(blank=True, null=True)
    detail = models.JSONField(default=dict, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        indexes = [
            models.Index(fields=['action', 'created_at'], name='registry_au_action_3e8b21_idx'),
            models.Index(fields=['object_type', 'object_id', 'created_at'], name='registry_au_object__9a4c0d_idx'),
        ]

    def __str__(self):
        return f"{self.action}:{self.user_id}@{self.created_at:%F %T}"
