"""Registry application for the district health backend.

This package contains models, serializers, views and route registrations
for facility administration, patient registration and the ICD-10
diagnosis catalogue.
"""
