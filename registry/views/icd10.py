"""
ICD-10 diagnosis lookup used by the registration form's autocomplete.

The catalogue is public reference data, so the lookup needs no login;
it is rate limited through the ``icd10_search`` throttle scope instead.
"""
from __future__ import annotations

import logging

from django.db import DatabaseError
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny

from registry.responses import success, failure
from registry.services.icd10 import format_condition, search_leaves

logger = logging.getLogger(__name__)


@api_view(['GET'])
@permission_classes([AllowAny])
def icd10_search(request):
    """Return up to 20 leaf codes whose code or description contains ``q``.

    ``q`` is matched as given.  Queries shorter than two characters,
    whitespace included, return an empty list without touching the
    database.
    """
    query = request.query_params.get('q', '')
    try:
        nodes = search_leaves(query)
    except DatabaseError:
        logger.exception("ICD-10 search failed for %r", query)
        return failure('Failed to search ICD-10 codes', status=500)
    return success([format_condition(n) for n in nodes])

icd10_search.cls.throttle_scope = 'icd10_search'
