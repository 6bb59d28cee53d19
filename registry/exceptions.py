import logging

from rest_framework.views import exception_handler as drf_exception_handler
from rest_framework.response import Response

logger = logging.getLogger(__name__)


def _first_message(detail):
    if isinstance(detail, dict):
        if 'detail' in detail:
            return _first_message(detail['detail'])
        for field, value in detail.items():
            msg = _first_message(value)
            if field == 'non_field_errors':
                return msg
            return f"{field}: {msg}"
        return ''
    if isinstance(detail, (list, tuple)):
        return _first_message(detail[0]) if detail else ''
    return str(detail)


def api_exception_handler(exc, context):
    resp = drf_exception_handler(exc, context)
    if resp is None:
        logger.exception("Unhandled API error: %s", exc)
        return Response({'success': False, 'error': 'Internal server error'}, status=500)
    # normalize response
    body = {'success': False, 'error': _first_message(resp.data)}
    if isinstance(resp.data, dict) and 'detail' not in resp.data:
        body['fields'] = resp.data
    return Response(body, status=resp.status_code, headers=_passthrough_headers(resp))


def _passthrough_headers(resp):
    return {k: v for k, v in resp.items() if k in ('WWW-Authenticate', 'Retry-After')}
