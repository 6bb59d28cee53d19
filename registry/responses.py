"""
Response envelope helpers.

Every API response is wrapped as ``{"success": true, "data": ...}`` or
``{"success": false, "error": "<message>"}`` so the client can branch on
a single flag.
"""
from rest_framework.response import Response


def success(data, status: int = 200) -> Response:
    return Response({'success': True, 'data': data}, status=status)


def failure(message: str, status: int = 400) -> Response:
    return Response({'success': False, 'error': message}, status=status)


def not_found(message: str = 'Not found') -> Response:
    return failure(message, status=404)
