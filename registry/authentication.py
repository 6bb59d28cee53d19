"""
Token authentication for the registry API.

This module defines a subclass of Django REST framework's
``TokenAuthentication`` that keeps the ``Token`` keyword used in the
``Authorization`` header.  Keeping it apart from any view definitions
avoids circular imports when the REST framework loads authentication
classes during initialization.
"""
from __future__ import annotations

from rest_framework import authentication


class TokenAuthentication(authentication.TokenAuthentication):
    """Token authentication using the ``Token`` keyword.

    Exists to give settings a stable import path and a place for later
    customisation.
    """

    keyword = 'Token'
