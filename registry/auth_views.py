"""
Authentication views.

Login authenticates with username/password, opens a Django session for
browser clients and additionally returns a DRF token and a JWT pair for
API clients.  Keeping these views apart from the authentication class
(see ``registry.authentication``) prevents circular imports when Django
REST framework initialises authentication classes.
"""
from __future__ import annotations

from django.contrib.auth import authenticate, login, logout
from rest_framework_simplejwt.tokens import RefreshToken
from rest_framework_simplejwt.token_blacklist.models import BlacklistedToken, OutstandingToken
from rest_framework.authtoken.models import Token
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework_simplejwt.exceptions import TokenError

from registry.responses import success, failure
from registry.serializers.auth import LoginSerializer
from registry.services.audit import log_action, client_ip


def session_user_payload(user) -> dict:
    return {
        'id': user.id,
        'username': user.username,
        'role': user.role,
        'facilityId': user.facility_id,
        'facilityName': user.facility.name if user.facility_id else None,
    }


@api_view(['POST'])
@permission_classes([AllowAny])
def login_view(request):
    s = LoginSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    username = s.validated_data['username']
    password = s.validated_data['password']

    user = authenticate(request, username=username, password=password)
    ip = client_ip(request)
    if not user:
        log_action(user=None, action='login', object_type='user', object_id=None,
                   detail={'result': 'fail', 'username': username, 'ip': ip})
        return failure('Invalid username or password', status=400)

    login(request._request, user)
    log_action(user=user, action='login', object_type='user', object_id=user.id,
               detail={'result': 'ok', 'ip': ip})

    token_obj, _ = Token.objects.get_or_create(user=user)
    refresh = RefreshToken.for_user(user)
    return success({
        'token': token_obj.key,
        'jwt_access': str(refresh.access_token),
        'jwt_refresh': str(refresh),
        'user': session_user_payload(user),
    })

# ScopedRateThrottle reads throttle_scope from the wrapped APIView class
login_view.cls.throttle_scope = 'login'


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def logout_view(request):
    """End the session and blacklist the caller's refresh tokens (all or a given one)."""
    refresh = request.data.get('refresh')
    count = 0
    if refresh:
        try:
            RefreshToken(refresh).blacklist()
            count = 1
        except TokenError:
            return failure('Invalid refresh token', status=400)
    else:
        for token in OutstandingToken.objects.filter(user=request.user):
            _, created = BlacklistedToken.objects.get_or_create(token=token)
            count += int(created)
    Token.objects.filter(user=request.user).delete()
    logout(request._request)
    return success({'blacklisted': count})


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def me_view(request):
    return success(session_user_payload(request.user))
