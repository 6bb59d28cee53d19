"""
User account management (administrator only).

Passwords are hashed on write and never returned.  On update the
password is optional; when omitted the stored hash is kept.
"""
from __future__ import annotations

from django.db import IntegrityError, transaction
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated

from registry.models import User
from registry.permissions import IsAdminRole
from registry.responses import success, failure, not_found
from registry.serializers.admin import UserWriteSerializer
from registry.services.audit import log_action
from registry.services.exports import USER_COLUMNS, csv_response, export_filename, user_row
from registry.services.facilities import format_user, users_with_relations


def _apply(user: User, data: dict) -> None:
    user.username = data['username']
    user.role = data.get('role') or User.ROLE_FACILITY
    user.facility = data.get('facilityId')
    if data.get('password'):
        user.set_password(data['password'])


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, IsAdminRole])
def users(request):
    if request.method == 'GET':
        qs = users_with_relations().order_by('username')
        return success([format_user(u) for u in qs])

    s = UserWriteSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    user = User()
    _apply(user, s.validated_data)
    try:
        with transaction.atomic():
            user.save()
    except IntegrityError:
        return failure('Username already exists', status=409)
    log_action(user=request.user, action='user_create', object_type='user', object_id=user.id,
               detail={'username': user.username, 'role': user.role})
    return success(format_user(user), status=201)


@api_view(['PUT', 'DELETE'])
@permission_classes([IsAuthenticated, IsAdminRole])
def user_detail(request, pk: int):
    user = users_with_relations().filter(pk=pk).first()
    if not user:
        return not_found('User not found')

    if request.method == 'DELETE':
        if user.pk == request.user.pk:
            return failure('You cannot delete your own account', status=400)
        user.delete()
        log_action(user=request.user, action='user_delete', object_type='user', object_id=pk,
                   detail={'username': user.username})
        return success({'message': 'User deleted successfully'})

    s = UserWriteSerializer(instance=user, data=request.data)
    s.is_valid(raise_exception=True)
    _apply(user, s.validated_data)
    try:
        with transaction.atomic():
            user.save()
    except IntegrityError:
        return failure('Username already exists', status=409)
    log_action(user=request.user, action='user_update', object_type='user', object_id=user.id,
               detail={'username': user.username, 'passwordChanged': bool(s.validated_data.get('password'))})
    return success(format_user(user))


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsAdminRole])
def export_users(request):
    qs = users_with_relations().order_by('username')
    return csv_response(export_filename('users'), USER_COLUMNS, (user_row(u) for u in qs.iterator()))
