"""
Authentication views.

Login by e-mail (or username) and password, JWT refresh/logout, the
current-user profile and the self-service change-password endpoint.
Changing a password goes through the validated account update path so
the save hooks revoke existing tokens.
"""
from __future__ import annotations

from django.contrib.auth import authenticate
from rest_framework_simplejwt.tokens import RefreshToken
from rest_framework_simplejwt.views import TokenRefreshView
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework.authtoken.models import Token
from rest_framework.decorators import api_view, permission_classes, throttle_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.throttling import AnonRateThrottle

from core.serializers.auth import LoginSerializer, ChangePasswordSerializer, user_payload
from core.services.accounts import AccountStore
from core.services.audit import log_action


# ---------------------------------------------------------------------
# E-mail/password login
# ---------------------------------------------------------------------
class LoginRateThrottle(AnonRateThrottle):
    """Per-IP limit on login attempts (``login`` rate in settings)."""
    scope = 'login'


@api_view(['POST'])
@permission_classes([AllowAny])
@throttle_classes([LoginRateThrottle])
def login_view(request):
    """
    Login with e-mail (or username) and password.
    Accepts fields:
      - email or username
      - password
    """
    s = LoginSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    identifier = s.validated_data['identifier']
    password = s.validated_data['password']

    user = authenticate(request, username=identifier, password=password)
    if not user:
        log_action(user=None, action='login', object_type='user', object_id=None,
                   detail={'result': 'fail', 'identifier': identifier, 'ip': request.META.get('REMOTE_ADDR')})
        return Response({'success': False, 'message': 'Invalid email or password'}, status=400)

    log_action(user=user, action='login', object_type='user', object_id=user.id,
               detail={'result': 'ok', 'ip': request.META.get('REMOTE_ADDR')})

    token_obj, _ = Token.objects.get_or_create(user=user)
    refresh = RefreshToken.for_user(user)

    return Response({
        'success': True,
        'token': token_obj.key,
        'jwt_access': str(refresh.access_token),
        'jwt_refresh': str(refresh),
        'user': user_payload(user),
    }, status=200)


# ---------------------------------------------------------------------
# JWT refresh & logout
# ---------------------------------------------------------------------
jwt_refresh_view = TokenRefreshView.as_view()


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def jwt_logout_view(request):
    """Blacklist the given refresh token and drop the legacy token."""
    refresh = request.data.get('refresh')
    if refresh:
        try:
            RefreshToken(refresh).blacklist()
        except TokenError:
            return Response({'success': False, 'message': 'Invalid refresh token'}, status=400)
    Token.objects.filter(user=request.user).delete()
    log_action(user=request.user, action='logout', object_type='user', object_id=request.user.id)
    return Response({'success': True})


# ---------------------------------------------------------------------
# Profile & password
# ---------------------------------------------------------------------
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def me_view(request):
    return Response({'success': True, 'data': user_payload(request.user)})


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def change_password_view(request):
    """Change the caller's password through the validated update path.

    Existing tokens are revoked by the save hooks, so the client has to
    log in again with the new password.
    """
    s = ChangePasswordSerializer(data=request.data, context={'request': request})
    s.is_valid(raise_exception=True)
    AccountStore().update_with_validation(request.user.pk, {'password': s.validated_data['newPassword']})
    return Response({'success': True, 'message': 'Password changed. Please log in again.'})
