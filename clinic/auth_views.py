"""
Authentication views for the clinic back office.

Login hands out two credentials at once: a DRF token (``Authorization:
Token <key>``), which the admin SPA stores, and a SimpleJWT
access/refresh pair (``Authorization: Bearer <access>``).  Both are
accepted on every endpoint; see ``REST_FRAMEWORK`` in settings.
"""
from __future__ import annotations

from django.contrib.auth import authenticate
from rest_framework.authtoken.models import Token
from rest_framework.decorators import api_view, permission_classes, throttle_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework_simplejwt.exceptions import InvalidToken, TokenError
from rest_framework_simplejwt.serializers import TokenRefreshSerializer
from rest_framework_simplejwt.token_blacklist.models import BlacklistedToken, OutstandingToken
from rest_framework_simplejwt.tokens import RefreshToken

from clinic.exceptions import InvalidValue, Unauthorized
from clinic.responses import ok
from clinic.serializers.auth import LoginSerializer, LogoutSerializer, UserSerializer
from clinic.services.audit import log_action
from clinic.throttling import LoginRateThrottle


# ---------------------------------------------------------------------
# Username/password login
# ---------------------------------------------------------------------
@api_view(['POST'])
@permission_classes([AllowAny])
@throttle_classes([LoginRateThrottle])
def login_view(request):
    s = LoginSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    username = s.validated_data['username']
    ip = request.META.get('REMOTE_ADDR')

    user = authenticate(request, username=username, password=s.validated_data['password'])
    if user is None:
        # only the username of a failed attempt is kept
        log_action(user=None, action='login', object_type='user',
                   detail={'result': 'fail', 'username': username, 'ip': ip})
        raise Unauthorized()

    log_action(user=user, action='login', object_type='user', object_id=user.pk,
               detail={'result': 'ok', 'ip': ip})

    token, _ = Token.objects.get_or_create(user=user)
    refresh = RefreshToken.for_user(user)
    return ok({
        'user': UserSerializer(user).data,
        'token': token.key,
        'access': str(refresh.access_token),
        'refresh': str(refresh),
    }, message='Login successful')


# ---------------------------------------------------------------------
# JWT: refresh & logout
# ---------------------------------------------------------------------
@api_view(['POST'])
@permission_classes([AllowAny])
def refresh_view(request):
    """Return a new access token for a valid, non-blacklisted refresh token."""
    s = TokenRefreshSerializer(data=request.data)
    try:
        s.is_valid(raise_exception=True)
    except TokenError as e:
        raise InvalidToken(e.args[0])
    return ok(s.validated_data)


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def logout_view(request):
    """Revoke the caller's DRF token and blacklist refresh tokens.

    With ``{"refresh": ...}`` only that refresh token is blacklisted;
    without it every outstanding refresh token of the user is.
    """
    s = LogoutSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    refresh = s.validated_data.get('refresh')

    count = 0
    if refresh:
        try:
            RefreshToken(refresh).blacklist()
        except TokenError:
            raise InvalidValue('Invalid or expired refresh token')
        count = 1
    else:
        for outstanding in OutstandingToken.objects.filter(user=request.user):
            _, created = BlacklistedToken.objects.get_or_create(token=outstanding)
            count += int(created)

    Token.objects.filter(user=request.user).delete()
    log_action(user=request.user, action='logout', object_type='user', object_id=request.user.pk,
               detail={'blacklisted': count})
    return ok({'blacklisted': count}, message='Logged out')


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def me_view(request):
    return ok({'user': UserSerializer(request.user).data})
