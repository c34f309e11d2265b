"""
WebSocket authentication for API clients.

The SPA logs in through ``/api/v1/login`` and holds a DRF token and a JWT
access token, never a session cookie, so it connects as
``ws/inventory/?token=<key>``.  Either token kind is accepted.
"""
from urllib.parse import parse_qs

from channels.auth import AuthMiddlewareStack
from channels.db import database_sync_to_async
from channels.middleware import BaseMiddleware
from django.contrib.auth import get_user_model
from django.contrib.auth.models import AnonymousUser
from rest_framework.authtoken.models import Token
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.settings import api_settings as jwt_settings
from rest_framework_simplejwt.tokens import AccessToken


@database_sync_to_async
def user_for_token(raw: str):
    token = Token.objects.select_related("user").filter(key=raw).first()
    if token is not None:
        return token.user if token.user.is_active else None
    try:
        access = AccessToken(raw)
    except TokenError:
        return None
    return get_user_model().objects.filter(
        **{jwt_settings.USER_ID_FIELD: access.get(jwt_settings.USER_ID_CLAIM)}, is_active=True
    ).first()


class TokenAuthMiddleware(BaseMiddleware):
    """Sets ``scope["user"]`` from a ``token`` query parameter when one is given."""

    async def __call__(self, scope, receive, send):
        params = parse_qs(scope.get("query_string", b"").decode("latin-1"))
        raw = (params.get("token") or [""])[0]
        if raw:
            scope = dict(scope, user=await user_for_token(raw) or AnonymousUser())
        return await super().__call__(scope, receive, send)


def TokenAuthMiddlewareStack(inner):
    # session users still work for the admin site
    return AuthMiddlewareStack(TokenAuthMiddleware(inner))
