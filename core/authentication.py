"""
Authentication backends.

``TokenAuthentication`` keeps DRF's token scheme under a stable import
path for the settings module.  ``EmailOrUsernameBackend`` lets staff
sign in with their e-mail address, which is the identifier the rest of
the system uses, while still accepting the Django username.
"""
from __future__ import annotations

from django.contrib.auth import get_user_model
from django.contrib.auth.backends import ModelBackend
from rest_framework import authentication


class TokenAuthentication(authentication.TokenAuthentication):
    """Token authentication using the ``Token`` keyword."""

    keyword = 'Token'


class EmailOrUsernameBackend(ModelBackend):
    """Resolve ``username`` as an e-mail first, then as a username."""

    def authenticate(self, request, username=None, password=None, **kwargs):
        User = get_user_model()
        identifier = (username or kwargs.get('email') or '').strip()
        if not identifier or password is None:
            return None
        user = User.objects.filter(email__iexact=identifier).first()
        if user is None:
            user = User.objects.filter(username=identifier).first()
        if user is None:
            # Run the hasher once to keep timing similar for unknown accounts
            User().set_password(password)
            return None
        if user.check_password(password) and self.user_can_authenticate(user):
            return user
        return None
