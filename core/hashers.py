"""
Password hashers.

Django's bcrypt hasher hard-codes its cost factor on the class.  The
subclass below reads the default from ``PASSWORD_BCRYPT_ROUNDS`` and
accepts an explicit ``rounds`` so administrative tools can choose their
own cost without touching the globally cached hasher instances.
"""
from __future__ import annotations

from django.conf import settings
from django.contrib.auth import hashers

BCRYPT_MIN_ROUNDS = 4
BCRYPT_MAX_ROUNDS = 31


class BCryptSHA256PasswordHasher(hashers.BCryptSHA256PasswordHasher):
    """bcrypt(sha256(password)) with a configurable cost factor.

    Encoded values keep Django's ``bcrypt_sha256$`` prefix, so hashes
    produced here verify with :func:`django.contrib.auth.hashers.check_password`
    whatever cost they were made with.
    """

    def __init__(self, rounds: int | None = None):
        if rounds is None:
            rounds = getattr(settings, 'PASSWORD_BCRYPT_ROUNDS', self.rounds)
        rounds = int(rounds)
        if not BCRYPT_MIN_ROUNDS <= rounds <= BCRYPT_MAX_ROUNDS:
            raise ValueError(f'bcrypt rounds must be between {BCRYPT_MIN_ROUNDS} and {BCRYPT_MAX_ROUNDS}, got {rounds}')
        self.rounds = rounds


def is_encoded_hash(value: str) -> bool:
    """True when ``value`` was produced by one of the configured hashers."""
    if not value or not isinstance(value, str):
        return False
    try:
        hashers.identify_hasher(value)
    except ValueError:
        return False
    return True
