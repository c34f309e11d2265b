import pytest
from django.core.cache import cache
from rest_framework.test import APIClient


@pytest.fixture(autouse=True)
def fast_hashing(settings):
    # lowest bcrypt cost; reassigning PASSWORD_HASHERS drops the cached hasher instances
    settings.PASSWORD_BCRYPT_ROUNDS = 4
    settings.PASSWORD_HASHERS = list(settings.PASSWORD_HASHERS)


@pytest.fixture(autouse=True)
def clear_cache():
    # throttle counters and the dashboard live in the cache
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def make_user(db):
    from core.models import User

    def _make(email, password='S3cure!pass', role='nurse', **extra):
        username = extra.pop('username', email.split('@')[0])
        return User.objects.create_user(username=username, email=email, password=password, role=role, **extra)
    return _make


@pytest.fixture
def auth_client(make_user):
    """APIClient logged in with a DRF token for a freshly made user of ``role``."""
    from rest_framework.authtoken.models import Token

    def _client(role='nurse', email=None):
        user = make_user(email or f'{role}@hospital-his.com', role=role)
        client = APIClient()
        client.credentials(HTTP_AUTHORIZATION=f'Token {Token.objects.create(user=user).key}')
        client.user = user
        return client
    return _client
