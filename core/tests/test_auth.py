import pytest
from django.urls import reverse
from rest_framework.authtoken.models import Token
from rest_framework.test import APIClient

from core.models import AuditEvent, User

pytestmark = pytest.mark.django_db


def login(client, **payload):
    return client.post(reverse('login_view'), payload, format='json')


def test_login_by_email_returns_jwt_and_legacy_token(make_user):
    make_user('priya@hospital-his.com', password='Nurse@123', role='nurse')
    r = login(APIClient(), email='Priya@hospital-his.com', password='Nurse@123')
    assert r.status_code == 200
    assert r.data['success'] is True
    assert r.data['token'] and r.data['jwt_access'] and r.data['jwt_refresh']
    assert r.data['user']['role'] == 'nurse'
    assert AuditEvent.objects.filter(action='login', detail__result='ok').exists()


def test_login_by_username_still_works(make_user):
    make_user('amit@hospital-his.com', password='Reception@123', username='amit')
    assert login(APIClient(), username='amit', password='Reception@123').status_code == 200


def test_bad_password_is_rejected_and_audited(make_user):
    make_user('priya@hospital-his.com', password='Nurse@123')
    r = login(APIClient(), email='priya@hospital-his.com', password='wrong')
    assert r.status_code == 400
    assert r.data['message'] == 'Invalid email or password'
    assert AuditEvent.objects.filter(action='login', detail__result='fail').exists()


def test_login_requires_identifier():
    r = login(APIClient(), password='x')
    assert r.status_code == 400
    assert r.data['success'] is False


def test_role_is_not_taken_from_login_payload(make_user):
    u = make_user('priya@hospital-his.com', password='Nurse@123', role='nurse')
    r = login(APIClient(), email=u.email, password='Nurse@123', role='admin')
    assert r.status_code == 200
    u.refresh_from_db()
    assert u.role == 'nurse'


def test_me_requires_authentication(auth_client):
    assert APIClient().get(reverse('me_view')).status_code == 401
    r = auth_client('pharmacist').get(reverse('me_view'))
    assert r.status_code == 200
    assert r.data['data']['role'] == 'pharmacist'


def test_change_password_revokes_token(make_user):
    make_user('priya@hospital-his.com', password='Nurse@123')
    client = APIClient()
    token = login(client, email='priya@hospital-his.com', password='Nurse@123').data['token']
    client.credentials(HTTP_AUTHORIZATION=f'Token {token}')

    r = client.post(reverse('change_password_view'),
                    {'oldPassword': 'Nurse@123', 'newPassword': 'Ward-7-Night-Shift'}, format='json')
    assert r.status_code == 200

    user = User.objects.get(email='priya@hospital-his.com')
    assert user.password_changed_at is not None
    assert not Token.objects.filter(key=token).exists()
    assert client.get(reverse('me_view')).status_code == 401
    assert login(APIClient(), email=user.email, password='Ward-7-Night-Shift').status_code == 200


def test_change_password_checks_current_and_strength(auth_client):
    client = auth_client('nurse')
    r = client.post(reverse('change_password_view'),
                    {'oldPassword': 'wrong', 'newPassword': 'Ward-7-Night-Shift'}, format='json')
    assert r.status_code == 400
    assert r.data['message'].startswith('oldPassword')

    r = client.post(reverse('change_password_view'),
                    {'oldPassword': 'S3cure!pass', 'newPassword': '123'}, format='json')
    assert r.status_code == 400
    assert r.data['message'].startswith('newPassword')


def test_login_after_reset_does_not_revoke_sessions(make_user):
    # cost upgrade on login re-saves the hash but is not a password change
    from core.services.accounts import AccountStore
    from core.services.credentials import CredentialPair, reset_credentials

    make_user('priya@hospital-his.com', password='old-secret')
    with AccountStore() as store:
        reset_credentials([CredentialPair('priya@hospital-his.com', 'Nurse@123')], store, rounds=5)

    r = login(APIClient(), email='priya@hospital-his.com', password='Nurse@123')
    assert r.status_code == 200
    assert User.objects.get(email='priya@hospital-his.com').password_changed_at is None
    assert not AuditEvent.objects.filter(action='password_change').exists()


def test_jwt_logout_blacklists_refresh(make_user):
    make_user('priya@hospital-his.com', password='Nurse@123')
    client = APIClient()
    data = login(client, email='priya@hospital-his.com', password='Nurse@123').data
    client.credentials(HTTP_AUTHORIZATION=f"Bearer {data['jwt_access']}")

    assert client.post(reverse('jwt_logout_view'), {'refresh': data['jwt_refresh']}, format='json').status_code == 200
    r = APIClient().post(reverse('jwt_refresh_view'), {'refresh': data['jwt_refresh']}, format='json')
    assert r.status_code == 401


def test_audit_endpoint_is_admin_only(auth_client):
    assert auth_client('inventory_manager').get(reverse('audit_events')).status_code == 403

    admin = auth_client('admin')
    AuditEvent.objects.create(action='item_create', object_type='item', object_id='1')
    AuditEvent.objects.create(action='vendor_create', object_type='vendor', object_id='1')
    r = admin.get(reverse('audit_events'), {'objectType': 'item'})
    assert r.status_code == 200
    assert [e['action'] for e in r.data['data']] == ['item_create']
    assert r.data['pagination']['total'] == 1


def test_healthz():
    r = APIClient().get('/healthz')
    assert r.status_code == 200
    assert r.json()['db'] is True


def test_login_attempts_are_throttled(make_user):
    make_user('priya@hospital-his.com', password='Nurse@123')
    client = APIClient()
    codes = [login(client, email='priya@hospital-his.com', password='guess').status_code for _ in range(11)]
    assert codes[:10] == [400] * 10
    assert codes[10] == 429
