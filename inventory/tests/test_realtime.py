import json

import pytest
from asgiref.sync import async_to_sync
from asgiref.testing import ApplicationCommunicator
from channels.layers import get_channel_layer
from django.contrib.auth.models import AnonymousUser
from rest_framework.authtoken.models import Token
from rest_framework_simplejwt.tokens import AccessToken

from core.models import User
from hospital.asgi import application
from inventory.consumers import InventoryConsumer
from inventory.services.events import GROUP, publish_change

# consumers resolve users in worker threads, which need committed rows
pytestmark = pytest.mark.django_db(transaction=True)


def ws_scope(user):
    return {'type': 'websocket', 'path': '/ws/inventory/', 'headers': [], 'subprotocols': [], 'user': user}


def connect_with_token(raw):
    """Open ``ws/inventory/?token=<raw>`` on the full ASGI stack and return the first frame."""
    async def scenario():
        scope = {'type': 'websocket', 'path': '/ws/inventory/', 'query_string': f'token={raw}'.encode(),
                 'headers': [], 'subprotocols': []}
        comm = ApplicationCommunicator(application, scope)
        await comm.send_input({'type': 'websocket.connect'})
        first = await comm.receive_output(3)
        await comm.send_input({'type': 'websocket.disconnect', 'code': 1000})
        await comm.wait(3)
        return first

    return async_to_sync(scenario)()


def test_consumer_relays_inventory_changes():
    async def scenario():
        comm = ApplicationCommunicator(InventoryConsumer.as_asgi(), ws_scope(User(email='m@x.com')))
        await comm.send_input({'type': 'websocket.connect'})
        assert (await comm.receive_output(1))['type'] == 'websocket.accept'
        welcome = await comm.receive_output(1)
        assert json.loads(welcome['text'])['type'] == 'welcome'

        await get_channel_layer().group_send(GROUP, {
            'type': 'inventory.changed', 'kind': 'vendor', 'id': 7, 'action': 'deactivated', 'ts': 'now',
        })
        msg = json.loads((await comm.receive_output(1))['text'])
        assert (msg['kind'], msg['id'], msg['action']) == ('vendor', 7, 'deactivated')

        await comm.send_input({'type': 'websocket.disconnect', 'code': 1000})
        await comm.wait(1)

    async_to_sync(scenario)()


def test_consumer_rejects_anonymous():
    async def scenario():
        comm = ApplicationCommunicator(InventoryConsumer.as_asgi(), ws_scope(AnonymousUser()))
        await comm.send_input({'type': 'websocket.connect'})
        assert (await comm.receive_output(1))['type'] == 'websocket.close'
        await comm.send_input({'type': 'websocket.disconnect', 'code': 1006})
        await comm.wait(1)

    async_to_sync(scenario)()


def test_drf_token_in_query_string_is_accepted(make_user):
    user = make_user('priya@hospital-his.com')
    key = Token.objects.create(user=user).key
    assert connect_with_token(key)['type'] == 'websocket.accept'


def test_jwt_access_token_in_query_string_is_accepted(make_user):
    user = make_user('priya@hospital-his.com')
    assert connect_with_token(str(AccessToken.for_user(user)))['type'] == 'websocket.accept'


def test_unknown_token_is_rejected():
    assert connect_with_token('not-a-real-token')['type'] == 'websocket.close'


def test_token_of_inactive_user_is_rejected(make_user):
    user = make_user('gone@hospital-his.com', is_active=False)
    key = Token.objects.create(user=user).key
    assert connect_with_token(key)['type'] == 'websocket.close'


def test_missing_token_without_session_is_rejected():
    async def scenario():
        scope = {'type': 'websocket', 'path': '/ws/inventory/', 'query_string': b'',
                 'headers': [], 'subprotocols': []}
        comm = ApplicationCommunicator(application, scope)
        await comm.send_input({'type': 'websocket.connect'})
        assert (await comm.receive_output(3))['type'] == 'websocket.close'
        await comm.send_input({'type': 'websocket.disconnect', 'code': 1006})
        await comm.wait(3)

    async_to_sync(scenario)()


def test_publish_change_without_listeners_is_harmless():
    publish_change('item', 1, 'created')
