"""
Change notification for inventory writes.

Every create/update/deactivate drops the cached dashboard and pushes an
``inventory.changed`` event to the ``inventory`` channel group, which
connected dashboards receive through ``ws/inventory/``.
"""
from __future__ import annotations

import logging

from asgiref.sync import async_to_sync
from channels.layers import get_channel_layer
from django.core.cache import cache
from django.utils import timezone

logger = logging.getLogger(__name__)

GROUP = 'inventory'
DASHBOARD_CACHE_KEY = 'inventory:dashboard'


def publish_change(kind: str, object_id, action: str) -> None:
    cache.delete(DASHBOARD_CACHE_KEY)
    channel_layer = get_channel_layer()
    if channel_layer is None:
        return
    now = timezone.now()
    event = {
        'type': 'inventory.changed',
        'kind': kind,
        'id': object_id,
        'action': action,
        'ts': now.isoformat(),
    }
    async_to_sync(channel_layer.group_send)(GROUP, event)
    logger.debug('published %s %s #%s', kind, action, object_id)
