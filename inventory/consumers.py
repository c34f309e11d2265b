import json

from channels.generic.websocket import AsyncWebsocketConsumer

from .services.events import GROUP


class InventoryConsumer(AsyncWebsocketConsumer):
    """Pushes item/vendor changes to open inventory dashboards."""

    async def connect(self):
        user = self.scope.get("user")
        if user is None or not user.is_authenticated:
            await self.close()
            return
        await self.channel_layer.group_add(GROUP, self.channel_name)
        await self.accept()
        await self.send(json.dumps({"type": "welcome", "message": "connected"}))

    async def disconnect(self, close_code):
        await self.channel_layer.group_discard(GROUP, self.channel_name)

    async def inventory_changed(self, event):
        # event: {"type": "inventory.changed", "kind": "item", "id": 1, "action": "updated", "ts": "..."}
        await self.send(json.dumps(event))
