"""
Real-time notification hub.

Each WebSocket joins the room of its user. Publishing is fire-and-forget:
a user with no open connection simply misses the push and sees the stored
Notification row on the next fetch.
"""

import logging
from collections import defaultdict
from typing import Any, Dict, Optional, Set

from fastapi import WebSocket, WebSocketDisconnect

logger = logging.getLogger(__name__)


class NotificationHub:
    def __init__(self):
        self._rooms: Dict[int, Set[WebSocket]] = defaultdict(set)

    async def connect(self, user_id: int, websocket: WebSocket) -> None:
        self._rooms[user_id].add(websocket)
        await websocket.accept()
        logger.debug("WebSocket joined room user:%s (%d open)", user_id, len(self._rooms[user_id]))

    def disconnect(self, user_id: int, websocket: WebSocket) -> None:
        room = self._rooms.get(user_id)
        if not room:
            return
        room.discard(websocket)
        if not room:
            del self._rooms[user_id]

    def connection_count(self, user_id: Optional[int] = None) -> int:
        if user_id is None:
            return sum(len(room) for room in self._rooms.values())
        return len(self._rooms.get(user_id, ()))

    async def publish(self, data: Dict[str, Any], user_id: Optional[int] = None) -> int:
        """Push one notification event; ``user_id=None`` broadcasts. Returns deliveries."""
        if user_id is None:
            targets = [(uid, ws) for uid, room in self._rooms.items() for ws in room]
        else:
            targets = [(user_id, ws) for ws in self._rooms.get(user_id, ())]

        delivered = 0
        for uid, websocket in targets:
            try:
                await websocket.send_json({"event": "notification", "data": data})
                delivered += 1
            except (WebSocketDisconnect, RuntimeError, ConnectionError) as exc:
                # Socket sudah tertutup, buang dari room
                logger.info("Dropping dead socket for user %s: %s", uid, exc)
                self.disconnect(uid, websocket)
        return delivered
