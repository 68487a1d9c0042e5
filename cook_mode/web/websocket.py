"""WebSocket connection manager and status broadcasting."""
import asyncio
from datetime import datetime
from typing import List, Set

from fastapi import WebSocket

from ..wakelock.types import StatusKind


class ConnectionManager:
    """Browsers listening for Cook Mode status and toggle events."""

    def __init__(self):
        self.listeners: List[WebSocket] = []

    async def connect(self, websocket: WebSocket):
        await websocket.accept()
        self.listeners.append(websocket)

    def disconnect(self, websocket: WebSocket):
        if websocket in self.listeners:
            self.listeners.remove(websocket)

    async def broadcast(self, event: dict):
        """Send an event to every listener, dropping the ones that went away."""
        gone = []
        for websocket in list(self.listeners):
            try:
                await websocket.send_json(event)
            except Exception:
                gone.append(websocket)

        for websocket in gone:
            self.disconnect(websocket)


class Broadcaster:
    """Fire-and-forget broadcasts from synchronous callbacks."""

    def __init__(self, connections: ConnectionManager):
        self.connections = connections
        self._pending: Set[asyncio.Task] = set()

    def send(self, event: dict):
        event["timestamp"] = datetime.now().isoformat()
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # No event loop, nobody can be listening
            return
        task = loop.create_task(self.connections.broadcast(event))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)


class BroadcastStatusSink:
    """Status sink that pushes every status change to connected browsers."""

    def __init__(self, broadcaster: Broadcaster):
        self.broadcaster = broadcaster
        self.kind = StatusKind.HIDDEN
        self.text = ""

    def set_status(self, kind: StatusKind, text: str):
        self.kind = kind
        self.text = text
        self.broadcaster.send({"type": "status", **self.to_dict()})

    def to_dict(self) -> dict:
        return {
            "kind": self.kind.value,
            "text": self.text,
            "visible": self.kind != StatusKind.HIDDEN,
        }


# Global connection manager instance
manager = ConnectionManager()
