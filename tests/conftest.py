"""Shared fakes for wake lock tests."""
import asyncio
from typing import List, Optional, Tuple

import pytest

from cook_mode.wakelock import ToggleControl, WakeLockSession
from cook_mode.wakelock.types import StatusKind


class FakeLock:
    """Lock that fires its release listeners like a browser wake lock does."""

    def __init__(self):
        self.released = False
        self.release_calls = 0
        self._callbacks = []

    def release(self):
        self.release_calls += 1
        self._fire()

    def on_released(self, callback):
        if self.released:
            callback()
            return
        self._callbacks.append(callback)

    def revoke(self):
        """Simulate the platform taking the lock away."""
        self._fire()

    def _fire(self):
        if self.released:
            return
        self.released = True
        callbacks, self._callbacks = self._callbacks, []
        for callback in callbacks:
            callback()


class FakeProvider:
    def __init__(self, supported: bool = True):
        self.supported = supported
        self.requests: List[str] = []
        self.locks: List[FakeLock] = []
        self.error: Optional[Exception] = None
        self.gate: Optional[asyncio.Event] = None

    def supports_wake_lock(self) -> bool:
        return self.supported

    async def request_lock(self, kind: str = "screen") -> FakeLock:
        self.requests.append(kind)
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        lock = FakeLock()
        self.locks.append(lock)
        return lock


class RecordingSink:
    def __init__(self):
        self.updates: List[Tuple[StatusKind, str]] = []

    def set_status(self, kind, text):
        self.updates.append((kind, text))

    @property
    def kinds(self):
        return [kind for kind, _ in self.updates]

    @property
    def last(self):
        return self.updates[-1] if self.updates else None


@pytest.fixture
def provider():
    return FakeProvider()


@pytest.fixture
def control():
    return ToggleControl()


@pytest.fixture
def sink():
    return RecordingSink()


@pytest.fixture
def session(provider, control, sink):
    session = WakeLockSession(provider, control, sink)
    assert session.initialize()
    return session
