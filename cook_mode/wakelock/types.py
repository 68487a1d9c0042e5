"""Core types and collaborator contracts for the wake lock session."""
from enum import Enum
from typing import Callable, Protocol


class StatusKind(str, Enum):
    """What the status sink is asked to show."""
    INACTIVE = "inactive"
    ACTIVE = "active"
    ERROR = "error"
    HIDDEN = "hidden"


class SessionState(str, Enum):
    IDLE = "idle"
    ACQUIRING = "acquiring"
    HELD = "held"
    FAILED = "failed"


class Lock(Protocol):
    """A granted wake lock."""

    def release(self) -> None: ...

    def on_released(self, callback: Callable[[], None]) -> None: ...


class WakeLockProvider(Protocol):
    """Platform capability for keeping the screen awake."""

    def supports_wake_lock(self) -> bool: ...

    async def request_lock(self, kind: str = "screen") -> Lock: ...


class StatusSink(Protocol):
    def set_status(self, kind: StatusKind, text: str) -> None: ...


class Control(Protocol):
    """The user-facing toggle as seen by the session."""

    @property
    def checked(self) -> bool: ...

    def set_checked(self, checked: bool) -> None: ...

    def disable(self) -> None: ...
