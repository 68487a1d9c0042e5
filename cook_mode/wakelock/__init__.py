"""Screen wake lock session and platform provider."""
from .control import ToggleControl
from .errors import AcquisitionFailed, CapabilityUnsupported, WakeLockError
from .provider import ProcessLock, ProcessWakeLockProvider
from .session import WakeLockSession
from .types import SessionState, StatusKind

__all__ = [
    "WakeLockSession",
    "ToggleControl",
    "ProcessWakeLockProvider",
    "ProcessLock",
    "SessionState",
    "StatusKind",
    "WakeLockError",
    "CapabilityUnsupported",
    "AcquisitionFailed",
]
