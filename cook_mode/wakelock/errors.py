"""Wake lock error types."""


class WakeLockError(Exception):
    """Base class for wake lock failures."""


class CapabilityUnsupported(WakeLockError):
    """The platform has no way to keep the screen awake."""


class AcquisitionFailed(WakeLockError):
    """The platform rejected or errored on a lock request."""
