"""Wake lock session: acquires, tracks and releases one screen wake lock."""
import logging
from typing import Optional

from ..settings import StatusTexts
from .types import Control, Lock, SessionState, StatusKind, StatusSink, WakeLockProvider

logger = logging.getLogger(__name__)


class WakeLockSession:
    """Keep the screen awake while the Cook Mode toggle is on.

    The session owns at most one lock at a time. It reacts to the user
    turning the toggle on or off, to the page becoming visible again and to
    the page being unloaded, plus one platform event: the lock being
    released out-of-band (for example when the page is hidden).

    Failures never escape the session; they end up as status updates and,
    for acquisition failures, as the toggle being switched back off.
    """

    def __init__(
        self,
        provider: WakeLockProvider,
        control: Control,
        sink: StatusSink,
        texts: Optional[StatusTexts] = None,
    ):
        self._provider = provider
        self._control = control
        self._sink = sink
        self.texts = texts or StatusTexts()

        self.state = SessionState.IDLE
        self.status = StatusKind.HIDDEN
        self.desired_state = False
        self._handle: Optional[Lock] = None
        # Platform took the lock away while the toggle stayed on
        self._revoked = False

    @property
    def handle(self) -> Optional[Lock]:
        return self._handle

    @property
    def is_held(self) -> bool:
        return self._handle is not None

    def initialize(self) -> bool:
        """Probe the platform once. Returns False if wake locks are unsupported."""
        if self._provider.supports_wake_lock():
            return True

        logger.warning("Wake lock is not supported on this platform")
        self._control.disable()
        self._show(StatusKind.ERROR)
        self.state = SessionState.FAILED
        return False

    async def handle_control_changed(self, checked: bool):
        """Dispatch a toggle change to enable() or disable()."""
        if checked:
            await self.enable()
        else:
            self.disable()

    async def enable(self):
        """Acquire a screen wake lock."""
        if self.state == SessionState.FAILED:
            logger.debug("Ignoring enable, wake lock unsupported")
            return

        self.desired_state = True

        if self.state == SessionState.HELD:
            self._show(StatusKind.ACTIVE)
            return
        if self.state == SessionState.ACQUIRING:
            # The in-flight request will pick up the latest intent
            return

        await self._acquire()

    def disable(self):
        """Release the lock if one is held and hide the status."""
        if self.state == SessionState.FAILED:
            return

        self.desired_state = False
        self._revoked = False
        self._drop_handle()
        if self.state != SessionState.ACQUIRING:
            self.state = SessionState.IDLE
        self._show(StatusKind.HIDDEN)

    async def handle_visibility_restored(self):
        """Re-acquire a lock the platform released while the page was hidden."""
        if not self._revoked or self._handle is not None:
            return
        if self.state in (SessionState.ACQUIRING, SessionState.FAILED):
            return

        self._revoked = False
        if not self._control.checked:
            return

        logger.info("Page visible again, re-acquiring wake lock")
        self.desired_state = True
        await self._acquire()

    def handle_unload(self):
        """Release any held lock. Never raises."""
        self.desired_state = False
        self._revoked = False
        self._drop_handle()
        if self.state == SessionState.HELD:
            self.state = SessionState.IDLE
        if self.state == SessionState.FAILED:
            return
        try:
            self._show(StatusKind.HIDDEN)
        except Exception as e:
            logger.warning("Failed to clear status on unload: %s", e)

    def to_dict(self) -> dict:
        return {
            "state": self.state.value,
            "status": self.status.value,
            "status_text": self.texts.for_kind(self.status),
            "held": self.is_held,
            "desired": self.desired_state,
        }

    async def _acquire(self):
        self.state = SessionState.ACQUIRING

        try:
            lock = await self._provider.request_lock("screen")
        except Exception as e:
            logger.warning("Failed to enable cook mode: %s", e)
            self.state = SessionState.IDLE
            self.desired_state = False
            self._show(StatusKind.ERROR)
            self._control.set_checked(False)
            return

        if not self.desired_state:
            # Disabled while the request was in flight: latest intent wins
            logger.debug("Releasing wake lock acquired after disable")
            self.state = SessionState.IDLE
            self._release_quietly(lock)
            self._show(StatusKind.HIDDEN)
            return

        self._handle = lock
        self.state = SessionState.HELD
        logger.info("Wake lock acquired")
        self._show(StatusKind.ACTIVE)
        lock.on_released(lambda: self._on_platform_release(lock))

    def _on_platform_release(self, lock: Lock):
        if lock is not self._handle:
            # Released by us, or a lock that was already superseded
            return

        logger.info("Wake lock released by the platform")
        self._handle = None
        self.state = SessionState.IDLE
        if self._control.checked:
            self._revoked = True
            self._show(StatusKind.INACTIVE)

    def _drop_handle(self):
        lock, self._handle = self._handle, None
        if lock is not None:
            self._release_quietly(lock)
            logger.info("Wake lock released")

    def _release_quietly(self, lock: Lock):
        try:
            lock.release()
        except Exception as e:
            logger.warning("Failed to release wake lock: %s", e)

    def refresh_status(self):
        """Show the current status again, e.g. after the texts changed."""
        self._show(self.status)

    def _show(self, kind: StatusKind):
        self.status = kind
        self._sink.set_status(kind, self.texts.for_kind(kind))
