"""Cook Mode runtime shared by the web routes."""
from typing import Optional

from ..settings import CookModeSettings, SettingsStore
from ..wakelock import ProcessWakeLockProvider, ToggleControl, WakeLockSession
from ..wakelock.types import WakeLockProvider
from .websocket import Broadcaster, BroadcastStatusSink, ConnectionManager, manager as ws_manager


class CookModeRunner:
    """Wire the toggle, the status sink and the wake lock session together.

    No session exists until the user first turns Cook Mode on, unless the
    capability probe fails at startup, in which case one is created right
    away to report the error and disable the toggle.
    """

    def __init__(
        self,
        provider: Optional[WakeLockProvider] = None,
        connections: Optional[ConnectionManager] = None,
        settings: Optional[CookModeSettings] = None,
    ):
        self.provider = provider or ProcessWakeLockProvider()
        self.broadcaster = Broadcaster(connections or ws_manager)
        self.settings = SettingsStore(settings)
        self.control = ToggleControl()
        self.control.subscribe(self._on_control_change)
        self.sink = BroadcastStatusSink(self.broadcaster)
        self.session: Optional[WakeLockSession] = None
        self.supported: Optional[bool] = None

    def startup(self) -> bool:
        """Probe the platform. Returns whether wake locks are supported."""
        self.supported = self.provider.supports_wake_lock()
        if not self.supported:
            self.ensure_session()
        return self.supported

    def ensure_session(self) -> WakeLockSession:
        if self.session is None:
            self.session = WakeLockSession(
                self.provider,
                self.control,
                self.sink,
                texts=self.settings.get().status_texts,
            )
            self.supported = self.session.initialize()
        return self.session

    async def set_checked(self, checked: bool):
        """The user flipped the toggle."""
        self.control.set_checked(checked)
        if checked:
            await self.ensure_session().handle_control_changed(True)
        elif self.session is not None:
            await self.session.handle_control_changed(False)

    async def visibility_restored(self):
        if self.session is not None:
            await self.session.handle_visibility_restored()

    def unload(self):
        if self.session is not None:
            self.session.handle_unload()
        self.control.set_checked(False)

    def update_settings(self, data: dict) -> CookModeSettings:
        settings = self.settings.update(data)
        self._apply_texts()
        return settings

    def reset_settings(self) -> CookModeSettings:
        settings = self.settings.reset()
        self._apply_texts()
        return settings

    def get_status(self) -> dict:
        return {
            "supported": self.supported,
            "enabled": self.settings.get().enabled,
            "control": self.control.to_dict(),
            "status": self.sink.to_dict(),
            "session": self.session.to_dict() if self.session else None,
        }

    def _apply_texts(self):
        if self.session is not None:
            self.session.texts = self.settings.get().status_texts
            self.session.refresh_status()

    def _on_control_change(self, control: ToggleControl):
        self.broadcaster.send({"type": "control", **control.to_dict()})


# Global runner instance
cook_mode_runner = CookModeRunner()
