"""Screen wake locks backed by OS inhibitor processes.

Platform support:

- macOS: ``caffeinate -d`` prevents the display from sleeping.
- Linux: ``systemd-inhibit --what=idle`` blocks the idle action.
- Other platforms: unsupported.

The lock is held for as long as the inhibitor process runs. If the process
dies on its own (killed, session ended) the lock counts as released by the
platform and its release listeners fire.
"""
import asyncio
import logging
import shutil
import sys
from typing import Callable, List, Optional, Sequence

from .errors import AcquisitionFailed, CapabilityUnsupported

logger = logging.getLogger(__name__)

MACOS_COMMAND = ("caffeinate", "-d")
LINUX_COMMAND = (
    "systemd-inhibit",
    "--what=idle",
    "--who=cook-mode",
    "--why=Cook Mode keeps the screen awake",
    "sleep", "infinity",
)

# Seconds an inhibitor must survive before the lock counts as acquired
STARTUP_GRACE = 0.1


def default_command(platform: str = sys.platform) -> Optional[Sequence[str]]:
    """Inhibitor command for the given platform, or None if unsupported."""
    if platform == "darwin":
        return MACOS_COMMAND
    if platform.startswith("linux"):
        return LINUX_COMMAND
    return None


class ProcessLock:
    """A wake lock held by a running inhibitor process."""

    def __init__(self, process: asyncio.subprocess.Process):
        self.process = process
        self.released = False
        self._callbacks: List[Callable[[], None]] = []
        self._watcher = asyncio.ensure_future(self._watch())

    def release(self):
        """Terminate the inhibitor process."""
        if self.released:
            return
        if self.process.returncode is None:
            try:
                self.process.terminate()
            except ProcessLookupError:
                pass
        self._mark_released()

    def on_released(self, callback: Callable[[], None]):
        """Register a callback, fired at most once when the lock goes away."""
        if self.released:
            callback()
            return
        self._callbacks.append(callback)

    async def _watch(self):
        returncode = await self.process.wait()
        if not self.released:
            logger.info("Inhibitor process %s exited with %s", self.process.pid, returncode)
            self._mark_released()

    def _mark_released(self):
        self.released = True
        callbacks, self._callbacks = self._callbacks, []
        for callback in callbacks:
            callback()


class ProcessWakeLockProvider:
    """Acquire screen wake locks by spawning an inhibitor process."""

    def __init__(self, command: Optional[Sequence[str]] = None):
        self.command = tuple(command) if command is not None else default_command()

    def supports_wake_lock(self) -> bool:
        """Check if the inhibitor command is available."""
        return bool(self.command) and shutil.which(self.command[0]) is not None

    async def request_lock(self, kind: str = "screen") -> ProcessLock:
        if kind != "screen":
            raise AcquisitionFailed(f"Unsupported wake lock type: {kind}")
        if not self.command:
            raise CapabilityUnsupported("No inhibitor command for this platform")

        try:
            process = await asyncio.create_subprocess_exec(
                *self.command,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.DEVNULL,
                stderr=asyncio.subprocess.DEVNULL,
            )
        except OSError as e:
            raise AcquisitionFailed(f"Could not start {self.command[0]}: {e}") from e

        # An inhibitor that cannot take the lock exits right away
        try:
            returncode = await asyncio.wait_for(process.wait(), STARTUP_GRACE)
        except asyncio.TimeoutError:
            pass
        else:
            raise AcquisitionFailed(f"{self.command[0]} exited with {returncode}")

        logger.info("Screen wake lock acquired (%s PID %d)", self.command[0], process.pid)
        return ProcessLock(process)
