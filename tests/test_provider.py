"""Tests for the inhibitor process provider."""
import asyncio
import shutil

import pytest

from cook_mode.wakelock import (
    AcquisitionFailed,
    CapabilityUnsupported,
    ProcessWakeLockProvider,
    StatusKind,
    ToggleControl,
    WakeLockSession,
)
from cook_mode.wakelock.provider import LINUX_COMMAND, MACOS_COMMAND, default_command

from .conftest import RecordingSink

requires_sleep = pytest.mark.skipif(shutil.which("sleep") is None, reason="sleep not available")


def test_default_command_per_platform():
    assert default_command("darwin") == MACOS_COMMAND
    assert default_command("linux") == LINUX_COMMAND
    assert default_command("win32") is None


def test_missing_command_not_supported():
    provider = ProcessWakeLockProvider(["cook-mode-no-such-inhibitor"])

    assert provider.supports_wake_lock() is False


def test_no_command_not_supported():
    provider = ProcessWakeLockProvider([])

    assert provider.supports_wake_lock() is False


async def test_unknown_lock_kind_rejected():
    provider = ProcessWakeLockProvider(["sleep", "30"])

    with pytest.raises(AcquisitionFailed):
        await provider.request_lock("system")


async def test_spawn_failure_raises_acquisition_failed():
    provider = ProcessWakeLockProvider(["cook-mode-no-such-inhibitor"])

    with pytest.raises(AcquisitionFailed):
        await provider.request_lock()


@requires_sleep
async def test_release_terminates_process():
    provider = ProcessWakeLockProvider(["sleep", "30"])
    lock = await provider.request_lock()
    fired = []
    lock.on_released(lambda: fired.append(True))

    lock.release()
    lock.release()
    await asyncio.wait_for(lock._watcher, timeout=5)

    assert lock.released
    assert fired == [True]


@requires_sleep
async def test_process_exit_counts_as_platform_release():
    provider = ProcessWakeLockProvider(["sleep", "30"])
    lock = await provider.request_lock()
    fired = []
    lock.on_released(lambda: fired.append(True))

    lock.process.kill()
    await asyncio.wait_for(lock._watcher, timeout=5)

    assert lock.released
    assert fired == [True]


@requires_sleep
async def test_listener_after_release_fires_immediately():
    provider = ProcessWakeLockProvider(["sleep", "30"])
    lock = await provider.request_lock()
    lock.release()
    await asyncio.wait_for(lock._watcher, timeout=5)

    fired = []
    lock.on_released(lambda: fired.append(True))

    assert fired == [True]


async def test_request_without_command_is_unsupported():
    provider = ProcessWakeLockProvider([])

    with pytest.raises(CapabilityUnsupported):
        await provider.request_lock()


@pytest.mark.skipif(shutil.which("false") is None, reason="false not available")
async def test_inhibitor_exiting_at_once_is_a_failed_acquisition():
    provider = ProcessWakeLockProvider(["false"])

    with pytest.raises(AcquisitionFailed, match="exited with 1"):
        await provider.request_lock()


@pytest.mark.skipif(shutil.which("false") is None, reason="false not available")
async def test_session_reports_error_when_inhibitor_dies_at_once():
    control = ToggleControl()
    sink = RecordingSink()
    session = WakeLockSession(ProcessWakeLockProvider(["false"]), control, sink)
    session.initialize()

    control.set_checked(True)
    await session.enable()
    await asyncio.sleep(0.2)

    assert sink.kinds == [StatusKind.ERROR]
    assert not control.checked
    assert session.handle is None
