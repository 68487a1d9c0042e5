"""Tests for the toggle control."""
from cook_mode.wakelock import ToggleControl


def test_listeners_notified_on_change():
    control = ToggleControl()
    seen = []
    control.subscribe(lambda c: seen.append(c.to_dict()))

    control.set_checked(True)
    control.set_checked(True)
    control.set_checked(False)

    assert seen == [
        {"checked": True, "disabled": False},
        {"checked": False, "disabled": False},
    ]


def test_disable_unchecks_permanently():
    control = ToggleControl(checked=True)

    control.disable()

    assert control.disabled
    assert not control.checked
