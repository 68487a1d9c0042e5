"""Server-side mirror of the Cook Mode toggle."""
from typing import Callable, List

ControlListener = Callable[["ToggleControl"], None]


class ToggleControl:
    """Boolean toggle the user manipulates.

    The session forces it back to unchecked when a lock cannot be acquired
    and disables it for good when the platform has no wake lock support.
    Listeners are told about every change so the UI can be kept in sync.
    """

    def __init__(self, checked: bool = False):
        self._checked = checked
        self._disabled = False
        self._listeners: List[ControlListener] = []

    @property
    def checked(self) -> bool:
        return self._checked

    @property
    def disabled(self) -> bool:
        return self._disabled

    def set_checked(self, checked: bool):
        if checked == self._checked:
            return
        self._checked = checked
        self._notify()

    def disable(self):
        """Permanently disable the toggle."""
        if self._disabled and not self._checked:
            return
        self._disabled = True
        self._checked = False
        self._notify()

    def subscribe(self, listener: ControlListener):
        self._listeners.append(listener)

    def to_dict(self) -> dict:
        return {"checked": self._checked, "disabled": self._disabled}

    def _notify(self):
        for listener in list(self._listeners):
            listener(self)
