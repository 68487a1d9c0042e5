"""Cook Mode settings and status texts."""
import re
from typing import Literal

from pydantic import BaseModel, field_validator

DEFAULT_TOGGLE_COLOR = "#2271b1"

HEX_COLOR_RE = re.compile(r"^#([A-Fa-f0-9]{3}){1,2}$")
TAG_RE = re.compile(r"<[^>]*>")
WHITESPACE_RE = re.compile(r"\s+")


def sanitize_text(value) -> str:
    """Strip tags and line breaks from a single-line text value."""
    text = TAG_RE.sub("", str(value))
    return WHITESPACE_RE.sub(" ", text).strip()


def sanitize_hex_color(value):
    """Return the color if it is #rgb or #rrggbb, otherwise None."""
    if not isinstance(value, str):
        return None
    value = value.strip()
    return value if HEX_COLOR_RE.match(value) else None


class StatusTexts(BaseModel):
    """Text shown by the status sink for each status kind."""
    active_text: str = "Cook Mode Active"
    inactive_text: str = "Cook Mode Inactive"
    error_text: str = "Cook Mode not supported on this device"

    @field_validator("active_text", "inactive_text", "error_text", mode="before")
    @classmethod
    def clean_text(cls, value):
        return sanitize_text(value)

    def for_kind(self, kind) -> str:
        """Text for a StatusKind; hidden has none."""
        return getattr(self, f"{kind.value}_text", "")


class CookModeSettings(StatusTexts):
    """Appearance and placement of the Cook Mode toggle."""
    enabled: bool = True
    position: Literal["top", "bottom"] = "top"
    label: str = "Cook Mode"
    description: str = "Prevent screen from turning off"
    toggle_color: str = DEFAULT_TOGGLE_COLOR

    @field_validator("label", "description", mode="before")
    @classmethod
    def clean_label(cls, value):
        return sanitize_text(value)

    @field_validator("toggle_color", mode="before")
    @classmethod
    def clean_color(cls, value):
        return sanitize_hex_color(value) or DEFAULT_TOGGLE_COLOR

    @classmethod
    def from_form(cls, data: dict) -> "CookModeSettings":
        """Build settings from a submitted form.

        Fields not submitted fall back to their defaults, except the enabled
        checkbox: an unchecked box is not submitted at all, so a missing
        value means disabled.
        """
        fields = {k: v for k, v in data.items() if k in cls.model_fields and v is not None}
        fields["enabled"] = bool(fields.get("enabled", False))
        return cls(**fields)

    @property
    def status_texts(self) -> StatusTexts:
        return StatusTexts(
            active_text=self.active_text,
            inactive_text=self.inactive_text,
            error_text=self.error_text,
        )


class SettingsStore:
    """Holds the current settings for the lifetime of the process."""

    def __init__(self, settings: CookModeSettings = None):
        self._settings = settings or CookModeSettings()

    def get(self) -> CookModeSettings:
        return self._settings

    def update(self, data: dict) -> CookModeSettings:
        self._settings = CookModeSettings.from_form(data)
        return self._settings

    def reset(self) -> CookModeSettings:
        self._settings = CookModeSettings()
        return self._settings
