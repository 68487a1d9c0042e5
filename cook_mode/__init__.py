"""Cook Mode - keep the screen awake while cooking."""

__version__ = "1.0.0"
