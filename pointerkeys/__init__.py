"""Modal, keyboard-driven pointer control over a pluggable display backend."""

__version__ = "1.3.5"