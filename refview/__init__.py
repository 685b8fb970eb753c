"""refview - query filters and view-aware key bindings for a terminal repository browser."""

__version__ = "0.1.0"
