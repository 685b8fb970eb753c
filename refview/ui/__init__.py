"""Textual adapters for key routing and filter status display."""

from .filter_status import format_filter_errors
from .key_routing import KeyRoutingMixin, resolve_key_event

__all__ = [
    "KeyRoutingMixin",
    "format_filter_errors",
    "resolve_key_event",
]
