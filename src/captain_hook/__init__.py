"""Configurable event emission that can be mixed into any object or class."""

from __future__ import annotations

# Composition helpers
from .composition import hook_config, mixin, operations

# Construction options
from .config import HookConfig

# Capability factory
from .core import captain_hook

# Handler records
from .registration import DEFAULT_PRIORITY, HandlerRecord, HandlerStore

# Dispatch tracing
from .trace import format_trace, log_dispatch

__version__ = "0.1.0"

__all__ = [
    "captain_hook",
    "HookConfig",
    # Composition
    "mixin",
    "operations",
    "hook_config",
    # Registration
    "HandlerRecord",
    "HandlerStore",
    "DEFAULT_PRIORITY",
    # Tracing
    "format_trace",
    "log_dispatch",
]
