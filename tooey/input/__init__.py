"""Input-layer public API: raw key decoding and navigation event mapping.

``read_key`` produces key tokens; ``decode_key`` maps tokens onto
``NavEvent`` values, which are all the navigator ever sees.
"""

from __future__ import annotations

from .events import DEFAULT_BINDINGS, NavEvent, decode_key, default_key_registry
from .key_registry import KeyBinding, KeyRegistry
from .reader import ESC_SEQUENCE_TIMEOUT_MS, read_key

__all__ = [
    "read_key",
    "ESC_SEQUENCE_TIMEOUT_MS",
    "KeyBinding",
    "KeyRegistry",
    "NavEvent",
    "DEFAULT_BINDINGS",
    "decode_key",
    "default_key_registry",
]
