from __future__ import annotations

from .capture import CaptureSession, CaptureState, KeyDownEvent, KeyOutcome
from .shortcut import (
    CaptureConfig,
    DisplayFormatter,
    HotkeyCombination,
    ModifierToken,
    RawModifiers,
    canonicalize,
    format_hotkey,
    load_config,
    parse_combination,
    serialize,
)

__all__ = [
    "CaptureConfig",
    "CaptureSession",
    "CaptureState",
    "DisplayFormatter",
    "HotkeyCombination",
    "KeyDownEvent",
    "KeyOutcome",
    "ModifierToken",
    "RawModifiers",
    "canonicalize",
    "format_hotkey",
    "load_config",
    "parse_combination",
    "serialize",
]
