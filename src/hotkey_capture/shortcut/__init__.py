from __future__ import annotations

from .canonical import canonicalize, held_modifiers, parse_combination, serialize
from .config import CaptureConfig, Messages, detect_apple_platform, load_config
from .display import DisplayFormatter, format_hotkey
from .ir import (
    EMPTY_COMBINATION,
    SEPARATOR,
    SPACE_TOKEN,
    HotkeyCombination,
    ModifierToken,
    RawModifier,
    RawModifiers,
)

__all__ = [
    "EMPTY_COMBINATION",
    "SEPARATOR",
    "SPACE_TOKEN",
    "CaptureConfig",
    "DisplayFormatter",
    "HotkeyCombination",
    "Messages",
    "ModifierToken",
    "RawModifier",
    "RawModifiers",
    "canonicalize",
    "detect_apple_platform",
    "format_hotkey",
    "held_modifiers",
    "load_config",
    "parse_combination",
    "serialize",
]
