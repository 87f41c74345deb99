from __future__ import annotations

from enum import Enum
from typing import Optional, Tuple, TypeAlias

from pydantic import BaseModel, ConfigDict, model_validator


class ModifierToken(str, Enum):
    """Canonical (platform-neutral) modifier tokens, declared in canonical order."""

    PRIMARY = "CommandOrControl"
    SHIFT = "Shift"
    ALT = "Alt"


class RawModifier(str, Enum):
    """Raw modifier signals as reported by the host for a key-down event."""

    CONTROL = "Control"
    ALT = "Alt"
    SHIFT = "Shift"
    META = "Meta"


KeyCode: TypeAlias = str

SEPARATOR = "+"
SPACE_TOKEN: KeyCode = "Space"
PLUS_TOKEN: KeyCode = "Plus"

MODIFIER_ORDER: Tuple[ModifierToken, ...] = tuple(ModifierToken)
RAW_MODIFIER_KEYS = frozenset(m.value for m in RawModifier)


class RawModifiers(BaseModel):
    """Modifier flags held down while a key-down event fired."""

    model_config = ConfigDict(frozen=True)

    control: bool = False
    alt: bool = False
    shift: bool = False
    meta: bool = False

    def pressed(self) -> frozenset[RawModifier]:
        flags = {
            RawModifier.CONTROL: self.control,
            RawModifier.ALT: self.alt,
            RawModifier.SHIFT: self.shift,
            RawModifier.META: self.meta,
        }
        return frozenset(mod for mod, down in flags.items() if down)


class HotkeyCombination(BaseModel):
    """Ordered modifiers followed by at most one primary key.

    A combination without modifiers and without key is the cleared state.
    """

    model_config = ConfigDict(frozen=True)

    modifiers: Tuple[ModifierToken, ...] = ()
    key: Optional[KeyCode] = None

    @model_validator(mode="after")
    def _check_invariants(self) -> HotkeyCombination:
        if len(set(self.modifiers)) != len(self.modifiers):
            raise ValueError(f"duplicate modifier tokens: {self.modifiers!r}")
        expected = tuple(m for m in MODIFIER_ORDER if m in self.modifiers)
        if self.modifiers != expected:
            raise ValueError(f"modifiers out of canonical order: {self.modifiers!r}")
        if self.modifiers and not self.key:
            raise ValueError("combination has modifiers but no primary key")
        if self.key is not None and (
            not self.key or self.key in RAW_MODIFIER_KEYS or SEPARATOR in self.key
        ):
            raise ValueError(f"invalid primary key: {self.key!r}")
        return self

    @property
    def is_empty(self) -> bool:
        return not self.modifiers and self.key is None

    def tokens(self) -> Tuple[str, ...]:
        parts = [m.value for m in self.modifiers]
        if self.key is not None:
            parts.append(self.key)
        return tuple(parts)


EMPTY_COMBINATION = HotkeyCombination()
