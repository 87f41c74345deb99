from __future__ import annotations

from typing import AbstractSet, Optional

from .ir import (
    EMPTY_COMBINATION,
    MODIFIER_ORDER,
    PLUS_TOKEN,
    RAW_MODIFIER_KEYS,
    SEPARATOR,
    SPACE_TOKEN,
    HotkeyCombination,
    KeyCode,
    ModifierToken,
    RawModifier,
    RawModifiers,
)


_SPECIAL_KEYS: dict[str, KeyCode] = {
    " ": SPACE_TOKEN,
    "Space": SPACE_TOKEN,
    "Spacebar": SPACE_TOKEN,
    SEPARATOR: PLUS_TOKEN,
}

# Primary-key names accepted when re-parsing; keys are lower-cased.
_KEY_ALIASES: dict[str, KeyCode] = {
    "space": SPACE_TOKEN,
    "spacebar": SPACE_TOKEN,
    "plus": PLUS_TOKEN,
}

# Names accepted when re-parsing a combination string; keys are lower-cased.
_MODIFIER_ALIASES: dict[str, RawModifier | ModifierToken] = {
    "commandorcontrol": ModifierToken.PRIMARY,
    "cmdorctrl": ModifierToken.PRIMARY,
    "control": RawModifier.CONTROL,
    "ctrl": RawModifier.CONTROL,
    "meta": RawModifier.META,
    "command": RawModifier.META,
    "cmd": RawModifier.META,
    "super": RawModifier.META,
    "shift": RawModifier.SHIFT,
    "alt": RawModifier.ALT,
    "option": RawModifier.ALT,
}


def _fuse(raw: AbstractSet[RawModifier]) -> frozenset[ModifierToken]:
    """Collapse raw signals into canonical tokens (Meta and Control share one slot)."""

    tokens: set[ModifierToken] = set()
    if RawModifier.META in raw or RawModifier.CONTROL in raw:
        tokens.add(ModifierToken.PRIMARY)
    if RawModifier.SHIFT in raw:
        tokens.add(ModifierToken.SHIFT)
    if RawModifier.ALT in raw:
        tokens.add(ModifierToken.ALT)
    return frozenset(tokens)


def _primary_key(key: Optional[str]) -> Optional[KeyCode]:
    if not key or key in RAW_MODIFIER_KEYS:
        return None
    return _SPECIAL_KEYS.get(key, key.replace(SEPARATOR, PLUS_TOKEN))


def _assemble(tokens: AbstractSet[ModifierToken], key: KeyCode) -> HotkeyCombination:
    ordered = tuple(m for m in MODIFIER_ORDER if m in tokens)
    return HotkeyCombination(modifiers=ordered, key=key)


def held_modifiers(modifiers: RawModifiers) -> tuple[ModifierToken, ...]:
    """Canonical tokens for the modifiers currently held, in canonical order."""

    tokens = _fuse(modifiers.pressed())
    return tuple(m for m in MODIFIER_ORDER if m in tokens)


def canonicalize(modifiers: RawModifiers, key: Optional[str]) -> HotkeyCombination:
    """Map raw modifier flags plus the triggering key into a canonical combination.

    Returns ``EMPTY_COMBINATION`` when no primary key is available (nothing
    pressed, or only modifier keys held).
    """

    primary = _primary_key(key)
    if primary is None:
        return EMPTY_COMBINATION
    return _assemble(_fuse(modifiers.pressed()), primary)


def serialize(combination: HotkeyCombination) -> str:
    return SEPARATOR.join(combination.tokens())


def parse_combination(text: str) -> HotkeyCombination:
    """Parse a combination string (canonical or hand-written) into its canonical form."""

    text = text.strip()
    if not text:
        return EMPTY_COMBINATION

    raw: set[RawModifier] = set()
    tokens: set[ModifierToken] = set()
    keys: list[KeyCode] = []
    for part in text.split(SEPARATOR):
        token = part.strip()
        if not token:
            raise ValueError(f"invalid combination (empty token): {text!r}")
        alias = _MODIFIER_ALIASES.get(token.lower())
        if isinstance(alias, ModifierToken):
            tokens.add(alias)
        elif isinstance(alias, RawModifier):
            raw.add(alias)
        else:
            keys.append(_KEY_ALIASES.get(token.lower(), token))

    if not keys:
        raise ValueError(f"invalid combination (no primary key): {text!r}")
    if len(keys) > 1:
        raise ValueError(f"combination must have exactly one primary key: {text!r}")

    return _assemble(tokens | _fuse(raw), keys[0])
