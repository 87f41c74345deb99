from __future__ import annotations

from typing import Optional, Sequence

from .config import BUILTIN_MESSAGES, CaptureConfig
from .ir import SEPARATOR, SPACE_TOKEN, ModifierToken

APPLE_COMMAND_GLYPH = "⌘"
CONTROL_LABEL = "Ctrl"
SHIFT_GLYPH = "⇧"
ALT_GLYPH = "⌥"
DISPLAY_SEPARATOR = " + "


def format_hotkey(
    canonical: str,
    *,
    apple: bool,
    space_label: str = BUILTIN_MESSAGES["en"].space_label,
) -> str:
    """Render a canonical combination string as a human-readable label."""

    if not canonical:
        return ""

    glyphs = {
        ModifierToken.PRIMARY.value: APPLE_COMMAND_GLYPH if apple else CONTROL_LABEL,
        ModifierToken.SHIFT.value: SHIFT_GLYPH,
        ModifierToken.ALT.value: ALT_GLYPH,
        SPACE_TOKEN: space_label,
    }
    return DISPLAY_SEPARATOR.join(glyphs.get(token, token) for token in canonical.split(SEPARATOR))


class DisplayFormatter:
    """`format_hotkey` bound to one configuration."""

    def __init__(self, config: Optional[CaptureConfig] = None) -> None:
        self._config = config or CaptureConfig()

    def format(self, canonical: str) -> str:
        return format_hotkey(
            canonical,
            apple=self._config.apple,
            space_label=self._config.labels.space_label,
        )

    def format_modifiers(self, tokens: Sequence[ModifierToken]) -> str:
        """Label for modifiers held without a primary key yet (e.g. ``Ctrl + ⇧ + …``)."""

        if not tokens:
            return ""
        return self.format(SEPARATOR.join(t.value for t in tokens)) + DISPLAY_SEPARATOR + "…"
