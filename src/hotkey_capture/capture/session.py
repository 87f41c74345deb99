from __future__ import annotations

import logging
from enum import Enum
from typing import Callable, Optional, Tuple

from pydantic import BaseModel

from hotkey_capture.shortcut.canonical import canonicalize, held_modifiers, serialize
from hotkey_capture.shortcut.config import CaptureConfig
from hotkey_capture.shortcut.display import DisplayFormatter
from hotkey_capture.shortcut.ir import ModifierToken

from .events import KeyDownEvent

logger = logging.getLogger(__name__)

OnChange = Callable[[str], None]


class CaptureState(str, Enum):
    IDLE = "idle"
    RECORDING = "recording"


class KeyOutcome(str, Enum):
    """What a key-down did to the session."""

    IGNORED = "ignored"
    REJECTED = "rejected"
    CANCELLED = "cancelled"
    COMMITTED = "committed"


class RecordingSession(BaseModel):
    """Ephemeral state of one capture interaction; inactive while idle."""

    active: bool = False
    last_committed_combination: str = ""
    held: Tuple[ModifierToken, ...] = ()


class CaptureSession:
    """Recording state machine behind a hotkey input control.

    The canonical value is the only stored truth; every label is derived
    from it (or from the recording state) on demand. No method raises for
    any event input.
    """

    def __init__(
        self,
        value: str = "",
        *,
        on_change: Optional[OnChange] = None,
        disabled: bool = False,
        config: Optional[CaptureConfig] = None,
    ) -> None:
        self._config = config or CaptureConfig()
        self._formatter = DisplayFormatter(self._config)
        self._on_change = on_change
        self._value = value
        self._disabled = disabled
        self._recording = RecordingSession(last_committed_combination=value)

    @property
    def state(self) -> CaptureState:
        return CaptureState.RECORDING if self._recording.active else CaptureState.IDLE

    @property
    def value(self) -> str:
        return self._value

    @property
    def disabled(self) -> bool:
        return self._disabled

    @property
    def config(self) -> CaptureConfig:
        return self._config

    def is_recording_active(self) -> bool:
        return self._recording.active

    def current_display_value(self) -> str:
        labels = self._config.labels
        if self._recording.active:
            if self._config.show_held_modifiers and self._recording.held:
                return self._formatter.format_modifiers(self._recording.held)
            return labels.recording_prompt
        return self._formatter.format(self._value) or labels.placeholder

    def hint_text(self) -> str:
        return self._config.labels.recording_hint if self._recording.active else ""

    def is_focusable(self) -> bool:
        return not self._disabled

    def can_clear(self) -> bool:
        return not self._recording.active and not self._disabled and bool(self._value)

    # -- transitions ---------------------------------------------------

    def start_recording(self) -> bool:
        if self._disabled or self._recording.active:
            return False
        self._recording = RecordingSession(active=True, last_committed_combination=self._value)
        logger.debug("recording started (current=%r)", self._value)
        return True

    def handle_key_down(self, event: KeyDownEvent) -> KeyOutcome:
        if not self._recording.active or self._disabled:
            return KeyOutcome.IGNORED

        # Host shortcuts must never fire while capturing.
        event.prevent_default()
        event.stop_propagation()

        if event.key == self._config.cancel_key:
            self._rollback("cancel key")
            return KeyOutcome.CANCELLED

        combination = canonicalize(event.modifiers, event.key)
        if combination.is_empty:
            self._recording.held = held_modifiers(event.modifiers)
            logger.debug("rejected key-down without primary key: %r", event.key)
            return KeyOutcome.REJECTED

        self._commit(serialize(combination))
        return KeyOutcome.COMMITTED

    def handle_blur(self) -> bool:
        if not self._recording.active:
            return False
        self._rollback("blur")
        return True

    def clear(self) -> bool:
        if self._disabled or self._recording.active:
            return False
        logger.debug("cleared (was %r)", self._value)
        self._commit("")
        return True

    # -- collaborator sync ---------------------------------------------

    def set_value(self, value: str) -> None:
        self._value = value
        self._recording.last_committed_combination = value

    def set_disabled(self, disabled: bool) -> None:
        self._disabled = disabled
        if disabled and self._recording.active:
            self._rollback("disabled")

    # -- internals -----------------------------------------------------

    def _rollback(self, reason: str) -> None:
        self._value = self._recording.last_committed_combination
        self._recording = RecordingSession(last_committed_combination=self._value)
        logger.debug("recording cancelled by %s, keeping %r", reason, self._value)

    def _commit(self, value: str) -> None:
        self._value = value
        self._recording = RecordingSession(last_committed_combination=value)
        logger.debug("committed %r", value)
        if self._on_change is None:
            return
        try:
            self._on_change(value)
        except Exception:
            logger.exception("on_change callback failed for %r", value)
