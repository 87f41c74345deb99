from __future__ import annotations

import logging
import random

import pytest

from hotkey_capture.capture.events import KeyDownEvent
from hotkey_capture.capture.session import CaptureSession, CaptureState, KeyOutcome
from hotkey_capture.shortcut.config import CaptureConfig

_CONFIG = CaptureConfig(apple=False)


def _session(value: str = "", **kwargs) -> tuple[CaptureSession, list[str]]:
    changes: list[str] = []
    kwargs.setdefault("config", _CONFIG)
    session = CaptureSession(value, on_change=changes.append, **kwargs)
    return session, changes


def test_idle_shows_formatted_value() -> None:
    session, _ = _session("Shift+a")
    assert session.state == CaptureState.IDLE
    assert not session.is_recording_active()
    assert session.current_display_value() == "⇧ + a"


def test_idle_empty_shows_placeholder() -> None:
    session, _ = _session()
    assert session.current_display_value() == _CONFIG.labels.placeholder


def test_commit_example() -> None:
    session, changes = _session()
    assert session.start_recording()
    assert session.is_recording_active()
    assert session.current_display_value() == _CONFIG.labels.recording_prompt

    event = KeyDownEvent.of("k", control=True, shift=True)
    assert session.handle_key_down(event) == KeyOutcome.COMMITTED

    assert changes == ["CommandOrControl+Shift+k"]
    assert session.value == "CommandOrControl+Shift+k"
    assert session.current_display_value() == "Ctrl + ⇧ + k"
    assert session.state == CaptureState.IDLE
    assert event.suppressed


def test_cancel_example() -> None:
    session, changes = _session("Shift+a")
    session.start_recording()

    event = KeyDownEvent.of("Escape")
    assert session.handle_key_down(event) == KeyOutcome.CANCELLED

    assert event.suppressed
    assert changes == []
    assert session.value == "Shift+a"
    assert session.current_display_value() == "⇧ + a"
    assert not session.is_recording_active()


def test_clear_example() -> None:
    session, changes = _session("Shift+a")
    assert session.can_clear()
    assert session.clear()

    assert changes == [""]
    assert session.value == ""
    assert session.current_display_value() == _CONFIG.labels.placeholder
    assert not session.can_clear()


def test_modifiers_only_keeps_recording() -> None:
    session, changes = _session("Alt+x")
    session.start_recording()

    for key, flags in [("Control", {"control": True}), ("Shift", {"control": True, "shift": True})]:
        event = KeyDownEvent.of(key, **flags)
        assert session.handle_key_down(event) == KeyOutcome.REJECTED
        assert event.suppressed

    assert session.is_recording_active()
    assert session.current_display_value() == _CONFIG.labels.recording_prompt
    assert changes == []
    assert session.value == "Alt+x"


def test_show_held_modifiers_feedback() -> None:
    session, _ = _session(config=CaptureConfig(apple=False, show_held_modifiers=True))
    session.start_recording()
    session.handle_key_down(KeyDownEvent.of("Shift", meta=True, shift=True))
    assert session.current_display_value() == "Ctrl + ⇧ + …"

    session.handle_key_down(KeyDownEvent.of("p", meta=True, shift=True))
    assert session.value == "CommandOrControl+Shift+p"
    assert session.current_display_value() == "Ctrl + ⇧ + p"


def test_idle_ignores_key_down_without_suppressing() -> None:
    session, changes = _session("Shift+a")
    event = KeyDownEvent.of("k", control=True)
    assert session.handle_key_down(event) == KeyOutcome.IGNORED
    assert not event.default_prevented
    assert not event.propagation_stopped
    assert changes == []


def test_blur_rolls_back() -> None:
    session, changes = _session("Shift+a")
    session.start_recording()
    session.handle_key_down(KeyDownEvent.of("Alt", alt=True))

    assert session.handle_blur()
    assert not session.is_recording_active()
    assert session.value == "Shift+a"
    assert session.current_display_value() == "⇧ + a"
    assert changes == []

    assert not session.handle_blur()


def test_disabled_gates_start_and_clear() -> None:
    session, changes = _session("Shift+a", disabled=True)
    assert not session.start_recording()
    assert not session.clear()
    assert not session.is_focusable()
    assert not session.can_clear()
    assert session.value == "Shift+a"
    assert changes == []


def test_disabling_while_recording_cancels() -> None:
    session, changes = _session("Shift+a")
    session.start_recording()
    session.set_disabled(True)
    assert not session.is_recording_active()

    event = KeyDownEvent.of("k")
    assert session.handle_key_down(event) == KeyOutcome.IGNORED
    assert changes == []


def test_clear_is_noop_while_recording() -> None:
    session, changes = _session("Shift+a")
    session.start_recording()
    assert not session.clear()
    assert session.is_recording_active()
    assert changes == []


def test_start_twice_keeps_single_session() -> None:
    session, _ = _session("Shift+a")
    assert session.start_recording()
    assert not session.start_recording()


def test_set_value_rederives_display() -> None:
    session, changes = _session("Shift+a")
    session.set_value("CommandOrControl+Space")
    assert session.current_display_value() == "Ctrl + Space"

    session.start_recording()
    session.set_value("Alt+z")
    session.handle_blur()
    assert session.value == "Alt+z"
    assert changes == []


def test_hint_only_while_recording() -> None:
    session, _ = _session()
    assert session.hint_text() == ""
    session.start_recording()
    assert session.hint_text() == _CONFIG.labels.recording_hint


def test_custom_cancel_key() -> None:
    session, changes = _session("Shift+a", config=CaptureConfig(apple=False, cancel_key="F12"))
    session.start_recording()
    assert session.handle_key_down(KeyDownEvent.of("Escape")) == KeyOutcome.COMMITTED
    assert changes == ["Escape"]

    session.start_recording()
    assert session.handle_key_down(KeyDownEvent.of("F12")) == KeyOutcome.CANCELLED
    assert session.value == "Escape"


def test_failing_callback_does_not_escape(caplog: pytest.LogCaptureFixture) -> None:
    def boom(value: str) -> None:
        raise RuntimeError("persist failed")

    session = CaptureSession("", on_change=boom, config=_CONFIG)
    session.start_recording()
    with caplog.at_level(logging.ERROR, logger="hotkey_capture.capture.session"):
        outcome = session.handle_key_down(KeyDownEvent.of("k", alt=True))

    assert outcome == KeyOutcome.COMMITTED
    assert session.value == "Alt+k"
    assert not session.is_recording_active()
    assert "on_change callback failed" in caplog.text


def test_never_recording_after_blur() -> None:
    rng = random.Random(1234)
    keys = ["k", " ", "Escape", "Control", "Shift", "Alt", "Meta", None, "F1"]

    for _ in range(200):
        session, _ = _session(rng.choice(["", "Shift+a", "CommandOrControl+k"]))
        for _ in range(rng.randint(0, 12)):
            action = rng.choice(["start", "key", "clear", "blur", "disable", "enable"])
            if action == "start":
                session.start_recording()
            elif action == "key":
                session.handle_key_down(
                    KeyDownEvent.of(
                        rng.choice(keys),
                        control=rng.random() < 0.5,
                        alt=rng.random() < 0.5,
                        shift=rng.random() < 0.5,
                        meta=rng.random() < 0.5,
                    )
                )
            elif action == "clear":
                session.clear()
            elif action == "blur":
                session.handle_blur()
                assert not session.is_recording_active()
            elif action == "disable":
                session.set_disabled(True)
            else:
                session.set_disabled(False)
        session.handle_blur()
        assert session.state == CaptureState.IDLE


def test_held_modifiers_follow_latest_rejected_event() -> None:
    session, _ = _session(config=CaptureConfig(apple=False, show_held_modifiers=True))
    session.start_recording()

    session.handle_key_down(KeyDownEvent.of("Shift", control=True, shift=True))
    assert session.current_display_value() == "Ctrl + ⇧ + …"

    session.handle_key_down(KeyDownEvent.of("Shift", shift=True))
    assert session.current_display_value() == "⇧ + …"

    # a key-down with nothing held goes back to the prompt
    assert session.handle_key_down(KeyDownEvent.of(None)) == KeyOutcome.REJECTED
    assert session.current_display_value() == CaptureConfig().labels.recording_prompt


def test_state_follows_recording_session_lifecycle() -> None:
    session, _ = _session("Shift+a")
    assert session.state == CaptureState.IDLE

    session.start_recording()
    assert session.state == CaptureState.RECORDING

    session.handle_key_down(KeyDownEvent.of("Escape"))
    assert session.state == CaptureState.IDLE
    assert not session.handle_blur()

    session.start_recording()
    session.handle_key_down(KeyDownEvent.of("k", alt=True))
    assert session.state == CaptureState.IDLE
    assert not session.handle_blur()
    assert session.value == "Alt+k"

    # a fresh capture snapshots the committed value, not the first one
    session.start_recording()
    session.handle_blur()
    assert session.value == "Alt+k"
