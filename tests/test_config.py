from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from hotkey_capture.capture.session import CaptureSession
from hotkey_capture.shortcut.config import (
    BUILTIN_MESSAGES,
    CaptureConfig,
    detect_apple_platform,
    load_config,
    parse_config,
)


def test_load_config_from_toml() -> None:
    path = Path(__file__).with_name("test_capture.toml")
    config = load_config(path)

    assert config.apple is True
    assert config.locale == "zh"
    assert config.cancel_key == "Escape"
    assert config.default == "CommandOrControl+Shift+k"

    # partial messages fall back to the locale's labels
    assert config.labels.placeholder == "Click to record"
    assert config.labels.space_label == BUILTIN_MESSAGES["zh"].space_label


def test_session_from_loaded_config() -> None:
    config = load_config(Path(__file__).with_name("test_capture.toml"))
    session = CaptureSession(config.default, config=config)
    assert session.current_display_value() == "⌘ + ⇧ + k"


def test_parse_config_without_section() -> None:
    config = parse_config({"apple": False, "show_held_modifiers": True})
    assert config.apple is False
    assert config.show_held_modifiers is True
    assert config.labels == BUILTIN_MESSAGES["en"]


def test_apple_defaults_to_detected_platform() -> None:
    assert CaptureConfig().apple == detect_apple_platform()


def test_unknown_locale_rejected() -> None:
    with pytest.raises(ValidationError):
        CaptureConfig(locale="xx")


def test_invalid_default_rejected() -> None:
    with pytest.raises(ValidationError):
        parse_config({"capture": {"default": "Ctrl+Shift"}})


def test_default_with_space_matches_captured_form() -> None:
    config = parse_config({"locale": "zh", "apple": False, "default": "ctrl+space"})
    assert config.default == "CommandOrControl+Space"

    session = CaptureSession(config.default, config=config)
    assert session.current_display_value() == "Ctrl + 空格"
