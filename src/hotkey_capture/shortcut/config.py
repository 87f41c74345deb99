from __future__ import annotations

import sys
import tomllib
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .canonical import parse_combination, serialize


class Messages(BaseModel):
    """User-visible labels of the capture control."""

    model_config = ConfigDict(frozen=True)

    placeholder: str
    recording_prompt: str
    recording_hint: str
    space_label: str


BUILTIN_MESSAGES: Dict[str, Messages] = {
    "en": Messages(
        placeholder="Press a shortcut",
        recording_prompt="Press keys...",
        recording_hint="Press a key combination, or Esc to cancel",
        space_label="Space",
    ),
    "zh": Messages(
        placeholder="按下快捷键组合",
        recording_prompt="按下快捷键...",
        recording_hint="按下快捷键组合，或按Esc取消",
        space_label="空格",
    ),
}


@lru_cache(maxsize=1)
def detect_apple_platform() -> bool:
    """Whether the host is an Apple platform; read once per process."""

    return sys.platform == "darwin"


class CaptureConfig(BaseModel):
    """Settings injected into the formatter and capture session."""

    model_config = ConfigDict(frozen=True)

    apple: bool = Field(default_factory=detect_apple_platform)
    locale: str = "en"
    messages: Optional[Messages] = None
    cancel_key: str = "Escape"
    show_held_modifiers: bool = False
    default: str = ""

    @field_validator("locale")
    @classmethod
    def _known_locale(cls, value: str) -> str:
        if value not in BUILTIN_MESSAGES:
            raise ValueError(f"unknown locale {value!r}, expected one of {sorted(BUILTIN_MESSAGES)}")
        return value

    @field_validator("default")
    @classmethod
    def _canonical_default(cls, value: str) -> str:
        return serialize(parse_combination(value))

    @model_validator(mode="before")
    @classmethod
    def _merge_messages(cls, data: Any) -> Any:
        # Partial [messages] tables fill in from the selected locale.
        if not isinstance(data, dict) or not isinstance(data.get("messages"), dict):
            return data
        base = BUILTIN_MESSAGES.get(data.get("locale", "en"), BUILTIN_MESSAGES["en"])
        data = dict(data)
        data["messages"] = {**base.model_dump(), **data["messages"]}
        return data

    @property
    def labels(self) -> Messages:
        return self.messages or BUILTIN_MESSAGES[self.locale]


def load_toml(path: str | Path) -> Dict[str, Any]:
    """Load a TOML config file into a dict."""

    path = Path(path)
    return tomllib.loads(path.read_text(encoding="utf-8"))


def parse_config(config: Dict[str, Any]) -> CaptureConfig:
    section = config.get("capture", config)
    return CaptureConfig.model_validate(section)


def load_config(path: str | Path) -> CaptureConfig:
    return parse_config(load_toml(path))
