from __future__ import annotations

from .events import KeyDownEvent
from .session import CaptureSession, CaptureState, KeyOutcome, RecordingSession

__all__ = [
    "CaptureSession",
    "CaptureState",
    "KeyDownEvent",
    "KeyOutcome",
    "RecordingSession",
]
