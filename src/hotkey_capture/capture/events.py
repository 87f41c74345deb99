from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from hotkey_capture.shortcut.ir import RawModifiers


class KeyDownEvent(BaseModel):
    """A raw key-down forwarded by the rendering shell.

    The shell inspects ``default_prevented`` and ``propagation_stopped``
    after dispatch and must not let host shortcuts fire when they are set.
    """

    key: Optional[str] = None
    modifiers: RawModifiers = Field(default_factory=RawModifiers)
    default_prevented: bool = False
    propagation_stopped: bool = False

    @classmethod
    def of(
        cls,
        key: Optional[str],
        *,
        control: bool = False,
        alt: bool = False,
        shift: bool = False,
        meta: bool = False,
    ) -> KeyDownEvent:
        return cls(
            key=key,
            modifiers=RawModifiers(control=control, alt=alt, shift=shift, meta=meta),
        )

    def prevent_default(self) -> None:
        self.default_prevented = True

    def stop_propagation(self) -> None:
        self.propagation_stopped = True

    @property
    def suppressed(self) -> bool:
        return self.default_prevented and self.propagation_stopped
