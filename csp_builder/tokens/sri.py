"""Targets of the ``require-sri-for`` directive."""

from __future__ import annotations

import enum


class SriFor(str, enum.Enum):
    SCRIPT = "script"
    STYLE = "style"
    SCRIPT_STYLE = "script style"

    def render(self) -> str:
        return self.value

    def __str__(self) -> str:
        return self.value
