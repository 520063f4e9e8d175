"""Sandbox allowance flags for the ``sandbox`` directive."""

from __future__ import annotations

import enum


class SandboxAllow(str, enum.Enum):
    DOWNLOADS_WITHOUT_USER_ACTIVATION = "allow-downloads-without-user-activation"
    FORMS = "allow-forms"
    MODALS = "allow-modals"
    ORIENTATION_LOCK = "allow-orientation-lock"
    POINTER_LOCK = "allow-pointer-lock"
    POPUPS = "allow-popups"
    POPUPS_TO_ESCAPE_SANDBOX = "allow-popups-to-escape-sandbox"
    PRESENTATION = "allow-presentation"
    SAME_ORIGIN = "allow-same-origin"
    SCRIPTS = "allow-scripts"
    STORAGE_ACCESS_BY_USER_ACTIVATION = "allow-storage-access-by-user-activation"
    TOP_NAVIGATION = "allow-top-navigation"
    TOP_NAVIGATION_BY_USER_ACTIVATION = "allow-top-navigation-by-user-activation"

    def render(self) -> str:
        return self.value

    def __str__(self) -> str:
        return self.value
