"""Exceptions raised while rendering a policy."""

from __future__ import annotations


class CSPError(Exception):
    """Base class for csp_builder errors."""


class EmptyCollectionError(CSPError):
    """Raised when a collection with no meaningful empty form is rendered.

    ``plugin-types``, ``report-uri`` and ``trusted-types`` need at least one
    argument. Rendering them empty points at a construction bug in the caller.
    """

    def __init__(self, collection: str, directive: str | None = None) -> None:
        self.collection = collection
        self.directive = directive
        if directive:
            message = f"{directive} requires at least one value ({collection} is empty)"
        else:
            message = f"{collection} is empty"
        super().__init__(message)
