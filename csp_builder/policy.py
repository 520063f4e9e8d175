"""Policy container and header-value rendering."""

from __future__ import annotations

import warnings
from typing import Iterable, Iterator

import structlog

from csp_builder.config.loader import get_settings
from csp_builder.directive import Directive, DirectiveKind
from csp_builder.errors import EmptyCollectionError

logger = structlog.get_logger()

DIRECTIVE_SEPARATOR = "; "


class Policy:
    """An ordered list of directives that renders to a CSP header value.

    Two append modes, fixed when the policy is created:

    - deduplicating (default): appending a directive whose kind is already
      present overwrites that directive at its original position.
    - permissive: every directive is appended, repeats included. Browsers
      honour only the first occurrence of a repeated directive name.

    ``deduplicate=None`` reads the mode from ``CspSettings.deduplicate``.
    """

    def __init__(
        self,
        directives: Iterable[Directive] | None = None,
        *,
        deduplicate: bool | None = None,
    ) -> None:
        if deduplicate is None:
            deduplicate = get_settings().deduplicate
        self._deduplicate = deduplicate
        self._directives: list[Directive] = []
        for directive in directives or ():
            self.append(directive)

    @classmethod
    def empty(cls, *, deduplicate: bool | None = None) -> Policy:
        return cls(deduplicate=deduplicate)

    @classmethod
    def with_one(cls, directive: Directive, *, deduplicate: bool | None = None) -> Policy:
        return cls((directive,), deduplicate=deduplicate)

    @property
    def deduplicate(self) -> bool:
        return self._deduplicate

    @property
    def directives(self) -> tuple[Directive, ...]:
        return tuple(self._directives)

    def _index_of(self, kind: DirectiveKind) -> int | None:
        for index, existing in enumerate(self._directives):
            if existing.kind is kind:
                return index
        return None

    def append(self, directive: Directive) -> Policy:
        """Add a directive and return the policy for chaining."""
        if self._deduplicate:
            index = self._index_of(directive.kind)
            if index is not None:
                logger.debug("directive_replaced", directive=directive.name, index=index)
                self._directives[index] = directive
                return self
        self._directives.append(directive)
        return self

    def add(self, directive: Directive) -> Policy:
        """Deprecated alias of append()."""
        warnings.warn(
            "Policy.add() is deprecated, use Policy.append()",
            DeprecationWarning,
            stacklevel=2,
        )
        return self.append(directive)

    def extend(self, directives: Iterable[Directive]) -> Policy:
        """Append each directive in order, with this policy's append mode."""
        for directive in directives:
            self.append(directive)
        return self

    def get(self, kind: DirectiveKind) -> Directive | None:
        """Return the first directive of the given kind, if any."""
        index = self._index_of(kind)
        return None if index is None else self._directives[index]

    def render(self) -> str:
        """Join the rendered directives with ``"; "``.

        Fails as a whole with EmptyCollectionError if any directive cannot
        be rendered; no partial header value is returned.
        """
        parts = []
        for directive in self._directives:
            try:
                parts.append(directive.render())
            except EmptyCollectionError as exc:
                logger.warning("csp_render_failed", directive=directive.name, error=str(exc))
                raise
        return DIRECTIVE_SEPARATOR.join(parts)

    def __str__(self) -> str:
        return self.render()

    def __len__(self) -> int:
        return len(self._directives)

    def __iter__(self) -> Iterator[Directive]:
        return iter(self._directives)

    def __repr__(self) -> str:
        return f"Policy({self._directives!r}, deduplicate={self._deduplicate})"
