"""Ordered argument lists for CSP directives.

Every directive argument that holds several tokens is one of these lists.
Lists are append-only and render their items space-separated in insertion
order. What an *empty* list renders to depends on the list type:

- ``Sources``            -> ``'none'``
- ``SandboxAllowedList`` -> ``""`` (the directive name stands alone)
- ``Plugins``, ``ReportUris``, ``TrustedTypes`` -> ``EmptyCollectionError``
"""

from __future__ import annotations

from typing import Generic, Iterable, Iterator, TypeVar

from csp_builder.errors import EmptyCollectionError
from csp_builder.tokens.sandbox import SandboxAllow
from csp_builder.tokens.source import Source

T = TypeVar("T")


class TokenList(Generic[T]):
    # Rendering of an empty list; None means an empty list cannot be rendered
    _empty_render: str | None = None

    __slots__ = ("_items",)

    def __init__(self, items: Iterable[T] = ()) -> None:
        self._items: list[T] = list(items)

    @classmethod
    def empty(cls):
        return cls()

    @classmethod
    def with_one(cls, item: T):
        return cls((item,))

    def append(self, item: T):
        """Add an item at the end and return the list for chaining."""
        self._items.append(item)
        return self

    def copy(self):
        return type(self)(self._items)

    @property
    def items(self) -> tuple[T, ...]:
        return tuple(self._items)

    def _render_item(self, item: T) -> str:
        return str(item)

    def render(self) -> str:
        if not self._items:
            if self._empty_render is None:
                raise EmptyCollectionError(type(self).__name__)
            return self._empty_render
        return " ".join(self._render_item(item) for item in self._items)

    def __str__(self) -> str:
        return self.render()

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._items == other._items

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._items!r})"


class Sources(TokenList[Source]):
    """Source list for fetch and navigation directives."""

    _empty_render = "'none'"
    __slots__ = ()

    def _render_item(self, item: Source) -> str:
        return item.render()


class SandboxAllowedList(TokenList[SandboxAllow]):
    _empty_render = ""
    __slots__ = ()

    def _render_item(self, item: SandboxAllow) -> str:
        return item.value


class Plugins(TokenList[tuple[str, str]]):
    """MIME types for ``plugin-types``, stored as (type, subtype) pairs."""

    __slots__ = ()

    def _render_item(self, item: tuple[str, str]) -> str:
        mime_type, subtype = item
        return f"{mime_type}/{subtype}"


class ReportUris(TokenList[str]):
    __slots__ = ()


class TrustedTypes(TokenList[str]):
    """Policy names for ``trusted-types``."""

    __slots__ = ()
