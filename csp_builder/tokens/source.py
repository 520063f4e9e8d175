"""Fetch-source expressions.

A ``Source`` is one token of a source list, e.g. ``'self'``, ``https:`` or
``'nonce-abc'``. Host, scheme, nonce and hash values are kept exactly as
given: nothing is escaped, quoted or checked.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import ClassVar


class SourceKind(str, enum.Enum):
    HOST = "host"
    SCHEME = "scheme"
    SELF = "self"
    UNSAFE_EVAL = "unsafe-eval"
    WASM_UNSAFE_EVAL = "wasm-unsafe-eval"
    UNSAFE_HASHES = "unsafe-hashes"
    UNSAFE_INLINE = "unsafe-inline"
    NONCE = "nonce"
    HASH = "hash"
    STRICT_DYNAMIC = "strict-dynamic"
    REPORT_SAMPLE = "report-sample"


# Keyword sources render as their quoted name
KEYWORD_KINDS: frozenset[SourceKind] = frozenset({
    SourceKind.SELF,
    SourceKind.UNSAFE_EVAL,
    SourceKind.WASM_UNSAFE_EVAL,
    SourceKind.UNSAFE_HASHES,
    SourceKind.UNSAFE_INLINE,
    SourceKind.STRICT_DYNAMIC,
    SourceKind.REPORT_SAMPLE,
})


@dataclass(frozen=True, slots=True)
class Source:
    """A single source expression."""

    kind: SourceKind
    value: str | tuple[str, str] | None = None

    SELF: ClassVar[Source]
    UNSAFE_EVAL: ClassVar[Source]
    WASM_UNSAFE_EVAL: ClassVar[Source]
    UNSAFE_HASHES: ClassVar[Source]
    UNSAFE_INLINE: ClassVar[Source]
    STRICT_DYNAMIC: ClassVar[Source]
    REPORT_SAMPLE: ClassVar[Source]

    @classmethod
    def host(cls, host: str) -> Source:
        return cls(SourceKind.HOST, host)

    @classmethod
    def scheme(cls, scheme: str) -> Source:
        """Scheme source; the trailing colon is added on render."""
        return cls(SourceKind.SCHEME, scheme)

    @classmethod
    def nonce(cls, nonce: str) -> Source:
        return cls(SourceKind.NONCE, nonce)

    @classmethod
    def hash(cls, algorithm: str, digest: str) -> Source:
        """Hash source, e.g. ``Source.hash("sha256", "<base64>")``."""
        return cls(SourceKind.HASH, (algorithm, digest))

    def render(self) -> str:
        if self.kind is SourceKind.HOST:
            return self.value
        if self.kind is SourceKind.SCHEME:
            return f"{self.value}:"
        if self.kind is SourceKind.NONCE:
            return f"'nonce-{self.value}'"
        if self.kind is SourceKind.HASH:
            algorithm, digest = self.value
            return f"'{algorithm}-{digest}'"
        return f"'{self.kind.value}'"

    def __str__(self) -> str:
        return self.render()


for _kind in KEYWORD_KINDS:
    setattr(Source, _kind.name, Source(_kind))
del _kind
