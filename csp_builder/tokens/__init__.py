"""Atomic CSP vocabulary: source expressions, sandbox flags, SRI targets."""

from csp_builder.tokens.sandbox import SandboxAllow
from csp_builder.tokens.source import Source, SourceKind
from csp_builder.tokens.sri import SriFor

__all__ = ["SandboxAllow", "Source", "SourceKind", "SriFor"]
