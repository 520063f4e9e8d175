"""CSP directives.

A ``Directive`` pairs a ``DirectiveKind`` with the argument that kind takes.
The kind is the directive's identity: policies compare directives by kind
alone when deduplicating, never by argument.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Union

from csp_builder.errors import EmptyCollectionError
from csp_builder.lists import (
    Plugins,
    ReportUris,
    SandboxAllowedList,
    Sources,
    TokenList,
    TrustedTypes,
)
from csp_builder.tokens.sri import SriFor


class DirectiveKind(str, enum.Enum):
    BASE_URI = "base-uri"
    BLOCK_ALL_MIXED_CONTENT = "block-all-mixed-content"
    CHILD_SRC = "child-src"
    CONNECT_SRC = "connect-src"
    DEFAULT_SRC = "default-src"
    FONT_SRC = "font-src"
    FORM_ACTION = "form-action"
    FRAME_ANCESTORS = "frame-ancestors"
    FRAME_SRC = "frame-src"
    IMG_SRC = "img-src"
    MANIFEST_SRC = "manifest-src"
    MEDIA_SRC = "media-src"
    NAVIGATE_TO = "navigate-to"
    OBJECT_SRC = "object-src"
    PLUGIN_TYPES = "plugin-types"
    PREFETCH_SRC = "prefetch-src"
    REPORT_TO = "report-to"
    REPORT_URI = "report-uri"
    REQUIRE_SRI_FOR = "require-sri-for"
    SANDBOX = "sandbox"
    SCRIPT_SRC = "script-src"
    SCRIPT_SRC_ATTR = "script-src-attr"
    SCRIPT_SRC_ELEM = "script-src-elem"
    STYLE_SRC = "style-src"
    STYLE_SRC_ATTR = "style-src-attr"
    STYLE_SRC_ELEM = "style-src-elem"
    TRUSTED_TYPES = "trusted-types"
    UPGRADE_INSECURE_REQUESTS = "upgrade-insecure-requests"
    WORKER_SRC = "worker-src"


# Directives without an argument
FLAG_KINDS: frozenset[DirectiveKind] = frozenset({
    DirectiveKind.BLOCK_ALL_MIXED_CONTENT,
    DirectiveKind.UPGRADE_INSECURE_REQUESTS,
})

_SPECIAL_ARGUMENT_TYPES: dict[DirectiveKind, type] = {
    DirectiveKind.PLUGIN_TYPES: Plugins,
    DirectiveKind.REPORT_TO: str,
    DirectiveKind.REPORT_URI: ReportUris,
    DirectiveKind.REQUIRE_SRI_FOR: SriFor,
    DirectiveKind.SANDBOX: SandboxAllowedList,
    DirectiveKind.TRUSTED_TYPES: TrustedTypes,
}

# Everything else takes a source list
SOURCE_LIST_KINDS: frozenset[DirectiveKind] = frozenset(
    kind for kind in DirectiveKind
    if kind not in FLAG_KINDS and kind not in _SPECIAL_ARGUMENT_TYPES
)


def argument_type(kind: DirectiveKind) -> type | None:
    """Return the argument type a directive kind takes, None for flags."""
    if kind in FLAG_KINDS:
        return None
    return _SPECIAL_ARGUMENT_TYPES.get(kind, Sources)


Argument = Union[Sources, Plugins, ReportUris, SandboxAllowedList, SriFor, TrustedTypes, str, None]


@dataclass(frozen=True)
class Directive:
    """One directive of a policy.

    Prefer the named constructors (``Directive.script_src(...)``) over
    building ``Directive(kind, argument)`` by hand; both check that the
    argument has the type the kind takes.
    """

    kind: DirectiveKind
    argument: Argument = None

    def __post_init__(self) -> None:
        expected = argument_type(self.kind)
        if expected is None:
            if self.argument is not None:
                raise TypeError(f"{self.kind.value} takes no argument")
        elif not isinstance(self.argument, expected):
            raise TypeError(
                f"{self.kind.value} takes {expected.__name__}, "
                f"got {type(self.argument).__name__}"
            )
        # Snapshot the caller's list; appends made to it later must not show here
        if isinstance(self.argument, TokenList):
            object.__setattr__(self, "argument", self.argument.copy())

    def __hash__(self) -> int:
        if isinstance(self.argument, TokenList):
            return hash((self.kind, self.argument.items))
        return hash((self.kind, self.argument))

    @property
    def name(self) -> str:
        return self.kind.value

    def render(self) -> str:
        """Render as ``"<name> <argument>"``.

        Flags and an empty sandbox list render as the bare name. Raises
        EmptyCollectionError for an empty plugin-types, report-uri or
        trusted-types argument.
        """
        if self.argument is None:
            return self.name
        if self.kind is DirectiveKind.REPORT_TO:
            return f"{self.name} {self.argument}"
        if self.kind is DirectiveKind.SANDBOX and not self.argument:
            return self.name
        try:
            rendered = self.argument.render()
        except EmptyCollectionError as exc:
            raise EmptyCollectionError(exc.collection, self.name) from exc
        return f"{self.name} {rendered}"

    def __str__(self) -> str:
        return self.render()

    # ── Named constructors ───────────────────────────────────────────────

    @classmethod
    def base_uri(cls, sources: Sources) -> Directive:
        return cls(DirectiveKind.BASE_URI, sources)

    @classmethod
    def block_all_mixed_content(cls) -> Directive:
        return cls(DirectiveKind.BLOCK_ALL_MIXED_CONTENT)

    @classmethod
    def child_src(cls, sources: Sources) -> Directive:
        return cls(DirectiveKind.CHILD_SRC, sources)

    @classmethod
    def connect_src(cls, sources: Sources) -> Directive:
        return cls(DirectiveKind.CONNECT_SRC, sources)

    @classmethod
    def default_src(cls, sources: Sources) -> Directive:
        return cls(DirectiveKind.DEFAULT_SRC, sources)

    @classmethod
    def font_src(cls, sources: Sources) -> Directive:
        return cls(DirectiveKind.FONT_SRC, sources)

    @classmethod
    def form_action(cls, sources: Sources) -> Directive:
        return cls(DirectiveKind.FORM_ACTION, sources)

    @classmethod
    def frame_ancestors(cls, sources: Sources) -> Directive:
        return cls(DirectiveKind.FRAME_ANCESTORS, sources)

    @classmethod
    def frame_src(cls, sources: Sources) -> Directive:
        return cls(DirectiveKind.FRAME_SRC, sources)

    @classmethod
    def img_src(cls, sources: Sources) -> Directive:
        return cls(DirectiveKind.IMG_SRC, sources)

    @classmethod
    def manifest_src(cls, sources: Sources) -> Directive:
        return cls(DirectiveKind.MANIFEST_SRC, sources)

    @classmethod
    def media_src(cls, sources: Sources) -> Directive:
        return cls(DirectiveKind.MEDIA_SRC, sources)

    @classmethod
    def navigate_to(cls, sources: Sources) -> Directive:
        return cls(DirectiveKind.NAVIGATE_TO, sources)

    @classmethod
    def object_src(cls, sources: Sources) -> Directive:
        return cls(DirectiveKind.OBJECT_SRC, sources)

    @classmethod
    def plugin_types(cls, plugins: Plugins) -> Directive:
        return cls(DirectiveKind.PLUGIN_TYPES, plugins)

    @classmethod
    def prefetch_src(cls, sources: Sources) -> Directive:
        return cls(DirectiveKind.PREFETCH_SRC, sources)

    @classmethod
    def report_to(cls, group: str) -> Directive:
        """``report-to`` takes a single reporting group name."""
        return cls(DirectiveKind.REPORT_TO, group)

    @classmethod
    def report_uri(cls, uris: ReportUris) -> Directive:
        return cls(DirectiveKind.REPORT_URI, uris)

    @classmethod
    def require_sri_for(cls, target: SriFor) -> Directive:
        return cls(DirectiveKind.REQUIRE_SRI_FOR, target)

    @classmethod
    def sandbox(cls, allowed: SandboxAllowedList | None = None) -> Directive:
        if allowed is None:
            allowed = SandboxAllowedList()
        return cls(DirectiveKind.SANDBOX, allowed)

    @classmethod
    def script_src(cls, sources: Sources) -> Directive:
        return cls(DirectiveKind.SCRIPT_SRC, sources)

    @classmethod
    def script_src_attr(cls, sources: Sources) -> Directive:
        return cls(DirectiveKind.SCRIPT_SRC_ATTR, sources)

    @classmethod
    def script_src_elem(cls, sources: Sources) -> Directive:
        return cls(DirectiveKind.SCRIPT_SRC_ELEM, sources)

    @classmethod
    def style_src(cls, sources: Sources) -> Directive:
        return cls(DirectiveKind.STYLE_SRC, sources)

    @classmethod
    def style_src_attr(cls, sources: Sources) -> Directive:
        return cls(DirectiveKind.STYLE_SRC_ATTR, sources)

    @classmethod
    def style_src_elem(cls, sources: Sources) -> Directive:
        return cls(DirectiveKind.STYLE_SRC_ELEM, sources)

    @classmethod
    def trusted_types(cls, names: TrustedTypes) -> Directive:
        return cls(DirectiveKind.TRUSTED_TYPES, names)

    @classmethod
    def upgrade_insecure_requests(cls) -> Directive:
        return cls(DirectiveKind.UPGRADE_INSECURE_REQUESTS)

    @classmethod
    def worker_src(cls, sources: Sources) -> Directive:
        return cls(DirectiveKind.WORKER_SRC, sources)
