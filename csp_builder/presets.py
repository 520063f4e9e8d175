"""Ready-made policies for the strict / balanced / permissive header profiles.

Each call builds a fresh Policy, so callers may append to the result
without affecting later calls.
"""

from __future__ import annotations

from typing import Callable

from csp_builder.config.loader import get_settings
from csp_builder.directive import Directive
from csp_builder.lists import Sources
from csp_builder.policy import Policy
from csp_builder.tokens.source import Source


def _self_only() -> Sources:
    return Sources.with_one(Source.SELF)


def strict_policy(*, deduplicate: bool | None = None) -> Policy:
    """Same-origin only; no framing, no plugins."""
    return Policy(
        (
            Directive.default_src(_self_only()),
            Directive.script_src(_self_only()),
            Directive.style_src(_self_only()),
            Directive.img_src(_self_only()),
            Directive.font_src(_self_only()),
            Directive.connect_src(_self_only()),
            Directive.frame_ancestors(Sources()),
            Directive.form_action(_self_only()),
            Directive.base_uri(_self_only()),
            Directive.object_src(Sources()),
        ),
        deduplicate=deduplicate,
    )


def balanced_policy(*, deduplicate: bool | None = None) -> Policy:
    https = Source.scheme("https")
    return Policy(
        (
            Directive.default_src(_self_only()),
            Directive.script_src(_self_only().append(Source.UNSAFE_INLINE)),
            Directive.style_src(_self_only().append(Source.UNSAFE_INLINE)),
            Directive.img_src(Sources((Source.SELF, Source.scheme("data"), https))),
            Directive.font_src(_self_only().append(https)),
            Directive.connect_src(_self_only().append(https)),
            Directive.frame_ancestors(_self_only()),
            Directive.form_action(_self_only()),
            Directive.base_uri(_self_only()),
            Directive.object_src(Sources()),
        ),
        deduplicate=deduplicate,
    )


def permissive_policy(*, deduplicate: bool | None = None) -> Policy:
    https = Source.scheme("https")
    data = Source.scheme("data")
    anywhere = Source.host("*")
    return Policy(
        (
            Directive.default_src(_self_only().append(https)),
            Directive.script_src(
                Sources((Source.SELF, Source.UNSAFE_INLINE, Source.UNSAFE_EVAL, https))
            ),
            Directive.style_src(Sources((Source.SELF, Source.UNSAFE_INLINE, https))),
            Directive.img_src(Sources((anywhere, data))),
            Directive.font_src(Sources((anywhere, data))),
            Directive.connect_src(Sources.with_one(anywhere)),
            Directive.frame_ancestors(_self_only().append(https)),
            Directive.form_action(_self_only().append(https)),
            Directive.base_uri(_self_only()),
            Directive.object_src(Sources()),
        ),
        deduplicate=deduplicate,
    )


PRESETS: dict[str, Callable[..., Policy]] = {
    "strict": strict_policy,
    "balanced": balanced_policy,
    "permissive": permissive_policy,
}

PRESET_NAMES: tuple[str, ...] = tuple(PRESETS)


def get_preset(name: str | None = None, *, deduplicate: bool | None = None) -> Policy:
    """Build the named preset, or CspSettings.default_preset when name is None.

    Raises KeyError for an unknown name.
    """
    if name is None:
        name = get_settings().default_preset
    try:
        factory = PRESETS[name]
    except KeyError:
        raise KeyError(f"unknown CSP preset: {name!r}") from None
    return factory(deduplicate=deduplicate)
