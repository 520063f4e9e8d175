"""Read a CSP header value back into a typed Policy.

Parsing mirrors rendering and is just as forgiving: hosts, schemes, nonces
and digests are carried over verbatim. Tokens that have no typed form
(unknown directive names, unknown sandbox flags) are dropped with a warning.
"""

from __future__ import annotations

import structlog

from csp_builder.directive import Directive, DirectiveKind, argument_type
from csp_builder.lists import Plugins, ReportUris, SandboxAllowedList, Sources, TrustedTypes
from csp_builder.policy import Policy
from csp_builder.tokens.sandbox import SandboxAllow
from csp_builder.tokens.source import KEYWORD_KINDS, Source, SourceKind
from csp_builder.tokens.sri import SriFor

logger = structlog.get_logger()

HASH_ALGORITHMS = frozenset({"sha256", "sha384", "sha512"})

_KEYWORDS: dict[str, Source] = {f"'{kind.value}'": Source(kind) for kind in KEYWORD_KINDS}
_SANDBOX_TOKENS: dict[str, SandboxAllow] = {allow.value: allow for allow in SandboxAllow}
_SRI_TARGETS: dict[tuple[str, ...], SriFor] = {
    ("script",): SriFor.SCRIPT,
    ("style",): SriFor.STYLE,
    ("script", "style"): SriFor.SCRIPT_STYLE,
    ("style", "script"): SriFor.SCRIPT_STYLE,
}


def split_directives(header: str) -> list[tuple[str, list[str]]]:
    """Split a header value into (lowercased name, value tokens) pairs.

    Example:
        >>> split_directives("default-src 'self'; script-src 'self' https:")
        [('default-src', ["'self'"]), ('script-src', ["'self'", 'https:'])]
    """
    result: list[tuple[str, list[str]]] = []
    if not header or not header.strip():
        return result
    for part in header.split(";"):
        tokens = part.split()
        if not tokens:
            continue
        result.append((tokens[0].lower(), tokens[1:]))
    return result


def parse_source(token: str) -> Source:
    """Map a single source-list token to a Source."""
    keyword = _KEYWORDS.get(token.lower())
    if keyword is not None:
        return keyword
    if len(token) > 2 and token.startswith("'") and token.endswith("'"):
        inner = token[1:-1]
        if inner.lower().startswith("nonce-"):
            return Source.nonce(inner[len("nonce-"):])
        algorithm, sep, digest = inner.partition("-")
        if sep and algorithm.lower() in HASH_ALGORITHMS:
            return Source.hash(algorithm, digest)
    # "https:" is a scheme, "https://a.com" and "*.a.com:443" are hosts
    if token.endswith(":") and "/" not in token and token.count(":") == 1:
        return Source.scheme(token[:-1])
    return Source.host(token)


def parse_sources(tokens: list[str]) -> Sources:
    # 'none' only means "no sources" when it stands alone
    if len(tokens) == 1 and tokens[0].lower() == "'none'":
        return Sources()
    return Sources(parse_source(token) for token in tokens)


def _parse_sandbox(tokens: list[str]) -> SandboxAllowedList:
    allowed = SandboxAllowedList()
    for token in tokens:
        allow = _SANDBOX_TOKENS.get(token.lower())
        if allow is None:
            logger.warning("csp_parse_unknown_token", directive="sandbox", token=token)
            continue
        allowed.append(allow)
    return allowed


def _parse_plugins(tokens: list[str]) -> Plugins:
    plugins = Plugins()
    for token in tokens:
        mime_type, sep, subtype = token.partition("/")
        if not sep:
            logger.warning("csp_parse_unknown_token", directive="plugin-types", token=token)
            continue
        plugins.append((mime_type, subtype))
    return plugins


def parse_directive(name: str, tokens: list[str]) -> Directive | None:
    """Build a Directive from a name and its value tokens.

    Returns None when the name is unknown or the values cannot form the
    directive's argument.
    """
    try:
        kind = DirectiveKind(name.lower())
    except ValueError:
        logger.warning("csp_parse_unknown_directive", directive=name)
        return None

    expected = argument_type(kind)
    if expected is None:
        return Directive(kind)
    if expected is Sources:
        return Directive(kind, parse_sources(tokens))
    if kind is DirectiveKind.SANDBOX:
        return Directive(kind, _parse_sandbox(tokens))

    argument: object | None = None
    if kind is DirectiveKind.REPORT_TO:
        argument = tokens[0] if tokens else None
    elif kind is DirectiveKind.REQUIRE_SRI_FOR:
        argument = _SRI_TARGETS.get(tuple(token.lower() for token in tokens))
    elif kind is DirectiveKind.PLUGIN_TYPES:
        argument = _parse_plugins(tokens) or None
    elif kind is DirectiveKind.REPORT_URI:
        argument = ReportUris(tokens) or None
    elif kind is DirectiveKind.TRUSTED_TYPES:
        argument = TrustedTypes(tokens) or None

    if argument is None:
        logger.warning("csp_parse_skipped_directive", directive=kind.value, values=tokens)
        return None
    return Directive(kind, argument)


def parse_policy(header: str, *, deduplicate: bool | None = None) -> Policy:
    """Parse a header value into a Policy.

    Example:
        >>> parse_policy("default-src 'self'; img-src 'self' data:").render()
        "default-src 'self'; img-src 'self' data:"
    """
    policy = Policy(deduplicate=deduplicate)
    for name, tokens in split_directives(header):
        directive = parse_directive(name, tokens)
        if directive is not None:
            policy.append(directive)
    return policy
