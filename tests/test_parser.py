"""Tests for parsing header values back into policies."""

from __future__ import annotations

import doctest

import pytest

import csp_builder.parser as parser_module
from csp_builder.config.loader import get_settings
from csp_builder.directive import Directive, DirectiveKind
from csp_builder.lists import Sources
from csp_builder.parser import parse_directive, parse_policy, parse_source, split_directives
from csp_builder.tokens import SandboxAllow, Source, SourceKind, SriFor


# ── split_directives ─────────────────────────────────────────────────────


class TestSplitDirectives:
    def test_simple_policy(self):
        assert split_directives("default-src 'self'; script-src 'self' https:") == [
            ("default-src", ["'self'"]),
            ("script-src", ["'self'", "https:"]),
        ]

    def test_empty_string(self):
        assert split_directives("") == []

    def test_whitespace_only(self):
        assert split_directives("   ") == []

    def test_trailing_semicolons(self):
        assert split_directives("default-src 'self';;; script-src 'self';") == [
            ("default-src", ["'self'"]),
            ("script-src", ["'self'"]),
        ]

    def test_case_insensitive_names(self):
        assert split_directives("Default-Src 'self'")[0][0] == "default-src"

    def test_tabs_and_repeated_spaces(self):
        assert split_directives("script-src\t'self'   https:") == [
            ("script-src", ["'self'", "https:"]),
        ]


# ── parse_source ─────────────────────────────────────────────────────────


class TestParseSource:
    @pytest.mark.parametrize(
        "token, expected",
        [
            ("'self'", Source.SELF),
            ("'SELF'", Source.SELF),
            ("'unsafe-inline'", Source.UNSAFE_INLINE),
            ("'wasm-unsafe-eval'", Source.WASM_UNSAFE_EVAL),
            ("'strict-dynamic'", Source.STRICT_DYNAMIC),
            ("'nonce-abc123'", Source.nonce("abc123")),
            ("'sha256-dGVzdA=='", Source.hash("sha256", "dGVzdA==")),
            ("'sha512-a-b'", Source.hash("sha512", "a-b")),
            ("https:", Source.scheme("https")),
            ("data:", Source.scheme("data")),
            ("https://api.example.com:8443", Source.host("https://api.example.com:8443")),
            ("*.example.com", Source.host("*.example.com")),
            ("*", Source.host("*")),
        ],
    )
    def test_tokens(self, token, expected):
        assert parse_source(token) == expected

    def test_unknown_quoted_token_kept_as_host(self):
        source = parse_source("'md5-abc'")
        assert source.kind is SourceKind.HOST
        assert source.render() == "'md5-abc'"


# ── parse_directive / parse_policy ───────────────────────────────────────


class TestParseDirective:
    def test_none_is_empty_sources(self):
        directive = parse_directive("object-src", ["'none'"])
        assert directive == Directive.object_src(Sources())

    def test_flag(self):
        assert parse_directive("upgrade-insecure-requests", []) == (
            Directive.upgrade_insecure_requests()
        )

    def test_sandbox_skips_unknown_flags(self):
        directive = parse_directive("sandbox", ["allow-scripts", "allow-everything"])
        assert list(directive.argument) == [SandboxAllow.SCRIPTS]

    def test_require_sri_for(self):
        assert parse_directive("require-sri-for", ["script", "style"]).argument is (
            SriFor.SCRIPT_STYLE
        )
        assert parse_directive("require-sri-for", ["font"]) is None

    def test_report_to(self):
        assert parse_directive("report-to", ["endpoint-1"]).render() == "report-to endpoint-1"
        assert parse_directive("report-to", []) is None

    def test_plugin_types(self):
        directive = parse_directive("plugin-types", ["application/x-java-applet"])
        assert directive.argument.items == (("application", "x-java-applet"),)

    @pytest.mark.parametrize("name", ["plugin-types", "report-uri", "trusted-types"])
    def test_required_lists_without_values_are_skipped(self, name):
        assert parse_directive(name, []) is None

    def test_unknown_directive(self):
        assert parse_directive("made-up-src", ["'self'"]) is None


class TestParsePolicy:
    def test_round_trip(self):
        header = (
            "img-src 'self' https: http://shields.io; "
            "connect-src https://crates.io 'self'; "
            "style-src 'self' 'unsafe-inline' https://cdn.example.org; "
            "font-src https://cdn.example.org"
        )
        assert parse_policy(header).render() == header

    def test_all_sources_round_trip(self):
        header = (
            "script-src 'sha256-1234a' 'nonce-5678b' 'report-sample' 'strict-dynamic' "
            "'unsafe-eval' 'wasm-unsafe-eval' 'unsafe-hashes' 'unsafe-inline' "
            "data: https://example.org 'self'"
        )
        assert parse_policy(header).render() == header

    def test_empty_header(self):
        policy = parse_policy("")
        assert len(policy) == 0
        assert policy.render() == ""

    def test_unknown_directives_dropped(self):
        policy = parse_policy("default-src 'self'; bogus-src x; sandbox")
        assert [d.kind for d in policy] == [DirectiveKind.DEFAULT_SRC, DirectiveKind.SANDBOX]
        assert policy.render() == "default-src 'self'; sandbox"

    def test_repeated_directive_strict(self):
        policy = parse_policy("img-src 'self'; font-src 'self'; img-src data:", deduplicate=True)
        assert policy.render() == "img-src data:; font-src 'self'"

    def test_repeated_directive_permissive(self):
        header = "img-src 'self'; img-src data:"
        assert parse_policy(header, deduplicate=False).render() == header


class TestParserDocs:
    def test_docstring_examples(self):
        # Load settings up front so no config log line lands in doctest output
        get_settings()
        results = doctest.testmod(parser_module)
        assert results.attempted == 2
        assert results.failed == 0
