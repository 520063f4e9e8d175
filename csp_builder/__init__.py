"""
csp_builder - typed Content-Security-Policy header builder
"""

__version__ = "0.1.0"

from csp_builder.directive import Directive, DirectiveKind
from csp_builder.errors import CSPError, EmptyCollectionError
from csp_builder.lists import Plugins, ReportUris, SandboxAllowedList, Sources, TrustedTypes
from csp_builder.parser import parse_policy
from csp_builder.policy import Policy
from csp_builder.presets import get_preset
from csp_builder.tokens import SandboxAllow, Source, SourceKind, SriFor

__all__ = [
    'CSPError',
    'Directive',
    'DirectiveKind',
    'EmptyCollectionError',
    'Plugins',
    'Policy',
    'ReportUris',
    'SandboxAllow',
    'SandboxAllowedList',
    'Source',
    'SourceKind',
    'Sources',
    'SriFor',
    'TrustedTypes',
    'get_preset',
    'parse_policy',
]
