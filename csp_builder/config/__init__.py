"""Runtime configuration for policy building."""

from csp_builder.config.loader import CspSettings, get_settings, load_settings

__all__ = ["CspSettings", "get_settings", "load_settings"]
