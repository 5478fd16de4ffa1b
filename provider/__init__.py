"""
Document source providers for the manual catalog.

This module defines the provider contract and the man(1)-backed provider.
"""

from .base import (
    MARKUP_HTML,
    MARKUP_TEXT,
    DocumentSourceProvider,
    ProviderError,
    RenderOptions,
)
from .man import ManPageProvider, parse_apropos_output
from .overstrike import to_html, to_plain

__all__ = [
    "MARKUP_HTML",
    "MARKUP_TEXT",
    "DocumentSourceProvider",
    "ProviderError",
    "RenderOptions",
    "ManPageProvider",
    "parse_apropos_output",
    "to_html",
    "to_plain",
]
