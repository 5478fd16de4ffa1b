"""
Catalog module for manual page browsing.

This module provides functionality for:
- Building a three-level tree (location -> section -> page) from a document listing
- Caching one tree per source location
- Rendering pages to transient HTML files, removed when the catalog closes
- Extracting a single named section (e.g. DESCRIPTION) from a rendered page

Tree structure:
    Man pages: /usr/share/man      - root, one per location
        Section 1                  - category
            ls                     - document
            cat
        Section 8
            mount

Usage:
    from catalog import DocumentCatalog
    from provider import ManPageProvider

    with DocumentCatalog(ManPageProvider()) as catalog:
        root = catalog.get_tree("/usr/share/man")
        page = catalog.find_node("/usr/share/man", "1", "ls")
        uri, transient = catalog.render(page)
        description = catalog.details(page)
"""

from .artifacts import ArtifactTracker
from .builder import (
    DETAILS_SECTION,
    EMPTY_DOCUMENT,
    ApplicabilityLevel,
    CatalogEntry,
    DocumentCatalog,
)
from .listing import group_listing
from .section_extractor import extract_section, list_sections
from .tree import NodeKind, TreeNode

__all__ = [
    "ArtifactTracker",
    "DETAILS_SECTION",
    "EMPTY_DOCUMENT",
    "ApplicabilityLevel",
    "CatalogEntry",
    "DocumentCatalog",
    "group_listing",
    "extract_section",
    "list_sections",
    "NodeKind",
    "TreeNode",
]

__version__ = "1.0.0"
