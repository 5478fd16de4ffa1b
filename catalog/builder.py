"""
Document catalog for manual pages.

Builds one three-level tree per source location and answers node-scoped
queries by delegating to a document source provider:

    root      "Man pages: /usr/share/man"   synonyms {"man", "/usr/share/man"}
    category  "Section 1"                   synonyms {"1"}
    document  "ls"

Queries never raise. A location with no documents yields None, organizational
nodes yield empty results, and provider failures are logged and reported as
empty text.
"""

from __future__ import annotations

import logging
import os
import re
import tempfile
from dataclasses import dataclass
from enum import IntEnum
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple

from provider.base import MARKUP_HTML, MARKUP_TEXT, DocumentSourceProvider, RenderOptions

from .artifacts import ArtifactTracker
from .listing import group_listing
from .section_extractor import extract_section, list_sections
from .tree import TreeNode

logger = logging.getLogger(__name__)

EMPTY_DOCUMENT = "<html></html>"
DETAILS_SECTION = "DESCRIPTION"

UNSAFE_FILENAME_RE = re.compile(r"[^\w.-]+")


class ApplicabilityLevel(IntEnum):
    """How strongly a backend claims a location, for the host's backend choice."""
    LOW = 1
    MEDIUM = 2
    HIGH = 3


@dataclass
class CatalogEntry:
    """A source location and the root of the tree built for it."""
    location: str
    root: TreeNode


class DocumentCatalog:
    """Caches document trees per location and renders their documents."""

    def __init__(
        self,
        provider: DocumentSourceProvider,
        temp_dir: Optional[Path] = None,
        default_width: int = 80,
        label: str = "Man pages",
        root_synonyms: Iterable[str] = ("man",),
    ):
        """Initialize the catalog.

        Args:
            provider: Source of listings, renders and summaries
            temp_dir: Directory for rendered artifacts (default: system temp dir)
            default_width: Render width when a caller does not ask for one
            label: Prefix of root node titles
            root_synonyms: Synonyms added to every root besides its location
        """
        self.provider = provider
        self.temp_dir = Path(temp_dir) if temp_dir else None
        self.default_width = default_width
        self.label = label
        self.root_synonyms = tuple(root_synonyms)

        self._entries: Dict[str, CatalogEntry] = {}
        self._artifacts = ArtifactTracker()
        self._closed = False

    def __enter__(self) -> "DocumentCatalog":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def artifacts(self) -> ArtifactTracker:
        return self._artifacts

    def applicability_level(self) -> ApplicabilityLevel:
        return ApplicabilityLevel.MEDIUM

    def locations(self) -> List[str]:
        """Locations with a cached tree, in build order."""
        return list(self._entries)

    # ------------------------------------------------------------------
    # Tree building
    # ------------------------------------------------------------------

    def get_tree(self, location: str) -> Optional[TreeNode]:
        """Return the tree for a location, building it on first request.

        Args:
            location: Source location, e.g. a MANPATH directory

        Returns:
            Root node, or None if the location has no documents
        """
        location = str(location)

        if self._closed:
            logger.warning(f"Catalog is closed; not building tree for {location}")
            return None

        entry = self._entries.get(location)
        if entry is not None:
            return entry.root

        try:
            listing = self.provider.list_documents(location)
        except Exception as exc:
            logger.warning(f"Listing documents for {location} failed: {exc}")
            return None

        if not listing:
            logger.info(f"No documents found at {location}")
            return None

        categories = group_listing(listing)
        if not categories:
            logger.info(f"Listing for {location} had no usable entries")
            return None

        root = self._build_tree(location, categories)
        self._entries[location] = CatalogEntry(location=location, root=root)

        documents = sum(len(ids) for ids in categories.values())
        logger.info(f"Built tree for {location}: {len(categories)} categories, {documents} documents")
        return root

    def _build_tree(self, location: str, categories: Dict[str, List[str]]) -> TreeNode:
        root = TreeNode(
            title=f"{self.label}: {location}",
            key=location,
            synonyms={*self.root_synonyms, location},
        )

        for category_key, document_ids in categories.items():
            category = root.add_child(
                title=f"Section {category_key}",
                key=category_key,
                synonyms={category_key},
            )
            for document_id in document_ids:
                category.add_child(title=document_id, key=document_id)

        return root

    def _location_of(self, node: TreeNode) -> Optional[str]:
        root = node.root
        for entry in self._entries.values():
            if entry.root is root:
                return entry.location
        return None

    def _resolve(self, node: TreeNode) -> Optional[Tuple[str, str, str]]:
        """Resolve a document node to (location, document_id, category_key).

        Returns None for organizational nodes and nodes this catalog does not own.
        """
        if not node.is_document:
            return None

        location = self._location_of(node)
        if location is None:
            logger.warning(f"Node '{node.title}' does not belong to this catalog")
            return None

        return location, node.key, node.parent.key

    def find_node(
        self,
        location: str,
        category: Optional[str] = None,
        document: Optional[str] = None,
    ) -> Optional[TreeNode]:
        """Address a node by location, category key and document id.

        Builds the location's tree if needed. Omitting ``category`` returns
        the root; omitting ``document`` returns the category.
        """
        node = self.get_tree(location)
        for key in (category, document):
            if node is None or key is None:
                break
            node = next((child for child in node.children if child.key == key), None)
        return node

    def search(self, text: str) -> List[TreeNode]:
        """Find nodes in cached trees whose title or synonyms match ``text``."""
        if not text:
            return []
        return [
            node
            for entry in self._entries.values()
            for node in entry.root.walk()
            if node.matches(text)
        ]

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def render(self, node: TreeNode, width: Optional[int] = None) -> Tuple[str, bool]:
        """Render a document to a transient HTML file.

        Args:
            node: Node to render
            width: Terminal width to format for (default: ``default_width``)

        Returns:
            (locator, is_transient). Organizational nodes give an empty page
            and False; documents give a file:// URI and True.
        """
        resolved = self._resolve(node)
        if resolved is None or self._closed:
            return EMPTY_DOCUMENT, False
        location, document_id, category_key = resolved

        try:
            options = RenderOptions(width=width or self.default_width, markup=MARKUP_HTML)
            content = self.provider.render(location, document_id, category_key, options)
        except Exception as exc:
            logger.warning(f"Rendering {document_id}({category_key}) failed: {exc}")
            content = ""

        try:
            fd, name = tempfile.mkstemp(
                prefix=f"manview-{UNSAFE_FILENAME_RE.sub('_', document_id)}-",
                suffix=".html",
                dir=self.temp_dir,
            )
        except OSError as exc:
            logger.error(f"Could not create artifact for {document_id}({category_key}): {exc}")
            return EMPTY_DOCUMENT, False

        path = Path(name)
        self._artifacts.track(path)

        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(content)
        except OSError as exc:
            logger.error(f"Could not write artifact {path}: {exc}")

        return path.as_uri(), True

    def summary(self, node: TreeNode) -> str:
        """One-line description of a document, as the provider reports it."""
        resolved = self._resolve(node)
        if resolved is None:
            return ""
        location, document_id, category_key = resolved

        try:
            return self.provider.summarize(location, document_id, category_key)
        except Exception as exc:
            logger.warning(f"Summarizing {document_id}({category_key}) failed: {exc}")
            return ""

    def _plain_text(self, node: TreeNode) -> str:
        resolved = self._resolve(node)
        if resolved is None:
            return ""
        location, document_id, category_key = resolved

        try:
            options = RenderOptions(width=self.default_width, markup=MARKUP_TEXT)
            return self.provider.render(location, document_id, category_key, options)
        except Exception as exc:
            logger.warning(f"Rendering {document_id}({category_key}) as text failed: {exc}")
            return ""

    def section(self, node: TreeNode, name: str) -> str:
        """Text of one named section of a document, or empty text."""
        text = self._plain_text(node)
        if not text:
            return ""
        return extract_section(text, name)

    def details(self, node: TreeNode) -> str:
        return self.section(node, DETAILS_SECTION)

    def sections(self, node: TreeNode) -> List[str]:
        """Section headings of a document, in page order."""
        return list_sections(self._plain_text(node))

    # ------------------------------------------------------------------
    # Teardown
    # ------------------------------------------------------------------

    def close(self) -> None:
        """Destroy all trees and delete every rendered artifact."""
        if self._closed:
            return
        self._closed = True

        for entry in self._entries.values():
            entry.root.destroy()
        self._entries.clear()

        removed = self._artifacts.release_all()
        logger.debug(f"Catalog closed, removed {removed} artifacts")
