"""Shared fixtures: a recording in-memory provider and a catalog using it."""
from __future__ import annotations

from typing import Dict, List, Optional, Tuple

import pytest

from catalog import DocumentCatalog
from provider import ProviderError, RenderOptions

FOO_PAGE = """NAME
    foo - does a thing
SYNOPSIS
    foo [-x]
DESCRIPTION
    Does the thing.
    Extra line.
SEE ALSO
    bar
"""


class FakeProvider:
    """In-memory provider that records every call."""

    def __init__(
        self,
        listings: Optional[Dict[str, Optional[List[Tuple[str, str]]]]] = None,
        pages: Optional[Dict[Tuple[str, str], str]] = None,
        summaries: Optional[Dict[Tuple[str, str], str]] = None,
    ):
        self.listings = listings or {}
        self.pages = pages or {}
        self.summaries = summaries or {}
        self.fail = False
        self.calls: List[tuple] = []

    def list_documents(self, location):
        self.calls.append(("list", location))
        if self.fail:
            raise ProviderError("listing failed")
        return self.listings.get(location)

    def render(self, location, document_id, category_key, options: RenderOptions):
        self.calls.append(("render", location, document_id, category_key, options))
        if self.fail:
            raise ProviderError("render failed")
        page = self.pages.get((document_id, category_key), "")
        if options.markup == "html":
            return f"<html><body><pre>{page}</pre></body></html>"
        return page

    def summarize(self, location, document_id, category_key):
        self.calls.append(("summarize", location, document_id, category_key))
        if self.fail:
            raise ProviderError("summary failed")
        return self.summaries.get((document_id, category_key), "")

    def count(self, kind: str) -> int:
        return sum(1 for call in self.calls if call[0] == kind)


@pytest.fixture
def provider() -> FakeProvider:
    return FakeProvider(
        listings={
            "/man": [("alpha", "1"), ("beta", "1"), ("gamma", "8")],
            "/other": [("foo", "3")],
            "/empty": None,
        },
        pages={
            ("alpha", "1"): FOO_PAGE,
            ("gamma", "8"): "NAME\n    gamma - mount things\nDESCRIPTION\n    Mounts.\n",
        },
        summaries={
            ("alpha", "1"): "alpha (1)            - first letter\n",
        },
    )


@pytest.fixture
def catalog(provider, tmp_path):
    catalog = DocumentCatalog(provider, temp_dir=tmp_path)
    yield catalog
    catalog.close()
