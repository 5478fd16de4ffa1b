"""
Document source provider contract.

The catalog never shells out or formats pages itself; it asks a provider to
list, render and summarize documents for a source location.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Protocol, Tuple

MARKUP_HTML = "html"
MARKUP_TEXT = "text"


class ProviderError(RuntimeError):
    """Base exception for document provider failures."""
    pass


@dataclass(frozen=True)
class RenderOptions:
    """How a document should be rendered.

    Attributes:
        width: Terminal width the page is formatted for
        markup: "html" for a display-ready page, "text" for plain text
    """
    width: int = 80
    markup: str = MARKUP_HTML

    def __post_init__(self):
        if self.width <= 0:
            raise ValueError(f"Render width must be positive, got {self.width}")
        if self.markup not in (MARKUP_HTML, MARKUP_TEXT):
            raise ValueError(
                f"Invalid markup '{self.markup}'. Must be one of: {[MARKUP_HTML, MARKUP_TEXT]}"
            )


class DocumentSourceProvider(Protocol):
    """Lists, renders and summarizes documents found at a source location."""

    def list_documents(self, location: str) -> Optional[List[Tuple[str, str]]]:
        """Return (document_id, category_key) pairs, or None when nothing is found."""
        ...

    def render(
        self,
        location: str,
        document_id: str,
        category_key: str,
        options: RenderOptions,
    ) -> str:
        """Return the rendered document; headings unindented, body indented."""
        ...

    def summarize(self, location: str, document_id: str, category_key: str) -> str:
        """Return a one-line description of the document."""
        ...
