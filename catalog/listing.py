"""
Listing grouping for the manual catalog.

A provider lists documents as (document_id, category_key) pairs. The catalog
groups them by category before building a tree.

Example:
    >>> group_listing([("alpha", "1"), ("gamma", "8"), ("beta", "1")])
    {'1': ['alpha', 'beta'], '8': ['gamma']}
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Tuple

logger = logging.getLogger(__name__)


def group_listing(pairs: Iterable[Tuple[str, str]]) -> Dict[str, List[str]]:
    """Group listed documents by category key.

    Categories keep the order in which they are first seen, and so do documents
    within a category. A document listed twice under the same category is kept once.

    Args:
        pairs: (document_id, category_key) pairs in listing order

    Returns:
        Ordered mapping of category key to document ids
    """
    categories: Dict[str, List[str]] = {}
    seen = set()

    for entry in pairs:
        if not (
            isinstance(entry, (tuple, list))
            and len(entry) == 2
            and all(isinstance(value, str) for value in entry)
        ):
            logger.warning(f"Skipping malformed listing entry: {entry!r}")
            continue

        document_id = entry[0].strip()
        category_key = entry[1].strip()

        if not document_id or not category_key:
            logger.warning(f"Skipping malformed listing entry: ({document_id!r}, {category_key!r})")
            continue

        if (category_key, document_id) in seen:
            continue
        seen.add((category_key, document_id))

        categories.setdefault(category_key, []).append(document_id)

    return categories
