"""
Section extractor for rendered manual pages.

Formatted reference pages put section headings at column 0 and indent the body:

    NAME
        foo - does a thing
    DESCRIPTION
        Does the thing.

A section starts at its heading line and runs until the next unindented,
non-blank line. This is only a layout heuristic: an unindented line inside a
body that happens to look like a heading ends the section early.
"""

from __future__ import annotations

import re
from typing import List

# Running header and footer lines spread columns apart, e.g.
# "LS(1)    User Commands    LS(1)"
PAGE_FRAME_RE = re.compile(r"\S\s{3,}\S")


def _is_body_line(line: str) -> bool:
    return not line.strip() or line.startswith((" ", "\t"))


def _is_heading(line: str, name: str) -> bool:
    """Check whether an unindented line opens the section called ``name``.

    The whole line may equal the name (``SEE ALSO``), or its leading token may.
    """
    if _is_body_line(line):
        return False

    stripped = line.rstrip()
    if not stripped:
        return False
    if stripped == name:
        return True

    return stripped.split(None, 1)[0] == name


def extract_section(text: str, name: str) -> str:
    """Extract one named section from rendered page text.

    Args:
        text: Full rendered page, plain text
        name: Section heading to look for, e.g. "DESCRIPTION"

    Returns:
        The heading line and its body, each line newline-terminated,
        or an empty string if the heading never appears

    Example:
        >>> page = "NAME\\n    foo\\nDESCRIPTION\\n    Does it.\\nSEE ALSO\\n    bar\\n"
        >>> extract_section(page, "DESCRIPTION")
        'DESCRIPTION\\n    Does it.\\n'
    """
    if not name:
        return ""

    section: List[str] = []
    inside = False

    for line in text.splitlines():
        if not inside:
            if _is_heading(line, name):
                inside = True
                section.append(line)
            continue

        if _is_body_line(line):
            section.append(line)
        else:
            break

    return "".join(line + "\n" for line in section)


def list_sections(text: str) -> List[str]:
    """List the heading lines of rendered page text in document order.

    Args:
        text: Full rendered page, plain text

    Returns:
        Stripped heading lines (unindented, non-blank), without the page's
        running header and footer
    """
    return [
        line.rstrip()
        for line in text.splitlines()
        if not _is_body_line(line) and not PAGE_FRAME_RE.search(line.strip())
    ]
