"""
Conversion of terminal-formatted man output.

grotty marks bold as ``c\\bc`` and underline as ``_\\bc`` (overstrike), or uses
ANSI SGR escapes when told to. This module turns either form into plain text
or into a display-ready HTML page.
"""

from __future__ import annotations

import html
import re
from dataclasses import dataclass
from typing import List, Tuple

# Operating System Command sequences, e.g. OSC 8 hyperlinks
OSC_RE = re.compile(r"\x1b\][^\x07\x1b]*(?:\x07|\x1b\\)")
SGR_RE = re.compile(r"\x1b\[([0-9;]*)m")
OTHER_ESCAPE_RE = re.compile(r"\x1b\[[0-9;?]*[A-Za-ln-z]")

HTML_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<title>{title}</title>
</head>
<body style="color:white; background-color:black">
<pre>
{body}</pre>
</body>
</html>
"""


@dataclass
class _Cell:
    char: str
    bold: bool = False
    underline: bool = False


def _apply_sgr(params: str, bold: bool, underline: bool) -> Tuple[bool, bool]:
    codes = [int(code) for code in params.split(";") if code] or [0]
    for code in codes:
        if code == 0:
            bold = underline = False
        elif code == 1:
            bold = True
        elif code in (3, 4):
            underline = True
        elif code == 22:
            bold = False
        elif code in (23, 24):
            underline = False
    return bold, underline


def _parse(text: str) -> List[_Cell]:
    """Decode overstrike and SGR styling into styled characters."""
    text = OSC_RE.sub("", text)
    text = OTHER_ESCAPE_RE.sub("", text)

    cells: List[_Cell] = []
    bold = underline = False
    i = 0

    while i < len(text):
        char = text[i]

        if char == "\x1b":
            match = SGR_RE.match(text, i)
            if match:
                bold, underline = _apply_sgr(match.group(1), bold, underline)
                i = match.end()
                continue
            # Lone escape
            i += 1
            continue

        if char == "\b" and cells and i + 1 < len(text):
            previous = cells.pop()
            following = text[i + 1]
            if previous.char == following:
                cell = _Cell(following, bold=True, underline=previous.underline)
            elif previous.char == "_":
                cell = _Cell(following, bold=previous.bold, underline=True)
            elif following == "_":
                cell = _Cell(previous.char, bold=previous.bold, underline=True)
            else:
                cell = _Cell(following, bold=previous.bold, underline=previous.underline)
            cells.append(cell)
            i += 2
            continue

        if char == "\b":
            i += 1
            continue

        cells.append(_Cell(char, bold=bold, underline=underline))
        i += 1

    return cells


def to_plain(text: str) -> str:
    """Strip all terminal formatting from rendered text.

    Example:
        >>> to_plain("N\\bNA\\bAM\\bME\\bE")
        'NAME'
    """
    return "".join(cell.char for cell in _parse(text))


def to_html(text: str, title: str = "") -> str:
    """Render terminal-formatted text as a standalone HTML page.

    Args:
        text: Rendered page with overstrike or SGR styling
        title: Page title, e.g. "ls(1)"

    Returns:
        HTML document with bold and underline runs marked up inside <pre>
    """
    parts: List[str] = []
    run: List[str] = []
    style = (False, False)

    def flush() -> None:
        if not run:
            return
        chunk = html.escape("".join(run), quote=False)
        bold, underline = style
        if underline:
            chunk = f"<u>{chunk}</u>"
        if bold:
            chunk = f"<b>{chunk}</b>"
        parts.append(chunk)
        run.clear()

    for cell in _parse(text):
        cell_style = (cell.bold, cell.underline)
        # Newlines never carry style
        if cell.char == "\n":
            flush()
            parts.append("\n")
            style = (False, False)
            continue
        if cell_style != style:
            flush()
            style = cell_style
        run.append(cell.char)
    flush()

    return HTML_TEMPLATE.format(title=html.escape(title), body="".join(parts))
