"""Unit tests for provider/overstrike.py."""
from __future__ import annotations

from provider.overstrike import to_html, to_plain


def _bold(text: str) -> str:
    return "".join(f"{c}\b{c}" for c in text)


def _underline(text: str) -> str:
    return "".join(f"_\b{c}" for c in text)


def test_plain_strips_overstrike():
    text = f"{_bold('NAME')}\n    {_underline('file')} - x\n"
    assert to_plain(text) == "NAME\n    file - x\n"


def test_plain_strips_sgr_and_osc():
    text = "\x1b[1mNAME\x1b[0m\n    \x1b]8;;man:ls(1)\x1b\\ls\x1b]8;;\x1b\\ \x1b[4mfile\x1b[24m\n"
    assert to_plain(text) == "NAME\n    ls file\n"


def test_plain_keeps_ordinary_text():
    assert to_plain("  a < b & c\n") == "  a < b & c\n"


def test_plain_overstruck_bullet_keeps_last_char():
    assert to_plain("+\bo item") == "o item"


def test_html_marks_bold_and_underline():
    page = to_html(f"{_bold('NAME')}\n    {_underline('file')}\n", title="ls(1)")

    assert "<title>ls(1)</title>" in page
    assert "<b>NAME</b>\n" in page
    assert "    <u>file</u>\n" in page
    assert page.startswith("<!DOCTYPE html>")


def test_html_from_sgr():
    page = to_html("\x1b[1mls\x1b[22m [\x1b[4mfile\x1b[0m]\n")
    assert "<b>ls</b> [<u>file</u>]" in page


def test_html_escapes_content():
    page = to_html(f"{_bold('a<b>')} & c\n", title="x<y")
    assert "<b>a&lt;b&gt;</b> &amp; c" in page
    assert "<title>x&lt;y</title>" in page
