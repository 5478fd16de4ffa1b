"""
Man page provider.

Lists, renders and summarizes manual pages found under a MANPATH directory by
running the system ``man`` (man-db or mandoc).

Usage:
    from provider.man import ManPageProvider

    provider = ManPageProvider()
    pairs = provider.list_documents("/usr/share/man")
    page = provider.render("/usr/share/man", "ls", "1", RenderOptions(width=100))
    brief = provider.summarize("/usr/share/man", "ls", "1")
"""

from __future__ import annotations

import logging
import os
import re
import subprocess
from typing import Dict, List, Optional, Sequence, Tuple

from .base import MARKUP_HTML, ProviderError, RenderOptions
from .overstrike import to_html, to_plain

logger = logging.getLogger(__name__)

# ============================================================================
# Configuration from environment variables
# ============================================================================

MAN_COMMAND = os.environ.get("MAN_COMMAND", "man")

# "ls (1)   - list directory contents" (man-db) or "cat, tac(1) - ..." (mandoc)
APROPOS_LINE_RE = re.compile(r"^(?P<names>[^(]+?)\s*\((?P<section>[^)\s]+)\)\s+-")
NOTHING_FOUND_RE = re.compile(r"nothing appropriate", re.IGNORECASE)


def parse_apropos_output(output: str) -> List[Tuple[str, str]]:
    """Parse ``man -k`` / ``man -f`` output into (name, section) pairs.

    Args:
        output: Raw command output

    Returns:
        Pairs in output order; one pair per name when a line lists several

    Example:
        >>> parse_apropos_output("ls (1)  - list directory contents\\n")
        [('ls', '1')]
    """
    pairs: List[Tuple[str, str]] = []

    for line in output.splitlines():
        match = APROPOS_LINE_RE.match(line.strip())
        if not match:
            continue
        section = match.group("section")
        for name in match.group("names").split(","):
            name = name.strip()
            if name:
                pairs.append((name, section))

    return pairs


class ManPageProvider:
    """Document source provider backed by the system ``man`` command."""

    def __init__(self, command: str = MAN_COMMAND):
        self.command = command

    def _run(self, args: Sequence[str], env: Dict[str, str]) -> subprocess.CompletedProcess:
        cmd = [self.command, *args]
        logger.debug(f"Running {' '.join(cmd)} (MANPATH={env.get('MANPATH')})")

        try:
            return subprocess.run(
                cmd,
                env={**os.environ, **env},
                capture_output=True,
                text=True,
                errors="replace",
                check=False,
            )
        except FileNotFoundError as exc:
            raise ProviderError(f"Man command not found: {self.command}") from exc
        except OSError as exc:
            raise ProviderError(f"Failed to run {self.command}: {exc}") from exc

    def list_documents(self, location: str) -> Optional[List[Tuple[str, str]]]:
        """List every page under ``location``.

        Returns:
            (name, section) pairs, or None when man finds nothing
        """
        result = self._run(["-k", "."], {"MANPATH": str(location)})

        if NOTHING_FOUND_RE.search(result.stderr) or NOTHING_FOUND_RE.search(result.stdout):
            logger.debug(f"No manual pages under {location}")
            return None

        pairs = parse_apropos_output(result.stdout)
        if not pairs:
            if result.returncode != 0:
                logger.debug(f"man -k exited {result.returncode}: {result.stderr.strip()}")
            return None

        return pairs

    def render(
        self,
        location: str,
        document_id: str,
        category_key: str,
        options: RenderOptions,
    ) -> str:
        """Render one page as HTML or plain text.

        Raises:
            ProviderError: If man fails and produces no output
        """
        width = str(options.width)
        env = {
            "MANPATH": str(location),
            "COLUMNS": width,
            "MANWIDTH": width,
        }
        if options.markup == MARKUP_HTML:
            env["MAN_KEEP_FORMATTING"] = "1"

        result = self._run(["-P", "cat", category_key, document_id], env)

        if result.returncode != 0 and not result.stdout:
            raise ProviderError(
                f"man failed for {document_id}({category_key}) with exit code "
                f"{result.returncode}: {result.stderr.strip()}"
            )

        if options.markup == MARKUP_HTML:
            return to_html(result.stdout, title=f"{document_id}({category_key})")
        return to_plain(result.stdout)

    def summarize(self, location: str, document_id: str, category_key: str) -> str:
        """Return the whatis line(s) for one page, verbatim."""
        result = self._run(["-f", document_id], {"MANPATH": str(location)})

        lines = []
        for line in result.stdout.splitlines():
            if (document_id, category_key) in parse_apropos_output(line):
                lines.append(line)

        return "".join(line + "\n" for line in lines)
