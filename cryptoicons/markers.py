"""Marker-delimited blocks inside hand-maintained markdown files."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional, Pattern


@dataclass
class SectionContent:
    """Generated body for one managed block."""

    name: str
    body: str


class MarkerManager:
    """Keeps one generated block per key between crypto-icons markers.

    Text outside the markers is never touched, so a catalog table can live
    inside a README or TOKENS.md next to hand-written prose.
    """

    BEGIN_FMT = "<!-- crypto-icons:begin:{key} -->"
    END_FMT = "<!-- crypto-icons:end:{key} -->"

    def wrap(self, section: SectionContent) -> str:
        begin = self.BEGIN_FMT.format(key=section.name)
        end = self.END_FMT.format(key=section.name)
        return f"{begin}\n{section.body.rstrip()}\n{end}"

    def extract(self, markdown: str, key: str) -> Optional[str]:
        """Return the current body for ``key``, or ``None`` without markers."""
        match = self._block(key).search(markdown)
        if match is None:
            return None
        return match.group("body").strip()

    def upsert(self, markdown: str, section: SectionContent) -> str:
        """Replace the block for ``section.name``, appending one when absent."""
        wrapped = self.wrap(section)
        pattern = self._block(section.name)
        if pattern.search(markdown):
            return pattern.sub(lambda _: wrapped, markdown, count=1)
        if not markdown.strip():
            return f"{wrapped}\n"
        return f"{markdown.rstrip()}\n\n{wrapped}\n"

    def _block(self, key: str) -> Pattern[str]:
        begin = re.escape(self.BEGIN_FMT.format(key=key))
        end = re.escape(self.END_FMT.format(key=key))
        return re.compile(f"{begin}(?P<body>.*?){end}", re.DOTALL)


__all__ = ["MarkerManager", "SectionContent"]
