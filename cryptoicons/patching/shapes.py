"""Collection shapes: how a managed list is found in, and written back to, a file.

Each shape turns file text into a :class:`Collection` (text before, ordered
entries, text after) and back. Entries keep the exact text they were read
with, so re-serialising a collection only touches entries that were added or
removed.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List, Optional, Pattern


@dataclass(frozen=True)
class Entry:
    """A single named record inside a collection."""

    key: str
    text: str


@dataclass
class Collection:
    """Parsed view of a managed collection embedded in a file."""

    prefix: str
    entries: List[Entry]
    suffix: str
    extras: List[str] = field(default_factory=list)

    def keys(self) -> List[str]:
        return [entry.key for entry in self.entries]


class CollectionShape(ABC):
    """Locates, parses and serialises one kind of collection."""

    def __init__(self, label: str, skeleton: str) -> None:
        self.label = label
        self.skeleton = skeleton

    @abstractmethod
    def parse(self, text: str) -> Optional[Collection]:
        """Return the collection, or ``None`` when its anchor is absent."""

    @abstractmethod
    def serialize(self, collection: Collection) -> str:
        """Return the full file text for ``collection``."""

    @abstractmethod
    def empty_block(self) -> str:
        """Return a minimal block to append when the anchor is missing."""


def _dedupe(entries: List[Entry]) -> List[Entry]:
    seen = set()
    unique: List[Entry] = []
    for entry in entries:
        if entry.key in seen:
            continue
        seen.add(entry.key)
        unique.append(entry)
    return unique


class LineShape(CollectionShape):
    """One entry per line within a region (whole file or a leading block).

    When ``region`` has a ``body`` group that took part in the match, only
    that group is managed and the text ahead of it stays in the prefix.
    Lines in the region that are not entries (comments, other imports) are
    kept ahead of the entries in their original order; blank lines are
    dropped.
    """

    def __init__(
        self,
        label: str,
        entry: Pattern[str],
        *,
        region: Pattern[str] | None = None,
        skeleton: str = "",
    ) -> None:
        super().__init__(label, skeleton)
        self.entry = entry
        self.region = region

    def parse(self, text: str) -> Optional[Collection]:
        if self.region is None:
            start, end = 0, len(text)
        else:
            match = self.region.search(text)
            if match is None:
                return None
            span_group = "body" if "body" in self.region.groupindex and match.group("body") is not None else 0
            start, end = match.span(span_group)

        entries: List[Entry] = []
        extras: List[str] = []
        for line in text[start:end].splitlines():
            stripped = line.rstrip()
            found = self.entry.fullmatch(stripped)
            if found:
                entries.append(Entry(found.group("name"), stripped))
            elif stripped.strip():
                extras.append(stripped)
        return Collection(text[:start], _dedupe(entries), text[end:], extras)

    def serialize(self, collection: Collection) -> str:
        lines = collection.extras + [entry.text for entry in collection.entries]
        body = "".join(f"{line}\n" for line in lines)
        return f"{collection.prefix}{body}{collection.suffix}"

    def empty_block(self) -> str:
        return ""


class BlockShape(CollectionShape):
    """Entries inside a delimited declaration such as ``export enum X { ... }``.

    ``anchor`` must expose a ``body`` group; the whole match is replaced with
    ``head`` + entries + ``tail``. Only entries survive inside the block; an
    empty block renders ``placeholder``. Entries get ``terminator`` appended
    when they lack it so hand-edited last lines stay valid once followed by
    new ones.
    """

    def __init__(
        self,
        label: str,
        anchor: Pattern[str],
        entry: Pattern[str],
        *,
        head: str,
        tail: str,
        placeholder: str = "",
        terminator: str = "",
        skeleton: str = "",
    ) -> None:
        super().__init__(label, skeleton)
        self.anchor = anchor
        self.entry = entry
        self.head = head
        self.tail = tail
        self.placeholder = placeholder
        self.terminator = terminator

    def parse(self, text: str) -> Optional[Collection]:
        match = self.anchor.search(text)
        if match is None:
            return None
        body = match.group("body") or ""
        entries = [
            Entry(found.group("name"), self._terminate(found.group(0).rstrip()))
            for found in self.entry.finditer(body)
        ]
        return Collection(text[: match.start()], _dedupe(entries), text[match.end():])

    def serialize(self, collection: Collection) -> str:
        return f"{collection.prefix}{self.render_block(collection.entries)}{collection.suffix}"

    def render_block(self, entries: List[Entry]) -> str:
        body = "".join(f"{entry.text}\n" for entry in entries) or self.placeholder
        return f"{self.head}{body}{self.tail}"

    def empty_block(self) -> str:
        return self.render_block([])

    def _terminate(self, text: str) -> str:
        if self.terminator and not text.endswith(self.terminator):
            return f"{text}{self.terminator}"
        return text


class SectionShape(BlockShape):
    """Blocks listed under a marker comment, separated by blank lines.

    The section runs from its marker line across entries and whitespace; the
    first other text (the next marker, hand-written code) ends it and is left
    untouched.
    """

    def __init__(
        self,
        label: str,
        marker: str,
        entry: Pattern[str],
        *,
        terminator: str = "",
        skeleton: str = "",
    ) -> None:
        entry_source = entry.pattern
        anchor = re.compile(
            rf"^{re.escape(marker)}[ \t]*(?:\n|\Z)(?P<body>(?:\s*{entry_source})*\s*)",
            re.MULTILINE,
        )
        super().__init__(
            label,
            anchor,
            entry,
            head=f"{marker}\n",
            tail="",
            terminator=terminator,
            skeleton=skeleton,
        )

    def render_block(self, entries: List[Entry]) -> str:
        body = "".join(f"\n{entry.text}\n" for entry in entries)
        return f"{self.head}{body}"

    def serialize(self, collection: Collection) -> str:
        block = self.render_block(collection.entries)
        separator = "\n" if collection.suffix else ""
        return f"{collection.prefix}{block}{separator}{collection.suffix}"


__all__ = [
    "BlockShape",
    "Collection",
    "CollectionShape",
    "Entry",
    "LineShape",
    "SectionShape",
]
