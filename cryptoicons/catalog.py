"""Asset catalog: derive names and special items from a storage listing."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath
from typing import Iterable, List, Optional

from .logging import get_logger
from .markers import MarkerManager, SectionContent
from .models import Category, spec_for
from .registry import load_registry, save_registry

CATALOG_SECTION = "catalog"
TABLE_COLUMNS = 6
SPECIAL_MARK = "🌗"

ASSET_FILE = re.compile(
    r"^(?P<name>[A-Za-z0-9]+(?:-[A-Za-z0-9]+)*?)(?:-(?P<mode>lightmode|darkmode))?\.png$"
)

logger = get_logger("catalog")


class CatalogError(RuntimeError):
    """Raised when an asset listing cannot be read or parsed."""


@dataclass
class AssetCatalog:
    """Sorted item names of one category and those with mode variants."""

    category: Category
    names: List[str] = field(default_factory=list)
    special: List[str] = field(default_factory=list)

    def is_special(self, name: str) -> bool:
        return name in self.special


def load_listing(path: Path) -> List[str]:
    """Read a listing file: a JSON array of file names, or one name per line."""
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise CatalogError(f"Failed to read listing {path}: {exc}") from exc
    return parse_listing(text)


def parse_listing(text: str) -> List[str]:
    stripped = text.strip()
    if stripped.startswith("["):
        try:
            data = json.loads(stripped)
        except json.JSONDecodeError as exc:
            raise CatalogError(f"Listing looks like JSON but cannot be parsed: {exc}") from exc
        if not all(isinstance(item, str) for item in data):
            raise CatalogError("JSON listing must be an array of file names")
        return [item.strip() for item in data if item.strip()]
    return [line.strip() for line in text.splitlines() if line.strip()]


def build_catalog(category: Category, file_names: Iterable[str]) -> AssetCatalog:
    """Group asset file names into items.

    An item is special when both ``<name>-lightmode.png`` and
    ``<name>-darkmode.png`` exist, compared case-insensitively.
    """
    basenames = [PurePosixPath(name).name for name in file_names]
    lowered = {name.lower() for name in basenames}
    names: set[str] = set()
    for basename in basenames:
        match = ASSET_FILE.match(basename)
        if match is None:
            logger.warning("Could not extract a %s name from %s", category.value, basename)
            continue
        names.add(match.group("name"))

    special = [
        name
        for name in names
        if f"{name}-lightmode.png".lower() in lowered and f"{name}-darkmode.png".lower() in lowered
    ]
    catalog = AssetCatalog(category=category, names=sorted(names), special=sorted(special))
    logger.info(
        "Found %d %s (%d with light/dark mode variants)",
        len(catalog.names),
        spec_for(category).plural,
        len(catalog.special),
    )
    return catalog


def render_markdown_table(catalog: AssetCatalog) -> str:
    rows = [
        "|" + "       |" * TABLE_COLUMNS,
        "|" + " :------ |" * TABLE_COLUMNS,
    ]
    for start in range(0, len(catalog.names), TABLE_COLUMNS):
        cells = [
            f"{name} {SPECIAL_MARK}" if catalog.is_special(name) else name
            for name in catalog.names[start : start + TABLE_COLUMNS]
        ]
        cells.extend([""] * (TABLE_COLUMNS - len(cells)))
        rows.append("| " + " | ".join(cells) + " |")
    return "\n".join(rows) + "\n"


def render_catalog_section(catalog: AssetCatalog) -> str:
    plural = spec_for(catalog.category).plural
    if catalog.special:
        note = f"> **Note**: The {plural} marked with {SPECIAL_MARK} have different images for light and dark mode."
    else:
        note = f"> **Note**: No {plural} currently have special light/dark mode variants."
    return f"{render_markdown_table(catalog)}\n{note}\n"


def update_markdown(path: Path, catalog: AssetCatalog, markers: Optional[MarkerManager] = None) -> Path:
    """Replace the managed catalog block in ``path``, appending one when absent."""
    manager = markers or MarkerManager()
    existing = path.read_text(encoding="utf-8") if path.exists() else ""
    section = SectionContent(name=CATALOG_SECTION, body=render_catalog_section(catalog))
    updated = manager.upsert(existing, section)
    if updated != existing:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(updated, encoding="utf-8")
        logger.info("Updated catalog table in %s", path)
    return path


def refresh_catalog(
    category: Category,
    listing: Path,
    *,
    registry_path: Path,
    markdown_path: Path | None = None,
) -> AssetCatalog:
    """Rebuild one category's registry list (and optional markdown) from a listing."""
    catalog = build_catalog(category, load_listing(listing))
    registry = load_registry(registry_path if registry_path.exists() else None)
    save_registry(registry_path, registry.with_names(category, catalog.special))
    logger.info("Saved %d special %s to %s", len(catalog.special), spec_for(category).plural, registry_path)
    if markdown_path is not None:
        update_markdown(markdown_path, catalog)
    return catalog


__all__ = [
    "AssetCatalog",
    "CatalogError",
    "build_catalog",
    "load_listing",
    "parse_listing",
    "refresh_catalog",
    "render_markdown_table",
    "update_markdown",
]
