"""Special-icon registry: items whose light and dark mode assets differ."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, FrozenSet, Iterable, List, Mapping

import yaml

from .logging import get_logger
from .models import Category

DEFAULT_REGISTRY_PATH = Path(__file__).with_name("special_icons.yml")

REGISTRY_KEYS: Dict[Category, str] = {
    Category.TOKEN: "specialTokens",
    Category.WALLET: "specialWallets",
    Category.SYSTEM: "specialSystems",
}

_HEADER = (
    "# Items whose light and dark mode assets differ.\n"
    "# Their image URLs use <name>-lightmode and <name>-darkmode instead of <name>.\n"
)

logger = get_logger("registry")


class RegistryError(RuntimeError):
    """Raised when the registry file is malformed."""


@dataclass(frozen=True)
class SpecialIconRegistry:
    """Read-only lookup of special items per category."""

    entries: Mapping[Category, FrozenSet[str]] = field(default_factory=dict)

    def is_special(self, category: Category, name: str) -> bool:
        return name in self.entries.get(category, frozenset())

    def names(self, category: Category) -> List[str]:
        return sorted(self.entries.get(category, frozenset()))

    def with_names(self, category: Category, names: Iterable[str]) -> "SpecialIconRegistry":
        """Return a copy with one category's list replaced."""
        updated = dict(self.entries)
        updated[category] = frozenset(names)
        return SpecialIconRegistry(entries=updated)


def load_registry(path: Path | None = None) -> SpecialIconRegistry:
    """Load the registry YAML, defaulting to the packaged list."""
    registry_path = path or DEFAULT_REGISTRY_PATH
    if not registry_path.exists():
        logger.warning("Special-icon registry %s not found; no items use mode suffixes", registry_path)
        return SpecialIconRegistry()

    try:
        data = yaml.safe_load(registry_path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise RegistryError(f"Failed to parse {registry_path}: {exc}") from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise RegistryError(f"{registry_path.name} must contain a mapping at the root")

    entries = {
        category: frozenset(_as_name_list(data.get(key), key))
        for category, key in REGISTRY_KEYS.items()
    }
    logger.debug(
        "Loaded special-icon registry from %s (%s)",
        registry_path,
        ", ".join(f"{len(names)} {category.value}" for category, names in entries.items()),
    )
    return SpecialIconRegistry(entries=entries)


def save_registry(path: Path, registry: SpecialIconRegistry) -> Path:
    """Write the registry back to YAML with categories in a fixed order."""
    payload = {key: registry.names(category) for category, key in REGISTRY_KEYS.items()}
    body = yaml.safe_dump(payload, sort_keys=False, default_flow_style=False)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(_HEADER + body, encoding="utf-8")
    return path


def _as_name_list(value: Any, key: str) -> List[str]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise RegistryError(f"'{key}' must be a list of names")
    return [str(item) for item in value if isinstance(item, (str, int))]


__all__ = [
    "DEFAULT_REGISTRY_PATH",
    "RegistryError",
    "SpecialIconRegistry",
    "load_registry",
    "save_registry",
]
