"""Configuration loading for crypto-icons (crypto-mui-icon-cli.json)."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

from .logging import get_logger

CONFIG_FILE_NAME = "crypto-mui-icon-cli.json"
DEFAULT_TARGET_DIRECTORY = "./src/libs/crypto-icons"
PROJECT_MANIFEST = "package.json"
DEFAULT_REGISTRY_FILE_NAME = "special-icons.yml"

_KNOWN_KEYS = {"targetDirectory", "templatesDir", "specialIconsFile"}

logger = get_logger("config")


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed or saved."""


@dataclass
class IconsConfig:
    """Represents the settings stored in the project-root config file."""

    root: Path
    target_directory: str = DEFAULT_TARGET_DIRECTORY
    templates_dir: Optional[Path] = None
    special_icons_file: Optional[Path] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    @property
    def path(self) -> Path:
        return self.root / CONFIG_FILE_NAME

    def resolve_target(self, override: str | None = None) -> Path:
        """Return the icons directory, preferring an explicit CLI value.

        Explicit values are relative to the working directory; the stored
        ``targetDirectory`` is relative to the project root.
        """
        if override:
            return Path(override).expanduser().resolve()
        target = Path(self.target_directory).expanduser()
        if not target.is_absolute():
            target = self.root / target
        return target.resolve()

    def registry_path(self) -> Optional[Path]:
        """Return the special-icon registry file in effect, if any exists."""
        if self.special_icons_file is not None:
            return self.special_icons_file
        candidate = self.root / DEFAULT_REGISTRY_FILE_NAME
        return candidate if candidate.exists() else None


def find_project_root(start: Path | None = None) -> Path:
    """Walk upward from ``start`` to the nearest directory holding package.json."""
    current = (start or Path.cwd()).expanduser().resolve()
    if current.is_file():
        current = current.parent
    for candidate in (current, *current.parents):
        if (candidate / PROJECT_MANIFEST).is_file():
            return candidate
    logger.debug("No %s found above %s; using it as project root", PROJECT_MANIFEST, current)
    return current


def load_config(start: Path | None = None) -> IconsConfig:
    """Load configuration from the project root, falling back to defaults."""
    root = find_project_root(start)
    config_file = root / CONFIG_FILE_NAME

    if not config_file.exists():
        return IconsConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILE_NAME} must contain a JSON object at the root")

    target = _as_str(data.get("targetDirectory")) or DEFAULT_TARGET_DIRECTORY
    templates_dir_str = _as_str(data.get("templatesDir"))
    registry_str = _as_str(data.get("specialIconsFile"))
    extra = {key: value for key, value in data.items() if key not in _KNOWN_KEYS}

    return IconsConfig(
        root=root,
        target_directory=target,
        templates_dir=root / templates_dir_str if templates_dir_str else None,
        special_icons_file=root / registry_str if registry_str else None,
        extra=extra,
    )


def save_config(config: IconsConfig) -> Path:
    """Persist the configuration next to the project manifest."""
    payload: Dict[str, Any] = dict(config.extra)
    payload["targetDirectory"] = config.target_directory
    if config.templates_dir is not None:
        payload["templatesDir"] = _relative_to_root(config.templates_dir, config.root)
    if config.special_icons_file is not None:
        payload["specialIconsFile"] = _relative_to_root(config.special_icons_file, config.root)
    try:
        config.path.write_text(json.dumps(payload, indent=2) + "\n", encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to write {config.path}: {exc}") from exc
    logger.info("Configuration saved to %s", config.path)
    return config.path


def update_config(start: Path | None = None, *, target_directory: str | None = None) -> IconsConfig:
    """Merge new values into the stored configuration and save it."""
    config = load_config(start)
    if target_directory is not None:
        config.target_directory = target_directory
    save_config(config)
    return config


def _read_config(path: Path) -> Any:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc


def _relative_to_root(path: Path, root: Path) -> str:
    try:
        return path.relative_to(root).as_posix()
    except ValueError:
        return str(path)


def _as_str(value: Any) -> Optional[str]:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return None


__all__ = [
    "CONFIG_FILE_NAME",
    "ConfigError",
    "DEFAULT_TARGET_DIRECTORY",
    "IconsConfig",
    "find_project_root",
    "load_config",
    "save_config",
    "update_config",
]
