"""Pipeline orchestration for init/add/remove/catalog flows."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Mapping, Optional, Sequence

from .artifacts import (
    ArtifactCoordinator,
    EnumCoordinator,
    ExportsCoordinator,
    IconMappingCoordinator,
    ImagePathCoordinator,
)
from .bootstrap import BootstrapReport, ProjectBootstrapper
from .catalog import AssetCatalog, refresh_catalog
from .config import DEFAULT_REGISTRY_FILE_NAME, IconsConfig, load_config
from .logging import get_logger, log_outcome
from .models import (
    BatchReport,
    Category,
    CategorySpec,
    ItemOutcome,
    ItemStatus,
    is_valid_item_name,
    spec_for,
)
from .registry import SpecialIconRegistry, load_registry
from .rendering import TemplateError, TemplateRenderer


class CategoryOrchestrator:
    """Adds, repairs and removes items of one category in a target tree."""

    def __init__(
        self,
        spec: CategorySpec,
        root: Path,
        *,
        registry: SpecialIconRegistry,
        renderer: TemplateRenderer,
    ) -> None:
        self.spec = spec
        self.root = root
        self.renderer = renderer
        self.logger = get_logger(f"orchestrator.{spec.category.value}")
        self.exports = ExportsCoordinator(spec, root, renderer)
        self.enum = EnumCoordinator(spec, root, renderer)
        self.image_paths = ImagePathCoordinator(spec, root, renderer, registry)
        self.mapping: Optional[IconMappingCoordinator] = None
        if spec.category is Category.TOKEN:
            self.mapping = IconMappingCoordinator(spec, root, renderer)

    @property
    def directory(self) -> Path:
        return self.root / self.spec.directory

    @property
    def coordinators(self) -> List[ArtifactCoordinator]:
        ordered: List[ArtifactCoordinator] = [self.exports, self.enum, self.image_paths]
        if self.mapping is not None:
            ordered.append(self.mapping)
        return ordered

    def component_path(self, name: str) -> Path:
        return self.directory / self.spec.component_file(name)

    def add(self, names: Sequence[str]) -> List[ItemOutcome]:
        """Create or repair every named item; never stops on a single failure."""
        unique = _unique(names)
        try:
            self._prepare()
        except (OSError, TemplateError) as exc:
            self.logger.error("Cannot prepare %s directory in %s: %s", self.spec.plural, self.root, exc)
            return [self._outcome(name, ItemStatus.FAILED, str(exc)) for name in unique]
        return [self._record(self._add_one(name)) for name in unique]

    def remove(self, names: Sequence[str]) -> List[ItemOutcome]:
        """Delete component files and strip every reference to the names."""
        if not self.directory.exists():
            self.logger.warning("%s directory does not exist: %s", self.spec.label, self.directory)
        return [self._record(self._remove_one(name)) for name in _unique(names)]

    def _prepare(self) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        (self.root / "types").mkdir(parents=True, exist_ok=True)
        (self.root / "constants").mkdir(parents=True, exist_ok=True)
        self.image_paths.ensure_file()
        if self.mapping is not None:
            self.mapping.ensure_file()

    def _add_one(self, name: str) -> ItemOutcome:
        if not is_valid_item_name(name):
            return self._outcome(name, ItemStatus.FAILED, "invalid name; use letters and digits only")

        component = self.component_path(name)
        try:
            owner = self._constant_owner(name)
            if owner is not None:
                return self._outcome(
                    name,
                    ItemStatus.FAILED,
                    f"image constant {self.spec.constant_name(name)} already belongs to {owner}",
                )
            if component.exists():
                return self._repair(name)
            component.write_text(self.renderer.render_component(self.spec, name), encoding="utf-8")
        except (OSError, UnicodeError, TemplateError) as exc:
            self.logger.error("Error processing %s %s: %s", self.spec.category.value, name, exc)
            return self._outcome(name, ItemStatus.FAILED, str(exc))

        failed = [coordinator.kind for coordinator in self.coordinators if not coordinator.add([name]).ok]
        if failed:
            return self._outcome(name, ItemStatus.FAILED, "could not update " + ", ".join(failed))
        return self._outcome(name, ItemStatus.CREATED)

    def _repair(self, name: str) -> ItemOutcome:
        self.logger.debug("%s file for %s exists, checking references", self.spec.label, name)
        missing = [coordinator for coordinator in self.coordinators if not coordinator.contains(name)]
        if not missing:
            return self._outcome(name, ItemStatus.SKIPPED, "already registered")

        for coordinator in missing:
            self.logger.warning("%s %s missing in %s, adding it", self.spec.label, name, coordinator.description)
        failed = [coordinator.kind for coordinator in missing if not coordinator.add([name]).ok]
        if failed:
            return self._outcome(name, ItemStatus.FAILED, "could not update " + ", ".join(failed))
        repaired = ", ".join(coordinator.kind for coordinator in missing)
        return self._outcome(name, ItemStatus.REPAIRED, f"back-filled {repaired}")

    def _remove_one(self, name: str) -> ItemOutcome:
        if not is_valid_item_name(name):
            return self._outcome(name, ItemStatus.FAILED, "invalid name; use letters and digits only")

        removed_file = False
        coordinators = self.coordinators
        component = self.component_path(name)
        try:
            owner = self._constant_owner(name)
            if owner is not None:
                self.logger.debug("Keeping %s, still used by %s", self.spec.constant_name(name), owner)
                coordinators = [coordinator for coordinator in coordinators if coordinator is not self.image_paths]
            if component.exists():
                component.unlink()
                removed_file = True
                self.logger.info("Removed %s component: %s", self.spec.category.value, name)
            else:
                self.logger.debug("%s component not found: %s", self.spec.label, name)
        except (OSError, UnicodeError) as exc:
            self.logger.error("Error removing %s %s: %s", self.spec.category.value, name, exc)
            return self._outcome(name, ItemStatus.FAILED, str(exc))

        results = [coordinator.remove([name]) for coordinator in coordinators]
        failed = [coordinator.kind for coordinator, result in zip(coordinators, results) if not result.ok]
        if failed:
            return self._outcome(name, ItemStatus.FAILED, "could not update " + ", ".join(failed))
        if removed_file or any(result.changed for result in results):
            return self._outcome(name, ItemStatus.REMOVED)
        return self._outcome(name, ItemStatus.SKIPPED, "not registered")

    def _constant_owner(self, name: str) -> Optional[str]:
        """Return another registered item whose image constant collides with ``name``'s."""
        key = self.spec.constant_name(name)
        for other in sorted(set(self.enum.keys()) | set(self.exports.keys())):
            if other != name and self.spec.constant_name(other) == key:
                return other
        return None

    def _outcome(self, name: str, status: ItemStatus, detail: str = "") -> ItemOutcome:
        return ItemOutcome(name=name, category=self.spec.category, status=status, detail=detail)

    def _record(self, outcome: ItemOutcome) -> ItemOutcome:
        log_outcome(self.logger, outcome)
        return outcome


class Orchestrator:
    """Coordinates command flows against a configured project."""

    def __init__(
        self,
        config: IconsConfig | None = None,
        *,
        registry: SpecialIconRegistry | None = None,
        renderer: TemplateRenderer | None = None,
    ) -> None:
        self._config = config
        self._registry = registry
        self._renderer = renderer
        self.logger = get_logger("orchestrator")

    @property
    def config(self) -> IconsConfig:
        if self._config is None:
            self._config = load_config()
        return self._config

    @property
    def registry(self) -> SpecialIconRegistry:
        if self._registry is None:
            self._registry = load_registry(self.config.registry_path())
        return self._registry

    @property
    def renderer(self) -> TemplateRenderer:
        if self._renderer is None:
            self._renderer = TemplateRenderer(self.config.templates_dir)
        return self._renderer

    def resolve_target(self, target_dir: str | Path | None) -> Path:
        return self.config.resolve_target(str(target_dir) if target_dir else None)

    def category(self, category: Category, target: Path) -> CategoryOrchestrator:
        return CategoryOrchestrator(
            spec_for(category),
            target,
            registry=self.registry,
            renderer=self.renderer,
        )

    def run_init(self, target_dir: str | Path | None = None, *, force: bool = False) -> BootstrapReport:
        """Create the icons directory layout and seed files."""
        target = self.resolve_target(target_dir)
        self.logger.info("Initializing crypto icons structure in %s", target)
        return ProjectBootstrapper(self.renderer).bootstrap(target, force=force)

    def run_add(
        self,
        selections: Mapping[Category, Sequence[str]],
        target_dir: str | Path | None = None,
    ) -> BatchReport:
        target = self.resolve_target(target_dir)
        report = BatchReport()
        for category, names in _ordered(selections):
            self.logger.info("Adding %d %s icons to %s", len(names), spec_for(category).plural, target)
            report.extend(self.category(category, target).add(names))
        return report

    def run_remove(
        self,
        selections: Mapping[Category, Sequence[str]],
        target_dir: str | Path | None = None,
    ) -> BatchReport:
        target = self.resolve_target(target_dir)
        report = BatchReport()
        for category, names in _ordered(selections):
            self.logger.info("Removing %d %s icons from %s", len(names), spec_for(category).plural, target)
            report.extend(self.category(category, target).remove(names))
        return report

    def run_catalog(
        self,
        category: Category,
        listing: Path,
        *,
        registry_path: Path | None = None,
        markdown_path: Path | None = None,
    ) -> AssetCatalog:
        """Rebuild one category's special list (and optional markdown table) from a listing."""
        destination = registry_path or self.config.special_icons_file or self.config.root / DEFAULT_REGISTRY_FILE_NAME
        catalog = refresh_catalog(
            category,
            listing,
            registry_path=destination,
            markdown_path=markdown_path,
        )
        self._registry = None
        return catalog


def _ordered(selections: Mapping[Category, Sequence[str]]) -> Iterable[tuple[Category, Sequence[str]]]:
    for category in Category:
        names = selections.get(category) or []
        if names:
            yield category, names


def _unique(names: Iterable[str]) -> List[str]:
    seen: List[str] = []
    for name in names:
        cleaned = name.strip()
        if cleaned and cleaned not in seen:
            seen.append(cleaned)
    return seen


__all__ = ["CategoryOrchestrator", "Orchestrator"]
