"""One-shot creation of the icons directory tree and its seed files."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List

from .logging import get_logger
from .models import CATEGORY_SPECS
from .rendering import TemplateRenderer

DIRECTORIES = ("tokens", "wallets", "systems", "common", "types", "constants")
ROOT_MODULES = ("tokens", "wallets", "systems", "types", "common")


@dataclass
class BootstrapReport:
    """Files touched by an init run."""

    root: Path
    created: List[Path] = field(default_factory=list)
    overwritten: List[Path] = field(default_factory=list)
    kept: List[Path] = field(default_factory=list)


class ProjectBootstrapper:
    """Creates the target layout and seeds generated files.

    Re-running is additive: existing seed files are kept unless ``force`` is
    set, so customised files survive a second ``init``.
    """

    def __init__(self, renderer: TemplateRenderer | None = None) -> None:
        self.renderer = renderer or TemplateRenderer()
        self.logger = get_logger("bootstrap")

    def seed_files(self) -> Dict[str, str]:
        """Return relative path -> content for every seed file."""
        render = self.renderer.render_seed
        specs = list(CATEGORY_SPECS.values())
        files: Dict[str, str] = {}
        for spec in specs:
            files[f"types/{spec.enum_name}.ts"] = self.renderer.enum_skeleton(spec)
        files["types/index.ts"] = render("types_index.ts.j2", enum_names=[spec.enum_name for spec in specs])
        files["constants/iconMappings.ts"] = self.renderer.icon_mappings_skeleton()
        files["constants/imagePaths.ts"] = self.renderer.image_paths_skeleton()
        files["common/IconCrypto.tsx"] = render("IconCrypto.tsx.j2")
        files["common/IconToken.tsx"] = render("IconToken.tsx.j2")
        files["common/IconTokenAndName.tsx"] = render("IconTokenAndName.tsx.j2")
        files["common/index.ts"] = render("common_index.ts.j2")
        for spec in specs:
            files[f"{spec.directory}/index.ts"] = render("barrel.ts.j2")
        files["index.ts"] = render("root_index.ts.j2", modules=list(ROOT_MODULES))
        return files

    def bootstrap(self, target_dir: Path, *, force: bool = False) -> BootstrapReport:
        root = Path(target_dir)
        report = BootstrapReport(root=root)
        root.mkdir(parents=True, exist_ok=True)
        for directory in DIRECTORIES:
            (root / directory).mkdir(parents=True, exist_ok=True)
            self.logger.debug("Ensured directory %s", root / directory)

        for relative, content in self.seed_files().items():
            path = root / relative
            if path.exists():
                if not force:
                    self.logger.info("Kept existing %s", path)
                    report.kept.append(path)
                    continue
                path.write_text(content, encoding="utf-8")
                self.logger.warning("Overwrote %s", path)
                report.overwritten.append(path)
                continue
            path.write_text(content, encoding="utf-8")
            self.logger.info("Created %s", path)
            report.created.append(path)
        return report


__all__ = ["BootstrapReport", "DIRECTORIES", "ProjectBootstrapper"]
