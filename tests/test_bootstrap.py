"""Tests for init: directory layout and seed files."""

from __future__ import annotations

from pathlib import Path

from cryptoicons.bootstrap import DIRECTORIES, ProjectBootstrapper


def test_bootstrap_creates_layout_and_seeds(tmp_path: Path) -> None:
    target = tmp_path / "icons"

    report = ProjectBootstrapper().bootstrap(target)

    for directory in DIRECTORIES:
        assert (target / directory).is_dir()
    assert report.kept == []
    assert target / "index.ts" in report.created
    assert (target / "index.ts").read_text(encoding="utf-8") == (
        "export * from './tokens';\n"
        "export * from './wallets';\n"
        "export * from './systems';\n"
        "export * from './types';\n"
        "export * from './common';\n"
    )
    assert (target / "types" / "WalletName.ts").read_text(encoding="utf-8") == (
        "export enum WalletName {\n  // This will be populated automatically as you add wallets\n}\n"
    )
    types_index = (target / "types" / "index.ts").read_text(encoding="utf-8")
    assert "export interface IconUrls {" in types_index
    assert "export { SystemName } from './SystemName';" in types_index
    assert (target / "tokens" / "index.ts").read_text(encoding="utf-8") == (
        "// Exports will be added automatically\n"
    )
    assert "export default function IconCrypto(" in (target / "common" / "IconCrypto.tsx").read_text(
        encoding="utf-8"
    )


def test_bootstrap_is_additive_by_default(tmp_path: Path) -> None:
    target = tmp_path / "icons"
    bootstrapper = ProjectBootstrapper()
    bootstrapper.bootstrap(target)
    enum_path = target / "types" / "TokenName.ts"
    enum_path.write_text("export enum TokenName {\n  BTC = 'BTC',\n}\n", encoding="utf-8")

    report = bootstrapper.bootstrap(target)

    assert report.created == []
    assert enum_path in report.kept
    assert "BTC = 'BTC'" in enum_path.read_text(encoding="utf-8")


def test_bootstrap_force_overwrites_seeds(tmp_path: Path) -> None:
    target = tmp_path / "icons"
    bootstrapper = ProjectBootstrapper()
    bootstrapper.bootstrap(target)
    enum_path = target / "types" / "TokenName.ts"
    enum_path.write_text("export enum TokenName {\n  BTC = 'BTC',\n}\n", encoding="utf-8")

    report = bootstrapper.bootstrap(target, force=True)

    assert enum_path in report.overwritten
    assert "BTC" not in enum_path.read_text(encoding="utf-8")


def test_bootstrap_recreates_deleted_seed(tmp_path: Path) -> None:
    target = tmp_path / "icons"
    bootstrapper = ProjectBootstrapper()
    bootstrapper.bootstrap(target)
    (target / "constants" / "imagePaths.ts").unlink()

    report = bootstrapper.bootstrap(target)

    assert report.created == [target / "constants" / "imagePaths.ts"]
