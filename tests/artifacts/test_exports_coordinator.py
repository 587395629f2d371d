"""Tests for category barrel maintenance."""

from __future__ import annotations

from pathlib import Path

from cryptoicons.artifacts import ExportsCoordinator
from cryptoicons.models import Category, spec_for
from cryptoicons.rendering import TemplateRenderer


def _coordinator(root: Path, category: Category = Category.TOKEN) -> ExportsCoordinator:
    return ExportsCoordinator(spec_for(category), root, TemplateRenderer())


def test_add_creates_barrel_when_missing(tmp_path: Path) -> None:
    coordinator = _coordinator(tmp_path)

    result = coordinator.add(["BTC"])

    assert result.ok is True
    assert result.changed == ["BTC"]
    assert (tmp_path / "tokens" / "index.ts").read_text(encoding="utf-8") == (
        "export { IconBTC } from './IconBTC';\n"
    )


def test_add_keeps_header_comment_and_sorts(tmp_path: Path) -> None:
    barrel = tmp_path / "wallets" / "index.ts"
    barrel.parent.mkdir()
    barrel.write_text(
        "// Exports will be added automatically\nexport { IconPhantom } from './IconPhantom';\n",
        encoding="utf-8",
    )
    coordinator = _coordinator(tmp_path, Category.WALLET)

    coordinator.add(["MetaMask"])

    assert barrel.read_text(encoding="utf-8") == (
        "// Exports will be added automatically\n"
        "export { IconMetaMask } from './IconMetaMask';\n"
        "export { IconPhantom } from './IconPhantom';\n"
    )


def test_add_twice_does_not_rewrite(tmp_path: Path) -> None:
    coordinator = _coordinator(tmp_path)
    coordinator.add(["BTC"])

    result = coordinator.add(["BTC"])

    assert result.ok is True
    assert result.changed == []
    assert coordinator.keys() == ["BTC"]


def test_remove_is_exact(tmp_path: Path) -> None:
    coordinator = _coordinator(tmp_path)
    coordinator.add(["ETH", "ETHW"])

    coordinator.remove(["ETH"])

    assert coordinator.contains("ETHW") is True
    assert coordinator.contains("ETH") is False


def test_remove_from_missing_file_is_noop(tmp_path: Path) -> None:
    coordinator = _coordinator(tmp_path)

    result = coordinator.remove(["BTC"])

    assert result.ok is True
    assert not (tmp_path / "tokens" / "index.ts").exists()


def test_write_failure_is_reported_not_raised(tmp_path: Path) -> None:
    (tmp_path / "tokens").write_text("not a directory", encoding="utf-8")
    coordinator = _coordinator(tmp_path)

    result = coordinator.add(["BTC"])

    assert result.ok is False
