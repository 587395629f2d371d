"""Tests for asset listing parsing and catalog output."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from cryptoicons.catalog import (
    AssetCatalog,
    CatalogError,
    build_catalog,
    load_listing,
    parse_listing,
    refresh_catalog,
    render_markdown_table,
    update_markdown,
)
from cryptoicons.models import Category
from cryptoicons.registry import load_registry

LISTING = [
    "ALGO-lightmode.png",
    "ALGO-darkmode.png",
    "BTC.png",
    "ETH.png",
    "stOSMO-lightmode.png",
    "stOSMO-darkmode.png",
    "UST-WORMHOLE.png",
    "DOGE-lightmode.png",
    "README.txt",
]


def test_parse_listing_accepts_lines_and_json() -> None:
    assert parse_listing("BTC.png\n\n  ETH.png  \n") == ["BTC.png", "ETH.png"]
    assert parse_listing(json.dumps(["BTC.png", "tokens/ETH.png"])) == ["BTC.png", "tokens/ETH.png"]


def test_parse_listing_rejects_bad_json() -> None:
    with pytest.raises(CatalogError):
        parse_listing("[\"BTC.png\",")
    with pytest.raises(CatalogError):
        parse_listing("[1, 2]")


def test_load_listing_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(CatalogError):
        load_listing(tmp_path / "missing.txt")


def test_build_catalog_groups_variants() -> None:
    catalog = build_catalog(Category.TOKEN, LISTING)

    assert catalog.names == ["ALGO", "BTC", "DOGE", "ETH", "UST-WORMHOLE", "stOSMO"]
    assert catalog.special == ["ALGO", "stOSMO"]


def test_build_catalog_matches_variants_case_insensitively() -> None:
    catalog = build_catalog(Category.WALLET, ["Keplr-LightMode.png", "Keplr-darkmode.png", "keplr-lightmode.png"])

    assert "Keplr" in catalog.special


def test_build_catalog_strips_directories() -> None:
    catalog = build_catalog(Category.SYSTEM, ["systems/Kamino.png"])

    assert catalog.names == ["Kamino"]


def test_markdown_table_has_six_columns_and_marks_specials() -> None:
    catalog = AssetCatalog(
        category=Category.TOKEN,
        names=["A", "B", "C", "D", "E", "F", "G"],
        special=["B"],
    )

    table = render_markdown_table(catalog).splitlines()

    assert table[0] == "|       |       |       |       |       |       |"
    assert table[1] == "| :------ | :------ | :------ | :------ | :------ | :------ |"
    assert table[2] == "| A | B 🌗 | C | D | E | F |"
    assert table[3] == "| G |  |  |  |  |  |"


def test_update_markdown_appends_then_replaces(tmp_path: Path) -> None:
    path = tmp_path / "TOKENS.md"
    path.write_text("# Tokens\n\nIntro.\n", encoding="utf-8")

    update_markdown(path, AssetCatalog(Category.TOKEN, ["BTC"], []))
    update_markdown(path, AssetCatalog(Category.TOKEN, ["ALGO", "BTC"], ["ALGO"]))

    text = path.read_text(encoding="utf-8")
    assert text.startswith("# Tokens\n\nIntro.\n\n<!-- crypto-icons:begin:catalog -->\n")
    assert text.count("crypto-icons:begin:catalog") == 1
    assert "| ALGO 🌗 | BTC |" in text
    assert "> **Note**: The tokens marked with 🌗 have different images for light and dark mode." in text


def test_refresh_catalog_rewrites_one_category(tmp_path: Path) -> None:
    listing = tmp_path / "listing.txt"
    listing.write_text("\n".join(["Phantom-lightmode.png", "Phantom-darkmode.png", "Keplr.png"]), encoding="utf-8")
    registry_path = tmp_path / "special-icons.yml"

    catalog = refresh_catalog(Category.WALLET, listing, registry_path=registry_path)

    assert catalog.names == ["Keplr", "Phantom"]
    registry = load_registry(registry_path)
    assert registry.names(Category.WALLET) == ["Phantom"]
    assert registry.is_special(Category.TOKEN, "ALGO") is True
