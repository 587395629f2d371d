"""Tests for managed markdown markers."""

from __future__ import annotations

from cryptoicons.markers import MarkerManager, SectionContent


def test_wrap_and_extract() -> None:
    manager = MarkerManager()
    wrapped = manager.wrap(SectionContent(name="catalog", body="| a |\n"))

    assert wrapped == "<!-- crypto-icons:begin:catalog -->\n| a |\n<!-- crypto-icons:end:catalog -->"
    assert manager.extract(f"# Tokens\n\n{wrapped}\n", "catalog") == "| a |"
    assert manager.extract("# Tokens\n", "catalog") is None


def test_upsert_replaces_existing_block_only() -> None:
    manager = MarkerManager()
    markdown = (
        "# Tokens\n\n"
        "<!-- crypto-icons:begin:catalog -->\nold\n<!-- crypto-icons:end:catalog -->\n\n"
        "Footer\n"
    )

    updated = manager.upsert(markdown, SectionContent(name="catalog", body="new"))

    assert updated == (
        "# Tokens\n\n"
        "<!-- crypto-icons:begin:catalog -->\nnew\n<!-- crypto-icons:end:catalog -->\n\n"
        "Footer\n"
    )


def test_upsert_appends_when_absent() -> None:
    manager = MarkerManager()

    updated = manager.upsert("# Tokens\n", SectionContent(name="catalog", body="table"))

    assert updated == "# Tokens\n\n<!-- crypto-icons:begin:catalog -->\ntable\n<!-- crypto-icons:end:catalog -->\n"


def test_upsert_leaves_other_keys_alone() -> None:
    manager = MarkerManager()
    markdown = "<!-- crypto-icons:begin:wallets -->\nW\n<!-- crypto-icons:end:wallets -->\n"

    updated = manager.upsert(markdown, SectionContent(name="catalog", body="T"))

    assert manager.extract(updated, "wallets") == "W"
    assert manager.extract(updated, "catalog") == "T"


def test_body_with_backslashes_is_written_verbatim() -> None:
    manager = MarkerManager()
    markdown = manager.upsert("", SectionContent(name="catalog", body="old"))

    updated = manager.upsert(markdown, SectionContent(name="catalog", body=r"a\1b"))

    assert manager.extract(updated, "catalog") == r"a\1b"
