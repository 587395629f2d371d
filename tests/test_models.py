"""Tests for category metadata and batch reporting."""

from __future__ import annotations

from cryptoicons.models import (
    BatchReport,
    Category,
    ItemOutcome,
    ItemStatus,
    is_valid_item_name,
    spec_for,
)


def test_constant_names_per_category() -> None:
    assert spec_for(Category.TOKEN).constant_name("stOSMO") == "PNG_stOSMO"
    assert spec_for(Category.WALLET).constant_name("MetaMask") == "PNG_WALLET_METAMASK"
    assert spec_for(Category.SYSTEM).constant_name("Jito") == "PNG_SYSTEM_JITO"


def test_placeholders() -> None:
    assert spec_for(Category.WALLET).placeholder == "{{WALLET_NAME}}"
    assert spec_for(Category.TOKEN).constant_placeholder == "{{TOKEN_CONSTANT}}"


def test_item_name_validation() -> None:
    assert is_valid_item_name("BTC") is True
    assert is_valid_item_name("1INCH") is True
    assert is_valid_item_name("UST-WORMHOLE") is False
    assert is_valid_item_name("") is False
    assert is_valid_item_name("BTC.e") is False


def test_batch_report_summary() -> None:
    report = BatchReport()
    report.extend(
        [
            ItemOutcome("BTC", Category.TOKEN, ItemStatus.CREATED),
            ItemOutcome("ETH", Category.TOKEN, ItemStatus.CREATED),
            ItemOutcome("BAD-NAME", Category.TOKEN, ItemStatus.FAILED, "invalid name"),
        ]
    )

    assert report.ok is False
    assert [outcome.name for outcome in report.failed] == ["BAD-NAME"]
    assert report.summary() == "2 created, 1 failed"
    assert BatchReport().summary() == "nothing to do"
