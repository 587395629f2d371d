"""Core data models shared across cryptoicons components."""

from __future__ import annotations

import re
from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable, List

ITEM_NAME_PATTERN = re.compile(r"^[A-Za-z0-9]+$")


class Category(str, Enum):
    """Kinds of icon assets managed in a target project."""

    TOKEN = "token"
    WALLET = "wallet"
    SYSTEM = "system"


@dataclass(frozen=True)
class CategorySpec:
    """Naming and layout conventions for one category."""

    category: Category
    label: str
    plural: str
    directory: str
    enum_name: str
    constant_prefix: str
    uppercase_constant: bool
    url_builder: str
    template_file: str

    @property
    def placeholder(self) -> str:
        return "{{" + f"{self.category.name}_NAME" + "}}"

    @property
    def constant_placeholder(self) -> str:
        return "{{" + f"{self.category.name}_CONSTANT" + "}}"

    def constant_name(self, name: str) -> str:
        suffix = name.upper() if self.uppercase_constant else name
        return f"{self.constant_prefix}{suffix}"

    def component_name(self, name: str) -> str:
        return f"Icon{name}"

    def component_file(self, name: str) -> str:
        return f"Icon{name}.tsx"


CATEGORY_SPECS: Dict[Category, CategorySpec] = {
    Category.TOKEN: CategorySpec(
        category=Category.TOKEN,
        label="Token",
        plural="tokens",
        directory="tokens",
        enum_name="TokenName",
        constant_prefix="PNG_",
        uppercase_constant=False,
        url_builder="baseImgUrlToken",
        template_file="TokenTemplate.tsx",
    ),
    Category.WALLET: CategorySpec(
        category=Category.WALLET,
        label="Wallet",
        plural="wallets",
        directory="wallets",
        enum_name="WalletName",
        constant_prefix="PNG_WALLET_",
        uppercase_constant=True,
        url_builder="baseImgUrlWallet",
        template_file="WalletTemplate.tsx",
    ),
    Category.SYSTEM: CategorySpec(
        category=Category.SYSTEM,
        label="System",
        plural="systems",
        directory="systems",
        enum_name="SystemName",
        constant_prefix="PNG_SYSTEM_",
        uppercase_constant=True,
        url_builder="baseImgUrlSystem",
        template_file="SystemTemplate.tsx",
    ),
}


def spec_for(category: Category) -> CategorySpec:
    return CATEGORY_SPECS[category]


def is_valid_item_name(name: str) -> bool:
    return bool(ITEM_NAME_PATTERN.match(name))


class ItemStatus(str, Enum):
    """Outcome of processing a single item."""

    CREATED = "created"
    SKIPPED = "skipped"
    REPAIRED = "repaired"
    REMOVED = "removed"
    FAILED = "failed"


@dataclass
class ItemOutcome:
    """Result of an add or remove pass for one item."""

    name: str
    category: Category
    status: ItemStatus
    detail: str = ""


@dataclass
class BatchReport:
    """Aggregated outcomes for a command invocation."""

    outcomes: List[ItemOutcome] = field(default_factory=list)

    def extend(self, outcomes: Iterable[ItemOutcome]) -> None:
        self.outcomes.extend(outcomes)

    @property
    def failed(self) -> List[ItemOutcome]:
        return [outcome for outcome in self.outcomes if outcome.status is ItemStatus.FAILED]

    @property
    def ok(self) -> bool:
        return not self.failed

    def counts(self) -> Dict[ItemStatus, int]:
        tally = Counter(outcome.status for outcome in self.outcomes)
        return {status: tally[status] for status in ItemStatus if tally[status]}

    def summary(self) -> str:
        counts = self.counts()
        if not counts:
            return "nothing to do"
        return ", ".join(f"{count} {status.value}" for status, count in counts.items())
