"""Parsing and serialisation behaviour of collection shapes."""

from __future__ import annotations

import re

from cryptoicons.patching import Entry, LineShape, SectionShape, upsert_entries

CONSTANT = re.compile(r"export const (?P<name>PNG_\w+) = \{[^{}]*\};?")
IMPORT = re.compile(r"import \{ Icon(?P<name>\w+) \} from '\.\./tokens/Icon(?P=name)';")
LEADING_IMPORTS = re.compile(r"\A(?:[ \t]*import\b[^\n]*\n)*")


def _constant(name: str) -> Entry:
    return Entry(f"PNG_{name}", f"export const PNG_{name} = {{ a: '{name}' }};")


def _sections() -> SectionShape:
    return SectionShape("Token image paths", "// Token image paths", CONSTANT, terminator=";")


def test_line_shape_region_only_touches_leading_imports() -> None:
    shape = LineShape("imports", IMPORT, region=LEADING_IMPORTS)
    text = "import { TokenName } from '../types';\n\nexport const x = {};\n"

    collection = shape.parse(text)

    assert collection is not None
    assert collection.extras == ["import { TokenName } from '../types';"]
    assert collection.entries == []
    assert collection.suffix == "\nexport const x = {};\n"


def test_line_shape_drops_duplicate_entries() -> None:
    shape = LineShape("imports", IMPORT)
    text = "import { IconBTC } from '../tokens/IconBTC';\nimport { IconBTC } from '../tokens/IconBTC';\n"

    collection = shape.parse(text)

    assert collection is not None
    assert collection.keys() == ["BTC"]


def test_section_shape_stops_at_next_marker() -> None:
    text = (
        "// Token image paths\n"
        "\n"
        "export const PNG_BTC = { a: 'BTC' };\n"
        "\n"
        "// Wallet image paths\n"
        "\n"
        "export const PNG_WALLET_X = { a: 'X' };\n"
    )

    collection = _sections().parse(text)

    assert collection is not None
    assert collection.keys() == ["PNG_BTC"]
    assert collection.suffix.startswith("// Wallet image paths")


def test_section_shape_inserts_in_order_with_blank_lines() -> None:
    text = (
        "// Token image paths\n"
        "\n"
        "export const PNG_ETH = { a: 'ETH' };\n"
        "\n"
        "// Wallet image paths\n"
    )

    result = upsert_entries(text, _sections(), [_constant("BTC")])

    assert result.text == (
        "// Token image paths\n"
        "\n"
        "export const PNG_BTC = { a: 'BTC' };\n"
        "\n"
        "export const PNG_ETH = { a: 'ETH' };\n"
        "\n"
        "// Wallet image paths\n"
    )


def test_section_shape_at_end_of_file() -> None:
    text = "// Token image paths\n"

    result = upsert_entries(text, _sections(), [_constant("BTC")])

    assert result.text == "// Token image paths\n\nexport const PNG_BTC = { a: 'BTC' };\n"


def test_section_shape_terminates_entries() -> None:
    text = "// Token image paths\n\nexport const PNG_ETH = { a: 'ETH' }\n"

    collection = _sections().parse(text)

    assert collection is not None
    assert collection.entries[0].text.endswith("};")
