"""Inline capability string parser tests."""

from __future__ import annotations

import pytest
from side_runner.configuration.capability_strings import (
    CapabilityStringError,
    parse_capability_string,
)


def test_parses_simple_pairs() -> None:
    assert parse_capability_string("browserName=firefox platform=linux") == {
        "browserName": "firefox",
        "platform": "linux",
    }


def test_dotted_keys_build_nested_mappings() -> None:
    parsed = parse_capability_string(
        "goog:chromeOptions.args=[headless, disable-gpu] goog:chromeOptions.w3c=false"
    )

    assert parsed == {"goog:chromeOptions": {"args": ["headless", "disable-gpu"], "w3c": False}}


def test_converts_scalar_values() -> None:
    parsed = parse_capability_string("retries=3 ratio=0.5 enabled=true label='a b' note=\"x y\"")

    assert parsed == {"retries": 3, "ratio": 0.5, "enabled": True, "label": "a b", "note": "x y"}


def test_empty_string_parses_to_empty_mapping() -> None:
    assert parse_capability_string("   ") == {}


def test_rejects_text_without_assignment() -> None:
    with pytest.raises(CapabilityStringError):
        parse_capability_string("browserName=chrome headless")
