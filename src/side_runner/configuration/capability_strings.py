"""Parser for inline capability and param strings.

Accepts whitespace separated ``key=value`` pairs such as::

    browserName=firefox moz:firefoxOptions.args=[-headless] acceptInsecureCerts=true

Dotted keys build nested mappings. Values may be double or single quoted
strings, bracketed lists, booleans, integers, floats or bare words.
"""

from __future__ import annotations

import re
from typing import Any

_PAIR_PATTERN = re.compile(
    r"""(?P<key>[\w:.-]+)=(?P<value>"[^"]*"|'[^']*'|\[[^\]]*\]|[^\s"'\[\]]*)"""
)
_INTEGER_PATTERN = re.compile(r"^[+-]?\d+$")
_FLOAT_PATTERN = re.compile(r"^[+-]?(\d+\.\d*|\.\d+)([eE][+-]?\d+)?$")


class CapabilityStringError(ValueError):
    """Raised when an inline capability string cannot be parsed."""


def parse_capability_string(text: str) -> dict[str, Any]:
    """Parse ``key=value`` pairs into a nested mapping."""
    result: dict[str, Any] = {}
    position = 0
    for match in _PAIR_PATTERN.finditer(text):
        _ensure_only_whitespace(text[position : match.start()])
        position = match.end()
        _assign(result, match.group("key"), _parse_value(match.group("value")))
    _ensure_only_whitespace(text[position:])
    return result


def _ensure_only_whitespace(fragment: str) -> None:
    if fragment.strip():
        raise CapabilityStringError(f"Unexpected text in capability string: {fragment.strip()!r}")


def _assign(target: dict[str, Any], dotted_key: str, value: Any) -> None:
    parts = [part for part in dotted_key.split(".") if part]
    if not parts:
        raise CapabilityStringError(f"Invalid capability key: {dotted_key!r}")
    node = target
    for part in parts[:-1]:
        child = node.get(part)
        if not isinstance(child, dict):
            child = {}
            node[part] = child
        node = child
    node[parts[-1]] = value


def _parse_value(raw: str) -> Any:
    if len(raw) >= 2 and raw[0] == raw[-1] and raw[0] in {'"', "'"}:
        return raw[1:-1]
    if raw.startswith("[") and raw.endswith("]"):
        inner = raw[1:-1].strip()
        if not inner:
            return []
        return [_parse_scalar(item.strip()) for item in inner.split(",")]
    return _parse_scalar(raw)


def _parse_scalar(raw: str) -> Any:
    if len(raw) >= 2 and raw[0] == raw[-1] and raw[0] in {'"', "'"}:
        return raw[1:-1]
    if raw == "true":
        return True
    if raw == "false":
        return False
    if _INTEGER_PATTERN.match(raw):
        return int(raw)
    if _FLOAT_PATTERN.match(raw):
        return float(raw)
    return raw
