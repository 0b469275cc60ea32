from __future__ import annotations

import pytest

from newsletter_curator.processing.parsing import parse_json_array, strip_code_fences


def test_strip_code_fences() -> None:
    assert strip_code_fences('```json\n[{"a": 1}]\n```') == '[{"a": 1}]'


@pytest.mark.parametrize(
    "text, expected",
    [
        ('[{"headline": "A"}]', [{"headline": "A"}]),
        ('```json\n[{"headline": "A"}]\n```', [{"headline": "A"}]),
        ('Here you go:\n[{"headline": "A"},]\nThanks', [{"headline": "A"}]),
        ('{"headline": "A", "entities": ["X"]}', [{"headline": "A", "entities": ["X"]}]),
        ('Sure! {"headline": "A", "entities": ["X"]} done', [{"headline": "A", "entities": ["X"]}]),
        ('{"stories": [{"headline": "A"}, {"headline": "B"}]}', [{"headline": "A"}, {"headline": "B"}]),
        ('[{"headline": "has ] bracket"}]', [{"headline": "has ] bracket"}]),
    ],
)
def test_parse_json_array_repairs(text: str, expected: list) -> None:
    assert parse_json_array(text) == expected


@pytest.mark.parametrize("text", ["", "   ", "no json here", '[{"headline": ', "42"])
def test_parse_json_array_rejects(text: str) -> None:
    assert parse_json_array(text) is None


def test_parse_json_array_rejects_pathologically_deep_nesting() -> None:
    deep = "[" * 200000 + "]" * 200000
    assert parse_json_array(deep) is None
