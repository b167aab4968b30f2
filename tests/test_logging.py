# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for console formatting helpers."""

from __future__ import annotations

import pytest
from rich.text import Text

from esdoc_plugin.logging import format_output_line, plugin_prefix


def _styles(text: Text) -> list[str]:
    return [str(span.style) for span in text.spans]


def test_prefix_names_the_plugin() -> None:
    assert plugin_prefix(use_color=False).plain == "ESDocPlugin: "


@pytest.mark.parametrize(
    ("token", "style"),
    [("resolve", "cyan"), ("output", "blue"), ("parse", "green")],
)
def test_recognised_tokens_are_highlighted(token: str, style: str) -> None:
    rendered = format_output_line(f"{token}: ./src/index.js", use_color=True)
    assert rendered is not None
    assert rendered.plain == f"{token}: ./src/index.js"
    assert style in _styles(rendered)


def test_unrecognised_tokens_pass_through() -> None:
    rendered = format_output_line("warning: something", use_color=True)
    assert rendered is not None
    assert rendered.plain == "warning: something"
    assert "cyan" not in _styles(rendered)


def test_plain_and_blank_lines() -> None:
    assert format_output_line("", use_color=True) is None
    assert format_output_line("   \n", use_color=True) is None
    rendered = format_output_line("no separator here\n", use_color=False)
    assert rendered is not None
    assert rendered.plain == "no separator here"
