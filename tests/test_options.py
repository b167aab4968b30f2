# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for plugin option validation and merge precedence."""

from __future__ import annotations

import pytest

from esdoc_plugin.errors import OptionsValidationError
from esdoc_plugin.options import (
    PluginOptions,
    build_effective_config,
    is_usable_config,
    load_options,
    merge_config,
    tool_defaults,
)


def test_defaults_applied_when_no_options() -> None:
    options = load_options(None)
    assert options.conf == ".esdoc.json"
    assert options.cwd == "./"
    assert options.preserve_tmp_file is True
    assert options.show_output is False
    assert options.fail_on_stderr is True

    resolved = options.resolved()
    assert resolved["source"] == "./src"
    assert resolved["destination"] == "./docs"
    assert resolved["plugins"] == [{"name": "esdoc-standard-plugin"}]
    assert resolved["preserveTmpFile"] is True


def test_camel_and_snake_case_keys_are_accepted() -> None:
    camel = load_options({"preserveTmpFile": False, "showOutput": True})
    snake = load_options({"preserve_tmp_file": False, "show_output": True})
    assert camel.preserve_tmp_file is snake.preserve_tmp_file is False
    assert camel.show_output is snake.show_output is True


@pytest.mark.parametrize(
    "raw",
    [
        {"conf": 12},
        {"cwd": ["./"]},
        {"preserveTmpFile": "yes"},
        {"showOutput": 1},
        {"failOnStderr": "false"},
    ],
)
def test_wrong_types_fail_validation(raw: dict[str, object]) -> None:
    with pytest.raises(OptionsValidationError) as excinfo:
        load_options(raw)
    assert excinfo.value.problems


def test_non_mapping_options_rejected() -> None:
    with pytest.raises(OptionsValidationError):
        load_options(["conf"])  # type: ignore[arg-type]


def test_passthrough_keys_kept_verbatim() -> None:
    options = load_options({"destination": "./out", "plugins": [{"name": "custom"}], "lint": False})
    assert options.passthrough() == {"destination": "./out", "plugins": [{"name": "custom"}], "lint": False}


def test_explicit_model_instance_is_reused() -> None:
    options = PluginOptions(conf="custom.json")
    assert load_options(options) is options


def test_merge_is_shallow_and_pure() -> None:
    base = {"plugins": [{"name": "a", "option": {"x": 1}}], "source": "./src"}
    overrides = {"plugins": [{"name": "b"}]}

    merged = merge_config(base, overrides)

    assert merged == {"plugins": [{"name": "b"}], "source": "./src"}
    assert base["plugins"] == [{"name": "a", "option": {"x": 1}}]


def test_instance_options_override_file_fields() -> None:
    discovered = {"source": "a", "includes": ["x"], "destination": "d1"}
    options = load_options({"destination": "d2"})

    effective = build_effective_config(discovered, options)

    assert effective["destination"] == "d2"
    assert effective["source"] == "a"
    assert effective["includes"] == ["x"]


def test_discovered_fields_override_tool_defaults() -> None:
    effective = build_effective_config({"source": "/proj/src"}, load_options({}))
    assert effective["source"] == "/proj/src"
    assert effective["excludes"] == tool_defaults()["excludes"]


def test_merging_effective_config_with_itself_is_identity() -> None:
    effective = build_effective_config({"source": "a", "includes": ["x"]}, load_options({"destination": "d"}))
    assert merge_config(effective, effective) == effective


def test_tool_defaults_are_independent_copies() -> None:
    first = tool_defaults()
    first["excludes"].append("extra")  # type: ignore[union-attr]
    assert "extra" not in tool_defaults()["excludes"]  # type: ignore[operator]


@pytest.mark.parametrize(
    ("candidate", "usable"),
    [
        (None, False),
        ({}, False),
        ({"source": "./src"}, False),
        ({"includes": ["x"]}, False),
        ({"source": "./src", "includes": ["\\.js$"]}, True),
        ({"source": "./src", "includes": []}, True),
        ({"source": "", "includes": ["x"]}, False),
        ({"source": "./src", "includes": None}, False),
    ],
)
def test_usable_config_requires_source_and_includes(candidate: dict[str, object] | None, usable: bool) -> None:
    assert is_usable_config(candidate) is usable
