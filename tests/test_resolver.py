# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for configuration discovery and inference."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from esdoc_plugin.errors import ConfigInferenceError, ConfigParseError
from esdoc_plugin.options import load_options
from esdoc_plugin.resolver import ConfigOrigin, infer_config, read_config_file, resolve_config

DEPENDENCIES = [
    "/proj/node_modules/x/index.js",
    "/proj/src/index.js",
    "/proj/src/sub/index.js",
]


def test_read_config_file_missing_returns_none(tmp_path: Path) -> None:
    assert read_config_file(tmp_path / ".esdoc.json") is None


def test_read_config_file_invalid_json_raises(tmp_path: Path) -> None:
    path = tmp_path / ".esdoc.json"
    path.write_text("{ not json", encoding="utf-8")

    with pytest.raises(ConfigParseError) as excinfo:
        read_config_file(path)

    assert excinfo.value.path == path


def test_read_config_file_rejects_non_object(tmp_path: Path) -> None:
    path = tmp_path / ".esdoc.json"
    path.write_text("[1, 2]", encoding="utf-8")

    with pytest.raises(ConfigParseError, match="JSON object"):
        read_config_file(path)


def test_authoritative_file_merged_under_options(tmp_path: Path) -> None:
    path = tmp_path / ".esdoc.json"
    path.write_text(json.dumps({"source": "a", "includes": ["x"], "destination": "d1"}), encoding="utf-8")

    resolved = resolve_config(path, load_options({"destination": "d2"}), DEPENDENCIES)

    assert resolved.origin is ConfigOrigin.FILE
    assert resolved.effective["source"] == "a"
    assert resolved.effective["includes"] == ["x"]
    assert resolved.effective["destination"] == "d2"


def test_missing_file_infers_source_from_dependencies(tmp_path: Path) -> None:
    resolved = resolve_config(tmp_path / ".esdoc.json", load_options({"destination": "./docs"}), DEPENDENCIES)

    assert resolved.origin is ConfigOrigin.INFERRED
    assert resolved.effective["source"] == "/proj/src"
    assert resolved.effective["destination"] == "./docs"
    assert resolved.entry_points == ("/proj/src/index.js", "/proj/src/sub/index.js")


def test_file_without_includes_falls_back_to_inference(tmp_path: Path) -> None:
    path = tmp_path / ".esdoc.json"
    path.write_text(json.dumps({"source": "./lib", "title": "Docs"}), encoding="utf-8")

    resolved = resolve_config(path, load_options({}), DEPENDENCIES)

    assert resolved.origin is ConfigOrigin.INFERRED
    assert resolved.effective["source"] == "/proj/src"
    assert resolved.effective["title"] == "Docs"


def test_file_with_empty_includes_is_authoritative(tmp_path: Path) -> None:
    path = tmp_path / ".esdoc.json"
    path.write_text(json.dumps({"source": "./lib", "includes": []}), encoding="utf-8")

    resolved = resolve_config(path, load_options({}), DEPENDENCIES)

    assert resolved.origin is ConfigOrigin.FILE
    assert resolved.effective["source"] == "./lib"
    assert resolved.effective["includes"] == []


def test_parse_failure_does_not_fall_back(tmp_path: Path) -> None:
    path = tmp_path / ".esdoc.json"
    path.write_text("{", encoding="utf-8")

    with pytest.raises(ConfigParseError):
        resolve_config(path, load_options({}), DEPENDENCIES)


def test_empty_entry_points_raise_inference_error(tmp_path: Path) -> None:
    with pytest.raises(ConfigInferenceError):
        resolve_config(tmp_path / ".esdoc.json", load_options({}), ["/proj/node_modules/a/index.js"])


def test_infer_config_returns_source_and_entry_points() -> None:
    inferred, entry_points = infer_config(DEPENDENCIES)
    assert inferred == {"source": "/proj/src"}
    assert entry_points == ("/proj/src/index.js", "/proj/src/sub/index.js")


def test_explicit_source_option_wins_over_inference(tmp_path: Path) -> None:
    resolved = resolve_config(tmp_path / ".esdoc.json", load_options({"source": "./explicit"}), DEPENDENCIES)
    assert resolved.effective["source"] == "./explicit"
