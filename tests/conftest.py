# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

import json
import stat
import sys
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

import pytest

from esdoc_plugin.plugin import PluginEnvironment

_SCRIPT_TEMPLATE = """#!{python}
import json
import pathlib
import sys
import time

args = sys.argv[1:]
config = json.loads(pathlib.Path(args[1]).read_text(encoding="utf-8"))
record = {{"argv": args, "cwd": str(pathlib.Path.cwd()), "config": config}}
pathlib.Path({record!r}).write_text(json.dumps(record), encoding="utf-8")
sys.stdout.write({stdout!r})
sys.stdout.flush()
sys.stderr.write({stderr!r})
sys.stderr.flush()
time.sleep({sleep!r})
sys.exit({code!r})
"""


@dataclass(slots=True)
class FakeProject:
    """Project tree holding a scripted stand-in for the ESDoc executable."""

    root: Path
    executable: Path
    record: Path
    install_dir: Path

    def environment(self, platform: str = "linux") -> PluginEnvironment:
        return PluginEnvironment(process_cwd=self.root, platform=platform, install_dir=self.install_dir)

    def recorded(self) -> dict[str, object]:
        return json.loads(self.record.read_text(encoding="utf-8"))

    def write_config(self, payload: object, name: str = ".esdoc.json") -> Path:
        path = self.root / name
        path.write_text(json.dumps(payload), encoding="utf-8")
        return path


@pytest.fixture
def make_project(tmp_path: Path) -> Callable[..., FakeProject]:
    """Return a factory building projects with a fake ``node_modules/.bin/esdoc``."""

    def _factory(
        *,
        stdout: str = "",
        stderr: str = "",
        code: int = 0,
        sleep: float = 0.0,
        install: bool = True,
    ) -> FakeProject:
        root = tmp_path / "proj"
        root.mkdir(exist_ok=True)
        install_dir = tmp_path / "install"
        install_dir.mkdir(exist_ok=True)
        executable = root / "node_modules" / ".bin" / "esdoc"
        record = tmp_path / "record.json"
        if install:
            executable.parent.mkdir(parents=True, exist_ok=True)
            executable.write_text(
                _SCRIPT_TEMPLATE.format(
                    python=sys.executable,
                    record=str(record),
                    stdout=stdout,
                    stderr=stderr,
                    sleep=sleep,
                    code=code,
                ),
                encoding="utf-8",
            )
            executable.chmod(executable.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return FakeProject(root=root, executable=executable, record=record, install_dir=install_dir)

    return _factory
