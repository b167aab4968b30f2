# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Persist the effective configuration for ESDoc and clean it up afterwards."""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Final

from .errors import TransientConfigError
from .logging import info
from .options import ConfigValue

TMP_SUFFIX: Final[str] = ".tmp"


def transient_path(config_path: Path) -> Path:
    """Return where the transient copy of ``config_path`` is written.

    Args:
        config_path: Location of the ESDoc configuration file.

    Returns:
        Path: ``config_path`` with ``.tmp`` appended, or ``config_path`` itself
        when its name already ends in ``.tmp``.
    """

    if config_path.name.endswith(TMP_SUFFIX):
        return config_path
    return config_path.with_name(config_path.name + TMP_SUFFIX)


def serialize_config(config: Mapping[str, ConfigValue]) -> str:
    """Return a stable, diff-friendly JSON encoding of ``config``."""

    return json.dumps(config, indent=2, sort_keys=True, ensure_ascii=False) + "\n"


@dataclass(frozen=True, slots=True)
class TransientConfigFile:
    """Transient configuration file owned by a single build cycle."""

    path: Path

    @classmethod
    def for_config(cls, config_path: Path) -> TransientConfigFile:
        """Return the transient file that shadows ``config_path``."""

        return cls(path=transient_path(config_path))

    def write(self, config: Mapping[str, ConfigValue]) -> Path:
        """Serialise ``config`` to :attr:`path`, replacing any earlier copy.

        Args:
            config: Effective configuration to persist.

        Returns:
            Path: The written location.

        Raises:
            TransientConfigError: If the file cannot be written.
        """

        info(f"Writing temporary file at: {self.path}")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(serialize_config(config), encoding="utf-8")
        except OSError as exc:
            raise TransientConfigError(self.path, str(exc)) from exc
        return self.path

    def remove(self, *, preserve: bool) -> bool:
        """Delete :attr:`path` unless ``preserve`` is requested.

        Args:
            preserve: When ``True`` the file is kept for inspection.

        Returns:
            bool: ``True`` when a file was deleted.

        Raises:
            TransientConfigError: If an existing file cannot be deleted.
        """

        if preserve:
            return False
        info("Removing temporary esdoc config file...")
        try:
            self.path.unlink()
        except (FileNotFoundError, NotADirectoryError):
            return False
        except OSError as exc:
            raise TransientConfigError(self.path, str(exc)) from exc
        return True


__all__ = ["TMP_SUFFIX", "TransientConfigFile", "serialize_config", "transient_path"]
