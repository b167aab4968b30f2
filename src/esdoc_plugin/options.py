# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Plugin option models and the configuration merge rules built on them."""

from __future__ import annotations

import copy
from collections.abc import Mapping
from typing import Final, TypeAlias

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictStr, ValidationError

from .errors import OptionsValidationError

ConfigPrimitive: TypeAlias = str | int | float | bool | None
ConfigValue: TypeAlias = ConfigPrimitive | list["ConfigValue"] | dict[str, "ConfigValue"]
ConfigFragment: TypeAlias = Mapping[str, ConfigValue]

DEFAULT_CONF: Final[str] = ".esdoc.json"
DEFAULT_CWD: Final[str] = "./"

# Keys understood by the plugin itself, in their camelCase wire spelling.
CONF_KEY: Final[str] = "conf"
CWD_KEY: Final[str] = "cwd"
PRESERVE_TMP_FILE_KEY: Final[str] = "preserveTmpFile"
SHOW_OUTPUT_KEY: Final[str] = "showOutput"
FAIL_ON_STDERR_KEY: Final[str] = "failOnStderr"

SOURCE_KEY: Final[str] = "source"
INCLUDES_KEY: Final[str] = "includes"

_TOOL_DEFAULTS: Final[dict[str, ConfigValue]] = {
    SOURCE_KEY: "./src",
    "destination": "./docs",
    "excludes": ["\\.config\\.js", "\\.babel\\.js"],
    "plugins": [{"name": "esdoc-standard-plugin"}],
}


def tool_defaults() -> dict[str, ConfigValue]:
    """Return a fresh copy of the ESDoc option defaults.

    Returns:
        dict[str, ConfigValue]: Defaults safe for the caller to mutate.
    """

    return copy.deepcopy(_TOOL_DEFAULTS)


class PluginOptions(BaseModel):
    """Options supplied when the plugin is constructed.

    The recognised keys are validated strictly; any other key is kept
    verbatim and forwarded to ESDoc through the effective configuration.
    """

    model_config = ConfigDict(extra="allow", frozen=True, populate_by_name=True)

    conf: StrictStr = DEFAULT_CONF
    cwd: StrictStr = DEFAULT_CWD
    preserve_tmp_file: StrictBool = Field(default=True, alias=PRESERVE_TMP_FILE_KEY)
    show_output: StrictBool = Field(default=False, alias=SHOW_OUTPUT_KEY)
    fail_on_stderr: StrictBool = Field(default=True, alias=FAIL_ON_STDERR_KEY)

    def plugin_fields(self) -> dict[str, ConfigValue]:
        """Return the recognised options keyed by their camelCase names."""

        return {
            CONF_KEY: self.conf,
            CWD_KEY: self.cwd,
            PRESERVE_TMP_FILE_KEY: self.preserve_tmp_file,
            SHOW_OUTPUT_KEY: self.show_output,
            FAIL_ON_STDERR_KEY: self.fail_on_stderr,
        }

    def passthrough(self) -> dict[str, ConfigValue]:
        """Return the pass-through keys the caller supplied explicitly."""

        return copy.deepcopy(dict(self.model_extra or {}))

    def explicit_config(self) -> dict[str, ConfigValue]:
        """Return the layer that overrides any discovered configuration.

        Returns:
            dict[str, ConfigValue]: Recognised options plus explicit pass-through keys.
        """

        return merge_config(self.plugin_fields(), self.passthrough())

    def resolved(self) -> dict[str, ConfigValue]:
        """Return the options merged over the ESDoc defaults.

        Returns:
            dict[str, ConfigValue]: Defaults overridden field-by-field by the options.
        """

        return merge_config(tool_defaults(), self.explicit_config())


def load_options(options: PluginOptions | Mapping[str, object] | None = None) -> PluginOptions:
    """Validate raw constructor ``options`` into a :class:`PluginOptions`.

    Args:
        options: Mapping supplied by the caller, an existing model, or ``None``.

    Returns:
        PluginOptions: Validated, immutable options.

    Raises:
        OptionsValidationError: If a recognised option has the wrong type or
            ``options`` is not a mapping.
    """

    if isinstance(options, PluginOptions):
        return options
    if options is None:
        return PluginOptions()
    if not isinstance(options, Mapping):
        raise OptionsValidationError([f"options must be a mapping, got {type(options).__name__}"])
    try:
        return PluginOptions.model_validate(dict(options))
    except ValidationError as exc:
        problems = [
            f"{'.'.join(str(part) for part in error['loc']) or '<root>'}: {error['msg']}" for error in exc.errors()
        ]
        raise OptionsValidationError(problems) from exc


def merge_config(base: ConfigFragment, overrides: ConfigFragment) -> dict[str, ConfigValue]:
    """Return ``base`` shallow-merged with ``overrides``.

    Every key in ``overrides`` replaces the value held by ``base``; nested
    lists and mappings are replaced wholesale rather than merged. Neither
    input is mutated.

    Args:
        base: Lower-precedence configuration.
        overrides: Higher-precedence configuration.

    Returns:
        dict[str, ConfigValue]: New mapping holding the merged keys.
    """

    merged = dict(base)
    merged.update(overrides)
    return merged


def build_effective_config(discovered: ConfigFragment, options: PluginOptions) -> dict[str, ConfigValue]:
    """Return the configuration handed to ESDoc.

    Layers, lowest precedence first: ESDoc defaults, the discovered (file or
    inferred) configuration, then the options given at construction time.

    Args:
        discovered: Configuration read from disk or inferred from the build.
        options: Validated plugin options.

    Returns:
        dict[str, ConfigValue]: Effective configuration.
    """

    return merge_config(merge_config(tool_defaults(), discovered), options.explicit_config())


def is_usable_config(candidate: ConfigFragment | None) -> bool:
    """Return whether ``candidate`` carries both ``source`` and ``includes``.

    ``source`` must be set to a non-empty value. ``includes`` only has to be
    present, so an explicit empty list still counts.
    """

    if not candidate:
        return False
    source = candidate.get(SOURCE_KEY)
    has_source = isinstance(source, (list, dict)) or bool(source)
    return has_source and candidate.get(INCLUDES_KEY) is not None


__all__ = [
    "CONF_KEY",
    "CWD_KEY",
    "ConfigFragment",
    "ConfigValue",
    "DEFAULT_CONF",
    "DEFAULT_CWD",
    "FAIL_ON_STDERR_KEY",
    "INCLUDES_KEY",
    "PRESERVE_TMP_FILE_KEY",
    "PluginOptions",
    "SHOW_OUTPUT_KEY",
    "SOURCE_KEY",
    "build_effective_config",
    "is_usable_config",
    "load_options",
    "merge_config",
    "tool_defaults",
]
