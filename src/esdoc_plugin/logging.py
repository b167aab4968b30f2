# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""User-facing logging helpers that tag every message with the plugin name."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Final

from rich.text import Text

from .console import detect_tty, get_console_manager

PLUGIN_NAME: Final[str] = "ESDocPlugin"

# Leading tokens emitted by ESDoc and the colour used to highlight them.
OUTPUT_PREFIX_STYLES: Final[Mapping[str, str]] = {
    "resolve": "cyan",
    "output": "blue",
    "parse": "green",
}


def plugin_prefix(use_color: bool | None = None) -> Text:
    """Return the ``ESDocPlugin:`` tag rendered ahead of each message.

    Args:
        use_color: Optional explicit colour flag overriding TTY detection.

    Returns:
        Text: Rich text fragment holding the styled tag and a trailing space.
    """

    color_enabled = detect_tty() if use_color is None else use_color
    prefix = Text(f"{PLUGIN_NAME}:", style="yellow" if color_enabled else "")
    prefix.append(" ")
    return prefix


def _print_line(msg: str, *, style: str | None, use_color: bool | None = None) -> None:
    """Render ``msg`` behind the plugin tag using shared styling helpers.

    Args:
        msg: Message text to print to the console.
        style: Rich style applied to the message body when colour is active.
        use_color: Optional explicit colour flag overriding TTY detection.
    """

    color_enabled = detect_tty() if use_color is None else use_color
    console = get_console_manager().get(color=color_enabled)
    text = plugin_prefix(color_enabled)
    body = Text(msg)
    if style and color_enabled:
        body.stylize(style)
    text.append_text(body)
    console.print(text)


def info(msg: str, *, use_color: bool | None = None) -> None:
    """Emit an informational message."""

    _print_line(msg, style=None, use_color=use_color)


def ok(msg: str, *, use_color: bool | None = None) -> None:
    """Emit a success message."""

    _print_line(msg, style="green", use_color=use_color)


def warn(msg: str, *, use_color: bool | None = None) -> None:
    """Emit a warning message."""

    _print_line(msg, style="yellow", use_color=use_color)


def fail(msg: str, *, use_color: bool | None = None) -> None:
    """Emit an error message."""

    _print_line(msg, style="red", use_color=use_color)


def format_output_line(line: str, *, use_color: bool | None = None) -> Text | None:
    """Return ``line`` from ESDoc's stdout with its leading token highlighted.

    Lines are split on the first ``:``. Recognised tokens (see
    :data:`OUTPUT_PREFIX_STYLES`) are coloured and the remainder is dimmed;
    unrecognised tokens pass through unstyled.

    Args:
        line: Raw line produced by the external process.
        use_color: Optional explicit colour flag overriding TTY detection.

    Returns:
        Text | None: Renderable line, or ``None`` when the line is blank.
    """

    stripped = line.rstrip("\r\n")
    if not stripped.strip():
        return None
    color_enabled = detect_tty() if use_color is None else use_color
    token, sep, rest = stripped.partition(":")
    if not sep:
        return Text(stripped)
    token_style = OUTPUT_PREFIX_STYLES.get(token) if color_enabled else None
    text = Text()
    text.append(token, style=token_style)
    text.append(":")
    text.append(rest, style="dim" if color_enabled else None)
    return text


def relay_output(line: str, *, use_color: bool | None = None) -> None:
    """Print a single line of ESDoc output when it carries content."""

    rendered = format_output_line(line, use_color=use_color)
    if rendered is None:
        return
    color_enabled = detect_tty() if use_color is None else use_color
    get_console_manager().get(color=color_enabled).print(rendered)


__all__ = [
    "OUTPUT_PREFIX_STYLES",
    "PLUGIN_NAME",
    "fail",
    "format_output_line",
    "info",
    "ok",
    "plugin_prefix",
    "relay_output",
    "warn",
]
