#!/usr/bin/env python3
# image_banner/styles.py
"""
Resolve banner markers into prompt_toolkit formatted text.

This is the preview path used by the CLI. Each ${AnsiColor.X} and
${AnsiBackground.X} token updates the current style; literal text is
emitted as (style, text) fragments that print_formatted_text understands.
"""

from __future__ import annotations

from typing import Dict, Optional

from prompt_toolkit import print_formatted_text
from prompt_toolkit.formatted_text import FormattedText
from prompt_toolkit.output import Output

from image_banner import markers

__all__ = ["ANSI_STYLE_NAMES", "marker_style", "resolve_markers", "print_banner"]

# Palette name -> prompt_toolkit ANSI color name.
ANSI_STYLE_NAMES: Dict[str, str] = {
    "BLACK": "ansiblack",
    "RED": "ansired",
    "GREEN": "ansigreen",
    "YELLOW": "ansiyellow",
    "BLUE": "ansiblue",
    "MAGENTA": "ansimagenta",
    "CYAN": "ansicyan",
    "WHITE": "ansigray",
    "BRIGHT_BLACK": "ansibrightblack",
    "BRIGHT_RED": "ansibrightred",
    "BRIGHT_GREEN": "ansibrightgreen",
    "BRIGHT_YELLOW": "ansibrightyellow",
    "BRIGHT_BLUE": "ansibrightblue",
    "BRIGHT_MAGENTA": "ansibrightmagenta",
    "BRIGHT_CYAN": "ansibrightcyan",
    "BRIGHT_WHITE": "ansiwhite",
}


def marker_style(fg_name: Optional[str], bg_name: Optional[str]) -> str:
    """Style string for the current foreground/background marker names."""
    parts = []
    if fg_name and fg_name in ANSI_STYLE_NAMES:
        parts.append(f"fg:{ANSI_STYLE_NAMES[fg_name]}")
    if bg_name and bg_name in ANSI_STYLE_NAMES:
        parts.append(f"bg:{ANSI_STYLE_NAMES[bg_name]}")
    return " ".join(parts)


def resolve_markers(text: str) -> FormattedText:
    fg_name: Optional[str] = None
    bg_name: Optional[str] = None
    frags = []
    for kind, value in markers.tokenize(text):
        if kind == "marker":
            namespace, name = value
            # DEFAULT (or an unknown name) resets that layer.
            resolved = name if name in ANSI_STYLE_NAMES else None
            if namespace == markers.FOREGROUND:
                fg_name = resolved
            else:
                bg_name = resolved
            continue
        style = marker_style(fg_name, bg_name)
        if frags and frags[-1][0] == style:
            frags[-1] = (style, frags[-1][1] + value)
        else:
            frags.append((style, value))
    return FormattedText(frags)


def print_banner(text: str, output: Optional[Output] = None) -> None:
    print_formatted_text(resolve_markers(text), end="", output=output)
