#!/usr/bin/env python3
# image_banner/markers.py
"""
Placeholder tokens embedded in banner text.

Foreground: ${AnsiColor.NAME}; background: ${AnsiBackground.NAME}.
They are resolved by whatever prints the banner, never here.
"""

from __future__ import annotations

import re
from typing import Iterator, Tuple, Union

__all__ = [
    "FOREGROUND",
    "BACKGROUND",
    "DEFAULT",
    "DARK_BACKGROUND",
    "fg",
    "bg",
    "MARKER_RE",
    "tokenize",
]

FOREGROUND = "AnsiColor"
BACKGROUND = "AnsiBackground"
DEFAULT = "DEFAULT"
DARK_BACKGROUND = "BLACK"

MARKER_RE = re.compile(r"\$\{(AnsiColor|AnsiBackground)\.([A-Z_]+)\}")

# ("text", str) or ("marker", (namespace, name))
Token = Tuple[str, Union[str, Tuple[str, str]]]


def fg(name: str) -> str:
    return "${%s.%s}" % (FOREGROUND, name)


def bg(name: str) -> str:
    return "${%s.%s}" % (BACKGROUND, name)


def tokenize(text: str) -> Iterator[Token]:
    """Split banner text into literal text and marker tokens."""
    pos = 0
    for m in MARKER_RE.finditer(text):
        if m.start() > pos:
            yield ("text", text[pos:m.start()])
        yield ("marker", (m.group(1), m.group(2)))
        pos = m.end()
    if pos < len(text):
        yield ("text", text[pos:])
