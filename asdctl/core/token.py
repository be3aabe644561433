"""Lexical classification of brightness arguments.

A brightness token is an optional ``+``/``-`` sign, a run of ASCII digits and
an optional trailing ``%``. Anything else is not a brightness token and the
command line treats it as a device path instead.
"""

from __future__ import annotations

import re

from asdctl.core.model import BrightnessToken, TokenKind

_TOKEN_RE = re.compile(r"([+-]?)([0-9]+)(%?)")


def parse_token(text: str) -> BrightnessToken | None:
    match = _TOKEN_RE.fullmatch(text)
    if match is None:
        return None

    sign, digits, percent = match.groups()
    return BrightnessToken(
        kind=TokenKind.RELATIVE if sign else TokenKind.ABSOLUTE,
        magnitude=int(digits),
        sign=-1 if sign == "-" else 1,
        is_percentage=bool(percent),
    )


def is_brightness_token(text: str) -> bool:
    return parse_token(text) is not None
