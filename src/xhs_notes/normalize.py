from __future__ import annotations

import re
from typing import Final

# Emoji and other characters outside the Basic Multilingual Plane.
_ASTRAL_CHARS: Final = re.compile("[\U00010000-\U0010FFFF]")

_PUNCT_RUN: Final = re.compile(r"([。！？，、；：])+")

_HORIZONTAL_WS: Final = re.compile(r"[^\S\n]+")

_BLANK_LINE_RUN: Final = re.compile(r"\n(?:[^\S\n]*\n){2,}")


def normalize_text(text: str) -> str:
    """Clean extracted page text deterministically.

    Rules, in order:
    - Drop astral-plane characters (emoji).
    - Collapse runs of CJK sentence punctuation to one character.
    - Collapse horizontal whitespace runs to one space.
    - Collapse three or more line breaks to exactly two.
    - Trim.

    Punctuation is collapsed before whitespace so that deduplicated
    punctuation never leaves stray spaces behind. The result is stable:
    normalizing twice gives the same string.
    """

    text = _ASTRAL_CHARS.sub("", text)
    text = _PUNCT_RUN.sub(r"\1", text)
    text = _HORIZONTAL_WS.sub(" ", text)
    text = _BLANK_LINE_RUN.sub("\n\n", text)
    return text.strip()
