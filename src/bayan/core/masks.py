"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/masks.py
Shell-style filename masks ("*.jpg", "IMG_????.*") compiled to regular expressions.
"""

import re
from functools import lru_cache
from typing import Iterable, List, Pattern

_MATCH_ALL = re.compile(r"^.*$", re.DOTALL)


@lru_cache(maxsize=1024)
def wildcard_to_regex(mask: str) -> str:
    """
    Translate a wildcard mask into an anchored regular expression.

    Rules:
    - '*' matches any run of characters (including none)
    - '?' matches exactly one character
    - every other character is literal

    Examples:
        "*.txt"    → "^.*\\.txt$"
        "a?c"      → "^a.c$"
        "[1].log"  → "^\\[1\\]\\.log$"
    """
    parts = ["^"]
    for char in mask:
        if char == "*":
            parts.append(".*")
        elif char == "?":
            parts.append(".")
        else:
            parts.append(re.escape(char))
    parts.append("$")
    return "".join(parts)


def compile_masks(masks: Iterable[str]) -> List[Pattern]:
    """Compile masks case-insensitively. No masks means every name matches."""
    compiled = [
        re.compile(wildcard_to_regex(mask), re.IGNORECASE | re.DOTALL)
        for mask in masks if mask
    ]
    return compiled or [_MATCH_ALL]


def matches_any(name: str, patterns: List[Pattern]) -> bool:
    return any(pattern.match(name) for pattern in patterns)
