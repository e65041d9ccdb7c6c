"""Glob matching of fully qualified test names."""

from __future__ import annotations

from functools import lru_cache


def matches_pattern(name: str, pattern: str) -> bool:
    """Match ``name`` against ``pattern``.

    ``*`` matches any run of characters (including none) and ``?`` exactly one
    character. Every other character, ``[`` included, matches only itself.
    """
    return _match(name, pattern)


@lru_cache(maxsize=1024)
def _match(name: str, pattern: str) -> bool:
    name_index = pattern_index = 0
    star_index = -1
    resume_index = 0
    while name_index < len(name):
        if pattern_index < len(pattern) and pattern[pattern_index] == "*":
            star_index = pattern_index
            resume_index = name_index
            pattern_index += 1
        elif pattern_index < len(pattern) and pattern[pattern_index] in ("?", name[name_index]):
            name_index += 1
            pattern_index += 1
        elif star_index != -1:
            pattern_index = star_index + 1
            resume_index += 1
            name_index = resume_index
        else:
            return False
    while pattern_index < len(pattern) and pattern[pattern_index] == "*":
        pattern_index += 1
    return pattern_index == len(pattern)
