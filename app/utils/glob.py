"""Glob-to-regex translation for cache key listing.

Only ``*`` is a wildcard. Every other character, including ``?``, ``[`` and
regex metacharacters, matches itself. Runs of ``*`` are collapsed so a
pattern like ``a****b`` cannot produce a backtracking-heavy expression.
"""

from __future__ import annotations

import re
from functools import lru_cache


@lru_cache(maxsize=256)
def glob_to_regex(pattern: str) -> re.Pattern[str]:
    """Compile a ``*``-only glob into an anchored regular expression.

    Args:
        pattern: Glob such as ``"profile:*"``.

    Returns:
        Compiled pattern; use ``fullmatch`` semantics (it is anchored).

    Examples:
        >>> bool(glob_to_regex("profile:*").match("profile:1"))
        True
        >>> bool(glob_to_regex("a.b").match("axb"))
        False
    """

    literals = re.split(r"\*+", pattern)
    body = ".*".join(re.escape(part) for part in literals)
    return re.compile(rf"\A{body}\Z", re.DOTALL)


def filter_keys(keys: list[str], pattern: str) -> list[str]:
    """Return the keys matching ``pattern`` in their original order."""

    regex = glob_to_regex(pattern)
    return [key for key in keys if regex.match(key)]
