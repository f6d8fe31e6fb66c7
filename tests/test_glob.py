"""Unit tests for the ``*``-only glob matcher used by cache key listing."""

import pytest

from app.utils.glob import filter_keys, glob_to_regex


@pytest.mark.parametrize(
    ("pattern", "key", "expected"),
    [
        ("profile:*", "profile:123", True),
        ("profile:*", "games:123", False),
        ("profile:*", "xprofile:123", False),
        ("*", "", True),
        ("*:123", "games:123", True),
        ("inventory:*:730:*", "inventory:1:730:2", True),
        ("inventory:*:730:*", "inventory:1:440:2", False),
        ("a.b", "axb", False),
        ("a?b", "axb", False),
        ("a?b", "a?b", True),
        ("[ab]", "a", False),
        ("[ab]", "[ab]", True),
    ],
)
def test_glob_matches_only_star_wildcards(pattern: str, key: str, expected: bool) -> None:
    assert bool(glob_to_regex(pattern).match(key)) is expected


def test_glob_is_anchored_on_both_ends() -> None:
    regex = glob_to_regex("games:1")

    assert regex.match("games:1")
    assert not regex.match("games:12")
    assert not regex.match("xgames:1")


def test_runs_of_stars_are_collapsed() -> None:
    assert glob_to_regex("a****b").pattern == glob_to_regex("a*b").pattern


def test_star_matches_newlines() -> None:
    assert glob_to_regex("k:*").match("k:line1\nline2")


def test_filter_keys_preserves_order() -> None:
    keys = ["profile:2", "games:1", "profile:1", "profile:3"]

    assert filter_keys(keys, "profile:*") == ["profile:2", "profile:1", "profile:3"]
