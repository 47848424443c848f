from __future__ import annotations

from fiddler.core.utils.merge import deep_merge, merge_arrays, merge_recursive


def test_deep_merge_nested_without_mutation() -> None:
    base = {"build": {"optimize": False, "dirs": ["vendor"]}, "x": 1}
    override = {"build": {"optimize": True}}

    merged = deep_merge(base, override)

    assert merged == {"build": {"optimize": True, "dirs": ["vendor"]}, "x": 1}
    assert base["build"]["optimize"] is False


def test_merge_arrays_prefixes() -> None:
    assert merge_arrays([1, 2], [3]) == [3]
    assert merge_arrays([1, 2], ["+", 3]) == [1, 2, 3]
    assert merge_arrays([1, 2], ["=", 3]) == [3]
    assert merge_arrays([1, 2], []) == []


def test_merge_recursive_collects_colliding_scalars() -> None:
    merged = merge_recursive({"psr-4": {"A\\": "src/"}}, {"psr-4": {"A\\": "tests/", "B\\": "b/"}})

    assert merged == {"psr-4": {"A\\": ["src/", "tests/"], "B\\": "b/"}}


def test_merge_recursive_concatenates_lists() -> None:
    merged = merge_recursive({"classmap": ["lib/"], "files": "a.php"}, {"classmap": ["stubs/"], "files": ["b.php"]})

    assert merged == {"classmap": ["lib/", "stubs/"], "files": ["a.php", "b.php"]}


def test_merge_recursive_does_not_mutate_inputs() -> None:
    base = {"psr-4": {"A\\": ["src/"]}}
    extra = {"psr-4": {"A\\": ["tests/"]}}

    merged = merge_recursive(base, extra)
    merged["psr-4"]["A\\"].append("other/")

    assert base == {"psr-4": {"A\\": ["src/"]}}
    assert extra == {"psr-4": {"A\\": ["tests/"]}}
