"""Tests for change set filtering."""

from __future__ import annotations

import re

import pytest

from stylegate.config import DEFAULT_FILE_EXTENSIONS, compile_patterns
from stylegate.selector import is_ignored, select_files


def test_keeps_configured_extensions_in_input_order() -> None:
    changes = ["b/Foo.mm", "README.md", "a/Bar.h", "Baz.m", "x.c"]

    assert select_files(changes, DEFAULT_FILE_EXTENSIONS) == ["b/Foo.mm", "a/Bar.h", "Baz.m"]


def test_swift_file_is_not_selected_by_default() -> None:
    assert select_files(["Bar.swift"], DEFAULT_FILE_EXTENSIONS) == []


@pytest.mark.parametrize(
    ("changes", "extensions"),
    [
        ([], DEFAULT_FILE_EXTENSIONS),
        (["Foo.m", "Bar.h"], ()),
        ([], ()),
    ],
)
def test_empty_inputs_yield_empty_selection(changes: list[str], extensions: tuple[str, ...]) -> None:
    assert select_files(changes, extensions) == []


def test_extension_match_is_case_sensitive_suffix() -> None:
    changes = ["Foo.M", "Foo.H", "foo.m", "foo.mmx", "foo.m.orig"]

    assert select_files(changes, (".m",)) == ["foo.m"]


def test_configured_extensions_drive_selection_not_objc_substring() -> None:
    """Regression guard: paths merely containing ".m" must not be picked up.

    An older filter matched any path containing ".m" or ".mm", which selected
    files such as README.md and skipped .h headers entirely.
    """
    changes = ["README.md", "docs/setup.markdown", "Foo.h", "src/app.py"]

    assert select_files(changes, DEFAULT_FILE_EXTENSIONS) == ["Foo.h"]
    assert select_files(changes, (".py",)) == ["src/app.py"]


def test_ignore_patterns_exclude_any_match() -> None:
    patterns = compile_patterns([r"^Pods/", r"Generated"])
    changes = ["Pods/AFNetworking/AF.m", "App/Generated/Model.h", "App/View.m", "App/Pods/Local.m"]

    assert select_files(changes, DEFAULT_FILE_EXTENSIONS, patterns) == ["App/View.m", "App/Pods/Local.m"]


def test_is_ignored_uses_search_semantics() -> None:
    patterns = (re.compile(r"vendor"),)

    assert is_ignored("third_party/vendor/x.m", patterns)
    assert not is_ignored("src/x.m", patterns)
    assert not is_ignored("src/x.m", ())


def test_every_path_is_either_selected_or_fails_a_condition() -> None:
    extensions = (".h", ".m", ".py")
    patterns = compile_patterns([r"^build/", r"_pb2\.py$"])
    changes = [
        "build/out.m",
        "proto/msg_pb2.py",
        "proto/msg.py",
        "lib/a.h",
        "lib/a.hpp",
        "Makefile",
        "lib/b.m",
    ]

    selected = select_files(changes, extensions, patterns)

    for path in changes:
        keep = path.endswith(extensions) and not any(p.search(path) for p in patterns)
        assert (path in selected) == keep
    assert selected == ["proto/msg.py", "lib/a.h", "lib/b.m"]


def test_duplicate_paths_are_kept() -> None:
    assert select_files(["a.m", "a.m"], (".m",)) == ["a.m", "a.m"]
