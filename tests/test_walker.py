"""Tests for TreeWalker: classification of paths, ignore rules, depth and git lookup."""
from __future__ import annotations

import os
from pathlib import Path
from unittest.mock import Mock

import pytest

from dirscout.errors import GitConfigError, WalkError
from dirscout.git import locate_git
from dirscout.models import GitInfo
from dirscout.walker import TreeWalker, examine


class TestRepoScenario:
    def test_gitignore_and_git_url(self, repo_tree: Path):
        findings = examine(repo_tree, max_depth=2)

        assert findings.regular_files == ["a.py"]
        assert findings.git is not None
        assert findings.git.url == "https://github.com/acme/widgets"
        assert {".gitignore", "sub", "sub/b.md", ".git", ".git/config", ".git/HEAD"} <= set(findings.ignored_files)

    def test_hidden_allowed_keeps_gitignore(self, repo_tree: Path):
        findings = examine(repo_tree, respect_hidden_files=False, max_depth=2)
        assert sorted(findings.regular_files) == [".gitignore", "a.py"]
        assert "sub/b.md" in findings.ignored_files

    def test_ignore_files_disabled(self, repo_tree: Path):
        findings = examine(repo_tree, respect_ignore_files=False, max_depth=2)
        assert sorted(findings.regular_files) == ["a.py", "sub", "sub/b.md"]
        assert ".gitignore" in findings.ignored_files

    def test_everything_visible_exactly_once(self, repo_tree: Path):
        findings = examine(repo_tree, respect_ignore_files=False, respect_hidden_files=False, max_depth=2)
        everything = findings.regular_files + findings.ignored_files
        assert len(everything) == len(set(everything))
        assert sorted(everything) == [".git", ".git/HEAD", ".git/config", ".gitignore", "a.py", "sub", "sub/b.md"]
        assert sorted(findings.regular_files) == [".gitignore", "a.py", "sub", "sub/b.md"]

    def test_no_path_in_both_lists(self, repo_tree: Path):
        findings = examine(repo_tree, max_depth=2)
        assert not set(findings.regular_files) & set(findings.ignored_files)

    def test_metadata_recorded(self, repo_tree: Path):
        findings = examine(repo_tree, max_depth=2)
        assert findings.info_map["a.py"].size == len("print('hello')\n")
        assert findings.info_map["sub"].is_dir
        assert not findings.info_map["a.py"].is_dir


class TestDepth:
    def test_default_depth_lists_top_level_only(self, make_tree):
        root = make_tree({"a.py": "x\n", "d/x.py": "y\n"})
        findings = examine(root)
        assert sorted(findings.regular_files) == ["a.py", "d"]
        assert "d/x.py" not in findings.info_map

    def test_depth_boundary(self, make_tree):
        root = make_tree({"d1/d2/d3/f.txt": "x\n"})
        findings = examine(root, max_depth=2)
        assert sorted(findings.regular_files) == ["d1", "d1/d2"]

    def test_zero_depth_records_nothing(self, make_tree):
        root = make_tree({"a.py": "x\n"})
        findings = examine(root, max_depth=0)
        assert findings.regular_files == []
        assert findings.ignored_files == []


class TestIgnoredByName:
    @pytest.mark.parametrize("name", ["vendor", "Vendor", "VENDOR"])
    def test_vendor_always_ignored(self, make_tree, name: str):
        root = make_tree({f"{name}/lib.go": "package lib\n", "main.go": "package main\n"})
        findings = examine(root, respect_ignore_files=False, respect_hidden_files=False, max_depth=2)
        assert sorted(findings.ignored_files) == sorted([name, f"{name}/lib.go"])
        assert findings.regular_files == ["main.go"]

    def test_hidden_subpath_skipped(self, make_tree):
        root = make_tree({"sub/.hidden": "x", "sub/seen.txt": "y"})
        findings = examine(root, max_depth=2)
        assert "sub/.hidden" not in findings.regular_files
        assert "sub/.hidden" not in findings.ignored_files
        assert "sub/seen.txt" in findings.regular_files

    def test_hidden_subpath_kept_when_hidden_allowed(self, make_tree):
        root = make_tree({"sub/.hidden": "x"})
        findings = examine(root, respect_hidden_files=False, max_depth=2)
        assert "sub/.hidden" in findings.regular_files

    def test_top_level_dotfile_moved_to_ignored(self, make_tree):
        root = make_tree({".env": "SECRET=1\n", "app.py": "x\n"})
        findings = examine(root)
        assert findings.regular_files == ["app.py"]
        assert findings.ignored_files == [".env"]

    def test_dot_ignore_file_is_read(self, make_tree):
        root = make_tree({".ignore": "build\n", "build/out.o": b"\x00", "src.c": "int x;\n"})
        findings = examine(root, respect_hidden_files=False, max_depth=2)
        assert sorted(findings.regular_files) == [".ignore", "src.c"]
        assert sorted(findings.ignored_files) == ["build", "build/out.o"]

    def test_nested_gitignore_not_read(self, make_tree):
        root = make_tree({"sub/.gitignore": "keep.txt\n", "sub/keep.txt": "x"})
        findings = examine(root, respect_hidden_files=False, max_depth=2)
        assert "sub/keep.txt" in findings.regular_files


class TestGitLookup:
    def test_locator_called_once_with_root_git(self, repo_tree: Path):
        locator = Mock(return_value=GitInfo("https://example.com/r"))
        walker = TreeWalker(max_depth=3, git_locator=locator)
        findings = walker.examine(repo_tree)
        locator.assert_called_once_with(repo_tree / ".git")
        assert findings.git == GitInfo("https://example.com/r")

    def test_nested_git_dir_does_not_trigger_second_lookup(self, make_tree):
        root = make_tree({
            ".git/config": '[remote "origin"]\n\turl = git@github.com:acme/outer\n',
            "sub/.git/config": '[remote "origin"]\n\turl = git@github.com:acme/inner\n',
            "sub/code.py": "x = 1\n",
        })
        locator = Mock(wraps=locate_git)
        walker = TreeWalker(respect_hidden_files=False, max_depth=3, git_locator=locator)
        findings = walker.examine(root)

        locator.assert_called_once_with(root / ".git")
        assert findings.git == GitInfo("https://github.com/acme/outer")
        assert "sub/.git/config" in findings.info_map

    def test_no_git_dir_no_lookup(self, make_tree):
        locator = Mock()
        TreeWalker(git_locator=locator).examine(make_tree({"a.py": "x"}))
        locator.assert_not_called()

    def test_config_without_url(self, make_tree):
        root = make_tree({".git/config": "[core]\n\tbare = false\n"})
        assert examine(root, max_depth=2).git is None

    def test_locator_failure_leaves_git_empty(self, repo_tree: Path):
        locator = Mock(side_effect=GitConfigError("no remote url"))
        findings = TreeWalker(git_locator=locator).examine(repo_tree)
        assert findings.git is None
        assert findings.regular_files == ["a.py"]


class TestErrors:
    def test_root_not_a_directory(self, tmp_path: Path):
        with pytest.raises(WalkError) as exc:
            examine(tmp_path / "missing")
        assert "not a directory" in str(exc.value)
        assert exc.value.path == str(tmp_path / "missing")

    def test_unreadable_subdirectory_fails_walk(self, make_tree, monkeypatch):
        root = make_tree({"locked/f.txt": "x", "open/g.txt": "y"})
        real_scandir = os.scandir

        def fake_scandir(path):
            if Path(path).name == "locked":
                raise PermissionError(13, "Permission denied", str(path))
            return real_scandir(path)

        monkeypatch.setattr(os, "scandir", fake_scandir)
        with pytest.raises(WalkError) as exc:
            examine(root, max_depth=2)
        assert "could not read directory" in str(exc.value)
        assert exc.value.path.endswith("locked")

    def test_invalid_settings(self):
        with pytest.raises(ValueError, match="max_depth"):
            TreeWalker(max_depth=-1)
        with pytest.raises(ValueError, match="workers"):
            TreeWalker(workers=0)


class TestStats:
    def test_stats_filled(self, repo_tree: Path):
        findings = examine(repo_tree, max_depth=2)
        stats = findings.stats
        assert stats is not None
        assert stats.regular_files == 1
        assert stats.ignored_files == len(findings.ignored_files)
        assert stats.reclassified == 3
        assert stats.dirs_scanned == 3
        assert stats.rules == 2
