"""Unit tests for path discovery and text classification."""

import os
import sys

import pytest

from todolint.errors import (
    DirectoryTraversalError,
    FileAccessError,
    PathRenderError,
    UnsupportedPathError,
)
from todolint.paths import (
    BINARY_MIMETYPE,
    TEXT_MIMETYPE,
    Classification,
    TextClassifier,
    collect_paths,
    normalize_path,
    sniff_mimetype,
)
from todolint.patterns import DEFAULT_SKIP_PATHS_PATTERN, compile_pattern


@pytest.fixture
def classifier():
    """Create a TextClassifier with the default exclusion pattern."""
    return TextClassifier(compile_pattern(DEFAULT_SKIP_PATHS_PATTERN, False))


class TestCollectPaths:
    """Test recursive path enumeration."""

    def test_file_root_is_included_directly(self, make_file):
        """Test that a regular file root is returned as given."""
        path = make_file("a.txt", "hello\n")
        assert collect_paths([str(path)]) == [str(path)]

    def test_directory_walk_is_lexicographic(self, tmp_path, make_file):
        """Test depth-first traversal in name order at every level."""
        make_file("c.txt", "")
        make_file("b/2.txt", "")
        make_file("a.txt", "")
        make_file("b/1.txt", "")
        make_file("b/a/deep.txt", "")

        paths = collect_paths([str(tmp_path)])

        relative = [os.path.relpath(p, tmp_path) for p in paths]
        assert relative == [
            "a.txt",
            os.path.join("b", "1.txt"),
            os.path.join("b", "2.txt"),
            os.path.join("b", "a", "deep.txt"),
            "c.txt",
        ]

    def test_root_order_is_preserved(self, tmp_path, make_file):
        """Test that roots are enumerated in the order given."""
        second = make_file("z/file.txt", "")
        first = make_file("a.txt", "")

        paths = collect_paths([str(tmp_path / "z"), str(first)])

        assert paths == [str(second), str(first)]

    def test_directories_are_not_candidates(self, tmp_path, make_file):
        """Test that empty directories produce nothing."""
        (tmp_path / "empty" / "nested").mkdir(parents=True)
        make_file("file.txt", "")

        paths = collect_paths([str(tmp_path)])

        assert paths == [str(tmp_path / "file.txt")]

    @pytest.mark.skipif(sys.platform == "win32", reason="requires POSIX symlinks")
    def test_symlinks_are_not_followed(self, tmp_path, make_file):
        """Test that links to files and directories are skipped."""
        target = make_file("real/file.txt", "")
        os.symlink(str(target), str(tmp_path / "link.txt"))
        os.symlink(str(tmp_path), str(tmp_path / "real" / "loop"))

        paths = collect_paths([str(tmp_path)])

        assert paths == [str(target)]

    def test_deep_tree(self, tmp_path, make_file):
        """Test that deep nesting is walked without recursion."""
        relative = os.path.join(*(["d"] * 200), "leaf.txt")
        leaf = make_file(relative, "")

        assert collect_paths([str(tmp_path)]) == [str(leaf)]

    def test_missing_root_fails(self, tmp_path):
        """Test that an unreadable root raises FileAccessError."""
        missing = str(tmp_path / "missing")

        with pytest.raises(FileAccessError) as exc_info:
            collect_paths([missing])

        assert "unable to query metadata for path" in str(exc_info.value)
        assert missing in str(exc_info.value)

    @pytest.mark.skipif(not hasattr(os, "mkfifo"), reason="requires mkfifo")
    def test_special_root_fails(self, tmp_path):
        """Test that a root which is neither file nor directory is rejected."""
        fifo = str(tmp_path / "pipe")
        os.mkfifo(fifo)

        with pytest.raises(UnsupportedPathError) as exc_info:
            collect_paths([fifo])

        assert "unknown type of path" in str(exc_info.value)

    @pytest.mark.skipif(not hasattr(os, "mkfifo"), reason="requires mkfifo")
    def test_special_entries_in_tree_are_skipped(self, tmp_path, make_file):
        """Test that FIFOs met during a walk are not candidates."""
        os.mkfifo(str(tmp_path / "pipe"))
        make_file("file.txt", "")

        assert collect_paths([str(tmp_path)]) == [str(tmp_path / "file.txt")]

    def test_unreadable_directory_aborts(self, tmp_path, make_file, monkeypatch):
        """Test that a traversal failure aborts the whole enumeration."""
        make_file("a.txt", "")
        make_file("locked/b.txt", "")
        locked = str(tmp_path / "locked")
        real_scandir = os.scandir

        def fake_scandir(path):
            if os.fspath(path) == locked:
                raise PermissionError(13, "Permission denied", locked)
            return real_scandir(path)

        monkeypatch.setattr("todolint.paths.os.scandir", fake_scandir)

        with pytest.raises(DirectoryTraversalError) as exc_info:
            collect_paths([str(tmp_path)])

        assert "unable to read directory" in str(exc_info.value)
        assert locked in str(exc_info.value)


class TestNormalizePath:
    """Test path normalization."""

    def test_collapses_segments(self):
        """Test removal of dot segments and redundant separators."""
        clean, absolute = normalize_path(os.path.join("a", ".", "b", "..", "c.txt"))

        assert clean == os.path.join("a", "c.txt")
        assert os.path.isabs(absolute)
        assert absolute == os.path.join(os.getcwd(), "a", "c.txt")

    def test_redundant_separators(self):
        """Test collapsing of doubled separators."""
        clean, _ = normalize_path("a//b///c.txt")
        assert clean == os.path.join("a", "b", "c.txt")

    def test_unrenderable_path_fails(self):
        """Test that undecodable file name bytes raise PathRenderError."""
        with pytest.raises(PathRenderError) as exc_info:
            normalize_path("bad\udcff.txt")

        assert "unable to process path" in str(exc_info.value)


class TestSniffMimetype:
    """Test content-based mimetype detection."""

    def test_text_content(self, make_file):
        """Test that readable content is text, whatever the extension."""
        path = make_file("image.png", "just words\n")
        assert sniff_mimetype(str(path)) == TEXT_MIMETYPE

    def test_binary_content(self, make_file):
        """Test that control bytes mark content as binary, whatever the extension."""
        path = make_file("notes.txt", b"\x00\x01\x02hack\x00")
        assert sniff_mimetype(str(path)) == BINARY_MIMETYPE

    def test_missing_file_fails(self, tmp_path):
        """Test that unreadable content raises FileAccessError."""
        with pytest.raises(FileAccessError) as exc_info:
            sniff_mimetype(str(tmp_path / "missing"))

        assert "unable to analyze mimetype from file" in str(exc_info.value)


class TestTextClassifier:
    """Test the TextClassifier class."""

    def test_text_file_is_included(self, classifier, make_file):
        """Test that a plain text file is included."""
        path = make_file("a.txt", "// TODO: walk the dog\n")
        assert classifier.classify(str(path)) is Classification.INCLUDED

    @pytest.mark.parametrize(
        "relative",
        [
            os.path.join("vendor", "lib.rs"),
            os.path.join("node_modules", "pkg", "index.js"),
            os.path.join(".git", "COMMIT_EDITMSG"),
            os.path.join("locales", "es.po"),
            "todolint.yaml",
        ],
    )
    def test_excluded_paths(self, classifier, make_file, relative):
        """Test that excluded paths are skipped even when their content is text."""
        path = make_file(relative, "hack\n")
        assert classifier.classify(str(path)) is Classification.EXCLUDED

    def test_binary_file_is_excluded(self, classifier, make_file):
        """Test that non-text content is skipped regardless of extension."""
        path = make_file("source.rs", b"\x7fELF\x00\x00hack\x00")
        assert classifier.classify(str(path)) is Classification.EXCLUDED

    def test_relative_path_is_excluded_by_absolute_form(
        self, classifier, make_file, tmp_path, monkeypatch
    ):
        """Test that exclusion sees dot segments resolved."""
        make_file("vendor/lib.rs", "hack\n")
        monkeypatch.chdir(tmp_path / "vendor")

        assert classifier.classify(os.path.join(".", "lib.rs")) is Classification.EXCLUDED

    def test_debug_traces_exclusions(self, make_file, capsys):
        """Test that debug mode reports why paths are skipped."""
        classifier = TextClassifier(
            compile_pattern(DEFAULT_SKIP_PATHS_PATTERN, False), debug=True
        )
        vendored = make_file("vendor/lib.rs", "hack\n")
        binary = make_file("blob.bin", b"\x00\x01")

        assert classifier.classify(str(vendored)) is Classification.EXCLUDED
        assert classifier.classify(str(binary)) is Classification.EXCLUDED

        captured = capsys.readouterr()
        assert f"info: excluding path: {vendored}" in captured.err
        assert (
            f"info: skipping mimetype: {BINARY_MIMETYPE}, path: {binary}"
            in captured.err
        )
        assert captured.out == ""

    def test_no_traces_without_debug(self, classifier, make_file, capsys):
        """Test that exclusions are silent by default."""
        path = make_file("vendor/lib.rs", "hack\n")
        classifier.classify(str(path))

        captured = capsys.readouterr()
        assert captured.err == ""
