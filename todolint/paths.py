"""Discovery and classification of candidate file paths."""

import enum
import os
import stat
import sys
from typing import List, Pattern, Sequence, Tuple

from identify import identify

from todolint.errors import (
    DirectoryTraversalError,
    FileAccessError,
    PathRenderError,
    UnsupportedPathError,
)
from todolint.patterns import TEXT_MIMETYPE_PATTERN

TEXT_MIMETYPE = "text/plain"
BINARY_MIMETYPE = "application/octet-stream"


def _list_directory(directory: str) -> List[Tuple[str, bool]]:
    """
    List the children of a directory worth visiting, sorted by name.

    Returns
    -------
    list of tuple
        ``(path, is_directory)`` pairs. Symbolic links and special files
        (FIFOs, sockets, devices) are left out.
    """
    try:
        with os.scandir(directory) as it:
            entries = sorted(it, key=lambda entry: entry.name)
    except OSError as e:
        raise DirectoryTraversalError(
            f"unable to read directory: {directory}: {e}"
        ) from e

    children = []
    for entry in entries:
        try:
            if entry.is_symlink():
                continue
            if entry.is_dir(follow_symlinks=False):
                children.append((entry.path, True))
            elif entry.is_file(follow_symlinks=False):
                children.append((entry.path, False))
        except OSError as e:
            raise DirectoryTraversalError(
                f"unable to read directory entry: {entry.path}: {e}"
            ) from e

    return children


def _walk(root: str) -> List[str]:
    """
    List the regular files below a directory, depth first.

    Uses an explicit stack so deep trees do not grow the call stack.
    """
    files: List[str] = []
    stack = [(root, True)]

    while stack:
        path, is_directory = stack.pop()

        if not is_directory:
            files.append(path)
            continue

        # Reversed so the lexicographically first child is popped first
        stack.extend(reversed(_list_directory(path)))

    return files


def collect_paths(roots: Sequence[str]) -> List[str]:
    """
    Recursively enumerate candidate file paths under the given roots.

    Parameters
    ----------
    roots : sequence of str
        Files and/or directories, in the order given by the user

    Returns
    -------
    list of str
        Regular file paths in root order, then traversal order

    Raises
    ------
    FileAccessError
        If a root's metadata cannot be read
    UnsupportedPathError
        If a root is neither a regular file nor a directory
    DirectoryTraversalError
        If any directory or entry below a root cannot be read
    """
    paths: List[str] = []

    for root in roots:
        root = os.fspath(root)

        try:
            mode = os.stat(root).st_mode
        except OSError as e:
            raise FileAccessError(
                f"unable to query metadata for path: {root}"
            ) from e

        if stat.S_ISDIR(mode):
            paths.extend(_walk(root))
        elif stat.S_ISREG(mode):
            paths.append(root)
        else:
            raise UnsupportedPathError(f"unknown type of path: {root}")

    return paths


def _render(path: str) -> str:
    # Undecodable file name bytes survive in str form as lone surrogates
    try:
        path.encode("utf-8")
    except UnicodeEncodeError as e:
        raise PathRenderError(f"unable to process path: {path!r}") from e
    return path


def normalize_path(path: str) -> Tuple[str, str]:
    """
    Resolve ``.``/``..`` segments and redundant separators.

    Returns
    -------
    tuple of (str, str)
        ``(clean, absolute)``: the display form and the fully resolved form

    Raises
    ------
    PathRenderError
        If either form cannot be represented as valid text
    """
    clean = os.path.normpath(os.fspath(path))
    return _render(clean), _render(os.path.abspath(clean))


def sniff_mimetype(path: str) -> str:
    """
    Guess a file's mimetype from its content, ignoring its name.

    Raises
    ------
    FileAccessError
        If the file content cannot be read
    """
    try:
        is_text = identify.file_is_text(path)
    except (OSError, ValueError) as e:
        raise FileAccessError(
            f"unable to analyze mimetype from file: {path}: {e}"
        ) from e

    return TEXT_MIMETYPE if is_text else BINARY_MIMETYPE


class Classification(enum.Enum):
    """Outcome of classifying a candidate path."""

    INCLUDED = "included"
    EXCLUDED = "excluded"


class TextClassifier:
    """
    Decide whether a candidate path should be scanned.

    Attributes
    ----------
    skip_paths : re.Pattern
        Compiled path exclusion pattern, tested against absolute paths
    debug : bool
        Whether to trace exclusion decisions on stderr
    """

    def __init__(self, skip_paths: Pattern[str], debug: bool = False):
        self.skip_paths = skip_paths
        self.debug = debug

    def classify(self, path: str) -> Classification:
        """
        Classify a path as included or excluded.

        Parameters
        ----------
        path : str
            Candidate regular file path

        Returns
        -------
        Classification
            EXCLUDED when the absolute path matches the exclusion pattern or
            the content is not text, otherwise INCLUDED
        """
        clean, absolute = normalize_path(path)

        if self.skip_paths.search(absolute):
            if self.debug:
                print(f"info: excluding path: {clean}", file=sys.stderr)
            return Classification.EXCLUDED

        mimetype = sniff_mimetype(absolute)

        if not TEXT_MIMETYPE_PATTERN.match(mimetype):
            if self.debug:
                print(
                    f"info: skipping mimetype: {mimetype}, path: {clean}",
                    file=sys.stderr,
                )
            return Classification.EXCLUDED

        return Classification.INCLUDED
