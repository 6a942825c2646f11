"""Orchestration of path discovery, classification, and line matching."""

from typing import List, Optional, Sequence

from todolint.config import Configuration
from todolint.paths import Classification, TextClassifier, collect_paths, normalize_path
from todolint.patterns import (
    DEFAULT_FORMAL_TASK_PATTERN,
    DEFAULT_SKIP_PATHS_PATTERN,
    DEFAULT_TASK_PATTERN,
    build_formal_task_pattern,
    build_task_pattern,
    compile_pattern,
)
from todolint.scanner import LineMatcher, Warning


class Linter:
    """
    Scan files and directories for dangling work markers.

    Effective settings are resolved once, at construction: an override
    replaces the built-in default outright, it is never merged with it.

    Attributes
    ----------
    debug : bool
        Whether to trace exclusion decisions on stderr
    skip_paths : re.Pattern
        Compiled path exclusion pattern
    formal_task_pattern : re.Pattern
        Compiled pattern for exempt markers citing an external reference
    task_pattern : re.Pattern
        Compiled pattern for work markers
    """

    def __init__(
        self,
        config: Optional[Configuration] = None,
        debug: Optional[bool] = None,
    ):
        """
        Initialize the Linter.

        Parameters
        ----------
        config : Configuration, optional
            Overrides loaded from the configuration file. If None, built-in
            defaults apply.
        debug : bool, optional
            Explicit debug flag, e.g. from the command line. Takes precedence
            over ``config.debug`` when not None.

        Raises
        ------
        PatternError
            If any effective pattern is not a valid regular expression
        """
        if config is None:
            config = Configuration()

        if debug is None:
            debug = config.debug
        self.debug = bool(debug)

        task_source = DEFAULT_TASK_PATTERN
        formal_source = DEFAULT_FORMAL_TASK_PATTERN

        if config.task_pattern is not None:
            task_source = config.task_pattern
        elif config.task_markers is not None:
            task_source = build_task_pattern(config.task_markers)
            formal_source = build_formal_task_pattern(config.task_markers)

        if config.formal_task_pattern is not None:
            formal_source = config.formal_task_pattern

        skip_source = DEFAULT_SKIP_PATHS_PATTERN
        if config.skip_paths is not None:
            skip_source = config.skip_paths

        self.skip_paths = compile_pattern(skip_source, case_insensitive=False)
        self.formal_task_pattern = compile_pattern(formal_source)
        self.task_pattern = compile_pattern(task_source)

        self.classifier = TextClassifier(self.skip_paths, debug=self.debug)
        self.matcher = LineMatcher(self.formal_task_pattern, self.task_pattern)

    def find_text_paths(self, roots: Sequence[str]) -> List[str]:
        """
        Recursively search the given roots for text file paths to scan.

        Parameters
        ----------
        roots : sequence of str
            Files and/or directories

        Returns
        -------
        list of str
            Normalized paths of included files, in discovery order
        """
        text_paths = []

        for path in collect_paths(roots):
            if self.classifier.classify(path) is Classification.INCLUDED:
                clean, _ = normalize_path(path)
                text_paths.append(clean)

        return text_paths

    def check(self, path: str) -> List[Warning]:
        """Check a single text file for dangling work markers."""
        return self.matcher.check(path)

    def scan(self, roots: Sequence[str]) -> List[Warning]:
        """
        Recursively analyze the given roots for dangling work markers.

        Parameters
        ----------
        roots : sequence of str
            Files and/or directories, order preserved

        Returns
        -------
        list of Warning
            Findings ordered by path discovery, then by line

        Raises
        ------
        TodolintError
            On the first unreadable path or file; no partial results
        """
        warnings: List[Warning] = []

        for text_path in self.find_text_paths(roots):
            warnings.extend(self.check(text_path))

        return warnings
