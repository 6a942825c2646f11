"""
Built-in marker tables and the regular expressions derived from them.

Patterns are plain values: the linter compiles them once at startup and
hands the compiled objects to the components that need them.
"""

import re
from typing import List, Pattern, Sequence

from todolint.errors import PatternError

# Common prefixes of incomplete or provisional code
TODO_MARKERS = [
    # English
    "band aid",
    "band-aid",
    "bandaid",
    "bodge",
    "cludge",
    "duct tape",
    "duct-tape",
    "ducttape",
    "duck tape",
    "duck-tape",
    "ducktape",
    "fixme",
    "hack",
    "jury rig",
    "jury-rig",
    "juryrig",
    "kludge",
    "macgyver",
    "makeshift",
    "patch",
    "pending",
    "rube goldberg",
    "rube-goldberg",
    "stopgap",
    "todo",
    "waiting for",
    "waiting on",
    "workaround",
    # Iberian
    "apano",
    "apaño",
    "chapuza",
    "engenhoca",
    "gambiarra",
    "pend",
    "pendente",
    "pendiente",
    "pte",
    "quebra galho",
    "quebra-galho",
    "quebragalho",
    "remendo",
    "truco",
    # Japanese
    "ガラクタ",
    "ハック",
    "後で",
    "急ごしらえ",
    "裏技",
    "間に合わせ",
    # Chinese
    "应付",
    "粗笨",
    "妙招",
    "待办",
    "待辦",
    "保留",
]

# Name of the configuration file, never scanned itself
CONFIG_FILENAME = "todolint.yaml"

# Path components holding third party, generated, or translated content
SKIP_PATHS = [
    "node_modules",
    "bower_components",
    "vendor",
    "target",
    "dist",
    "__pycache__",
    ".git",
    ".hg",
    ".svn",
    ".bzr",
    "locale",
    "locales",
    "i18n",
    "l10n",
    "translations",
]

DEFAULT_SKIP_PATHS_PATTERN = r"(?:^|[/\\])(?:{})(?:[/\\]|$)|(?:^|[/\\]){}$".format(
    "|".join(re.escape(name) for name in SKIP_PATHS), re.escape(CONFIG_FILENAME)
)

# An external reference: authority, colon, resource (https://tracker.test/123)
REFERENCE_PATTERN = r"\s*:\s*[^\s:]+:\S+"

TEXT_MIMETYPE_PATTERN = re.compile(r"^text/.+$")


def _marker_alternation(markers: Sequence[str]) -> str:
    # Longest first, so "pending" is preferred over its prefix "pend"
    ordered = sorted(markers, key=len, reverse=True)
    return "|".join(re.escape(marker) for marker in ordered)


def build_task_pattern(markers: Sequence[str]) -> str:
    """
    Build a pattern matching any marker at a word boundary.

    Parameters
    ----------
    markers : sequence of str
        Literal marker terms, e.g. ``["todo", "hack"]``

    Returns
    -------
    str
        Regular expression source. A marker preceded or followed by a word
        character (letter, digit, underscore) does not match, so "hack"
        never matches inside "hacker" while "hack--it" does.
    """
    return r"(?<!\w)(?:{})(?!\w)".format(_marker_alternation(markers))


def build_formal_task_pattern(markers: Sequence[str]) -> str:
    """
    Build a pattern matching a marker that cites an external reference.

    Parameters
    ----------
    markers : sequence of str
        Literal marker terms

    Returns
    -------
    str
        Regular expression source matching e.g.
        ``pending: https://tracker.example/123``.
    """
    return r"(?<!\w)(?:{}){}".format(_marker_alternation(markers), REFERENCE_PATTERN)


DEFAULT_TASK_PATTERN = build_task_pattern(TODO_MARKERS)

DEFAULT_FORMAL_TASK_PATTERN = build_formal_task_pattern(TODO_MARKERS)


def compile_pattern(source: str, case_insensitive: bool = True) -> Pattern[str]:
    """
    Compile a user supplied or built-in regular expression.

    Raises
    ------
    PatternError
        If ``source`` is not a valid regular expression.
    """
    flags = re.IGNORECASE if case_insensitive else 0

    try:
        return re.compile(source, flags)
    except re.error as e:
        raise PatternError(f"unable to compile pattern: {source}: {e}") from e


def split_markers(value: str) -> List[str]:
    """Split a comma-separated marker string, dropping blanks."""
    parsed = [item.strip() for item in value.split(",")]
    return [item for item in parsed if item]
