"""
todolint - Linter for dangling work markers in source trees.

This package scans files and directories for lines containing markers of
incomplete or provisional work (todo, hack, workaround, and multilingual
equivalents) that do not cite an external reference such as a ticket URL.
"""

from todolint.errors import TodolintError
from todolint.linter import Linter
from todolint.scanner import Warning

__version__ = "0.1.0"

__all__ = ["Linter", "TodolintError", "Warning", "__version__"]
