"""Exceptions raised while scanning for dangling work markers."""


class TodolintError(Exception):
    """Base class for every failure that aborts a scan."""


class FileAccessError(TodolintError):
    """A path could not be queried, opened, or decoded."""


class DirectoryTraversalError(TodolintError):
    """A directory entry could not be read during a recursive walk."""


class UnsupportedPathError(TodolintError):
    """A root path is neither a regular file nor a directory."""


class PathRenderError(TodolintError):
    """A resolved path cannot be represented as valid text."""


class PatternError(TodolintError):
    """A regular expression failed to compile."""


class ConfigurationError(TodolintError):
    """The configuration document is malformed."""
