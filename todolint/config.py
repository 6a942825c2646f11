"""Loading of override values from the ``todolint.yaml`` configuration file."""

import os
from typing import Any, Dict, List, Optional

import yaml

from todolint.errors import ConfigurationError
from todolint.patterns import CONFIG_FILENAME

# Recognized keys and the types their values must have
_SCHEMA = {
    "debug": bool,
    "skip_paths": str,
    "formal_task_pattern": str,
    "task_pattern": str,
    "task_markers": list,
}


class Configuration:
    """
    Optional overrides for the built-in defaults.

    Every attribute is None when the corresponding key was absent. Values
    are fixed at construction time.

    Attributes
    ----------
    debug : bool or None
        Enable informational traces
    skip_paths : str or None
        Path exclusion pattern, replaces the default
    formal_task_pattern : str or None
        Pattern for exempt markers citing an external reference
    task_pattern : str or None
        Pattern for work markers, replaces the default
    task_markers : list of str or None
        Work marker terms, replaces the default list
    """

    __slots__ = (
        "_debug",
        "_skip_paths",
        "_formal_task_pattern",
        "_task_pattern",
        "_task_markers",
    )

    def __init__(
        self,
        debug: Optional[bool] = None,
        skip_paths: Optional[str] = None,
        formal_task_pattern: Optional[str] = None,
        task_pattern: Optional[str] = None,
        task_markers: Optional[List[str]] = None,
    ):
        if task_pattern is not None and task_markers is not None:
            raise ConfigurationError(
                "task_pattern and task_markers are mutually exclusive"
            )

        self._debug = debug
        self._skip_paths = skip_paths
        self._formal_task_pattern = formal_task_pattern
        self._task_pattern = task_pattern
        self._task_markers = tuple(task_markers) if task_markers is not None else None

    @property
    def debug(self) -> Optional[bool]:
        return self._debug

    @property
    def skip_paths(self) -> Optional[str]:
        return self._skip_paths

    @property
    def formal_task_pattern(self) -> Optional[str]:
        return self._formal_task_pattern

    @property
    def task_pattern(self) -> Optional[str]:
        return self._task_pattern

    @property
    def task_markers(self) -> Optional[List[str]]:
        if self._task_markers is None:
            return None
        return list(self._task_markers)

    @classmethod
    def from_mapping(cls, data: Dict[str, Any]) -> "Configuration":
        """
        Build a configuration from a parsed document.

        Raises
        ------
        ConfigurationError
            On unknown keys or values of the wrong type
        """
        for key, value in data.items():
            if key not in _SCHEMA:
                raise ConfigurationError(f"unknown configuration key: {key}")

            if value is None:
                continue

            if not isinstance(value, _SCHEMA[key]):
                raise ConfigurationError(
                    f"configuration key {key} expects {_SCHEMA[key].__name__}, "
                    f"got {type(value).__name__}"
                )

        markers = data.get("task_markers")
        if markers is not None:
            if not markers or not all(
                isinstance(marker, str) and marker for marker in markers
            ):
                raise ConfigurationError(
                    "task_markers expects a non-empty list of non-empty strings"
                )

        return cls(
            debug=data.get("debug"),
            skip_paths=data.get("skip_paths"),
            formal_task_pattern=data.get("formal_task_pattern"),
            task_pattern=data.get("task_pattern"),
            task_markers=markers,
        )

    def replace(self, **changes: Any) -> "Configuration":
        """Return a copy with the given keys overridden."""
        values = {name[1:]: getattr(self, name[1:]) for name in self.__slots__}
        values.update(changes)
        return Configuration(**values)

    def __repr__(self) -> str:
        fields = ", ".join(
            f"{name[1:]}={getattr(self, name[1:])!r}" for name in self.__slots__
        )
        return f"Configuration({fields})"


def load_configuration(path: str = CONFIG_FILENAME) -> Configuration:
    """
    Load overrides from a YAML configuration file.

    Parameters
    ----------
    path : str, optional
        Configuration file path. Default is ``todolint.yaml`` in the
        current working directory.

    Returns
    -------
    Configuration
        Parsed overrides. A missing file or an empty document yields a
        configuration with no overrides.

    Raises
    ------
    ConfigurationError
        If the file cannot be read or parsed, or holds unexpected values
    """
    if not os.path.isfile(path):
        return Configuration()

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigurationError(f"unable to read configuration: {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigurationError(f"unable to parse configuration: {path}: {e}") from e

    if data is None:
        return Configuration()

    if not isinstance(data, dict):
        raise ConfigurationError(f"configuration must be a mapping: {path}")

    return Configuration.from_mapping(data)
