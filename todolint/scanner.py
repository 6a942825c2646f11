"""Line matching for dangling work markers."""

from typing import List, NamedTuple, Pattern

from todolint.errors import FileAccessError


class Warning(NamedTuple):
    """
    A dangling work marker found at a specific file and line.

    Attributes
    ----------
    path : str
        File path, as reported to the user
    line_number : int
        1-based physical line number
    line : str
        Line content with leading whitespace stripped
    """

    path: str
    line_number: int
    line: str

    def __str__(self) -> str:
        return f"{self.path}:{self.line_number}:{self.line}"


class LineMatcher:
    """
    Apply the formal (exempt) pattern, then the task pattern, to each line.

    A line matching the formal pattern cites an external reference for its
    pending work and is never reported, whatever else it contains.

    Attributes
    ----------
    formal_task_pattern : re.Pattern
        Compiled pattern for markers followed by an external reference
    task_pattern : re.Pattern
        Compiled pattern for work markers
    """

    def __init__(self, formal_task_pattern: Pattern[str], task_pattern: Pattern[str]):
        self.formal_task_pattern = formal_task_pattern
        self.task_pattern = task_pattern

    def is_task(self, line: str) -> bool:
        """Return True if ``line`` holds a dangling work marker."""
        if self.formal_task_pattern.search(line):
            return False

        return bool(self.task_pattern.search(line))

    def check(self, path: str) -> List[Warning]:
        """
        Check a single file for dangling work markers.

        Parameters
        ----------
        path : str
            Path to a text file

        Returns
        -------
        list of Warning
            Findings in line order

        Raises
        ------
        FileAccessError
            If the file cannot be opened or a line is not valid UTF-8
        """
        warnings: List[Warning] = []

        try:
            f = open(path, "rb")
        except OSError as e:
            raise FileAccessError(f"unable to open file: {path}") from e

        with f:
            try:
                for line_number, raw in enumerate(f, 1):
                    try:
                        line = raw.decode("utf-8")
                    except UnicodeDecodeError as e:
                        raise FileAccessError(
                            f"unable to read line from file: {path}"
                        ) from e

                    # Only the terminator goes; trailing whitespace is content
                    line = line.rstrip("\n")
                    if line.endswith("\r"):
                        line = line[:-1]

                    if self.is_task(line):
                        warnings.append(Warning(path, line_number, line.lstrip()))
            except OSError as e:
                raise FileAccessError(f"unable to read file: {path}: {e}") from e

        return warnings
