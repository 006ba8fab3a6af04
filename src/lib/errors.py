"""
Error types raised while rendering pages

Rendering errors are fatal: the renderer stops at the first one and the
caller decides what to print and which exit code to use.
"""

from pathlib import Path
from typing import Optional, Union


HINT_LINE_PREFIX = "every non-empty line must begin with either '# ', '> ', '- ' or '`'"
HINT_EXAMPLE_END = "every line with an example must end with a backtick"


class RenderError(Exception):
    """
    Base class for page rendering failures

    Attributes:
        path: Page that failed to render
    """

    def __init__(self, message: str, path: Union[str, Path]) -> None:
        super().__init__(message)
        self.path = Path(path)


class PageIOError(RenderError):
    """
    Raised when a page cannot be opened or read

    Attributes:
        reason: Underlying OSError, or UnicodeDecodeError for pages that
            are not valid UTF-8
    """

    def __init__(self, path: Union[str, Path], reason: Exception) -> None:
        detail = getattr(reason, "strerror", None) or str(reason)
        super().__init__(f"'{path}': {detail}", path)
        self.reason = reason


class PageParseError(RenderError):
    """
    Raised when a line violates the page grammar

    Attributes:
        line_number: 1-based number of the offending line
        line: Offending line text, without its line terminator
        hint: Description of the expected grammar
    """

    def __init__(
        self,
        path: Union[str, Path],
        line_number: int,
        line: str,
        hint: Optional[str] = None,
    ) -> None:
        message = f"'{path}:{line_number}' contains invalid syntax: {line}"
        if hint:
            message += f"\n{hint[0].upper()}{hint[1:]}."
        super().__init__(message, path)
        self.line_number = line_number
        self.line = line
        self.hint = hint
