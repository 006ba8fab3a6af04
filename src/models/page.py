"""
Page data models

Line roles, delimiter pairs and highlighter segments shared by the
classifier, the highlighter and the renderer.
"""

from enum import Enum
from dataclasses import dataclass


class LineRole(Enum):
    """
    Semantic role of a single page line

    Derived from the line's leading token every time it is needed, never
    stored alongside the line.
    """
    TITLE = "title"              # "# tar"
    DESCRIPTION = "description"  # "> Archiving utility."
    BULLET = "bullet"            # "- Create an archive:"
    EXAMPLE = "example"          # "`tar cf {{target.tar}} {{file}}`"
    BLANK = "blank"
    INVALID = "invalid"


class SpanKind(Enum):
    """
    How the highlighter closes a span opened by a delimiter pair

    SYMMETRIC pieces alternate between normal and highlighted, URL_BRACKET
    closes at the first end token and restores the consumed "http",
    PLACEHOLDER closes at the rightmost end token.
    """
    SYMMETRIC = "symmetric"
    URL_BRACKET = "url_bracket"
    PLACEHOLDER = "placeholder"


@dataclass(frozen=True)
class DelimiterPair:
    """
    Opening and closing token of one kind of inline span

    Attributes:
        start: Token the input is split on
        end: Token closing a span (equal to start for SYMMETRIC pairs)
        kind: Selects the closing strategy used by the highlighter
    """
    start: str
    end: str
    kind: SpanKind


INLINE_CODE = DelimiterPair("`", "`", SpanKind.SYMMETRIC)
# "<http" instead of "<" so that a bare "<" is not taken for a link.
URL = DelimiterPair("<http", ">", SpanKind.URL_BRACKET)
PLACEHOLDER = DelimiterPair("{{", "}}", SpanKind.PLACEHOLDER)


@dataclass(frozen=True)
class Segment:
    """
    One piece of highlighter output before styling

    Attributes:
        text: Text of the piece, delimiters already resolved
        highlighted: Whether the piece gets the highlight style
    """
    text: str
    highlighted: bool = False


@dataclass(frozen=True)
class PageLine:
    """
    A single line of a page

    Attributes:
        text: Line content without its line terminator
        number: 1-based position of the line in the page (for error reporting)

    Example:
        >>> PageLine("> Archiving utility.", 2).role
        <LineRole.DESCRIPTION: 'description'>
    """
    text: str
    number: int

    @property
    def role(self) -> LineRole:
        from ..lib.classifier import line_classify
        return line_classify(self.text)
