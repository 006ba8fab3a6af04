"""
Inline span highlighting

Splits a line on the opening token of a delimiter pair and styles the
pieces that form spans. Three kinds of spans exist on help pages:

    `inline code`             SYMMETRIC    (description and bullet lines)
    <https://example.com>     URL_BRACKET  (description and bullet lines)
    {{placeholder}}           PLACEHOLDER  (example lines)

The closing strategy is selected by the pair's SpanKind. Unbalanced
delimiters never raise: an opening token without its end token is kept as
plain text.

Example:
    >>> from pagerender.models.page import INLINE_CODE
    >>> segments_split(INLINE_CODE, "aa `bb` cc")
    [Segment(text='aa `', highlighted=False), Segment(text='bb', highlighted=True), Segment(text='` cc', highlighted=False)]
"""

from typing import Callable, Dict, List, Optional

from rich.color import ColorSystem
from rich.style import Style

from ..models.page import DelimiterPair, Segment, SpanKind


def _symmetric_split(pair: DelimiterPair, pieces: List[str]) -> List[Segment]:
    """
    Odd pieces are highlighted, even pieces are normal

    "aa `bb` cc `dd` ee"
        0: "aa "
        1: "bb"      (highlighted)
        2: " cc "
        3: "dd"      (highlighted)
        4: " ee"

    The delimiter tokens stay on the normal pieces next to them.
    """
    segments: List[Segment] = []
    last = len(pieces) - 1
    for i, piece in enumerate(pieces):
        if i % 2:
            segments.append(Segment(piece, True))
            continue
        opener = pair.start if i > 0 else ""
        closer = pair.end if i < last else ""
        segments.append(Segment(f"{opener}{piece}{closer}"))
    return segments


def _url_split(pair: DelimiterPair, pieces: List[str]) -> List[Segment]:
    """
    Close each link at the first end token

    "More info: <https://example.com>."
        0: "More info: "            => normal
        1: "s://example.com>."      => "https://example.com" (highlighted)
                                       ">."
    """
    segments: List[Segment] = [Segment(pieces[0])]
    # "<http" is used to detect links. The "http" part belongs to the link.
    scheme = pair.start[1:]
    for piece in pieces[1:]:
        if pair.end not in piece:
            segments.append(Segment(pair.start + piece))
            continue
        link, rest = piece.split(pair.end, 1)
        segments.append(Segment(pair.start[:1]))
        segments.append(Segment(scheme + link, True))
        segments.append(Segment(pair.end + rest))
    return segments


def _closeIndex_find(piece: str, end: str) -> int:
    """
    Locate the end token closing a placeholder

    Non-overlapping matches are collected from the right and the leftmost
    of them wins. With three closing braces ("a}}}") the first brace is part
    of the placeholder and the last two close it.
    """
    idx = piece.rfind(end)
    while idx > 0:
        prev = piece.rfind(end, 0, idx)
        if prev == -1:
            break
        idx = prev
    return idx


def _placeholder_split(pair: DelimiterPair, pieces: List[str]) -> List[Segment]:
    """
    Close each placeholder at its closing braces, dropping the braces

    "aa bb {{cc}} {{dd}} ee"
        0: "aa bb "     => normal
        1: "cc}} "      => "cc" (highlighted), " "
        2: "dd}} ee"    => "dd" (highlighted), " ee"
    """
    segments: List[Segment] = [Segment(pieces[0])]
    for piece in pieces[1:]:
        if pair.end not in piece:
            segments.append(Segment(pair.start + piece))
            continue
        idx = _closeIndex_find(piece, pair.end)
        segments.append(Segment(piece[:idx], True))
        segments.append(Segment(piece[idx + len(pair.end):]))
    return segments


SPLITTERS: Dict[SpanKind, Callable[[DelimiterPair, List[str]], List[Segment]]] = {
    SpanKind.SYMMETRIC: _symmetric_split,
    SpanKind.URL_BRACKET: _url_split,
    SpanKind.PLACEHOLDER: _placeholder_split,
}


def segments_merge(segments: List[Segment]) -> List[Segment]:
    """Drop empty segments and join neighbours sharing a style"""
    merged: List[Segment] = []
    for segment in segments:
        if not segment.text:
            continue
        if merged and merged[-1].highlighted == segment.highlighted:
            merged[-1] = Segment(merged[-1].text + segment.text, segment.highlighted)
        else:
            merged.append(segment)
    return merged


def segments_split(pair: DelimiterPair, text: str) -> List[Segment]:
    """
    Split text into normal and highlighted segments

    Args:
        pair: Delimiter pair whose spans are highlighted
        text: Input line (may already contain ANSI codes from another pass)

    Returns:
        Segments in original order. Empty segments are dropped and
        neighbouring segments of the same kind are joined.
    """
    pieces = text.split(pair.start)
    # Highlight beginning not found
    if len(pieces) == 1:
        return segments_merge([Segment(text)])

    return segments_merge(SPLITTERS[pair.kind](pair, pieces))


def highlight(
    pair: DelimiterPair,
    text: str,
    style_normal: Style,
    style_hl: Style,
    color_system: Optional[ColorSystem] = ColorSystem.TRUECOLOR,
) -> str:
    """
    Style the spans of one delimiter pair inside text

    Args:
        pair: Delimiter pair to highlight
        text: Input line
        style_normal: Style for text outside spans
        style_hl: Style for span contents
        color_system: rich color system for the ANSI codes, None for plain text

    Returns:
        Concatenation of all styled segments
    """
    return "".join(
        (style_hl if segment.highlighted else style_normal).render(
            segment.text, color_system=color_system
        )
        for segment in segments_split(pair, text)
    )
