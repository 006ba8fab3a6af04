"""
Models package for pagerender

Contains data structures and type definitions for rendering and the CLI pipeline.
"""

from .state import ProgramState, pipeline
from .page import (
    LineRole,
    SpanKind,
    DelimiterPair,
    Segment,
    PageLine,
    INLINE_CODE,
    URL,
    PLACEHOLDER,
)

__all__ = [
    "ProgramState",
    "pipeline",
    "LineRole",
    "SpanKind",
    "DelimiterPair",
    "Segment",
    "PageLine",
    "INLINE_CODE",
    "URL",
    "PLACEHOLDER",
]
