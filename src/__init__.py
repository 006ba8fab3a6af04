"""
pagerender - Terminal renderer for command-line help pages

Renders tldr-style pages (title, description, bullets, examples) with
highlighted links, inline code and placeholders.
"""

__version__ = "1.0.0"

from .lib import PageRenderer, candidates_print, highlight, line_classify, LOG, state_connectToLogger

__all__ = [
    "PageRenderer",
    "candidates_print",
    "highlight",
    "line_classify",
    "LOG",
    "state_connectToLogger",
    "__version__",
]
