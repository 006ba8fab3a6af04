"""
pagerender - Terminal renderer for command-line help pages

Renders tldr-style pages (title, description, bullets, examples) with
highlighted links, inline code and placeholders.
"""

__version__ = "1.0.0"

from .classifier import line_classify, prefix_strip
from .highlighter import highlight, segments_split
from .renderer import PageRenderer
from .pages import candidates_print, pageName_get, pagePlatform_get
from .errors import RenderError, PageIOError, PageParseError
from .log import LOG, state_connectToLogger

__all__ = [
    "line_classify",
    "prefix_strip",
    "highlight",
    "segments_split",
    "PageRenderer",
    "candidates_print",
    "pageName_get",
    "pagePlatform_get",
    "RenderError",
    "PageIOError",
    "PageParseError",
    "LOG",
    "state_connectToLogger",
    "__version__",
]
