"""
Page paths and multi-platform lookup results

Pages are stored one directory per platform:

    pages/common/tar.md
    pages/linux/tar.md
    pages/osx/tar.md

A lookup may find the same page for several platforms. The first candidate
is rendered, the others are listed as warnings on stderr.
"""

import sys
from pathlib import Path
from typing import Optional, Sequence, TextIO, Union

from rich.color import ColorSystem
from rich.style import Style

from ..config.settings import AppSettings
from .log import LOG


ORDINAL_STYLE = Style(color="green", bold=True)


def pageName_get(path: Union[str, Path]) -> str:
    """
    Name of the command a page documents

    Example:
        >>> pageName_get("pages/linux/tar.md")
        'tar'
    """
    return Path(path).stem


def pagePlatform_get(path: Union[str, Path]) -> Optional[str]:
    """
    Platform of a page, taken from its parent directory

    Returns:
        Directory name, or None when the path has no parent directory

    Example:
        >>> pagePlatform_get("pages/linux/tar.md")
        'linux'
        >>> pagePlatform_get("tar.md") is None
        True
    """
    return Path(path).parent.name or None


def candidates_warn(
    others: Sequence[Union[str, Path]],
    stream: TextIO,
    color_system: Optional[ColorSystem] = ColorSystem.TRUECOLOR,
) -> None:
    """
    List pages found for other platforms.

    Args:
        others: Candidates that are not rendered
        stream: Warning stream (usually stderr)
        color_system: rich color system for the ordinals, None for plain text
    """
    if not others:
        return

    stream.write(f"warning: {len(others)} page(s) found for other platforms:\n")
    for i, path in enumerate(others, start=1):
        name = pageName_get(path)
        platform = pagePlatform_get(path)
        ordinal = ORDINAL_STYLE.render(f"{i}.", color_system=color_system)
        stream.write(f"{ordinal} '{platform}' (tldr --platform {platform} {name})\n")


def candidates_print(
    paths: Sequence[Union[str, Path]],
    settings: AppSettings,
    sink: Optional[TextIO] = None,
    warn_sink: Optional[TextIO] = None,
) -> None:
    """
    Print the first page that was found and warnings for every other page.

    Args:
        paths: Ordered candidates, each below a platform directory
        settings: Application settings; settings.quiet suppresses warnings
        sink: Output stream for the page (default: sys.stdout)
        warn_sink: Output stream for warnings (default: sys.stderr)

    Raises:
        ValueError: No candidate was given
        RenderError: Rendering the first candidate failed
    """
    from .renderer import PageRenderer

    if not paths:
        raise ValueError("no page to render")

    warn_sink = warn_sink if warn_sink is not None else sys.stderr
    others = list(paths[1:])
    if settings.quiet:
        LOG(f"Not listing {len(others)} other candidate(s), quiet mode", level=3)
    else:
        candidates_warn(others, warn_sink, settings.colorSystem_get(warn_sink))

    PageRenderer.page_print(paths[0], settings, sink)
