"""
Terminal renderer for help pages

Reads a page line by line, classifies each line and writes it with
role-specific indentation and highlighting:

    # tar                                  title
    > Archiving utility.                   description (links, inline code)
    > More information: <https://...>.
    - Create an archive from files:        bullet (links, inline code)
    `tar cf {{target.tar}} {{file1}}`      example (placeholders)

Rendering stops at the first grammar violation or I/O failure. Output is
collected in memory and written to the sink once, after the whole page was
rendered, so a failed render writes nothing.
"""

import io
import shutil
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, TextIO, Union

from rich.color import ColorSystem
from rich.style import Style

from ..config.settings import AppSettings, StyleSettings
from ..models.page import INLINE_CODE, PLACEHOLDER, URL, LineRole, PageLine
from .classifier import prefix_strip
from .errors import HINT_EXAMPLE_END, HINT_LINE_PREFIX, PageIOError, PageParseError
from .highlighter import highlight
from .log import LOG
from .pages import pagePlatform_get


ESCAPED_OPEN = "\\{\\{"
ESCAPED_CLOSE = "\\}\\}"


def raw_copy(path: Union[str, Path], sink: TextIO) -> None:
    """
    Copy a page's bytes to a sink unchanged.

    Bytes go straight to the sink's binary buffer when it has one. Text-only
    sinks (e.g. io.StringIO) receive the page decoded with surrogateescape,
    so undecodable bytes pass through instead of failing.

    Raises:
        PageIOError: Page cannot be opened or read
    """
    try:
        with open(path, 'rb') as page:
            binary = getattr(sink, "buffer", None)
            if binary is not None:
                sink.flush()
                shutil.copyfileobj(page, binary)
                binary.flush()
            else:
                sink.write(page.read().decode('utf-8', errors='surrogateescape'))
                sink.flush()
    except OSError as e:
        raise PageIOError(path, e)


@dataclass(frozen=True)
class RenderStyles:
    """rich styles for every line role and span kind, fixed for one render"""
    title: Style
    desc: Style
    bullet: Style
    example: Style
    url: Style
    inline_code: Style
    placeholder: Style

    @classmethod
    def styles_fromSettings(cls, style: StyleSettings) -> "RenderStyles":
        return cls(
            title=style.title.style_make(),
            desc=style.description.style_make(),
            bullet=style.bullet.style_make(),
            example=style.example.style_make(),
            url=style.url.style_make(),
            inline_code=style.inline_code.style_make(),
            placeholder=style.placeholder.style_make(),
        )


class PageRenderer:
    """
    Renders one page to a text sink

    A renderer owns its reader and output buffer for exactly one render and
    closes both on every exit path. Use page_print() rather than creating
    renderers directly.
    """

    def __init__(
        self,
        path: Union[str, Path],
        reader: TextIO,
        settings: AppSettings,
        sink: TextIO,
        color_system: Optional[ColorSystem] = ColorSystem.TRUECOLOR,
    ) -> None:
        """
        Initialize renderer

        Args:
            path: Page path (error messages, platform-qualified titles)
            reader: Open text stream of the page
            settings: Styles, indentation and layout flags
            sink: Stream the rendered page is written to
            color_system: rich color system, None for plain text

        Attributes:
            current_line: Line being rendered, without its terminator
            lnum: 1-based number of current_line
            buffer: Rendered output not yet written to the sink
        """
        self.path = Path(path)
        self.reader = reader
        self.settings = settings
        self.sink = sink
        self.color_system = color_system
        self.styles = RenderStyles.styles_fromSettings(settings.style)
        self.buffer = io.StringIO()
        self.current_line = ""
        self.lnum = 0

    def __enter__(self) -> "PageRenderer":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        """Release the page reader and the output buffer"""
        self.reader.close()
        self.buffer.close()

    @classmethod
    def page_print(
        cls,
        path: Union[str, Path],
        settings: AppSettings,
        sink: Optional[TextIO] = None,
    ) -> None:
        """
        Print or render the page according to the provided settings.

        With output.raw_markdown the page is copied verbatim and the
        highlighter is bypassed.

        Args:
            path: Page file
            settings: Application settings
            sink: Output stream (default: sys.stdout)

        Raises:
            PageIOError: Page cannot be opened or read
            PageParseError: Page violates the page grammar
        """
        sink = sink if sink is not None else sys.stdout

        if settings.output.raw_markdown:
            LOG(f"Copying {path} verbatim", level=2)
            raw_copy(path, sink)
            return

        try:
            # Lines end at "\n" only, a stray "\r" stays part of its line
            page = open(path, 'r', encoding='utf-8', newline='\n')
        except OSError as e:
            raise PageIOError(path, e)

        with cls(path, page, settings, sink, settings.colorSystem_get(sink)) as renderer:
            renderer.render()

    def line_next(self) -> bool:
        """
        Load the next line into current_line.

        Returns:
            False at end of input
        """
        try:
            raw = self.reader.readline()
        except (OSError, UnicodeDecodeError) as e:
            raise PageIOError(self.path, e)

        if not raw:
            return False
        self.lnum += 1
        self.current_line = raw.rstrip("\r\n")
        return True

    def indent(self, width: int) -> str:
        return " " * width

    def paint(self, style: Style, text: str) -> str:
        return style.render(text, color_system=self.color_system)

    def inline_highlight(self, text: str, style: Style) -> str:
        """Highlight links first, then inline code on the result"""
        return highlight(
            INLINE_CODE,
            highlight(URL, text, style, self.styles.url, self.color_system),
            style,
            self.styles.inline_code,
            self.color_system,
        )

    def title_add(self) -> None:
        """Write the current line to the page buffer as a title."""
        output = self.settings.output
        if not output.show_title:
            return
        if not output.compact:
            self.buffer.write("\n")

        title = prefix_strip(LineRole.TITLE, self.current_line)
        if output.platform_title:
            platform = pagePlatform_get(self.path)
            if platform:
                title = f"{platform}/{title}"

        self.buffer.write(
            f"{self.indent(self.settings.indent.title)}{self.paint(self.styles.title, title)}\n"
        )

    def desc_add(self) -> None:
        """Write the current line to the page buffer as a description."""
        line = prefix_strip(LineRole.DESCRIPTION, self.current_line)
        self.buffer.write(
            f"{self.indent(self.settings.indent.description)}"
            f"{self.inline_highlight(line, self.styles.desc)}\n"
        )

    def bullet_add(self) -> None:
        """Write the current line to the page buffer as a bullet point."""
        output = self.settings.output
        if output.show_hyphens:
            line = output.example_prefix + self.current_line[2:]
        else:
            line = prefix_strip(LineRole.BULLET, self.current_line)

        self.buffer.write(
            f"{self.indent(self.settings.indent.bullet)}"
            f"{self.inline_highlight(line, self.styles.bullet)}\n"
        )

    def example_add(self) -> None:
        """
        Write the current line to the page buffer as an example.

        Raises:
            PageParseError: The line does not end with a backtick
        """
        content = prefix_strip(LineRole.EXAMPLE, self.current_line).rstrip()
        if not content.endswith("`"):
            raise PageParseError(self.path, self.lnum, self.current_line, HINT_EXAMPLE_END)
        content = content[:-1]

        # Pad escaped braces so they are not split as placeholders
        # (e.g. in "\{\{{{ }}\}\}")
        content = (
            content
            .replace(ESCAPED_OPEN, f" {ESCAPED_OPEN} ")
            .replace(ESCAPED_CLOSE, f" {ESCAPED_CLOSE} ")
        )
        rendered = highlight(
            PLACEHOLDER,
            content,
            self.styles.example,
            self.styles.placeholder,
            self.color_system,
        )
        rendered = (
            rendered
            .replace(f" {ESCAPED_OPEN} ", ESCAPED_OPEN)
            .replace(f" {ESCAPED_CLOSE} ", ESCAPED_CLOSE)
        )

        self.buffer.write(f"{self.indent(self.settings.indent.example)}{rendered}\n")

    def newline_add(self) -> None:
        """Write a newline to the page buffer if compact mode is not turned on."""
        if not self.settings.output.compact:
            self.buffer.write("\n")

    def render(self) -> None:
        """
        Render the page to the sink.

        Raises:
            PageIOError: Reading the page failed
            PageParseError: First line violating the page grammar
        """
        LOG(f"Rendering {self.path}", level=2)

        while self.line_next():
            line = PageLine(self.current_line, self.lnum)
            role = line.role
            LOG(f"{self.path.name}:{line.number}: {role.value}", level=3)

            if role is LineRole.TITLE:
                self.title_add()
            elif role is LineRole.DESCRIPTION:
                self.desc_add()
            elif role is LineRole.BULLET:
                self.bullet_add()
            elif role is LineRole.EXAMPLE:
                self.example_add()
            elif role is LineRole.BLANK:
                self.newline_add()
            else:
                raise PageParseError(self.path, line.number, line.text, HINT_LINE_PREFIX)

        self.newline_add()
        self.sink.write(self.buffer.getvalue())
        self.sink.flush()
        LOG(f"Rendered {self.lnum} lines from {self.path.name}", level=2)
