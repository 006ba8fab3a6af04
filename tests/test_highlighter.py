"""
Highlighter tests - inline code, links and placeholders

Covers segment splitting for the three delimiter kinds, unbalanced
delimiters and the ANSI output of highlight().
"""

import pytest
from rich.color import ColorSystem
from rich.style import Style
from rich.text import Text

from pagerender.lib.highlighter import highlight, segments_split, segments_merge
from pagerender.models.page import INLINE_CODE, PLACEHOLDER, URL, Segment


NORMAL = Style(color="blue")
HL = Style(bold=True)


def strip(styled: str) -> str:
    return Text.from_ansi(styled).plain


class TestInlineCode:
    """Symmetric backtick spans"""

    def test_no_delimiter(self):
        """Text without backticks is one normal segment"""
        assert segments_split(INLINE_CODE, "plain text") == [Segment("plain text")]

    def test_alternating_segments(self):
        """Pieces alternate normal/highlighted starting with normal"""
        segments = segments_split(INLINE_CODE, "aa `bb` cc `dd` ee")

        assert [s.highlighted for s in segments] == [False, True, False, True, False]
        assert [s.text for s in segments if s.highlighted] == ["bb", "dd"]

    def test_reconstructs_input(self):
        """Stripping styles gives back the input"""
        line = "aa `bb` cc `dd` ee"
        assert "".join(s.text for s in segments_split(INLINE_CODE, line)) == line
        assert strip(highlight(INLINE_CODE, line, NORMAL, HL)) == line

    def test_odd_backticks_do_not_error(self):
        """A trailing unclosed span keeps its parity"""
        segments = segments_split(INLINE_CODE, "a `b")

        assert segments == [Segment("a `"), Segment("b", True)]

    def test_empty_span_dropped(self):
        """An empty span leaves only the surrounding text"""
        assert segments_split(INLINE_CODE, "x``y") == [Segment("x``y")]


class TestUrl:
    """Links opened by '<http' and closed by '>'"""

    def test_link_highlighted(self):
        """Only the address is highlighted, 'http' is restored"""
        segments = segments_split(URL, "More info: <https://example.com>.")

        assert segments == [
            Segment("More info: <"),
            Segment("https://example.com", True),
            Segment(">."),
        ]

    def test_link_round_trip(self):
        """Stripping styles reproduces the line"""
        line = "More info: <https://example.com>."
        assert strip(highlight(URL, line, NORMAL, HL)) == line

    def test_plain_http_scheme(self):
        """http links work like https links"""
        segments = segments_split(URL, "<http://a.org>")
        assert [s.text for s in segments if s.highlighted] == ["http://a.org"]

    def test_bare_angle_bracket_ignored(self):
        """A '<' not followed by 'http' is not a link"""
        assert segments_split(URL, "a < b > c") == [Segment("a < b > c")]

    def test_unclosed_link_is_normal(self):
        """A link without '>' stays plain text"""
        assert segments_split(URL, "see <http://x.org") == [Segment("see <http://x.org")]

    def test_first_close_wins(self):
        """The link ends at the first '>'"""
        segments = segments_split(URL, "<https://a.org> and >")
        assert segments == [
            Segment("<"),
            Segment("https://a.org", True),
            Segment("> and >"),
        ]


class TestPlaceholder:
    """Placeholders between '{{' and '}}'"""

    def test_two_placeholders(self):
        """Braces are dropped, contents highlighted"""
        segments = segments_split(PLACEHOLDER, "aa bb {{cc}} {{dd}} ee")

        assert segments == [
            Segment("aa bb "),
            Segment("cc", True),
            Segment(" "),
            Segment("dd", True),
            Segment(" ee"),
        ]

    def test_three_closing_braces(self):
        """The last two braces close the placeholder"""
        assert segments_split(PLACEHOLDER, "{{a}}}") == [Segment("a}", True)]

    def test_three_closing_braces_in_context(self):
        """Text after the closing braces stays normal"""
        segments = segments_split(PLACEHOLDER, "echo {{a}}} done")
        assert segments == [Segment("echo "), Segment("a}", True), Segment(" done")]

    def test_four_closing_braces(self):
        """Matches are paired from the right"""
        segments = segments_split(PLACEHOLDER, "{{a}}}}")
        assert segments == [Segment("a", True), Segment("}}")]

    def test_unclosed_placeholder(self):
        """An opening without closing braces is kept verbatim"""
        assert segments_split(PLACEHOLDER, "cp {{src dst") == [Segment("cp {{src dst")]


class TestStyling:
    """ANSI output of highlight()"""

    def test_no_match_styled_normal(self):
        """Whole input gets the normal style"""
        assert highlight(INLINE_CODE, "abc", NORMAL, HL) == NORMAL.render("abc")

    def test_highlighted_span_codes(self):
        """Highlighted text is wrapped in its own SGR sequence"""
        result = highlight(INLINE_CODE, "a `b` c", Style(), HL)
        assert result == "a `\x1b[1mb\x1b[0m` c"

    def test_plain_without_color_system(self):
        """No escape codes when the color system is None"""
        result = highlight(PLACEHOLDER, "cp {{src}} {{dst}}", NORMAL, HL, color_system=None)
        assert result == "cp src dst"
        assert "\x1b" not in result

    def test_nested_passes(self):
        """Inline code is found in the output of the link pass"""
        line = "See `man tar` or <https://tar.org>."
        first = highlight(URL, line, NORMAL, HL, ColorSystem.TRUECOLOR)
        second = highlight(INLINE_CODE, first, NORMAL, HL, ColorSystem.TRUECOLOR)
        assert strip(second) == line


class TestMerge:
    """segments_merge"""

    @pytest.mark.parametrize(
        "segments,expected",
        [
            ([Segment("a"), Segment("b")], [Segment("ab")]),
            ([Segment(""), Segment("x", True)], [Segment("x", True)]),
            ([Segment("a"), Segment("", True), Segment("b")], [Segment("ab")]),
            ([Segment("a", True), Segment("b")], [Segment("a", True), Segment("b")]),
        ],
    )
    def test_merge(self, segments, expected):
        """Empty segments disappear, neighbours of one kind are joined"""
        assert segments_merge(segments) == expected
