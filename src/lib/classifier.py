"""
Line classification for help pages

Every non-blank line of a page starts with one of four fixed tokens:

    # tar                              -> title
    > Archiving utility.               -> description
    - Create an archive from files:    -> bullet
    `tar cf {{target.tar}} {{file}}`   -> example

Classification is the only place these prefixes are checked. Formatters
downstream call prefix_strip() and rely on the prefix being present.
"""

from typing import Dict

from ..models.page import LineRole


TITLE = "# "
DESC = "> "
BULLET = "- "
EXAMPLE = "`"

# Unicode White_Space. str.isspace() also accepts the \x1c-\x1f separators.
WHITE_SPACE = frozenset(
    "\t\n\x0b\x0c\r \x85\xa0\u1680"
    "\u2000\u2001\u2002\u2003\u2004\u2005\u2006\u2007\u2008\u2009\u200a"
    "\u2028\u2029\u202f\u205f\u3000"
)

# Checked in order, first match wins
ROLE_PREFIXES: Dict[LineRole, str] = {
    LineRole.TITLE: TITLE,
    LineRole.DESCRIPTION: DESC,
    LineRole.BULLET: BULLET,
    LineRole.EXAMPLE: EXAMPLE,
}


def line_classify(text: str) -> LineRole:
    """
    Map a raw line to its role by leading-token match

    Args:
        text: Line content, with or without its line terminator

    Returns:
        The line's role; INVALID for any non-blank line without a known prefix

    Example:
        >>> line_classify("- Create an archive:")
        <LineRole.BULLET: 'bullet'>
        >>> line_classify("   \\n")
        <LineRole.BLANK: 'blank'>
    """
    for role, prefix in ROLE_PREFIXES.items():
        if text.startswith(prefix):
            return role

    if all(char in WHITE_SPACE for char in text):
        return LineRole.BLANK

    return LineRole.INVALID


def prefix_strip(role: LineRole, text: str) -> str:
    """
    Remove the leading token of a classified line

    Args:
        role: Role returned by line_classify() for this exact text
        text: The classified line

    Returns:
        Line content after the role prefix

    Raises:
        ValueError: If the role has no prefix (BLANK, INVALID)
    """
    if role not in ROLE_PREFIXES:
        raise ValueError(f"role '{role.value}' has no line prefix")
    return text[len(ROLE_PREFIXES[role]):]
