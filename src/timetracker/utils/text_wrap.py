"""Word wrapping for fixed-width table columns."""

import unicodedata

DESCRIPTION_WIDTH = 40

# Marks that render on top of, or join, the preceding character
_NON_SPACING_CATEGORIES = {"Mn", "Me", "Cf"}


def display_length(text: str) -> int:
    """Count user-perceived characters.

    Combining marks and format characters (zero width joiners, variation
    selectors) attach to their base character and are not counted.
    """
    return sum(
        1 for char in text if unicodedata.category(char) not in _NON_SPACING_CATEGORIES
    )


def wrap_text(text: str, width: int = DESCRIPTION_WIDTH) -> list[str]:
    """Wrap text at word boundaries into lines of at most ``width`` characters.

    Words are never split; a word longer than ``width`` gets a line of its
    own. Always returns at least one line, which is empty for blank input.
    """
    if width < 1:
        raise ValueError(f"Width must be positive, got {width}")

    lines: list[str] = []
    current: list[str] = []
    current_length = 0

    for word in text.split():
        word_length = display_length(word)
        if current and current_length + 1 + word_length > width:
            lines.append(" ".join(current))
            current = []
            current_length = 0
        current_length += word_length if not current else 1 + word_length
        current.append(word)

    if current:
        lines.append(" ".join(current))
    return lines or [""]


def printable(text: str) -> str:
    """Make text safe to write to a UTF-8 terminal.

    Undecodable command line bytes are kept in descriptions as lone
    surrogates; they are shown as backslash escapes.
    """
    return text.encode("utf-8", "backslashreplace").decode("utf-8")
