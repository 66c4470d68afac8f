"""Default titles for notes that come without one."""

import re

MAX_TITLE_LENGTH = 20
DEFAULT_TITLE = "无标题"

# The title ends at the first sentence end or line break
TITLE_END_PATTERN = re.compile(r"[.。?？!！\n]")


def extract_title(text: str, max_length: int = MAX_TITLE_LENGTH) -> str:
    """Use the first sentence of a note as its title.

    Args:
        text: Note content
        max_length: Maximum title length

    Returns:
        The trimmed first sentence, cut to max_length characters;
        ``无标题`` if it is blank, or an empty string for empty text
    """
    if not text:
        return ""
    title = TITLE_END_PATTERN.split(text, maxsplit=1)[0].strip()
    title = title[:max_length]
    return title or DEFAULT_TITLE
