"""
Greedy word wrapping on a character budget.

Lines are broken at the last space that fits. Words longer than the
budget are split hard at the budget.
"""

from typing import List


def wrap(text: str, max_width: int) -> List[str]:
    """
    Wrap text into lines of at most ``max_width`` characters.

    Args:
        text: Text to wrap
        max_width: Maximum number of characters per line (clamped to 1)

    Returns:
        Ordered list of lines, empty for empty or blank input
    """
    if max_width < 1:
        max_width = 1

    length = len(text)
    offset = 0
    lines = []

    while offset < length:
        if text[offset] == " ":
            offset += 1
            continue

        # only the last line is left
        if length - offset <= max_width:
            break

        space = text.rfind(" ", offset, offset + max_width + 1)
        if space >= offset:
            lines.append(text[offset:space])
            offset = space + 1
        else:
            # really long word, split it one budget at a time
            lines.append(text[offset:offset + max_width])
            offset += max_width

    if offset < length:
        lines.append(text[offset:])

    return lines
