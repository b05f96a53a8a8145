"""Ticket box height estimation from wrapped summary text."""

import math

from jira_epic_dashboard.diagram.constants import (
    BOX_BASE_HEIGHT,
    BOX_WIDTH,
    CHAR_WIDTH_RATIO,
    MIN_BOX_HEIGHT,
    SUMMARY_FONT_SIZE,
    SUMMARY_LINE_HEIGHT,
    SUMMARY_PADDING,
)
from jira_epic_dashboard.models import Ticket


def chars_per_line(max_width: float, font_size: float, padding: float) -> int:
    """Number of characters that fit on one line of a box."""
    return math.floor((max_width - 2 * padding) / (font_size * CHAR_WIDTH_RATIO))


def wrap_text(text: str, max_width: float, font_size: float, padding: float) -> list[str]:
    """Greedily pack space-separated words into lines.

    A line is closed when appending the next word would exceed the character
    budget. A word longer than the budget gets a line of its own and is not
    split. Empty text yields a single empty line.
    """
    budget = chars_per_line(max_width, font_size, padding)
    lines: list[str] = []
    current = ""
    for word in text.split(" "):
        if len(f"{current} {word}".strip()) > budget:
            if current:
                lines.append(current.strip())
            current = word
        else:
            current += " " + word
    if current:
        lines.append(current.strip())
    return lines


def estimate_height(
    ticket: Ticket,
    box_width: float = BOX_WIDTH,
    font_size: float = SUMMARY_FONT_SIZE,
    line_height: float = SUMMARY_LINE_HEIGHT,
    padding: float = SUMMARY_PADDING,
    base_height: float = BOX_BASE_HEIGHT,
    min_height: float = MIN_BOX_HEIGHT,
) -> float:
    """Pixel height of a ticket box, never below ``min_height``."""
    lines = wrap_text(ticket.summary or "", box_width, font_size, padding)
    return max(min_height, base_height + len(lines) * line_height)
