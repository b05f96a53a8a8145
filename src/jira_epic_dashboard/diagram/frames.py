"""Frame layout: rows within a group, groups side by side, unframed row."""

from dataclasses import dataclass

from jira_epic_dashboard.diagram.constants import (
    BOX_WIDTH,
    DIAGRAM_PADDING,
    FRAME_BORDER_BUFFER,
    FRAME_GAP,
    FRAME_INNER_PADDING,
    HORIZONTAL_GAP,
    MIN_BOX_HEIGHT,
    VERTICAL_GAP,
)
from jira_epic_dashboard.models import BoundingBox, FrameSlot, Position, Ticket


@dataclass
class GroupLayout:
    """Positions of one group's tickets and their envelope."""

    positions: dict[str, Position]
    bounding_box: BoundingBox


def _envelope(positions: list[Position]) -> BoundingBox:
    return BoundingBox(
        min_x=min(p.x for p in positions),
        min_y=min(p.y for p in positions),
        max_x=max(p.x + p.width for p in positions),
        max_y=max(p.y + p.height for p in positions),
    )


def _rows_by_level(group: list[Ticket], level_map: dict[str, int]) -> list[list[Ticket]]:
    rows: list[list[Ticket]] = [[] for _ in range(max(level_map.values()) + 1)]
    for ticket in group:
        rows[level_map[ticket.key]].append(ticket)
    return rows


def layout_group(
    group: list[Ticket],
    level_map: dict[str, int],
    heights: dict[str, float],
    top_y: float = 0,
) -> GroupLayout:
    """Lay out one group as rows of ascending level, top to bottom.

    Each row starts at ``FRAME_INNER_PADDING`` and is as tall as its tallest
    box (at least ``MIN_BOX_HEIGHT``); the next row follows after
    ``VERTICAL_GAP``.
    """
    positions: dict[str, Position] = {}
    y = top_y + FRAME_INNER_PADDING
    for row in _rows_by_level(group, level_map):
        row_height = max([heights[t.key] for t in row] + [MIN_BOX_HEIGHT])
        for i, ticket in enumerate(row):
            positions[ticket.key] = Position(
                x=FRAME_INNER_PADDING + i * (BOX_WIDTH + HORIZONTAL_GAP),
                y=y,
                height=heights[ticket.key],
                width=BOX_WIDTH,
            )
        y += row_height + VERTICAL_GAP

    return GroupLayout(positions=positions, bounding_box=_envelope(list(positions.values())))


def pack_frames(
    layouts: list[GroupLayout],
    start_x: float = DIAGRAM_PADDING,
) -> tuple[list[GroupLayout], list[FrameSlot]]:
    """Place group layouts side by side, left to right, in the given order.

    A group is moved by a rigid horizontal translation so that its bounding
    box, widened by ``FRAME_BORDER_BUFFER`` on each side, fills the next slot.
    Slots are separated by ``FRAME_GAP``. Input layouts are not modified.
    """
    packed: list[GroupLayout] = []
    slots: list[FrameSlot] = []
    cursor = start_x
    for layout in layouts:
        box = layout.bounding_box
        width = box.width + 2 * FRAME_BORDER_BUFFER
        shift = cursor - (box.min_x - FRAME_BORDER_BUFFER)
        positions = {
            key: Position(x=p.x + shift, y=p.y, height=p.height, width=p.width)
            for key, p in layout.positions.items()
        }
        packed.append(GroupLayout(positions=positions, bounding_box=box.translated(dx=shift)))
        slots.append(FrameSlot(x=cursor, y=box.min_y - FRAME_INNER_PADDING, width=width))
        cursor += width + FRAME_GAP
    return packed, slots


def layout_unframed(
    unframed: list[Ticket],
    heights: dict[str, float],
    top_y: float,
) -> dict[str, Position]:
    """Place unframed tickets in a single left-to-right row at ``top_y``."""
    return {
        ticket.key: Position(
            x=DIAGRAM_PADDING + FRAME_INNER_PADDING + i * (BOX_WIDTH + HORIZONTAL_GAP),
            y=top_y,
            height=heights[ticket.key],
            width=BOX_WIDTH,
        )
        for i, ticket in enumerate(unframed)
    }
