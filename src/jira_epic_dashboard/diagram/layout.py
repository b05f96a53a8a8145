"""Diagram layout pipeline and coordinate finalization.

``compute_diagram_layout`` is a pure function of the ticket list: it groups
tickets, assigns levels, sizes boxes, lays out and packs frames, places the
unframed row and finally shifts everything into canvas coordinates. It
neither mutates its input nor keeps state between calls.
"""

from jira_epic_dashboard.diagram.constants import (
    DIAGRAM_PADDING,
    FRAME_INNER_PADDING,
    UNFRAMED_GAP,
    Y_OFFSET,
)
from jira_epic_dashboard.diagram.frames import layout_group, layout_unframed, pack_frames
from jira_epic_dashboard.diagram.grouping import group_tickets
from jira_epic_dashboard.diagram.levels import build_level_map, find_frame_roots
from jira_epic_dashboard.diagram.sizing import estimate_height
from jira_epic_dashboard.models import (
    BoundingBox,
    DiagramLayout,
    FrameSlot,
    Position,
    Ticket,
)


def finalize_layout(
    positions: dict[str, Position],
    frame_boxes: list[BoundingBox],
    frame_slots: list[FrameSlot],
    y_offset: float = Y_OFFSET,
    padding: float = DIAGRAM_PADDING,
) -> tuple[dict[str, Position], list[BoundingBox], list[FrameSlot], BoundingBox]:
    """Shift a relative layout vertically and compute the canvas rectangle.

    Every position, frame box and frame slot moves down by ``y_offset``. The
    canvas is the envelope of all ticket boxes grown by ``padding`` on each
    side, or an empty rectangle at the origin when there are no tickets.
    """
    shifted = {
        key: Position(x=p.x, y=p.y + y_offset, height=p.height, width=p.width)
        for key, p in positions.items()
    }
    boxes = [box.translated(dy=y_offset) for box in frame_boxes]
    slots = [FrameSlot(x=s.x, y=s.y + y_offset, width=s.width) for s in frame_slots]

    if not shifted:
        return shifted, boxes, slots, BoundingBox(0, 0, 0, 0)

    canvas = BoundingBox(
        min_x=min(p.x for p in shifted.values()) - padding,
        min_y=min(p.y for p in shifted.values()) - padding,
        max_x=max(p.x + p.width for p in shifted.values()) + padding,
        max_y=max(p.y + p.height for p in shifted.values()) + padding,
    )
    return shifted, boxes, slots, canvas


def compute_diagram_layout(tickets: list[Ticket]) -> DiagramLayout:
    """Lay out tickets as framed dependency groups plus an unframed row."""
    groups, unframed = group_tickets(tickets)
    heights = {t.key: estimate_height(t) for group in groups for t in group}
    heights.update({t.key: estimate_height(t) for t in unframed})

    frame_top = DIAGRAM_PADDING
    levels: dict[str, int] = {}
    frame_roots: set[str] = set()
    group_layouts = []
    for group in groups:
        level_map = build_level_map(group)
        levels.update(level_map)
        frame_roots |= find_frame_roots(group)
        group_layouts.append(layout_group(group, level_map, heights, top_y=frame_top))

    packed, slots = pack_frames(group_layouts)

    positions: dict[str, Position] = {}
    for group_layout in packed:
        positions.update(group_layout.positions)
    frame_boxes = [group_layout.bounding_box for group_layout in packed]

    tallest = max((box.height for box in frame_boxes), default=0)
    unframed_y = frame_top + tallest + UNFRAMED_GAP + FRAME_INNER_PADDING
    positions.update(layout_unframed(unframed, heights, unframed_y))

    positions, frame_boxes, slots, canvas = finalize_layout(positions, frame_boxes, slots)

    return DiagramLayout(
        positions=positions,
        levels=levels,
        groups=groups,
        unframed=unframed,
        frame_boxes=frame_boxes,
        frame_slots=slots,
        frame_roots=frame_roots,
        canvas=canvas,
    )


def layout_to_dict(layout: DiagramLayout) -> dict:
    """Convert a DiagramLayout to the JSON shape the frontend renders."""

    def _box_dict(box: BoundingBox) -> dict:
        return {"minX": box.min_x, "minY": box.min_y, "maxX": box.max_x, "maxY": box.max_y}

    return {
        "positions": {key: {"x": p.x, "y": p.y} for key, p in layout.positions.items()},
        "ticketHeights": {key: p.height for key, p in layout.positions.items()},
        "levels": dict(layout.levels),
        "frameBoundingBoxes": [_box_dict(box) for box in layout.frame_boxes],
        "framePositions": [
            {"x": s.x, "y": s.y, "width": s.width, "groupIdx": i}
            for i, s in enumerate(layout.frame_slots)
        ],
        "frameRoots": sorted(layout.frame_roots),
        "groupedKeys": sorted(layout.grouped_keys),
        "groups": [[t.key for t in group] for group in layout.groups],
        "unframed": [t.key for t in layout.unframed],
        "canvas": {
            **_box_dict(layout.canvas),
            "width": layout.canvas.width,
            "height": layout.canvas.height,
        },
    }
