"""Assign row levels to the tickets of one group."""

from collections import deque

from jira_epic_dashboard.models import Ticket


def _in_group_blocks(ticket: Ticket, group_keys: set[str]) -> list[str]:
    return [k for k in ticket.blocks if k in group_keys and k != ticket.key]


def find_frame_roots(group: list[Ticket]) -> set[str]:
    """Keys of tickets that block nothing else inside the group."""
    group_keys = {t.key for t in group}
    return {t.key for t in group if not _in_group_blocks(t, group_keys)}


def build_level_map(group: list[Ticket]) -> dict[str, int]:
    """Compute each ticket's level within its group.

    Leaves (tickets blocking nothing in the group) sit at level 0 and a
    blocker sits at least one level above every ticket it blocks:
    ``level(p) >= level(t) + 1`` for each in-group ``t`` in ``p.blocks``.

    Propagation uses a worklist and only re-queues a ticket when its level
    strictly increases. Levels are capped at ``len(group) - 1``, so on cyclic
    input every ticket can rise at most that many times and the loop
    terminates. Tickets unreachable from any leaf (pure cycles) are seeded
    at level 0 so that every group member receives a level.
    """
    group_keys = {t.key for t in group}
    max_level = max(len(group) - 1, 0)

    # blocked key -> tickets that block it, in group order
    blockers: dict[str, list[str]] = {t.key: [] for t in group}
    for ticket in group:
        for blocked in _in_group_blocks(ticket, group_keys):
            if ticket.key not in blockers[blocked]:
                blockers[blocked].append(ticket.key)

    levels: dict[str, int] = {}

    def propagate(seeds: list[str]) -> None:
        queue = deque(seeds)
        while queue:
            key = queue.popleft()
            proposed = levels[key] + 1
            if proposed > max_level:
                continue
            for parent in blockers[key]:
                if levels.get(parent, -1) < proposed:
                    levels[parent] = proposed
                    queue.append(parent)

    leaves = [t.key for t in group if not _in_group_blocks(t, group_keys)]
    for key in leaves:
        levels[key] = 0
    propagate(leaves)

    for ticket in group:
        if ticket.key not in levels:
            levels[ticket.key] = 0
            propagate([ticket.key])

    return levels
