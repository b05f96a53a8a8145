"""Partition tickets into connected groups under the blocking relation."""

from jira_epic_dashboard.models import Ticket


def _linked_keys(ticket: Ticket, known: dict[str, Ticket]) -> list[str]:
    """Keys this ticket blocks or is blocked by that exist in the ticket set.

    Dangling references and self references are dropped.
    """
    return [
        key
        for key in (*ticket.blocks, *ticket.blocked_by)
        if key in known and key != ticket.key
    ]


def group_tickets(tickets: list[Ticket]) -> tuple[list[list[Ticket]], list[Ticket]]:
    """Split tickets into frames (connected groups) and unframed tickets.

    Two tickets share a group iff a path of ``blocks``/``blocked_by`` edges
    between keys present in ``tickets`` connects them. A ticket without any
    such edge is unframed, including one whose only links point at tickets
    outside the set.

    Groups come back in discovery order; members in traversal order.
    """
    ticket_map: dict[str, Ticket] = {}
    for ticket in tickets:
        ticket_map.setdefault(ticket.key, ticket)

    visited: set[str] = set()
    groups: list[list[Ticket]] = []

    for ticket in ticket_map.values():
        if ticket.key in visited or not _linked_keys(ticket, ticket_map):
            continue

        group: list[Ticket] = []
        stack = [ticket.key]
        while stack:
            key = stack.pop()
            if key in visited:
                continue
            visited.add(key)
            current = ticket_map[key]
            group.append(current)
            # Reversed so neighbours are visited in declaration order
            for linked in reversed(_linked_keys(current, ticket_map)):
                if linked not in visited:
                    stack.append(linked)
        groups.append(group)

    unframed = [t for t in ticket_map.values() if t.key not in visited]
    return groups, unframed
