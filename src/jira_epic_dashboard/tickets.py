"""Conversion of raw Jira issues into dashboard tickets."""

from jira_epic_dashboard.jira_client import BLOCKS_LINK_TYPE
from jira_epic_dashboard.models import Ticket


def team_value(value) -> str | None:
    """Read a team custom field stored either as text or as an option object."""
    if isinstance(value, dict):
        value = value.get("value")
    if isinstance(value, str) and value.strip():
        return value
    return None


def _blocking_keys(issue_links: list[dict]) -> tuple[list[str], list[str]]:
    """Split "Blocks" links into (blocks, blocked_by) issue keys."""
    blocks: list[str] = []
    blocked_by: list[str] = []
    for link in issue_links:
        if link.get("type", {}).get("name") != BLOCKS_LINK_TYPE:
            continue
        outward = link.get("outwardIssue")
        if outward and outward.get("key"):
            blocks.append(outward["key"])
        inward = link.get("inwardIssue")
        if inward and inward.get("key"):
            blocked_by.append(inward["key"])
    return blocks, blocked_by


def issue_to_ticket(
    issue: dict,
    story_points_field: str,
    team_field: str | None = None,
    open_sprint_keys: set[str] | None = None,
) -> Ticket:
    """Build a Ticket from a raw ``{"key", "fields"}`` issue dict."""
    fields = issue.get("fields", {})
    blocks, blocked_by = _blocking_keys(fields.get("issuelinks") or [])
    assignee = fields.get("assignee") or {}
    parent = fields.get("parent") or {}

    return Ticket(
        key=issue["key"],
        summary=fields.get("summary") or "",
        type=(fields.get("issuetype") or {}).get("name", "Unknown"),
        status=(fields.get("status") or {}).get("name", "Unknown"),
        blocks=blocks,
        blocked_by=blocked_by,
        assignee=assignee.get("displayName") or "Unassigned",
        story_points=fields.get(story_points_field),
        is_current_sprint=issue["key"] in (open_sprint_keys or set()),
        team=team_value(fields.get(team_field)) if team_field else None,
        labels=list(fields.get("labels") or []),
        epic=parent.get("fields", {}).get("summary"),
        priority=(fields.get("priority") or {}).get("name"),
        created=fields.get("created"),
        updated=fields.get("updated"),
    )


def list_ticket_teams(tickets: list[Ticket]) -> list[str]:
    """Sorted distinct team names of the tickets."""
    return sorted({t.team for t in tickets if t.team})


def filter_by_team(tickets: list[Ticket], team: str | None) -> list[Ticket]:
    """Keep only tickets of ``team``; no team means no filtering."""
    if not team:
        return list(tickets)
    return [t for t in tickets if t.team == team]


def ticket_to_dict(ticket: Ticket) -> dict:
    """Convert a Ticket to the JSON shape used by the frontend."""
    return {
        "key": ticket.key,
        "summary": ticket.summary,
        "type": ticket.type,
        "status": ticket.status,
        "blocks": list(ticket.blocks),
        "blockedBy": list(ticket.blocked_by),
        "assignee": ticket.assignee,
        "storyPoints": ticket.story_points,
        "isCurrentSprint": ticket.is_current_sprint,
        "team": ticket.team,
        "labels": list(ticket.labels),
        "epic": ticket.epic,
        "priority": ticket.priority,
        "created": ticket.created,
        "updated": ticket.updated,
    }


def _optional_str(data: dict, name: str) -> str | None:
    value = data.get(name)
    if value is not None and not isinstance(value, str):
        raise TypeError(f"'{name}' must be a string, got {type(value).__name__}")
    return value


def _str_list(data: dict, name: str) -> list[str]:
    value = data.get(name)
    if value is None:
        return []
    if not isinstance(value, list):
        raise TypeError(f"'{name}' must be a list, got {type(value).__name__}")
    return [str(item) for item in value]


def ticket_from_dict(data: dict) -> Ticket:
    """Build a Ticket from its JSON shape; only ``key`` is required.

    Raises:
        KeyError: If ``key`` is missing
        TypeError: If a text field is not a string or a key list is not a list
    """
    return Ticket(
        key=str(data["key"]),
        summary=_optional_str(data, "summary") or "",
        type=_optional_str(data, "type") or "Unknown",
        status=_optional_str(data, "status") or "Unknown",
        blocks=_str_list(data, "blocks"),
        blocked_by=_str_list(data, "blockedBy"),
        assignee=data.get("assignee"),
        story_points=data.get("storyPoints"),
        is_current_sprint=bool(data.get("isCurrentSprint", False)),
        team=team_value(data.get("team")),
        labels=_str_list(data, "labels"),
        epic=data.get("epic"),
        priority=data.get("priority"),
        created=data.get("created"),
        updated=data.get("updated"),
    )
