"""Epic data fetching, diagram building and issue linking."""

from jira_epic_dashboard.config import Config
from jira_epic_dashboard.diagram import compute_diagram_layout, layout_to_dict
from jira_epic_dashboard.exceptions import (
    DashboardError,
    InvalidLinkTypeError,
    MissingParameterError,
)
from jira_epic_dashboard.logging import get_logger
from jira_epic_dashboard.models import EpicDiagram, EpicSummary, Project
from jira_epic_dashboard.session import jira_errors, open_client
from jira_epic_dashboard.tickets import (
    filter_by_team,
    issue_to_ticket,
    list_ticket_teams,
    team_value,
    ticket_to_dict,
)

logger = get_logger(__name__)

# link type requested by the UI -> which side of the "Blocks" link the source ticket is on
LINK_DIRECTIONS = {
    "blocks": "inward",
    "is blocked by": "outward",
}


def _project_clause(project: str | None) -> str:
    return f'project = "{project}" AND ' if project else ""


def _resolve_project(config: Config, project: str | None) -> str | None:
    return project or config.default_project


def list_projects() -> list[Project]:
    """List every Jira project visible to the configured user."""
    _, client = open_client()
    with jira_errors():
        raw_projects = client.list_projects()
    return [Project(key=p["key"], name=p["name"]) for p in raw_projects]


def list_epics(project: str | None = None) -> list[EpicSummary]:
    """List a project's epics, newest first.

    Raises:
        MissingParameterError: If no project is given and none is configured
    """
    config, client = open_client()
    project = _resolve_project(config, project)
    if not project:
        raise MissingParameterError("Project parameter is required")

    jql = f'project = "{project}" AND issuetype = Epic ORDER BY created DESC'
    with jira_errors():
        raw_epics = client.search_issues(
            jql, fields=["summary", "status", config.epic_name_field, config.team_field]
        )

    return [
        EpicSummary(
            key=issue["key"],
            name=issue.get("fields", {}).get("summary") or "",
            epic_name=issue.get("fields", {}).get(config.epic_name_field),
            team=team_value(issue.get("fields", {}).get(config.team_field)),
        )
        for issue in raw_epics
    ]


def fetch_epic(epic_key: str, project: str | None = None, team: str | None = None) -> EpicDiagram:
    """Fetch an epic's tickets and lay them out as a dependency diagram.

    Args:
        epic_key: Key of the epic
        project: Project the tickets belong to; defaults to the configured one
        team: Optional team; only that team's tickets are laid out

    Raises:
        ConfigNotFoundError: If config file not found
        InvalidConfigError: If config is invalid
        JiraAuthError: If Jira authentication fails
        JiraRateLimitError: If rate limited
        JiraConnectionError: If cannot connect
        InvalidJqlError: If the epic key produces invalid JQL
    """
    config, client = open_client()
    project = _resolve_project(config, project)
    clause = _project_clause(project)

    fields = [
        "summary",
        "issuetype",
        "status",
        "issuelinks",
        "assignee",
        "labels",
        "parent",
        "priority",
        "created",
        "updated",
        config.story_points_field,
        config.team_field,
    ]
    jql = f'{clause}"Epic Link" = {epic_key} AND status != "Archived" ORDER BY Rank ASC'
    with jira_errors():
        raw_issues = client.search_issues(jql, fields=fields)
    logger.info("Fetched %d tickets for epic %s", len(raw_issues), epic_key)

    # Sprint membership only highlights tickets; losing it must not fail the diagram
    open_sprint_keys: set[str] = set()
    try:
        with jira_errors():
            sprint_issues = client.search_issues(
                f"{clause}Sprint in openSprints()", fields=["key"]
            )
        open_sprint_keys = {issue["key"] for issue in sprint_issues}
    except DashboardError as e:
        logger.warning("Cannot fetch open sprint issues for %s: %s", epic_key, e)

    tickets = [
        issue_to_ticket(issue, config.story_points_field, config.team_field, open_sprint_keys)
        for issue in raw_issues
    ]
    shown = filter_by_team(tickets, team)

    return EpicDiagram(
        epic_key=epic_key,
        tickets=shown,
        teams=list_ticket_teams(tickets),
        layout=compute_diagram_layout(shown),
        team=team,
    )


def link_issues(from_key: str, to_key: str, link_type: str) -> None:
    """Create a blocking link between two tickets.

    ``link_type`` is "blocks" (``from_key`` blocks ``to_key``) or
    "is blocked by" (``to_key`` blocks ``from_key``).

    Raises:
        InvalidLinkTypeError: For any other link type
    """
    direction = LINK_DIRECTIONS.get(link_type)
    if direction is None:
        raise InvalidLinkTypeError(
            f"Invalid link type {link_type!r}. Use one of: {', '.join(LINK_DIRECTIONS)}"
        )
    if direction == "inward":
        inward, outward = from_key, to_key
    else:
        inward, outward = to_key, from_key

    _, client = open_client()
    with jira_errors():
        client.create_blocks_link(inward_key=inward, outward_key=outward)
    logger.info("Linked %s %s %s", from_key, link_type, to_key)


def delete_all_links(issue_key: str) -> int:
    """Remove every issue link from a ticket.

    Links that fail to delete are logged and skipped.

    Returns:
        Number of links deleted
    """
    _, client = open_client()
    with jira_errors():
        link_ids = client.list_issue_link_ids(issue_key)

    deleted = 0
    for link_id in link_ids:
        try:
            with jira_errors():
                client.delete_issue_link(link_id)
            deleted += 1
        except DashboardError as e:
            logger.warning("Cannot delete link %s of %s: %s", link_id, issue_key, e)

    logger.info("Deleted %d of %d links from %s", deleted, len(link_ids), issue_key)
    return deleted


def epic_summary_to_dict(epic: EpicSummary) -> dict:
    return {"key": epic.key, "name": epic.name, "epicName": epic.epic_name, "team": epic.team}


def epic_diagram_to_dict(diagram: EpicDiagram) -> dict:
    """Convert an EpicDiagram to a JSON-serializable dict."""
    return {
        "epicId": diagram.epic_key,
        "epicName": diagram.epic_key,
        "tickets": [ticket_to_dict(t) for t in diagram.tickets],
        "teams": diagram.teams,
        "team": diagram.team,
        "layout": layout_to_dict(diagram.layout),
    }
