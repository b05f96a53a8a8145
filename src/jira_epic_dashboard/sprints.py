"""Board, sprint and team data fetching."""

import re

from jira_epic_dashboard.exceptions import (
    BoardNotFoundError,
    DashboardError,
    MissingParameterError,
    NoActiveSprintError,
)
from jira_epic_dashboard.jira_client import JiraClient
from jira_epic_dashboard.logging import get_logger
from jira_epic_dashboard.models import Board, SprintInfo, SprintTickets, Team
from jira_epic_dashboard.session import jira_errors, open_client
from jira_epic_dashboard.tickets import issue_to_ticket, ticket_to_dict

logger = get_logger(__name__)

SPRINT_TICKET_FIELDS = [
    "summary",
    "issuetype",
    "status",
    "assignee",
    "labels",
    "created",
    "updated",
    "priority",
    "parent",
]
TEAM_LABEL_MARKER = "team"
ALL_TEAMS = Team(key="ALL", name="All Teams")


def _require_project(project: str | None) -> str:
    if not project:
        raise MissingParameterError("Project parameter is required")
    return project


def _to_board(raw: dict) -> Board:
    return Board(
        id=raw["id"],
        name=raw.get("name", ""),
        type=raw.get("type", ""),
        project_key=raw.get("location", {}).get("projectKey"),
    )


def _project_boards(client: JiraClient, project: str) -> list[Board]:
    with jira_errors():
        raw_boards = client.list_boards(project)
    # Boards reachable through a project filter can live in other projects
    return [b for b in map(_to_board, raw_boards) if b.project_key == project]


def _find_board(client: JiraClient, project: str, board_id: str | None) -> Board:
    boards = _project_boards(client, project)
    if board_id:
        boards = [b for b in boards if str(b.id) == str(board_id)]
    if not boards:
        raise BoardNotFoundError(f"No board found for project {project}")
    return boards[0]


def _date_part(value: str | None) -> str | None:
    return value.split("T")[0] if value else None


def clean_board_filter(jql: str, project: str) -> str:
    """Strip ordering and the project restriction from a board filter's JQL."""
    jql = re.sub(r"ORDER BY.*$", "", jql, flags=re.IGNORECASE | re.DOTALL).strip()
    jql = re.sub(
        rf'AND\s+project\s*=\s*"?{re.escape(project)}"?', "", jql, flags=re.IGNORECASE
    ).strip()
    return re.sub(r"^\s*AND\s*", "", jql, flags=re.IGNORECASE).strip()


def list_boards(project: str | None) -> list[Board]:
    """List the agile boards located in a project."""
    project = _require_project(project)
    _, client = open_client()
    boards = _project_boards(client, project)
    logger.info("Found %d boards for project %s", len(boards), project)
    return boards


def fetch_sprint_dates(project: str | None, board: str | None = None) -> SprintInfo:
    """Return the first active or future sprint of a project's board.

    Raises:
        BoardNotFoundError: If the project has no (matching) board
        NoActiveSprintError: If the board has no active or future sprint
    """
    project = _require_project(project)
    _, client = open_client()
    found = _find_board(client, project, board)

    with jira_errors():
        sprints = client.list_sprints(found.id)
    current = next((s for s in sprints if s.get("state") in ("active", "future")), None)
    if current is None:
        raise NoActiveSprintError(f"Board {found.name} has no active or future sprint")

    return SprintInfo(
        sprint_id=str(current["id"]),
        name=current.get("name", ""),
        start_date=_date_part(current.get("startDate")),
        end_date=_date_part(current.get("endDate")),
    )


def _board_scope(client: JiraClient, project: str, board: str) -> tuple[str | None, dict | None]:
    """Return (cleaned filter JQL, active sprint) for a board.

    Either part is None when Jira cannot provide it.
    """
    board_filter = None
    active_sprint = None
    try:
        with jira_errors():
            raw_filter = client.get_board_filter_jql(int(board))
        if raw_filter:
            board_filter = clean_board_filter(raw_filter, project) or None
        with jira_errors():
            active = client.list_sprints(int(board), state="active")
        active_sprint = active[0] if active else None
    except (DashboardError, ValueError) as e:
        logger.warning("Cannot read board %s: %s", board, e)
    return board_filter, active_sprint


def fetch_sprint_tickets(project: str | None, board: str | None = None) -> SprintTickets:
    """Fetch the tickets of a board's active sprint.

    The board's saved filter scopes the search when available, otherwise the
    whole project. Without a board filter and without an active sprint the
    result is empty.
    """
    project = _require_project(project)
    config, client = open_client()

    board_filter, active_sprint = None, None
    if board:
        board_filter, active_sprint = _board_scope(client, project, board)
    sprint_id = active_sprint["id"] if active_sprint else None

    jql = board_filter or f'project = "{project}"'
    if sprint_id is not None:
        jql += f" AND sprint = {sprint_id}"
    elif not board_filter:
        logger.info("No active sprint for board %s, returning no tickets", board)
        return SprintTickets(
            tickets=[],
            total=0,
            sprint_name="No Active Sprint",
            date_range="No Active Sprint",
            active_sprint_id=None,
        )

    with jira_errors():
        raw_issues = client.search_issues(
            jql, fields=SPRINT_TICKET_FIELDS + [config.story_points_field, config.team_field]
        )
    tickets = [
        issue_to_ticket(issue, config.story_points_field, config.team_field)
        for issue in raw_issues
    ]

    return SprintTickets(
        tickets=tickets,
        total=len(tickets),
        sprint_name=active_sprint.get("name", "") if active_sprint else f"{project} Sprint",
        date_range=f"Sprint {sprint_id}" if sprint_id is not None else "Active Sprint",
        active_sprint_id=sprint_id,
    )


def list_teams(project: str | None) -> list[Team]:
    """List selectable teams: active assignees and team labels of recent issues."""
    project = _require_project(project)
    _, client = open_client()

    jql = f'project = "{project}" AND assignee IS NOT EMPTY ORDER BY updated DESC'
    with jira_errors():
        raw_issues = client.search_issues(jql, fields=["assignee", "labels"], max_results=200)

    assignees: dict[str, Team] = {}
    labels: list[str] = []
    for issue in raw_issues:
        fields = issue.get("fields", {})
        assignee = fields.get("assignee")
        if assignee and assignee.get("active", True):
            account_id = assignee.get("accountId") or assignee.get("displayName")
            if account_id and account_id not in assignees:
                assignees[account_id] = Team(key=account_id, name=assignee.get("displayName", ""))
        for label in fields.get("labels") or []:
            if TEAM_LABEL_MARKER in label.lower() and label not in labels:
                labels.append(label)

    return [ALL_TEAMS, *assignees.values(), *(Team(key=lb.upper(), name=lb) for lb in labels)]


def board_to_dict(board: Board) -> dict:
    return {"id": board.id, "name": board.name, "type": board.type, "projectKey": board.project_key}


def sprint_info_to_dict(info: SprintInfo) -> dict:
    return {
        "startDate": info.start_date,
        "endDate": info.end_date,
        "sprintName": info.name,
        "sprintId": info.sprint_id,
    }


def sprint_tickets_to_dict(result: SprintTickets) -> dict:
    return {
        "tickets": [ticket_to_dict(t) for t in result.tickets],
        "total": result.total,
        "sprintName": result.sprint_name,
        "dateRange": result.date_range,
        "activeSprintId": result.active_sprint_id,
    }
