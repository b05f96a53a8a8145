"""HTTP route handlers for the Jira epic dashboard API."""

from flask import Blueprint, jsonify, request

from jira_epic_dashboard.config import config_exists
from jira_epic_dashboard.demo import demo_epic
from jira_epic_dashboard.diagram import compute_diagram_layout, layout_to_dict
from jira_epic_dashboard.epics import (
    delete_all_links,
    epic_diagram_to_dict,
    epic_summary_to_dict,
    fetch_epic,
    link_issues,
    list_epics,
    list_projects,
)
from jira_epic_dashboard.exceptions import (
    BoardNotFoundError,
    ConfigNotFoundError,
    DashboardError,
    InvalidConfigError,
    InvalidJqlError,
    InvalidLinkTypeError,
    IssueNotFoundError,
    JiraAuthError,
    JiraConnectionError,
    JiraRateLimitError,
    MissingParameterError,
    NoActiveSprintError,
)
from jira_epic_dashboard.logging import get_logger
from jira_epic_dashboard.metrics import calculate_sprint_metrics, sprint_metrics_to_dict
from jira_epic_dashboard.sprints import (
    board_to_dict,
    fetch_sprint_dates,
    fetch_sprint_tickets,
    list_boards,
    list_teams,
    sprint_info_to_dict,
    sprint_tickets_to_dict,
)
from jira_epic_dashboard.tickets import ticket_from_dict

logger = get_logger(__name__)

bp = Blueprint("main", __name__)

ERROR_STATUS = {
    ConfigNotFoundError: 503,
    InvalidConfigError: 503,
    JiraAuthError: 401,
    JiraRateLimitError: 429,
    JiraConnectionError: 503,
    InvalidJqlError: 400,
    InvalidLinkTypeError: 400,
    MissingParameterError: 400,
    IssueNotFoundError: 404,
    BoardNotFoundError: 404,
    NoActiveSprintError: 404,
}


@bp.errorhandler(DashboardError)
def handle_dashboard_error(e: DashboardError):
    """Render a DashboardError as a JSON error response."""
    status = ERROR_STATUS.get(type(e), 500)
    if status >= 500:
        logger.error("%s: %s", type(e).__name__, e)
    return jsonify({"error": str(e)}), status


def _json_body() -> dict:
    body = request.get_json(silent=True)
    return body if isinstance(body, dict) else {}


@bp.route("/health")
def health():
    """Health check endpoint."""
    config_loaded = config_exists()
    if config_loaded:
        return jsonify({"status": "ok", "config_loaded": True})
    else:
        return jsonify({
            "status": "error",
            "config_loaded": False,
            "message": "Configuration not found",
        }), 503


@bp.route("/api/projects")
def api_projects():
    """List Jira projects."""
    projects = list_projects()
    return jsonify([{"key": p.key, "name": p.name} for p in projects])


@bp.route("/api/epics")
def api_epics():
    """List a project's epics."""
    epics = list_epics(request.args.get("project"))
    return jsonify([epic_summary_to_dict(e) for e in epics])


@bp.route("/api/epic/<epic_key>")
def api_epic(epic_key: str):
    """Return an epic's tickets with their diagram layout."""
    diagram = fetch_epic(
        epic_key,
        project=request.args.get("project"),
        team=request.args.get("team") or None,
    )
    return jsonify(epic_diagram_to_dict(diagram))


@bp.route("/api/demo/epic")
def api_demo_epic():
    """Return the built-in demo epic (no Jira credentials needed)."""
    return jsonify(epic_diagram_to_dict(demo_epic(team=request.args.get("team") or None)))


@bp.route("/api/layout", methods=["POST"])
def api_layout():
    """Lay out tickets posted as JSON: {"tickets": [...]}."""
    tickets_data = _json_body().get("tickets")
    if not isinstance(tickets_data, list):
        raise MissingParameterError("Request body must contain a 'tickets' list")
    try:
        tickets = [ticket_from_dict(item) for item in tickets_data]
    except (KeyError, TypeError, AttributeError) as e:
        raise MissingParameterError(f"Invalid ticket in 'tickets': {e}")
    return jsonify(layout_to_dict(compute_diagram_layout(tickets)))


@bp.route("/api/link-issue", methods=["POST"])
def api_link_issue():
    """Create a blocking link between two tickets."""
    body = _json_body()
    from_key, to_key, link_type = body.get("from"), body.get("to"), body.get("type")
    if not from_key or not to_key or not link_type:
        raise MissingParameterError("Missing from, to, or type in request body")
    link_issues(from_key, to_key, link_type)
    return jsonify({"success": True})


@bp.route("/api/delete-all-links", methods=["POST"])
def api_delete_all_links():
    """Delete every issue link of a ticket."""
    key = _json_body().get("key")
    if not key:
        raise MissingParameterError("Missing ticket key")
    deleted = delete_all_links(key)
    return jsonify({"success": True, "deleted": deleted})


@bp.route("/api/boards")
def api_boards():
    """List a project's agile boards."""
    boards = list_boards(request.args.get("project"))
    return jsonify([board_to_dict(b) for b in boards])


@bp.route("/api/sprint-dates")
def api_sprint_dates():
    """Return the current sprint of a project's board."""
    info = fetch_sprint_dates(request.args.get("project"), request.args.get("board"))
    return jsonify(sprint_info_to_dict(info))


@bp.route("/api/sprint-tickets")
def api_sprint_tickets():
    """Return the tickets of a board's active sprint."""
    result = fetch_sprint_tickets(request.args.get("project"), request.args.get("board"))
    return jsonify(sprint_tickets_to_dict(result))


@bp.route("/api/sprint-metrics")
def api_sprint_metrics():
    """Return the sprint report for a board's active sprint."""
    result = fetch_sprint_tickets(request.args.get("project"), request.args.get("board"))
    return jsonify({
        "sprintName": result.sprint_name,
        "activeSprintId": result.active_sprint_id,
        "metrics": sprint_metrics_to_dict(calculate_sprint_metrics(result.tickets)),
    })


@bp.route("/api/teams")
def api_teams():
    """List selectable teams of a project."""
    teams = list_teams(request.args.get("project"))
    return jsonify([{"key": t.key, "name": t.name} for t in teams])
