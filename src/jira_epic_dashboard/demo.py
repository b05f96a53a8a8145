"""Built-in demo epic, usable without Jira credentials."""

from jira_epic_dashboard.diagram import compute_diagram_layout
from jira_epic_dashboard.models import EpicDiagram, Ticket
from jira_epic_dashboard.tickets import filter_by_team, list_ticket_teams

DEMO_EPIC_KEY = "DEMO-1"


def demo_tickets() -> list[Ticket]:
    """Tickets of the demo epic.

    Contains a three-step chain, a diamond, a link to a ticket outside the
    epic and a few tickets without any blocking relation.
    """
    return [
        # Chain: schema -> API -> UI
        Ticket(key="DEMO-2", summary="Design the storage schema for saved reports",
               type="Task", status="Done", blocks=["DEMO-3"],
               assignee="Ada Lovelace", story_points=3, team="Platform"),
        Ticket(key="DEMO-3", summary="Expose report endpoints in the public API",
               type="Story", status="In Progress", blocks=["DEMO-4"], blocked_by=["DEMO-2"],
               assignee="Grace Hopper", story_points=5, is_current_sprint=True, team="Platform"),
        Ticket(key="DEMO-4", summary="Report builder UI",
               type="Story", status="To Do", blocked_by=["DEMO-3"],
               assignee="Alan Turing", story_points=8, team="Web"),
        # Diamond: auth blocks two features which both block the release checklist
        Ticket(key="DEMO-5", summary="Single sign-on via the company identity provider",
               type="Story", status="In Progress", blocks=["DEMO-6", "DEMO-7"],
               assignee="Barbara Liskov", story_points=5, is_current_sprint=True, team="Platform"),
        Ticket(key="DEMO-6", summary="Share reports with teammates",
               type="Story", status="To Do", blocks=["DEMO-8"], blocked_by=["DEMO-5"],
               story_points=3, team="Web"),
        Ticket(key="DEMO-7", summary="Scheduled report e-mails",
               type="Story", status="To Do", blocks=["DEMO-8"], blocked_by=["DEMO-5"],
               assignee="Edsger Dijkstra", story_points=5, team="Platform"),
        Ticket(key="DEMO-8", summary="Release checklist and rollout plan for customers on the enterprise tier",
               type="Task", status="To Do", blocked_by=["DEMO-6", "DEMO-7"],
               assignee="Ada Lovelace", story_points=2, team="Platform"),
        # Blocked by an issue outside this epic only
        Ticket(key="DEMO-9", summary="Upgrade charting library",
               type="Task", status="To Do", blocked_by=["INFRA-42"],
               assignee="Grace Hopper", story_points=1, team="Web"),
        Ticket(key="DEMO-10", summary="Fix date picker timezone bug",
               type="Bug", status="Accepted", assignee="Alan Turing",
               story_points=2, team="Web"),
        Ticket(key="DEMO-11", summary="Document report permissions",
               type="Task", status="To Do", story_points=1, team="Platform"),
    ]


def demo_epic(team: str | None = None) -> EpicDiagram:
    """Lay out the demo epic, optionally for one team only."""
    tickets = demo_tickets()
    shown = filter_by_team(tickets, team)
    return EpicDiagram(
        epic_key=DEMO_EPIC_KEY,
        tickets=shown,
        teams=list_ticket_teams(tickets),
        layout=compute_diagram_layout(shown),
        team=team,
    )
