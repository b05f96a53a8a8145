"""Sprint metrics aggregation over sprint tickets."""

from collections.abc import Callable

from jira_epic_dashboard.models import (
    AssigneeStats,
    Breakdown,
    EstimationAccuracy,
    SprintMetrics,
    Ticket,
    TicketAccuracy,
)

COMPLETED_STATUSES = frozenset({"Done", "Closed", "Resolved", "Accepted"})
IN_PROGRESS_STATUSES = frozenset({"In Progress", "QA", "Review"})

# Unfinished tickets are assumed half done
IN_PROGRESS_COMPLETION = 0.5


def _round1(value: float) -> float:
    return round(value * 10) / 10


def _percent(part: float, whole: float) -> int:
    return round(part / whole * 100) if whole else 0


def _points(ticket: Ticket) -> float:
    return ticket.story_points or 0


def is_completed(ticket: Ticket) -> bool:
    return ticket.status in COMPLETED_STATUSES


def label_category(ticket: Ticket) -> str:
    """Classify a ticket by its labels; unlabelled work counts as planned."""
    labels = ticket.labels or []
    if "claude" in labels:
        return "Claude"
    if "unplanned" in labels:
        return "Unplanned"
    if "extra" in labels:
        return "Extra"
    return "Planned"


def _breakdown(
    tickets: list[Ticket], key: Callable[[Ticket], str], total_points: float
) -> list[Breakdown]:
    totals: dict[str, list[float]] = {}
    for ticket in tickets:
        entry = totals.setdefault(key(ticket), [0, 0])
        entry[0] += 1
        entry[1] += _points(ticket)
    rows = [
        Breakdown(
            name=name,
            tickets=int(count),
            story_points=_round1(points),
            percentage=_percent(points, total_points),
        )
        for name, (count, points) in totals.items()
    ]
    return sorted(rows, key=lambda b: b.story_points, reverse=True)


def _assignee_stats(tickets: list[Ticket]) -> list[AssigneeStats]:
    stats: dict[str, AssigneeStats] = {}
    for ticket in tickets:
        name = ticket.assignee or "Unassigned"
        entry = stats.setdefault(name, AssigneeStats(name=name))
        entry.tickets += 1
        entry.story_points += _points(ticket)
        if is_completed(ticket):
            entry.completed_tickets += 1
            entry.completed_story_points += _points(ticket)
    for entry in stats.values():
        entry.efficiency = _percent(entry.completed_story_points, entry.story_points)
    return sorted(stats.values(), key=lambda s: s.efficiency, reverse=True)


def _estimation_accuracy(tickets: list[Ticket]) -> EstimationAccuracy:
    rows: list[TicketAccuracy] = []
    on_time = over_time = under_time = 0
    for ticket in tickets:
        estimated = _points(ticket)
        actual = estimated if is_completed(ticket) else estimated * IN_PROGRESS_COMPLETION
        if actual <= estimated:
            on_time += 1
        if actual > estimated * 1.2:
            over_time += 1
        if actual < estimated * 0.8:
            under_time += 1

        if actual <= estimated:
            status = "on-time"
        elif actual > estimated * 1.2:
            status = "over-time"
        else:
            status = "under-time"
        rows.append(
            TicketAccuracy(
                key=ticket.key,
                summary=ticket.summary,
                estimated=_round1(estimated),
                actual=_round1(actual),
                accuracy=_percent(actual, estimated) if estimated else 100,
                status=status,
            )
        )

    count = len(tickets)
    return EstimationAccuracy(
        on_time_percentage=_percent(on_time, count),
        over_time_percentage=_percent(over_time, count),
        under_time_percentage=_percent(under_time, count),
        average_accuracy=round(sum(r.accuracy for r in rows) / count) if count else 100,
        tickets=sorted(rows, key=lambda r: r.accuracy, reverse=True),
    )


def calculate_sprint_metrics(tickets: list[Ticket]) -> SprintMetrics:
    """Aggregate sprint metrics over tickets that carry story points."""
    estimated = [t for t in tickets if _points(t) > 0]
    completed = [t for t in estimated if is_completed(t)]

    total_points = _round1(sum(_points(t) for t in estimated))
    completed_points = _round1(sum(_points(t) for t in completed))

    if completed_points > total_points * 0.8:
        trend = "increasing"
    elif completed_points < total_points * 0.6:
        trend = "decreasing"
    else:
        trend = "stable"

    status_breakdown: dict[str, int] = {}
    for ticket in estimated:
        status_breakdown[ticket.status] = status_breakdown.get(ticket.status, 0) + 1

    return SprintMetrics(
        total_tickets=len(estimated),
        completed_tickets=len(completed),
        in_progress_tickets=sum(1 for t in estimated if t.status in IN_PROGRESS_STATUSES),
        total_story_points=total_points,
        completed_story_points=completed_points,
        velocity=completed_points,
        average_velocity=round(completed_points / len(estimated), 2) if estimated else 0,
        velocity_trend=trend,
        assignee_stats=_assignee_stats(estimated),
        status_breakdown=status_breakdown,
        epic_breakdown=_breakdown(estimated, lambda t: t.epic or "No Epic", total_points),
        type_breakdown=_breakdown(estimated, lambda t: t.type, total_points),
        label_breakdown=_breakdown(estimated, label_category, total_points),
        estimation_accuracy=_estimation_accuracy(estimated),
    )


def sprint_metrics_to_dict(metrics: SprintMetrics) -> dict:
    """Convert SprintMetrics to a JSON-serializable dict."""

    def _breakdown_dicts(rows: list[Breakdown], label: str) -> list[dict]:
        return [
            {label: b.name, "tickets": b.tickets, "storyPoints": b.story_points, "percentage": b.percentage}
            for b in rows
        ]

    accuracy = metrics.estimation_accuracy
    return {
        "totalTickets": metrics.total_tickets,
        "completedTickets": metrics.completed_tickets,
        "inProgressTickets": metrics.in_progress_tickets,
        "totalStoryPoints": metrics.total_story_points,
        "completedStoryPoints": metrics.completed_story_points,
        "velocity": metrics.velocity,
        "averageVelocity": metrics.average_velocity,
        "velocityTrend": metrics.velocity_trend,
        "assigneeStats": [
            {
                "name": s.name,
                "tickets": s.tickets,
                "storyPoints": s.story_points,
                "completedTickets": s.completed_tickets,
                "completedStoryPoints": s.completed_story_points,
                "efficiency": s.efficiency,
            }
            for s in metrics.assignee_stats
        ],
        "statusBreakdown": dict(metrics.status_breakdown),
        "epicBreakdown": _breakdown_dicts(metrics.epic_breakdown, "epic"),
        "typeBreakdown": _breakdown_dicts(metrics.type_breakdown, "type"),
        "labelBreakdown": _breakdown_dicts(metrics.label_breakdown, "category"),
        "estimationAccuracy": {
            "onTimePercentage": accuracy.on_time_percentage,
            "overTimePercentage": accuracy.over_time_percentage,
            "underTimePercentage": accuracy.under_time_percentage,
            "averageAccuracy": accuracy.average_accuracy,
            "ticketAccuracy": [
                {
                    "key": r.key,
                    "summary": r.summary,
                    "estimated": r.estimated,
                    "actual": r.actual,
                    "accuracy": r.accuracy,
                    "status": r.status,
                }
                for r in accuracy.tickets
            ],
        },
    }
