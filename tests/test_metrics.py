"""Tests for sprint metrics aggregation."""

from jira_epic_dashboard.metrics import (
    calculate_sprint_metrics,
    label_category,
    sprint_metrics_to_dict,
)


def _sprint_tickets(make_ticket):
    return [
        make_ticket("A", type="Story", status="Done", story_points=5,
                    assignee="Ann", labels=["planned"], epic="E1"),
        make_ticket("B", type="Bug", status="In Progress", story_points=4,
                    assignee="Ann", labels=["unplanned"], epic="E1"),
        make_ticket("C", type="Story", status="Done", story_points=2, assignee="Bob"),
        make_ticket("D", type="Task", status="To Do", assignee="Bob"),
    ]


class TestLabelCategory:
    """Tests for label_category."""

    def test_priority_order(self, make_ticket):
        assert label_category(make_ticket("A", labels=["extra", "claude"])) == "Claude"
        assert label_category(make_ticket("A", labels=["extra", "unplanned"])) == "Unplanned"
        assert label_category(make_ticket("A", labels=["extra"])) == "Extra"
        assert label_category(make_ticket("A", labels=["frontend"])) == "Planned"
        assert label_category(make_ticket("A")) == "Planned"


class TestCalculateSprintMetrics:
    """Tests for calculate_sprint_metrics."""

    def test_top_stats(self, make_ticket):
        metrics = calculate_sprint_metrics(_sprint_tickets(make_ticket))
        assert metrics.total_tickets == 3  # D has no story points
        assert metrics.completed_tickets == 2
        assert metrics.in_progress_tickets == 1
        assert metrics.total_story_points == 11
        assert metrics.completed_story_points == 7
        assert metrics.velocity == 7
        assert metrics.average_velocity == 2.33
        assert metrics.velocity_trend == "stable"

    def test_assignee_stats_sorted_by_efficiency(self, make_ticket):
        stats = calculate_sprint_metrics(_sprint_tickets(make_ticket)).assignee_stats
        assert [s.name for s in stats] == ["Bob", "Ann"]
        assert stats[0].efficiency == 100
        assert stats[1].tickets == 2
        assert stats[1].story_points == 9
        assert stats[1].completed_story_points == 5
        assert stats[1].efficiency == 56

    def test_breakdowns(self, make_ticket):
        metrics = calculate_sprint_metrics(_sprint_tickets(make_ticket))
        assert metrics.status_breakdown == {"Done": 2, "In Progress": 1}
        assert [(b.name, b.story_points, b.percentage) for b in metrics.epic_breakdown] == [
            ("E1", 9, 82),
            ("No Epic", 2, 18),
        ]
        assert [(b.name, b.tickets, b.percentage) for b in metrics.type_breakdown] == [
            ("Story", 2, 64),
            ("Bug", 1, 36),
        ]
        assert [b.name for b in metrics.label_breakdown] == ["Planned", "Unplanned"]

    def test_estimation_accuracy(self, make_ticket):
        accuracy = calculate_sprint_metrics(_sprint_tickets(make_ticket)).estimation_accuracy
        assert accuracy.on_time_percentage == 100
        assert accuracy.under_time_percentage == 33
        assert accuracy.over_time_percentage == 0
        assert accuracy.average_accuracy == 83
        assert [r.key for r in accuracy.tickets][-1] == "B"
        assert accuracy.tickets[-1].actual == 2

    def test_trends(self, make_ticket):
        done = [make_ticket("A", status="Done", story_points=9), make_ticket("B", story_points=1)]
        behind = [make_ticket("A", status="Done", story_points=1), make_ticket("B", story_points=9)]
        assert calculate_sprint_metrics(done).velocity_trend == "increasing"
        assert calculate_sprint_metrics(behind).velocity_trend == "decreasing"

    def test_no_tickets(self):
        metrics = calculate_sprint_metrics([])
        assert metrics.total_tickets == 0
        assert metrics.average_velocity == 0
        assert metrics.epic_breakdown == []
        assert metrics.estimation_accuracy.average_accuracy == 100

    def test_serializes(self, make_ticket):
        d = sprint_metrics_to_dict(calculate_sprint_metrics(_sprint_tickets(make_ticket)))
        assert d["totalStoryPoints"] == 11
        assert d["epicBreakdown"][0] == {"epic": "E1", "tickets": 2, "storyPoints": 9, "percentage": 82}
        assert d["labelBreakdown"][0]["category"] == "Planned"
        assert d["estimationAccuracy"]["ticketAccuracy"][0]["status"] == "on-time"
