"""Tests for the built-in demo epic."""

from jira_epic_dashboard.demo import DEMO_EPIC_KEY, demo_epic


class TestDemoEpic:
    """Tests for demo_epic."""

    def test_groups(self):
        result = demo_epic()
        groups = [[t.key for t in group] for group in result.layout.groups]
        assert result.epic_key == DEMO_EPIC_KEY
        assert groups == [["DEMO-2", "DEMO-3", "DEMO-4"], ["DEMO-5", "DEMO-6", "DEMO-8", "DEMO-7"]]
        assert [t.key for t in result.layout.unframed] == ["DEMO-9", "DEMO-10", "DEMO-11"]

    def test_levels(self):
        levels = demo_epic().layout.levels
        assert levels["DEMO-4"] == 0
        assert levels["DEMO-2"] == 2
        assert levels["DEMO-8"] == 0
        assert levels["DEMO-6"] == levels["DEMO-7"] == 1
        assert levels["DEMO-5"] == 2

    def test_team_filter(self):
        result = demo_epic(team="Platform")
        assert result.teams == ["Platform", "Web"]
        assert all(t.team == "Platform" for t in result.tickets)
        # DEMO-2 -> DEMO-3 survives; DEMO-4 is Web
        assert [[t.key for t in g] for g in result.layout.groups][0] == ["DEMO-2", "DEMO-3"]
