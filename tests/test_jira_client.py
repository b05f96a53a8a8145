"""Tests for the Jira API client."""

from unittest.mock import MagicMock, patch

import pytest
from jira import JIRAError

from jira_epic_dashboard.config import Config
from jira_epic_dashboard.jira_client import (
    AuthenticationError,
    JiraClient,
    NotFoundError,
    RateLimitError,
)
from jira_epic_dashboard.jira_client import (
    ConnectionError as JiraClientConnectionError,
)


def _make_client():
    config = Config(
        jira_url="https://example.atlassian.net",
        jira_email="dev@example.com",
        jira_api_token="secret",
    )
    return JiraClient(config)


def _make_issue(key, fields):
    issue = MagicMock()
    issue.key = key
    issue.raw = {"key": key, "fields": fields}
    return issue


@patch("jira_epic_dashboard.jira_client.JIRA")
class TestSearchIssues:
    """Tests for JiraClient.search_issues."""

    def test_returns_issue_dicts(self, mock_jira_cls):
        jira = mock_jira_cls.return_value
        jira.enhanced_search_issues.return_value = [_make_issue("A-1", {"summary": "One"})]

        result = _make_client().search_issues("project = A", fields=["summary"])

        assert result == [{"key": "A-1", "fields": {"summary": "One"}}]
        jira.enhanced_search_issues.assert_called_once_with(
            "project = A", maxResults=0, fields=["summary"]
        )

    def test_authenticates_with_config(self, mock_jira_cls):
        mock_jira_cls.return_value.enhanced_search_issues.return_value = []
        _make_client().search_issues("project = A", fields=["summary"])
        _, kwargs = mock_jira_cls.call_args
        assert kwargs["server"] == "https://example.atlassian.net"
        assert kwargs["basic_auth"] == ("dev@example.com", "secret")

    def test_auth_failure(self, mock_jira_cls):
        mock_jira_cls.return_value.enhanced_search_issues.side_effect = JIRAError(status_code=401)
        with pytest.raises(AuthenticationError):
            _make_client().search_issues("project = A", fields=["summary"])

    def test_bad_jql(self, mock_jira_cls):
        mock_jira_cls.return_value.enhanced_search_issues.side_effect = JIRAError(
            status_code=400, text="Error in the JQL Query"
        )
        with pytest.raises(ValueError, match="Error in the JQL Query"):
            _make_client().search_issues("project = = A", fields=["summary"])

    @patch("time.sleep")
    def test_rate_limit_is_retried(self, mock_sleep, mock_jira_cls):
        search = mock_jira_cls.return_value.enhanced_search_issues
        search.side_effect = JIRAError(status_code=429)

        with pytest.raises(RateLimitError):
            _make_client().search_issues("project = A", fields=["summary"])

        assert search.call_count == 3

    def test_connection_failure(self, mock_jira_cls):
        mock_jira_cls.side_effect = Exception("Connection refused")
        with pytest.raises(JiraClientConnectionError, match="Cannot connect"):
            _make_client().search_issues("project = A", fields=["summary"])


@patch("jira_epic_dashboard.jira_client.JIRA")
class TestAgileCalls:
    """Tests for board and sprint calls."""

    def test_list_boards(self, mock_jira_cls):
        board = MagicMock()
        board.raw = {"id": 7, "name": "Team board"}
        mock_jira_cls.return_value.boards.return_value = [board]

        assert _make_client().list_boards("PROJ") == [{"id": 7, "name": "Team board"}]
        mock_jira_cls.return_value.boards.assert_called_once_with(
            projectKeyOrID="PROJ", maxResults=False
        )

    def test_list_sprints_unknown_board(self, mock_jira_cls):
        mock_jira_cls.return_value.sprints.side_effect = JIRAError(status_code=404)
        with pytest.raises(NotFoundError, match="Board 9"):
            _make_client().list_sprints(9)

    def test_board_filter_jql(self, mock_jira_cls):
        jira = mock_jira_cls.return_value
        jira._get_json.return_value = {"filter": {"id": "123"}}
        jira.filter.return_value.jql = "project = PROJ ORDER BY Rank"

        assert _make_client().get_board_filter_jql(7) == "project = PROJ ORDER BY Rank"
        jira.filter.assert_called_once_with("123")

    def test_board_without_filter(self, mock_jira_cls):
        mock_jira_cls.return_value._get_json.return_value = {}
        assert _make_client().get_board_filter_jql(7) is None


@patch("jira_epic_dashboard.jira_client.JIRA")
class TestIssueLinks:
    """Tests for issue link calls."""

    def test_create_blocks_link(self, mock_jira_cls):
        _make_client().create_blocks_link(inward_key="A-1", outward_key="A-2")
        mock_jira_cls.return_value.create_issue_link.assert_called_once_with(
            type="Blocks", inwardIssue="A-1", outwardIssue="A-2"
        )

    def test_list_issue_link_ids(self, mock_jira_cls):
        mock_jira_cls.return_value.issue.return_value = _make_issue(
            "A-1", {"issuelinks": [{"id": "10"}, {"id": "11"}, {}]}
        )
        assert _make_client().list_issue_link_ids("A-1") == ["10", "11"]

    def test_delete_missing_link(self, mock_jira_cls):
        mock_jira_cls.return_value.delete_issue_link.side_effect = JIRAError(status_code=404)
        with pytest.raises(NotFoundError):
            _make_client().delete_issue_link("10")
