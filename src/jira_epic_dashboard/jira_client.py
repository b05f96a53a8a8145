"""Jira API client with retry logic."""

from typing import NoReturn

from jira import JIRA, JIRAError
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from jira_epic_dashboard.config import Config
from jira_epic_dashboard.logging import get_logger

logger = get_logger(__name__)

BLOCKS_LINK_TYPE = "Blocks"


class RateLimitError(Exception):
    """Raised when Jira API rate limit is hit."""

    pass


class AuthenticationError(Exception):
    """Raised when Jira authentication fails."""

    pass


class ConnectionError(Exception):
    """Raised when Jira server cannot be reached."""

    pass


class NotFoundError(Exception):
    """Raised when a Jira resource does not exist."""

    pass


def _raise_for_status(e: JIRAError, what: str) -> NoReturn:
    """Translate a JIRAError into the client's own exceptions."""
    if e.status_code == 429:
        raise RateLimitError("Rate limited by Jira. Retrying with exponential backoff...") from e
    if e.status_code == 401:
        raise AuthenticationError("Authentication failed. Check your email and API token.") from e
    if e.status_code == 404:
        raise NotFoundError(f"{what} not found in Jira") from e
    if e.status_code == 400:
        raise ValueError(f"Invalid request for {what}: {e.text}") from e
    raise e


class JiraClient:
    """Client for interacting with the Jira Cloud REST and Agile APIs."""

    def __init__(self, config: Config) -> None:
        """Initialize Jira client with configuration."""
        self.config = config
        self._client: JIRA | None = None

    def _get_client(self) -> JIRA:
        """Get or create Jira client instance."""
        if self._client is None:
            try:
                self._client = JIRA(
                    server=self.config.jira_url,
                    basic_auth=(self.config.jira_email, self.config.jira_api_token),
                    timeout=15,
                )
            except JIRAError as e:
                if e.status_code == 401:
                    raise AuthenticationError(
                        "Authentication failed. Check your email and API token."
                    ) from e
                raise
            except Exception as e:
                error_msg = str(e).lower()
                if "connection" in error_msg or "resolve" in error_msg or "timeout" in error_msg:
                    raise ConnectionError(
                        f"Cannot connect to Jira server at {self.config.jira_url}. "
                        "Check the URL and your network connection."
                    ) from e
                raise
        return self._client

    @retry(
        retry=retry_if_exception_type(RateLimitError),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=4, max=60),
        reraise=True,
    )
    def search_issues(self, jql: str, fields: list[str], max_results: int = 0) -> list[dict]:
        """Search issues with JQL.

        Args:
            jql: JQL query string
            fields: Field ids to return for each issue
            max_results: Maximum number of issues; 0 fetches every page

        Returns:
            List of raw issue dicts ({"key": ..., "fields": {...}})

        Raises:
            RateLimitError: If rate limited (will be retried)
            AuthenticationError: If authentication fails
            ValueError: If the JQL is rejected
        """
        client = self._get_client()
        logger.debug("Searching issues: %s", jql)
        try:
            result = client.enhanced_search_issues(jql, maxResults=max_results, fields=fields)
        except JIRAError as e:
            _raise_for_status(e, "JQL query")
        return [self._issue_to_dict(issue) for issue in result]

    def list_projects(self) -> list[dict]:
        """Return key and name of every visible project."""
        client = self._get_client()
        try:
            projects = client.projects()
        except JIRAError as e:
            _raise_for_status(e, "Projects")
        return [{"key": p.key, "name": p.name} for p in projects]

    def list_boards(self, project_key: str | None = None) -> list[dict]:
        """Return raw agile boards, optionally limited to one project."""
        client = self._get_client()
        try:
            boards = client.boards(projectKeyOrID=project_key, maxResults=False)
        except JIRAError as e:
            _raise_for_status(e, "Boards")
        return [board.raw for board in boards]

    def list_sprints(self, board_id: int, state: str | None = None) -> list[dict]:
        """Return raw sprints of a board, optionally filtered by state."""
        client = self._get_client()
        try:
            sprints = client.sprints(board_id, state=state, maxResults=False)
        except JIRAError as e:
            _raise_for_status(e, f"Board {board_id}")
        return [sprint.raw for sprint in sprints]

    def get_board_filter_jql(self, board_id: int) -> str | None:
        """Return the JQL of the saved filter backing a board, if any."""
        client = self._get_client()
        try:
            # The jira library has no public wrapper for board configuration
            configuration = client._get_json(
                f"board/{board_id}/configuration", base=client.AGILE_BASE_URL
            )
            filter_id = configuration.get("filter", {}).get("id")
            if not filter_id:
                return None
            return client.filter(filter_id).jql
        except JIRAError as e:
            _raise_for_status(e, f"Board {board_id} filter")

    def create_blocks_link(self, inward_key: str, outward_key: str) -> None:
        """Create a "Blocks" link between two issues."""
        client = self._get_client()
        try:
            client.create_issue_link(
                type=BLOCKS_LINK_TYPE,
                inwardIssue=inward_key,
                outwardIssue=outward_key,
            )
        except JIRAError as e:
            _raise_for_status(e, f"Link {inward_key} -> {outward_key}")

    def list_issue_link_ids(self, issue_key: str) -> list[str]:
        """Return ids of every issue link on an issue."""
        client = self._get_client()
        try:
            issue = client.issue(issue_key, fields="issuelinks")
        except JIRAError as e:
            _raise_for_status(e, f"Issue {issue_key}")
        links = issue.raw.get("fields", {}).get("issuelinks", [])
        return [link["id"] for link in links if link.get("id")]

    def delete_issue_link(self, link_id: str) -> None:
        """Delete one issue link by id."""
        client = self._get_client()
        try:
            client.delete_issue_link(link_id)
        except JIRAError as e:
            _raise_for_status(e, f"Issue link {link_id}")

    def _issue_to_dict(self, issue) -> dict:
        """Convert Jira issue object to dictionary."""
        return {
            "key": issue.key,
            "fields": issue.raw.get("fields", {}),
        }
