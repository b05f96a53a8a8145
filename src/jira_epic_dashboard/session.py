"""Open a configured Jira client and translate its errors."""

from collections.abc import Iterator
from contextlib import contextmanager

from jira_epic_dashboard.config import Config, config_exists, load_config
from jira_epic_dashboard.exceptions import (
    ConfigNotFoundError,
    InvalidConfigError,
    InvalidJqlError,
    IssueNotFoundError,
    JiraAuthError,
    JiraConnectionError,
    JiraRateLimitError,
)
from jira_epic_dashboard.jira_client import (
    AuthenticationError,
    JiraClient,
    NotFoundError,
    RateLimitError,
)
from jira_epic_dashboard.jira_client import (
    ConnectionError as JiraClientConnectionError,
)


def get_config() -> Config:
    """Load the dashboard configuration.

    Raises:
        ConfigNotFoundError: If config file not found
        InvalidConfigError: If config is invalid
    """
    if not config_exists():
        raise ConfigNotFoundError(
            "Configuration not found. Run `jira-epic-dashboard configure` to set up."
        )
    try:
        return load_config()
    except ValueError as e:
        raise InvalidConfigError(f"Invalid configuration: {e}")


def open_client() -> tuple[Config, JiraClient]:
    """Load configuration and build a client for it."""
    config = get_config()
    return config, JiraClient(config)


@contextmanager
def jira_errors() -> Iterator[None]:
    """Re-raise low-level client errors as DashboardError subclasses."""
    try:
        yield
    except AuthenticationError:
        raise JiraAuthError(
            "Jira authentication failed. Check your credentials in "
            "~/.jira-epic-dashboard/config.toml."
        )
    except RateLimitError:
        raise JiraRateLimitError("Jira rate limit exceeded. Please wait a moment and try again.")
    except JiraClientConnectionError as e:
        raise JiraConnectionError(str(e))
    except NotFoundError as e:
        raise IssueNotFoundError(str(e))
    except ValueError as e:
        raise InvalidJqlError(f"{e}. Check your query syntax.")
