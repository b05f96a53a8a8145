"""Exception hierarchy for the Jira epic dashboard."""


class DashboardError(Exception):
    """Base exception for dashboard errors."""

    pass


class ConfigNotFoundError(DashboardError):
    """Configuration file not found."""

    pass


class InvalidConfigError(DashboardError):
    """Configuration is invalid."""

    pass


class JiraAuthError(DashboardError):
    """Jira authentication failed."""

    pass


class JiraConnectionError(DashboardError):
    """Cannot connect to Jira server."""

    pass


class JiraRateLimitError(DashboardError):
    """Jira rate limit exceeded."""

    pass


class InvalidJqlError(DashboardError):
    """Invalid JQL query."""

    pass


class IssueNotFoundError(DashboardError):
    """Issue, epic or project does not exist in Jira."""

    pass


class BoardNotFoundError(DashboardError):
    """No agile board matches the requested project."""

    pass


class NoActiveSprintError(DashboardError):
    """The board has no active or future sprint."""

    pass


class InvalidLinkTypeError(DashboardError):
    """Requested issue link type is not supported."""

    pass


class MissingParameterError(DashboardError):
    """A required request parameter was not supplied."""

    pass
