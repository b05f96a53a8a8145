"""Configuration management for the Jira epic dashboard."""

import tomllib
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import urlparse

import tomli_w

DEFAULT_STORY_POINTS_FIELD = "customfield_10014"
DEFAULT_TEAM_FIELD = "customfield_10465"
DEFAULT_EPIC_NAME_FIELD = "customfield_10011"


@dataclass
class Config:
    """Configuration for the Jira connection and dashboard settings."""

    jira_url: str
    jira_email: str
    jira_api_token: str
    default_project: str | None = None
    story_points_field: str = DEFAULT_STORY_POINTS_FIELD
    team_field: str = DEFAULT_TEAM_FIELD
    epic_name_field: str = DEFAULT_EPIC_NAME_FIELD

    def validate(self) -> list[str]:
        """Validate configuration values. Returns list of error messages."""
        errors: list[str] = []

        if not self.jira_url:
            errors.append("Jira URL is required")
        else:
            parsed = urlparse(self.jira_url)
            if parsed.scheme not in ("http", "https"):
                errors.append("Jira URL must start with http:// or https://")
            if not parsed.netloc:
                errors.append("Jira URL must include a domain")

        if not self.jira_email:
            errors.append("Jira email is required")
        elif "@" not in self.jira_email:
            errors.append("Jira email must be a valid email address")

        if not self.jira_api_token:
            errors.append("Jira API token is required")

        for name in ("story_points_field", "team_field", "epic_name_field"):
            if not getattr(self, name):
                errors.append(f"{name} must not be empty")

        return errors


def get_config_dir() -> Path:
    """Get the configuration directory path."""
    return Path.home() / ".jira-epic-dashboard"


def get_config_path() -> Path:
    """Get the configuration file path."""
    return get_config_dir() / "config.toml"


def config_exists() -> bool:
    """Check if configuration file exists."""
    return get_config_path().exists()


def load_config() -> Config:
    """Load configuration from TOML file.

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If config is invalid
    """
    config_path = get_config_path()

    if not config_path.exists():
        raise FileNotFoundError(
            f"Configuration not found at {config_path}. "
            "Run `jira-epic-dashboard configure` to set up."
        )

    with open(config_path, "rb") as f:
        try:
            data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ValueError(f"Cannot parse {config_path}: {e}") from e

    jira_section = data.get("jira", {})
    dashboard_section = data.get("dashboard", {})

    config = Config(
        jira_url=jira_section.get("url", ""),
        jira_email=jira_section.get("email", ""),
        jira_api_token=jira_section.get("api_token", ""),
        default_project=dashboard_section.get("default_project"),
        story_points_field=dashboard_section.get(
            "story_points_field", DEFAULT_STORY_POINTS_FIELD
        ),
        team_field=dashboard_section.get("team_field", DEFAULT_TEAM_FIELD),
        epic_name_field=dashboard_section.get("epic_name_field", DEFAULT_EPIC_NAME_FIELD),
    )

    errors = config.validate()
    if errors:
        raise ValueError(f"Invalid configuration: {'; '.join(errors)}")

    return config


def save_config(config: Config) -> None:
    """Save configuration to TOML file."""
    config_dir = get_config_dir()
    config_dir.mkdir(parents=True, exist_ok=True)

    config_path = get_config_path()

    dashboard_data: dict[str, str] = {
        "story_points_field": config.story_points_field,
        "team_field": config.team_field,
        "epic_name_field": config.epic_name_field,
    }
    if config.default_project:
        dashboard_data["default_project"] = config.default_project

    data: dict = {
        "jira": {
            "url": config.jira_url,
            "email": config.jira_email,
            "api_token": config.jira_api_token,
        },
        "dashboard": dashboard_data,
    }

    with open(config_path, "wb") as f:
        tomli_w.dump(data, f)
