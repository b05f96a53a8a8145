"""Command line entry point for the Jira epic dashboard."""

import json

import click

from jira_epic_dashboard.config import (
    DEFAULT_EPIC_NAME_FIELD,
    DEFAULT_STORY_POINTS_FIELD,
    DEFAULT_TEAM_FIELD,
    Config,
    get_config_path,
    save_config,
)
from jira_epic_dashboard.demo import DEMO_EPIC_KEY, demo_epic
from jira_epic_dashboard.epics import epic_diagram_to_dict, fetch_epic
from jira_epic_dashboard.exceptions import DashboardError
from jira_epic_dashboard.logging import setup_logging


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False),
    default=None,
    help="Also write logs to this rotating file",
)
def main(verbose: bool, log_file: str | None) -> None:
    """Jira epic dependency diagrams and sprint reports."""
    setup_logging(level="DEBUG" if verbose else None, log_file=log_file)


@main.command()
@click.option("--url", prompt="Jira URL", help="e.g. https://your-domain.atlassian.net")
@click.option("--email", prompt="Jira email")
@click.option("--api-token", prompt="Jira API token", hide_input=True)
@click.option("--project", default="", prompt="Default project key (optional)", show_default=False)
@click.option("--story-points-field", default=DEFAULT_STORY_POINTS_FIELD, show_default=True)
@click.option("--team-field", default=DEFAULT_TEAM_FIELD, show_default=True)
@click.option("--epic-name-field", default=DEFAULT_EPIC_NAME_FIELD, show_default=True)
def configure(
    url: str,
    email: str,
    api_token: str,
    project: str,
    story_points_field: str,
    team_field: str,
    epic_name_field: str,
) -> None:
    """Write the Jira connection settings."""
    config = Config(
        jira_url=url.strip(),
        jira_email=email.strip(),
        jira_api_token=api_token.strip(),
        default_project=project.strip() or None,
        story_points_field=story_points_field,
        team_field=team_field,
        epic_name_field=epic_name_field,
    )
    errors = config.validate()
    if errors:
        raise click.ClickException("; ".join(errors))
    save_config(config)
    click.echo(f"Configuration saved to {get_config_path()}")


@main.command()
@click.option("--host", default="127.0.0.1", show_default=True)
@click.option("--port", default=4000, show_default=True, type=int)
@click.option("--debug", is_flag=True, help="Run Flask in debug mode")
@click.option(
    "--cors-origin",
    "cors_origins",
    multiple=True,
    help="Origin allowed to call /api/* (repeatable)",
)
def serve(host: str, port: int, debug: bool, cors_origins: tuple[str, ...]) -> None:
    """Run the dashboard API server."""
    from jira_epic_dashboard.web.app import create_app

    app = create_app(cors_origins=list(cors_origins) or None)
    app.run(host=host, port=port, debug=debug)


@main.command()
@click.argument("epic_key")
@click.option("--project", default=None, help="Project key (defaults to the configured one)")
@click.option("--team", default=None, help="Only lay out this team's tickets")
def diagram(epic_key: str, project: str | None, team: str | None) -> None:
    """Print an epic's tickets and diagram layout as JSON.

    Use DEMO-1 as EPIC_KEY for the built-in demo epic.
    """
    try:
        if epic_key == DEMO_EPIC_KEY:
            result = demo_epic(team=team)
        else:
            result = fetch_epic(epic_key, project=project, team=team)
    except DashboardError as e:
        raise click.ClickException(str(e))
    click.echo(json.dumps(epic_diagram_to_dict(result), indent=2))


if __name__ == "__main__":
    main()
