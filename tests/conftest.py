"""Shared fixtures for the dashboard tests."""

import pytest

from jira_epic_dashboard.models import Ticket


def _make_ticket(key, summary=None, blocks=None, blocked_by=None, **kwargs):
    """Build a Ticket with sensible defaults."""
    return Ticket(
        key=key,
        summary=summary if summary is not None else f"Ticket {key}",
        type=kwargs.pop("type", "Story"),
        status=kwargs.pop("status", "To Do"),
        blocks=list(blocks or []),
        blocked_by=list(blocked_by or []),
        **kwargs,
    )


def _make_graph(keys, edges):
    """Build tickets from (blocker, blocked) pairs, filling both link sides."""
    blocks = {key: [] for key in keys}
    blocked_by = {key: [] for key in keys}
    for blocker, blocked in edges:
        if blocker in blocks:
            blocks[blocker].append(blocked)
        if blocked in blocked_by:
            blocked_by[blocked].append(blocker)
    return [_make_ticket(key, blocks=blocks[key], blocked_by=blocked_by[key]) for key in keys]


@pytest.fixture
def make_ticket():
    return _make_ticket


@pytest.fixture
def make_graph():
    return _make_graph
