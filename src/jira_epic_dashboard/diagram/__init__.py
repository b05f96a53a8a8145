"""Dependency diagram layout for epic tickets."""

from jira_epic_dashboard.diagram.layout import compute_diagram_layout, layout_to_dict

__all__ = ["compute_diagram_layout", "layout_to_dict"]
