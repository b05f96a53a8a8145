"""Data models for the Jira epic dashboard."""

from dataclasses import dataclass, field


@dataclass
class Ticket:
    """A Jira issue as shown on the epic diagram and sprint report."""

    key: str
    summary: str
    type: str
    status: str
    blocks: list[str] = field(default_factory=list)
    blocked_by: list[str] = field(default_factory=list)
    assignee: str | None = None
    story_points: float | None = None
    is_current_sprint: bool = False
    team: str | None = None
    labels: list[str] = field(default_factory=list)
    epic: str | None = None
    priority: str | None = None
    created: str | None = None
    updated: str | None = None


@dataclass
class Position:
    """Top-left corner and size of a ticket box, in pixels."""

    x: float
    y: float
    height: float
    width: float


@dataclass
class BoundingBox:
    """Axis-aligned rectangle, in pixels."""

    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    def translated(self, dx: float = 0, dy: float = 0) -> "BoundingBox":
        return BoundingBox(self.min_x + dx, self.min_y + dy, self.max_x + dx, self.max_y + dy)


@dataclass
class FrameSlot:
    """Horizontal slot reserved for one group's frame, border buffer included."""

    x: float
    y: float
    width: float


@dataclass
class DiagramLayout:
    """Result of laying out a ticket set as a dependency diagram."""

    positions: dict[str, Position]
    levels: dict[str, int]  # grouped tickets only
    groups: list[list[Ticket]]
    unframed: list[Ticket]
    frame_boxes: list[BoundingBox]
    frame_slots: list[FrameSlot]
    frame_roots: set[str]
    canvas: BoundingBox

    @property
    def grouped_keys(self) -> set[str]:
        return {t.key for group in self.groups for t in group}


@dataclass
class Project:
    """A Jira project."""

    key: str
    name: str


@dataclass
class EpicSummary:
    """An epic as listed in the epic picker."""

    key: str
    name: str
    epic_name: str | None = None
    team: str | None = None


@dataclass
class EpicDiagram:
    """An epic's tickets together with their diagram layout."""

    epic_key: str
    tickets: list[Ticket]
    teams: list[str]
    layout: DiagramLayout
    team: str | None = None  # team filter applied to tickets, if any


@dataclass
class Board:
    """An agile board."""

    id: int
    name: str
    type: str
    project_key: str | None


@dataclass
class SprintInfo:
    """Name and date range of a sprint."""

    sprint_id: str
    name: str
    start_date: str | None  # YYYY-MM-DD
    end_date: str | None


@dataclass
class SprintTickets:
    """Tickets of a board's active sprint."""

    tickets: list[Ticket]
    total: int
    sprint_name: str
    date_range: str
    active_sprint_id: int | None


@dataclass
class Team:
    """A selectable team: an assignee or a team label."""

    key: str
    name: str


@dataclass
class Breakdown:
    """Ticket and story point totals for one category of a sprint breakdown."""

    name: str
    tickets: int
    story_points: float
    percentage: int


@dataclass
class AssigneeStats:
    """Per-assignee sprint totals."""

    name: str
    tickets: int = 0
    story_points: float = 0
    completed_tickets: int = 0
    completed_story_points: float = 0
    efficiency: int = 0


@dataclass
class TicketAccuracy:
    """Estimated versus actual effort of one ticket."""

    key: str
    summary: str
    estimated: float
    actual: float
    accuracy: int
    status: str  # "on-time" | "over-time" | "under-time"


@dataclass
class EstimationAccuracy:
    """Aggregate estimation accuracy of a sprint."""

    on_time_percentage: int
    over_time_percentage: int
    under_time_percentage: int
    average_accuracy: int
    tickets: list[TicketAccuracy]


@dataclass
class SprintMetrics:
    """Aggregated metrics for a sprint report."""

    total_tickets: int
    completed_tickets: int
    in_progress_tickets: int
    total_story_points: float
    completed_story_points: float
    velocity: float
    average_velocity: float
    velocity_trend: str  # "increasing" | "decreasing" | "stable"
    assignee_stats: list[AssigneeStats]
    status_breakdown: dict[str, int]
    epic_breakdown: list[Breakdown]
    type_breakdown: list[Breakdown]
    label_breakdown: list[Breakdown]
    estimation_accuracy: EstimationAccuracy
