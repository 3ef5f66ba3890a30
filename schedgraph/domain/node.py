from datetime import date
from enum import Enum
from typing import List, Optional

from ..utils.dates import as_date, days_between


class NodeKind(Enum):
    """
    Enum representing the kinds of schedulable entity in a project graph.
    """

    TASK = "task"
    MILESTONE = "milestone"
    DELIVERABLE = "deliverable"
    PERSON = "person"


class TaskStatus(Enum):
    """
    Enum representing the possible status values of a task.
    """

    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    BLOCKED = "blocked"
    DONE = "done"


class Priority(Enum):
    LOW = "low"
    MED = "med"
    HIGH = "high"


class NodeError(Exception):
    """Exception raised for errors in the node classes."""

    pass


class ScheduleNode:
    """
    Base class for every vertex of a schedule graph.

    Subclasses fix ``kind``. Dated kinds override ``start_date``/``due_date``;
    the base implementation carries no dates at all.
    """

    kind = None

    def __init__(
        self,
        id: str,
        title: str,
        parent_id: Optional[str] = None,
        tags: Optional[List[str]] = None,
        notes: str = "",
    ):
        """
        Initialize a new node.

        Args:
            id: Unique identifier for the node
            title: Display name, used in conflict messages
            parent_id: Optional id of the enclosing node (e.g. a deliverable)
            tags: List of tags to categorize the node
            notes: Free-form notes

        Raises:
            NodeError: If any input validation fails
        """
        if id is None or str(id).strip() == "":
            raise NodeError("Node ID cannot be None or empty")
        self.id = id

        if not title or not isinstance(title, str):
            raise NodeError("Node title must be a non-empty string")
        self.title = title

        self.parent_id = parent_id
        self.tags = list(tags) if tags else []
        self.notes = notes

    @property
    def start_date(self) -> Optional[date]:
        return None

    @property
    def due_date(self) -> Optional[date]:
        return None

    @property
    def is_schedulable(self) -> bool:
        """Whether the node carries dates at all."""
        return False

    @property
    def has_dates(self) -> bool:
        """True when both start and due dates are resolved."""
        return self.start_date is not None and self.due_date is not None

    @property
    def effective_duration(self) -> Optional[int]:
        """
        Duration in whole days.

        Derived from the dates whenever both are present, so the stored
        duration is only a fallback for partially dated nodes.
        """
        if self.has_dates:
            return days_between(self.start_date, self.due_date)
        return None

    def set_dates(self, start_date=None, due_date=None):
        raise NodeError(f"{self.kind.value} node {self.id} does not carry dates")

    def __repr__(self):
        return f"{self.__class__.__name__}(id={self.id!r}, title={self.title!r})"


class DatedNode(ScheduleNode):
    """A node with an optional start date and an optional due date."""

    def __init__(self, id, title, start_date=None, due_date=None, **kwargs):
        super().__init__(id, title, **kwargs)
        self._start_date = None
        self._due_date = None
        self.set_dates(start_date, due_date)

    @property
    def start_date(self) -> Optional[date]:
        return self._start_date

    @property
    def due_date(self) -> Optional[date]:
        return self._due_date

    @property
    def is_schedulable(self) -> bool:
        return True

    def set_dates(self, start_date=None, due_date=None) -> "DatedNode":
        """
        Replace whichever of the two dates is supplied.

        Args:
            start_date: New start date, or None to keep the current one
            due_date: New due date, or None to keep the current one

        Returns:
            self: For method chaining

        Raises:
            NodeError: If a value is not a date or due would precede start
        """
        try:
            new_start = as_date(start_date) if start_date is not None else self._start_date
            new_due = as_date(due_date) if due_date is not None else self._due_date
        except TypeError as e:
            raise NodeError(f"Invalid date for node {self.id}: {e}")

        if new_start is not None and new_due is not None and new_due < new_start:
            raise NodeError(
                f"Due date {new_due} of node {self.id} is before its start date {new_start}"
            )

        self._start_date = new_start
        self._due_date = new_due
        return self

    def clear_dates(self) -> "DatedNode":
        self._start_date = None
        self._due_date = None
        return self


class TaskNode(DatedNode):
    """
    A unit of work with a duration, status, assignees and progress.
    """

    kind = NodeKind.TASK

    def __init__(
        self,
        id: str,
        title: str,
        start_date: Optional[date] = None,
        due_date: Optional[date] = None,
        duration_days: Optional[int] = None,
        status: str = "not_started",
        assignees: Optional[List[str]] = None,
        percent_complete: float = 0,
        priority: str = "med",
        **kwargs,
    ):
        """
        Initialize a new TaskNode.

        Args:
            id: Unique identifier for the task
            title: Name of the task
            start_date: Optional planned start date
            due_date: Optional planned due date
            duration_days: Duration in whole days, used while a date is missing
            status: One of not_started, in_progress, blocked, done
            assignees: Person node IDs assigned to the task
            percent_complete: Progress between 0 and 100
            priority: One of low, med, high

        Raises:
            NodeError: If any input validation fails
        """
        self._duration_days = None
        super().__init__(id, title, start_date=start_date, due_date=due_date, **kwargs)

        if duration_days is not None and not self.has_dates:
            self.duration_days = duration_days

        self.status = status
        self.priority = priority
        self.percent_complete = percent_complete

        if assignees is not None and not isinstance(assignees, list):
            raise NodeError("Assignees must be a list of person IDs")
        self.assignees = list(assignees) if assignees else []

    @property
    def duration_days(self) -> Optional[int]:
        return self._duration_days

    @duration_days.setter
    def duration_days(self, value):
        if value is not None and (
            isinstance(value, bool) or not isinstance(value, int) or value < 0
        ):
            raise NodeError("Duration must be a non-negative whole number of days")
        if value is not None and self.has_dates and value != self.effective_duration:
            raise NodeError(
                f"Duration of task {self.id} is derived from its dates; "
                "change a date instead"
            )
        self._duration_days = value

    @property
    def effective_duration(self) -> Optional[int]:
        if self.has_dates:
            return days_between(self.start_date, self.due_date)
        return self._duration_days

    @property
    def status(self) -> str:
        """Get the current status of the task."""
        return self._status.value

    @status.setter
    def status(self, value: str):
        try:
            self._status = TaskStatus(value)
        except ValueError:
            valid_statuses = [s.value for s in TaskStatus]
            raise NodeError(f"Invalid status: {value}. Must be one of {valid_statuses}")

    @property
    def priority(self) -> str:
        return self._priority.value

    @priority.setter
    def priority(self, value: str):
        try:
            self._priority = Priority(value)
        except ValueError:
            valid = [p.value for p in Priority]
            raise NodeError(f"Invalid priority: {value}. Must be one of {valid}")

    @property
    def percent_complete(self) -> float:
        return self._percent_complete

    @percent_complete.setter
    def percent_complete(self, value):
        if not isinstance(value, (int, float)) or value < 0 or value > 100:
            raise NodeError("Percent complete must be a number between 0 and 100")
        self._percent_complete = value

    @property
    def is_done(self) -> bool:
        return self._status == TaskStatus.DONE

    def set_dates(self, start_date=None, due_date=None) -> "TaskNode":
        super().set_dates(start_date, due_date)
        # keep the stored duration in step with the dates
        if self.has_dates:
            self._duration_days = days_between(self.start_date, self.due_date)
        return self


class MilestoneNode(DatedNode):
    """A point in the schedule, usually carrying only a due date."""

    kind = NodeKind.MILESTONE


class DeliverableNode(DatedNode):
    """
    A document or package handed over at a due date. Tasks whose
    ``parent_id`` is the deliverable are its child tasks.
    """

    kind = NodeKind.DELIVERABLE

    def __init__(
        self,
        id: str,
        title: str,
        start_date: Optional[date] = None,
        due_date: Optional[date] = None,
        discipline: Optional[str] = None,
        submittal_number: Optional[str] = None,
        review_days: Optional[int] = None,
        **kwargs,
    ):
        super().__init__(id, title, start_date=start_date, due_date=due_date, **kwargs)
        if review_days is not None and (not isinstance(review_days, int) or review_days < 0):
            raise NodeError("Review days must be a non-negative whole number")
        self.discipline = discipline
        self.submittal_number = submittal_number
        self.review_days = review_days


class PersonNode(ScheduleNode):
    """A resource that tasks are assigned to. People carry no dates."""

    kind = NodeKind.PERSON

    def __init__(self, id: str, title: str, initials: Optional[str] = None, **kwargs):
        super().__init__(id, title, **kwargs)
        if initials is None:
            initials = "".join(part[0] for part in title.split() if part).upper()
        self.initials = initials


NODE_CLASSES = {
    NodeKind.TASK: TaskNode,
    NodeKind.MILESTONE: MilestoneNode,
    NodeKind.DELIVERABLE: DeliverableNode,
    NodeKind.PERSON: PersonNode,
}


def create_node(kind, id, title, **kwargs) -> ScheduleNode:
    """
    Build a node of the given kind.

    Args:
        kind: A NodeKind or its string value
        id: Unique identifier for the node
        title: Display name
        **kwargs: Kind-specific fields

    Raises:
        NodeError: If the kind is unknown or the fields are invalid
    """
    try:
        node_kind = NodeKind(kind) if not isinstance(kind, NodeKind) else kind
    except ValueError:
        valid_kinds = [k.value for k in NodeKind]
        raise NodeError(f"Invalid node kind: {kind}. Must be one of {valid_kinds}")
    return NODE_CLASSES[node_kind](id, title, **kwargs)
