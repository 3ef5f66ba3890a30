from enum import Enum
from typing import List, Optional


class ConflictKind(Enum):
    CIRCULAR_DEPENDENCY = "circular_dependency"
    OVER_ALLOCATION = "over_allocation"
    DELIVERABLE_CONFLICT = "deliverable_conflict"
    DATE_CONFLICT = "date_conflict"


class Severity(Enum):
    WARNING = "warning"
    ERROR = "error"


class Conflict:
    """
    A detected violation of a scheduling invariant.

    Conflicts are derived data: they are rebuilt from the graph on every
    query and never stored on it.
    """

    def __init__(
        self,
        id: str,
        kind: str,
        severity: str,
        message: str,
        node_ids: Optional[List[str]] = None,
        edge_id: Optional[str] = None,
    ):
        self.id = id
        self._kind = ConflictKind(kind)
        self._severity = Severity(severity)
        self.message = message
        self.node_ids = list(node_ids) if node_ids else []
        self.edge_id = edge_id

    @property
    def kind(self) -> str:
        return self._kind.value

    @property
    def severity(self) -> str:
        return self._severity.value

    @property
    def is_error(self) -> bool:
        return self._severity == Severity.ERROR

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "type": self.kind,
            "severity": self.severity,
            "message": self.message,
            "nodeIds": list(self.node_ids),
            "edgeId": self.edge_id,
        }

    def __eq__(self, other):
        if not isinstance(other, Conflict):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self):
        return f"Conflict({self.kind}, {self.severity}, {self.message!r})"
