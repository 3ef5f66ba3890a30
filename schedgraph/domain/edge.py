from enum import Enum
from typing import Optional


class DependencyType(Enum):
    """
    Enum representing which date pairing a dependency constrains.
    """

    FINISH_TO_START = "finish_to_start"
    START_TO_START = "start_to_start"
    FINISH_TO_FINISH = "finish_to_finish"


class EdgeError(Exception):
    """Exception raised for errors in the Dependency class."""

    pass


class Dependency:
    """
    A directed precedence constraint from ``source`` (the predecessor) to
    ``target`` (the dependent).

    ``is_blocked`` and ``blocked_by`` are not stored state: the conflict
    detector rewrites them every time it evaluates the edge.
    """

    def __init__(
        self,
        id: str,
        source: str,
        target: str,
        type: str = "finish_to_start",
        label: Optional[str] = None,
    ):
        """
        Initialize a new Dependency.

        Args:
            id: Unique identifier for the edge
            source: ID of the predecessor node
            target: ID of the dependent node
            type: finish_to_start, start_to_start or finish_to_finish
            label: Optional display label

        Raises:
            EdgeError: If any input validation fails
        """
        if id is None or str(id).strip() == "":
            raise EdgeError("Edge ID cannot be None or empty")
        self.id = id

        if source is None or target is None:
            raise EdgeError("Edge source and target must be node IDs")
        if source == target:
            raise EdgeError(f"Edge {id} cannot depend on itself ({source})")
        self.source = source
        self.target = target

        self.type = type
        self.label = label

        self.is_blocked = False
        self.blocked_by = None

    @property
    def type(self) -> str:
        """Get the constraint type of the dependency."""
        return self._type.value

    @type.setter
    def type(self, value):
        if isinstance(value, DependencyType):
            self._type = value
            return
        try:
            self._type = DependencyType(value)
        except ValueError:
            valid_types = [t.value for t in DependencyType]
            raise EdgeError(
                f"Invalid dependency type: {value}. Must be one of {valid_types}"
            )

    @property
    def dependency_type(self) -> DependencyType:
        return self._type

    def __repr__(self):
        return (
            f"Dependency(id={self.id!r}, {self.source!r} -> {self.target!r}, "
            f"type={self.type!r})"
        )
