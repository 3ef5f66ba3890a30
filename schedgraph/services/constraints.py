from ..domain.edge import DependencyType
from ..utils.dates import DateRange, add_days

DEFAULT_DURATION_DAYS = 5


def dependent_duration(dependent, default_duration_days=DEFAULT_DURATION_DAYS):
    """Duration to keep for a node whose dates are being recomputed."""
    duration = dependent.effective_duration
    return default_duration_days if duration is None else duration


def resolve(
    predecessor,
    dependent,
    constraint_type,
    default_duration_days=DEFAULT_DURATION_DAYS,
):
    """
    Compute the dates a dependent must take to satisfy one constraint.

    Args:
        predecessor: Node the constraint starts from; needs both dates
        dependent: Node the constraint points at
        constraint_type: DependencyType or its string value
        default_duration_days: Duration used when the dependent has none

    Returns:
        DateRange: The dependent's new start and due dates, or None when
        the predecessor is not fully dated, the dependent cannot hold
        dates, or the constraint type is unknown
    """
    if not predecessor.has_dates or not dependent.is_schedulable:
        return None

    try:
        constraint = DependencyType(getattr(constraint_type, "value", constraint_type))
    except ValueError:
        return None

    duration = dependent_duration(dependent, default_duration_days)

    if constraint == DependencyType.FINISH_TO_START:
        new_start = add_days(predecessor.due_date, 1)
        new_due = add_days(new_start, duration)
    elif constraint == DependencyType.START_TO_START:
        new_start = predecessor.start_date
        new_due = add_days(new_start, duration)
    else:
        new_due = predecessor.due_date
        new_start = add_days(new_due, -duration)

    return DateRange(new_start, new_due)
