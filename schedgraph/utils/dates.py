from datetime import date, datetime, timedelta


def as_date(value):
    """Normalise a date-like value to a plain ``date`` (time of day is dropped)."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    raise TypeError(f"Expected a date, got {type(value).__name__}")


def add_days(value, days):
    return value + timedelta(days=days)


def days_between(start, end):
    """Whole days from start to end (negative if end is earlier)."""
    return (end - start).days


class DateRange:
    """A resolved start/due pair."""

    def __init__(self, start_date, due_date):
        self.start_date = start_date
        self.due_date = due_date

    @property
    def duration_days(self):
        return days_between(self.start_date, self.due_date)

    def __eq__(self, other):
        if not isinstance(other, DateRange):
            return NotImplemented
        return (self.start_date, self.due_date) == (other.start_date, other.due_date)

    def __iter__(self):
        yield self.start_date
        yield self.due_date

    def __repr__(self):
        return f"DateRange({self.start_date}, {self.due_date})"
