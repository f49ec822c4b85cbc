import datetime
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple, Union


class Feedback(str, Enum):
    AGAIN = "again"
    HARD = "hard"
    GOOD = "good"
    EASY = "easy"

    @classmethod
    def parse(cls, value: object) -> Optional["Feedback"]:
        if isinstance(value, cls):
            return value
        if value is None:
            return None
        text = str(value).strip().lower()
        for member in cls:
            if member.value == text:
                return member
        return None


# Index = streak, clamped at the last entry.
INTERVALS: Tuple[datetime.timedelta, ...] = (
    datetime.timedelta(0),
    datetime.timedelta(minutes=10),
    datetime.timedelta(days=1),
    datetime.timedelta(days=3),
    datetime.timedelta(days=7),
    datetime.timedelta(days=14),
    datetime.timedelta(days=30),
)


@dataclass(frozen=True)
class ScheduleResult:
    new_streak: int
    due_at: datetime.datetime


def utcnow() -> datetime.datetime:
    """Naive UTC timestamp, the representation SQLite hands back."""
    return datetime.datetime.now(datetime.timezone.utc).replace(tzinfo=None)


def as_naive_utc(value: datetime.datetime) -> datetime.datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone(datetime.timezone.utc).replace(tzinfo=None)


def next_streak(streak: int, feedback: Union[Feedback, str, None]) -> int:
    """
    Streak transition for one piece of recall feedback.

      again -> 0
      hard  -> max(0, streak - 1)
      good  -> streak + 1
      easy  -> streak + 2

    Unrecognised feedback leaves the streak where it was.
    """
    streak = max(0, int(streak or 0))
    kind = Feedback.parse(feedback)
    if kind is Feedback.AGAIN:
        return 0
    if kind is Feedback.HARD:
        return max(0, streak - 1)
    if kind is Feedback.GOOD:
        return streak + 1
    if kind is Feedback.EASY:
        return streak + 2
    return streak


def interval_for(streak: int) -> datetime.timedelta:
    return INTERVALS[min(max(0, streak), len(INTERVALS) - 1)]


def next_state(
    streak: int,
    feedback: Union[Feedback, str, None],
    now: Optional[datetime.datetime] = None,
) -> ScheduleResult:
    """
    Fixed-table spaced-repetition step.

    The due time is ``now + INTERVALS[min(new_streak, len(INTERVALS) - 1)]``.
    Existing schedules were computed from this table.

    Returns:
        ScheduleResult(new_streak, due_at) with ``due_at`` as naive UTC.
    """
    now = as_naive_utc(now) if now is not None else utcnow()
    new_streak = next_streak(streak, feedback)
    return ScheduleResult(new_streak=new_streak, due_at=now + interval_for(new_streak))
