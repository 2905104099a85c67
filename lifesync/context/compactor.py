"""Context compaction: reduce a log history to a bounded prompt digest."""

from dataclasses import dataclass
from enum import Enum
from typing import Sequence

from lifesync.models import DailyLog, UserProfile

DEFAULT_WINDOW = 5


class HistoryOrder(str, Enum):
    """How the caller ordered its log sequence."""
    OLDEST_FIRST = "oldest_first"
    NEWEST_FIRST = "newest_first"


@dataclass(frozen=True)
class CompactedContext:
    """Prompt-ready digest handed to the router and persona agents."""
    profile_summary: str
    history: str


def _number(value: float):
    return int(value) if float(value).is_integer() else value


def format_log_line(log: DailyLog) -> str:
    return (
        f"Date: {log.date}, Mood: {log.mood.value}, Calories: {_number(log.calories_in)}, "
        f"Exercise: {log.exercise_minutes}min, HR: {log.heart_rate}bpm"
    )


def compact_history(
    logs: Sequence[DailyLog],
    window: int = DEFAULT_WINDOW,
    order: HistoryOrder = HistoryOrder.OLDEST_FIRST,
) -> str:
    """
    Select the ``window`` most recent logs and render one line per entry.

    With OLDEST_FIRST the tail of the sequence is taken as-is. With
    NEWEST_FIRST the head is taken and emitted oldest to newest, so the
    digest always reads chronologically.
    """
    if not logs or window <= 0:
        return ""

    if order == HistoryOrder.NEWEST_FIRST:
        selected = list(reversed(logs[:window]))
    else:
        selected = list(logs[-window:])

    return "\n".join(format_log_line(log) for log in selected)


def summarize_profile(profile: UserProfile) -> str:
    return f"User: {profile.name}, Age: {profile.age}, Goals: {', '.join(profile.goals)}"


def compact(
    logs: Sequence[DailyLog],
    profile: UserProfile,
    window: int = DEFAULT_WINDOW,
    order: HistoryOrder = HistoryOrder.OLDEST_FIRST,
) -> CompactedContext:
    return CompactedContext(
        profile_summary=summarize_profile(profile),
        history=compact_history(logs, window=window, order=order),
    )
