"""
Activity aggregation for the DogSteps application.

Folds walk sessions into daily activity records and a rolling 7-day window.
Everything here is a pure transform over a list of sessions and a reference
day: nothing is cached, so calling a function twice with the same input
gives the same output. A day without sessions has no record; callers must
treat None as "no data", which is different from zero activity.

Naive timestamps are taken to be local time. Aware timestamps are converted
to local time before their calendar day is taken.

Functions:
    record_for_day: Aggregate one calendar day
    weekly_records: Aggregate the 7 days ending on a given day
    prune_sessions: Apply the session retention window
    is_retained: Whether a session falls inside the retention window
    activity_trend: Compare recent and older days of a weekly window
    weekly_average: Mean dog steps over a set of records
    weekly_totals: Summed steps, distance and active time for a window
    classify_activity_level: Activity level for a step count against a goal
    activity_insights: Human-readable insights for a weekly window
"""

from datetime import date, datetime, timedelta
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Sequence, Union

from ..errors import InvalidInputError
from ..models.profile import DogProfile
from ..models.step_data import (
    METERS_PER_MILE,
    ActivityLevel,
    DailyActivityRecord,
    EstimationConfidence,
)
from ..models.walk_session import WalkSession

DEFAULT_RETENTION_DAYS = 30
WEEK_LENGTH_DAYS = 7
TREND_SAMPLE_SIZE = 3
TREND_THRESHOLD_STEPS = 500
DOG_STEPS_PER_ACTIVE_MINUTE = 100


class ActivityTrend(str, Enum):
    """Direction of recent activity compared with the start of the week."""

    TRENDING_UP = "trending up"
    DECREASED = "decreased"
    STABLE = "stable"
    NOT_ENOUGH_DATA = "not enough data"

    @property
    def message(self) -> str:
        return {
            ActivityTrend.TRENDING_UP: "Activity is trending up!",
            ActivityTrend.DECREASED: "Activity has decreased recently",
            ActivityTrend.STABLE: "Activity levels are stable",
            ActivityTrend.NOT_ENOUGH_DATA: "Not enough data",
        }[self]


def to_local_naive(timestamp: datetime) -> datetime:
    """Express a timestamp as a naive local datetime."""
    if not isinstance(timestamp, datetime):
        raise InvalidInputError(f"Expected a datetime, got {timestamp!r}")
    if timestamp.tzinfo is not None and timestamp.utcoffset() is not None:
        return timestamp.astimezone().replace(tzinfo=None)
    return timestamp.replace(tzinfo=None)


def local_day(value: Union[date, datetime]) -> date:
    """Calendar day of a date or timestamp in the local calendar."""
    if isinstance(value, datetime):
        return to_local_naive(value).date()
    if isinstance(value, date):
        return value
    raise InvalidInputError(f"Expected a date or datetime, got {value!r}")


def sessions_for_day(
    sessions: Iterable[WalkSession], day: Union[date, datetime]
) -> List[WalkSession]:
    target = local_day(day)
    return [s for s in sessions if local_day(s.start_time) == target]


def record_for_day(
    sessions: Iterable[WalkSession],
    day: Union[date, datetime],
    profile: DogProfile,
    breed_multiplier: float,
    goal_steps: int,
) -> Optional[DailyActivityRecord]:
    """
    Aggregate the walk sessions that started on one calendar day.

    Args:
        sessions: All known walk sessions
        day: Calendar day (a datetime is reduced to its local day)
        profile: Current dog profile; its breed name is attached to the record
        breed_multiplier: Current multiplier for the profile's breed and age
        goal_steps: Daily goal the record is measured against

    Returns:
        DailyActivityRecord with summed figures, or None when no session
        started on that day

    Example:
        >>> record = record_for_day(sessions, date.today(), profile, 1.4, 8000)
        >>> record.estimated_dog_steps if record else "no walks today"
    """
    day_sessions = sessions_for_day(sessions, day)
    if not day_sessions:
        return None

    if goal_steps < 0:
        raise InvalidInputError(f"Goal cannot be negative: {goal_steps}")

    total_human_steps = sum(s.human_steps for s in day_sessions)
    total_dog_steps = sum(s.estimated_dog_steps for s in day_sessions)
    total_distance = sum(s.distance_in_meters for s in day_sessions)

    if total_dog_steps >= goal_steps:
        activity_level = ActivityLevel.HIGH
    else:
        activity_level = ActivityLevel.MODERATE

    return DailyActivityRecord(
        date=local_day(day),
        human_steps=total_human_steps,
        estimated_dog_steps=total_dog_steps,
        distance_in_meters=total_distance,
        breed_name=profile.breed_name,
        breed_multiplier=breed_multiplier,
        confidence=EstimationConfidence.HIGH.value,
        activity_level=activity_level.value,
        goal_steps=goal_steps,
    )


records_for_day = record_for_day


def weekly_records(
    sessions: Sequence[WalkSession],
    today: Union[date, datetime],
    profile: DogProfile,
    breed_multiplier: float,
    goal_steps: int,
    days: int = WEEK_LENGTH_DAYS,
) -> List[DailyActivityRecord]:
    """
    Daily records for the `days` calendar days ending on `today`.

    Days without sessions are left out. Records are ordered most recent
    first.
    """
    end_day = local_day(today)
    records = []

    for offset in range(days):
        record = record_for_day(
            sessions, end_day - timedelta(days=offset), profile, breed_multiplier, goal_steps
        )
        if record is not None:
            records.append(record)

    return sorted(records, key=lambda r: r.date, reverse=True)


def prune_sessions(
    sessions: Iterable[WalkSession],
    now: datetime,
    retention_days: int = DEFAULT_RETENTION_DAYS,
) -> List[WalkSession]:
    """
    Drop sessions that started more than `retention_days` before `now`.

    Order of the remaining sessions is preserved.
    """
    cutoff = retention_cutoff(now, retention_days)
    return [s for s in sessions if to_local_naive(s.start_time) >= cutoff]


def retention_cutoff(now: datetime, retention_days: int = DEFAULT_RETENTION_DAYS) -> datetime:
    """Earliest local start time a session may have and still be kept."""
    if retention_days < 0:
        raise InvalidInputError(f"Retention cannot be negative: {retention_days}")

    return to_local_naive(now) - timedelta(days=retention_days)


def is_retained(
    session: WalkSession, now: datetime, retention_days: int = DEFAULT_RETENTION_DAYS
) -> bool:
    return to_local_naive(session.start_time) >= retention_cutoff(now, retention_days)


def _mean_dog_steps(records: Sequence[DailyActivityRecord]) -> int:
    return sum(r.estimated_dog_steps for r in records) // len(records)


def activity_trend(records: Sequence[DailyActivityRecord]) -> ActivityTrend:
    """
    Classify the trend of a weekly window.

    `records` must be ordered most recent first, as returned by
    `weekly_records`. The mean of the 3 most recent records is compared with
    the mean of the 3 oldest; a difference of more than 500 dog steps either
    way counts as a trend.
    """
    if len(records) < 2:
        return ActivityTrend.NOT_ENOUGH_DATA

    recent_avg = _mean_dog_steps(records[:TREND_SAMPLE_SIZE])
    older_avg = _mean_dog_steps(records[-TREND_SAMPLE_SIZE:])

    if recent_avg > older_avg + TREND_THRESHOLD_STEPS:
        return ActivityTrend.TRENDING_UP
    if recent_avg < older_avg - TREND_THRESHOLD_STEPS:
        return ActivityTrend.DECREASED
    return ActivityTrend.STABLE


def weekly_average(records: Sequence[DailyActivityRecord]) -> int:
    if not records:
        return 0
    return _mean_dog_steps(records)


def weekly_totals(records: Sequence[DailyActivityRecord]) -> Dict[str, Any]:
    """
    Sum a weekly window into the totals shown on the history screen.

    Active time is estimated at 100 dog steps per minute.

    Returns:
        Dictionary with total steps, total distance, active day count and
        estimated active time; all zero for an empty window
    """
    total_dog_steps = sum(r.estimated_dog_steps for r in records)
    total_distance = sum((r.distance_in_meters for r in records), 0.0)
    active_minutes = total_dog_steps // DOG_STEPS_PER_ACTIVE_MINUTE

    hours, minutes = divmod(active_minutes, 60)
    if hours > 0:
        formatted_active_time = f"{hours}h {minutes}m"
    else:
        formatted_active_time = f"{minutes} min"

    return {
        "total_dog_steps": total_dog_steps,
        "total_human_steps": sum(r.human_steps for r in records),
        "total_distance_in_meters": total_distance,
        "total_distance_in_kilometers": round(total_distance / 1000.0, 3),
        "total_distance_in_miles": round(total_distance / METERS_PER_MILE, 3),
        "active_days": len(records),
        "active_minutes": active_minutes,
        "formatted_active_time": formatted_active_time,
    }


def classify_activity_level(steps: int, goal_steps: int) -> ActivityLevel:
    """Activity level by share of goal: <30%, <60%, <120%, <180%, above."""
    if goal_steps <= 0:
        return ActivityLevel.MODERATE

    share = steps / goal_steps
    if share < 0.3:
        return ActivityLevel.VERY_LOW
    if share < 0.6:
        return ActivityLevel.LOW
    if share < 1.2:
        return ActivityLevel.MODERATE
    if share < 1.8:
        return ActivityLevel.HIGH
    return ActivityLevel.VERY_HIGH


def activity_insights(
    records: Sequence[DailyActivityRecord], goal_steps: int
) -> List[str]:
    """
    Generate insights for a weekly window.

    One insight about goal achievement based on the weekly average, and one
    about the activity trend.
    """
    insights = []

    if not records:
        insights.append("No walks recorded in the last week.")
        return insights

    average = weekly_average(records)
    if average >= goal_steps * 0.8:
        insights.append("Great job! Your dog is meeting their activity goals")
    elif average >= goal_steps * 0.5:
        insights.append("Your dog could use a bit more activity")
    else:
        insights.append("Consider increasing daily walks for better health")

    trend = activity_trend(records)
    if trend is ActivityTrend.TRENDING_UP:
        insights.append("Activity levels are improving! Keep it up!")
    elif trend is ActivityTrend.DECREASED:
        insights.append("Activity has decreased recently")
    elif trend is ActivityTrend.STABLE:
        insights.append("Activity levels are consistent")

    return insights
