"""
Activity service for the DogSteps application.

This service is the single coordinating component around the pure step
estimation and aggregation functions. It owns the in-memory walk session
list, turns raw sensor counts into walk sessions, applies the retention
window, hands the pruned list to the session store, and builds the daily and
weekly summaries the presentation layer asks for.

Classes:
    ActivityService: Coordinates estimation, session storage and aggregation
"""

import os
import threading
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, Tuple

from pydantic import ValidationError

from ..errors import InvalidInputError
from ..models.profile import DogProfile
from ..models.step_data import DailyActivityRecord
from ..models.walk_session import WalkSession
from ..utils import log_error, log_event
from . import activity_aggregator
from .breed_catalog import BreedCatalog, load_catalog
from .dynamodb_service import DynamoDBService
from .goal_calculator import daily_goal
from .step_estimation import estimate_dog_steps, multiplier_for_breed

RETENTION_DAYS_ENV = "SESSION_RETENTION_DAYS"


class ActivityService:
    """
    Core business logic service for walk and activity management.

    Writing a session, pruning, persisting and recomputing today's record
    happen under one lock, so a reader never aggregates a half-updated
    session list.

    Attributes:
        catalog: Breed catalog shared with the rest of the application
        session_store: Persistence collaborator for walk sessions
        retention_days: How many days of sessions are kept

    Example:
        >>> service = ActivityService(catalog=load_catalog())
        >>> session = service.complete_walk(profile, human_steps=4200,
        ...                                 distance_in_meters=3100.0)
        >>> service.today_record(profile).estimated_dog_steps
        5880
    """

    def __init__(
        self,
        catalog: Optional[BreedCatalog] = None,
        session_store: Optional[DynamoDBService] = None,
        retention_days: Optional[int] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """
        Initialize the activity service.

        Creates default collaborators if not provided and loads the stored
        sessions.

        Args:
            catalog: Optional breed catalog, loaded from the default source if omitted
            session_store: Optional session store instance
            retention_days: Optional retention override, else SESSION_RETENTION_DAYS or 30
            clock: Optional callable returning "now", for tests
        """
        # An empty catalog is falsy, so test for None explicitly
        self.catalog = catalog if catalog is not None else load_catalog()
        self.session_store = session_store or DynamoDBService()

        if retention_days is None:
            retention_days = int(
                os.getenv(
                    RETENTION_DAYS_ENV,
                    str(activity_aggregator.DEFAULT_RETENTION_DAYS),
                )
            )
        if retention_days < 0:
            raise ValueError("Retention days cannot be negative")
        self.retention_days = retention_days

        self._clock = clock or datetime.now
        self._lock = threading.RLock()
        self._sessions: List[WalkSession] = self.session_store.load_sessions()

    @property
    def sessions(self) -> Tuple[WalkSession, ...]:
        with self._lock:
            return tuple(self._sessions)

    def reload_sessions(self) -> int:
        """Reload sessions from the store; returns how many were loaded."""
        with self._lock:
            self._sessions = self.session_store.load_sessions()
            return len(self._sessions)

    def breed_multiplier(self, profile: DogProfile) -> float:
        return multiplier_for_breed(self.catalog, profile.breed_name, profile.age_years)

    def goal_for(self, profile: DogProfile) -> int:
        """Daily goal that records are measured against (breed table only)."""
        return daily_goal(profile.breed_name, profile.body_condition)

    def recommended_goal(self, profile: DogProfile) -> int:
        """Goal with the age adjustment applied when the profile has an age."""
        return daily_goal(profile.breed_name, profile.body_condition, profile.age_years)

    def create_session(
        self,
        profile: DogProfile,
        human_steps: int,
        distance_in_meters: float = 0.0,
        start_time: Optional[datetime] = None,
        end_time: Optional[datetime] = None,
        data_source: str = "CoreMotion",
    ) -> WalkSession:
        """
        Turn the counts of a finished walk into a walk session.

        The session is estimated and validated but not stored; pass it to
        `record_session` to keep it.

        Args:
            profile: Current dog profile
            human_steps: Human steps counted by the motion sensor
            distance_in_meters: Distance counted by the motion sensor
            start_time: When the walk started, defaults to now
            end_time: When the walk ended, if known
            data_source: Sensor path that produced the counts

        Returns:
            The new WalkSession

        Raises:
            InvalidInputError: If counts or timestamps are invalid
        """
        multiplier = self.breed_multiplier(profile)
        dog_steps = estimate_dog_steps(human_steps, multiplier)

        if distance_in_meters is None or distance_in_meters < 0:
            raise InvalidInputError(
                f"Distance cannot be negative: {distance_in_meters}"
            )

        start = start_time or self._clock()

        try:
            duration = 0.0
            if end_time is not None:
                duration = max((end_time - start).total_seconds(), 0.0)

            return WalkSession(
                start_time=start,
                end_time=end_time,
                duration_seconds=duration,
                human_steps=human_steps,
                estimated_dog_steps=dog_steps,
                distance_in_meters=distance_in_meters,
                breed_name=profile.breed_name,
                breed_multiplier=multiplier,
                data_source=data_source,
            )
        except (ValidationError, TypeError) as e:
            raise InvalidInputError(f"Invalid walk session: {e}") from e

    def complete_walk(
        self,
        profile: DogProfile,
        human_steps: int,
        distance_in_meters: float = 0.0,
        start_time: Optional[datetime] = None,
        end_time: Optional[datetime] = None,
        data_source: str = "CoreMotion",
    ) -> WalkSession:
        """
        Create a walk session and record it.

        Arguments are those of `create_session`.

        Returns:
            The stored WalkSession

        Raises:
            InvalidInputError: If the walk is invalid or started before the
                retention window
        """
        session = self.create_session(
            profile,
            human_steps,
            distance_in_meters=distance_in_meters,
            start_time=start_time,
            end_time=end_time,
            data_source=data_source,
        )
        self.record_session(session, profile)
        return session

    def record_session(
        self, session: WalkSession, profile: Optional[DogProfile] = None
    ) -> Optional[DailyActivityRecord]:
        """
        Add a completed session, prune, persist and recompute today.

        Args:
            session: Completed walk session
            profile: Current profile, used to recompute today's record

        Returns:
            Today's record after the write, or None without a profile or
            without sessions today

        Raises:
            InvalidInputError: If the session started before the retention
                window and would be pruned straight away
        """
        with self._lock:
            now = self._clock()
            if not activity_aggregator.is_retained(session, now, self.retention_days):
                raise InvalidInputError(
                    f"Walk started {session.start_time.isoformat()}, more than "
                    f"{self.retention_days} days ago; it would not be kept"
                )

            self._sessions.append(session)
            self._sessions = activity_aggregator.prune_sessions(
                self._sessions, now, self.retention_days
            )

            if not self.session_store.save_sessions(self._sessions):
                log_error(
                    "SESSION_PERSIST_FAILED",
                    "Walk session kept in memory but not persisted",
                    {"session_id": session.id},
                )

            log_event(
                "WALK_SESSION_SAVED",
                sessionId=session.id,
                humanSteps=session.human_steps,
                dogSteps=session.estimated_dog_steps,
                totalSessions=len(self._sessions),
            )

            if profile is None:
                return None
            return self.today_record(profile, now)

    def today_record(
        self, profile: DogProfile, now: Optional[datetime] = None
    ) -> Optional[DailyActivityRecord]:
        """Today's record, or None when no walk started today."""
        with self._lock:
            sessions = list(self._sessions)

        return activity_aggregator.record_for_day(
            sessions,
            now or self._clock(),
            profile,
            self.breed_multiplier(profile),
            self.goal_for(profile),
        )

    def weekly_records(
        self, profile: DogProfile, now: Optional[datetime] = None
    ) -> List[DailyActivityRecord]:
        """Records for the 7 days ending today, most recent first."""
        with self._lock:
            sessions = list(self._sessions)

        return activity_aggregator.weekly_records(
            sessions,
            now or self._clock(),
            profile,
            self.breed_multiplier(profile),
            self.goal_for(profile),
        )

    def activity_summary(
        self, profile: DogProfile, now: Optional[datetime] = None
    ) -> Dict[str, Any]:
        """
        Everything the home screen needs in one snapshot.

        Returns:
            Dictionary with today's record (or None), the weekly records,
            trend, weekly average and totals, goals and insights
        """
        now = now or self._clock()
        goal = self.goal_for(profile)
        weekly = self.weekly_records(profile, now)
        today_day = activity_aggregator.local_day(now)
        today = next((r for r in weekly if r.date == today_day), None)
        trend = activity_aggregator.activity_trend(weekly)

        return {
            "today": today,
            "weekly": weekly,
            "trend": trend,
            "weekly_average": activity_aggregator.weekly_average(weekly),
            "weekly_totals": activity_aggregator.weekly_totals(weekly),
            "goal_steps": goal,
            "recommended_goal": self.recommended_goal(profile),
            "breed_multiplier": self.breed_multiplier(profile),
            "insights": activity_aggregator.activity_insights(weekly, goal),
        }

    def reset(self) -> bool:
        """Forget all sessions, e.g. when the dog profile is deleted."""
        with self._lock:
            self._sessions = []
            cleared = self.session_store.clear_sessions()

        log_event("SESSIONS_RESET", cleared=cleared)
        return cleared

    def health_check(self) -> Dict[str, Any]:
        """
        Perform a health check of the service and its collaborators.

        Returns:
            Dictionary with health check results
        """
        health_status: Dict[str, Any] = {
            "status": "healthy",
            "services": {},
            "timestamp": datetime.utcnow().isoformat(),
        }

        db_health = self.session_store.health_check()
        health_status["services"]["database"] = db_health
        if db_health["status"] != "healthy":
            health_status["status"] = "degraded"

        health_status["services"]["catalog"] = {
            "status": "degraded" if self.catalog.is_fallback else "healthy",
            "source": self.catalog.source,
            "breed_count": len(self.catalog),
        }
        if self.catalog.is_fallback:
            health_status["status"] = "degraded"

        return health_status
