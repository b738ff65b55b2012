"""
Daily activity record model for the DogSteps application.

A DailyActivityRecord (StepData) is derived, never persisted: the activity
aggregator rebuilds it on demand from the walk sessions of one calendar day.
A day without walk sessions has no record at all.

Classes:
    EstimationConfidence: Enum of confidence labels
    ActivityLevel: Enum of activity level labels
    DailyActivityRecord: Pydantic model for one day's aggregated activity
"""

from datetime import date as CalendarDate
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

METERS_PER_MILE = 1609.34


class EstimationConfidence(str, Enum):
    """How much an estimate can be trusted. Walk sessions are always HIGH."""

    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


class ActivityLevel(str, Enum):
    """Activity level labels, from least to most active."""

    VERY_LOW = "Very Low"
    LOW = "Low"
    MODERATE = "Moderate"
    HIGH = "High"
    VERY_HIGH = "Very High"


class DailyActivityRecord(BaseModel):
    """
    Aggregated activity for one calendar day.

    Attributes:
        date: Calendar day the record covers
        human_steps: Sum of human steps over the day's walks
        estimated_dog_steps: Sum of estimated dog steps over the day's walks
        distance_in_meters: Sum of walk distances
        breed_name: Profile breed the record was computed for
        breed_multiplier: Current multiplier for that breed and age
        confidence: Confidence label ("High" for session data)
        activity_level: "High" when the goal is met, otherwise "Moderate"
        goal_steps: Daily goal the record is measured against
    """

    model_config = ConfigDict(frozen=True)

    date: CalendarDate
    human_steps: int = Field(..., ge=0)
    estimated_dog_steps: int = Field(..., ge=0)
    distance_in_meters: float = Field(default=0.0, ge=0)
    breed_name: str
    breed_multiplier: float = Field(..., gt=0)
    confidence: str = Field(default=EstimationConfidence.HIGH.value)
    activity_level: str = Field(default=ActivityLevel.MODERATE.value)
    goal_steps: int = Field(..., ge=0)

    @property
    def distance_in_kilometers(self) -> float:
        return self.distance_in_meters / 1000.0

    @property
    def distance_in_miles(self) -> float:
        return self.distance_in_meters / METERS_PER_MILE

    @property
    def goal_progress(self) -> float:
        if self.goal_steps <= 0:
            return 0.0
        return self.estimated_dog_steps / self.goal_steps

    @property
    def goal_progress_percentage(self) -> int:
        return int(self.goal_progress * 100)

    @property
    def is_goal_met(self) -> bool:
        return self.estimated_dog_steps >= self.goal_steps

    @property
    def step_ratio(self) -> float:
        if self.human_steps <= 0:
            return 0.0
        return self.estimated_dog_steps / self.human_steps

    @property
    def goal_status_description(self) -> str:
        if self.is_goal_met:
            return "Goal achieved!"
        if self.goal_progress_percentage >= 80:
            return "Almost there!"
        if self.goal_progress_percentage >= 50:
            return "Good progress"
        return "Needs more activity"

    @property
    def summary(self) -> str:
        return (
            f"{self.estimated_dog_steps} steps • {self.distance_in_kilometers:.1f}km • "
            f"{self.goal_progress_percentage}% of goal"
        )

    def to_api_dict(self) -> dict:
        """JSON-ready representation including the derived progress fields."""
        data = self.model_dump(mode="json")
        data.update(
            {
                "goal_progress_percentage": self.goal_progress_percentage,
                "is_goal_met": self.is_goal_met,
                "goal_status": self.goal_status_description,
                "distance_in_kilometers": round(self.distance_in_kilometers, 3),
            }
        )
        return data


StepData = DailyActivityRecord
