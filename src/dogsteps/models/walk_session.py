"""
Walk session data model for the DogSteps application.

A WalkSession is the record of one completed, user-initiated walk. Sessions
are the only source of step and distance figures: daily and weekly activity
is always recomputed from them. Sessions are immutable once created and are
stored in DynamoDB for a rolling retention window.

Classes:
    WalkSession: Pydantic model for a completed walk
"""

import json
import uuid
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


def _new_session_id() -> str:
    return f"walk_{uuid.uuid4().hex}"


class WalkSession(BaseModel):
    """
    Pydantic model representing one completed walk.

    Attributes:
        id: Unique identifier for the session (auto-generated)
        start_time: When the walk started; decides which day it counts for
        end_time: When the walk ended, if known
        duration_seconds: Walk duration in seconds
        human_steps: Steps counted for the human during the walk
        estimated_dog_steps: Dog steps derived from human_steps
        distance_in_meters: Distance reported by the motion sensor
        breed_name: Breed the estimate was made for
        breed_multiplier: Multiplier used for the estimate
        data_source: Which sensor path produced the counts

    Example:
        >>> session = WalkSession(
        ...     start_time=datetime(2024, 1, 15, 7, 30),
        ...     human_steps=1000,
        ...     estimated_dog_steps=1400,
        ...     distance_in_meters=750.0,
        ... )
        >>> session.summary
        '1400 dog steps in 00:00'
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=_new_session_id, min_length=1)
    start_time: datetime = Field(..., description="Walk start time")
    end_time: Optional[datetime] = Field(None, description="Walk end time")
    duration_seconds: float = Field(default=0.0, ge=0)
    human_steps: int = Field(..., ge=0, description="Human steps counted")
    estimated_dog_steps: int = Field(..., ge=0, description="Estimated dog steps")
    distance_in_meters: float = Field(default=0.0, ge=0)
    breed_name: str = Field(default="")
    breed_multiplier: Optional[float] = Field(None, gt=0)
    data_source: str = Field(default="CoreMotion", max_length=30)

    @field_validator("human_steps", "estimated_dog_steps", mode="before")
    @classmethod
    def reject_fractional_steps(cls, v: Any) -> Any:
        if isinstance(v, (float, Decimal)) and v != int(v):
            raise ValueError("Step counts must be whole numbers")
        return v

    @model_validator(mode="after")
    def check_end_after_start(self) -> "WalkSession":
        if self.end_time is not None and self.end_time < self.start_time:
            raise ValueError("end_time cannot be earlier than start_time")
        return self

    @property
    def distance_in_kilometers(self) -> float:
        return self.distance_in_meters / 1000.0

    @property
    def formatted_duration(self) -> str:
        total = int(self.duration_seconds)
        hours, remainder = divmod(total, 3600)
        minutes, seconds = divmod(remainder, 60)

        if hours > 0:
            return f"{hours}:{minutes:02d}:{seconds:02d}"
        return f"{minutes:02d}:{seconds:02d}"

    @property
    def average_pace(self) -> str:
        """Pace in minutes and seconds per kilometre, e.g. 12'30"."""
        if self.duration_seconds <= 0 or self.distance_in_meters <= 0:
            return "--'--\""

        pace_seconds = int(self.duration_seconds / self.distance_in_kilometers)
        minutes, seconds = divmod(pace_seconds, 60)
        return f"{minutes}'{seconds:02d}\""

    @property
    def summary(self) -> str:
        return f"{self.estimated_dog_steps} dog steps in {self.formatted_duration}"

    def to_dynamodb_item(self) -> Dict[str, Any]:
        """
        Convert the session to a DynamoDB item.

        Timestamps become ISO strings and floats become Decimals, since the
        DynamoDB client rejects Python floats. None values are dropped.

        Returns:
            Dictionary representation for DynamoDB
        """
        item = self.model_dump(mode="json", exclude_none=True)
        return json.loads(json.dumps(item), parse_float=Decimal)

    @classmethod
    def from_dynamodb_item(cls, item: Dict[str, Any]) -> "WalkSession":
        """
        Create a WalkSession from a DynamoDB item.

        Decimal values are converted back to int or float and ISO timestamp
        strings are parsed by model validation.

        Args:
            item: DynamoDB item dictionary

        Returns:
            WalkSession instance
        """
        data: Dict[str, Any] = {}
        for key, value in item.items():
            if isinstance(value, Decimal):
                value = int(value) if value == value.to_integral_value() else float(value)
            data[key] = value

        return cls(**data)
