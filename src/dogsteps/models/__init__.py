"""
Data models for the DogSteps application.

This module contains Pydantic models for data validation and serialization
used throughout the application for breeds, dog profiles, walk sessions and
the daily activity records derived from them.

Classes:
    BreedEntry: Immutable breed reference record
    DogProfile: The dog being tracked
    WalkSession: One completed walk
    DailyActivityRecord: Aggregated activity for one calendar day
"""

from .breed import (
    AgeFactors,
    BodyType,
    BreedEntry,
    EnergyLevel,
    MovementCharacteristics,
    PhysicalCharacteristics,
    SizeCategory,
)
from .profile import BodyCondition, DogGender, DogProfile
from .step_data import ActivityLevel, DailyActivityRecord, EstimationConfidence, StepData
from .walk_session import WalkSession

__all__ = [
    "AgeFactors",
    "BodyType",
    "BreedEntry",
    "EnergyLevel",
    "MovementCharacteristics",
    "PhysicalCharacteristics",
    "SizeCategory",
    "BodyCondition",
    "DogGender",
    "DogProfile",
    "ActivityLevel",
    "DailyActivityRecord",
    "EstimationConfidence",
    "StepData",
    "WalkSession",
]
