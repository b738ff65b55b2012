"""
Breed reference data model for the DogSteps application.

This module defines the immutable BreedEntry model and the enums describing a
breed's size, build and energy. Breed entries are loaded once from the breed
catalog JSON (camelCase keys) and never mutated afterwards.

Classes:
    SizeCategory: Enum of breed size labels
    BodyType: Enum of body builds used by the multiplier calculation
    EnergyLevel: Enum of breed energy levels
    PhysicalCharacteristics: Leg length, weight and body type of a breed
    MovementCharacteristics: Movement traits of a breed
    AgeFactors: Per-life-stage multiplier adjustments
    BreedEntry: Pydantic model for a single catalog breed
"""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _normalize_label(value: str) -> str:
    return "".join(c for c in value.lower() if c.isalnum())


class _LabelEnum(str, Enum):
    """
    String enum that accepts loosely formatted labels.

    "Very High", "VeryHigh", "very_high" and "VERY HIGH" all resolve to the
    same member, matching against both values and member names.
    """

    @classmethod
    def _missing_(cls, value: Any) -> Optional["_LabelEnum"]:
        if not isinstance(value, str):
            return None

        wanted = _normalize_label(value)
        for member in cls:
            if wanted in (_normalize_label(member.value), _normalize_label(member.name)):
                return member

        return None

    def __str__(self) -> str:
        return self.value


class SizeCategory(_LabelEnum):
    """Breed size categories, as labelled in the catalog."""

    TOY = "Toy"
    SMALL = "Small"
    MEDIUM = "Medium"
    LARGE = "Large"
    EXTRA_LARGE = "Extra Large"


class BodyType(_LabelEnum):
    """Body build of a breed."""

    COMPACT = "compact"
    ATHLETIC = "athletic"
    ELONGATED = "elongated"
    HEAVY = "heavy"


class EnergyLevel(_LabelEnum):
    """Breed energy levels."""

    LOW = "Low"
    MODERATE = "Moderate"
    HIGH = "High"
    VERY_HIGH = "Very High"


class PhysicalCharacteristics(BaseModel):
    """Physical measurements used to derive a breed's stride."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    average_leg_length_cm: float = Field(
        ..., gt=0, alias="averageLegLengthCm", description="Average leg length"
    )
    average_weight_kg: float = Field(
        ..., gt=0, alias="averageWeightKg", description="Average body weight"
    )
    body_type: BodyType = Field(..., alias="bodyType", description="Body build")

    @field_validator("body_type", mode="before")
    @classmethod
    def parse_body_type(cls, v: Any) -> Any:
        return BodyType(v) if isinstance(v, str) else v


class MovementCharacteristics(BaseModel):
    """Movement traits of a breed."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    energy_level: EnergyLevel = Field(..., alias="energyLevel")

    @field_validator("energy_level", mode="before")
    @classmethod
    def parse_energy_level(cls, v: Any) -> Any:
        return EnergyLevel(v) if isinstance(v, str) else v


class AgeFactors(BaseModel):
    """Multiplier adjustments for puppies (0-1), adults (2-7) and seniors (8+)."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    puppy_multiplier: float = Field(..., gt=0, alias="puppyMultiplier")
    adult_multiplier: float = Field(..., gt=0, alias="adultMultiplier")
    senior_multiplier: float = Field(..., gt=0, alias="seniorMultiplier")


class BreedEntry(BaseModel):
    """
    Immutable reference record for one dog breed.

    Breed entries come from the breed catalog and feed the step multiplier
    calculation. The name is the lookup key and is matched case-insensitively
    by the catalog.

    Attributes:
        name: Breed name, unique within a catalog
        description: Short human-readable description
        size_category: Size label (Toy through Extra Large)
        physical: Leg length, weight and body type
        movement: Energy level
        age_factors: Life-stage multiplier adjustments

    Example:
        >>> entry = BreedEntry.model_validate({
        ...     "name": "Beagle",
        ...     "description": "Friendly, curious, and merry hounds",
        ...     "size": "Medium",
        ...     "physical": {"averageLegLengthCm": 22, "averageWeightKg": 11,
        ...                  "bodyType": "athletic"},
        ...     "movement": {"energyLevel": "High"},
        ...     "ageFactors": {"puppyMultiplier": 1.15, "adultMultiplier": 1.0,
        ...                    "seniorMultiplier": 1.05},
        ... })
        >>> entry.summary
        'Beagle • Medium • High Energy'
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str = Field(..., min_length=1, max_length=100, description="Breed name")
    description: str = Field(default="", max_length=500)
    size_category: SizeCategory = Field(..., alias="size")
    physical: PhysicalCharacteristics
    movement: MovementCharacteristics
    age_factors: AgeFactors = Field(..., alias="ageFactors")

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        cleaned = " ".join(v.split())
        if not cleaned:
            raise ValueError("Breed name cannot be blank")
        return cleaned

    @field_validator("size_category", mode="before")
    @classmethod
    def parse_size_category(cls, v: Any) -> Any:
        return SizeCategory(v) if isinstance(v, str) else v

    @property
    def display_name(self) -> str:
        return f"{self.name} ({self.size_category.value})"

    @property
    def summary(self) -> str:
        return (
            f"{self.name} • {self.size_category.value} • "
            f"{self.movement.energy_level.value} Energy"
        )

    def matches(self, query: str) -> bool:
        """Case-insensitive substring match on name, description and size label."""
        needle = query.casefold()
        return (
            needle in self.name.casefold()
            or needle in self.description.casefold()
            or needle in self.size_category.value.casefold()
        )
