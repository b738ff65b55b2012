"""
Dog profile model for the DogSteps application.

One profile is current per installation. It is created during onboarding,
edited explicitly, and its breed name links it to the breed catalog.

Classes:
    DogGender: Enum of profile genders
    BodyCondition: Enum of body condition answers from onboarding
    DogProfile: Pydantic model for the dog being tracked
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator


class DogGender(str, Enum):
    """Gender options offered during onboarding."""

    BOY = "Boy"
    GIRL = "Girl"


class BodyCondition(str, Enum):
    """
    Body condition of the dog as chosen by the owner.

    The value is the label shown during onboarding; `description` gives the
    hint text that goes with it.
    """

    SKINNY = "A little skinny"
    JUST_RIGHT = "Just right"
    CHUBBY = "A bit chubby"

    @classmethod
    def _missing_(cls, value: Any) -> Optional["BodyCondition"]:
        # Accept member names ("JUST_RIGHT", "justRight") as well as labels
        if isinstance(value, str):
            wanted = "".join(c for c in value.lower() if c.isalnum())
            for member in cls:
                if wanted == member.name.lower().replace("_", ""):
                    return member
        return None

    @property
    def description(self) -> str:
        return {
            BodyCondition.SKINNY: "Narrow waistline and you can clearly see ribs.",
            BodyCondition.JUST_RIGHT: (
                "Visible waistline with some fat cover but ribs are easy to feel."
            ),
            BodyCondition.CHUBBY: (
                "Waistline is not visible and ribs are tricky to feel."
            ),
        }[self]


class DogProfile(BaseModel):
    """
    Pydantic model representing the dog being tracked.

    Attributes:
        name: The dog's name
        breed_name: Breed catalog key (matched case-insensitively)
        gender: Boy or Girl
        body_condition: Owner's assessment of body condition
        age_years: Age in whole years, None when unknown
        created_at: When the profile was created
        updated_at: When the profile was last edited

    Example:
        >>> profile = DogProfile(
        ...     name="Biscuit",
        ...     breed_name="Beagle",
        ...     gender=DogGender.GIRL,
        ...     body_condition=BodyCondition.JUST_RIGHT,
        ...     age_years=4,
        ... )
        >>> profile.summary
        'Biscuit • Beagle • Girl • Just right'
    """

    name: str = Field(..., min_length=1, max_length=50, description="Dog name")
    breed_name: str = Field(..., min_length=1, max_length=100)
    gender: DogGender = Field(default=DogGender.BOY)
    body_condition: BodyCondition = Field(default=BodyCondition.JUST_RIGHT)
    age_years: Optional[int] = Field(None, ge=0, le=40, description="Age in years")
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

    @field_validator("name", "breed_name")
    @classmethod
    def strip_whitespace(cls, v: str) -> str:
        cleaned = v.strip()
        if not cleaned:
            raise ValueError("Value cannot be blank")
        return cleaned

    @field_validator("body_condition", mode="before")
    @classmethod
    def parse_body_condition(cls, v: Any) -> Any:
        return BodyCondition(v) if isinstance(v, str) else v

    def update_profile(self, **changes: Any) -> "DogProfile":
        """
        Return an edited copy of the profile.

        Only name, breed_name, gender, body_condition and age_years may be
        changed; `updated_at` is refreshed and `created_at` kept.

        Raises:
            ValueError: If an unknown or read-only field is passed
        """
        editable = {"name", "breed_name", "gender", "body_condition", "age_years"}
        unknown = set(changes) - editable
        if unknown:
            raise ValueError(f"Cannot update profile fields: {sorted(unknown)}")

        data = self.model_dump()
        data.update(changes)
        data["updated_at"] = datetime.now()
        return DogProfile(**data)

    @property
    def summary(self) -> str:
        return (
            f"{self.name} • {self.breed_name} • {self.gender.value} • "
            f"{self.body_condition.value}"
        )
