"""
Daily goal calculation for the DogSteps application.

The daily dog-step goal is computed in two independent steps: a per-breed
base goal from a fixed table, then an optional age adjustment when the dog's
age is known. Body condition is accepted for interface stability but does
not change the figure.

Functions:
    base_daily_goal: Per-breed base goal with a default for unknown breeds
    age_goal_multiplier: Life-stage factor applied to a goal
    adjust_goal_for_age: Apply the life-stage factor to a goal
    daily_goal: Base goal plus age adjustment
"""

from typing import Optional

from ..errors import InvalidInputError
from ..models.profile import BodyCondition
from ..utils import log_warning

DEFAULT_DAILY_GOAL = 8000

BASE_DAILY_GOALS = {
    "labrador retriever": 12000,
    "golden retriever": 12000,
    "german shepherd": 10000,
    "french bulldog": 5000,
    "chihuahua": 3000,
    "great dane": 8000,
    "mixed breed": 8000,
}

# (max age inclusive, multiplier); older dogs use VERY_SENIOR_GOAL_MULTIPLIER
AGE_GOAL_MULTIPLIERS = (
    (1, 0.6),
    (7, 1.0),
    (12, 0.8),
)
VERY_SENIOR_GOAL_MULTIPLIER = 0.6


def base_daily_goal(breed_name: str) -> int:
    """
    Base daily dog-step goal for a breed.

    Unknown breeds get DEFAULT_DAILY_GOAL and a logged warning.
    """
    key = " ".join((breed_name or "").split()).casefold()
    goal = BASE_DAILY_GOALS.get(key)

    if goal is None:
        log_warning(
            "BREED_GOAL_DEFAULT",
            "No base goal for breed, using default",
            breedName=breed_name,
            goal=DEFAULT_DAILY_GOAL,
        )
        return DEFAULT_DAILY_GOAL

    return goal


def age_goal_multiplier(age_years: int) -> float:
    """Puppy 0-1: 0.6, adult 2-7: 1.0, senior 8-12: 0.8, very senior 13+: 0.6."""
    if age_years < 0:
        raise InvalidInputError(f"Dog age cannot be negative: {age_years}")

    for max_age, multiplier in AGE_GOAL_MULTIPLIERS:
        if age_years <= max_age:
            return multiplier
    return VERY_SENIOR_GOAL_MULTIPLIER


def adjust_goal_for_age(goal: int, age_years: int) -> int:
    return int(goal * age_goal_multiplier(age_years))


def daily_goal(
    breed_name: str,
    body_condition: BodyCondition = BodyCondition.JUST_RIGHT,
    age_years: Optional[int] = None,
) -> int:
    """
    Daily dog-step goal for a profile.

    Args:
        breed_name: Breed name (case-insensitive)
        body_condition: Profile body condition; does not alter the goal
        age_years: Age in years; the age adjustment is skipped when None

    Returns:
        Daily goal in dog steps

    Example:
        >>> daily_goal("Zzyx", BodyCondition.JUST_RIGHT, age_years=4)
        8000
    """
    goal = base_daily_goal(breed_name)
    if age_years is None:
        return goal
    return adjust_goal_for_age(goal, age_years)
