"""
Step estimation for the DogSteps application.

Converts human steps into estimated dog steps. The conversion multiplier is
derived from a breed's leg length, energy level, body type and weight, and
the dog's life stage:

    multiplier = (65.0 / (leg_length_cm * 1.6))
                 * energy * body_type * weight * age

All functions here are pure and deterministic.

Functions:
    step_multiplier: Multiplier for a breed entry and age
    multiplier_for_breed: Multiplier by breed name with a safe default
    estimate_dog_steps: Apply a multiplier to a human step count
"""

import math
from typing import Optional

from ..errors import InvalidInputError
from ..models.breed import BodyType, BreedEntry, EnergyLevel
from ..utils import log_warning
from .breed_catalog import BreedCatalog

HUMAN_STRIDE_CM = 65.0
STRIDE_TO_LEG_RATIO = 1.6
DEFAULT_MULTIPLIER = 1.5

PUPPY_MAX_AGE = 1
ADULT_MAX_AGE = 7

ENERGY_FACTORS = {
    EnergyLevel.LOW: 1.10,
    EnergyLevel.MODERATE: 1.00,
    EnergyLevel.HIGH: 0.95,
    EnergyLevel.VERY_HIGH: 0.90,
}

BODY_TYPE_FACTORS = {
    BodyType.COMPACT: 1.15,
    BodyType.ATHLETIC: 1.00,
    BodyType.ELONGATED: 0.90,
    BodyType.HEAVY: 1.05,
}

# (upper bound in kg, exclusive) -> factor; heavier dogs fall through to 0.90
WEIGHT_FACTORS = (
    (5.0, 1.20),
    (15.0, 1.10),
    (30.0, 1.00),
    (50.0, 0.95),
)
HEAVY_WEIGHT_FACTOR = 0.90


def energy_factor(energy_level: EnergyLevel) -> float:
    return ENERGY_FACTORS[energy_level]


def body_type_factor(body_type: BodyType) -> float:
    return BODY_TYPE_FACTORS[body_type]


def weight_factor(weight_kg: float) -> float:
    for upper_bound, factor in WEIGHT_FACTORS:
        if weight_kg < upper_bound:
            return factor
    return HEAVY_WEIGHT_FACTOR


def age_factor(breed: BreedEntry, dog_age_years: Optional[int]) -> float:
    """
    Life-stage factor for a dog's age.

    Ages 0-1 use the puppy factor, 2-7 the adult factor and 8 or more the
    senior factor. None means the age is unknown and uses the adult factor.

    Raises:
        InvalidInputError: If the age is negative
    """
    if dog_age_years is None:
        return breed.age_factors.adult_multiplier
    if dog_age_years < 0:
        raise InvalidInputError(f"Dog age cannot be negative: {dog_age_years}")

    if dog_age_years <= PUPPY_MAX_AGE:
        return breed.age_factors.puppy_multiplier
    if dog_age_years <= ADULT_MAX_AGE:
        return breed.age_factors.adult_multiplier
    return breed.age_factors.senior_multiplier


def base_multiplier(breed: BreedEntry) -> float:
    """Human stride divided by the breed's stride (1.6x leg length)."""
    dog_stride_cm = breed.physical.average_leg_length_cm * STRIDE_TO_LEG_RATIO
    return HUMAN_STRIDE_CM / dog_stride_cm


def step_multiplier(breed: BreedEntry, dog_age_years: Optional[int]) -> float:
    """
    Derive the human-to-dog step multiplier for a breed and age.

    The age must be passed explicitly; pass None only when it is genuinely
    unknown, which selects the adult factor.

    Args:
        breed: Breed catalog entry
        dog_age_years: Age in whole years, or None if unknown

    Returns:
        Dog steps per human step, always > 0

    Raises:
        InvalidInputError: If the age is negative

    Example:
        >>> round(step_multiplier(labrador, 3), 3)
        1.309
    """
    return (
        base_multiplier(breed)
        * energy_factor(breed.movement.energy_level)
        * body_type_factor(breed.physical.body_type)
        * weight_factor(breed.physical.average_weight_kg)
        * age_factor(breed, dog_age_years)
    )


def multiplier_for_breed(
    catalog: BreedCatalog, breed_name: str, dog_age_years: Optional[int]
) -> float:
    """
    Multiplier for a breed looked up by name.

    A breed missing from the catalog is not an error: the default multiplier
    is returned and a warning is logged.
    """
    breed = catalog.find_by_name(breed_name)
    if breed is None:
        log_warning(
            "BREED_LOOKUP_MISS",
            "Breed not found, using default multiplier",
            breedName=breed_name,
            multiplier=DEFAULT_MULTIPLIER,
        )
        return DEFAULT_MULTIPLIER

    return step_multiplier(breed, dog_age_years)


def estimate_dog_steps(human_steps: int, multiplier: float) -> int:
    """
    Estimate dog steps from human steps.

    The result is truncated, not rounded: 10 human steps at 1.49 give 14.

    Args:
        human_steps: Non-negative human step count
        multiplier: Non-negative dog steps per human step

    Returns:
        floor(human_steps * multiplier)

    Raises:
        InvalidInputError: If either argument is negative, steps is not an int,
            or the product is too large to represent
    """
    if isinstance(human_steps, bool) or not isinstance(human_steps, int):
        raise InvalidInputError(f"Human steps must be an integer, got {human_steps!r}")
    if human_steps < 0:
        raise InvalidInputError(f"Human steps cannot be negative: {human_steps}")
    if not math.isfinite(multiplier) or multiplier < 0:
        raise InvalidInputError(f"Multiplier must be a non-negative number: {multiplier}")

    try:
        return math.floor(human_steps * multiplier)
    except OverflowError as e:
        raise InvalidInputError(f"Human steps out of range: {human_steps}") from e
