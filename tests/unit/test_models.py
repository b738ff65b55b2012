"""
Unit tests for DogSteps data models.

Tests the Pydantic models including validation, alias parsing, DynamoDB
serialization and derived properties.
"""

from datetime import date, datetime, timezone
from decimal import Decimal

import pytest
from pydantic import ValidationError

from dogsteps.models.breed import BodyType, BreedEntry, EnergyLevel, SizeCategory
from dogsteps.models.profile import BodyCondition, DogGender, DogProfile
from dogsteps.models.step_data import DailyActivityRecord, StepData
from dogsteps.models.walk_session import WalkSession


def _breed_json(**overrides):
    data = {
        "name": "Beagle",
        "description": "Friendly, curious, and merry hounds",
        "size": "Medium",
        "physical": {"averageLegLengthCm": 22, "averageWeightKg": 11, "bodyType": "athletic"},
        "movement": {"energyLevel": "High"},
        "ageFactors": {"puppyMultiplier": 1.15, "adultMultiplier": 1.0, "seniorMultiplier": 1.05},
    }
    data.update(overrides)
    return data


class TestBreedEntry:
    """Test cases for the BreedEntry model."""

    def test_parse_catalog_json(self):
        """Test parsing a catalog record with camelCase keys."""
        breed = BreedEntry.model_validate(_breed_json())

        assert breed.name == "Beagle"
        assert breed.size_category == SizeCategory.MEDIUM
        assert breed.physical.average_leg_length_cm == 22
        assert breed.physical.body_type == BodyType.ATHLETIC
        assert breed.movement.energy_level == EnergyLevel.HIGH
        assert breed.age_factors.senior_multiplier == 1.05

    def test_lenient_enum_labels(self):
        """Test that label spelling variants resolve to the same member."""
        for label in ["Very High", "VeryHigh", "very_high", "VERY HIGH"]:
            breed = BreedEntry.model_validate(
                _breed_json(movement={"energyLevel": label})
            )
            assert breed.movement.energy_level == EnergyLevel.VERY_HIGH

        for label in ["Extra Large", "ExtraLarge", "extra_large"]:
            breed = BreedEntry.model_validate(_breed_json(size=label))
            assert breed.size_category == SizeCategory.EXTRA_LARGE

    def test_unknown_enum_label_rejected(self):
        with pytest.raises(ValidationError):
            BreedEntry.model_validate(_breed_json(size="Gigantic"))

    def test_non_positive_measurements_rejected(self):
        """Test that leg length, weight and age factors must be positive."""
        with pytest.raises(ValidationError):
            BreedEntry.model_validate(
                _breed_json(physical={"averageLegLengthCm": 0, "averageWeightKg": 11,
                                      "bodyType": "athletic"})
            )

        with pytest.raises(ValidationError):
            BreedEntry.model_validate(
                _breed_json(ageFactors={"puppyMultiplier": -1, "adultMultiplier": 1.0,
                                        "seniorMultiplier": 1.0})
            )

    def test_blank_name_rejected(self):
        with pytest.raises(ValidationError):
            BreedEntry.model_validate(_breed_json(name="   "))

    def test_breed_is_immutable(self):
        breed = BreedEntry.model_validate(_breed_json())

        with pytest.raises(ValidationError):
            breed.name = "Other"

    def test_display_name_and_summary(self):
        breed = BreedEntry.model_validate(_breed_json())

        assert breed.display_name == "Beagle (Medium)"
        assert breed.summary == "Beagle • Medium • High Energy"

    def test_matches(self):
        breed = BreedEntry.model_validate(_breed_json())

        assert breed.matches("beag")
        assert breed.matches("MERRY")
        assert breed.matches("medium")
        assert not breed.matches("terrier")


class TestDogProfile:
    """Test cases for the DogProfile model."""

    def test_profile_defaults(self):
        profile = DogProfile(name="Rex", breed_name="Beagle")

        assert profile.gender == DogGender.BOY
        assert profile.body_condition == BodyCondition.JUST_RIGHT
        assert profile.age_years is None
        assert profile.created_at is not None

    def test_body_condition_accepts_names_and_labels(self):
        assert DogProfile(name="Rex", breed_name="Beagle",
                          body_condition="A bit chubby").body_condition == BodyCondition.CHUBBY
        assert DogProfile(name="Rex", breed_name="Beagle",
                          body_condition="SKINNY").body_condition == BodyCondition.SKINNY
        assert DogProfile(name="Rex", breed_name="Beagle",
                          body_condition="justRight").body_condition == BodyCondition.JUST_RIGHT

    def test_negative_age_rejected(self):
        with pytest.raises(ValidationError):
            DogProfile(name="Rex", breed_name="Beagle", age_years=-1)

    def test_update_profile_returns_edited_copy(self):
        profile = DogProfile(name="Rex", breed_name="Beagle",
                             created_at=datetime(2024, 1, 1), updated_at=datetime(2024, 1, 1))

        updated = profile.update_profile(breed_name="Poodle", age_years=5)

        assert updated.breed_name == "Poodle"
        assert updated.age_years == 5
        assert updated.name == "Rex"
        assert updated.created_at == datetime(2024, 1, 1)
        assert updated.updated_at > profile.updated_at
        assert profile.breed_name == "Beagle"

    def test_update_profile_rejects_unknown_fields(self):
        profile = DogProfile(name="Rex", breed_name="Beagle")

        with pytest.raises(ValueError):
            profile.update_profile(created_at=datetime(2020, 1, 1))

    def test_summary(self):
        profile = DogProfile(name="Biscuit", breed_name="Beagle", gender=DogGender.GIRL)

        assert profile.summary == "Biscuit • Beagle • Girl • Just right"


class TestWalkSession:
    """Test cases for the WalkSession model."""

    def test_session_creation(self):
        session = WalkSession(
            start_time=datetime(2024, 1, 15, 7, 30),
            human_steps=1000,
            estimated_dog_steps=1400,
            distance_in_meters=750.0,
        )

        assert session.id.startswith("walk_")
        assert session.data_source == "CoreMotion"
        assert session.distance_in_kilometers == 0.75

    def test_ids_are_unique(self):
        first = WalkSession(start_time=datetime(2024, 1, 15), human_steps=1, estimated_dog_steps=1)
        second = WalkSession(start_time=datetime(2024, 1, 15), human_steps=1, estimated_dog_steps=1)

        assert first.id != second.id

    def test_negative_counts_rejected(self):
        with pytest.raises(ValidationError):
            WalkSession(start_time=datetime(2024, 1, 15), human_steps=-1, estimated_dog_steps=0)

        with pytest.raises(ValidationError):
            WalkSession(start_time=datetime(2024, 1, 15), human_steps=0, estimated_dog_steps=-5)

        with pytest.raises(ValidationError):
            WalkSession(start_time=datetime(2024, 1, 15), human_steps=0,
                        estimated_dog_steps=0, distance_in_meters=-1.0)

    def test_fractional_steps_rejected(self):
        with pytest.raises(ValidationError):
            WalkSession(start_time=datetime(2024, 1, 15), human_steps=10.5, estimated_dog_steps=0)

    def test_malformed_timestamp_rejected(self):
        with pytest.raises(ValidationError):
            WalkSession(start_time="yesterday-ish", human_steps=0, estimated_dog_steps=0)

    def test_end_before_start_rejected(self):
        with pytest.raises(ValidationError):
            WalkSession(
                start_time=datetime(2024, 1, 15, 8, 0),
                end_time=datetime(2024, 1, 15, 7, 0),
                human_steps=0,
                estimated_dog_steps=0,
            )

    def test_session_is_immutable(self):
        session = WalkSession(start_time=datetime(2024, 1, 15), human_steps=1, estimated_dog_steps=1)

        with pytest.raises(ValidationError):
            session.human_steps = 5

    def test_duration_and_pace(self):
        session = WalkSession(
            start_time=datetime(2024, 1, 15, 7, 0),
            duration_seconds=1800,
            human_steps=3000,
            estimated_dog_steps=4200,
            distance_in_meters=2000.0,
        )

        assert session.formatted_duration == "30:00"
        assert session.average_pace == "15'00\""
        assert session.summary == "4200 dog steps in 30:00"

        long_walk = session.model_copy(update={"duration_seconds": 3725})
        assert long_walk.formatted_duration == "1:02:05"

    def test_pace_without_distance(self):
        session = WalkSession(start_time=datetime(2024, 1, 15), human_steps=0, estimated_dog_steps=0)

        assert session.average_pace == "--'--\""

    def test_to_dynamodb_item(self):
        """Test conversion to DynamoDB item format."""
        session = WalkSession(
            id="walk_test_1",
            start_time=datetime(2024, 1, 15, 7, 30),
            human_steps=1000,
            estimated_dog_steps=1400,
            distance_in_meters=750.5,
            breed_multiplier=1.4,
        )

        item = session.to_dynamodb_item()

        assert item["id"] == "walk_test_1"
        assert item["start_time"] == "2024-01-15T07:30:00"
        assert item["human_steps"] == 1000
        assert item["distance_in_meters"] == Decimal("750.5")
        assert isinstance(item["breed_multiplier"], Decimal)
        assert "end_time" not in item
        assert not any(isinstance(v, float) for v in item.values())

    def test_from_dynamodb_item(self):
        """Test creating a session from a DynamoDB item."""
        item = {
            "id": "walk_test_2",
            "start_time": "2024-01-15T07:30:00+00:00",
            "human_steps": Decimal("1000"),
            "estimated_dog_steps": Decimal("1400"),
            "distance_in_meters": Decimal("750.5"),
            "duration_seconds": Decimal("0"),
            "breed_name": "Labrador Retriever",
            "breed_multiplier": Decimal("1.4"),
            "data_source": "CoreMotion",
        }

        session = WalkSession.from_dynamodb_item(item)

        assert session.id == "walk_test_2"
        assert session.start_time == datetime(2024, 1, 15, 7, 30, tzinfo=timezone.utc)
        assert session.human_steps == 1000
        assert session.distance_in_meters == 750.5
        assert session.breed_multiplier == 1.4


class TestDailyActivityRecord:
    """Test cases for the DailyActivityRecord model."""

    def _record(self, **overrides):
        data = {
            "date": date(2024, 1, 15),
            "human_steps": 5000,
            "estimated_dog_steps": 7000,
            "distance_in_meters": 3500.0,
            "breed_name": "Labrador Retriever",
            "breed_multiplier": 1.4,
            "goal_steps": 8000,
        }
        data.update(overrides)
        return DailyActivityRecord(**data)

    def test_step_data_alias(self):
        assert StepData is DailyActivityRecord

    def test_defaults(self):
        record = self._record()

        assert record.confidence == "High"
        assert record.activity_level == "Moderate"

    def test_goal_progress(self):
        record = self._record()

        assert record.goal_progress == pytest.approx(0.875)
        assert record.goal_progress_percentage == 87
        assert not record.is_goal_met
        assert record.goal_status_description == "Almost there!"

    def test_goal_met(self):
        record = self._record(estimated_dog_steps=8000)

        assert record.is_goal_met
        assert record.goal_status_description == "Goal achieved!"

    def test_zero_goal_progress(self):
        record = self._record(goal_steps=0)

        assert record.goal_progress == 0.0

    def test_status_thresholds(self):
        assert self._record(estimated_dog_steps=4000).goal_status_description == "Good progress"
        assert self._record(estimated_dog_steps=1000).goal_status_description == "Needs more activity"

    def test_distances_and_ratio(self):
        record = self._record()

        assert record.distance_in_kilometers == 3.5
        assert record.distance_in_miles == pytest.approx(2.1748, rel=1e-3)
        assert record.step_ratio == pytest.approx(1.4)
        assert self._record(human_steps=0).step_ratio == 0.0

    def test_to_api_dict(self):
        data = self._record().to_api_dict()

        assert data["date"] == "2024-01-15"
        assert data["goal_progress_percentage"] == 87
        assert data["is_goal_met"] is False
        assert data["goal_status"] == "Almost there!"
