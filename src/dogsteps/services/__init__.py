"""
Service layer for the DogSteps application.

This module contains the step estimation core and the services built around
it: the breed catalog, the multiplier and goal calculations, activity
aggregation, walk session persistence in DynamoDB, and the coordinating
activity service.

Classes:
    ActivityService: Coordinates estimation, session storage and aggregation
    BreedCatalog: Immutable breed reference data
    DynamoDBService: DynamoDB persistence for walk sessions
"""

from .activity_aggregator import (
    ActivityTrend,
    activity_trend,
    prune_sessions,
    record_for_day,
    records_for_day,
    weekly_records,
)
from .activity_service import ActivityService
from .breed_catalog import BreedCatalog, load_catalog
from .dynamodb_service import DynamoDBService
from .goal_calculator import base_daily_goal, daily_goal
from .step_estimation import estimate_dog_steps, multiplier_for_breed, step_multiplier

__all__ = [
    "ActivityService",
    "ActivityTrend",
    "BreedCatalog",
    "DynamoDBService",
    "activity_trend",
    "base_daily_goal",
    "daily_goal",
    "estimate_dog_steps",
    "load_catalog",
    "multiplier_for_breed",
    "prune_sessions",
    "record_for_day",
    "records_for_day",
    "step_multiplier",
    "weekly_records",
]
