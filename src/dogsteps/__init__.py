"""
DogSteps: dog step estimation and walk activity tracking.

This package estimates a dog's steps from a human's walking activity using a
breed-specific conversion model, keeps a rolling window of completed walk
sessions in DynamoDB, and aggregates them into daily and weekly activity
records with goal progress.

Modules:
    lambdas: AWS Lambda handler exposing the API
    services: Estimation core, aggregation and DynamoDB integration
    models: Data models and validation using Pydantic
    utils: Structured logging helpers

Version: 0.1.0
"""

__version__ = "0.1.0"

from .errors import DogStepsError, InvalidInputError
from .models import BreedEntry, DailyActivityRecord, DogProfile, StepData, WalkSession
from .services import ActivityService, BreedCatalog, DynamoDBService, load_catalog

__all__ = [
    "BreedEntry",
    "DailyActivityRecord",
    "DogProfile",
    "StepData",
    "WalkSession",
    "DogStepsError",
    "InvalidInputError",
    "ActivityService",
    "BreedCatalog",
    "DynamoDBService",
    "load_catalog",
]
