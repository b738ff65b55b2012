"""
Pytest configuration and shared fixtures for DogSteps tests.

This module contains pytest configuration, shared fixtures, and test
utilities that are used across multiple test modules. It sets up a mocked
DynamoDB table, the bundled breed catalog, and sample profiles and walk
sessions.

Fixtures:
    mock_sessions_table: Mocked DynamoDB walk session table
    session_store: DynamoDBService bound to the mocked table
    catalog: Breed catalog loaded from the bundled JSON
    sample_profile: Adult Labrador profile
    activity_service: ActivityService with a fixed clock
    mock_api_gateway_event: Sample API Gateway event
"""

import os
from datetime import datetime, timedelta
from typing import Any, Dict, List

import boto3
import pytest
from moto import mock_aws

from dogsteps.models.breed import BreedEntry
from dogsteps.models.profile import BodyCondition, DogGender, DogProfile
from dogsteps.models.walk_session import WalkSession
from dogsteps.services.activity_service import ActivityService
from dogsteps.services.breed_catalog import BreedCatalog, load_catalog
from dogsteps.services.dynamodb_service import DynamoDBService


# Test configuration constants
TEST_TABLE_NAME = "test-walk-sessions-table"
FIXED_NOW = datetime(2024, 1, 15, 18, 0, 0)


@pytest.fixture(scope="session")
def aws_credentials():
    """
    Fixture to set up AWS credentials for testing.

    Sets environment variables for AWS credentials that are used by moto
    for mocking AWS services. These are fake credentials for testing only.
    """
    os.environ["AWS_ACCESS_KEY_ID"] = "testing"
    os.environ["AWS_SECRET_ACCESS_KEY"] = "testing"
    os.environ["AWS_SECURITY_TOKEN"] = "testing"
    os.environ["AWS_SESSION_TOKEN"] = "testing"
    os.environ["AWS_DEFAULT_REGION"] = "us-east-1"


@pytest.fixture
def mock_sessions_table(aws_credentials):
    """
    Fixture that creates a mocked DynamoDB walk session table.

    Uses moto to create an in-memory table keyed by the session id string,
    the same key schema DynamoDBService expects.

    Returns:
        boto3.resource.Table: Mocked DynamoDB table resource
    """
    with mock_aws():
        dynamodb = boto3.resource("dynamodb", region_name="us-east-1")

        table = dynamodb.create_table(
            TableName=TEST_TABLE_NAME,
            KeySchema=[{"AttributeName": "id", "KeyType": "HASH"}],
            AttributeDefinitions=[{"AttributeName": "id", "AttributeType": "S"}],
            BillingMode="PAY_PER_REQUEST",
        )

        table.wait_until_exists()
        yield table


@pytest.fixture
def session_store(mock_sessions_table):
    """DynamoDBService bound to the mocked walk session table."""
    return DynamoDBService(table_name=TEST_TABLE_NAME)


@pytest.fixture(scope="session")
def catalog() -> BreedCatalog:
    """Breed catalog loaded from the bundled breeds.json."""
    return load_catalog()


@pytest.fixture
def labrador(catalog) -> BreedEntry:
    return catalog.find_by_name("Labrador Retriever")


@pytest.fixture
def sample_profile() -> DogProfile:
    """Adult Labrador with a known age."""
    return DogProfile(
        name="Biscuit",
        breed_name="Labrador Retriever",
        gender=DogGender.GIRL,
        body_condition=BodyCondition.JUST_RIGHT,
        age_years=3,
    )


@pytest.fixture
def activity_service(catalog, session_store) -> ActivityService:
    """ActivityService whose clock is pinned to FIXED_NOW."""
    return ActivityService(
        catalog=catalog,
        session_store=session_store,
        retention_days=30,
        clock=lambda: FIXED_NOW,
    )


@pytest.fixture
def sample_sessions() -> List[WalkSession]:
    """
    Walk sessions spread over the week before FIXED_NOW.

    Two walks today, one yesterday, one three days ago and one 40 days ago
    (outside the retention window).
    """
    return [
        create_test_session(start_time=FIXED_NOW - timedelta(hours=10),
                            human_steps=1000, estimated_dog_steps=1400),
        create_test_session(start_time=FIXED_NOW - timedelta(hours=2),
                            human_steps=500, estimated_dog_steps=700),
        create_test_session(start_time=FIXED_NOW - timedelta(days=1),
                            human_steps=3000, estimated_dog_steps=4200),
        create_test_session(start_time=FIXED_NOW - timedelta(days=3),
                            human_steps=2000, estimated_dog_steps=2800),
        create_test_session(start_time=FIXED_NOW - timedelta(days=40),
                            human_steps=2500, estimated_dog_steps=3500),
    ]


@pytest.fixture
def mock_api_gateway_event() -> Dict[str, Any]:
    """
    Fixture that provides a mock API Gateway event for testing.

    Tests copy it and override httpMethod, resource, parameters and body.

    Returns:
        Dict[str, Any]: Mock API Gateway event
    """
    return {
        "httpMethod": "GET",
        "resource": "/activity/today",
        "pathParameters": None,
        "queryStringParameters": {
            "breed": "Labrador Retriever",
            "age": "3",
        },
        "headers": {
            "Content-Type": "application/json",
            "User-Agent": "test-client/1.0",
        },
        "body": None,
        "requestContext": {
            "requestId": "test-request-123",
            "identity": {"sourceIp": "127.0.0.1"},
        },
    }


@pytest.fixture
def api_environment(mock_sessions_table, monkeypatch):
    """Point the API handler at the mocked walk session table."""
    monkeypatch.setenv("WALK_SESSIONS_TABLE", TEST_TABLE_NAME)
    return mock_sessions_table


# Pytest configuration
def pytest_configure(config):
    """Register custom markers for organizing test execution."""
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line("markers", "integration: mark test as an integration test")
    config.addinivalue_line("markers", "aws: mark test as requiring (mocked) AWS services")


# Test utilities
def create_test_session(**kwargs) -> WalkSession:
    """
    Create a walk session with sensible defaults.

    Args:
        **kwargs: WalkSession field overrides

    Returns:
        WalkSession: Test session object
    """
    defaults = {
        "start_time": FIXED_NOW,
        "human_steps": 1000,
        "estimated_dog_steps": 1400,
        "distance_in_meters": 700.0,
        "breed_name": "Labrador Retriever",
        "breed_multiplier": 1.4,
    }

    defaults.update(kwargs)
    return WalkSession(**defaults)
