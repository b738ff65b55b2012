"""
Unit tests for DogSteps application components.

This package contains unit tests that test individual components in isolation.
AWS services are mocked with moto, so no test needs network access or real
credentials.
"""
