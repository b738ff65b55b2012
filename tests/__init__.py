"""
Test package for the DogSteps application.

This package contains tests for all components of the DogSteps system:
the step estimation core, activity aggregation, walk session persistence
and the API handler.

Test Organization:
    unit/: Unit tests for individual components and functions
    conftest.py: Pytest configuration and shared fixtures
"""
