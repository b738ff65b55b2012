"""
Exception types for the DogSteps application.

Only invalid caller input is surfaced as an exception. Reference data
problems are recovered inside the breed catalog and breed lookup misses are
reported as warnings, so neither escapes the estimation pipeline.

Classes:
    DogStepsError: Base class for all DogSteps errors
    InvalidInputError: Negative step counts and similar caller mistakes
    CatalogLoadError: Breed catalog source missing or malformed
"""


class DogStepsError(Exception):
    """Base class for DogSteps errors."""


class InvalidInputError(DogStepsError, ValueError):
    """
    Raised when a caller passes input the core cannot accept.

    Subclasses ValueError so boundary code that already handles ValueError
    (query parameter parsing, JSON decoding) can treat both the same way.
    """


class CatalogLoadError(DogStepsError):
    """
    Raised by the breed catalog loader when its source cannot be used.

    Never leaves the catalog module: `load_catalog` catches it and falls
    back to the built-in breed set.
    """
