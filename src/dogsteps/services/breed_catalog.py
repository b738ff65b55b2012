"""
Breed catalog service for the DogSteps application.

The catalog is loaded once at startup by `load_catalog` and passed by
reference to every consumer. It is read-only after loading. If the catalog
JSON is missing or malformed the loader falls back to a small built-in breed
set, so lookups for the default "Mixed Breed" always succeed.

Classes:
    BreedCatalog: Immutable, ordered collection of breed entries

Functions:
    load_catalog: Load the catalog from JSON, falling back to built-in breeds
    fallback_breeds: The built-in breed set
"""

import json
import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from pydantic import ValidationError

from ..errors import CatalogLoadError
from ..models.breed import BreedEntry
from ..utils import log_event, log_warning

DEFAULT_BREED_NAME = "Mixed Breed"
BREEDS_FILE_ENV = "DOGSTEPS_BREEDS_FILE"
BUNDLED_BREEDS_FILE = Path(__file__).resolve().parent.parent / "data" / "breeds.json"

_STANDARD_AGE_FACTORS = {
    "puppyMultiplier": 1.15,
    "adultMultiplier": 1.0,
    "seniorMultiplier": 1.05,
}

_FALLBACK_BREED_DATA: List[Dict[str, Any]] = [
    {
        "name": DEFAULT_BREED_NAME,
        "description": "A wonderful mix with unique characteristics",
        "size": "Medium",
        "physical": {"averageLegLengthCm": 26, "averageWeightKg": 20, "bodyType": "athletic"},
        "movement": {"energyLevel": "Moderate"},
        "ageFactors": _STANDARD_AGE_FACTORS,
    },
    {
        "name": "Labrador Retriever",
        "description": "Friendly, outgoing, and active dogs",
        "size": "Large",
        "physical": {"averageLegLengthCm": 28, "averageWeightKg": 30, "bodyType": "athletic"},
        "movement": {"energyLevel": "High"},
        "ageFactors": _STANDARD_AGE_FACTORS,
    },
    {
        "name": "Golden Retriever",
        "description": "Intelligent, friendly, and devoted dogs",
        "size": "Large",
        "physical": {"averageLegLengthCm": 28, "averageWeightKg": 30, "bodyType": "athletic"},
        "movement": {"energyLevel": "High"},
        "ageFactors": _STANDARD_AGE_FACTORS,
    },
    {
        "name": "German Shepherd",
        "description": "Confident, courageous, and smart working dogs",
        "size": "Large",
        "physical": {"averageLegLengthCm": 32, "averageWeightKg": 35, "bodyType": "athletic"},
        "movement": {"energyLevel": "High"},
        "ageFactors": {"puppyMultiplier": 1.1, "adultMultiplier": 1.0, "seniorMultiplier": 1.05},
    },
    {
        "name": "French Bulldog",
        "description": "Playful, alert, and adaptable",
        "size": "Small",
        "physical": {"averageLegLengthCm": 18, "averageWeightKg": 12, "bodyType": "compact"},
        "movement": {"energyLevel": "Moderate"},
        "ageFactors": _STANDARD_AGE_FACTORS,
    },
]


class BreedCatalog:
    """
    Immutable, ordered collection of breed entries.

    Lookups by name are case-insensitive. The first entry wins when the
    source contains the same name twice.

    Attributes:
        breeds: Breed entries in catalog order
        source: Where the entries came from ("fallback" for built-in data)

    Example:
        >>> catalog = load_catalog()
        >>> catalog.find_by_name("beagle").name
        'Beagle'
        >>> len(catalog.search("")) == len(catalog)
        True
    """

    def __init__(self, breeds: Sequence[BreedEntry], source: str = "memory"):
        self._breeds: Tuple[BreedEntry, ...] = tuple(breeds)
        self._by_name: Dict[str, BreedEntry] = {}
        for breed in self._breeds:
            self._by_name.setdefault(breed.name.casefold(), breed)
        self._source = source

    @property
    def breeds(self) -> Tuple[BreedEntry, ...]:
        return self._breeds

    @property
    def source(self) -> str:
        return self._source

    @property
    def is_fallback(self) -> bool:
        return self._source == "fallback"

    def __len__(self) -> int:
        return len(self._breeds)

    def __iter__(self):
        return iter(self._breeds)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.find_by_name(name) is not None

    def find_by_name(self, name: str) -> Optional[BreedEntry]:
        """
        Find a breed by exact name, ignoring case and surrounding whitespace.

        Args:
            name: Breed name to look up

        Returns:
            The matching BreedEntry, or None when the name is not catalogued
        """
        if not name:
            return None
        return self._by_name.get(" ".join(name.split()).casefold())

    def search(self, query: str) -> List[BreedEntry]:
        """
        Search breeds by name, description and size label.

        An empty or whitespace-only query returns the full catalog in order.

        Args:
            query: Case-insensitive substring to look for

        Returns:
            Matching breed entries in catalog order
        """
        needle = (query or "").strip()
        if not needle:
            return list(self._breeds)

        return [breed for breed in self._breeds if breed.matches(needle)]


def fallback_breeds() -> List[BreedEntry]:
    """Built-in breeds used when the catalog source cannot be read."""
    return [BreedEntry.model_validate(data) for data in _FALLBACK_BREED_DATA]


def _read_breed_file(path: Path) -> List[BreedEntry]:
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise CatalogLoadError(f"Breed catalog {path} could not be read: {e}") from e

    try:
        records = json.loads(raw)
    except json.JSONDecodeError as e:
        raise CatalogLoadError(f"Breed catalog {path} is not valid JSON: {e}") from e

    if not isinstance(records, list):
        raise CatalogLoadError(f"Breed catalog {path} must contain a JSON array")
    if not records:
        raise CatalogLoadError(f"Breed catalog {path} is empty")

    try:
        return [BreedEntry.model_validate(record) for record in records]
    except ValidationError as e:
        raise CatalogLoadError(f"Breed catalog {path} has an invalid record: {e}") from e


def load_catalog(path: Optional[Union[str, Path]] = None) -> BreedCatalog:
    """
    Load the breed catalog.

    The source is `path` if given, else the file named by the
    DOGSTEPS_BREEDS_FILE environment variable, else the bundled breeds.json.
    Any problem with the source is logged and answered with the built-in
    fallback breeds; this function never raises for bad catalog data.

    Args:
        path: Optional explicit catalog file

    Returns:
        BreedCatalog ready to be shared by all consumers
    """
    catalog_path = Path(path or os.getenv(BREEDS_FILE_ENV) or BUNDLED_BREEDS_FILE)

    try:
        breeds = _read_breed_file(catalog_path)
    except CatalogLoadError as e:
        log_warning("CATALOG_FALLBACK", str(e), path=str(catalog_path))
        breeds = fallback_breeds()
        log_event("CATALOG_LOADED", source="fallback", breedCount=len(breeds))
        return BreedCatalog(breeds, source="fallback")

    log_event("CATALOG_LOADED", source=str(catalog_path), breedCount=len(breeds))
    return BreedCatalog(breeds, source=str(catalog_path))
