"""
Shared fixtures.
"""

from __future__ import annotations

from typing import Any

import pytest

from geocodio.client import GeocodioClient
from payloads import result_payload


@pytest.fixture()
def client() -> GeocodioClient:
    return GeocodioClient("test-key")


@pytest.fixture()
def pasadena_results() -> list[dict[str, Any]]:
    """Two candidates for :data:`ADDRESS`, best first."""
    return [
        result_payload(
            "54 W Colorado Blvd, Pasadena, CA 91105",
            34.145760590909, -118.15204363636,
            number="54", predirectional="W", street="Colorado",
            suffix="Blvd", city="Pasadena", state="CA", zip="91105",
            county="Los Angeles County", country="US",
        ),
        result_payload(
            "54 W Colorado Blvd, Pasadena, CA 91105",
            34.1457, -118.1521,
            accuracy=0.8,
            number="54", predirectional="W", street="Colorado",
            suffix="Blvd", city="Pasadena", state="CA", zip="91105",
        ),
    ]
