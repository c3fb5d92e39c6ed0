"""
Canned Geocodio API payloads and endpoint URLs shared by the test modules.
"""

from __future__ import annotations

from typing import Any

BASE_URL = "https://api.geocod.io/v1"
GEOCODE_URL = f"{BASE_URL}/geocode"
REVERSE_URL = f"{BASE_URL}/reverse"
PARSE_URL = f"{BASE_URL}/parse"

ADDRESS = "54 West Colorado Boulevard Pasadena CA 91105"

def result_payload(
    formatted: str,
    lat: float,
    lng: float,
    accuracy: float = 1,
    **components: Any,
) -> dict[str, Any]:
    """Build one entry of a Geocodio ``results`` list."""
    return {
        "address_components": components,
        "formatted_address": formatted,
        "location": {"lat": lat, "lng": lng},
        "accuracy": accuracy,
        "accuracy_type": "rooftop",
        "source": "TIGER/Line® dataset from the US Census Bureau",
    }

def flat_body(*results: dict[str, Any]) -> dict[str, Any]:
    """Single-request response body."""
    return {"input": {"address_components": {}, "formatted_address": ""}, "results": list(results)}

def nested_body(*entries: tuple[str, list[dict[str, Any]]]) -> dict[str, Any]:
    """Batch response body from ``(query, results)`` pairs."""
    return {
        "results": [
            {"query": query, "response": flat_body(*results)}
            for query, results in entries
        ]
    }
