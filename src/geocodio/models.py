"""
Geocodio Client — Result Model
===============================
Immutable containers for what the service returns.

Classes:
    Address      One candidate location, built from a decoded JSON object.
    AddressSet   The ordered candidates for one input query, best first.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any

from geocodio.exceptions import ProtocolError

_COMPONENT_FIELDS = (
    "number",
    "predirectional",
    "street",
    "suffix",
    "postdirectional",
    "formatted_street",
    "city",
    "county",
    "state",
    "zip",
    "country",
)


def _to_float(value: Any) -> float | None:
    if value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise ProtocolError(f"Expected a number, got {value!r}") from exc


@dataclass(frozen=True)
class Address:
    """A single address as returned by the geocode, reverse or parse endpoints.

    Every field is optional: the parse endpoint only echoes the components it
    found, and reverse results at low accuracy may lack a street number.

    Attributes:
        formatted_address: Full one-line address, e.g.
                           ``"54 W Colorado Blvd, Pasadena, CA 91105"``.
        number: House / street number.
        predirectional: Direction before the street name (``"W"``).
        street: Street name without direction or suffix.
        suffix: Street type (``"Blvd"``).
        postdirectional: Direction after the street name.
        formatted_street: Street portion as the service formats it.
        city: City or locality.
        county: County name.
        state: State / province abbreviation.
        zip: Postal code.
        country: Country code.
        latitude: WGS84 latitude, ``None`` when the payload has no location.
        longitude: WGS84 longitude, ``None`` when the payload has no location.
        accuracy: Service confidence score, 0.0–1.0.
        accuracy_type: What the location points at (``"rooftop"``, ``"place"``…).
        source: Data source credited by the service.
    """

    formatted_address: str | None = None
    number: str | None = None
    predirectional: str | None = None
    street: str | None = None
    suffix: str | None = None
    postdirectional: str | None = None
    formatted_street: str | None = None
    city: str | None = None
    county: str | None = None
    state: str | None = None
    zip: str | None = None
    country: str | None = None
    latitude: float | None = None
    longitude: float | None = None
    accuracy: float | None = None
    accuracy_type: str | None = None
    source: str | None = None

    @classmethod
    def from_payload(cls, payload: Any) -> "Address":
        """Build an Address from one decoded result object.

        Args:
            payload: A dict with optional ``address_components``,
                     ``formatted_address``, ``location`` and ``accuracy``
                     entries.

        Raises:
            ProtocolError: If *payload* (or one of its nested objects) is not
                a JSON object, or a coordinate is not numeric.
        """
        if not isinstance(payload, dict):
            raise ProtocolError(f"Expected an address object, got {type(payload).__name__}")

        components = payload.get("address_components") or {}
        location = payload.get("location") or {}
        if not isinstance(components, dict) or not isinstance(location, dict):
            raise ProtocolError("Malformed address object in response.")

        values: dict[str, Any] = {
            name: components.get(name) for name in _COMPONENT_FIELDS
        }
        return cls(
            formatted_address=payload.get("formatted_address"),
            latitude=_to_float(location.get("lat")),
            longitude=_to_float(location.get("lng")),
            accuracy=_to_float(payload.get("accuracy")),
            accuracy_type=payload.get("accuracy_type"),
            source=payload.get("source"),
            **values,
        )

    @property
    def coordinates(self) -> str | None:
        """Canonical ``"lat,lng"`` string, usable as a reverse-geocode input."""
        if self.latitude is None or self.longitude is None:
            return None
        return f"{self.latitude},{self.longitude}"

    def to_dict(self) -> dict[str, Any]:
        """Plain dict of every field, ``None`` values included."""
        return {
            "formatted_address": self.formatted_address,
            **{name: getattr(self, name) for name in _COMPONENT_FIELDS},
            "latitude": self.latitude,
            "longitude": self.longitude,
            "accuracy": self.accuracy,
            "accuracy_type": self.accuracy_type,
            "source": self.source,
        }

    def to_geojson_feature(self, extra_props: dict[str, Any] | None = None) -> dict[str, Any]:
        """Convert this address to a GeoJSON Feature dict.

        Args:
            extra_props: Additional ``properties`` entries (e.g. CSV columns).

        Returns:
            A GeoJSON Feature; geometry is ``None`` when there is no location.
        """
        props = self.to_dict()
        if extra_props:
            props.update(extra_props)

        geometry = (
            {"type": "Point", "coordinates": [self.longitude, self.latitude]}
            if self.coordinates is not None
            else None
        )
        return {"type": "Feature", "geometry": geometry, "properties": props}


@dataclass(frozen=True)
class AddressSet:
    """Candidate addresses for one input query, in the order the service ranked them.

    Attributes:
        query: The address string or canonical coordinate string that was sent.
        addresses: The candidates, best first.  May be empty.
        error: The service's message when it rejected this input inside a
               batch, ``None`` otherwise.  An errored set has no candidates.
    """

    query: str
    addresses: tuple[Address, ...] = field(default_factory=tuple)
    error: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "addresses", tuple(self.addresses))

    def __len__(self) -> int:
        return len(self.addresses)

    def __iter__(self) -> Iterator[Address]:
        return iter(self.addresses)

    def __getitem__(self, index: int) -> Address:
        return self.addresses[index]

    @property
    def size(self) -> int:
        return len(self.addresses)

    @property
    def best(self) -> Address | None:
        """The top-ranked candidate, or ``None`` if nothing matched."""
        return self.addresses[0] if self.addresses else None

    def to_dict(self) -> dict[str, Any]:
        return {
            "query": self.query,
            "results": [address.to_dict() for address in self.addresses],
            "error": self.error,
        }
