"""
Geocodio Client — Coordinate Normalizer
========================================
Reverse geocoding accepts a coordinate pair in one of two shapes:

* a delimited string, ``"34.145760590909,-118.15204363636"``
* a mapping with ``latitude``/``longitude`` or ``lat``/``lng`` keys

Both are turned into the one canonical ``"lat,lng"`` string that is sent to
the service and kept as the query of the resulting
:class:`~geocodio.models.AddressSet`.

Values are not range-checked here; the service rejects out-of-range or
non-numeric coordinates itself.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Union

from geocodio.exceptions import InvalidArgumentError

_LATITUDE_KEYS = ("latitude", "lat")
_LONGITUDE_KEYS = ("longitude", "lng")


@dataclass(frozen=True)
class RawCoordinates:
    """A ``"lat,lng"`` string as supplied by the caller."""

    text: str

    def normalize(self) -> str:
        parts = self.text.split(",")
        if len(parts) != 2 or not all(p.strip() for p in parts):
            raise InvalidArgumentError(
                f"Coordinates must be a 'latitude,longitude' string, got {self.text!r}."
            )
        return ",".join(p.strip() for p in parts)


@dataclass(frozen=True)
class KeyValueCoordinates:
    """A latitude/longitude mapping, long or short key names."""

    values: Mapping[Any, Any]

    def normalize(self) -> str:
        keyed = {str(k): v for k, v in self.values.items()}

        unknown = set(keyed) - set(_LATITUDE_KEYS) - set(_LONGITUDE_KEYS)
        if unknown:
            raise InvalidArgumentError(
                f"Unsupported coordinate keys: {', '.join(sorted(unknown))}. "
                "Use latitude/longitude or lat/lng."
            )

        lat = self._pick(keyed, _LATITUDE_KEYS)
        lng = self._pick(keyed, _LONGITUDE_KEYS)
        return f"{_render(lat)},{_render(lng)}"

    @staticmethod
    def _pick(keyed: dict[str, Any], names: tuple[str, str]) -> Any:
        present = [name for name in names if name in keyed]
        if not present:
            raise InvalidArgumentError(
                f"Coordinates are missing '{names[0]}' (or '{names[1]}')."
            )
        if len(present) > 1:
            raise InvalidArgumentError(
                f"Ambiguous coordinates: both '{names[0]}' and '{names[1]}' given."
            )
        return keyed[present[0]]


CoordinatePair = Union[RawCoordinates, KeyValueCoordinates]


def _render(value: Any) -> str:
    return value.strip() if isinstance(value, str) else str(value)


def classify(value: Any) -> CoordinatePair:
    """Resolve a caller-supplied coordinate value into its tagged variant.

    Args:
        value: A ``"lat,lng"`` string, a latitude/longitude mapping, or an
               already-classified :class:`RawCoordinates` /
               :class:`KeyValueCoordinates`.

    Raises:
        InvalidArgumentError: For any other kind of value.
    """
    if isinstance(value, (RawCoordinates, KeyValueCoordinates)):
        return value
    if isinstance(value, str):
        return RawCoordinates(value)
    if isinstance(value, Mapping):
        return KeyValueCoordinates(value)
    raise InvalidArgumentError(
        f"Unsupported coordinate representation {type(value).__name__}: "
        "pass a 'latitude,longitude' string or a mapping with lat/lng keys."
    )


def normalize_coordinates(value: Any) -> str:
    """Return the canonical ``"lat,lng"`` string for *value*.

    Idempotent: a canonical string comes back unchanged.

    Example::

        >>> normalize_coordinates({"lat": 34.1, "lng": -118.1})
        '34.1,-118.1'
        >>> normalize_coordinates("34.1, -118.1")
        '34.1,-118.1'
    """
    return classify(value).normalize()
