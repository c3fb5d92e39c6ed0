"""
Geocodio Client
================
Python client for the Geocodio API: geocode addresses, reverse geocode
coordinate pairs, and parse addresses into components.

Public API::

    from geocodio import GeocodioClient, Address, AddressSet
"""

from geocodio.client import GeocodioClient, HttpMethod, Response
from geocodio.coordinates import normalize_coordinates
from geocodio.exceptions import (
    GeocodioError,
    InvalidArgumentError,
    ProtocolError,
    RemoteError,
    TransportError,
)
from geocodio.models import Address, AddressSet

__all__ = [
    "GeocodioClient",
    "HttpMethod",
    "Response",
    "Address",
    "AddressSet",
    "normalize_coordinates",
    "GeocodioError",
    "InvalidArgumentError",
    "RemoteError",
    "TransportError",
    "ProtocolError",
]
__version__ = "1.0.0"
