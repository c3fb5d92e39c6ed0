"""
Geocodio Client — Request Dispatcher
=====================================
:class:`GeocodioClient` is the public entry point.  Each call performs at
most one HTTP exchange with the Geocodio API:

* one address / coordinate pair → ``GET`` with the input in ``q``
* several                       → ``POST`` with a JSON array of inputs
* ``parse``                     → always one ``GET /parse``

Usage::

    from geocodio import GeocodioClient

    client = GeocodioClient("YOUR_API_KEY")   # or set GEOCODIO_API_KEY
    best = client.geocode("54 West Colorado Boulevard Pasadena CA 91105").best
    sets = client.reverse_geocode("37.331669,-122.03074",
                                  {"lat": 37.7815, "lng": -122.404933})

No retries are attempted.  A failed exchange raises straight away.
"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Sequence
from enum import Enum
from functools import cached_property
from typing import Any

import requests

from geocodio.coordinates import normalize_coordinates
from geocodio.exceptions import (
    InvalidArgumentError,
    ProtocolError,
    RemoteError,
    TransportError,
)
from geocodio.models import Address, AddressSet
from geocodio.results import parse_address, parse_nested_results, parse_results

logger = logging.getLogger("geocodio.client")

API_KEY_ENV_VAR = "GEOCODIO_API_KEY"
DEFAULT_BASE_URL = "https://api.geocod.io/v1"
CONTENT_TYPE = "application/json"

_NO_BODY = object()


class HttpMethod(Enum):
    """The two request styles the API uses."""

    READ = "GET"
    WRITE = "POST"


class Response:
    """A successful exchange, with the JSON body decoded on first access.

    Args:
        raw: The ``requests.Response`` returned by the session.
    """

    def __init__(self, raw: requests.Response) -> None:
        self.raw = raw
        self.status_code: int = raw.status_code

    @cached_property
    def body(self) -> Any:
        try:
            return self.raw.json()
        except ValueError as exc:
            raise ProtocolError(
                f"Response from {self.raw.url} is not valid JSON."
            ) from exc


def _decoded_or_none(raw: requests.Response) -> Any:
    try:
        return raw.json()
    except ValueError:
        return None


def _as_inputs(values: tuple[Any, ...]) -> list[Any]:
    """Accept ``f(a, b)`` and ``f([a, b])`` alike."""
    if len(values) == 1 and isinstance(values[0], (list, tuple)):
        return list(values[0])
    return list(values)


class GeocodioClient:
    """Client for the Geocodio geocoding API.

    Args:
        api_key: Geocodio API key.  Defaults to the ``GEOCODIO_API_KEY``
                 environment variable, read once here.  A missing key is not
                 rejected locally; the service answers such calls with
                 HTTP 403, raised as :class:`~geocodio.exceptions.RemoteError`.
        base_url: API root including the version path.
        timeout: Seconds before ``requests`` gives up on an exchange.
        session: Optional ``requests.Session`` to send through (one is
                 created when omitted).

    The client holds no state besides the API key, but the session it sends
    through is not documented as thread-safe by ``requests``.  Use one client
    per thread, or pass each thread's own ``session``.
    """

    def __init__(
        self,
        api_key: str | None = None,
        *,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float | None = 10,
        session: requests.Session | None = None,
    ) -> None:
        self._api_key = api_key if api_key is not None else os.environ.get(API_KEY_ENV_VAR)
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._session = session or requests.Session()

    @property
    def api_key(self) -> str | None:
        return self._api_key

    # ------------------------------------------------------------------
    # Public operations
    # ------------------------------------------------------------------

    def geocode(self, *addresses: str | Sequence[str]) -> AddressSet | list[AddressSet]:
        """Geocode one or more addresses.

        A single address is sent with ``GET /geocode``; several are sent in
        one ``POST /geocode``.

        Args:
            *addresses: Address strings, or one list/tuple of them.

        Returns:
            An :class:`AddressSet` for a single address, otherwise a list of
            AddressSets in input order.

        Raises:
            InvalidArgumentError: If no address is given.
            RemoteError: On a non-2xx response.
            TransportError: If the exchange fails.
            ProtocolError: If the response is not in the expected shape.
        """
        inputs = _as_inputs(addresses)
        if not inputs:
            raise InvalidArgumentError("You must provide at least one address to geocode.")

        if len(inputs) == 1:
            return self._geocode_single("/geocode", inputs[0])
        return self._geocode_batch("/geocode", inputs)

    def reverse_geocode(self, *coordinates: Any) -> AddressSet | list[AddressSet]:
        """Reverse geocode one or more coordinate pairs.

        Pairs may be ``"lat,lng"`` strings or mappings with
        ``latitude``/``longitude`` or ``lat``/``lng`` keys, mixed freely.
        Each resulting AddressSet's ``query`` is the normalized pair.

        Raises:
            InvalidArgumentError: If no pair is given or a pair is not in a
                supported shape.
            RemoteError: On a non-2xx response.
            TransportError: If the exchange fails.
            ProtocolError: If the response is not in the expected shape.
        """
        inputs = _as_inputs(coordinates)
        if not inputs:
            raise InvalidArgumentError("You must provide coordinates to reverse geocode.")

        pairs = [normalize_coordinates(pair) for pair in inputs]
        if len(pairs) == 1:
            return self._geocode_single("/reverse", pairs[0])
        return self._geocode_batch("/reverse", pairs)

    reverse = reverse_geocode

    def parse(self, address: str) -> Address:
        """Split *address* into components without geocoding it.

        Parts missing from *address* stay ``None`` on the result.
        """
        response = self._request(HttpMethod.READ, "/parse", {"q": address})
        return parse_address(response.body)

    # ------------------------------------------------------------------
    # Dispatch paths
    # ------------------------------------------------------------------

    def _geocode_single(self, path: str, query: str) -> AddressSet:
        response = self._request(HttpMethod.READ, path, {"q": query})
        return AddressSet(query, tuple(parse_results(response.body)))

    def _geocode_batch(self, path: str, queries: list[str]) -> list[AddressSet]:
        logger.debug("Batch request to %s with %d inputs", path, len(queries))
        response = self._request(HttpMethod.WRITE, path, body=queries)
        return parse_nested_results(response.body, queries)

    def _request(
        self,
        method: HttpMethod,
        path: str,
        params: dict[str, Any] | None = None,
        body: Any = _NO_BODY,
    ) -> Response:
        """Send one exchange and return the successful response.

        The API key always comes first in the query string, followed by
        *params*.  When *body* is given it is JSON-encoded, ``None``
        included.
        """
        query: dict[str, Any] = {"api_key": self._api_key}
        if params:
            query.update(params)

        headers = {"Accept": CONTENT_TYPE}
        data = None
        if body is not _NO_BODY:
            headers["Content-Type"] = CONTENT_TYPE
            data = json.dumps(body)

        url = self.base_url + path
        try:
            raw = self._session.request(
                method.value,
                url,
                params=query,
                headers=headers,
                data=data,
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise TransportError(f"{method.value} {path} failed: {exc}") from exc

        logger.debug("%s %s → HTTP %d", method.value, path, raw.status_code)

        if not 200 <= raw.status_code < 300:
            raise RemoteError(raw.status_code, _decoded_or_none(raw), raw)

        return Response(raw)
