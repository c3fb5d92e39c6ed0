"""
Geocodio Client — Result Parser
================================
Turns decoded response bodies into :mod:`geocodio.models` objects.

Response shapes::

    # single geocode / reverse  (flat)
    {"input": {...}, "results": [{...}, {...}]}

    # batch geocode / reverse   (nested, one entry per input, input order)
    {"results": [{"query": "...", "response": {"input": {...}, "results": [...]}},
                 ...]}

    # parse
    {"address_components": {...}, "formatted_address": "..."}
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from geocodio.exceptions import ProtocolError
from geocodio.models import Address, AddressSet

logger = logging.getLogger("geocodio.results")


def _results_list(body: Any) -> list[Any]:
    if not isinstance(body, dict):
        raise ProtocolError(f"Expected a JSON object, got {type(body).__name__}")
    results = body.get("results")
    if not isinstance(results, list):
        raise ProtocolError("Response body has no 'results' list.")
    return results


def parse_results(body: Any) -> list[Address]:
    """Map a flat ``results`` list to Addresses, keeping the service's order.

    Raises:
        ProtocolError: If *body* has no ``results`` list.
    """
    return [Address.from_payload(result) for result in _results_list(body)]


def parse_nested_results(body: Any, queries: Sequence[str]) -> list[AddressSet]:
    """Map a batch response to one AddressSet per query.

    Entries are matched to *queries* by position; the service answers in the
    order it was asked.  Each AddressSet keeps the query as sent, even when
    the echoed ``query`` differs in formatting.

    Args:
        body: Decoded batch response.
        queries: The inputs that were posted, in order.

    Raises:
        ProtocolError: If the entry count differs from ``len(queries)`` or an
            entry is malformed.
    """
    entries = _results_list(body)
    if len(entries) != len(queries):
        raise ProtocolError(
            f"Batch response has {len(entries)} entries for {len(queries)} inputs."
        )

    address_sets: list[AddressSet] = []
    for query, entry in zip(queries, entries):
        if not isinstance(entry, dict) or not isinstance(entry.get("response"), dict):
            raise ProtocolError(f"Malformed batch entry for query {query!r}.")

        echoed = entry.get("query")
        if echoed is not None and echoed != query:
            logger.debug("Batch entry echoed %r for input %r", echoed, query)

        response = entry["response"]
        if "error" in response and "results" not in response:
            logger.warning("Service rejected %r: %s", query, response["error"])
            address_sets.append(AddressSet(query, error=str(response["error"])))
            continue

        address_sets.append(AddressSet(query, tuple(parse_results(response))))

    return address_sets


def parse_address(body: Any) -> Address:
    """Build the single Address returned by the parse endpoint."""
    return Address.from_payload(body)
