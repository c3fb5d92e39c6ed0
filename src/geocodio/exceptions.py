"""
Geocodio Client — Exception Hierarchy
======================================
Every error the client raises comes from this module so callers can catch
at the granularity they need.

Hierarchy::

    GeocodioError                        ← catch-all base
    ├── InvalidArgumentError             ← no inputs, bad coordinate shape
    │   └── ColumnNotFoundError          ← CSV column missing (batch tool)
    ├── RemoteError                      ← service answered with non-2xx
    ├── TransportError                   ← exchange never completed
    ├── ProtocolError                    ← body not in the expected shape
    └── OutputWriteError                 ← batch tool cannot write output

Usage::

    from geocodio.exceptions import RemoteError

    try:
        client.geocode(address)
    except RemoteError as exc:
        print(exc.status_code, exc.body)
"""

from __future__ import annotations

from typing import Any


# ---------------------------------------------------------------------------
# Root
# ---------------------------------------------------------------------------


class GeocodioError(Exception):
    """Base exception for the Geocodio client.

    Args:
        message: Human-readable description of the error.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message: str = message

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r})"


# ---------------------------------------------------------------------------
# Caller input
# ---------------------------------------------------------------------------


class InvalidArgumentError(GeocodioError):
    """Raised before any request is sent when the call itself is unusable.

    Covers an empty address/coordinate list and coordinate values that are
    neither a ``"lat,lng"`` string nor a latitude/longitude mapping.
    """


class ColumnNotFoundError(InvalidArgumentError):
    """Raised when the batch tool's CSV lacks a requested column.

    Args:
        column: The name of the missing column.
        available: Column names that ARE present.
    """

    def __init__(self, column: str, available: list[str]) -> None:
        available_str = ", ".join(f"'{c}'" for c in available)
        super().__init__(
            f"Column '{column}' not found. Available columns: {available_str}"
        )
        self.column: str = column
        self.available: list[str] = available


# ---------------------------------------------------------------------------
# Exchange failures
# ---------------------------------------------------------------------------


class RemoteError(GeocodioError):
    """Raised when the service answers with a non-success status.

    The service reports most problems (bad API key, unparseable query,
    malformed coordinates) this way, with a JSON ``{"error": "..."}`` body.

    Args:
        status_code: HTTP status returned by the service.
        body: Decoded JSON body, or ``None`` if the body was not JSON.
        response: The raw ``requests.Response`` for further inspection.

    Example::

        raise RemoteError(403, {"error": "Invalid API key"}, response)
    """

    def __init__(self, status_code: int, body: Any = None, response: Any = None) -> None:
        detail = None
        if isinstance(body, dict):
            detail = body.get("error")
        message = f"Geocodio returned HTTP {status_code}"
        if detail:
            message += f": {detail}"
        super().__init__(message)
        self.status_code: int = status_code
        self.body: Any = body
        self.response: Any = response
        self.error: str | None = detail


class TransportError(GeocodioError):
    """Raised when the HTTP exchange could not be completed at all.

    The underlying ``requests`` exception is chained as ``__cause__``.
    """


class ProtocolError(GeocodioError):
    """Raised when a successful response does not have the expected shape.

    Examples: a body that is not JSON, a missing ``results`` list, or a batch
    response whose length differs from the number of inputs sent.
    """


# ---------------------------------------------------------------------------
# Output
# ---------------------------------------------------------------------------


class OutputWriteError(GeocodioError):
    """Raised when the batch tool cannot write its output file.

    Args:
        output_path: String form of the path that failed.
        reason: Underlying OS error message.
    """

    def __init__(self, output_path: str, reason: str) -> None:
        super().__init__(f"Failed to write output to '{output_path}': {reason}")
        self.output_path: str = output_path
        self.reason: str = reason
