"""
Geocodio Client — CSV Batch Geocoder
=====================================
Geocodes the address column of a CSV file through the Geocodio batch
endpoint and writes a GeoJSON FeatureCollection with one feature per row.

Rows are sent in chunks of ``chunk_size``; each chunk is one request, and
chunks are sent one after another.  Rows with no match are kept with
``null`` geometry and ``geocode_success: false`` so no data is silently lost.

Usage::

    from pathlib import Path
    from geocodio import GeocodioClient
    from geocodio.batch import BatchGeocoder

    BatchGeocoder(
        input_path=Path("data/stores.csv"),
        output_path=Path("output/stores.geojson"),
        address_col="address",
        client=GeocodioClient("YOUR_API_KEY"),
        extra_cols=["name"],
    ).run()
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import pandas as pd

from geocodio.base_tool import GeoTool
from geocodio.client import GeocodioClient
from geocodio.exceptions import InvalidArgumentError, OutputWriteError
from geocodio.models import AddressSet
from geocodio.validators import Validators

logger = logging.getLogger("geocodio.batch")

DEFAULT_CHUNK_SIZE = 1000


def address_set_feature(
    address_set: AddressSet, extra_props: dict[str, Any] | None = None
) -> dict[str, Any]:
    """GeoJSON Feature for the best candidate of *address_set*.

    The feature always carries ``query``, ``geocode_success`` and
    ``geocode_error`` (the service's rejection message, if any); geometry is
    ``None`` when the set is empty or its best candidate has no location.
    """
    best = address_set.best
    if best is not None:
        feature = best.to_geojson_feature(extra_props)
    else:
        feature = {"type": "Feature", "geometry": None, "properties": dict(extra_props or {})}

    feature["properties"]["query"] = address_set.query
    feature["properties"]["geocode_success"] = feature["geometry"] is not None
    feature["properties"]["geocode_error"] = address_set.error
    return feature


class BatchGeocoder(GeoTool):
    """Geocode every address in a CSV file and write a GeoJSON output.

    Args:
        input_path: Path to the input CSV file.
        output_path: Path for the output GeoJSON file.
        address_col: CSV column holding the address strings.
        client: The :class:`GeocodioClient` to send requests through.
                Defaults to one configured from ``GEOCODIO_API_KEY``.
        extra_cols: Further CSV columns to copy into feature properties.
        chunk_size: Maximum addresses per batch request.
        verbose: Enable DEBUG-level logging.
    """

    def __init__(
        self,
        input_path: Path,
        output_path: Path,
        address_col: str = "address",
        client: GeocodioClient | None = None,
        extra_cols: list[str] | None = None,
        *,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        verbose: bool = False,
    ) -> None:
        super().__init__(input_path, output_path, verbose=verbose)
        self.address_col = address_col
        self.client: GeocodioClient = client or GeocodioClient()
        self.extra_cols: list[str] = extra_cols or []
        self.chunk_size = chunk_size

        self._results: list[AddressSet] = []

    def validate_inputs(self) -> None:
        """Check the CSV, its columns, the output directory and ``chunk_size``.

        Raises:
            InvalidArgumentError: If the file is missing or not a CSV, or
                ``chunk_size`` is below 1.
            ColumnNotFoundError: If a requested column is absent.
            OutputWriteError: If the output directory cannot be created.
        """
        if self.chunk_size < 1:
            raise InvalidArgumentError(f"chunk_size must be at least 1, got {self.chunk_size}.")

        Validators.assert_csv_file(self.input_path)
        Validators.assert_output_dir_writable(self.output_path)

        df_peek = pd.read_csv(self.input_path, nrows=0)
        Validators.assert_columns_exist(df_peek, [self.address_col] + self.extra_cols)
        logger.debug("Inputs validated successfully.")

    def process(self) -> None:
        """Geocode all rows chunk by chunk, then write the GeoJSON file."""
        df = pd.read_csv(self.input_path)
        addresses = df[self.address_col].fillna("").astype(str).tolist()
        total = len(addresses)
        logger.info("Geocoding %d addresses in chunks of %d...", total, self.chunk_size)

        results: list[AddressSet] = []
        for start in range(0, total, self.chunk_size):
            chunk = addresses[start:start + self.chunk_size]
            logger.debug("Rows %d–%d", start + 1, start + len(chunk))
            geocoded = self.client.geocode(chunk)
            results.extend([geocoded] if isinstance(geocoded, AddressSet) else geocoded)

        self._results = results
        self._write_geojson(df, results)

        matched = sum(1 for r in results if r.best is not None)
        logger.info(
            "Geocoding complete: %d/%d matched, %d without results.",
            matched, total, total - matched,
        )

    def _write_geojson(self, df: pd.DataFrame, results: list[AddressSet]) -> None:
        features = []
        for address_set, (_, row) in zip(results, df.iterrows()):
            extra = {col: None if pd.isna(row[col]) else row[col] for col in self.extra_cols}
            features.append(address_set_feature(address_set, extra))

        geojson: dict[str, Any] = {"type": "FeatureCollection", "features": features}

        try:
            with open(self.output_path, "w", encoding="utf-8") as fh:
                json.dump(geojson, fh, indent=2, default=str)
        except OSError as exc:
            raise OutputWriteError(str(self.output_path), str(exc)) from exc

    @property
    def results(self) -> list[AddressSet]:
        """AddressSets from the last run, in row order, or ``[]``."""
        return self._results
