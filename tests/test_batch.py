"""
Tests — CSV Batch Geocoder
===========================
Integration tests for :class:`~geocodio.batch.BatchGeocoder` with the
Geocodio API mocked via ``responses``.
"""

from __future__ import annotations

import json
from pathlib import Path

import pandas as pd
import pytest
import responses as rsps_lib

from payloads import GEOCODE_URL, flat_body, nested_body, result_payload
from geocodio.batch import BatchGeocoder, address_set_feature
from geocodio.client import GeocodioClient
from geocodio.exceptions import ColumnNotFoundError, InvalidArgumentError
from geocodio.models import Address, AddressSet

ADDRESSES = [
    "1 Infinite Loop Cupertino CA 95014",
    "54 West Colorado Boulevard Pasadena CA 91105",
    "826 Howard Street San Francisco CA 94103",
]


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def address_csv(tmp_path: Path) -> Path:
    """Write a small CSV with address and name columns."""
    path = tmp_path / "addresses.csv"
    pd.DataFrame({"address": ADDRESSES, "name": ["Apple", "Office", "Howard"]}).to_csv(
        path, index=False
    )
    return path


def _batch_response(queries: list[str], matched: bool = True) -> dict:
    return nested_body(
        *[(q, [result_payload(q.upper(), 37.0 + i, -122.0 - i)] if matched else []) for i, q in enumerate(queries)]
    )


# ---------------------------------------------------------------------------
# address_set_feature
# ---------------------------------------------------------------------------


class TestAddressSetFeature:
    def test_matched_set_uses_best_candidate(self) -> None:
        address_set = AddressSet(
            "query",
            (Address(formatted_address="best", latitude=1.0, longitude=2.0),
             Address(formatted_address="other", latitude=3.0, longitude=4.0)),
        )
        feature = address_set_feature(address_set, {"name": "x"})
        assert feature["geometry"]["coordinates"] == [2.0, 1.0]
        assert feature["properties"]["formatted_address"] == "best"
        assert feature["properties"]["query"] == "query"
        assert feature["properties"]["name"] == "x"
        assert feature["properties"]["geocode_success"] is True

    def test_empty_set_has_null_geometry(self) -> None:
        feature = address_set_feature(AddressSet("nowhere"))
        assert feature["geometry"] is None
        assert feature["properties"]["geocode_success"] is False
        assert feature["properties"]["query"] == "nowhere"
        assert feature["properties"]["geocode_error"] is None

    def test_rejected_set_carries_error(self) -> None:
        feature = address_set_feature(AddressSet("999,abc", error="Invalid coordinate"))
        assert feature["geometry"] is None
        assert feature["properties"]["geocode_success"] is False
        assert feature["properties"]["geocode_error"] == "Invalid coordinate"


# ---------------------------------------------------------------------------
# BatchGeocoder
# ---------------------------------------------------------------------------


class TestBatchGeocoder:
    @rsps_lib.activate
    def test_output_has_one_feature_per_row(self, tmp_path: Path, address_csv: Path) -> None:
        rsps_lib.add(rsps_lib.POST, GEOCODE_URL, json=_batch_response(ADDRESSES), status=200)
        output = tmp_path / "out" / "addresses.geojson"

        tool = BatchGeocoder(
            address_csv, output, client=GeocodioClient("k"), extra_cols=["name"],
        )
        tool.run()

        data = json.loads(output.read_text())
        assert data["type"] == "FeatureCollection"
        assert [f["properties"]["query"] for f in data["features"]] == ADDRESSES
        assert [f["properties"]["name"] for f in data["features"]] == ["Apple", "Office", "Howard"]
        assert len(tool.results) == 3
        assert len(rsps_lib.calls) == 1

    @rsps_lib.activate
    def test_chunks_are_sent_in_order(self, tmp_path: Path, address_csv: Path) -> None:
        rsps_lib.add(rsps_lib.POST, GEOCODE_URL, json=_batch_response(ADDRESSES[:2]), status=200)
        rsps_lib.add(
            rsps_lib.GET, GEOCODE_URL,
            json=flat_body(result_payload("HOWARD", 37.78, -122.4)), status=200,
        )
        output = tmp_path / "out.geojson"

        tool = BatchGeocoder(address_csv, output, client=GeocodioClient("k"), chunk_size=2)
        tool.run()

        assert [c.request.method for c in rsps_lib.calls] == ["POST", "GET"]
        assert [r.query for r in tool.results] == ADDRESSES

    @rsps_lib.activate
    def test_unmatched_rows_kept(self, tmp_path: Path, address_csv: Path) -> None:
        rsps_lib.add(
            rsps_lib.POST, GEOCODE_URL, json=_batch_response(ADDRESSES, matched=False), status=200,
        )
        output = tmp_path / "out.geojson"
        BatchGeocoder(address_csv, output, client=GeocodioClient("k")).run()

        features = json.loads(output.read_text())["features"]
        assert len(features) == 3
        assert all(f["geometry"] is None for f in features)

    def test_missing_column_raises(self, tmp_path: Path, address_csv: Path) -> None:
        tool = BatchGeocoder(
            address_csv, tmp_path / "out.geojson",
            address_col="nonexistent_col",
            client=GeocodioClient("k"),
        )
        with pytest.raises(ColumnNotFoundError):
            tool.run()

    def test_missing_input_file_raises(self, tmp_path: Path) -> None:
        tool = BatchGeocoder(tmp_path / "no_file.csv", tmp_path / "out.geojson", client=GeocodioClient("k"))
        with pytest.raises(InvalidArgumentError):
            tool.run()

    def test_non_csv_input_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "addresses.txt"
        path.write_text("address\nsomewhere\n")
        tool = BatchGeocoder(path, tmp_path / "out.geojson", client=GeocodioClient("k"))
        with pytest.raises(InvalidArgumentError):
            tool.run()

    def test_bad_chunk_size_raises(self, tmp_path: Path, address_csv: Path) -> None:
        tool = BatchGeocoder(
            address_csv, tmp_path / "out.geojson", client=GeocodioClient("k"), chunk_size=0,
        )
        with pytest.raises(InvalidArgumentError, match="chunk_size"):
            tool.run()

    @rsps_lib.activate
    def test_blank_extra_cell_written_as_null(self, tmp_path: Path) -> None:
        path = tmp_path / "addresses.csv"
        pd.DataFrame({"address": ADDRESSES[:2], "name": ["Apple", None]}).to_csv(path, index=False)
        rsps_lib.add(rsps_lib.POST, GEOCODE_URL, json=_batch_response(ADDRESSES[:2]), status=200)
        output = tmp_path / "out.geojson"

        BatchGeocoder(path, output, client=GeocodioClient("k"), extra_cols=["name"]).run()

        def reject_constant(token: str) -> None:
            raise ValueError(f"non-standard JSON constant {token}")

        data = json.loads(output.read_text(), parse_constant=reject_constant)
        assert [f["properties"]["name"] for f in data["features"]] == ["Apple", None]

    @rsps_lib.activate
    def test_rejected_row_keeps_service_error(self, tmp_path: Path, address_csv: Path) -> None:
        body = _batch_response(ADDRESSES)
        body["results"][1]["response"] = {"error": "Could not geocode address"}
        rsps_lib.add(rsps_lib.POST, GEOCODE_URL, json=body, status=200)
        output = tmp_path / "out.geojson"

        BatchGeocoder(address_csv, output, client=GeocodioClient("k")).run()

        features = json.loads(output.read_text())["features"]
        assert [f["properties"]["geocode_error"] for f in features] == [
            None, "Could not geocode address", None,
        ]
