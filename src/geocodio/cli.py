"""
Geocodio Client — CLI Entry Point
==================================
Installed as the ``geocodio`` command via ``pyproject.toml``.

Usage:
    geocodio geocode "54 West Colorado Boulevard Pasadena CA 91105"
    geocodio reverse "37.331669,-122.03074" "37.7815,-122.404933"
    geocodio parse "1109 N Highland St, Arlington VA"
    geocodio batch --input data/addresses.csv --output output/addresses.geojson \\
                   --address-col full_address --extra-cols name,city
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any

import click

from geocodio.base_tool import configure_logging
from geocodio.batch import DEFAULT_CHUNK_SIZE, BatchGeocoder
from geocodio.client import API_KEY_ENV_VAR, DEFAULT_BASE_URL, GeocodioClient
from geocodio.exceptions import GeocodioError
from geocodio.models import AddressSet


def _echo_json(data: Any) -> None:
    click.echo(json.dumps(data, indent=2))


def _as_dicts(result: AddressSet | list[AddressSet]) -> Any:
    if isinstance(result, AddressSet):
        return result.to_dict()
    return [address_set.to_dict() for address_set in result]


def _fail(exc: GeocodioError) -> None:
    click.echo(f"Error: {exc.message}", err=True)
    sys.exit(1)


@click.group(name="geocodio", help="Geocode, reverse geocode and parse addresses with Geocodio.")
@click.option(
    "--api-key",
    envvar=API_KEY_ENV_VAR,
    default=None,
    help=f"Geocodio API key. Can also be set via the {API_KEY_ENV_VAR} environment variable.",
)
@click.option(
    "--base-url",
    default=DEFAULT_BASE_URL,
    show_default=True,
    help="API root, including the version path.",
)
@click.option("--timeout", type=float, default=10, show_default=True, help="HTTP timeout in seconds.")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable debug logging.")
@click.pass_context
def main(
    ctx: click.Context,
    api_key: str | None,
    base_url: str,
    timeout: float,
    verbose: bool,
) -> None:
    """CLI entry point — builds one client shared by the subcommands."""
    configure_logging(verbose)
    ctx.obj = {
        "client": GeocodioClient(api_key, base_url=base_url, timeout=timeout),
        "verbose": verbose,
    }


@main.command(help="Geocode one or more addresses; several are sent as one batch.")
@click.argument("addresses", nargs=-1, required=True)
@click.pass_obj
def geocode(obj: dict[str, Any], addresses: tuple[str, ...]) -> None:
    try:
        _echo_json(_as_dicts(obj["client"].geocode(*addresses)))
    except GeocodioError as exc:
        _fail(exc)


@main.command(help='Reverse geocode one or more "latitude,longitude" pairs.')
@click.argument("coordinates", nargs=-1, required=True)
@click.pass_obj
def reverse(obj: dict[str, Any], coordinates: tuple[str, ...]) -> None:
    try:
        _echo_json(_as_dicts(obj["client"].reverse_geocode(*coordinates)))
    except GeocodioError as exc:
        _fail(exc)


@main.command(help="Split an address into its components without geocoding it.")
@click.argument("address")
@click.pass_obj
def parse(obj: dict[str, Any], address: str) -> None:
    try:
        _echo_json(obj["client"].parse(address).to_dict())
    except GeocodioError as exc:
        _fail(exc)


@main.command(help="Geocode a CSV of addresses into a GeoJSON FeatureCollection.")
@click.option(
    "--input", "-i", "input_path",
    required=True,
    type=click.Path(exists=True, file_okay=True, dir_okay=False, path_type=Path),
    help="Path to the input CSV file.",
)
@click.option(
    "--output", "-o", "output_path",
    required=True,
    type=click.Path(file_okay=True, dir_okay=False, path_type=Path),
    help="Path for the output GeoJSON file.",
)
@click.option(
    "--address-col",
    default="address",
    show_default=True,
    help="CSV column containing address strings.",
)
@click.option(
    "--extra-cols",
    default="",
    help="Comma-separated list of extra CSV columns to include in GeoJSON properties.",
)
@click.option(
    "--chunk-size",
    type=click.IntRange(min=1),
    default=DEFAULT_CHUNK_SIZE,
    show_default=True,
    help="Maximum addresses per batch request.",
)
@click.pass_obj
def batch(
    obj: dict[str, Any],
    input_path: Path,
    output_path: Path,
    address_col: str,
    extra_cols: str,
    chunk_size: int,
) -> None:
    extra = [c.strip() for c in extra_cols.split(",") if c.strip()]

    tool = BatchGeocoder(
        input_path=input_path,
        output_path=output_path,
        address_col=address_col,
        client=obj["client"],
        extra_cols=extra,
        chunk_size=chunk_size,
        verbose=obj["verbose"],
    )

    try:
        tool.run()
    except GeocodioError as exc:
        _fail(exc)

    matched = sum(1 for r in tool.results if r.best is not None)
    click.echo(f"\nGeoJSON written to: {output_path}")
    click.echo(f"Geocoded: {matched}/{len(tool.results)} addresses successfully.")


if __name__ == "__main__":
    main()
