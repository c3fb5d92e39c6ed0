"""
Geocodio Client — File Validators
==================================
Precondition checks for the batch tool.  Each raises an exception from
:mod:`geocodio.exceptions` instead of returning a boolean, so
``validate_inputs`` reads as a list of assertions::

    def validate_inputs(self) -> None:
        Validators.assert_csv_file(self.input_path)
        Validators.assert_output_dir_writable(self.output_path)
"""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

from geocodio.exceptions import (
    ColumnNotFoundError,
    InvalidArgumentError,
    OutputWriteError,
)


class Validators:
    """Namespace of static checks; never instantiated."""

    @staticmethod
    def assert_csv_file(path: Path) -> None:
        """Assert that *path* is an existing ``.csv`` file.

        Raises:
            InvalidArgumentError: If it is missing, a directory, or has
                another extension.
        """
        path = Path(path)
        if not path.exists():
            raise InvalidArgumentError(f"Input file not found: '{path}'.")
        if path.is_dir():
            raise InvalidArgumentError(f"Expected a file but got a directory: '{path}'.")
        if path.suffix.lower() != ".csv":
            raise InvalidArgumentError(
                f"Expected a .csv file, got '{path.name}'."
            )

    @staticmethod
    def assert_output_dir_writable(output_path: Path) -> None:
        """Create the parent directory of *output_path* if needed.

        Raises:
            OutputWriteError: If the directory cannot be created.
        """
        parent = Path(output_path).parent
        try:
            parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise OutputWriteError(str(output_path), str(exc)) from exc

    @staticmethod
    def assert_columns_exist(df: object, required_columns: Sequence[str]) -> None:
        """Assert that every name in *required_columns* is a column of *df*.

        Raises:
            ColumnNotFoundError: On the first missing column.
        """
        available = list(df.columns)  # type: ignore[attr-defined]
        for col in required_columns:
            if col not in available:
                raise ColumnNotFoundError(col, available)
