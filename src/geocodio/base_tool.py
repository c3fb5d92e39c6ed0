"""
Geocodio Client — File Tool Base
=================================
Base class for the file-to-file tools shipped with the client (currently the
CSV batch geocoder).

Design Pattern:
    Template Method — :meth:`GeoTool.run` fixes the order
    validate → process → report; subclasses supply the first two steps.
"""

from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from pathlib import Path

logger = logging.getLogger("geocodio")

_LOG_FORMAT = "[%(asctime)s] %(levelname)-8s %(name)s — %(message)s"


def configure_logging(verbose: bool = False) -> None:
    """Attach a console handler to the ``geocodio`` logger once.

    Library code never calls this; the CLI and the file tools do.

    Args:
        verbose: Log at DEBUG (every HTTP exchange) instead of INFO.
    """
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(fmt=_LOG_FORMAT, datefmt="%H:%M:%S"))
        logger.addHandler(handler)

    logger.setLevel(logging.DEBUG if verbose else logging.INFO)


class GeoTool(ABC):
    """Abstract base for tools that read one input file and write one output.

    Attributes:
        input_path: Path of the file to read.
        output_path: Path of the file to write.
        verbose: ``True`` for DEBUG-level logging.
    """

    def __init__(
        self,
        input_path: Path,
        output_path: Path,
        *,
        verbose: bool = False,
    ) -> None:
        self.input_path: Path = Path(input_path)
        self.output_path: Path = Path(output_path)
        self.verbose: bool = verbose

        configure_logging(verbose)

    @abstractmethod
    def validate_inputs(self) -> None:
        """Check preconditions; raise :class:`~geocodio.exceptions.InvalidArgumentError`
        (or a subclass) when one fails."""

    @abstractmethod
    def process(self) -> None:
        """Do the work.  Exceptions propagate through :meth:`run`."""

    def run(self) -> None:
        """Validate, process, then log the elapsed time and output path."""
        logger.info("Starting %s", self.__class__.__name__)
        start = time.perf_counter()

        self.validate_inputs()
        self.process()

        elapsed = time.perf_counter() - start
        logger.info(
            "%s completed in %.2fs → %s",
            self.__class__.__name__,
            elapsed,
            self.output_path,
        )

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"input_path={self.input_path!r}, "
            f"output_path={self.output_path!r})"
        )
