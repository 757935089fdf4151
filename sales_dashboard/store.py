"""
Holder for the operations of the most recently loaded report.

Exactly one generation of operations is live at a time. A new load replaces
the whole list in one assignment; a failed load leaves the previous
generation in place.
"""

import logging
from pathlib import Path

from .config import DEFAULT_LAYOUT, REPORT_ENCODING, ReportLayout
from .loaders import load_operations
from .models import Operation

logger = logging.getLogger(__name__)


class OperationStore:
    """Single slot for the current operation set."""

    def __init__(self) -> None:
        self._operations: tuple[Operation, ...] = ()
        self._generation = 0
        self._source: str | None = None

    @property
    def operations(self) -> tuple[Operation, ...]:
        return self._operations

    @property
    def generation(self) -> int:
        """Incremented on every successful replacement; 0 before any load."""
        return self._generation

    @property
    def source(self) -> str | None:
        return self._source

    @property
    def is_loaded(self) -> bool:
        return self._generation > 0

    def replace(self, operations: list[Operation], source: str | None = None) -> int:
        """Swap in a new operation set and return its generation."""
        self._operations = tuple(operations)
        self._source = source
        self._generation += 1
        logger.info(
            "Loaded generation %d: %d operations from %s",
            self._generation, len(self._operations), source or "memory",
        )
        return self._generation

    def load_file(
        self,
        path: str | Path,
        layout: ReportLayout = DEFAULT_LAYOUT,
        encoding: str = REPORT_ENCODING,
    ) -> int:
        """Load a report file, replacing the current operations on success.

        Raises ReportReadError or NoOperationsFoundError without modifying
        the store.
        """
        operations = load_operations(path, layout=layout, encoding=encoding)
        return self.replace(operations, source=str(path))
