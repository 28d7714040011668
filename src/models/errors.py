# src/models/errors.py

"""Exceptions that abort a snapshot run.

None of these are recovered locally: the CLI logs them and exits non-zero.
"""

from typing import Any


class SnapshotJobError(Exception):
    """Base class for every error that aborts a run."""

    def __init__(
        self, message: str, details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class MalformedMeasurement(SnapshotJobError):
    """A measurement cell has no leading number and is not ``N/A``."""

    def __init__(self, label: str, cell: str) -> None:
        super().__init__(
            f"Cannot parse measurement for '{label}': {cell!r}",
            {"label": label, "cell": cell},
        )


class EmptyAggregation(SnapshotJobError):
    """No data row held a numeric measurement to average."""


class StoreOperationFailed(SnapshotJobError):
    """A create/delete/write/format/list call to the spreadsheet failed."""

    def __init__(self, operation: str, reason: str) -> None:
        super().__init__(
            f"Spreadsheet {operation} failed: {reason}",
            {"operation": operation},
        )
        self.operation = operation


class ExtractionFailed(SnapshotJobError):
    """The source page was unreachable or the table was not found."""
