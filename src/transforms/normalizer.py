# src/transforms/normalizer.py

"""Unit normalization: bring every measurement to whole degrees Celsius."""

import logging

from src.models.errors import MalformedMeasurement
from src.models.snapshot import NOT_AVAILABLE, Table, format_celsius
from src.transforms.measurement import parse_leading_number

logger = logging.getLogger("temp_snapshots.transforms")

FAHRENHEIT_MARKER = "F"


def fahrenheit_to_celsius(fahrenheit: float) -> int:
    """Convert and round half-to-even (Python's ``round``)."""
    return round((fahrenheit - 32) / 1.8)


class TemperatureNormalizer:
    """Detect a Fahrenheit table and convert it to Celsius."""

    @staticmethod
    def is_fahrenheit(table: Table) -> bool:
        """True if any data-row measurement carries the ``F`` marker.

        Detection is table-wide: one marked cell converts the whole table.
        """
        return any(
            FAHRENHEIT_MARKER in row[1] for row in table[1:]
        )

    @staticmethod
    def normalize(table: Table) -> Table:
        """Return *table* with every measurement in Celsius.

        Row 0 is the header and is copied unchanged.  ``N/A`` cells pass
        through.  A Celsius table is returned unchanged (as a copy).

        Raises:
            MalformedMeasurement: a non-``N/A`` cell of a Fahrenheit table
                has no leading number.
        """
        if not TemperatureNormalizer.is_fahrenheit(table):
            return [list(row) for row in table]

        logger.info("Converting %d rows to celsius", len(table) - 1)
        converted: Table = [list(table[0])] if table else []
        for row in table[1:]:
            label, cell = row[0], row[1]
            if cell == NOT_AVAILABLE:
                converted.append(list(row))
                continue
            value = parse_leading_number(cell)
            if value is None:
                raise MalformedMeasurement(label, cell)
            converted.append(
                [label, format_celsius(fahrenheit_to_celsius(value)),
                 *row[2:]]
            )
        return converted
