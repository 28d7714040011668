# src/transforms/aggregator.py

"""Summary row computation for a normalized table."""

import logging

from src.models.errors import EmptyAggregation
from src.models.snapshot import SUMMARY_LABEL, Table, format_celsius
from src.transforms.measurement import parse_leading_number

logger = logging.getLogger("temp_snapshots.transforms")


class AverageAggregator:
    """Prepend an ``Average`` row to a normalized table."""

    @staticmethod
    def collect_values(table: Table) -> list[float]:
        """Parse every data-row measurement, skipping unparseable cells.

        ``N/A`` and malformed cells are dropped silently here; they never
        count toward the sum or the divisor.
        """
        values: list[float] = []
        for row in table[1:]:
            value = parse_leading_number(row[1])
            if value is None:
                logger.debug(
                    "Skipped non-numeric measurement for %s: %r",
                    row[0],
                    row[1],
                )
                continue
            values.append(value)
        return values

    @staticmethod
    def average(table: Table) -> int:
        """Rounded (half-to-even) mean of the parseable measurements.

        The divisor is the number of parsed values, not a row count, so
        ``N/A`` rows neither add to the sum nor dilute the mean.

        Raises:
            EmptyAggregation: no data row held a number.
        """
        values = AverageAggregator.collect_values(table)
        if not values:
            raise EmptyAggregation(
                "No numeric measurements to average",
                {"rows": max(len(table) - 1, 0)},
            )
        return round(sum(values) / len(values))

    @staticmethod
    def prepend_average(table: Table) -> Table:
        """Return a new table with the summary row inserted at index 0."""
        avg = AverageAggregator.average(table)
        logger.info("The average is: %d", avg)
        width = len(table[0]) if table else 2
        summary = [SUMMARY_LABEL, format_celsius(avg)]
        summary.extend([""] * (width - len(summary)))
        return [summary, *[list(row) for row in table]]
