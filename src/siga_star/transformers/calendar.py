"""
Calendar (date) dimension generation.

One row per day across an inclusive range, with names rendered in the
configured calendar locale rather than the host locale.
"""

import time
from datetime import date, timedelta
from typing import Any, List

from .base_transformer import BaseTransformer, TransformationResult
from .parsers import date_key
from .star_schema import DIM_CALENDAR


def quarter_label(month: int) -> str:
    return f"T{1 + (month - 1) // 3}"


class CalendarGenerator(BaseTransformer):
    """Generate dim_tempo from the observed commissioning date range."""

    def build(self, start: date, end: date) -> List[List[Any]]:
        """Calendar rows for every day in [start, end]; empty if start > end."""
        locale = self.config.calendar_locale
        rows = []
        day = start
        while day <= end:
            rows.append([
                date_key(day),
                day.isoformat(),
                day.year,
                day.month,
                locale.month_name(day.month),
                day.day,
                locale.weekday_name(day.weekday()),
                quarter_label(day.month),
            ])
            if day == date.max:
                break
            day += timedelta(days=1)
        return rows

    def run(self, start: date, end: date) -> TransformationResult:
        """Build and write the calendar dimension."""
        began = time.time()
        self.logger.info(f"Generating dim_tempo from {start.isoformat()} to {end.isoformat()}")
        rows = self.build(start, end)
        path = self.save_table(DIM_CALENDAR, rows)
        result = TransformationResult(success=True, duration_sec=time.time() - began)
        result.record_table(DIM_CALENDAR.name, len(rows), path)
        return result
