"""Calendar month used to key reward rounds."""

import calendar
import re
from dataclasses import dataclass
from datetime import date, datetime
from typing import Union

from ...utils.error_handling import log_and_raise_config_error

_PERIOD_PATTERN = re.compile(r'^(\d{4})-(\d{2})$')


@dataclass(frozen=True, order=True)
class Period:
    """
    A calendar month.

    Periods order chronologically and compare equal iff they denote the
    same month. The canonical string form is ``YYYY-MM``.
    """
    year: int
    month: int

    def __post_init__(self):
        if not 1 <= self.month <= 12:
            log_and_raise_config_error(
                f"Invalid period month {self.month}", config_key="period", config_value=self.month
            )
        if not 1 <= self.year <= 9999:
            log_and_raise_config_error(
                f"Invalid period year {self.year}", config_key="period", config_value=self.year
            )

    @classmethod
    def parse(cls, value: str) -> 'Period':
        """
        Parse a ``YYYY-MM`` string.

        Raises:
            ConfigurationError: If the value is not a valid month
        """
        match = _PERIOD_PATTERN.match(value) if isinstance(value, str) else None
        if match is None:
            log_and_raise_config_error(
                f"Invalid period {value!r}, expected YYYY-MM", config_key="period", config_value=value
            )
        return cls(int(match.group(1)), int(match.group(2)))

    @classmethod
    def at(cls, moment: Union[date, datetime]) -> 'Period':
        """Return the period containing the given date or timestamp."""
        return cls(moment.year, moment.month)

    def first_day(self) -> date:
        return date(self.year, self.month, 1)

    def last_day(self) -> date:
        return date(self.year, self.month, self.days())

    def days(self) -> int:
        """Number of days in the month."""
        return calendar.monthrange(self.year, self.month)[1]

    def __str__(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"
