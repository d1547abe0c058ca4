"""Core services for the reward calculation system."""

from .fixed_point import to_fixed_point, finalize_cumulative
from .round_selection import check_data_availability, select_eligible_rounds
from .round_processor import RoundProcessor
from .postgres_source import PostgresPerformanceSource

__all__ = [
    "to_fixed_point",
    "finalize_cumulative",
    "check_data_availability",
    "select_eligible_rounds",
    "RoundProcessor",
    "PostgresPerformanceSource",
]
