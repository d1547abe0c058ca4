"""Abstract interface for validator performance data."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional


@dataclass(frozen=True)
class PerformanceBounds:
    """Earliest and latest timestamps for which performance data exists."""
    earliest: datetime
    latest: datetime


class PerformanceDataSource(ABC):
    """
    Supplies per-period active-day counts.

    A day counts as active when the validator met the minimum number of
    attestations according to the selected performance provider.
    """

    @abstractmethod
    def validator_participations(
        self,
        period: "Period",
        provider: str,
        min_attestations: int
    ) -> List["ValidatorParticipation"]:
        """Return active days per validator for the period."""
        pass

    @abstractmethod
    def owner_participations(
        self,
        period: "Period",
        provider: str,
        min_attestations: int
    ) -> List["OwnerParticipation"]:
        """Return active days per owner (summed over its validators) for the period."""
        pass

    @abstractmethod
    def performance_bounds(self) -> Optional[PerformanceBounds]:
        """Return the performance data bounds, or None if no data was collected yet."""
        pass
