"""Per-round activity records returned by the performance data source."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping

from .period import Period
from .plan import RewardRates


@dataclass
class ValidatorParticipation:
    """Active days of one validator in a period. ``reward`` is filled in by the engine."""
    owner_address: str
    public_key: str
    active_days: int
    reward: float = 0.0

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> 'ValidatorParticipation':
        return cls(
            owner_address=row['owner_address'],
            public_key=row['public_key'],
            active_days=int(row['active_days']),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'owner_address': self.owner_address,
            'public_key': self.public_key,
            'active_days': self.active_days,
            'reward': self.reward,
        }


@dataclass
class OwnerParticipation:
    """Active days summed over an owner's validators. ``reward`` is filled in by the engine."""
    owner_address: str
    validators: int
    active_days: int
    reward: float = 0.0

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> 'OwnerParticipation':
        return cls(
            owner_address=row['owner_address'],
            validators=int(row['validators']),
            active_days=int(row['active_days']),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'owner_address': self.owner_address,
            'validators': self.validators,
            'active_days': self.active_days,
            'reward': self.reward,
        }


@dataclass
class RoundResult:
    """Rewarded participations of a single round."""
    period: Period
    rates: RewardRates
    validators: List[ValidatorParticipation] = field(default_factory=list)
    owners: List[OwnerParticipation] = field(default_factory=list)

    @property
    def participants(self) -> int:
        """Cohort size used to resolve the tier."""
        return len(self.validators)
