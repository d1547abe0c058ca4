"""Applies a round's reward rate to validator and owner participations."""

from collections import defaultdict
from typing import Dict, List

import numpy as np
import bittensor as bt

from ..interfaces.performance_source import PerformanceDataSource
from ..models.participation import OwnerParticipation, RoundResult, ValidatorParticipation
from ..models.plan import Plan, Round
from ...utils.error_handling import log_and_raise_consistency_error


class RoundProcessor:
    """Computes rewards for one round without touching any cumulative state."""

    def __init__(
        self,
        data_source: PerformanceDataSource,
        provider: str,
        min_attestations: int
    ):
        self.data_source = data_source
        self.provider = provider
        self.min_attestations = min_attestations

    def process_round(self, rnd: Round, plan: Plan) -> RoundResult:
        """
        Fetch participations for the round and attach rewards.

        The cohort size is the number of validators returned for the period.
        Nothing is merged into running totals here: the caller folds the
        result in only after the whole round succeeded.

        Raises:
            ResolutionError: If the plan has no tier or round for this period
            ConsistencyError: If owner active days disagree with their validators
        """
        period = rnd.period
        validators = self.data_source.validator_participations(period, self.provider, self.min_attestations)
        owners = self.data_source.owner_participations(period, self.provider, self.min_attestations)
        bt.logging.debug(f"Round {period}: {len(validators)} validators, {len(owners)} owners")

        rates = plan.reward_rates(period, len(validators))

        owner_active_days = self._reward_validators(validators, rates.daily)
        self._reward_owners(owners, rates.daily)
        self._check_consistency(period, owners, owner_active_days)

        return RoundResult(period=period, rates=rates, validators=validators, owners=owners)

    def _reward_validators(self, validators: List[ValidatorParticipation], daily_reward: float) -> Dict[str, int]:
        """Set each validator's reward and return active days summed per owner."""
        rewards = daily_reward * np.array([v.active_days for v in validators], dtype=np.float64)

        owner_active_days: Dict[str, int] = defaultdict(int)
        for participation, reward in zip(validators, rewards):
            participation.reward = float(reward)
            owner_active_days[participation.owner_address] += participation.active_days
        return owner_active_days

    def _reward_owners(self, owners: List[OwnerParticipation], daily_reward: float):
        rewards = daily_reward * np.array([o.active_days for o in owners], dtype=np.float64)
        for participation, reward in zip(owners, rewards):
            participation.reward = float(reward)

    def _check_consistency(
        self,
        period,
        owners: List[OwnerParticipation],
        owner_active_days: Dict[str, int]
    ):
        reported = set()
        for participation in owners:
            reported.add(participation.owner_address)
            expected = owner_active_days.get(participation.owner_address, 0)
            if participation.active_days != expected:
                log_and_raise_consistency_error(
                    f"inconsistent active days for owner {participation.owner_address!r}",
                    {
                        'period': str(period),
                        'owner': participation.owner_address,
                        'reported': participation.active_days,
                        'validators_sum': expected,
                    }
                )

        for owner_address, active_days in owner_active_days.items():
            if active_days > 0 and owner_address not in reported:
                log_and_raise_consistency_error(
                    f"missing owner participation for {owner_address!r}",
                    {'period': str(period), 'owner': owner_address, 'validators_sum': active_days}
                )
