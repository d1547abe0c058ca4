"""
Global pytest configuration and fixtures.

Provides an in-memory performance data source so tests never need a
database, plus plans shared across the reward engine tests.
"""

import pytest
from datetime import datetime, timezone
from typing import Dict, List, Optional

from ssv_rewards.rewards.interfaces.performance_source import PerformanceBounds, PerformanceDataSource
from ssv_rewards.rewards.models.participation import OwnerParticipation, ValidatorParticipation
from ssv_rewards.rewards.models.period import Period
from ssv_rewards.rewards.models.plan import Criteria, Plan, Round, Tier


class InMemoryPerformanceSource(PerformanceDataSource):
    """Performance data source backed by per-period lists of (owner, public_key, active_days)."""

    def __init__(
        self,
        validators: Dict[str, List[tuple]],
        bounds: Optional[PerformanceBounds] = None,
        owners: Optional[Dict[str, List[tuple]]] = None
    ):
        self.validators = validators
        self.bounds = bounds
        # Owner rows default to the sums over each owner's validators.
        self.owners = owners
        self.calls = []

    def validator_participations(self, period, provider, min_attestations):
        self.calls.append(('validators', str(period), provider, min_attestations))
        return [
            ValidatorParticipation(owner_address=owner, public_key=key, active_days=days)
            for owner, key, days in self.validators.get(str(period), [])
        ]

    def owner_participations(self, period, provider, min_attestations):
        self.calls.append(('owners', str(period), provider, min_attestations))
        if self.owners is not None:
            return [
                OwnerParticipation(owner_address=owner, validators=count, active_days=days)
                for owner, count, days in self.owners.get(str(period), [])
            ]

        totals: Dict[str, List[int]] = {}
        for owner, _, days in self.validators.get(str(period), []):
            count, active = totals.get(owner, [0, 0])
            totals[owner] = [count + 1, active + days]
        return [
            OwnerParticipation(owner_address=owner, validators=count, active_days=days)
            for owner, (count, days) in totals.items()
        ]

    def performance_bounds(self):
        return self.bounds


@pytest.fixture
def make_source():
    """Factory for in-memory performance data sources."""
    return InMemoryPerformanceSource


@pytest.fixture
def make_bounds():
    """Build UTC performance bounds from ISO dates."""
    def _make_bounds(earliest: str, latest: str) -> PerformanceBounds:
        return PerformanceBounds(
            earliest=datetime.fromisoformat(earliest).replace(tzinfo=timezone.utc),
            latest=datetime.fromisoformat(latest).replace(tzinfo=timezone.utc),
        )
    return _make_bounds


@pytest.fixture
def tiers():
    return [Tier(max_participants=100, apr_boost=1.0), Tier(max_participants=1000, apr_boost=0.9)]


@pytest.fixture
def june_plan(tiers):
    """Plan with a single June 2023 round (30 days)."""
    return Plan(
        criteria=Criteria(min_attestations_per_day=202, min_decideds_per_day=22),
        tiers=tiers,
        rounds=[Round(period=Period(2023, 6), eth_apr=0.05, ssv_eth=0.004)],
    )


@pytest.fixture
def multi_round_plan(tiers):
    """Plan with two complete rounds and one round whose rates are not known yet."""
    return Plan(
        criteria=Criteria(min_attestations_per_day=202),
        tiers=tiers,
        rounds=[
            Round(period=Period(2023, 6), eth_apr=0.05, ssv_eth=0.004),
            Round(period=Period(2023, 7), eth_apr=0.04, ssv_eth=0.005),
            Round(period=Period(2023, 8), eth_apr=0.0, ssv_eth=0.0),
        ],
    )


# Reduce logging verbosity during tests
@pytest.fixture(autouse=True)
def fast_logging():
    """
    Reduce logging verbosity during tests for better performance.
    """
    import logging
    import bittensor as bt

    logging.getLogger().setLevel(logging.WARNING)
    bt.logging.set_debug(False)

    yield

    logging.getLogger().setLevel(logging.INFO)
