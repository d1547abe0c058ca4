"""Reward plan: tiers, rounds and activity criteria."""

import math
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, Optional, Sequence, Tuple, Union

import bittensor as bt
import yaml

from .period import Period
from ...utils.error_handling import (
    ErrorMessages,
    log_and_raise_config_error,
    log_and_raise_resolution_error,
)

# ETH balance of an Ethereum validator. Protocol constant, not configurable.
FIXED_VALIDATOR_BALANCE = 32


@dataclass(frozen=True)
class Criteria:
    """Minimum daily activity for a validator day to count as active."""
    min_attestations_per_day: int = 0
    min_decideds_per_day: int = 0


@dataclass(frozen=True)
class Tier:
    """Applies ``apr_boost`` when the cohort has at most ``max_participants``."""
    max_participants: int
    apr_boost: float


@dataclass(frozen=True)
class Round:
    """Base APR and SSV/ETH price for one period."""
    period: Period
    eth_apr: float
    ssv_eth: float

    @property
    def is_complete(self) -> bool:
        """False while either rate input is still unknown (zero)."""
        return self.eth_apr != 0 and self.ssv_eth != 0


@dataclass(frozen=True)
class RewardRates:
    """Per-validator reward for one period, at daily, monthly and annual scale."""
    tier: Tier
    daily: float
    monthly: float
    annual: float


def is_sorted(values: Sequence[Any]) -> bool:
    """Return True if values are in non-decreasing order."""
    return all(values[i - 1] <= values[i] for i in range(1, len(values)))


@dataclass(frozen=True)
class Plan:
    """
    Immutable, validated reward plan.

    Tiers are ordered strictly ascending by ``max_participants`` and rounds
    strictly ascending by period. Construction fails with a single
    ConfigurationError on the first violated rule, so a Plan instance is
    always usable.
    """
    criteria: Criteria
    tiers: Tuple[Tier, ...]
    rounds: Tuple[Round, ...]

    def __post_init__(self):
        object.__setattr__(self, 'tiers', tuple(self.tiers))
        object.__setattr__(self, 'rounds', tuple(self.rounds))
        validate_plan(self)

    def tier(self, participants: int) -> Tier:
        """
        Return the smallest tier that accommodates the cohort.

        Raises:
            ResolutionError: If participants is not positive, the tiers are
                unsorted or the cohort exceeds the highest tier
        """
        if participants <= 0:
            log_and_raise_resolution_error(
                ErrorMessages.NON_POSITIVE_PARTICIPANTS, {'participants': participants}
            )
        if not is_sorted([t.max_participants for t in self.tiers]):
            log_and_raise_resolution_error(ErrorMessages.TIERS_NOT_SORTED)

        for tier in self.tiers:
            if participants <= tier.max_participants:
                return tier

        log_and_raise_resolution_error(
            ErrorMessages.EXCEEDS_HIGHEST_TIER,
            {'participants': participants, 'highest_tier': self.tiers[-1].max_participants}
        )

    def round_for(self, period: Period) -> Optional[Round]:
        for rnd in self.rounds:
            if rnd.period == period:
                return rnd
        return None

    def reward_rates(self, period: Period, participants: int) -> RewardRates:
        """
        Calculate the per-validator reward for a period and cohort size.

        annual = (FIXED_VALIDATOR_BALANCE * eth_apr) / ssv_eth * apr_boost,
        monthly = annual / 12, daily = monthly / days in period.

        Raises:
            ResolutionError: If no tier fits the cohort or the period has no round
        """
        tier = self.tier(participants)

        rnd = self.round_for(period)
        if rnd is None:
            log_and_raise_resolution_error(ErrorMessages.PERIOD_NOT_FOUND, {'period': str(period)})
        if not rnd.is_complete:
            log_and_raise_resolution_error(ErrorMessages.INCOMPLETE_ROUND, {'period': str(period)})

        annual = (FIXED_VALIDATOR_BALANCE * rnd.eth_apr) / rnd.ssv_eth * tier.apr_boost
        monthly = annual / 12
        daily = monthly / period.days()
        return RewardRates(tier=tier, daily=daily, monthly=monthly, annual=annual)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Plan':
        """
        Create Plan from a parsed configuration document.

        Raises:
            ConfigurationError: If fields are missing, mistyped or invalid
        """
        if not isinstance(data, dict):
            log_and_raise_config_error("Plan must be a mapping", config_value=type(data).__name__)

        criteria_data = data.get('criteria') or {}
        if not isinstance(criteria_data, dict):
            log_and_raise_config_error("Criteria must be a mapping", config_key="criteria")
        criteria = Criteria(
            min_attestations_per_day=_int_field(criteria_data, 'min_attestations_per_day', 'criteria', default=0),
            min_decideds_per_day=_int_field(criteria_data, 'min_decideds_per_day', 'criteria', default=0),
        )

        tiers = [
            Tier(
                max_participants=_int_field(item, 'max_participants', f"tiers[{i}]"),
                apr_boost=_float_field(item, 'apr_boost', f"tiers[{i}]"),
            )
            for i, item in enumerate(_list_field(data, 'tiers'))
        ]

        rounds = [
            Round(
                period=Period.parse(_require(item, 'period', f"rounds[{i}]")),
                eth_apr=_float_field(item, 'eth_apr', f"rounds[{i}]"),
                ssv_eth=_float_field(item, 'ssv_eth', f"rounds[{i}]"),
            )
            for i, item in enumerate(_list_field(data, 'rounds'))
        ]

        return cls(criteria=criteria, tiers=tiers, rounds=rounds)


def validate_plan(plan: Plan) -> None:
    """
    Check every plan rule, failing on the first violation.

    Raises:
        ConfigurationError: Describing the first violated rule
    """
    # Tiers.
    if not plan.tiers:
        log_and_raise_config_error(ErrorMessages.MISSING_TIERS, config_key="tiers")
    if not is_sorted([t.max_participants for t in plan.tiers]):
        log_and_raise_config_error(ErrorMessages.UNSORTED_TIERS, config_key="tiers")
    if plan.tiers[0].max_participants <= 0:
        log_and_raise_config_error(
            ErrorMessages.NON_POSITIVE_TIER, config_key="tiers[0]",
            config_value=plan.tiers[0].max_participants
        )
    for i in range(1, len(plan.tiers)):
        if plan.tiers[i - 1].max_participants == plan.tiers[i].max_participants:
            log_and_raise_config_error(
                f"{ErrorMessages.DUPLICATE_TIER}: {plan.tiers[i].max_participants}",
                config_key=f"tiers[{i}]"
            )

    # Rounds.
    if not plan.rounds:
        log_and_raise_config_error(ErrorMessages.MISSING_ROUNDS, config_key="rounds")
    if not is_sorted([r.period for r in plan.rounds]):
        log_and_raise_config_error(ErrorMessages.UNSORTED_ROUNDS, config_key="rounds")
    for i in range(1, len(plan.rounds)):
        if plan.rounds[i - 1].period == plan.rounds[i].period:
            log_and_raise_config_error(
                f"{ErrorMessages.DUPLICATE_ROUND}: {plan.rounds[i].period}",
                config_key=f"rounds[{i}]"
            )

    # Values.
    for i, tier in enumerate(plan.tiers):
        if not (math.isfinite(tier.apr_boost) and tier.apr_boost > 0):
            log_and_raise_config_error(
                "apr boost must be positive", config_key=f"tiers[{i}].apr_boost", config_value=tier.apr_boost
            )
    for i, rnd in enumerate(plan.rounds):
        if rnd.period.days() <= 0:
            log_and_raise_config_error(
                "period has no days", config_key=f"rounds[{i}].period", config_value=str(rnd.period)
            )
        for name in ('eth_apr', 'ssv_eth'):
            value = getattr(rnd, name)
            if not (math.isfinite(value) and value >= 0):
                log_and_raise_config_error(
                    f"{name} must be non-negative", config_key=f"rounds[{i}].{name}", config_value=value
                )
    for name in ('min_attestations_per_day', 'min_decideds_per_day'):
        if getattr(plan.criteria, name) < 0:
            log_and_raise_config_error(
                f"{name} must be non-negative", config_key=f"criteria.{name}",
                config_value=getattr(plan.criteria, name)
            )


def parse_plan(document: Union[str, bytes]) -> Plan:
    """
    Parse a YAML document into a validated Plan.

    Raises:
        ConfigurationError: If the document is not valid YAML or not a valid plan
    """
    try:
        data = yaml.safe_load(document)
    except yaml.YAMLError as e:
        log_and_raise_config_error(f"Failed to parse rewards plan: {e}")
    return Plan.from_dict(data)


def load_plan(path: Union[str, Path]) -> Plan:
    """Read and parse the rewards plan at path."""
    path = Path(path)
    try:
        document = path.read_text()
    except OSError as e:
        log_and_raise_config_error(f"Failed to read {path}: {e}", config_key="plan", config_value=str(path))

    plan = parse_plan(document)
    bt.logging.info(
        f"Loaded rewards plan from {path}: {len(plan.tiers)} tiers, {len(plan.rounds)} rounds "
        f"({plan.rounds[0].period} to {plan.rounds[-1].period})"
    )
    return plan


def _require(item: Any, key: str, where: str) -> Any:
    if not isinstance(item, dict):
        log_and_raise_config_error(f"{where} must be a mapping", config_key=where)
    if item.get(key) is None:
        log_and_raise_config_error(f"Missing {key}", config_key=f"{where}.{key}")
    return item[key]


def _int_field(item: Dict[str, Any], key: str, where: str, default: Optional[int] = None) -> int:
    if default is not None and item.get(key) is None:
        return default
    value = _require(item, key, where)
    if isinstance(value, bool) or not isinstance(value, int):
        log_and_raise_config_error(
            f"{key} must be an integer", config_key=f"{where}.{key}", config_value=value
        )
    return value


def _float_field(item: Dict[str, Any], key: str, where: str) -> float:
    value = _require(item, key, where)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        log_and_raise_config_error(
            f"{key} must be a number", config_key=f"{where}.{key}", config_value=value
        )
    return float(value)


def _list_field(data: Dict[str, Any], key: str) -> Iterable[Any]:
    value = data.get(key) or []
    if not isinstance(value, list):
        log_and_raise_config_error(f"{key} must be a list", config_key=key)
    return value
