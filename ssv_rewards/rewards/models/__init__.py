"""Data models for the reward calculation system."""

from .period import Period
from .plan import Plan, Criteria, Tier, Round, RewardRates, parse_plan, load_plan
from .participation import ValidatorParticipation, OwnerParticipation, RoundResult
from .ledger import CumulativeLedger, LedgerEntry

__all__ = [
    "Period",
    "Plan",
    "Criteria",
    "Tier",
    "Round",
    "RewardRates",
    "parse_plan",
    "load_plan",
    "ValidatorParticipation",
    "OwnerParticipation",
    "RoundResult",
    "CumulativeLedger",
    "LedgerEntry",
]
