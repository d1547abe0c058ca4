"""
Reward calculation system for the SSV incentive program.

Turns a validated reward plan and per-period validator activity into
per-round, per-entity and cumulative rewards.
"""

from .orchestrator import RewardOrchestrator, RunState, CalculationResult

__all__ = [
    "RewardOrchestrator",
    "RunState",
    "CalculationResult",
]
