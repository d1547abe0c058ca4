"""Main reward calculation orchestrator."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

import bittensor as bt

from .interfaces.performance_source import PerformanceDataSource
from .models.ledger import CumulativeLedger
from .models.participation import RoundResult
from .models.plan import Plan
from .services.fixed_point import finalize_cumulative
from .services.round_processor import RoundProcessor
from .services.round_selection import check_data_availability, select_eligible_rounds
from .utils.report_export import ReportExporter


class RunState(Enum):
    IDLE = "idle"
    SELECTING_ROUNDS = "selecting_rounds"
    PROCESSING_ROUND = "processing_round"
    FINALIZING = "finalizing"
    DONE = "done"
    FAILED = "failed"


@dataclass
class CalculationResult:
    """Outcome of a successful run."""
    rounds: List[RoundResult] = field(default_factory=list)
    validator_totals: CumulativeLedger = field(default_factory=CumulativeLedger)
    owner_totals: CumulativeLedger = field(default_factory=CumulativeLedger)
    cumulative: Dict[str, int] = field(default_factory=dict)


class RewardOrchestrator:
    """
    Coordinates the complete reward calculation workflow.

    Rounds are processed one at a time in ascending period order. Each
    round is merged into the running totals only after it fully succeeded,
    and any error stops the run: there is no retry and no resume.
    """

    def __init__(
        self,
        plan: Plan,
        data_source: PerformanceDataSource,
        provider: str,
        min_attestations: Optional[int] = None,
        exporter: Optional[ReportExporter] = None
    ):
        self.plan = plan
        self.data_source = data_source
        if min_attestations is None:
            min_attestations = plan.criteria.min_attestations_per_day
        self.round_processor = RoundProcessor(data_source, provider, min_attestations)
        self.exporter = exporter
        self.state = RunState.IDLE

    def run(self) -> CalculationResult:
        """
        Calculate rewards for every eligible round.

        Raises:
            DataAvailabilityError: If performance data does not cover the plan
            ResolutionError: If a round's cohort or period is not in the plan
            ConsistencyError: If owner and validator activity disagree
        """
        if self.state != RunState.IDLE:
            raise RuntimeError(f"Run already started (state: {self.state.value})")

        try:
            return self._run()
        except Exception:
            self.state = RunState.FAILED
            raise

    def _run(self) -> CalculationResult:
        # 1. Verify performance data and pick rounds
        self.state = RunState.SELECTING_ROUNDS
        bounds = self.data_source.performance_bounds()
        check_data_availability(self.plan, bounds)
        rounds = select_eligible_rounds(self.plan, bounds)

        # 2. Process rounds in order, merging each only once it succeeded
        result = CalculationResult()
        for rnd in rounds:
            self.state = RunState.PROCESSING_ROUND
            round_result = self.round_processor.process_round(rnd, self.plan)

            result.rounds.append(round_result)
            result.validator_totals.add_validators(round_result.validators)
            result.owner_totals.add_owners(round_result.owners)

            if self.exporter is not None:
                self.exporter.export_round(round_result, finalize_cumulative(result.owner_totals))

            rates = round_result.rates
            bt.logging.info(
                f"Rewards for round {rnd.period}: {round_result.participants} participants, "
                f"tier {rates.tier.max_participants}, daily={rates.daily:.6f}, "
                f"monthly={rates.monthly:.6f}, annual={rates.annual:.6f}"
            )

        # 3. Convert lifetime owner rewards to fixed point
        self.state = RunState.FINALIZING
        result.cumulative = finalize_cumulative(result.owner_totals)
        if self.exporter is not None:
            self.exporter.export_totals(
                result.rounds, result.validator_totals, result.owner_totals, result.cumulative
            )

        self.state = RunState.DONE
        bt.logging.info(
            f"✅ Rewards calculated: {len(result.rounds)} rounds, "
            f"{len(result.validator_totals)} validators, {len(result.owner_totals)} owners"
        )
        return result
