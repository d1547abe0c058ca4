"""Selection of rounds that have complete rates and fully observed performance data."""

from datetime import date, datetime, time
from typing import List, Optional, Union

import bittensor as bt

from ..interfaces.performance_source import PerformanceBounds
from ..models.period import Period
from ..models.plan import Plan, Round
from ...utils.error_handling import ErrorMessages, log_and_raise_data_error


def _start_of(day: date, like: Union[date, datetime]) -> Union[date, datetime]:
    """Midnight of day in the timezone of like, or day itself when like is a plain date."""
    if isinstance(like, datetime):
        return datetime.combine(day, time.min, tzinfo=like.tzinfo)
    return day


def check_data_availability(plan: Plan, bounds: Optional[PerformanceBounds]) -> None:
    """
    Verify that performance data exists and covers the first round.

    Raises:
        DataAvailabilityError: If bounds are missing, inverted or start after
            midnight of the first day of the first round
    """
    if bounds is None or bounds.earliest is None or bounds.latest is None:
        log_and_raise_data_error(ErrorMessages.PERFORMANCE_DATA_MISSING)

    if bounds.earliest > bounds.latest:
        log_and_raise_data_error(
            ErrorMessages.INVALID_PERFORMANCE_BOUNDS,
            context={'earliest': bounds.earliest, 'latest': bounds.latest}
        )

    first_day = plan.rounds[0].period.first_day()
    if bounds.earliest > _start_of(first_day, bounds.earliest):
        log_and_raise_data_error(
            ErrorMessages.FIRST_ROUND_NOT_COVERED,
            context={'earliest': bounds.earliest, 'first_round': str(plan.rounds[0].period)}
        )


def select_eligible_rounds(plan: Plan, bounds: PerformanceBounds) -> List[Round]:
    """
    Return the rounds that can be rewarded, in chronological order.

    A round is eligible when its rates are known (non-zero eth_apr and
    ssv_eth) and it ends strictly before the period holding the latest
    performance data point, so partially observed months are skipped.
    """
    latest_period = Period.at(bounds.latest)
    cutoff = latest_period.first_day()

    eligible = []
    for rnd in plan.rounds:
        if not rnd.is_complete:
            bt.logging.debug(f"Skipping round {rnd.period}: rates not set")
            continue
        if not rnd.period.last_day() < cutoff:
            bt.logging.debug(f"Skipping round {rnd.period}: performance data incomplete (latest {latest_period})")
            continue
        eligible.append(rnd)

    bt.logging.info(f"Selected {len(eligible)}/{len(plan.rounds)} rounds with available performance data")
    return eligible
