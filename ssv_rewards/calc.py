"""
Command-line tool to calculate rewards for all eligible rounds.

Usage:
    python -m ssv_rewards.calc
    python -m ssv_rewards.calc --plan rewards.yaml --dir ./rewards
    python -m ssv_rewards.calc --performance-provider e2m --min-attestations 202
"""
import argparse
import sys
from pathlib import Path
from typing import Optional
import bittensor as bt

from ssv_rewards.rewards import RewardOrchestrator, CalculationResult
from ssv_rewards.rewards.models.plan import load_plan
from ssv_rewards.rewards.services.postgres_source import PostgresPerformanceSource
from ssv_rewards.rewards.utils.report_export import ReportExporter
from ssv_rewards.utils.config import (
    MIN_DAILY_ATTESTATIONS,
    PERFORMANCE_PROVIDER,
    PERFORMANCE_PROVIDERS,
    POSTGRES_URL,
    REWARDS_OUTPUT_DIR,
    REWARDS_PLAN_PATH,
)
from ssv_rewards.utils.error_handling import RewardsError


def calculate(
    plan_path: str,
    output_dir: str,
    provider: str,
    postgres_url: Optional[str],
    min_attestations: Optional[int] = None
) -> CalculationResult:
    """
    Load the plan, compute rewards from the database and export the reports.

    Args:
        plan_path: Path to the rewards plan YAML
        output_dir: Directory to save the rewards to
        provider: Performance provider to use
        postgres_url: Database URL
        min_attestations: Minimum attestations in a day to be considered
            active; defaults to the plan's criteria

    Returns:
        CalculationResult of the completed run
    """
    plan = load_plan(plan_path)

    data_source = PostgresPerformanceSource(postgres_url)
    try:
        orchestrator = RewardOrchestrator(
            plan=plan,
            data_source=data_source,
            provider=provider,
            min_attestations=min_attestations,
            exporter=ReportExporter(Path(output_dir)),
        )
        return orchestrator.run()
    finally:
        data_source.dispose()


def main():
    """Main entry point for CLI."""
    parser = argparse.ArgumentParser(description="Calculate SSV incentive rewards")
    bt.logging.add_args(parser)

    parser.add_argument(
        "--plan",
        type=str,
        default=REWARDS_PLAN_PATH,
        help="Path to the rewards plan."
    )
    parser.add_argument(
        "--dir",
        type=str,
        default=REWARDS_OUTPUT_DIR,
        help="Path to save the rewards to."
    )
    parser.add_argument(
        "--performance-provider",
        type=str,
        choices=PERFORMANCE_PROVIDERS,
        default=PERFORMANCE_PROVIDER,
        help="Performance provider to use."
    )
    parser.add_argument(
        "--min-attestations",
        type=int,
        default=MIN_DAILY_ATTESTATIONS,
        help="Minimum attestations in a day to be considered active (defaults to the plan's criteria)."
    )
    parser.add_argument(
        "--postgres",
        type=str,
        default=POSTGRES_URL,
        help="PostgreSQL connection URL."
    )

    config = bt.config(parser)
    bt.logging.set_config(config=config.logging)

    try:
        calculate(
            plan_path=config.plan,
            output_dir=config.dir,
            provider=config.performance_provider,
            postgres_url=config.postgres,
            min_attestations=config.min_attestations,
        )
    except KeyboardInterrupt:
        bt.logging.info("\nCalculation cancelled by user")
        sys.exit(1)
    except RewardsError as e:
        bt.logging.error(f"❌ Reward calculation failed: {e}")
        sys.exit(1)
    except Exception as e:
        bt.logging.error(f"Unexpected error: {e}")
        sys.exit(1)

    bt.logging.info("✅ Calculation completed successfully")


if __name__ == "__main__":
    main()
