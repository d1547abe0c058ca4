"""
Error types and helpers for consistent error patterns across the calculator.

Every error here is fatal for a run: nothing is retried automatically, and
each helper logs the context needed to diagnose the failure before raising.
"""

import bittensor as bt
from typing import Any, Dict, Optional


class RewardsError(Exception):
    """Base class for all reward calculation errors."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}


class ConfigurationError(RewardsError, ValueError):
    """Malformed or semantically invalid reward plan."""


class ResolutionError(RewardsError, RuntimeError):
    """The plan has no tier for a cohort size or no round for a period."""


class ConsistencyError(RewardsError, RuntimeError):
    """Owner and validator activity reported by the data source disagree."""


class DataAvailabilityError(RewardsError, RuntimeError):
    """Performance data is missing or does not cover the plan."""


def _format_context(context: Optional[Dict[str, Any]]) -> str:
    if not context:
        return ""
    return " (" + ", ".join(f"{k}={v}" for k, v in context.items()) + ")"


def log_and_raise_config_error(
    message: str,
    config_key: Optional[str] = None,
    config_value: Optional[Any] = None
) -> None:
    """
    Log configuration error and raise ConfigurationError.

    Args:
        message: Error message describing the configuration issue
        config_key: The plan field that's problematic (e.g. "tiers[1]")
        config_value: The problematic value

    Raises:
        ConfigurationError: Always raises with formatted message
    """
    bt.logging.error(
        f"Configuration error: {message}",
        extra={'config_key': config_key, 'config_value': config_value}
    )

    if config_key is not None:
        message = f"{message} (config_key: {config_key})"
    raise ConfigurationError(message, {'config_key': config_key, 'config_value': config_value})


def log_and_raise_resolution_error(message: str, context: Optional[Dict[str, Any]] = None) -> None:
    """
    Log a tier/round resolution failure and raise ResolutionError.

    Raises:
        ResolutionError: Always raises with formatted message
    """
    bt.logging.error(f"Resolution failed: {message}{_format_context(context)}")
    raise ResolutionError(message + _format_context(context), context)


def log_and_raise_consistency_error(message: str, context: Optional[Dict[str, Any]] = None) -> None:
    """
    Log a source data inconsistency and raise ConsistencyError.

    Raises:
        ConsistencyError: Always raises with formatted message
    """
    bt.logging.error(f"Inconsistent source data: {message}{_format_context(context)}")
    raise ConsistencyError(message + _format_context(context), context)


def log_and_raise_data_error(
    message: str,
    error: Optional[Exception] = None,
    context: Optional[Dict[str, Any]] = None
) -> None:
    """
    Log missing or unreadable performance data and raise DataAvailabilityError.

    Args:
        message: What was being read or checked
        error: The original exception, if any (chained as the cause)
        context: Additional context information

    Raises:
        DataAvailabilityError: Always raises with formatted message
    """
    detail = f"{message}: {error}" if error is not None else message
    bt.logging.error(
        f"Performance data unavailable: {detail}{_format_context(context)}",
        extra={'error_type': type(error).__name__ if error is not None else None}
    )
    raise DataAvailabilityError(detail + _format_context(context), context) from error


# Standard error messages for consistency
class ErrorMessages:
    """Standard error messages for consistency."""

    # Plan errors
    MISSING_TIERS = "missing tiers"
    UNSORTED_TIERS = "tiers are not sorted by max participants"
    NON_POSITIVE_TIER = "max participants must be positive"
    DUPLICATE_TIER = "duplicate tier"
    MISSING_ROUNDS = "missing rounds"
    UNSORTED_ROUNDS = "rounds are not sorted by period"
    DUPLICATE_ROUND = "duplicate round"

    # Resolution errors
    NON_POSITIVE_PARTICIPANTS = "participants must be positive"
    TIERS_NOT_SORTED = "tiers aren't sorted"
    EXCEEDS_HIGHEST_TIER = "participants exceed highest tier"
    PERIOD_NOT_FOUND = "period not found"
    INCOMPLETE_ROUND = "round has no eth_apr or ssv_eth yet"

    # Data availability errors
    PERFORMANCE_DATA_MISSING = "validator performance data is not available"
    INVALID_PERFORMANCE_BOUNDS = "earliest validator performance is after latest validator performance"
    FIRST_ROUND_NOT_COVERED = "validator performance data is not available for the first round"
