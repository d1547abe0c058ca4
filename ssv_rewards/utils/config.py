import os
from dotenv import load_dotenv
from pathlib import Path
import bittensor as bt

from ssv_rewards.utils.error_handling import log_and_raise_config_error

# .env lives at the project root, next to rewards.yaml
env_path = Path(__file__).parents[2] / '.env'
load_dotenv(dotenv_path=env_path)

__version__ = "1.0.0"

# Database
POSTGRES_URL = os.getenv('POSTGRES_URL')

# Plan & output locations
REWARDS_PLAN_PATH = os.getenv('REWARDS_PLAN_PATH', 'rewards.yaml')
REWARDS_OUTPUT_DIR = os.getenv('REWARDS_OUTPUT_DIR', './rewards')

# Performance data
PERFORMANCE_PROVIDERS = ('beaconcha', 'e2m')
PERFORMANCE_PROVIDER = os.getenv('PERFORMANCE_PROVIDER', 'beaconcha')
if PERFORMANCE_PROVIDER not in PERFORMANCE_PROVIDERS:
    log_and_raise_config_error(
        f"Unknown performance provider, expected one of {', '.join(PERFORMANCE_PROVIDERS)}",
        config_key="PERFORMANCE_PROVIDER",
        config_value=PERFORMANCE_PROVIDER
    )

# Minimum attestations in a day to be considered active.
# Unset means the plan's criteria.min_attestations_per_day is used.
_min_daily_attestations = os.getenv('MIN_DAILY_ATTESTATIONS')
MIN_DAILY_ATTESTATIONS = int(_min_daily_attestations) if _min_daily_attestations else None

# Log out all non-sensitive config variables
bt.logging.info(f"REWARDS_PLAN_PATH: {REWARDS_PLAN_PATH}")
bt.logging.info(f"REWARDS_OUTPUT_DIR: {REWARDS_OUTPUT_DIR}")
bt.logging.info(f"PERFORMANCE_PROVIDER: {PERFORMANCE_PROVIDER}")
bt.logging.info(f"MIN_DAILY_ATTESTATIONS: {MIN_DAILY_ATTESTATIONS}")
