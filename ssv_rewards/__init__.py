"""SSV incentive program rewards calculator."""
