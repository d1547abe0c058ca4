"""
Utilities for exporting reward reports.

Layout under the output directory:
    <period>/by-validator.csv, <period>/by-owner.csv, <period>/cumulative.json
    by-validator.csv, by-owner.csv              (every round, with period column)
    total-by-validator.csv, total-by-owner.csv  (lifetime totals)
    cumulative.json                             (owner -> reward scaled by 10^18)
"""

import csv
import json
from pathlib import Path
from typing import Any, Dict, Iterable, List, Sequence, Union

import bittensor as bt

from ..models.ledger import CumulativeLedger
from ..models.participation import RoundResult

VALIDATOR_FIELDS = ['owner_address', 'public_key', 'active_days', 'reward']
OWNER_FIELDS = ['owner_address', 'validators', 'active_days', 'reward']
TOTAL_VALIDATOR_FIELDS = ['public_key', 'owner_address', 'active_days', 'reward']
TOTAL_OWNER_FIELDS = ['owner_address', 'active_days', 'reward']


def write_csv(path: Path, fields: Sequence[str], rows: Iterable[Dict[str, Any]]) -> None:
    """Write rows to path. Floats keep their shortest round-trip representation."""
    with open(path, 'w', newline='') as f:
        writer = csv.DictWriter(f, fieldnames=list(fields), extrasaction='ignore')
        writer.writeheader()
        for row in rows:
            writer.writerow(row)


def write_json(path: Path, data: Any) -> None:
    with open(path, 'w') as f:
        json.dump(data, f, indent=2)
        f.write('\n')


class ReportExporter:
    """Writes per-round and total reward reports to a directory."""

    def __init__(self, output_dir: Union[str, Path]):
        self.output_dir = Path(output_dir)

    def export_round(self, result: RoundResult, cumulative: Dict[str, int]) -> Path:
        """
        Export one round's participations and the cumulative owner rewards
        as of the end of that round.

        Returns:
            Path to the round directory
        """
        round_dir = self.output_dir / str(result.period)
        round_dir.mkdir(parents=True, exist_ok=True)

        write_csv(round_dir / "by-validator.csv", VALIDATOR_FIELDS, (v.to_dict() for v in result.validators))
        write_csv(round_dir / "by-owner.csv", OWNER_FIELDS, (o.to_dict() for o in result.owners))
        write_json(round_dir / "cumulative.json", cumulative)

        bt.logging.debug(f"Exported round {result.period} to {round_dir}")
        return round_dir

    def export_totals(
        self,
        results: List[RoundResult],
        validator_totals: CumulativeLedger,
        owner_totals: CumulativeLedger,
        cumulative: Dict[str, int]
    ) -> None:
        """Export all rounds, lifetime totals and the final cumulative rewards."""
        self.output_dir.mkdir(parents=True, exist_ok=True)

        write_csv(
            self.output_dir / "by-validator.csv",
            ['period'] + VALIDATOR_FIELDS,
            ({'period': str(r.period), **v.to_dict()} for r in results for v in r.validators),
        )
        write_csv(
            self.output_dir / "by-owner.csv",
            ['period'] + OWNER_FIELDS,
            ({'period': str(r.period), **o.to_dict()} for r in results for o in r.owners),
        )
        write_csv(
            self.output_dir / "total-by-validator.csv",
            TOTAL_VALIDATOR_FIELDS,
            ({**e.to_dict(), 'public_key': e.identity} for e in validator_totals.entries()),
        )
        write_csv(
            self.output_dir / "total-by-owner.csv",
            TOTAL_OWNER_FIELDS,
            ({**e.to_dict(), 'owner_address': e.identity} for e in owner_totals.entries()),
        )
        write_json(self.output_dir / "cumulative.json", cumulative)

        bt.logging.info(f"Exported total rewards to {self.output_dir}")
