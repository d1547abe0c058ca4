"""Tests for reward report export."""

import csv
import json

import pytest

from ssv_rewards.rewards.models.ledger import CumulativeLedger
from ssv_rewards.rewards.models.participation import OwnerParticipation, RoundResult, ValidatorParticipation
from ssv_rewards.rewards.models.period import Period
from ssv_rewards.rewards.models.plan import RewardRates, Tier
from ssv_rewards.rewards.utils.report_export import ReportExporter


def read_csv(path):
    with open(path, newline='') as f:
        return list(csv.DictReader(f))


@pytest.fixture
def round_result():
    rates = RewardRates(tier=Tier(100, 1.0), daily=1.1111111111111112, monthly=33.333333333333336, annual=400.0)
    return RoundResult(
        period=Period(2023, 6),
        rates=rates,
        validators=[
            ValidatorParticipation("0xa", "0xk1", 30, 33.333333333333336),
            ValidatorParticipation("0xa", "0xk2", 7, 7.777777777777779),
        ],
        owners=[OwnerParticipation("0xa", 2, 37, 41.111111111111114)],
    )


class TestExportRound:
    """Per-round reports."""

    def test_writes_round_directory(self, tmp_path, round_result):
        exporter = ReportExporter(tmp_path)

        round_dir = exporter.export_round(round_result, {"0xa": 41111111111111114000})

        assert round_dir == tmp_path / "2023-06"
        assert (round_dir / "by-validator.csv").exists()
        assert (round_dir / "by-owner.csv").exists()
        assert (round_dir / "cumulative.json").exists()

    def test_rewards_are_lossless(self, tmp_path, round_result):
        exporter = ReportExporter(tmp_path)

        exporter.export_round(round_result, {})

        rows = read_csv(tmp_path / "2023-06" / "by-validator.csv")
        assert [r['public_key'] for r in rows] == ["0xk1", "0xk2"]
        assert float(rows[0]['reward']) == 33.333333333333336
        assert float(rows[1]['reward']) == 7.777777777777779
        assert rows[1]['active_days'] == '7'

        owners = read_csv(tmp_path / "2023-06" / "by-owner.csv")
        assert owners == [{'owner_address': '0xa', 'validators': '2', 'active_days': '37', 'reward': '41.111111111111114'}]

    def test_cumulative_integers_are_exact(self, tmp_path, round_result):
        exporter = ReportExporter(tmp_path)
        cumulative = {"0xa": 41111111111111114000, "0xb": 1}

        exporter.export_round(round_result, cumulative)

        with open(tmp_path / "2023-06" / "cumulative.json") as f:
            assert json.load(f) == cumulative


class TestExportTotals:
    """Reports across all rounds."""

    def test_writes_all_reports(self, tmp_path, round_result):
        validator_totals = CumulativeLedger()
        validator_totals.add_validators(round_result.validators)
        owner_totals = CumulativeLedger()
        owner_totals.add_owners(round_result.owners)
        exporter = ReportExporter(tmp_path / "out")

        exporter.export_totals([round_result], validator_totals, owner_totals, {"0xa": 5})

        out = tmp_path / "out"
        by_validator = read_csv(out / "by-validator.csv")
        assert by_validator[0]['period'] == '2023-06'
        assert len(by_validator) == 2

        by_owner = read_csv(out / "by-owner.csv")
        assert by_owner[0]['period'] == '2023-06'

        totals = read_csv(out / "total-by-validator.csv")
        assert totals[0] == {
            'public_key': '0xk1', 'owner_address': '0xa', 'active_days': '30', 'reward': '33.333333333333336'
        }

        owner_rows = read_csv(out / "total-by-owner.csv")
        assert owner_rows == [{'owner_address': '0xa', 'active_days': '37', 'reward': '41.111111111111114'}]

        with open(out / "cumulative.json") as f:
            assert json.load(f) == {"0xa": 5}

    def test_empty_run(self, tmp_path):
        exporter = ReportExporter(tmp_path)

        exporter.export_totals([], CumulativeLedger(), CumulativeLedger(), {})

        assert read_csv(tmp_path / "by-validator.csv") == []
        with open(tmp_path / "cumulative.json") as f:
            assert json.load(f) == {}
