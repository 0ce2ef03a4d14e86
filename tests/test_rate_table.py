"""Tests for the per-year rate table store."""

from __future__ import annotations

from decimal import Decimal
from pathlib import Path
from typing import Any

import pytest
from pydantic import ValidationError

from taxestimate.taxes.filing_status import FilingBucket
from taxestimate.taxes.rate_table import (
    FilingSchedule,
    RateTable,
    TaxBracket,
    build_rate_table,
    load_rate_table,
    rate_table_from_yaml,
)
from taxestimate.utils.exceptions import ConfigError, UnknownFilingStatus


def _table_data(**overrides: Any) -> dict[str, Any]:
    data: dict[str, Any] = {
        "tax_year": 2030,
        "standard_deduction": {"single": 1000},
        "brackets": {"single": [[10_000, "0.10"], [None, "0.20"]]},
    }
    data.update(overrides)
    return data


class TestPackagedTable:
    def test_all_buckets_present(self, rate_table: RateTable) -> None:
        assert set(rate_table.buckets) == set(FilingBucket)

    def test_standard_deductions(self, rate_table: RateTable) -> None:
        assert rate_table.deduction_for(FilingBucket.SINGLE) == 14600
        assert rate_table.deduction_for(FilingBucket.MARRIED_JOINT) == 29200
        assert rate_table.deduction_for(FilingBucket.MARRIED_SEPARATE) == 14600
        assert rate_table.deduction_for(FilingBucket.HEAD_OF_HOUSEHOLD) == 21900

    @pytest.mark.parametrize("bucket", list(FilingBucket))
    def test_brackets_partition_income(self, rate_table: RateTable, bucket: FilingBucket) -> None:
        brackets = rate_table.brackets_for(bucket)
        assert brackets[0].lower_bound == 0
        assert brackets[-1].upper_bound is None
        for lower, upper in zip(brackets, brackets[1:]):
            assert lower.upper_bound == upper.lower_bound
            assert lower.rate < upper.rate

    def test_single_schedule(self, rate_table: RateTable) -> None:
        brackets = rate_table.brackets_for(FilingBucket.SINGLE)
        assert [b.upper_bound for b in brackets] == [
            11600,
            47150,
            100525,
            191950,
            243725,
            609350,
            None,
        ]
        assert [b.rate for b in brackets] == [
            Decimal(r) for r in ("0.10", "0.12", "0.22", "0.24", "0.32", "0.35", "0.37")
        ]

    def test_married_separate_top_threshold(self, rate_table: RateTable) -> None:
        brackets = rate_table.brackets_for(FilingBucket.MARRIED_SEPARATE)
        assert brackets[-1].lower_bound == 365600

    def test_rates_are_exact_decimals(self, rate_table: RateTable) -> None:
        rate = rate_table.brackets_for(FilingBucket.SINGLE)[0].rate
        assert isinstance(rate, Decimal)
        assert rate == Decimal("0.10")

    def test_cached_instance(self) -> None:
        assert load_rate_table(2024) is load_rate_table(2024)

    def test_cached_regardless_of_call_style(self) -> None:
        """Default, positional and keyword calls share one instance per year."""
        table = load_rate_table(2024)
        assert load_rate_table() is table
        assert load_rate_table(tax_year=2024) is table

    def test_unknown_year(self) -> None:
        with pytest.raises(ConfigError, match="1999"):
            load_rate_table(1999)


class TestImmutability:
    def test_table_is_frozen(self, rate_table: RateTable) -> None:
        with pytest.raises(ValidationError):
            rate_table.tax_year = 2025  # type: ignore[misc]

    def test_bracket_is_frozen(self, rate_table: RateTable) -> None:
        bracket = rate_table.brackets_for(FilingBucket.SINGLE)[0]
        with pytest.raises(ValidationError):
            bracket.rate = Decimal("0.5")  # type: ignore[misc]


class TestLookupFailures:
    def test_missing_bucket(self) -> None:
        table = build_rate_table(_table_data())
        with pytest.raises(UnknownFilingStatus) as excinfo:
            table.deduction_for(FilingBucket.HEAD_OF_HOUSEHOLD)
        assert excinfo.value.status is FilingBucket.HEAD_OF_HOUSEHOLD

    def test_missing_bucket_brackets(self) -> None:
        table = build_rate_table(_table_data())
        with pytest.raises(UnknownFilingStatus):
            table.brackets_for(FilingBucket.MARRIED_JOINT)


class TestValidation:
    def test_bracket_width(self) -> None:
        bracket = TaxBracket(lower_bound=Decimal(100), upper_bound=Decimal(250), rate=Decimal("0.1"))
        assert bracket.width == 150
        assert TaxBracket(lower_bound=Decimal(0), rate=Decimal("0.1")).width is None

    def test_inverted_bracket_rejected(self) -> None:
        with pytest.raises(ValidationError, match="upper_bound"):
            TaxBracket(lower_bound=Decimal(100), upper_bound=Decimal(50), rate=Decimal("0.1"))

    def test_rate_above_one_rejected(self) -> None:
        with pytest.raises(ValidationError):
            TaxBracket(lower_bound=Decimal(0), rate=Decimal("1.5"))

    def test_gap_between_brackets_rejected(self) -> None:
        with pytest.raises(ValidationError, match="starts at"):
            FilingSchedule(
                bucket=FilingBucket.SINGLE,
                standard_deduction=Decimal(0),
                brackets=(
                    TaxBracket(lower_bound=Decimal(0), upper_bound=Decimal(100), rate=Decimal("0.1")),
                    TaxBracket(lower_bound=Decimal(101), rate=Decimal("0.2")),
                ),
            )

    def test_first_bracket_must_start_at_zero(self) -> None:
        with pytest.raises(ValidationError, match="start at 0"):
            FilingSchedule(
                bucket=FilingBucket.SINGLE,
                standard_deduction=Decimal(0),
                brackets=(TaxBracket(lower_bound=Decimal(5), rate=Decimal("0.1")),),
            )

    def test_last_bracket_must_be_unbounded(self) -> None:
        with pytest.raises(ConfigError, match="unbounded"):
            build_rate_table(_table_data(brackets={"single": [[10_000, "0.10"]]}))

    def test_duplicate_bucket_rejected(self) -> None:
        schedule = build_rate_table(_table_data()).schedule_for(FilingBucket.SINGLE)
        with pytest.raises(ValidationError, match="only once"):
            RateTable(tax_year=2030, schedules=(schedule, schedule))

    def test_unknown_bucket_name_rejected(self) -> None:
        with pytest.raises(ConfigError):
            build_rate_table(
                _table_data(
                    standard_deduction={"widow": 1},
                    brackets={"widow": [[None, "0.10"]]},
                )
            )

    def test_missing_deduction_rejected(self) -> None:
        with pytest.raises(ConfigError, match="Malformed"):
            build_rate_table(_table_data(standard_deduction={}))


class TestYamlFiles:
    def test_swap_table_from_file(self, tmp_path: Path) -> None:
        path = tmp_path / "table.yaml"
        path.write_text(
            "tax_year: 2030\n"
            "standard_deduction:\n  single: 1000\n"
            "brackets:\n  single:\n    - [10000, '0.10']\n    - [null, '0.20']\n"
        )
        table = rate_table_from_yaml(path)
        assert table.tax_year == 2030
        assert table.brackets_for(FilingBucket.SINGLE)[1].lower_bound == 10_000

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="not found"):
            rate_table_from_yaml(tmp_path / "nope.yaml")

    def test_non_mapping_file(self, tmp_path: Path) -> None:
        path = tmp_path / "list.yaml"
        path.write_text("- 1\n- 2\n")
        with pytest.raises(ConfigError, match="mapping"):
            rate_table_from_yaml(path)
