"""Per-year standard deduction and bracket tables.

A :class:`RateTable` is immutable reference data for one tax year. Tables are
loaded from YAML files under ``taxes/tables/`` and validated on construction;
moving to a new tax year means loading a different table, never editing one.
"""

from __future__ import annotations

from decimal import Decimal
from functools import lru_cache
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from taxestimate.io.yaml_loader import load_yaml, package_path
from taxestimate.taxes.filing_status import FilingBucket
from taxestimate.utils.exceptions import ConfigError, UnknownFilingStatus

DEFAULT_TAX_YEAR = 2024


class TaxBracket(BaseModel):
    """Income over ``lower_bound`` but not over ``upper_bound``, taxed at ``rate``."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    lower_bound: Decimal = Field(ge=0)
    upper_bound: Decimal | None = Field(default=None, description="None for the top bracket")
    rate: Decimal = Field(ge=0, le=1)

    @property
    def width(self) -> Decimal | None:
        """Span of income covered; None when unbounded."""
        if self.upper_bound is None:
            return None
        return self.upper_bound - self.lower_bound

    @model_validator(mode="after")
    def _validate_bounds(self) -> TaxBracket:
        if self.upper_bound is not None and self.upper_bound <= self.lower_bound:
            raise ValueError(
                f"upper_bound ({self.upper_bound}) must exceed lower_bound ({self.lower_bound})"
            )
        return self


class FilingSchedule(BaseModel):
    """Standard deduction and ordered brackets for one filing bucket."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    bucket: FilingBucket
    standard_deduction: Decimal = Field(ge=0)
    brackets: tuple[TaxBracket, ...] = Field(min_length=1)

    @model_validator(mode="after")
    def _validate_brackets(self) -> FilingSchedule:
        first = self.brackets[0]
        if first.lower_bound != 0:
            raise ValueError(f"first bracket must start at 0, got {first.lower_bound}")
        for i, (lower, upper) in enumerate(zip(self.brackets, self.brackets[1:])):
            if lower.upper_bound is None:
                raise ValueError(f"bracket {i} is unbounded but is not the last bracket")
            if upper.lower_bound != lower.upper_bound:
                raise ValueError(
                    f"bracket {i + 1} starts at {upper.lower_bound}, "
                    f"expected {lower.upper_bound}"
                )
        if self.brackets[-1].upper_bound is not None:
            raise ValueError("last bracket must be unbounded")
        return self


class RateTable(BaseModel):
    """Immutable deduction and bracket data for a single tax year."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    tax_year: int = Field(ge=1913)
    schedules: tuple[FilingSchedule, ...] = Field(min_length=1)

    @model_validator(mode="after")
    def _validate_unique_buckets(self) -> RateTable:
        buckets = [s.bucket for s in self.schedules]
        if len(set(buckets)) != len(buckets):
            raise ValueError("each filing bucket may appear only once")
        return self

    @property
    def buckets(self) -> tuple[FilingBucket, ...]:
        """Buckets this table has schedules for."""
        return tuple(s.bucket for s in self.schedules)

    def schedule_for(self, bucket: FilingBucket) -> FilingSchedule:
        """Look up the schedule for a bucket.

        Raises:
            UnknownFilingStatus: If the table has no schedule for ``bucket``.
        """
        for schedule in self.schedules:
            if schedule.bucket == bucket:
                return schedule
        raise UnknownFilingStatus(
            bucket, f"No {self.tax_year} rate schedule for filing bucket {bucket!r}"
        )

    def deduction_for(self, bucket: FilingBucket) -> Decimal:
        """Return the standard deduction for a bucket."""
        return self.schedule_for(bucket).standard_deduction

    def brackets_for(self, bucket: FilingBucket) -> tuple[TaxBracket, ...]:
        """Return the ascending bracket schedule for a bucket."""
        return self.schedule_for(bucket).brackets


def build_rate_table(data: dict[str, Any]) -> RateTable:
    """Build a RateTable from parsed table data.

    ``data`` has the shape of the packaged YAML files: ``tax_year``, a
    ``standard_deduction`` mapping and a ``brackets`` mapping of bucket to
    ``[upper_bound, rate]`` pairs, with ``null`` for the top bracket.

    Raises:
        ConfigError: If the data is malformed or fails validation.
    """
    try:
        deductions: dict[str, Any] = data["standard_deduction"]
        bracket_rows: dict[str, list[list[Any]]] = data["brackets"]
        schedules = []
        for bucket, rows in bracket_rows.items():
            brackets = []
            lower: Any = 0
            for upper_bound, rate in rows:
                brackets.append(
                    {"lower_bound": lower, "upper_bound": upper_bound, "rate": str(rate)}
                )
                lower = upper_bound
            schedules.append(
                {
                    "bucket": bucket,
                    "standard_deduction": deductions[bucket],
                    "brackets": brackets,
                }
            )
        return RateTable.model_validate({"tax_year": data["tax_year"], "schedules": schedules})
    except ValidationError as exc:
        raise ConfigError(f"Invalid rate table: {exc}") from exc
    except (KeyError, TypeError, ValueError) as exc:
        raise ConfigError(f"Malformed rate table data: {exc!r}") from exc


def rate_table_from_yaml(path: Path) -> RateTable:
    """Load and validate a rate table from a YAML file."""
    try:
        data = load_yaml(path)
    except FileNotFoundError as exc:
        raise ConfigError(f"Rate table file not found: {path}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Rate table file {path} must contain a mapping")
    return build_rate_table(data)


def load_rate_table(tax_year: int = DEFAULT_TAX_YEAR) -> RateTable:
    """Load the packaged rate table for ``tax_year``.

    Tables are immutable, so each year is parsed once and the same instance
    is shared by every caller, however the year is passed.

    Raises:
        ConfigError: If no table ships for ``tax_year``.
    """
    return _load_packaged_table(int(tax_year))


@lru_cache(maxsize=None)
def _load_packaged_table(tax_year: int) -> RateTable:
    path = package_path(f"taxes/tables/us_federal_{tax_year}.yaml")
    if not path.exists():
        raise ConfigError(f"No rate table available for tax year {tax_year}")
    table = rate_table_from_yaml(path)
    if table.tax_year != tax_year:
        raise ConfigError(f"{path.name} declares tax_year {table.tax_year}, expected {tax_year}")
    return table
