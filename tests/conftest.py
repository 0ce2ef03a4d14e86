"""Shared test fixtures."""

from __future__ import annotations

from collections.abc import Callable
from decimal import Decimal

import pytest

from taxestimate.taxes.calculator import IncomeAggregate, TaxCalculator
from taxestimate.taxes.rate_table import RateTable, load_rate_table


@pytest.fixture
def rate_table() -> RateTable:
    """Packaged 2024 rate table."""
    return load_rate_table(2024)


@pytest.fixture
def calculator(rate_table: RateTable) -> TaxCalculator:
    return TaxCalculator(rate_table)


IncomeFactory = Callable[..., IncomeAggregate]


@pytest.fixture
def make_income() -> IncomeFactory:
    """Build an IncomeAggregate from plain numbers or decimal strings."""

    def _make(
        wages: str | int = 0,
        nec: str | int = 0,
        interest: str | int = 0,
        withheld: str | int = 0,
    ) -> IncomeAggregate:
        return IncomeAggregate(
            total_wages=Decimal(wages),
            total_nonemployee_compensation=Decimal(nec),
            total_interest_income=Decimal(interest),
            total_federal_income_tax_withheld=Decimal(withheld),
        )

    return _make
