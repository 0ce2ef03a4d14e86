"""Simplified Form 1040 line mapping."""

from __future__ import annotations

from collections.abc import Iterator
from decimal import ROUND_HALF_UP, Decimal

from pydantic import BaseModel, ConfigDict

from taxestimate.config.schema import Taxpayer
from taxestimate.taxes.calculator import IncomeAggregate, TaxOutcome
from taxestimate.taxes.filing_status import FilingStatus

CENTS = Decimal("0.01")

# (line, attribute, label)
_LINES: list[tuple[str, str, str]] = [
    ("1a", "wages", "Wages, salaries, tips (W-2 box 1)"),
    ("2b", "taxable_interest", "Taxable interest (1099-INT)"),
    ("8", "additional_income", "Nonemployee compensation (1099-NEC)"),
    ("9", "total_income", "Total income"),
    ("11", "adjusted_gross_income", "Adjusted gross income"),
    ("12", "standard_deduction", "Standard deduction"),
    ("15", "taxable_income", "Taxable income"),
    ("16", "tax", "Tax"),
    ("24", "total_tax", "Total tax"),
    ("25a", "federal_income_tax_withheld", "Federal income tax withheld (W-2)"),
    ("33", "total_payments", "Total payments"),
    ("34", "overpaid", "Amount overpaid"),
    ("35a", "refund", "Refunded to you"),
    ("37", "amount_owed", "Amount you owe"),
]


def to_cents(amount: Decimal) -> Decimal:
    """Round a money amount to whole cents, half up."""
    return amount.quantize(CENTS, rounding=ROUND_HALF_UP)


class Form1040Summary(BaseModel):
    """Form 1040 figures for a return with W-2, 1099-NEC and 1099-INT income only."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    tax_year: int
    filing_status: FilingStatus
    wages: Decimal
    taxable_interest: Decimal
    additional_income: Decimal
    total_income: Decimal
    adjusted_gross_income: Decimal
    standard_deduction: Decimal
    taxable_income: Decimal
    tax: Decimal
    total_tax: Decimal
    federal_income_tax_withheld: Decimal
    total_payments: Decimal
    overpaid: Decimal
    refund: Decimal
    amount_owed: Decimal
    taxpayer: Taxpayer | None = None

    def lines(self) -> Iterator[tuple[str, str, Decimal]]:
        """Yield ``(line, label, amount)`` rows in form order."""
        for line, attr, label in _LINES:
            yield line, label, getattr(self, attr)


def build_form_1040(
    income: IncomeAggregate,
    outcome: TaxOutcome,
    taxpayer: Taxpayer | None = None,
) -> Form1040Summary:
    """Lay a tax outcome onto Form 1040 lines, rounded to cents.

    Rounding happens here and nowhere earlier, so totals on the form can
    differ from the sum of rounded lines by a cent.
    """
    return Form1040Summary(
        tax_year=outcome.tax_year,
        filing_status=outcome.filing_status,
        wages=to_cents(income.total_wages),
        taxable_interest=to_cents(income.total_interest_income),
        additional_income=to_cents(income.total_nonemployee_compensation),
        total_income=to_cents(outcome.gross_income),
        # no adjustments to income are modeled
        adjusted_gross_income=to_cents(outcome.gross_income),
        standard_deduction=to_cents(outcome.deduction),
        taxable_income=to_cents(outcome.taxable_income),
        tax=to_cents(outcome.tax_liability),
        total_tax=to_cents(outcome.tax_liability),
        federal_income_tax_withheld=to_cents(outcome.total_federal_income_tax_withheld),
        total_payments=to_cents(outcome.total_federal_income_tax_withheld),
        overpaid=to_cents(outcome.refund),
        refund=to_cents(outcome.refund),
        amount_owed=to_cents(outcome.amount_owed),
        taxpayer=taxpayer,
    )
