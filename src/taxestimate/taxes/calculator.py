"""Federal income tax calculation under the standard deduction."""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from taxestimate.taxes.filing_status import (
    FilingBucket,
    FilingStatus,
    bucket_for,
    parse_filing_status,
)
from taxestimate.taxes.rate_table import (
    DEFAULT_TAX_YEAR,
    RateTable,
    TaxBracket,
    load_rate_table,
)

ZERO = Decimal(0)


class IncomeAggregate(BaseModel):
    """Income and withholding totals summed across a taxpayer's documents.

    Every field is expected to be non-negative. That is the caller's
    precondition (document models reject negative amounts); the calculator
    does not re-check it.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    total_wages: Decimal = ZERO
    total_nonemployee_compensation: Decimal = ZERO
    total_interest_income: Decimal = ZERO
    total_federal_income_tax_withheld: Decimal = ZERO


class BracketCharge(BaseModel):
    """Tax charged within a single bracket."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    lower_bound: Decimal
    upper_bound: Decimal | None
    rate: Decimal
    taxed_amount: Decimal
    tax: Decimal


class TaxOutcome(BaseModel):
    """Every intermediate of a tax calculation, for display and audit."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    filing_status: FilingStatus
    bucket: FilingBucket
    tax_year: int
    gross_income: Decimal
    deduction: Decimal
    taxable_income: Decimal
    tax_liability: Decimal
    total_federal_income_tax_withheld: Decimal
    refund_or_amount_owed: Decimal = Field(description="Positive=refund, negative=amount owed")
    bracket_breakdown: tuple[BracketCharge, ...] = ()

    @property
    def is_refund(self) -> bool:
        return self.refund_or_amount_owed >= 0

    @property
    def refund(self) -> Decimal:
        return max(ZERO, self.refund_or_amount_owed)

    @property
    def amount_owed(self) -> Decimal:
        return max(ZERO, -self.refund_or_amount_owed)

    @property
    def top_rate_charged(self) -> Decimal:
        """Rate of the highest bracket charged; zero when nothing is taxed."""
        if not self.bracket_breakdown:
            return ZERO
        return self.bracket_breakdown[-1].rate

    @property
    def effective_rate(self) -> Decimal:
        """Tax liability as a fraction of gross income."""
        if self.gross_income <= 0:
            return ZERO
        return self.tax_liability / self.gross_income


def apply_brackets(
    taxable_income: Decimal,
    brackets: tuple[TaxBracket, ...],
) -> tuple[Decimal, tuple[BracketCharge, ...]]:
    """Compute progressive tax on ``taxable_income``.

    Only the slice of income inside each bracket is taxed at that bracket's
    rate. Brackets above the income are never visited.

    Returns:
        Total tax (unrounded) and the per-bracket charges.
    """
    remaining = taxable_income
    tax = ZERO
    charges: list[BracketCharge] = []
    for bracket in brackets:
        if remaining <= 0:
            break
        if taxable_income <= bracket.lower_bound:
            continue
        width = bracket.width
        amount = remaining if width is None else min(remaining, width)
        bracket_tax = amount * bracket.rate
        charges.append(
            BracketCharge(
                lower_bound=bracket.lower_bound,
                upper_bound=bracket.upper_bound,
                rate=bracket.rate,
                taxed_amount=amount,
                tax=bracket_tax,
            )
        )
        tax += bracket_tax
        remaining -= amount
    return tax, tuple(charges)


def marginal_rate(taxable_income: Decimal, brackets: tuple[TaxBracket, ...]) -> Decimal:
    """Return the rate applied to the next dollar of ``taxable_income``."""
    for bracket in brackets:
        if bracket.upper_bound is None or taxable_income < bracket.upper_bound:
            return bracket.rate
    return brackets[-1].rate


class TaxCalculator:
    """Federal income tax for wage, 1099-NEC and 1099-INT income.

    Stateless apart from the injected, immutable rate table, so one instance
    may be shared freely across threads.
    """

    def __init__(self, rate_table: RateTable) -> None:
        self._rate_table = rate_table

    @classmethod
    def for_tax_year(cls, tax_year: int) -> TaxCalculator:
        """Calculator backed by the packaged table for ``tax_year``."""
        return cls(load_rate_table(tax_year))

    @property
    def rate_table(self) -> RateTable:
        return self._rate_table

    def calculate(
        self,
        income: IncomeAggregate,
        filing_status: FilingStatus | str,
    ) -> TaxOutcome:
        """Compute the full tax outcome.

        Args:
            income: Aggregated totals; all fields assumed non-negative.
            filing_status: A FilingStatus or its wire value.

        Returns:
            TaxOutcome carrying every intermediate value.

        Raises:
            UnknownFilingStatus: If the status is not recognized or the rate
                table has no schedule for its bucket.
        """
        status = parse_filing_status(filing_status)
        bucket = bucket_for(status)
        schedule = self._rate_table.schedule_for(bucket)

        gross_income = (
            income.total_wages
            + income.total_nonemployee_compensation
            + income.total_interest_income
        )
        deduction = schedule.standard_deduction
        taxable_income = max(ZERO, gross_income - deduction)
        tax_liability, breakdown = apply_brackets(taxable_income, schedule.brackets)
        withheld = income.total_federal_income_tax_withheld

        return TaxOutcome(
            filing_status=status,
            bucket=bucket,
            tax_year=self._rate_table.tax_year,
            gross_income=gross_income,
            deduction=deduction,
            taxable_income=taxable_income,
            tax_liability=tax_liability,
            total_federal_income_tax_withheld=withheld,
            refund_or_amount_owed=withheld - tax_liability,
            bracket_breakdown=breakdown,
        )


def calculate_taxes(
    income: IncomeAggregate,
    filing_status: FilingStatus | str,
    rate_table: RateTable | None = None,
) -> TaxOutcome:
    """Compute a tax outcome, defaulting to the packaged DEFAULT_TAX_YEAR table."""
    table = rate_table if rate_table is not None else load_rate_table(DEFAULT_TAX_YEAR)
    return TaxCalculator(table).calculate(income, filing_status)
