"""CLI entry point for taxestimate."""

from __future__ import annotations

import logging
from pathlib import Path

import click

from taxestimate.config.defaults import default_return_input
from taxestimate.config.schema import Taxpayer
from taxestimate.documents.aggregate import aggregate_documents, count_by_type
from taxestimate.forms.form_1040 import build_form_1040
from taxestimate.io.serialize import compute_input_hash, dump_outcome, load_return_input
from taxestimate.taxes.calculator import TaxCalculator
from taxestimate.taxes.filing_status import FilingStatus, bucket_for
from taxestimate.taxes.rate_table import DEFAULT_TAX_YEAR, load_rate_table
from taxestimate.utils.exceptions import TaxEstimateError, UnknownFilingStatus

logger = logging.getLogger(__name__)

FILING_STATUS_CHOICE = click.Choice([s.value for s in FilingStatus])


@click.group()
@click.version_option(package_name="taxestimate")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
def cli(verbose: bool) -> None:
    """taxestimate: federal income tax estimates from W-2 and 1099 figures."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@cli.command()
@click.option(
    "--input",
    "input_path",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Path to a YAML or JSON return input. Uses a sample return if not provided.",
)
@click.option(
    "--output",
    "output_path",
    type=click.Path(path_type=Path),
    default=None,
    help="Path to write the outcome JSON.",
)
@click.option(
    "--filing-status",
    type=FILING_STATUS_CHOICE,
    default=None,
    help="Override the input's filing status.",
)
@click.option("--tax-year", type=int, default=None, help="Override the input's tax year.")
@click.option(
    "--strict",
    is_flag=True,
    help="Fail on any document payload that matches no known form instead of skipping it.",
)
def compute(
    input_path: Path | None,
    output_path: Path | None,
    filing_status: str | None,
    tax_year: int | None,
    strict: bool,
) -> None:
    """Compute a federal tax estimate and print a Form 1040 summary."""
    try:
        if input_path is not None:
            return_input = load_return_input(input_path.read_text())
        else:
            return_input = default_return_input()

        # CLI overrides
        if filing_status is not None:
            return_input = return_input.model_copy(update={"filing_status": filing_status})
        if tax_year is not None:
            return_input = return_input.model_copy(update={"tax_year": tax_year})

        documents = return_input.tax_documents(strict=strict)
        logger.info("Document counts: %s", count_by_type(documents))
        income = aggregate_documents(documents)
        calculator = TaxCalculator.for_tax_year(return_input.tax_year)
        outcome = calculator.calculate(income, return_input.filing_status)
    except UnknownFilingStatus as exc:
        raise click.ClickException(f"Invalid filing status: {exc}") from exc
    except TaxEstimateError as exc:
        raise click.ClickException(str(exc)) from exc

    form = build_form_1040(income, outcome, return_input.taxpayer)

    click.echo(f"Form 1040 ({outcome.tax_year}), filing status: {outcome.filing_status.value}")
    if form.taxpayer is not None:
        _echo_taxpayer(form.taxpayer)
    for line, label, amount in form.lines():
        click.echo(f"  {line:>4}  {label:<40} ${amount:>14,.2f}")

    if outcome.is_refund:
        click.echo(f"\nRefund: ${form.refund:,.2f}")
    else:
        click.echo(f"\nAmount owed: ${form.amount_owed:,.2f}")

    if output_path is not None:
        output_path.write_text(dump_outcome(outcome, form, compute_input_hash(return_input)))
        click.echo(f"\nOutcome written to {output_path}")


def _echo_taxpayer(taxpayer: Taxpayer) -> None:
    """Print the name, masked SSN and address block."""
    if taxpayer.full_name:
        click.echo(f"  Name: {taxpayer.full_name}")
    if taxpayer.masked_ssn:
        click.echo(f"  SSN:  {taxpayer.masked_ssn}")
    if taxpayer.address:
        click.echo(f"  Address: {taxpayer.address}")
    if taxpayer.city_state_zip:
        click.echo(f"           {taxpayer.city_state_zip}")


@cli.command()
@click.option(
    "--filing-status",
    type=FILING_STATUS_CHOICE,
    default=FilingStatus.SINGLE.value,
    show_default=True,
)
@click.option("--tax-year", type=int, default=DEFAULT_TAX_YEAR, show_default=True)
def brackets(filing_status: str, tax_year: int) -> None:
    """Show the standard deduction and bracket schedule."""
    bucket = bucket_for(FilingStatus(filing_status))
    try:
        schedule = load_rate_table(tax_year).schedule_for(bucket)
    except TaxEstimateError as exc:
        raise click.ClickException(str(exc)) from exc

    click.echo(f"{tax_year} {filing_status} (table: {bucket.value})")
    click.echo(f"Standard deduction: ${schedule.standard_deduction:,.2f}")
    for bracket in schedule.brackets:
        upper = "" if bracket.upper_bound is None else f" to ${bracket.upper_bound:,.0f}"
        click.echo(f"  {bracket.rate:>5.0%}  over ${bracket.lower_bound:,.0f}{upper}")


if __name__ == "__main__":
    cli()
