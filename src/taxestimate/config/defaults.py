"""Default configuration values for taxestimate."""

from __future__ import annotations

from taxestimate.config.schema import ReturnInput, Taxpayer
from taxestimate.taxes.filing_status import FilingStatus
from taxestimate.taxes.rate_table import DEFAULT_TAX_YEAR

__all__ = ["DEFAULT_TAX_YEAR", "default_return_input"]


def default_return_input() -> ReturnInput:
    """Sample single filer with one W-2 and one 1099-INT."""
    return ReturnInput(
        tax_year=DEFAULT_TAX_YEAR,
        filing_status=FilingStatus.SINGLE.value,
        taxpayer=Taxpayer(
            first_name="Jane",
            last_name="Doe",
            ssn="123-45-6789",
            address="1 Main St",
            city="Springfield",
            state="IL",
            zip_code="62701",
        ),
        documents=[
            {
                "data": {
                    "type": "W2",
                    "employerName": "Acme Corp",
                    "employeeName": "Jane Doe",
                    "wages": 60000,
                    "federalIncomeTaxWithheld": 7000,
                }
            },
            {
                "data": {
                    "type": "1099-INT",
                    "payerName": "First Savings Bank",
                    "recipientName": "Jane Doe",
                    "interestIncome": 500,
                }
            },
        ],
    )
