"""Pydantic v2 input models for taxestimate."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from taxestimate.documents.models import TaxDocument, parse_extraction
from taxestimate.taxes.rate_table import DEFAULT_TAX_YEAR


class Taxpayer(BaseModel):
    """Personal details from the personal-information form.

    Carried through to the Form 1040 header as entered; not validated here.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    first_name: str = ""
    last_name: str = ""
    ssn: str = ""
    date_of_birth: str = ""
    address: str = ""
    city: str = ""
    state: str = ""
    zip_code: str = ""
    occupation: str = ""

    @property
    def full_name(self) -> str:
        return " ".join(part for part in (self.first_name, self.last_name) if part)

    @property
    def masked_ssn(self) -> str:
        """SSN with all but the last four digits hidden."""
        digits = "".join(ch for ch in self.ssn if ch.isdigit())
        if not digits:
            return ""
        return f"***-**-{digits[-4:]}"

    @property
    def city_state_zip(self) -> str:
        locality = ", ".join(part for part in (self.city, self.state) if part)
        return " ".join(part for part in (locality, self.zip_code) if part)


class ReturnInput(BaseModel):
    """A taxpayer's filing status plus the extraction results for their uploads."""

    model_config = ConfigDict(extra="forbid")

    tax_year: int = Field(default=DEFAULT_TAX_YEAR, ge=1913)
    filing_status: str = Field(
        description="Filing status wire value, e.g. 'single' or 'married-filing-jointly'",
    )
    taxpayer: Taxpayer | None = Field(
        default=None,
        description="Name, SSN and address for the Form 1040 header",
    )
    documents: list[Any] = Field(
        default_factory=list,
        description="Raw extractor payloads, one per upload; null where extraction failed",
    )

    def tax_documents(self, strict: bool = False) -> list[TaxDocument | None]:
        """Parse each payload, keeping ``None`` for failed or rejected extractions.

        Raises:
            DocumentError: If ``strict`` and a payload matches no known form.
        """
        return [parse_extraction(payload, strict=strict) for payload in self.documents]
