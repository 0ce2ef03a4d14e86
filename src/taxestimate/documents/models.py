"""Pydantic models for figures extracted from uploaded tax documents.

The document-understanding service returns one JSON object per upload,
``{"data": {"type": "W2", ...}}``, with camelCase keys. These models are the
contract for that payload; amounts are validated non-negative here so the
calculator can take them as given.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

from taxestimate.utils.exceptions import DocumentError

logger = logging.getLogger(__name__)


class _DocumentBase(BaseModel):
    model_config = ConfigDict(
        extra="ignore",
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class W2Document(_DocumentBase):
    """Form W-2, Wage and Tax Statement."""

    type: Literal["W2"] = "W2"
    employer_name: str = ""
    employee_name: str = ""
    wages: Decimal = Field(ge=0, description="Box 1")
    federal_income_tax_withheld: Decimal = Field(default=Decimal(0), ge=0, description="Box 2")


class Form1099NECDocument(_DocumentBase):
    """Form 1099-NEC, Nonemployee Compensation."""

    type: Literal["1099-NEC"] = "1099-NEC"
    payer_name: str = ""
    recipient_name: str = ""
    nonemployee_compensation: Decimal = Field(ge=0, description="Box 1")


class Form1099INTDocument(_DocumentBase):
    """Form 1099-INT, Interest Income."""

    type: Literal["1099-INT"] = "1099-INT"
    payer_name: str = ""
    recipient_name: str = ""
    interest_income: Decimal = Field(ge=0, description="Box 1")


TaxDocument = Annotated[
    W2Document | Form1099NECDocument | Form1099INTDocument,
    Field(discriminator="type"),
]


class ExtractedDocument(BaseModel):
    """Envelope the extraction service wraps each document in."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    data: TaxDocument


def parse_extraction(payload: Any, strict: bool = False) -> TaxDocument | None:
    """Validate one extraction result.

    Args:
        payload: Decoded extractor output, ``{"data": {...}}``, or ``None``
            when extraction failed.
        strict: Raise instead of skipping a payload that matches no form.

    Returns:
        The parsed document, or ``None`` if extraction failed or the payload
        was rejected.

    Raises:
        DocumentError: If ``strict`` and the payload is malformed.
    """
    if payload is None:
        return None
    try:
        return ExtractedDocument.model_validate(payload).data
    except ValidationError as exc:
        if strict:
            raise DocumentError(f"Unrecognized tax document: {exc}") from exc
        logger.warning("Skipping unrecognized tax document: %s", exc.errors(include_url=False))
        return None
