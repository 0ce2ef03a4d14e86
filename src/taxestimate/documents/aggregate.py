"""Sum extracted document figures into calculator input."""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Iterable
from decimal import Decimal

from taxestimate.documents.models import (
    Form1099INTDocument,
    Form1099NECDocument,
    TaxDocument,
    W2Document,
)
from taxestimate.taxes.calculator import IncomeAggregate

logger = logging.getLogger(__name__)


def aggregate_documents(documents: Iterable[TaxDocument | None]) -> IncomeAggregate:
    """Total wages, withholding, 1099-NEC and 1099-INT income.

    ``None`` entries stand for uploads whose extraction failed; they add
    nothing to any total.
    """
    wages = Decimal(0)
    withheld = Decimal(0)
    nonemployee = Decimal(0)
    interest = Decimal(0)
    skipped = 0

    for doc in documents:
        if doc is None:
            skipped += 1
            continue
        if isinstance(doc, W2Document):
            wages += doc.wages
            withheld += doc.federal_income_tax_withheld
        elif isinstance(doc, Form1099NECDocument):
            nonemployee += doc.nonemployee_compensation
        elif isinstance(doc, Form1099INTDocument):
            interest += doc.interest_income

    if skipped:
        logger.warning("%d document(s) failed extraction and were not counted", skipped)
    logger.debug(
        "Aggregated wages=%s nec=%s interest=%s withheld=%s",
        wages,
        nonemployee,
        interest,
        withheld,
    )
    return IncomeAggregate(
        total_wages=wages,
        total_nonemployee_compensation=nonemployee,
        total_interest_income=interest,
        total_federal_income_tax_withheld=withheld,
    )


def count_by_type(documents: Iterable[TaxDocument | None]) -> dict[str, int]:
    """Count documents per form type; failed extractions count as ``"failed"``."""
    counts: Counter[str] = Counter()
    for doc in documents:
        counts["failed" if doc is None else doc.type] += 1
    return dict(counts)
