"""Filing statuses and their rate-table buckets."""

from __future__ import annotations

from enum import Enum
from typing import assert_never

from taxestimate.utils.exceptions import UnknownFilingStatus


class FilingStatus(str, Enum):
    """IRS filing status, valued as submitted by the personal-information form."""

    SINGLE = "single"
    MARRIED_FILING_JOINTLY = "married-filing-jointly"
    MARRIED_FILING_SEPARATELY = "married-filing-separately"
    HEAD_OF_HOUSEHOLD = "head-of-household"
    QUALIFYING_WIDOW = "qualifying-widow"


class FilingBucket(str, Enum):
    """Key under which a rate table stores a deduction and bracket schedule."""

    SINGLE = "single"
    MARRIED_JOINT = "married-joint"
    MARRIED_SEPARATE = "married-separate"
    HEAD_OF_HOUSEHOLD = "head-of-household"


def bucket_for(status: FilingStatus) -> FilingBucket:
    """Map a filing status onto its rate-table bucket.

    A qualifying widow(er) files with the married-filing-jointly deduction
    and brackets for the two years after a spouse's death.
    """
    match status:
        case FilingStatus.SINGLE:
            return FilingBucket.SINGLE
        case FilingStatus.MARRIED_FILING_JOINTLY:
            return FilingBucket.MARRIED_JOINT
        case FilingStatus.MARRIED_FILING_SEPARATELY:
            return FilingBucket.MARRIED_SEPARATE
        case FilingStatus.HEAD_OF_HOUSEHOLD:
            return FilingBucket.HEAD_OF_HOUSEHOLD
        case FilingStatus.QUALIFYING_WIDOW:
            return FilingBucket.MARRIED_JOINT
        case _:
            assert_never(status)


def parse_filing_status(value: FilingStatus | str) -> FilingStatus:
    """Coerce a wire value (or enum member) to a FilingStatus.

    Raises:
        UnknownFilingStatus: If ``value`` is not one of the five statuses.
    """
    if isinstance(value, FilingStatus):
        return value
    try:
        return FilingStatus(value)
    except ValueError:
        raise UnknownFilingStatus(value) from None
