"""Custom exceptions for taxestimate."""

from __future__ import annotations

from typing import Any


class TaxEstimateError(Exception):
    """Base exception for taxestimate."""


class ConfigError(TaxEstimateError):
    """Invalid rate table or input configuration."""


class DocumentError(TaxEstimateError):
    """Extracted document payload does not match any known form."""


class UnknownFilingStatus(TaxEstimateError, KeyError):
    """Filing status cannot be resolved to a rate-table bucket."""

    def __init__(self, status: Any, detail: str | None = None) -> None:
        self.status = status
        message = detail or f"Unknown filing status: {status!r}"
        super().__init__(message)

    def __str__(self) -> str:
        # KeyError repr()s its argument; keep the plain message
        return str(self.args[0])
