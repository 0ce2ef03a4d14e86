"""Serialization for return inputs and tax outcomes."""

from __future__ import annotations

import hashlib
import json
from typing import Any

import yaml
from pydantic import ValidationError

from taxestimate.config.schema import ReturnInput
from taxestimate.forms.form_1040 import Form1040Summary
from taxestimate.taxes.calculator import TaxOutcome
from taxestimate.utils.exceptions import ConfigError


def compute_input_hash(return_input: ReturnInput) -> str:
    """Compute a deterministic SHA-256 hash of a return input.

    Uses canonical JSON (sorted keys, no whitespace) so the same
    logical input always produces the same hash.
    """
    data = return_input.model_dump(mode="json", by_alias=True)
    canonical = json.dumps(data, sort_keys=True, separators=(",", ":"))
    return hashlib.sha256(canonical.encode()).hexdigest()


def dump_return_input(return_input: ReturnInput) -> str:
    """Serialize a return input to a JSON string in extractor (camelCase) form."""
    return json.dumps(return_input.model_dump(mode="json", by_alias=True), indent=2)


def load_return_input(text: str) -> ReturnInput:
    """Deserialize a return input from YAML or JSON text.

    Raises:
        ConfigError: If the text does not parse or fails validation.
    """
    try:
        data: Any = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Could not parse return input: {exc}") from exc
    try:
        return ReturnInput.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid return input: {exc}") from exc


def dump_outcome(
    outcome: TaxOutcome,
    form: Form1040Summary | None = None,
    input_hash: str | None = None,
) -> str:
    """Serialize a tax outcome to JSON.

    Money values are written as decimal strings at full precision; the
    optional Form 1040 section carries the cent-rounded figures.
    """
    data: dict[str, Any] = {"outcome": outcome.model_dump(mode="json")}
    if form is not None:
        data["form_1040"] = {line: str(amount) for line, _label, amount in form.lines()}
    if input_hash is not None:
        data["input_hash"] = input_hash
    return json.dumps(data, indent=2)
