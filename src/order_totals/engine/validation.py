"""
Opt-in sanity checks for line items.

The engine itself accepts anything and propagates it arithmetically.
Callers that want to refuse NaN/infinity, or surface suspicious values
such as negative quantities, run ``validate_lines`` first.
"""
import math
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, Optional

from .models import FIELD_ALIASES, LineItem, coerce_number
from .totals_engine import LineInput


class LineValidationError(ValueError):
    """Raised when strict validation rejects a set of line items."""

    def __init__(self, errors: list[str]):
        self.errors = list(errors)
        super().__init__("; ".join(self.errors) or "invalid line items")


@dataclass
class ValidationResult:
    """Result of line validation."""
    valid: bool = True
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def add_error(self, message: str):
        self.errors.append(message)
        self.valid = False

    def add_warning(self, message: str):
        self.warnings.append(message)

    def raise_for_errors(self):
        if self.errors:
            raise LineValidationError(self.errors)

    def to_dict(self) -> dict:
        return {"valid": self.valid, "errors": self.errors, "warnings": self.warnings}


def _raw_values(line: LineInput) -> dict[str, Any]:
    """Field name -> value as supplied, before any coercion."""
    if isinstance(line, LineItem):
        return {name: getattr(line, name) for name in FIELD_ALIASES}
    values = {}
    for name, aliases in FIELD_ALIASES.items():
        values[name] = None
        for alias in aliases:
            if isinstance(line, Mapping) and line.get(alias) is not None:
                values[name] = line[alias]
                break
    return values


def validate_line(line: LineInput, index: int = 0, result: Optional[ValidationResult] = None) -> ValidationResult:
    """Check a single line, appending findings to ``result``."""
    result = result if result is not None else ValidationResult()
    label = f"Line {index + 1}"
    values = {}

    for name, raw in _raw_values(line).items():
        if raw is None or (isinstance(raw, str) and not raw.strip()):
            continue
        number = coerce_number(raw)
        if number is None:
            result.add_error(f"{label}: {name} is not a number ({raw!r})")
            continue
        if not math.isfinite(number):
            result.add_error(f"{label}: {name} is not finite ({number})")
            continue
        values[name] = number

    if values.get('quantity', 0) < 0:
        result.add_warning(f"{label}: negative quantity {values['quantity']} (return or credit?)")
    if values.get('unit_price', 0) < 0:
        result.add_warning(f"{label}: negative unit price {values['unit_price']}")
    discount = values.get('discount_percent', 0)
    if discount < 0 or discount > 100:
        result.add_warning(f"{label}: discount percent {discount} outside 0-100")
    if values.get('tax_percent', 0) < 0:
        result.add_warning(f"{label}: negative tax percent {values['tax_percent']}")
    for name in ('excise_amount', 'other_fee_amount'):
        if values.get(name, 0) < 0:
            result.add_warning(f"{label}: negative {name} {values[name]}")

    return result


def validate_lines(lines: Optional[Iterable[LineInput]]) -> ValidationResult:
    """Validate every line; never raises, call ``raise_for_errors`` to enforce."""
    result = ValidationResult()
    for index, line in enumerate(lines or []):
        validate_line(line, index, result)
    return result
