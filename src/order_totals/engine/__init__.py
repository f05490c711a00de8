"""Engine subpackage - line-item totals calculation."""
from .totals_engine import TotalsEngine, compute, compute_breakdown
from .models import ComputeOptions, LineItem, Totals, OrderBreakdown, LineBreakdown
from .calculator import TotalsCalculator
from .rounding import round_money
from .validation import LineValidationError, ValidationResult, validate_lines

__all__ = [
    'TotalsEngine', 'compute', 'compute_breakdown',
    'ComputeOptions', 'LineItem', 'Totals', 'OrderBreakdown', 'LineBreakdown',
    'TotalsCalculator', 'round_money',
    'LineValidationError', 'ValidationResult', 'validate_lines',
]
