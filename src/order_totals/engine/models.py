"""
Data models for the order totals engine.

Uses dataclasses for structured, type-safe data representation.
Optional numeric fields use ``None`` for "absent"; the engine resolves
them to their identity values in one place (``LineItem.resolved``).
"""
import math
from dataclasses import dataclass, field, asdict
from typing import Any, Mapping, Optional


# Python field name -> accepted mapping keys (snake_case first, then camelCase)
FIELD_ALIASES: dict[str, tuple[str, ...]] = {
    'quantity': ('quantity',),
    'unit_price': ('unit_price', 'unitPrice'),
    'factor': ('factor',),
    'discount_percent': ('discount_percent', 'discountPercent'),
    'tax_percent': ('tax_percent', 'taxPercent'),
    'excise_amount': ('excise_amount', 'exciseAmount'),
    'other_fee_amount': ('other_fee_amount', 'otherFeeAmount'),
}

# Identity value used when a field is absent
FIELD_DEFAULTS: dict[str, float] = {
    'quantity': 0.0,
    'unit_price': 0.0,
    'factor': 1.0,
    'discount_percent': 0.0,
    'tax_percent': 0.0,
    'excise_amount': 0.0,
    'other_fee_amount': 0.0,
}

_KNOWN_KEYS = {alias for aliases in FIELD_ALIASES.values() for alias in aliases}


def coerce_number(value: Any) -> Optional[float]:
    """
    Parse a loosely-typed numeric cell.

    Returns None for absent or malformed values. NaN and infinity are
    returned unchanged so they propagate into the totals.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            return float(text)
        except ValueError:
            return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


@dataclass(frozen=True)
class ResolvedLine:
    """A line item with every numeric field resolved to a concrete number."""
    quantity: float
    unit_price: float
    factor: float
    discount_percent: float
    tax_percent: float
    excise_amount: float
    other_fee_amount: float

    def as_key(self) -> tuple:
        return (
            self.quantity, self.unit_price, self.factor, self.discount_percent,
            self.tax_percent, self.excise_amount, self.other_fee_amount,
        )


@dataclass
class LineItem:
    """A single row of a sales document."""
    quantity: Optional[float] = None
    unit_price: Optional[float] = None
    factor: Optional[float] = None
    discount_percent: Optional[float] = None
    tax_percent: Optional[float] = None
    excise_amount: Optional[float] = None
    other_fee_amount: Optional[float] = None

    # Product code, description, warehouse, vendor... opaque to the engine
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'LineItem':
        """Build a LineItem from a mapping with snake_case or camelCase keys."""
        values = {}
        for name, aliases in FIELD_ALIASES.items():
            raw = None
            for alias in aliases:
                if data.get(alias) is not None:
                    raw = data[alias]
                    break
            values[name] = coerce_number(raw)

        extra = {k: v for k, v in data.items() if k not in _KNOWN_KEYS}
        return cls(extra=extra, **values)

    def resolved(self) -> ResolvedLine:
        """Replace every absent numeric field with its identity value."""
        values = {}
        for name, default in FIELD_DEFAULTS.items():
            value = coerce_number(getattr(self, name))
            values[name] = default if value is None else value
        return ResolvedLine(**values)

    def to_dict(self) -> dict:
        data = {name: getattr(self, name) for name in FIELD_ALIASES}
        data.update(self.extra)
        return data


@dataclass(frozen=True)
class ComputeOptions:
    """Configuration for a single engine invocation."""
    include_line_level_calculations: bool = True


@dataclass(frozen=True)
class Totals:
    """Aggregate totals for a document. Created fresh by every computation."""
    item_quantity_total: float = 0
    subtotal: float = 0.0
    discount_total: float = 0.0
    net_amount: float = 0.0
    tax_total: float = 0.0
    excise_total: float = 0.0
    other_fee_total: float = 0.0
    grand_total: float = 0.0

    @classmethod
    def zero(cls) -> 'Totals':
        return cls()

    @property
    def line_count(self) -> float:
        """Alias of item_quantity_total: units across lines, not row count."""
        return self.item_quantity_total

    def is_finite(self) -> bool:
        return all(math.isfinite(v) for v in asdict(self).values())

    def to_dict(self) -> dict:
        return asdict(self)

    def to_camel_dict(self) -> dict:
        """Payload shape used by the order-submission builder and the API."""
        return {
            "lineCount": self.item_quantity_total,
            "itemQuantityTotal": self.item_quantity_total,
            "subtotal": self.subtotal,
            "discountTotal": self.discount_total,
            "netAmount": self.net_amount,
            "taxTotal": self.tax_total,
            "exciseTotal": self.excise_total,
            "otherFeeTotal": self.other_fee_total,
            "grandTotal": self.grand_total,
        }


@dataclass
class TraceStep:
    """A single step in the computation trace."""
    step: str
    description: str
    value: Optional[str] = None


@dataclass(frozen=True)
class LineBreakdown:
    """Per-line amounts, each rounded for display."""
    index: int
    quantity: float
    raw: float
    discount: float
    net: float
    tax: float
    excise: float
    other_fee: float
    line_total: float
    extra: dict = field(default_factory=dict)

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class OrderBreakdown:
    """Totals plus the per-line amounts and trace that produced them."""
    totals: Totals
    lines: list[LineBreakdown] = field(default_factory=list)
    options: ComputeOptions = field(default_factory=ComputeOptions)
    trace: list[TraceStep] = field(default_factory=list)

    def add_trace(self, step: str, description: str, value: str = None):
        """Add a step to the breakdown trace."""
        self.trace.append(TraceStep(step=step, description=description, value=value))

    def get_trace_text(self) -> str:
        """Get human-readable trace as formatted text."""
        lines = []
        for t in self.trace:
            if t.value:
                lines.append(f"• {t.step}: {t.description} = {t.value}")
            else:
                lines.append(f"• {t.step}: {t.description}")
        return "\n".join(lines)

    def to_dict(self) -> dict:
        return {
            "totals": self.totals.to_camel_dict(),
            "lines": [line.to_dict() for line in self.lines],
            "includeLineLevelCalculations": self.options.include_line_level_calculations,
            "trace": [asdict(t) for t in self.trace],
        }
