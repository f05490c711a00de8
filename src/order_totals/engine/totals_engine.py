"""
Totals Engine - line-item pricing and tax aggregation.

Order of operations per line:
1. raw = quantity × factor × unit price
2. discount = raw × discount% / 100
3. net = raw − discount
4. tax = net × tax% / 100 (the line's own rate, never a blended one)
5. excise and other fee are flat amounts added on top

Lines are summed in full float precision; every money field is rounded
to cents (half-up) once, when the Totals record is built.
"""
import logging
from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Optional, Union

from .models import (
    ComputeOptions,
    LineBreakdown,
    LineItem,
    OrderBreakdown,
    ResolvedLine,
    Totals,
)
from .rounding import round_money

logger = logging.getLogger(__name__)

LineInput = Union[LineItem, Mapping[str, Any]]


@dataclass(frozen=True)
class _LineAmounts:
    quantity: float
    raw: float
    discount: float
    net: float
    tax: float
    excise: float
    other_fee: float

    @property
    def total(self) -> float:
        return self.net + self.tax + self.excise + self.other_fee


def as_line_item(line: LineInput) -> LineItem:
    """Accept a LineItem or a plain mapping (e.g. decoded JSON)."""
    if isinstance(line, LineItem):
        return line
    return LineItem.from_dict(line)


def resolve_options(
    options: Optional[ComputeOptions] = None,
    include_line_level_calculations: Optional[bool] = None,
) -> ComputeOptions:
    """Merge the options object and the keyword shortcut; keyword wins."""
    options = options or ComputeOptions()
    if include_line_level_calculations is not None:
        options = ComputeOptions(
            include_line_level_calculations=bool(include_line_level_calculations)
        )
    return options


def _line_amounts(line: ResolvedLine, include_line_level: bool) -> _LineAmounts:
    raw = line.quantity * line.factor * line.unit_price

    if include_line_level:
        discount = raw * line.discount_percent / 100
        net = raw - discount
        tax = net * line.tax_percent / 100
        excise = line.excise_amount
        other_fee = line.other_fee_amount
    else:
        discount = 0.0
        net = raw
        tax = 0.0
        excise = 0.0
        other_fee = 0.0

    return _LineAmounts(
        quantity=line.quantity,
        raw=raw,
        discount=discount,
        net=net,
        tax=tax,
        excise=excise,
        other_fee=other_fee,
    )


def _build_totals(
    quantity: float,
    raw: float,
    discount: float,
    tax: float,
    excise: float,
    other_fee: float,
) -> Totals:
    net = raw - discount
    grand = net + tax + excise + other_fee
    return Totals(
        item_quantity_total=quantity,
        subtotal=round_money(raw),
        discount_total=round_money(discount),
        net_amount=round_money(net),
        tax_total=round_money(tax),
        excise_total=round_money(excise),
        other_fee_total=round_money(other_fee),
        grand_total=round_money(grand),
    )


def compute(
    lines: Optional[Iterable[LineInput]],
    options: Optional[ComputeOptions] = None,
    *,
    include_line_level_calculations: Optional[bool] = None,
) -> Totals:
    """
    Compute document totals from line items.

    Args:
        lines: LineItem objects or mappings; None is treated as empty
        options: ComputeOptions, defaults to line-level calculations on
        include_line_level_calculations: keyword shortcut overriding options

    Returns:
        A freshly built Totals record. Never raises for missing or
        malformed optional fields.
    """
    opts = resolve_options(options, include_line_level_calculations)
    if not lines:
        return Totals.zero()

    quantity = raw = discount = tax = excise = other_fee = 0
    count = 0
    for line in lines:
        amounts = _line_amounts(as_line_item(line).resolved(), opts.include_line_level_calculations)
        quantity += amounts.quantity
        raw += amounts.raw
        discount += amounts.discount
        tax += amounts.tax
        excise += amounts.excise
        other_fee += amounts.other_fee
        count += 1

    totals = _build_totals(quantity, raw, discount, tax, excise, other_fee)
    logger.debug(
        "computed totals lines=%d line_level=%s grand_total=%s",
        count, opts.include_line_level_calculations, totals.grand_total,
    )
    return totals


def compute_breakdown(
    lines: Optional[Iterable[LineInput]],
    options: Optional[ComputeOptions] = None,
    *,
    include_line_level_calculations: Optional[bool] = None,
) -> OrderBreakdown:
    """
    Compute totals together with per-line amounts and a trace.

    The aggregate totals are identical to ``compute`` for the same input;
    per-line values are rounded independently for display, so they may
    not sum to the totals to the cent.
    """
    opts = resolve_options(options, include_line_level_calculations)
    breakdown = OrderBreakdown(totals=Totals.zero(), options=opts)

    if not opts.include_line_level_calculations:
        breakdown.add_trace("Mode", "Line-level discount, tax and surcharges suppressed")

    quantity = raw = discount = tax = excise = other_fee = 0
    for index, line in enumerate(lines or []):
        item = as_line_item(line)
        amounts = _line_amounts(item.resolved(), opts.include_line_level_calculations)

        quantity += amounts.quantity
        raw += amounts.raw
        discount += amounts.discount
        tax += amounts.tax
        excise += amounts.excise
        other_fee += amounts.other_fee

        breakdown.lines.append(LineBreakdown(
            index=index,
            quantity=amounts.quantity,
            raw=round_money(amounts.raw),
            discount=round_money(amounts.discount),
            net=round_money(amounts.net),
            tax=round_money(amounts.tax),
            excise=round_money(amounts.excise),
            other_fee=round_money(amounts.other_fee),
            line_total=round_money(amounts.total),
            extra=dict(item.extra),
        ))
        breakdown.add_trace(
            f"Line {index + 1}",
            f"raw {amounts.raw:.4f} − discount {amounts.discount:.4f} + tax {amounts.tax:.4f}"
            f" + excise {amounts.excise:.4f} + fee {amounts.other_fee:.4f}",
            f"{amounts.total:.4f}",
        )

    if not breakdown.lines:
        breakdown.add_trace("Empty", "No lines supplied, all totals zero")
        return breakdown

    breakdown.totals = _build_totals(quantity, raw, discount, tax, excise, other_fee)
    breakdown.add_trace("Rounding", "Each total rounded to cents, half-up")
    breakdown.add_trace("Grand Total", "net + tax + excise + other fee", f"{breakdown.totals.grand_total:.2f}")
    return breakdown


class TotalsEngine:
    """
    Thin object wrapper around ``compute`` holding default options.

    Useful for call sites that are configured once (from Settings) and
    then invoked repeatedly.
    """

    def __init__(self, options: Optional[ComputeOptions] = None):
        self.options = options or ComputeOptions()

    def calculate(
        self,
        lines: Optional[Iterable[LineInput]],
        options: Optional[ComputeOptions] = None,
    ) -> Totals:
        return compute(lines, options or self.options)

    def calculate_breakdown(
        self,
        lines: Optional[Iterable[LineInput]],
        options: Optional[ComputeOptions] = None,
    ) -> OrderBreakdown:
        return compute_breakdown(lines, options or self.options)
