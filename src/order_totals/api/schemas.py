"""
Pydantic request/response models for the totals API.
"""
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..engine.models import LineItem


class LineItemIn(BaseModel):
    """A document line. Accepts camelCase or snake_case; extra keys pass through."""
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    quantity: Optional[float] = None
    unit_price: Optional[float] = Field(default=None, alias="unitPrice")
    factor: Optional[float] = None
    discount_percent: Optional[float] = Field(default=None, alias="discountPercent")
    tax_percent: Optional[float] = Field(default=None, alias="taxPercent")
    excise_amount: Optional[float] = Field(default=None, alias="exciseAmount")
    other_fee_amount: Optional[float] = Field(default=None, alias="otherFeeAmount")

    def to_line_item(self) -> LineItem:
        return LineItem(
            quantity=self.quantity,
            unit_price=self.unit_price,
            factor=self.factor,
            discount_percent=self.discount_percent,
            tax_percent=self.tax_percent,
            excise_amount=self.excise_amount,
            other_fee_amount=self.other_fee_amount,
            extra=dict(self.model_extra or {}),
        )


class CalcRequest(BaseModel):
    """Request model for a totals calculation."""
    model_config = ConfigDict(populate_by_name=True)

    lines: Optional[List[LineItemIn]] = None
    include_line_level_calculations: Optional[bool] = Field(
        default=None, alias="includeLineLevelCalculations"
    )
    strict: bool = False

    def to_line_items(self) -> List[LineItem]:
        return [line.to_line_item() for line in (self.lines or [])]


class ValidateRequest(BaseModel):
    """Lines for /validate, kept as submitted so bad values can be reported."""

    lines: Optional[List[Dict[str, Any]]] = None


class TotalsResponse(BaseModel):
    """Response model for computed totals."""
    lineCount: float
    itemQuantityTotal: float
    subtotal: float
    discountTotal: float
    netAmount: float
    taxTotal: float
    exciseTotal: float
    otherFeeTotal: float
    grandTotal: float


class ValidationResponse(BaseModel):
    """Response model for line validation."""
    valid: bool
    errors: List[str] = []
    warnings: List[str] = []


class BreakdownResponse(BaseModel):
    """Response model for totals with per-line amounts."""
    totals: TotalsResponse
    lines: List[Dict[str, Any]]
    includeLineLevelCalculations: bool
    trace: List[Dict[str, Any]]
