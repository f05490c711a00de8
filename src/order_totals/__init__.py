"""
Order Totals Package

Deterministic line-item pricing and tax calculation for sales documents.
Computes subtotal, discount, per-line tax, flat surcharges and grand total
with discount-before-tax ordering and half-up cent rounding.
"""

__version__ = "1.0.0"
