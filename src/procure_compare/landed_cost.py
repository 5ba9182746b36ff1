#!/usr/bin/env python3
"""
Landed cost calculation for quoted lines.
Uses the prices library for tax arithmetic so every vendor offer is reduced
to one comparable amount: goods value plus GST plus freight.
"""

import logging
from decimal import Decimal, ROUND_HALF_UP
from typing import Union

from prices import Money, flat_tax

logger = logging.getLogger(__name__)

Number = Union[Decimal, int, float, str]

CURRENCY_SYMBOLS = {
    'INR': '₹',
    'USD': '$',
    'EUR': '€',
    'GBP': '£',
}


def to_decimal(value: Number) -> Decimal:
    """Convert a number to Decimal without picking up float noise."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


def landed_cost(unit_price: Number, quantity: Number, gst_percent: Number = 18,
                freight: Number = 0, currency: str = 'INR') -> Decimal:
    """
    Landed cost = unit_price * quantity * (1 + gst_percent / 100) + freight.

    Inputs are not range-checked; callers reject negative prices,
    quantities, rates and freight before calling.
    """
    goods = Money(to_decimal(unit_price) * to_decimal(quantity), currency)
    taxed = flat_tax(goods, to_decimal(gst_percent) / Decimal(100))
    total = taxed.gross + Money(to_decimal(freight), currency)
    return total.amount


def format_currency(amount: Decimal, currency: str = 'INR') -> str:
    """Format an amount for display, e.g. ₹10,030.00."""
    symbol = CURRENCY_SYMBOLS.get(currency, f"{currency} ")
    rounded = to_decimal(amount).quantize(Decimal('0.01'), rounding=ROUND_HALF_UP)
    return f"{symbol}{rounded:,.2f}"
