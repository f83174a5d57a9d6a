"""
Pricing engine - pure arithmetic over resolved line items.

Subtotal, service fee and total are computed exactly once per order and frozen
on the order record. Everything here is integer naira.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from apps.common.constants import SERVICE_FEE_BASE, SERVICE_FEE_BRACKET_SIZE, SERVICE_FEE_STEP
from apps.common.types import Naira

from .resolver import ResolvedLineItem


@dataclass(frozen=True)
class PricingSummary:
    sub_total: Naira
    service_fee: Naira
    total_amount: Naira

    def as_dict(self) -> dict[str, int]:
        return {
            'subTotal': self.sub_total,
            'serviceFee': self.service_fee,
            'totalAmount': self.total_amount,
        }


def calculate_service_fee(sub_total: Naira) -> Naira:
    """
    Flat base fee plus one step for every full bracket above the first.

    1..50000 -> 2500, 50001..100000 -> 3500, 100001..150000 -> 4500, ...
    An empty or zero-value cart pays nothing.
    """
    if sub_total <= 0:
        return 0
    return SERVICE_FEE_BASE + ((sub_total - 1) // SERVICE_FEE_BRACKET_SIZE) * SERVICE_FEE_STEP


def calculate_sub_total(items: Iterable[ResolvedLineItem]) -> Naira:
    return sum((item.line_total for item in items), 0)


def price(items: Iterable[ResolvedLineItem]) -> PricingSummary:
    """Price a list of resolved line items"""
    sub_total = calculate_sub_total(items)
    service_fee = calculate_service_fee(sub_total)
    return PricingSummary(
        sub_total=sub_total,
        service_fee=service_fee,
        total_amount=sub_total + service_fee,
    )
