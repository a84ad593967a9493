"""
문서 합계 계산

품목 목록에서 과세/면세 금액, VAT, 총액을 계산.
"""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

from core.constants import Money
from core.documents.models import LineItem


@dataclass(frozen=True)
class DocumentTotals:
    """문서 합계"""

    sub_total: Decimal
    discount_total: Decimal
    taxable_amount: Decimal
    non_taxable_amount: Decimal
    vat_amount: Decimal
    total_amount: Decimal


def compute_vat(taxable_amount: Decimal, vat_rate: Decimal) -> Decimal:
    """VAT = 과세 금액 × 세율 (0.01 단위 반올림)"""
    return (taxable_amount * vat_rate).quantize(Money.QUANTUM, rounding=ROUND_HALF_UP)


def compute_totals(items: Iterable[LineItem], vat_rate: Decimal) -> DocumentTotals:
    """품목 목록에서 합계 계산

    품목이 없으면 모두 0 (제출 차단은 호출자 책임).

    Args:
        items: 품목 목록
        vat_rate: VAT 세율 (예: 0.13)

    Returns:
        DocumentTotals
    """
    sub_total = Money.ZERO
    discount_total = Money.ZERO
    taxable_amount = Money.ZERO
    non_taxable_amount = Money.ZERO

    for item in items:
        amount = item.amount
        sub_total += amount
        discount_total += item.discount
        if item.is_taxable:
            taxable_amount += amount
        else:
            non_taxable_amount += amount

    vat_amount = compute_vat(taxable_amount, vat_rate)

    return DocumentTotals(
        sub_total=sub_total,
        discount_total=discount_total,
        taxable_amount=taxable_amount,
        non_taxable_amount=non_taxable_amount,
        vat_amount=vat_amount,
        total_amount=taxable_amount + non_taxable_amount + vat_amount,
    )
