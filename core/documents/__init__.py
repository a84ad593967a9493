"""
거래 문서 (세금계산서 / 매입 계산서)

문서 모델, 합계 계산, 생명주기 관리자.
"""

from core.documents.manager import (
    DeletionResult,
    DocumentError,
    DocumentLifecycleManager,
    DocumentNotFoundError,
    DocumentStateError,
    InvalidLineItemError,
    InvalidPaymentError,
    OverpaymentError,
)
from core.documents.models import Invoice, LineItem, Payment, PurchaseBill
from core.documents.numbering import DocumentNumberer
from core.documents.totals import DocumentTotals, compute_totals, compute_vat

__all__ = [
    "DocumentLifecycleManager",
    "DeletionResult",
    "Invoice",
    "PurchaseBill",
    "LineItem",
    "Payment",
    "DocumentNumberer",
    "DocumentTotals",
    "compute_totals",
    "compute_vat",
    # 예외
    "DocumentError",
    "DocumentNotFoundError",
    "InvalidPaymentError",
    "OverpaymentError",
    "DocumentStateError",
    "InvalidLineItemError",
]
