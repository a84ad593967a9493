"""
거래 문서 도메인 모델

매출 세금계산서(Invoice), 매입 계산서(PurchaseBill), 결제(Payment).
모든 금액은 Decimal.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Any
from uuid import uuid4

from core.constants import Money
from core.domain.state_machines import DocumentStatus
from core.types import DocumentSource, InvoiceType, PaymentMethod


def to_decimal(value: Any) -> Decimal:
    """숫자/문자열 → Decimal (float는 str 경유)"""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


@dataclass(frozen=True)
class LineItem:
    """문서 품목

    amount = quantity × rate − discount
    """

    description: str
    quantity: Decimal
    rate: Decimal
    discount: Decimal = Decimal("0")
    is_taxable: bool = True
    product_id: str | None = None  # 온라인 스토어 상품 ID
    id: str = field(default_factory=lambda: f"ITM-{uuid4().hex[:12]}")

    @property
    def amount(self) -> Decimal:
        return (self.quantity * self.rate - self.discount).quantize(Money.QUANTUM)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "description": self.description,
            "quantity": str(self.quantity),
            "rate": str(self.rate),
            "discount": str(self.discount),
            "amount": str(self.amount),
            "is_taxable": self.is_taxable,
            "product_id": self.product_id,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> LineItem:
        return cls(
            id=data["id"],
            description=data["description"],
            quantity=to_decimal(data["quantity"]),
            rate=to_decimal(data["rate"]),
            discount=to_decimal(data.get("discount", "0")),
            is_taxable=bool(data.get("is_taxable", True)),
            product_id=data.get("product_id"),
        )


@dataclass(frozen=True)
class Payment:
    """결제 (수령/지급)

    생성 후 불변. 개별 삭제 불가 (문서 전체 삭제만 가능).
    """

    id: str
    date: date
    amount: Decimal
    method: PaymentMethod
    reference: str = ""
    note: str | None = None

    @classmethod
    def create(
        cls,
        amount: Decimal | int | str,
        method: PaymentMethod | str = PaymentMethod.CASH,
        payment_date: date | None = None,
        reference: str = "",
        note: str | None = None,
    ) -> Payment:
        """새 결제 생성 (ID 자동 발급)"""
        return cls(
            id=f"PAY-{uuid4().hex[:12]}",
            date=payment_date or date.today(),
            amount=to_decimal(amount),
            method=PaymentMethod(method),
            reference=reference,
            note=note,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "date": self.date.isoformat(),
            "amount": str(self.amount),
            "method": self.method.value,
            "reference": self.reference,
            "note": self.note,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Payment:
        return cls(
            id=data["id"],
            date=date.fromisoformat(data["date"]),
            amount=to_decimal(data["amount"]),
            method=PaymentMethod(data["method"]),
            reference=data.get("reference", ""),
            note=data.get("note"),
        )


@dataclass(frozen=True)
class Document:
    """매출/매입 문서 공통 필드

    불변식:
    - total_amount == taxable_amount + non_taxable_amount + vat_amount
    - paid_amount == sum(payments.amount)
    - due_amount == max(0, total_amount - paid_amount)
    """

    id: str
    number: str
    date: date
    due_date: date
    party_id: str
    party_name: str
    items: tuple[LineItem, ...]
    sub_total: Decimal
    discount_total: Decimal
    taxable_amount: Decimal
    non_taxable_amount: Decimal
    vat_amount: Decimal
    total_amount: Decimal
    paid_amount: Decimal
    due_amount: Decimal
    payments: tuple[Payment, ...]
    status: DocumentStatus
    fiscal_year: str
    party_pan: str = ""
    party_address: str = ""

    def _base_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "number": self.number,
            "date": self.date.isoformat(),
            "due_date": self.due_date.isoformat(),
            "party_id": self.party_id,
            "party_name": self.party_name,
            "party_pan": self.party_pan,
            "party_address": self.party_address,
            "items": [item.to_dict() for item in self.items],
            "sub_total": str(self.sub_total),
            "discount_total": str(self.discount_total),
            "taxable_amount": str(self.taxable_amount),
            "non_taxable_amount": str(self.non_taxable_amount),
            "vat_amount": str(self.vat_amount),
            "total_amount": str(self.total_amount),
            "paid_amount": str(self.paid_amount),
            "due_amount": str(self.due_amount),
            "payments": [p.to_dict() for p in self.payments],
            "status": self.status.value,
            "fiscal_year": self.fiscal_year,
        }

    @staticmethod
    def _base_kwargs(data: dict[str, Any]) -> dict[str, Any]:
        return {
            "id": data["id"],
            "number": data["number"],
            "date": date.fromisoformat(data["date"]),
            "due_date": date.fromisoformat(data["due_date"]),
            "party_id": data["party_id"],
            "party_name": data["party_name"],
            "party_pan": data.get("party_pan", ""),
            "party_address": data.get("party_address", ""),
            "items": tuple(LineItem.from_dict(i) for i in data.get("items", [])),
            "sub_total": to_decimal(data["sub_total"]),
            "discount_total": to_decimal(data.get("discount_total", "0")),
            "taxable_amount": to_decimal(data["taxable_amount"]),
            "non_taxable_amount": to_decimal(data["non_taxable_amount"]),
            "vat_amount": to_decimal(data["vat_amount"]),
            "total_amount": to_decimal(data["total_amount"]),
            "paid_amount": to_decimal(data["paid_amount"]),
            "due_amount": to_decimal(data["due_amount"]),
            "payments": tuple(Payment.from_dict(p) for p in data.get("payments", [])),
            "status": DocumentStatus(data["status"]),
            "fiscal_year": data["fiscal_year"],
        }


@dataclass(frozen=True)
class Invoice(Document):
    """매출 세금계산서"""

    invoice_type: InvoiceType = InvoiceType.TAX_INVOICE
    source: DocumentSource = DocumentSource.MANUAL

    def to_dict(self) -> dict[str, Any]:
        data = self._base_dict()
        data["invoice_type"] = self.invoice_type.value
        data["source"] = self.source.value
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Invoice:
        return cls(
            **cls._base_kwargs(data),
            invoice_type=InvoiceType(data.get("invoice_type", InvoiceType.TAX_INVOICE.value)),
            source=DocumentSource(data.get("source", DocumentSource.MANUAL.value)),
        )


@dataclass(frozen=True)
class PurchaseBill(Document):
    """매입 계산서

    VAT는 비용이 아닌 매입 세액공제(VAT Receivable)로 기록.
    """

    expense_account_id: str | None = None  # None이면 매출원가(5001)

    def to_dict(self) -> dict[str, Any]:
        data = self._base_dict()
        data["expense_account_id"] = self.expense_account_id
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PurchaseBill:
        return cls(
            **cls._base_kwargs(data),
            expense_account_id=data.get("expense_account_id"),
        )
