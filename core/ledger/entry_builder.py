"""
분개 생성기

업무 이벤트(세금계산서 발행, 대금 수령, 매입 기록, 대금 지급)를
복식부기 분개로 변환
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING, Any

from core.ledger.errors import InvalidJournalLineError, UnbalancedEntryError
from core.ledger.types import SystemAccounts, TransactionType
from core.types import PAYMENT_METHOD_BUCKETS, PaymentMethod, SettlementBucket

if TYPE_CHECKING:
    from core.documents.models import Invoice, Payment, PurchaseBill

logger = logging.getLogger(__name__)

# 결제 분개의 reference 기본값 (결제 참조번호가 없을 때)
PAYMENT_RECEIVED_MARKER = "PAYMENT"
PAYMENT_MADE_MARKER = "PAYOUT"


@dataclass(frozen=True)
class JournalLine:
    """분개 항목

    관례상 debit/credit 중 하나만 0이 아님.
    """

    account_id: str
    debit: Decimal = Decimal("0")
    credit: Decimal = Decimal("0")
    memo: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "account_id": self.account_id,
            "debit": str(self.debit),
            "credit": str(self.credit),
            "memo": self.memo,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> JournalLine:
        return cls(
            account_id=data["account_id"],
            debit=Decimal(str(data.get("debit", "0"))),
            credit=Decimal(str(data.get("credit", "0"))),
            memo=data.get("memo"),
        )


@dataclass(frozen=True)
class JournalEntry:
    """분개

    하나의 업무 이벤트에 대한 복식부기 기록.
    차변 합계 = 대변 합계 (균형). 로그에 기록된 후 수정 불가.
    """

    entry_id: str
    date: date
    reference: str
    description: str
    lines: tuple[JournalLine, ...]
    transaction_type: str = TransactionType.JOURNAL.value

    # 연관 문서 (문서 삭제 시 분개 정리용)
    related_document_id: str | None = None
    related_payment_id: str | None = None

    @property
    def total_debit(self) -> Decimal:
        return sum((line.debit for line in self.lines), Decimal("0"))

    @property
    def total_credit(self) -> Decimal:
        return sum((line.credit for line in self.lines), Decimal("0"))

    def is_balanced(self) -> bool:
        """균형 검증

        Decimal 금액이므로 정확히 일치해야 함.

        Returns:
            True if sum(debit) == sum(credit)
        """
        return self.total_debit == self.total_credit

    def to_dict(self) -> dict[str, Any]:
        return {
            "entry_id": self.entry_id,
            "date": self.date.isoformat(),
            "reference": self.reference,
            "description": self.description,
            "transaction_type": self.transaction_type,
            "related_document_id": self.related_document_id,
            "related_payment_id": self.related_payment_id,
            "lines": [line.to_dict() for line in self.lines],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> JournalEntry:
        return cls(
            entry_id=data["entry_id"],
            date=date.fromisoformat(data["date"]),
            reference=data["reference"],
            description=data.get("description", ""),
            lines=tuple(JournalLine.from_dict(line) for line in data["lines"]),
            transaction_type=data.get("transaction_type", TransactionType.JOURNAL.value),
            related_document_id=data.get("related_document_id"),
            related_payment_id=data.get("related_payment_id"),
        )


def validate_entry(entry: JournalEntry) -> None:
    """분개 검증

    생성기는 같은 합계로 양변을 만들기 때문에 정상이라면 항상 통과한다.
    실패는 분개 생성 로직의 버그.

    Raises:
        InvalidJournalLineError: 음수 금액 또는 항목 없음
        UnbalancedEntryError: 차변 합계 != 대변 합계
    """
    if not entry.lines:
        raise InvalidJournalLineError(f"Entry has no lines: {entry.entry_id}")

    for line in entry.lines:
        if line.debit < 0 or line.credit < 0:
            raise InvalidJournalLineError(
                f"Negative amount in entry {entry.entry_id}: "
                f"account={line.account_id} debit={line.debit} credit={line.credit}"
            )

    if not entry.is_balanced():
        raise UnbalancedEntryError(
            f"Unbalanced entry: {entry.entry_id} "
            f"(debit={entry.total_debit}, credit={entry.total_credit})"
        )


def settlement_account_for(method: PaymentMethod | str) -> str:
    """결제 수단 → 정산 계정

    CASH → 현금(1001), 이체/수표/전자지갑 → 은행(1002)
    """
    bucket = PAYMENT_METHOD_BUCKETS[PaymentMethod(method)]
    if bucket == SettlementBucket.CASH:
        return SystemAccounts.CASH
    return SystemAccounts.BANK


class JournalEntryBuilder:
    """업무 이벤트를 분개로 변환

    모든 메서드는 순수 함수 (저장소 접근 없음, 같은 입력 → 같은 분개).

    Args:
        default_expense_account_id: 매입 비용 기본 계정 (매출원가)
    """

    def __init__(self, default_expense_account_id: str = SystemAccounts.COST_OF_GOODS_SOLD):
        self.default_expense_account_id = default_expense_account_id

    def from_invoice(self, invoice: Invoice) -> JournalEntry:
        """세금계산서 발행 → 분개

        차변: 매출채권 (총액)
        대변: 매출 (과세 + 면세), 부가세 예수금 (VAT)
        """
        sales_revenue = invoice.taxable_amount + invoice.non_taxable_amount

        return JournalEntry(
            entry_id=f"JE-INV-{invoice.id}",
            date=invoice.date,
            reference=invoice.number,
            description=f"Sales Invoice #{invoice.number} - {invoice.party_name}",
            transaction_type=TransactionType.SALES.value,
            related_document_id=invoice.id,
            lines=(
                JournalLine(SystemAccounts.ACCOUNTS_RECEIVABLE, debit=invoice.total_amount),
                JournalLine(SystemAccounts.SALES_REVENUE, credit=sales_revenue),
                JournalLine(SystemAccounts.VAT_PAYABLE, credit=invoice.vat_amount),
            ),
        )

    def from_invoice_payment(self, payment: Payment, invoice: Invoice) -> JournalEntry:
        """대금 수령 → 분개

        차변: 현금/은행 (결제 수단별)
        대변: 매출채권
        """
        return JournalEntry(
            entry_id=f"JE-PAY-{payment.id}",
            date=payment.date,
            reference=payment.reference or PAYMENT_RECEIVED_MARKER,
            description=f"Payment Received for {invoice.number}",
            transaction_type=TransactionType.PAYMENT_RECEIVED.value,
            related_document_id=invoice.id,
            related_payment_id=payment.id,
            lines=(
                JournalLine(settlement_account_for(payment.method), debit=payment.amount),
                JournalLine(SystemAccounts.ACCOUNTS_RECEIVABLE, credit=payment.amount),
            ),
        )

    def from_purchase(self, bill: PurchaseBill) -> JournalEntry:
        """매입 계산서 기록 → 분개

        차변: 비용/재고 (과세 + 면세), 매입 VAT (세액공제)
        대변: 매입채무 (총액)
        """
        expense_amount = bill.taxable_amount + bill.non_taxable_amount
        expense_account_id = bill.expense_account_id or self.default_expense_account_id

        return JournalEntry(
            entry_id=f"JE-PUR-{bill.id}",
            date=bill.date,
            reference=bill.number,
            description=f"Purchase Bill #{bill.number} - {bill.party_name}",
            transaction_type=TransactionType.PURCHASE.value,
            related_document_id=bill.id,
            lines=(
                JournalLine(expense_account_id, debit=expense_amount),
                JournalLine(SystemAccounts.VAT_RECEIVABLE, debit=bill.vat_amount),
                JournalLine(SystemAccounts.ACCOUNTS_PAYABLE, credit=bill.total_amount),
            ),
        )

    def from_purchase_payment(self, payment: Payment, bill: PurchaseBill) -> JournalEntry:
        """대금 지급 → 분개

        차변: 매입채무
        대변: 현금/은행 (결제 수단별)
        """
        return JournalEntry(
            entry_id=f"JE-PAYOUT-{payment.id}",
            date=payment.date,
            reference=payment.reference or PAYMENT_MADE_MARKER,
            description=f"Payment Made for Bill #{bill.number}",
            transaction_type=TransactionType.PAYMENT_MADE.value,
            related_document_id=bill.id,
            related_payment_id=payment.id,
            lines=(
                JournalLine(SystemAccounts.ACCOUNTS_PAYABLE, debit=payment.amount),
                JournalLine(settlement_account_for(payment.method), credit=payment.amount),
            ),
        )
