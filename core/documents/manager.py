"""
문서 생명주기 관리자

세금계산서/매입 계산서의 생성, 삭제, 결제 적용을 처리하고
각 이벤트에 맞는 분개를 원장에 기록한다.

사용 예시:
```python
from core.documents import DocumentLifecycleManager, LineItem, Payment
from core.ledger import LedgerStore

manager = DocumentLifecycleManager(LedgerStore())

invoice = manager.create_invoice(
    items=[LineItem("Consulting", Decimal("1"), Decimal("1000"))],
    party_name="Himalayan Traders Pvt Ltd",
)
manager.apply_invoice_payment(invoice.id, Payment.create("600", "CASH"))

manager.balance_sheet().is_balanced  # True
```
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import date
from decimal import Decimal
from typing import Any, Iterable, TypeVar
from uuid import uuid4

from core.config.loader import Settings
from core.constants import Defaults, Money
from core.documents.models import Invoice, LineItem, Payment, PurchaseBill
from core.documents.numbering import DocumentNumberer
from core.documents.totals import compute_totals
from core.domain.state_machines import (
    DocumentStatus,
    InvoiceStateMachine,
    PaymentStatusMachine,
    PurchaseStateMachine,
)
from core.inventory import Product, ProductCatalog
from core.ledger.balance import BalanceRecomputation
from core.ledger.entry_builder import JournalEntry, JournalEntryBuilder, validate_entry
from core.ledger.statements import (
    BalanceSheet,
    DashboardStats,
    ProfitAndLoss,
    TaxSummary,
    generate_balance_sheet,
    generate_dashboard_stats,
    generate_profit_loss,
    generate_tax_summary,
    generate_trial_balance,
)
from core.ledger.store import LedgerStore, PurgeResult
from core.types import DocumentSource, InvoiceType, PaymentMethod

logger = logging.getLogger(__name__)

DocT = TypeVar("DocT", Invoice, PurchaseBill)


class DocumentError(Exception):
    """문서 처리 예외 기본 클래스"""

    pass


class DocumentNotFoundError(DocumentError):
    """존재하지 않는 문서 ID (상태 변경 없음)"""

    pass


class InvalidPaymentError(DocumentError):
    """결제 금액이 0 이하"""

    pass


class OverpaymentError(DocumentError):
    """잔액을 초과하는 결제"""

    pass


class DocumentStateError(DocumentError):
    """결제를 받을 수 없는 상태 (PAID, VOID, DRAFT)"""

    pass


class InvalidLineItemError(DocumentError):
    """품목 금액이 음수 (할인이 수량 × 단가 초과)"""

    pass


@dataclass(frozen=True)
class DeletionResult:
    """문서 삭제 결과"""

    document: Invoice | PurchaseBill
    purge: PurgeResult

    @property
    def removed_entry_count(self) -> int:
        return self.purge.removed_count


class DocumentLifecycleManager:
    """문서 생명주기 관리자

    문서/결제 기록을 단독 소유. 원장은 주입받으며
    원장 잠금(LedgerStore.transaction) 하나로 문서 변경 + 분개 기록을 묶는다.

    Args:
        ledger: 원장 (None이면 기본 계정과목표로 새로 생성)
        vat_rate: VAT 세율
        fiscal_year: 회계연도 (문서 번호에 사용)
        catalog: 온라인 스토어 상품 목록
        entry_builder: 분개 생성기
        numberer: 문서 번호 발급기
    """

    def __init__(
        self,
        ledger: LedgerStore | None = None,
        vat_rate: Decimal = Defaults.VAT_RATE,
        fiscal_year: str = Defaults.FISCAL_YEAR,
        catalog: ProductCatalog | None = None,
        entry_builder: JournalEntryBuilder | None = None,
        numberer: DocumentNumberer | None = None,
    ):
        self.ledger = ledger or LedgerStore()
        self.vat_rate = vat_rate
        self.fiscal_year = fiscal_year
        self.catalog = catalog or ProductCatalog()
        self.entry_builder = entry_builder or JournalEntryBuilder()
        self.numberer = numberer or DocumentNumberer(fiscal_year)

        self._invoices: dict[str, Invoice] = {}
        self._purchases: dict[str, PurchaseBill] = {}

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        ledger: LedgerStore | None = None,
        catalog: ProductCatalog | None = None,
    ) -> DocumentLifecycleManager:
        """설정(settings.yaml) 기반 생성"""
        return cls(
            ledger=ledger,
            vat_rate=settings.vat_rate,
            fiscal_year=settings.fiscal_year,
            catalog=catalog,
        )

    # =========================================================================
    # 매출 세금계산서
    # =========================================================================

    def create_invoice(
        self,
        items: Iterable[LineItem],
        party_name: str = "Cash Customer",
        party_id: str = "unknown",
        invoice_date: date | None = None,
        due_date: date | None = None,
        party_pan: str = "",
        party_address: str = "",
        source: DocumentSource = DocumentSource.MANUAL,
    ) -> Invoice:
        """세금계산서 발행

        합계 계산 → (스토어 주문이면 재고 차감) → 문서 저장 → 매출 분개 기록.
        번호는 분개 검증이 끝난 뒤에 발급한다.

        Returns:
            생성된 Invoice (status=SENT)

        Raises:
            InvalidLineItemError: 음수 금액 품목
        """
        items = _checked_items(items)
        totals = compute_totals(items, self.vat_rate)
        invoice_date = invoice_date or date.today()

        with self.ledger.transaction():
            draft = Invoice(
                id=f"INV-{_new_id()}",
                number="",
                date=invoice_date,
                due_date=due_date or invoice_date,
                party_id=party_id,
                party_name=party_name,
                party_pan=party_pan,
                party_address=party_address,
                items=items,
                sub_total=totals.sub_total,
                discount_total=totals.discount_total,
                taxable_amount=totals.taxable_amount,
                non_taxable_amount=totals.non_taxable_amount,
                vat_amount=totals.vat_amount,
                total_amount=totals.total_amount,
                paid_amount=Money.ZERO,
                due_amount=totals.total_amount,
                payments=(),
                status=DocumentStatus.SENT,
                fiscal_year=self.fiscal_year,
                invoice_type=(
                    InvoiceType.TAX_INVOICE if totals.vat_amount > 0
                    else InvoiceType.ABBREVIATED_INVOICE
                ),
                source=DocumentSource(source),
            )
            validate_entry(self.entry_builder.from_invoice(draft))

            invoice = replace(draft, number=self.numberer.next_invoice_number())
            entry = self.entry_builder.from_invoice(invoice)

            if invoice.source == DocumentSource.ONLINE_STORE:
                self._deduct_inventory(invoice)

            self._invoices[invoice.id] = invoice
            self.ledger.save_entry(entry)

        logger.info(
            f"Invoice created: {invoice.number} {invoice.party_name} "
            f"total={invoice.total_amount} vat={invoice.vat_amount}"
        )
        return invoice

    def delete_invoice(self, invoice_id: str) -> DeletionResult:
        """세금계산서 삭제

        문서와 연결된 모든 분개(발행 + 결제)를 삭제.
        스토어 주문으로 차감된 재고는 복원하지 않는다.

        Raises:
            DocumentNotFoundError: 없는 문서
        """
        with self.ledger.transaction():
            invoice = self._get(self._invoices, invoice_id, "Invoice")
            purge = self.ledger.remove_by_reference(invoice.id, invoice.number)
            del self._invoices[invoice.id]

        logger.info(
            f"Invoice deleted: {invoice.number} (purged {purge.removed_count} entries)"
        )
        return DeletionResult(document=invoice, purge=purge)

    def apply_invoice_payment(self, invoice_id: str, payment: Payment) -> Invoice:
        """세금계산서 대금 수령

        Raises:
            DocumentNotFoundError: 없는 문서
            InvalidPaymentError: 금액 <= 0
            DocumentStateError: 결제 불가 상태
            OverpaymentError: 잔액 초과
        """
        return self._apply_payment(
            self._invoices,
            invoice_id,
            payment,
            machine_cls=InvoiceStateMachine,
            build_entry=self.entry_builder.from_invoice_payment,
            label="Invoice",
        )

    def place_online_order(
        self,
        items: Iterable[LineItem],
        party_name: str,
        party_address: str = "",
        method: PaymentMethod = PaymentMethod.FONEPAY,
        order_date: date | None = None,
    ) -> Invoice:
        """온라인 스토어 주문

        스토어 세금계산서 발행(재고 차감) 후 즉시 전액 결제 처리.
        발행 분개와 결제 분개가 모두 기록된다.
        """
        with self.ledger.transaction():
            invoice = self.create_invoice(
                items=items,
                party_name=party_name,
                party_id="c-web-guest",
                invoice_date=order_date,
                party_address=party_address,
                source=DocumentSource.ONLINE_STORE,
            )
            if invoice.total_amount <= 0:
                return invoice

            payment = Payment.create(
                amount=invoice.total_amount,
                method=method,
                payment_date=invoice.date,
                reference="Online Payment",
            )
            return self.apply_invoice_payment(invoice.id, payment)

    def get_invoice(self, invoice_id: str) -> Invoice:
        return self._get(self._invoices, invoice_id, "Invoice")

    def list_invoices(self, status: DocumentStatus | None = None) -> list[Invoice]:
        """세금계산서 목록 (최신순)"""
        return _list(self._invoices, status)

    # =========================================================================
    # 매입 계산서
    # =========================================================================

    def create_purchase_bill(
        self,
        items: Iterable[LineItem],
        party_name: str,
        party_id: str = "unknown",
        number: str | None = None,
        bill_date: date | None = None,
        due_date: date | None = None,
        party_pan: str = "",
        party_address: str = "",
        expense_account_id: str | None = None,
    ) -> PurchaseBill:
        """매입 계산서 기록

        Args:
            number: 공급자 계산서 번호 (없으면 자동 발급)
            expense_account_id: 비용 계정 (없으면 매출원가)

        Returns:
            생성된 PurchaseBill (status=RECEIVED)

        Raises:
            InvalidLineItemError: 음수 금액 품목
            AccountNotFoundError: 없는 비용 계정
        """
        items = _checked_items(items)
        totals = compute_totals(items, self.vat_rate)
        bill_date = bill_date or date.today()

        if expense_account_id is not None:
            self.ledger.chart.get(expense_account_id)

        with self.ledger.transaction():
            draft = PurchaseBill(
                id=f"PUR-{_new_id()}",
                number=number or "",
                date=bill_date,
                due_date=due_date or bill_date,
                party_id=party_id,
                party_name=party_name,
                party_pan=party_pan,
                party_address=party_address,
                items=items,
                sub_total=totals.sub_total,
                discount_total=totals.discount_total,
                taxable_amount=totals.taxable_amount,
                non_taxable_amount=totals.non_taxable_amount,
                vat_amount=totals.vat_amount,
                total_amount=totals.total_amount,
                paid_amount=Money.ZERO,
                due_amount=totals.total_amount,
                payments=(),
                status=DocumentStatus.RECEIVED,
                fiscal_year=self.fiscal_year,
                expense_account_id=expense_account_id,
            )
            validate_entry(self.entry_builder.from_purchase(draft))

            bill = draft if number else replace(draft, number=self.numberer.next_bill_number())
            entry = self.entry_builder.from_purchase(bill)

            self._purchases[bill.id] = bill
            self.ledger.save_entry(entry)

        logger.info(
            f"Purchase bill recorded: {bill.number} {bill.party_name} "
            f"total={bill.total_amount} vat={bill.vat_amount}"
        )
        return bill

    def delete_purchase_bill(self, bill_id: str) -> DeletionResult:
        """매입 계산서 삭제

        Raises:
            DocumentNotFoundError: 없는 문서
        """
        with self.ledger.transaction():
            bill = self._get(self._purchases, bill_id, "Purchase bill")
            purge = self.ledger.remove_by_reference(bill.id, bill.number)
            del self._purchases[bill.id]

        logger.info(
            f"Purchase bill deleted: {bill.number} (purged {purge.removed_count} entries)"
        )
        return DeletionResult(document=bill, purge=purge)

    def apply_purchase_payment(self, bill_id: str, payment: Payment) -> PurchaseBill:
        """매입 계산서 대금 지급

        Raises:
            DocumentNotFoundError: 없는 문서
            InvalidPaymentError: 금액 <= 0
            DocumentStateError: 결제 불가 상태
            OverpaymentError: 잔액 초과
        """
        return self._apply_payment(
            self._purchases,
            bill_id,
            payment,
            machine_cls=PurchaseStateMachine,
            build_entry=self.entry_builder.from_purchase_payment,
            label="Purchase bill",
        )

    def get_purchase_bill(self, bill_id: str) -> PurchaseBill:
        return self._get(self._purchases, bill_id, "Purchase bill")

    def list_purchase_bills(self, status: DocumentStatus | None = None) -> list[PurchaseBill]:
        """매입 계산서 목록 (최신순)"""
        return _list(self._purchases, status)

    # =========================================================================
    # 원장 / 재무제표
    # =========================================================================

    def recompute_balances(self) -> BalanceRecomputation:
        """전체 잔액 재계산"""
        return self.ledger.recompute()

    def profit_and_loss(self) -> ProfitAndLoss:
        return generate_profit_loss(self.ledger.get_accounts())

    def balance_sheet(self) -> BalanceSheet:
        accounts = self.ledger.get_accounts()
        net_profit = generate_profit_loss(accounts).net_profit
        return generate_balance_sheet(accounts, net_profit)

    def trial_balance(self) -> list[dict[str, Any]]:
        return generate_trial_balance(self.ledger.get_accounts())

    def tax_summary(self) -> TaxSummary:
        return generate_tax_summary(self.ledger.get_accounts())

    def dashboard_stats(self) -> DashboardStats:
        return generate_dashboard_stats(self.ledger.get_accounts())

    # =========================================================================
    # 외부 저장소 연동
    # =========================================================================

    def export_state(self) -> dict[str, Any]:
        """전체 상태 → dict (저장 형식은 호출자가 결정)"""
        with self.ledger.transaction():
            return {
                "fiscal_year": self.fiscal_year,
                "vat_rate": str(self.vat_rate),
                "numbering": self.numberer.state(),
                "invoices": [inv.to_dict() for inv in self._invoices.values()],
                "purchases": [bill.to_dict() for bill in self._purchases.values()],
                "journal": self.ledger.to_records(),
                "products": [p.to_dict() for p in self.catalog.products()],
            }

    @classmethod
    def from_state(cls, state: dict[str, Any]) -> DocumentLifecycleManager:
        """export_state() 결과에서 복원

        분개 로그는 균형 검증 후 복원되며 잔액은 로그에서 다시 계산된다.
        """
        fiscal_year = state.get("fiscal_year", Defaults.FISCAL_YEAR)
        numbering = state.get("numbering", {})

        manager = cls(
            ledger=LedgerStore.from_records(state.get("journal", [])),
            vat_rate=Decimal(str(state.get("vat_rate", Defaults.VAT_RATE))),
            fiscal_year=fiscal_year,
            catalog=ProductCatalog(Product.from_dict(p) for p in state.get("products", [])),
            numberer=DocumentNumberer(
                fiscal_year,
                invoice_seq=int(numbering.get("invoice_seq", 0)),
                bill_seq=int(numbering.get("bill_seq", 0)),
            ),
        )
        for data in state.get("invoices", []):
            invoice = Invoice.from_dict(data)
            manager._invoices[invoice.id] = invoice
        for data in state.get("purchases", []):
            bill = PurchaseBill.from_dict(data)
            manager._purchases[bill.id] = bill
        return manager

    # =========================================================================
    # 내부
    # =========================================================================

    def _apply_payment(
        self,
        documents: dict[str, DocT],
        document_id: str,
        payment: Payment,
        machine_cls: type[PaymentStatusMachine],
        build_entry: Any,
        label: str,
    ) -> DocT:
        """결제 적용 공통 처리

        모든 검증과 분개 생성을 먼저 수행하고, 성공한 경우에만
        문서 교체 + 분개 기록. 실패 시 상태 변경 없음.
        """
        if payment.amount <= 0:
            raise InvalidPaymentError(
                f"Payment amount must be positive: {payment.amount}"
            )

        with self.ledger.transaction():
            document = self._get(documents, document_id, label)

            machine = machine_cls(document.status)
            if not machine.accepts_payment:
                raise DocumentStateError(
                    f"{label} {document.number} cannot accept payments in status "
                    f"{document.status.value}"
                )

            if payment.amount > document.due_amount:
                raise OverpaymentError(
                    f"Payment {payment.amount} exceeds due amount "
                    f"{document.due_amount} of {label.lower()} {document.number}"
                )

            payments = (*document.payments, payment)
            paid_amount = sum((p.amount for p in payments), Decimal("0"))
            raw_due = document.total_amount - paid_amount
            new_status = DocumentStatus(machine.apply_due_amount(raw_due))

            updated = replace(
                document,
                payments=payments,
                paid_amount=paid_amount,
                due_amount=max(Money.ZERO, raw_due),
                status=new_status,
            )
            entry: JournalEntry = build_entry(payment, updated)
            validate_entry(entry)

            self.ledger.save_entry(entry)
            documents[updated.id] = updated

        logger.info(
            f"Payment applied: {label} {updated.number} amount={payment.amount} "
            f"method={payment.method.value} due={updated.due_amount} status={updated.status.value}"
        )
        return updated

    def _deduct_inventory(self, invoice: Invoice) -> None:
        """스토어 주문 재고 차감 (0 하한)"""
        quantities: dict[str, Decimal] = {}
        for item in invoice.items:
            if item.product_id:
                quantities[item.product_id] = quantities.get(item.product_id, Decimal("0")) + item.quantity
        if quantities:
            updated = self.catalog.decrement_stock(quantities)
            logger.info(f"Stock deducted for {invoice.number}: {updated}")

    @staticmethod
    def _get(documents: dict[str, DocT], document_id: str, label: str) -> DocT:
        document = documents.get(document_id)
        if document is None:
            raise DocumentNotFoundError(f"{label} not found: {document_id}")
        return document


def _new_id() -> str:
    return uuid4().hex[:12].upper()


def _list(documents: dict[str, DocT], status: DocumentStatus | None) -> list[DocT]:
    items = list(documents.values())
    items.reverse()
    if status is not None:
        items = [d for d in items if d.status == status]
    return items


def _checked_items(items: Iterable[LineItem]) -> tuple[LineItem, ...]:
    """품목 금액 검증 (음수 금액 품목 거부)

    Raises:
        InvalidLineItemError: 할인이 수량 × 단가를 초과하는 품목
    """
    items = tuple(items)
    for item in items:
        if item.amount < 0:
            raise InvalidLineItemError(
                f"Line item '{item.description}' has negative amount {item.amount} "
                f"(quantity={item.quantity} rate={item.rate} discount={item.discount})"
            )
    return items
