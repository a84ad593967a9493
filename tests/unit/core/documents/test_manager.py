"""DocumentLifecycleManager 테스트

세금계산서/매입 계산서 생명주기와 원장 연동 시나리오
"""

import random
import threading
from datetime import date
from decimal import Decimal

import pytest

from core.documents.manager import (
    DocumentLifecycleManager,
    DocumentNotFoundError,
    DocumentStateError,
    InvalidLineItemError,
    InvalidPaymentError,
    OverpaymentError,
)
from core.documents.models import LineItem, Payment
from core.domain.state_machines import DocumentStatus
from core.ledger.balance import recompute_balances
from core.ledger.errors import AccountNotFoundError
from core.ledger.types import SystemAccounts
from core.types import DocumentSource, InvoiceType, PaymentMethod


class TestCreateInvoice:
    """세금계산서 발행 테스트"""

    def test_totals_and_posting(self, manager: DocumentLifecycleManager, consulting_item: LineItem) -> None:
        """1,000 과세 → VAT 130, 총액 1,130, AR +1,130"""
        invoice = manager.create_invoice([consulting_item], party_name="Himalayan Traders")

        assert invoice.vat_amount == Decimal("130")
        assert invoice.total_amount == Decimal("1130")
        assert invoice.due_amount == Decimal("1130")
        assert invoice.status == DocumentStatus.SENT
        assert invoice.invoice_type == InvoiceType.TAX_INVOICE
        assert invoice.number == "INV-2080-81-0001"

        ledger = manager.ledger
        assert ledger.get_account_balance(SystemAccounts.ACCOUNTS_RECEIVABLE) == Decimal("1130")
        assert ledger.get_account_balance(SystemAccounts.SALES_REVENUE) == Decimal("1000")
        assert ledger.get_account_balance(SystemAccounts.VAT_PAYABLE) == Decimal("130")
        assert len(ledger.get_entries_by_reference(invoice.number)) == 1

    def test_non_taxable_invoice_is_abbreviated(self, manager: DocumentLifecycleManager) -> None:
        invoice = manager.create_invoice([LineItem("Rice", Decimal("1"), Decimal("900"), is_taxable=False)])

        assert invoice.vat_amount == Decimal("0")
        assert invoice.invoice_type == InvoiceType.ABBREVIATED_INVOICE

    def test_dates_default(self, manager: DocumentLifecycleManager, consulting_item: LineItem) -> None:
        invoice = manager.create_invoice([consulting_item], invoice_date=date(2024, 1, 15))

        assert invoice.date == date(2024, 1, 15)
        assert invoice.due_date == date(2024, 1, 15)

    def test_list_newest_first(self, manager: DocumentLifecycleManager, consulting_item: LineItem) -> None:
        first = manager.create_invoice([consulting_item])
        second = manager.create_invoice([consulting_item])

        assert [inv.id for inv in manager.list_invoices()] == [second.id, first.id]
        assert manager.get_invoice(first.id) == first

    def test_discount_above_line_value_rejected(self, manager: DocumentLifecycleManager) -> None:
        """음수 금액 품목은 거부되고 번호도 소모되지 않음"""
        bad = LineItem("Tea", Decimal("1"), Decimal("10"), discount=Decimal("100"))

        with pytest.raises(InvalidLineItemError):
            manager.create_invoice([bad])

        assert manager.numberer.state() == {"invoice_seq": 0, "bill_seq": 0}
        assert manager.list_invoices() == []
        assert len(manager.ledger) == 0

        invoice = manager.create_invoice([LineItem("Tea", Decimal("1"), Decimal("10"))])
        assert invoice.number == "INV-2080-81-0001"

    def test_discount_equal_to_line_value_allowed(self, manager: DocumentLifecycleManager) -> None:
        free = LineItem("Sample", Decimal("2"), Decimal("50"), discount=Decimal("100"))
        invoice = manager.create_invoice([free, LineItem("Tea", Decimal("1"), Decimal("400"))])

        assert invoice.total_amount == Decimal("452")


class TestCreatePurchaseBill:
    """매입 계산서 기록 테스트"""

    def test_totals_and_posting(self, manager: DocumentLifecycleManager, supplies_item: LineItem) -> None:
        """500 매입 → 매입 VAT 65, 매입채무 565, 매출원가 500"""
        bill = manager.create_purchase_bill([supplies_item], party_name="Kathmandu Wholesale", number="KW-9")

        assert bill.number == "KW-9"
        assert bill.status == DocumentStatus.RECEIVED
        assert bill.vat_amount == Decimal("65")
        assert bill.total_amount == Decimal("565")

        ledger = manager.ledger
        assert ledger.get_account_balance(SystemAccounts.VAT_RECEIVABLE) == Decimal("65")
        assert ledger.get_account_balance(SystemAccounts.ACCOUNTS_PAYABLE) == Decimal("565")
        assert ledger.get_account_balance(SystemAccounts.COST_OF_GOODS_SOLD) == Decimal("500")

    def test_auto_number(self, manager: DocumentLifecycleManager, supplies_item: LineItem) -> None:
        bill = manager.create_purchase_bill([supplies_item], party_name="Supplier")
        assert bill.number == "BILL-0001"

    def test_expense_account(self, manager: DocumentLifecycleManager) -> None:
        manager.create_purchase_bill(
            [LineItem("Office rent", Decimal("1"), Decimal("20000"), is_taxable=False)],
            party_name="Landlord",
            expense_account_id="5002",
        )

        assert manager.ledger.get_account_balance("5002") == Decimal("20000")
        assert manager.ledger.get_account_balance("5001") == Decimal("0")

    def test_unknown_expense_account_rejected(self, manager: DocumentLifecycleManager, supplies_item: LineItem) -> None:
        with pytest.raises(AccountNotFoundError):
            manager.create_purchase_bill([supplies_item], party_name="X", expense_account_id="5999")

        assert manager.list_purchase_bills() == []
        assert len(manager.ledger) == 0

    def test_negative_line_rejected_without_spending_number(self, manager: DocumentLifecycleManager) -> None:
        bad = LineItem("Supplies", Decimal("2"), Decimal("5"), discount=Decimal("11"))

        with pytest.raises(InvalidLineItemError):
            manager.create_purchase_bill([bad], party_name="Supplier")

        assert manager.numberer.state()["bill_seq"] == 0
        assert len(manager.ledger) == 0


class TestInvoicePayment:
    """대금 수령 테스트"""

    def test_partial_then_full(self, manager: DocumentLifecycleManager, consulting_item: LineItem) -> None:
        invoice = manager.create_invoice([consulting_item])

        partial = manager.apply_invoice_payment(invoice.id, Payment.create("600", PaymentMethod.CASH))

        assert partial.status == DocumentStatus.PARTIAL
        assert partial.paid_amount == Decimal("600")
        assert partial.due_amount == Decimal("530")
        assert manager.ledger.get_account_balance(SystemAccounts.ACCOUNTS_RECEIVABLE) == Decimal("530")
        assert manager.ledger.get_account_balance(SystemAccounts.CASH) == Decimal("600")

        paid = manager.apply_invoice_payment(invoice.id, Payment.create("530", PaymentMethod.BANK_TRANSFER))

        assert paid.status == DocumentStatus.PAID
        assert paid.due_amount == Decimal("0")
        assert len(paid.payments) == 2
        assert manager.ledger.get_account_balance(SystemAccounts.ACCOUNTS_RECEIVABLE) == Decimal("0")
        assert manager.ledger.get_account_balance(SystemAccounts.BANK) == Decimal("530")

    def test_full_payment_restores_receivable(
        self, manager: DocumentLifecycleManager, consulting_item: LineItem
    ) -> None:
        """전액 수령 후 매출채권은 발행 전 값으로 복귀"""
        other = manager.create_invoice([LineItem("Other", Decimal("1"), Decimal("200"))])
        before = manager.ledger.get_account_balance(SystemAccounts.ACCOUNTS_RECEIVABLE)

        invoice = manager.create_invoice([consulting_item])
        manager.apply_invoice_payment(invoice.id, Payment.create(invoice.total_amount, PaymentMethod.ESEWA))

        assert manager.ledger.get_account_balance(SystemAccounts.ACCOUNTS_RECEIVABLE) == before
        assert manager.get_invoice(other.id).status == DocumentStatus.SENT

    def test_paid_within_tolerance(self, manager: DocumentLifecycleManager, consulting_item: LineItem) -> None:
        """잔액 0.5 이하는 완납"""
        invoice = manager.create_invoice([consulting_item])
        updated = manager.apply_invoice_payment(invoice.id, Payment.create("1129.50"))

        assert updated.status == DocumentStatus.PAID
        assert updated.due_amount == Decimal("0.50")

    def test_above_tolerance_is_partial(self, manager: DocumentLifecycleManager, consulting_item: LineItem) -> None:
        invoice = manager.create_invoice([consulting_item])
        updated = manager.apply_invoice_payment(invoice.id, Payment.create("1129.49"))

        assert updated.status == DocumentStatus.PARTIAL

    def test_unknown_document(self, manager: DocumentLifecycleManager) -> None:
        with pytest.raises(DocumentNotFoundError):
            manager.apply_invoice_payment("INV-NOPE", Payment.create("10"))

        assert len(manager.ledger) == 0

    @pytest.mark.parametrize("amount", ["0", "-5"])
    def test_non_positive_amount(
        self, manager: DocumentLifecycleManager, consulting_item: LineItem, amount: str
    ) -> None:
        invoice = manager.create_invoice([consulting_item])

        with pytest.raises(InvalidPaymentError):
            manager.apply_invoice_payment(invoice.id, Payment.create(amount))

        assert manager.get_invoice(invoice.id) == invoice
        assert len(manager.ledger) == 1

    def test_overpayment_rejected(self, manager: DocumentLifecycleManager, consulting_item: LineItem) -> None:
        invoice = manager.create_invoice([consulting_item])

        with pytest.raises(OverpaymentError):
            manager.apply_invoice_payment(invoice.id, Payment.create("1200"))

        assert manager.get_invoice(invoice.id).paid_amount == Decimal("0")
        assert len(manager.ledger) == 1

    @pytest.mark.parametrize("amount", ["1130.01", "1130.40", "1130.50"])
    def test_payment_above_due_rejected(
        self, manager: DocumentLifecycleManager, consulting_item: LineItem, amount: str
    ) -> None:
        """완납 허용 오차는 상태 판정에만 쓰이고 초과 결제를 허용하지 않음"""
        invoice = manager.create_invoice([consulting_item])

        with pytest.raises(OverpaymentError):
            manager.apply_invoice_payment(invoice.id, Payment.create(amount))

        assert manager.get_invoice(invoice.id) == invoice
        assert manager.ledger.get_account_balance(SystemAccounts.ACCOUNTS_RECEIVABLE) == Decimal("1130")

    def test_remaining_due_caps_later_payment(
        self, manager: DocumentLifecycleManager, consulting_item: LineItem
    ) -> None:
        invoice = manager.create_invoice([consulting_item])
        manager.apply_invoice_payment(invoice.id, Payment.create("600"))

        with pytest.raises(OverpaymentError):
            manager.apply_invoice_payment(invoice.id, Payment.create("530.20"))

        paid = manager.apply_invoice_payment(invoice.id, Payment.create("530"))
        assert paid.paid_amount == paid.total_amount
        assert manager.ledger.get_account_balance(SystemAccounts.ACCOUNTS_RECEIVABLE) == Decimal("0")

    def test_payment_on_paid_document_rejected(
        self, manager: DocumentLifecycleManager, consulting_item: LineItem
    ) -> None:
        invoice = manager.create_invoice([consulting_item])
        manager.apply_invoice_payment(invoice.id, Payment.create("1130"))

        with pytest.raises(DocumentStateError):
            manager.apply_invoice_payment(invoice.id, Payment.create("0.25"))

        assert len(manager.ledger) == 2

    def test_payment_reference_used(self, manager: DocumentLifecycleManager, consulting_item: LineItem) -> None:
        invoice = manager.create_invoice([consulting_item])
        payment = Payment.create("100", PaymentMethod.CHEQUE, reference="CHQ-0042")
        manager.apply_invoice_payment(invoice.id, payment)

        entry = manager.ledger.get_entry(f"JE-PAY-{payment.id}")
        assert entry is not None
        assert entry.reference == "CHQ-0042"
        assert entry.related_document_id == invoice.id


class TestPurchasePayment:
    """대금 지급 테스트"""

    def test_partial_and_full(self, manager: DocumentLifecycleManager, supplies_item: LineItem) -> None:
        bill = manager.create_purchase_bill([supplies_item], party_name="Supplier")

        partial = manager.apply_purchase_payment(bill.id, Payment.create("300", PaymentMethod.CASH))
        assert partial.status == DocumentStatus.PARTIAL
        assert manager.ledger.get_account_balance(SystemAccounts.ACCOUNTS_PAYABLE) == Decimal("265")
        assert manager.ledger.get_account_balance(SystemAccounts.CASH) == Decimal("-300")

        paid = manager.apply_purchase_payment(bill.id, Payment.create("265", PaymentMethod.KHALTI))
        assert paid.status == DocumentStatus.PAID
        assert manager.ledger.get_account_balance(SystemAccounts.ACCOUNTS_PAYABLE) == Decimal("0")
        assert manager.ledger.get_account_balance(SystemAccounts.BANK) == Decimal("-265")

    def test_unknown_bill(self, manager: DocumentLifecycleManager) -> None:
        with pytest.raises(DocumentNotFoundError):
            manager.apply_purchase_payment("PUR-NOPE", Payment.create("10"))


class TestDelete:
    """문서 삭제 테스트"""

    def test_delete_purges_only_related_postings(
        self, manager: DocumentLifecycleManager, consulting_item: LineItem, supplies_item: LineItem
    ) -> None:
        keep = manager.create_invoice([LineItem("Keep", Decimal("1"), Decimal("200"))])
        manager.apply_invoice_payment(keep.id, Payment.create("50"))
        bill = manager.create_purchase_bill([supplies_item], party_name="Supplier")

        target = manager.create_invoice([consulting_item])
        manager.apply_invoice_payment(target.id, Payment.create("600"))
        manager.apply_invoice_payment(target.id, Payment.create("100", PaymentMethod.FONEPAY))

        result = manager.delete_invoice(target.id)

        assert result.removed_entry_count == 3
        assert all(e.related_document_id != target.id for e in manager.ledger.entries())
        assert len(manager.ledger) == 3
        assert bill.id in {b.id for b in manager.list_purchase_bills()}

        ledger = manager.ledger
        assert ledger.get_account_balance(SystemAccounts.ACCOUNTS_RECEIVABLE) == Decimal("176")
        assert ledger.get_account_balance(SystemAccounts.CASH) == Decimal("50")
        assert ledger.get_account_balance(SystemAccounts.BANK) == Decimal("0")

        with pytest.raises(DocumentNotFoundError):
            manager.get_invoice(target.id)

    def test_delete_then_recreate_matches_fresh(self, consulting_item: LineItem) -> None:
        """삭제 후 잔액은 해당 문서가 없었던 경우와 동일"""
        with_delete = DocumentLifecycleManager()
        fresh = DocumentLifecycleManager()

        for m in (with_delete, fresh):
            m.create_invoice([LineItem("Base", Decimal("3"), Decimal("150"))])

        doomed = with_delete.create_invoice([consulting_item])
        with_delete.apply_invoice_payment(doomed.id, Payment.create("400"))
        with_delete.delete_invoice(doomed.id)

        assert with_delete.recompute_balances().balances == fresh.recompute_balances().balances

    def test_delete_purchase_bill(self, manager: DocumentLifecycleManager, supplies_item: LineItem) -> None:
        bill = manager.create_purchase_bill([supplies_item], party_name="Supplier")
        manager.apply_purchase_payment(bill.id, Payment.create("100"))

        result = manager.delete_purchase_bill(bill.id)

        assert result.removed_entry_count == 2
        assert len(manager.ledger) == 0
        assert manager.ledger.get_account_balance(SystemAccounts.VAT_RECEIVABLE) == Decimal("0")

    def test_delete_unknown(self, manager: DocumentLifecycleManager) -> None:
        with pytest.raises(DocumentNotFoundError):
            manager.delete_invoice("INV-NOPE")
        with pytest.raises(DocumentNotFoundError):
            manager.delete_purchase_bill("PUR-NOPE")

    def test_duplicate_supplier_numbers_kept_apart(
        self, manager: DocumentLifecycleManager, supplies_item: LineItem
    ) -> None:
        """공급자 계산서 번호가 같아도 삭제 대상 문서의 분개만 삭제"""
        first = manager.create_purchase_bill([supplies_item], party_name="Vendor A", number="001")
        second = manager.create_purchase_bill([supplies_item], party_name="Vendor B", number="001")

        result = manager.delete_purchase_bill(first.id)

        assert result.removed_entry_count == 1
        assert manager.ledger.get_account_balance(SystemAccounts.ACCOUNTS_PAYABLE) == Decimal("565")
        assert manager.get_purchase_bill(second.id).due_amount == Decimal("565")

    def test_payment_reference_naming_other_invoice_survives(
        self, manager: DocumentLifecycleManager, consulting_item: LineItem
    ) -> None:
        doomed = manager.create_invoice([consulting_item])
        survivor = manager.create_invoice([consulting_item])
        manager.apply_invoice_payment(
            survivor.id, Payment.create("600", PaymentMethod.CASH, reference=doomed.number)
        )

        manager.delete_invoice(doomed.id)

        ledger = manager.ledger
        assert ledger.get_account_balance(SystemAccounts.CASH) == Decimal("600")
        assert ledger.get_account_balance(SystemAccounts.ACCOUNTS_RECEIVABLE) == Decimal("530")
        assert manager.get_invoice(survivor.id).due_amount == Decimal("530")

    @pytest.mark.parametrize("bill_number", ["PAYMENT", "PAYOUT"])
    def test_bill_number_matching_payment_marker(
        self,
        manager: DocumentLifecycleManager,
        consulting_item: LineItem,
        supplies_item: LineItem,
        bill_number: str,
    ) -> None:
        """기본 결제 참조와 같은 번호의 계산서를 삭제해도 결제 분개는 유지"""
        invoice = manager.create_invoice([consulting_item])
        manager.apply_invoice_payment(invoice.id, Payment.create("600", PaymentMethod.CASH))
        paid_bill = manager.create_purchase_bill([supplies_item], party_name="Supplier")
        manager.apply_purchase_payment(paid_bill.id, Payment.create("100", PaymentMethod.CASH))
        entries_before = len(manager.ledger)

        bill = manager.create_purchase_bill([supplies_item], party_name="Other", number=bill_number)
        result = manager.delete_purchase_bill(bill.id)

        assert result.removed_entry_count == 1
        assert len(manager.ledger) == entries_before
        assert manager.ledger.get_account_balance(SystemAccounts.CASH) == Decimal("500")
        assert manager.ledger.get_account_balance(SystemAccounts.ACCOUNTS_PAYABLE) == Decimal("465")


class TestOnlineOrder:
    """온라인 스토어 주문 테스트"""

    def test_order_posts_sale_and_payment(self, manager: DocumentLifecycleManager) -> None:
        invoice = manager.place_online_order(
            [LineItem("Ilam Tea 500g", Decimal("2"), Decimal("400"), product_id="p-tea")],
            party_name="Sita Sharma",
            party_address="Pokhara",
        )

        assert invoice.source == DocumentSource.ONLINE_STORE
        assert invoice.status == DocumentStatus.PAID
        assert invoice.total_amount == Decimal("904")
        assert len(manager.ledger.get_entries_by_reference(invoice.id)) == 2
        assert manager.ledger.get_account_balance(SystemAccounts.BANK) == Decimal("904")
        assert manager.ledger.get_account_balance(SystemAccounts.ACCOUNTS_RECEIVABLE) == Decimal("0")

    def test_stock_decremented_with_floor(self, manager: DocumentLifecycleManager) -> None:
        manager.place_online_order(
            [
                LineItem("Ilam Tea 500g", Decimal("4"), Decimal("400"), product_id="p-tea"),
                LineItem("Rice", Decimal("5"), Decimal("900"), is_taxable=False, product_id="p-rice"),
            ],
            party_name="Ram",
        )

        assert manager.catalog.get("p-tea").stock == 6
        assert manager.catalog.get("p-rice").stock == 0

    def test_manual_invoice_keeps_stock(self, manager: DocumentLifecycleManager) -> None:
        manager.create_invoice([LineItem("Tea", Decimal("1"), Decimal("400"), product_id="p-tea")])
        assert manager.catalog.get("p-tea").stock == 10

    def test_cash_order(self, manager: DocumentLifecycleManager) -> None:
        manager.place_online_order(
            [LineItem("Tea", Decimal("1"), Decimal("400"), product_id="p-tea")],
            party_name="Hari",
            method=PaymentMethod.CASH,
        )
        assert manager.ledger.get_account_balance(SystemAccounts.CASH) == Decimal("452")


class TestReports:
    """재무제표 연동 테스트"""

    def _populate(self, manager: DocumentLifecycleManager) -> None:
        a = manager.create_invoice([LineItem("Consulting", Decimal("1"), Decimal("1000"))])
        manager.apply_invoice_payment(a.id, Payment.create("600"))
        manager.create_invoice([
            LineItem("Design", Decimal("3"), Decimal("333.33")),
            LineItem("Rice", Decimal("1"), Decimal("901.17"), is_taxable=False),
        ])
        b = manager.create_purchase_bill(
            [LineItem("Supplies", Decimal("7"), Decimal("77.77"), discount=Decimal("3.3"))],
            party_name="Supplier",
        )
        manager.apply_purchase_payment(b.id, Payment.create("200", PaymentMethod.BANK_TRANSFER))
        manager.place_online_order(
            [LineItem("Tea", Decimal("1"), Decimal("400"), product_id="p-tea")],
            party_name="Online",
        )

    def test_balance_sheet_balanced(self, manager: DocumentLifecycleManager) -> None:
        self._populate(manager)
        sheet = manager.balance_sheet()

        assert sheet.is_balanced
        assert sheet.net_profit == manager.profit_and_loss().net_profit

    def test_trial_balance_debits_equal_credits(self, manager: DocumentLifecycleManager) -> None:
        self._populate(manager)
        rows = manager.trial_balance()

        assert sum(r["debit"] for r in rows) == sum(r["credit"] for r in rows)

    def test_recompute_idempotent(self, manager: DocumentLifecycleManager) -> None:
        self._populate(manager)

        first = manager.recompute_balances()
        second = manager.recompute_balances()

        assert first.balances == second.balances
        assert not first.has_integrity_errors

    def test_balances_independent_of_log_order(self, manager: DocumentLifecycleManager) -> None:
        self._populate(manager)
        entries = manager.ledger.entries()
        expected = manager.recompute_balances().balances

        for seed in range(5):
            shuffled = list(entries)
            random.Random(seed).shuffle(shuffled)
            assert recompute_balances(manager.ledger.chart, shuffled).balances == expected

    def test_tax_summary_and_dashboard(self, manager: DocumentLifecycleManager) -> None:
        a = manager.create_invoice([LineItem("Consulting", Decimal("1"), Decimal("1000"))])
        manager.apply_invoice_payment(a.id, Payment.create("600"))
        manager.create_purchase_bill([LineItem("Supplies", Decimal("5"), Decimal("100"))], party_name="S")

        tax = manager.tax_summary()
        assert tax.net_vat_payable == Decimal("65")

        stats = manager.dashboard_stats()
        assert stats.total_sales == Decimal("1000")
        assert stats.receivables == Decimal("530")
        assert stats.payables == Decimal("565")
        assert stats.cash_balance == Decimal("600")


class TestConcurrency:
    """동시 결제 테스트"""

    def test_concurrent_payments_serialized(self, manager: DocumentLifecycleManager) -> None:
        invoice = manager.create_invoice([LineItem("Bulk", Decimal("1"), Decimal("1000"))])
        errors: list[Exception] = []

        def pay() -> None:
            try:
                manager.apply_invoice_payment(invoice.id, Payment.create("10", PaymentMethod.CASH))
            except Exception as e:  # noqa: BLE001
                errors.append(e)

        threads = [threading.Thread(target=pay) for _ in range(50)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        updated = manager.get_invoice(invoice.id)
        assert errors == []
        assert len(updated.payments) == 50
        assert updated.paid_amount == Decimal("500")
        assert manager.ledger.get_account_balance(SystemAccounts.CASH) == Decimal("500")
        assert manager.ledger.get_account_balance(SystemAccounts.ACCOUNTS_RECEIVABLE) == Decimal("630")


class TestStateExport:
    """상태 내보내기/복원 테스트"""

    def test_round_trip(self, manager: DocumentLifecycleManager, consulting_item: LineItem) -> None:
        invoice = manager.create_invoice([consulting_item])
        manager.apply_invoice_payment(invoice.id, Payment.create("600"))
        manager.create_purchase_bill([LineItem("S", Decimal("1"), Decimal("100"))], party_name="S")

        restored = DocumentLifecycleManager.from_state(manager.export_state())

        assert restored.get_invoice(invoice.id) == manager.get_invoice(invoice.id)
        assert restored.recompute_balances().balances == manager.recompute_balances().balances
        assert restored.catalog.get("p-tea").stock == 10
        assert restored.create_invoice([consulting_item]).number == "INV-2080-81-0002"
        assert restored.create_purchase_bill([consulting_item], party_name="T").number == "BILL-0002"

    def test_draft_document_rejects_payment(
        self, manager: DocumentLifecycleManager, consulting_item: LineItem
    ) -> None:
        invoice = manager.create_invoice([consulting_item])
        state = manager.export_state()
        state["invoices"][0]["status"] = "DRAFT"

        restored = DocumentLifecycleManager.from_state(state)

        with pytest.raises(DocumentStateError):
            restored.apply_invoice_payment(invoice.id, Payment.create("100"))


class TestFromSettings:
    """설정 기반 생성 테스트"""

    def test_uses_settings(self, temp_settings_file) -> None:
        from core.config.loader import get_settings

        manager = DocumentLifecycleManager.from_settings(get_settings(temp_settings_file))
        invoice = manager.create_invoice([LineItem("X", Decimal("1"), Decimal("100"))])

        assert manager.fiscal_year == "2081/82"
        assert invoice.number == "INV-2081-82-0001"
        assert invoice.fiscal_year == "2081/82"
