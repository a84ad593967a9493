"""
응답 스키마 (Pydantic)

Web API 응답 데이터 직렬화.
금액은 모두 Decimal 문자열.
"""

from typing import Any

from pydantic import BaseModel, Field

from core.documents.models import Invoice, PurchaseBill
from core.ledger.accounts import Account
from core.ledger.entry_builder import JournalEntry
from core.ledger.statements import BalanceSheet, ProfitAndLoss, TaxSummary


class HealthResponse(BaseModel):
    """헬스 체크 응답"""

    status: str = Field(default="ok", description="서비스 상태")
    company: str = Field(..., description="회사명")
    fiscal_year: str = Field(..., description="회계연도")
    version: str = Field(..., description="API 버전")


class LineItemResponse(BaseModel):
    """문서 품목 응답"""

    id: str
    description: str
    quantity: str
    rate: str
    discount: str
    amount: str
    is_taxable: bool
    product_id: str | None = None


class PaymentResponse(BaseModel):
    """결제 응답"""

    id: str
    date: str
    amount: str
    method: str
    reference: str
    note: str | None = None


class DocumentResponse(BaseModel):
    """매출/매입 문서 공통 응답"""

    id: str = Field(..., description="문서 ID")
    number: str = Field(..., description="문서 번호")
    date: str = Field(..., description="발행일")
    due_date: str = Field(..., description="만기일")
    party_id: str
    party_name: str
    party_pan: str
    party_address: str
    items: list[LineItemResponse]
    sub_total: str
    discount_total: str
    taxable_amount: str
    non_taxable_amount: str
    vat_amount: str
    total_amount: str
    paid_amount: str
    due_amount: str
    payments: list[PaymentResponse]
    status: str = Field(..., description="결제 상태")
    fiscal_year: str


class InvoiceResponse(DocumentResponse):
    """세금계산서 응답"""

    invoice_type: str
    source: str

    @classmethod
    def from_domain(cls, invoice: Invoice) -> "InvoiceResponse":
        return cls.model_validate(invoice.to_dict())


class PurchaseBillResponse(DocumentResponse):
    """매입 계산서 응답"""

    expense_account_id: str | None = None

    @classmethod
    def from_domain(cls, bill: PurchaseBill) -> "PurchaseBillResponse":
        return cls.model_validate(bill.to_dict())


class DeletionResponse(BaseModel):
    """문서 삭제 응답"""

    id: str = Field(..., description="삭제된 문서 ID")
    number: str = Field(..., description="삭제된 문서 번호")
    removed_entries: list[str] = Field(..., description="함께 삭제된 분개 ID")


class AccountResponse(BaseModel):
    """계정 응답"""

    id: str
    code: str
    name: str
    type: str
    balance: str
    is_system: bool

    @classmethod
    def from_domain(cls, account: Account) -> "AccountResponse":
        return cls.model_validate(account.to_dict())


class JournalLineResponse(BaseModel):
    """분개 항목 응답"""

    account_id: str
    debit: str
    credit: str
    memo: str | None = None


class JournalEntryResponse(BaseModel):
    """분개 응답"""

    entry_id: str
    date: str
    reference: str
    description: str
    transaction_type: str
    related_document_id: str | None = None
    related_payment_id: str | None = None
    lines: list[JournalLineResponse]

    @classmethod
    def from_domain(cls, entry: JournalEntry) -> "JournalEntryResponse":
        return cls.model_validate(entry.to_dict())


class ProfitLossResponse(BaseModel):
    """손익계산서 응답"""

    revenue_accounts: list[AccountResponse]
    expense_accounts: list[AccountResponse]
    total_revenue: str
    total_expense: str
    net_profit: str

    @classmethod
    def from_domain(cls, report: ProfitAndLoss) -> "ProfitLossResponse":
        return cls(
            revenue_accounts=[AccountResponse.from_domain(a) for a in report.revenue_accounts],
            expense_accounts=[AccountResponse.from_domain(a) for a in report.expense_accounts],
            total_revenue=str(report.total_revenue),
            total_expense=str(report.total_expense),
            net_profit=str(report.net_profit),
        )


class BalanceSheetResponse(BaseModel):
    """재무상태표 응답"""

    asset_accounts: list[AccountResponse]
    liability_accounts: list[AccountResponse]
    equity_accounts: list[AccountResponse]
    total_assets: str
    total_liabilities: str
    total_equity: str = Field(..., description="자본 합계 (당기순이익 포함)")
    net_profit: str
    difference: str = Field(..., description="자산 - (부채 + 자본)")
    is_balanced: bool

    @classmethod
    def from_domain(cls, report: BalanceSheet) -> "BalanceSheetResponse":
        return cls(
            asset_accounts=[AccountResponse.from_domain(a) for a in report.asset_accounts],
            liability_accounts=[AccountResponse.from_domain(a) for a in report.liability_accounts],
            equity_accounts=[AccountResponse.from_domain(a) for a in report.equity_accounts],
            total_assets=str(report.total_assets),
            total_liabilities=str(report.total_liabilities),
            total_equity=str(report.total_equity),
            net_profit=str(report.net_profit),
            difference=str(report.difference),
            is_balanced=report.is_balanced,
        )


class TaxSummaryResponse(BaseModel):
    """부가세 요약 응답"""

    output_vat: str = Field(..., description="매출 VAT")
    input_vat: str = Field(..., description="매입 VAT")
    net_vat_payable: str = Field(..., description="납부(+)/환급(-) 예정액")

    @classmethod
    def from_domain(cls, summary: TaxSummary) -> "TaxSummaryResponse":
        return cls(
            output_vat=str(summary.output_vat),
            input_vat=str(summary.input_vat),
            net_vat_payable=str(summary.net_vat_payable),
        )


class TrialBalanceRowResponse(BaseModel):
    """시산표 행"""

    account_id: str
    code: str
    name: str
    account_type: str
    balance: str
    debit: str
    credit: str

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "TrialBalanceRowResponse":
        return cls(
            account_id=row["account_id"],
            code=row["code"],
            name=row["name"],
            account_type=row["account_type"],
            balance=str(row["balance"]),
            debit=str(row["debit"]),
            credit=str(row["credit"]),
        )


class AccountLedgerRowResponse(BaseModel):
    """계정별 원장 행"""

    entry_id: str
    date: str
    reference: str
    description: str
    transaction_type: str
    debit: str
    credit: str
    running_balance: str

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "AccountLedgerRowResponse":
        return cls(
            entry_id=row["entry_id"],
            date=row["date"].isoformat(),
            reference=row["reference"],
            description=row["description"],
            transaction_type=row["transaction_type"],
            debit=str(row["debit"]),
            credit=str(row["credit"]),
            running_balance=str(row["running_balance"]),
        )


class RecomputeResponse(BaseModel):
    """잔액 재계산 응답"""

    entry_count: int = Field(..., description="반영된 분개 수")
    unknown_account_ids: list[str] = Field(..., description="계정과목표에 없는 계정 (무결성 오류)")
    balances: dict[str, str] = Field(..., description="계정 ID → 잔액")


class DashboardResponse(BaseModel):
    """대시보드 응답"""

    total_sales: str
    total_expenses: str
    vat_payable: str
    receivables: str
    payables: str
    net_profit: str
    cash_balance: str


class ProductResponse(BaseModel):
    """스토어 상품 응답"""

    id: str
    name: str
    price: str
    stock: int
    is_taxable: bool
