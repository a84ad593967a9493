"""
재무제표 생성

현재 계정 잔액만 읽어서 손익계산서, 재무상태표, 시산표, 부가세 요약,
대시보드 지표를 만든다. 분개 로그는 직접 읽지 않는다.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Iterable

from core.constants import Money
from core.ledger.accounts import Account
from core.ledger.types import AccountType, JournalSide, SystemAccounts


def _total(accounts: Iterable[Account]) -> Decimal:
    return sum((a.balance for a in accounts), Decimal("0"))


def _balance_of(accounts: Iterable[Account], account_id: str) -> Decimal:
    for account in accounts:
        if account.id == account_id:
            return account.balance
    return Decimal("0")


@dataclass(frozen=True)
class ProfitAndLoss:
    """손익계산서"""

    revenue_accounts: tuple[Account, ...]
    expense_accounts: tuple[Account, ...]
    total_revenue: Decimal
    total_expense: Decimal
    net_profit: Decimal


@dataclass(frozen=True)
class BalanceSheet:
    """재무상태표

    total_equity에는 당기순이익이 포함된다 (미처분 이익잉여금).
    """

    asset_accounts: tuple[Account, ...]
    liability_accounts: tuple[Account, ...]
    equity_accounts: tuple[Account, ...]
    total_assets: Decimal
    total_liabilities: Decimal
    total_equity: Decimal
    net_profit: Decimal
    is_balanced: bool

    @property
    def difference(self) -> Decimal:
        return self.total_assets - (self.total_liabilities + self.total_equity)


@dataclass(frozen=True)
class TaxSummary:
    """부가세 요약

    net_vat_payable > 0 이면 납부, < 0 이면 환급 대상.
    """

    output_vat: Decimal  # 매출 VAT (VAT Payable)
    input_vat: Decimal  # 매입 VAT (VAT Receivable)
    net_vat_payable: Decimal


@dataclass(frozen=True)
class DashboardStats:
    """대시보드 지표"""

    total_sales: Decimal
    total_expenses: Decimal
    vat_payable: Decimal
    receivables: Decimal
    payables: Decimal
    net_profit: Decimal
    cash_balance: Decimal

    def to_dict(self) -> dict[str, str]:
        return {
            "total_sales": str(self.total_sales),
            "total_expenses": str(self.total_expenses),
            "vat_payable": str(self.vat_payable),
            "receivables": str(self.receivables),
            "payables": str(self.payables),
            "net_profit": str(self.net_profit),
            "cash_balance": str(self.cash_balance),
        }


def generate_profit_loss(accounts: list[Account]) -> ProfitAndLoss:
    """손익계산서 생성

    순이익 = 수익 계정 잔액 합계 - 비용 계정 잔액 합계
    """
    revenue_accounts = tuple(a for a in accounts if a.account_type == AccountType.REVENUE)
    expense_accounts = tuple(a for a in accounts if a.account_type == AccountType.EXPENSE)

    total_revenue = _total(revenue_accounts)
    total_expense = _total(expense_accounts)

    return ProfitAndLoss(
        revenue_accounts=revenue_accounts,
        expense_accounts=expense_accounts,
        total_revenue=total_revenue,
        total_expense=total_expense,
        net_profit=total_revenue - total_expense,
    )


def generate_balance_sheet(accounts: list[Account], net_profit: Decimal) -> BalanceSheet:
    """재무상태표 생성

    자본 = 자본 계정 잔액 합계 + 당기순이익.
    |자산 - (부채 + 자본)| < 1 이면 대차평형 (반올림 허용 오차).

    Args:
        accounts: 잔액이 반영된 계정 목록
        net_profit: 손익계산서의 당기순이익

    Returns:
        BalanceSheet
    """
    asset_accounts = tuple(a for a in accounts if a.account_type == AccountType.ASSET)
    liability_accounts = tuple(a for a in accounts if a.account_type == AccountType.LIABILITY)
    equity_accounts = tuple(a for a in accounts if a.account_type == AccountType.EQUITY)

    total_assets = _total(asset_accounts)
    total_liabilities = _total(liability_accounts)
    total_equity = _total(equity_accounts) + net_profit

    difference = total_assets - (total_liabilities + total_equity)

    return BalanceSheet(
        asset_accounts=asset_accounts,
        liability_accounts=liability_accounts,
        equity_accounts=equity_accounts,
        total_assets=total_assets,
        total_liabilities=total_liabilities,
        total_equity=total_equity,
        net_profit=net_profit,
        is_balanced=abs(difference) < Money.BALANCE_SHEET_TOLERANCE,
    )


def generate_trial_balance(accounts: list[Account]) -> list[dict[str, Any]]:
    """시산표 생성

    정상 잔액 방향 기준으로 차변/대변 열에 배치.
    음수 잔액은 반대 열로 이동.
    """
    rows = []
    for account in accounts:
        balance = account.balance
        debit_normal = account.normal_side == JournalSide.DEBIT
        if (balance >= 0) == debit_normal:
            debit, credit = abs(balance), Decimal("0")
        else:
            debit, credit = Decimal("0"), abs(balance)
        rows.append({
            "account_id": account.id,
            "code": account.code,
            "name": account.name,
            "account_type": account.account_type.value,
            "balance": balance,
            "debit": debit,
            "credit": credit,
        })
    return rows


def generate_tax_summary(accounts: list[Account]) -> TaxSummary:
    """부가세 요약 (매출 VAT - 매입 VAT)"""
    output_vat = _balance_of(accounts, SystemAccounts.VAT_PAYABLE)
    input_vat = _balance_of(accounts, SystemAccounts.VAT_RECEIVABLE)
    return TaxSummary(
        output_vat=output_vat,
        input_vat=input_vat,
        net_vat_payable=output_vat - input_vat,
    )


def generate_dashboard_stats(accounts: list[Account]) -> DashboardStats:
    """대시보드 지표

    매출은 Sales Revenue(4001) 잔액만, 비용은 비용 계정 전체 합계.
    순이익은 손익계산서와 같은 값 (기타수익 포함).
    현금 잔액 = 현금 + 은행.
    """
    total_sales = _balance_of(accounts, SystemAccounts.SALES_REVENUE)
    total_expenses = _total(a for a in accounts if a.account_type == AccountType.EXPENSE)
    tax = generate_tax_summary(accounts)

    return DashboardStats(
        total_sales=total_sales,
        total_expenses=total_expenses,
        vat_payable=tax.net_vat_payable,
        receivables=_balance_of(accounts, SystemAccounts.ACCOUNTS_RECEIVABLE),
        payables=_balance_of(accounts, SystemAccounts.ACCOUNTS_PAYABLE),
        net_profit=generate_profit_loss(accounts).net_profit,
        cash_balance=(
            _balance_of(accounts, SystemAccounts.CASH)
            + _balance_of(accounts, SystemAccounts.BANK)
        ),
    )
