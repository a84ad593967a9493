"""
복식부기 (Double-Entry Bookkeeping) 원장

분개 로그를 유일한 원천으로 두고, 계정 잔액은 로그에서 전체 재계산한다.

사용 예시:
```python
from core.ledger import LedgerStore, JournalEntryBuilder

ledger_store = LedgerStore()
entry_builder = JournalEntryBuilder()

# 문서에서 분개 생성
entry = entry_builder.from_invoice(invoice)
ledger_store.save_entry(entry)

# 잔액 조회
balance = ledger_store.get_account_balance("1003")

# 시산표 조회
trial_balance = ledger_store.get_trial_balance()
```
"""

from core.ledger.accounts import Account, ChartOfAccounts
from core.ledger.balance import BalanceRecomputation, recompute_balances
from core.ledger.entry_builder import (
    PAYMENT_MADE_MARKER,
    PAYMENT_RECEIVED_MARKER,
    JournalEntry,
    JournalEntryBuilder,
    JournalLine,
    validate_entry,
)
from core.ledger.errors import (
    AccountNotFoundError,
    DuplicateEntryError,
    InvalidJournalLineError,
    LedgerError,
    SystemAccountError,
    UnbalancedEntryError,
)
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
from core.ledger.types import (
    INITIAL_ACCOUNTS,
    AccountType,
    JournalSide,
    SystemAccounts,
    TransactionType,
)

__all__ = [
    # 핵심 클래스
    "LedgerStore",
    "PurgeResult",
    "JournalEntryBuilder",
    "JournalEntry",
    "JournalLine",
    "ChartOfAccounts",
    "Account",
    "BalanceRecomputation",
    "recompute_balances",
    "validate_entry",
    # 재무제표
    "ProfitAndLoss",
    "BalanceSheet",
    "TaxSummary",
    "DashboardStats",
    "generate_profit_loss",
    "generate_balance_sheet",
    "generate_trial_balance",
    "generate_tax_summary",
    "generate_dashboard_stats",
    # 예외
    "LedgerError",
    "UnbalancedEntryError",
    "InvalidJournalLineError",
    "DuplicateEntryError",
    "AccountNotFoundError",
    "SystemAccountError",
    # Enum
    "TransactionType",
    "AccountType",
    "JournalSide",
    # 상수
    "SystemAccounts",
    "INITIAL_ACCOUNTS",
    "PAYMENT_RECEIVED_MARKER",
    "PAYMENT_MADE_MARKER",
]
