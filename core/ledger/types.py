"""
복식부기 타입 정의

AccountType, JournalSide 등 Ledger 시스템에서 사용하는 Enum 및 계정과목표 정의
"""

from enum import Enum


class TransactionType(str, Enum):
    """분개 거래 유형

    분개를 만든 업무 이벤트를 분류.
    str을 상속하여 JSON 직렬화 가능.
    """

    SALES = "SALES"  # 매출 세금계산서 발행
    PURCHASE = "PURCHASE"  # 매입 계산서 기록
    PAYMENT_RECEIVED = "PAYMENT_RECEIVED"  # 매출 대금 수령
    PAYMENT_MADE = "PAYMENT_MADE"  # 매입 대금 지급
    JOURNAL = "JOURNAL"  # 수기 분개


class AccountType(str, Enum):
    """계정 유형

    복식부기의 5대 계정 유형.
    """

    ASSET = "ASSET"  # 자산 (현금, 예금, 매출채권)
    LIABILITY = "LIABILITY"  # 부채 (매입채무, 부가세 예수금)
    EQUITY = "EQUITY"  # 자본 (출자금, 이익잉여금)
    REVENUE = "REVENUE"  # 수익 (매출)
    EXPENSE = "EXPENSE"  # 비용 (매출원가, 임차료)


class JournalSide(str, Enum):
    """분개 방향 (차변/대변)"""

    DEBIT = "DEBIT"  # 차변 (자산 증가, 비용 증가)
    CREDIT = "CREDIT"  # 대변 (부채/자본/수익 증가)


# 계정 유형별 정상 잔액 방향
NORMAL_BALANCE: dict[AccountType, JournalSide] = {
    AccountType.ASSET: JournalSide.DEBIT,
    AccountType.EXPENSE: JournalSide.DEBIT,
    AccountType.LIABILITY: JournalSide.CREDIT,
    AccountType.EQUITY: JournalSide.CREDIT,
    AccountType.REVENUE: JournalSide.CREDIT,
}


class SystemAccounts:
    """분개 생성기가 참조하는 시스템 계정 ID"""

    CASH = "1001"
    BANK = "1002"
    ACCOUNTS_RECEIVABLE = "1003"
    VAT_RECEIVABLE = "1004"  # 매입 VAT (Input)
    INVENTORY = "1005"

    ACCOUNTS_PAYABLE = "2001"
    VAT_PAYABLE = "2002"  # 매출 VAT (Output)
    TDS_PAYABLE = "2003"

    OWNERS_EQUITY = "3001"
    RETAINED_EARNINGS = "3002"

    SALES_REVENUE = "4001"

    COST_OF_GOODS_SOLD = "5001"


# 초기 계정 목록 (네팔 중소기업 표준 계정과목표)
INITIAL_ACCOUNTS: list[tuple[str, str, str, bool]] = [
    # (account_id, account_type, name, is_system)

    # ASSET 계정 (1000-1999)
    ("1001", "ASSET", "Cash on Hand", True),
    ("1002", "ASSET", "Bank Accounts", True),
    ("1003", "ASSET", "Accounts Receivable", True),
    ("1004", "ASSET", "VAT Receivable", True),
    ("1005", "ASSET", "Inventory / Stock", False),

    # LIABILITY 계정 (2000-2999)
    ("2001", "LIABILITY", "Accounts Payable", True),
    ("2002", "LIABILITY", "VAT Payable", True),
    ("2003", "LIABILITY", "TDS Payable", True),

    # EQUITY 계정 (3000-3999)
    ("3001", "EQUITY", "Owner's Equity", True),
    ("3002", "EQUITY", "Retained Earnings", True),

    # REVENUE 계정 (4000-4999)
    ("4001", "REVENUE", "Sales Revenue", True),
    ("4002", "REVENUE", "Other Income", False),

    # EXPENSE 계정 (5000-5999)
    ("5001", "EXPENSE", "Cost of Goods Sold", True),
    ("5002", "EXPENSE", "Rent Expense", False),
    ("5003", "EXPENSE", "Salary & Wages", False),
    ("5004", "EXPENSE", "Utilities", False),
    ("5005", "EXPENSE", "Office Supplies", False),
]
