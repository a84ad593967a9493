"""
복식부기 API 라우트

계정과목표, 분개장, 시산표, 계정별 원장, 재무제표
"""

from fastapi import APIRouter, Depends, Query

from core.documents.manager import DocumentLifecycleManager
from core.ledger.errors import LedgerError
from web.dependencies import get_manager
from web.errors import to_http_exception
from web.models.responses import (
    AccountLedgerRowResponse,
    AccountResponse,
    BalanceSheetResponse,
    JournalEntryResponse,
    ProfitLossResponse,
    RecomputeResponse,
    TaxSummaryResponse,
    TrialBalanceRowResponse,
)

router = APIRouter(prefix="/api/ledger", tags=["Ledger"])


@router.get("/accounts", response_model=list[AccountResponse])
async def get_accounts(
    manager: DocumentLifecycleManager = Depends(get_manager),
) -> list[AccountResponse]:
    """계정과목표 (현재 잔액 포함, 코드 순)"""
    return [AccountResponse.from_domain(a) for a in manager.ledger.get_accounts()]


@router.get("/journal", response_model=list[JournalEntryResponse])
async def get_journal(
    limit: int = Query(default=100, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
    manager: DocumentLifecycleManager = Depends(get_manager),
) -> list[JournalEntryResponse]:
    """분개장 (최신순)"""
    entries = manager.ledger.entries()
    entries.reverse()
    return [JournalEntryResponse.from_domain(e) for e in entries[offset:offset + limit]]


@router.get("/trial-balance", response_model=list[TrialBalanceRowResponse])
async def get_trial_balance(
    include_zero: bool = Query(default=False, description="잔액 0 계정 포함"),
    manager: DocumentLifecycleManager = Depends(get_manager),
) -> list[TrialBalanceRowResponse]:
    """시산표 조회

    기본적으로 잔액이 0인 계정은 제외.
    """
    rows = manager.ledger.get_trial_balance()
    if not include_zero:
        rows = [row for row in rows if row["balance"] != 0]
    return [TrialBalanceRowResponse.from_row(row) for row in rows]


@router.get("/account-ledger/{account_id}", response_model=list[AccountLedgerRowResponse])
async def get_account_ledger(
    account_id: str,
    limit: int = Query(default=100, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
    manager: DocumentLifecycleManager = Depends(get_manager),
) -> list[AccountLedgerRowResponse]:
    """계정별 원장 (누적 잔액 포함, 최신순)"""
    try:
        rows = manager.ledger.get_account_ledger(account_id, limit, offset)
    except LedgerError as e:
        raise to_http_exception(e) from e
    return [AccountLedgerRowResponse.from_row(row) for row in rows]


@router.get("/profit-loss", response_model=ProfitLossResponse)
async def get_profit_loss(
    manager: DocumentLifecycleManager = Depends(get_manager),
) -> ProfitLossResponse:
    """손익계산서"""
    return ProfitLossResponse.from_domain(manager.profit_and_loss())


@router.get("/balance-sheet", response_model=BalanceSheetResponse)
async def get_balance_sheet(
    manager: DocumentLifecycleManager = Depends(get_manager),
) -> BalanceSheetResponse:
    """재무상태표 (자본에 당기순이익 포함)"""
    return BalanceSheetResponse.from_domain(manager.balance_sheet())


@router.get("/tax-summary", response_model=TaxSummaryResponse)
async def get_tax_summary(
    manager: DocumentLifecycleManager = Depends(get_manager),
) -> TaxSummaryResponse:
    """부가세 요약 (매출 VAT - 매입 VAT)"""
    return TaxSummaryResponse.from_domain(manager.tax_summary())


@router.post("/recompute", response_model=RecomputeResponse)
async def recompute_balances(
    manager: DocumentLifecycleManager = Depends(get_manager),
) -> RecomputeResponse:
    """전체 잔액 재계산

    로그에서 모든 잔액을 다시 계산. 반복 호출해도 결과 동일.
    """
    result = manager.recompute_balances()
    return RecomputeResponse(
        entry_count=result.entry_count,
        unknown_account_ids=list(result.unknown_account_ids),
        balances={account_id: str(balance) for account_id, balance in result.balances.items()},
    )
