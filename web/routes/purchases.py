"""
매입 계산서 라우트

기록, 조회, 삭제, 대금 지급
"""

from fastapi import APIRouter, Depends, Path, Query

from core.documents.manager import DocumentError, DocumentLifecycleManager
from core.documents.models import Payment
from core.domain.state_machines import DocumentStatus
from core.ledger.errors import LedgerError
from web.dependencies import get_manager
from web.errors import to_http_exception
from web.models.requests import PaymentRequest, PurchaseCreateRequest
from web.models.responses import DeletionResponse, PurchaseBillResponse

router = APIRouter(prefix="/api/purchases", tags=["Purchases"])


@router.post("", response_model=PurchaseBillResponse, status_code=201)
async def create_purchase_bill(
    request: PurchaseCreateRequest,
    manager: DocumentLifecycleManager = Depends(get_manager),
) -> PurchaseBillResponse:
    """매입 계산서 기록 (매입 분개 자동 기록)

    VAT는 매입 세액공제(1004)로 기록된다.
    """
    try:
        bill = manager.create_purchase_bill(
            items=[item.to_line_item() for item in request.items],
            party_name=request.party_name,
            party_id=request.party_id,
            number=request.number,
            bill_date=request.date,
            due_date=request.due_date,
            party_pan=request.party_pan,
            party_address=request.party_address,
            expense_account_id=request.expense_account_id,
        )
    except (DocumentError, LedgerError) as e:
        raise to_http_exception(e) from e
    return PurchaseBillResponse.from_domain(bill)


@router.get("", response_model=list[PurchaseBillResponse])
async def list_purchase_bills(
    status: DocumentStatus | None = Query(default=None, description="상태 필터"),
    manager: DocumentLifecycleManager = Depends(get_manager),
) -> list[PurchaseBillResponse]:
    """매입 계산서 목록 (최신순)"""
    return [PurchaseBillResponse.from_domain(b) for b in manager.list_purchase_bills(status)]


@router.get("/{bill_id}", response_model=PurchaseBillResponse)
async def get_purchase_bill(
    bill_id: str = Path(..., description="매입 계산서 ID"),
    manager: DocumentLifecycleManager = Depends(get_manager),
) -> PurchaseBillResponse:
    """매입 계산서 단건 조회"""
    try:
        return PurchaseBillResponse.from_domain(manager.get_purchase_bill(bill_id))
    except DocumentError as e:
        raise to_http_exception(e) from e


@router.delete("/{bill_id}", response_model=DeletionResponse)
async def delete_purchase_bill(
    bill_id: str = Path(..., description="매입 계산서 ID"),
    manager: DocumentLifecycleManager = Depends(get_manager),
) -> DeletionResponse:
    """매입 계산서 삭제 (연결된 분개 전체 삭제)"""
    try:
        result = manager.delete_purchase_bill(bill_id)
    except DocumentError as e:
        raise to_http_exception(e) from e

    return DeletionResponse(
        id=result.document.id,
        number=result.document.number,
        removed_entries=[entry.entry_id for entry in result.purge.removed],
    )


@router.post("/{bill_id}/payments", response_model=PurchaseBillResponse)
async def make_payment(
    request: PaymentRequest,
    bill_id: str = Path(..., description="매입 계산서 ID"),
    manager: DocumentLifecycleManager = Depends(get_manager),
) -> PurchaseBillResponse:
    """대금 지급"""
    payment = Payment.create(
        amount=request.amount,
        method=request.method,
        payment_date=request.date,
        reference=request.reference,
        note=request.note,
    )
    try:
        bill = manager.apply_purchase_payment(bill_id, payment)
    except (DocumentError, LedgerError) as e:
        raise to_http_exception(e) from e
    return PurchaseBillResponse.from_domain(bill)
