"""
세금계산서 라우트

발행, 조회, 삭제, 대금 수령
"""

from fastapi import APIRouter, Depends, Path, Query

from core.documents.manager import DocumentError, DocumentLifecycleManager
from core.documents.models import Payment
from core.domain.state_machines import DocumentStatus
from core.ledger.errors import LedgerError
from web.dependencies import get_manager
from web.errors import to_http_exception
from web.models.requests import InvoiceCreateRequest, PaymentRequest
from web.models.responses import DeletionResponse, InvoiceResponse

router = APIRouter(prefix="/api/invoices", tags=["Invoices"])


@router.post("", response_model=InvoiceResponse, status_code=201)
async def create_invoice(
    request: InvoiceCreateRequest,
    manager: DocumentLifecycleManager = Depends(get_manager),
) -> InvoiceResponse:
    """세금계산서 발행 (매출 분개 자동 기록)"""
    try:
        invoice = manager.create_invoice(
            items=[item.to_line_item() for item in request.items],
            party_name=request.party_name,
            party_id=request.party_id,
            invoice_date=request.date,
            due_date=request.due_date,
            party_pan=request.party_pan,
            party_address=request.party_address,
        )
    except (DocumentError, LedgerError) as e:
        raise to_http_exception(e) from e
    return InvoiceResponse.from_domain(invoice)


@router.get("", response_model=list[InvoiceResponse])
async def list_invoices(
    status: DocumentStatus | None = Query(default=None, description="상태 필터"),
    manager: DocumentLifecycleManager = Depends(get_manager),
) -> list[InvoiceResponse]:
    """세금계산서 목록 (최신순)"""
    return [InvoiceResponse.from_domain(inv) for inv in manager.list_invoices(status)]


@router.get("/{invoice_id}", response_model=InvoiceResponse)
async def get_invoice(
    invoice_id: str = Path(..., description="세금계산서 ID"),
    manager: DocumentLifecycleManager = Depends(get_manager),
) -> InvoiceResponse:
    """세금계산서 단건 조회"""
    try:
        return InvoiceResponse.from_domain(manager.get_invoice(invoice_id))
    except DocumentError as e:
        raise to_http_exception(e) from e


@router.delete("/{invoice_id}", response_model=DeletionResponse)
async def delete_invoice(
    invoice_id: str = Path(..., description="세금계산서 ID"),
    manager: DocumentLifecycleManager = Depends(get_manager),
) -> DeletionResponse:
    """세금계산서 삭제

    발행 분개와 모든 결제 분개가 함께 삭제된다.
    """
    try:
        result = manager.delete_invoice(invoice_id)
    except DocumentError as e:
        raise to_http_exception(e) from e

    return DeletionResponse(
        id=result.document.id,
        number=result.document.number,
        removed_entries=[entry.entry_id for entry in result.purge.removed],
    )


@router.post("/{invoice_id}/payments", response_model=InvoiceResponse)
async def receive_payment(
    request: PaymentRequest,
    invoice_id: str = Path(..., description="세금계산서 ID"),
    manager: DocumentLifecycleManager = Depends(get_manager),
) -> InvoiceResponse:
    """대금 수령

    Raises:
        HTTPException: 404 없는 문서, 409 상태 충돌/초과 결제, 422 잘못된 금액
    """
    payment = Payment.create(
        amount=request.amount,
        method=request.method,
        payment_date=request.date,
        reference=request.reference,
        note=request.note,
    )
    try:
        invoice = manager.apply_invoice_payment(invoice_id, payment)
    except (DocumentError, LedgerError) as e:
        raise to_http_exception(e) from e
    return InvoiceResponse.from_domain(invoice)
