"""
온라인 스토어 라우트

상품 조회/등록, 주문 (세금계산서 발행 + 즉시 결제)
"""

import logging
from decimal import Decimal

from fastapi import APIRouter, Depends

from core.documents.manager import DocumentError, DocumentLifecycleManager
from core.documents.models import LineItem
from core.inventory import Product, ProductNotFoundError
from core.ledger.errors import LedgerError
from web.dependencies import get_manager
from web.errors import to_http_exception
from web.models.requests import OnlineOrderRequest, ProductCreateRequest
from web.models.responses import InvoiceResponse, ProductResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/store", tags=["Store"])


@router.get("/products", response_model=list[ProductResponse])
async def list_products(
    manager: DocumentLifecycleManager = Depends(get_manager),
) -> list[ProductResponse]:
    """상품 목록 (현재 재고 포함)"""
    return [ProductResponse.model_validate(p.to_dict()) for p in manager.catalog.products()]


@router.post("/products", response_model=ProductResponse, status_code=201)
async def add_product(
    request: ProductCreateRequest,
    manager: DocumentLifecycleManager = Depends(get_manager),
) -> ProductResponse:
    """상품 등록 (같은 ID면 덮어씀)"""
    product = Product(
        id=request.id,
        name=request.name,
        price=request.price,
        stock=request.stock,
        is_taxable=request.is_taxable,
    )
    manager.catalog.add(product)
    logger.info(f"Product registered: {product.id} {product.name} stock={product.stock}")
    return ProductResponse.model_validate(product.to_dict())


@router.post("/orders", response_model=InvoiceResponse, status_code=201)
async def place_order(
    request: OnlineOrderRequest,
    manager: DocumentLifecycleManager = Depends(get_manager),
) -> InvoiceResponse:
    """온라인 주문

    상품 가격으로 세금계산서를 발행하고 재고를 차감한 뒤
    전액 결제를 즉시 기록한다 (매출 분개 + 수령 분개).
    """
    try:
        items = []
        for order_item in request.items:
            product = manager.catalog.get(order_item.product_id)
            items.append(
                LineItem(
                    description=product.name,
                    quantity=Decimal(order_item.quantity),
                    rate=product.price,
                    is_taxable=product.is_taxable,
                    product_id=product.id,
                )
            )

        invoice = manager.place_online_order(
            items=items,
            party_name=request.customer_name,
            party_address=request.address,
            method=request.method,
        )
    except (DocumentError, LedgerError, ProductNotFoundError) as e:
        raise to_http_exception(e) from e

    return InvoiceResponse.from_domain(invoice)
