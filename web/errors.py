"""
도메인 예외 → HTTP 응답 변환

- 없는 문서/계정/상품: 404
- 상태 충돌, 초과 결제: 409
- 잘못된 결제 금액, 음수 금액 품목: 422
"""

from fastapi import HTTPException

from core.documents.manager import (
    DocumentNotFoundError,
    DocumentStateError,
    InvalidLineItemError,
    InvalidPaymentError,
    OverpaymentError,
)
from core.inventory import ProductNotFoundError
from core.ledger.errors import AccountNotFoundError

_STATUS_CODES: tuple[tuple[type[Exception], int], ...] = (
    (DocumentNotFoundError, 404),
    (AccountNotFoundError, 404),
    (ProductNotFoundError, 404),
    (DocumentStateError, 409),
    (OverpaymentError, 409),
    (InvalidPaymentError, 422),
    (InvalidLineItemError, 422),
)


def to_http_exception(exc: Exception) -> HTTPException:
    """도메인 예외를 HTTPException으로 변환

    매핑되지 않은 예외는 500.
    """
    for exc_type, status_code in _STATUS_CODES:
        if isinstance(exc, exc_type):
            return HTTPException(status_code=status_code, detail=str(exc))
    return HTTPException(status_code=500, detail=str(exc))
