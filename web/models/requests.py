"""
요청 스키마 (Pydantic)

Web API 요청 데이터 검증
"""

import datetime
from decimal import Decimal

from pydantic import BaseModel, Field, model_validator

from core.documents.models import LineItem
from core.types import PaymentMethod


class LineItemRequest(BaseModel):
    """문서 품목 요청"""

    description: str = Field(..., min_length=1, description="품목 설명")
    quantity: Decimal = Field(..., gt=0, description="수량")
    rate: Decimal = Field(..., ge=0, description="단가")
    discount: Decimal = Field(default=Decimal("0"), ge=0, description="할인 금액")
    is_taxable: bool = Field(default=True, description="VAT 과세 여부")
    product_id: str | None = Field(default=None, description="스토어 상품 ID")

    @model_validator(mode="after")
    def validate_discount(self) -> "LineItemRequest":
        """할인은 수량 × 단가를 넘을 수 없음"""
        if self.discount > self.quantity * self.rate:
            raise ValueError("discount cannot exceed quantity × rate")
        return self

    def to_line_item(self) -> LineItem:
        return LineItem(
            description=self.description,
            quantity=self.quantity,
            rate=self.rate,
            discount=self.discount,
            is_taxable=self.is_taxable,
            product_id=self.product_id,
        )


class InvoiceCreateRequest(BaseModel):
    """세금계산서 발행 요청

    품목이 없는 문서는 제출할 수 없다.
    """

    party_name: str = Field(default="Cash Customer", description="거래처명")
    party_id: str = Field(default="unknown", description="거래처 ID")
    party_pan: str = Field(default="", description="거래처 PAN")
    party_address: str = Field(default="", description="거래처 주소")
    date: datetime.date | None = Field(default=None, description="발행일 (기본: 오늘)")
    due_date: datetime.date | None = Field(default=None, description="만기일 (기본: 발행일)")
    items: list[LineItemRequest] = Field(..., min_length=1, description="품목 목록")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "party_name": "Himalayan Traders Pvt Ltd",
                    "party_pan": "301234567",
                    "items": [
                        {"description": "Consulting", "quantity": "1", "rate": "1000"},
                    ],
                },
            ]
        }
    }


class PurchaseCreateRequest(BaseModel):
    """매입 계산서 기록 요청"""

    party_name: str = Field(..., min_length=1, description="공급자명")
    party_id: str = Field(default="unknown", description="공급자 ID")
    party_pan: str = Field(default="", description="공급자 PAN")
    party_address: str = Field(default="", description="공급자 주소")
    number: str | None = Field(default=None, description="공급자 계산서 번호 (없으면 자동 발급)")
    date: datetime.date | None = Field(default=None, description="계산서 일자 (기본: 오늘)")
    due_date: datetime.date | None = Field(default=None, description="만기일 (기본: 계산서 일자)")
    expense_account_id: str | None = Field(
        default=None,
        description="비용 계정 ID (기본: 매출원가 5001)",
    )
    items: list[LineItemRequest] = Field(..., min_length=1, description="품목 목록")


class PaymentRequest(BaseModel):
    """결제 요청 (수령/지급 공통)

    금액 검증(0 이하, 잔액 초과)은 문서 관리자가 수행.
    """

    amount: Decimal = Field(..., description="결제 금액")
    method: PaymentMethod = Field(default=PaymentMethod.CASH, description="결제 수단")
    date: datetime.date | None = Field(default=None, description="결제일 (기본: 오늘)")
    reference: str = Field(default="", description="참조 번호 (수표 번호 등)")
    note: str | None = Field(default=None, description="메모")


class ProductCreateRequest(BaseModel):
    """스토어 상품 등록 요청"""

    id: str = Field(..., min_length=1, description="상품 ID")
    name: str = Field(..., min_length=1, description="상품명")
    price: Decimal = Field(..., ge=0, description="판매가 (VAT 제외)")
    stock: int = Field(default=0, ge=0, description="재고")
    is_taxable: bool = Field(default=True, description="VAT 과세 여부")


class OrderItemRequest(BaseModel):
    """스토어 주문 품목"""

    product_id: str = Field(..., description="상품 ID")
    quantity: int = Field(..., gt=0, description="수량")


class OnlineOrderRequest(BaseModel):
    """온라인 스토어 주문 요청"""

    customer_name: str = Field(..., min_length=1, description="주문자명")
    address: str = Field(default="", description="배송지")
    method: PaymentMethod = Field(default=PaymentMethod.FONEPAY, description="결제 수단")
    items: list[OrderItemRequest] = Field(..., min_length=1, description="주문 품목")
