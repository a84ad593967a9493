"""
Web 모델 패키지

Pydantic 스키마 정의
"""

from web.models.requests import (
    InvoiceCreateRequest,
    LineItemRequest,
    OnlineOrderRequest,
    OrderItemRequest,
    PaymentRequest,
    ProductCreateRequest,
    PurchaseCreateRequest,
)
from web.models.responses import (
    AccountLedgerRowResponse,
    AccountResponse,
    BalanceSheetResponse,
    DashboardResponse,
    DeletionResponse,
    HealthResponse,
    InvoiceResponse,
    JournalEntryResponse,
    ProductResponse,
    ProfitLossResponse,
    PurchaseBillResponse,
    RecomputeResponse,
    TaxSummaryResponse,
    TrialBalanceRowResponse,
)

__all__ = [
    # Requests
    "LineItemRequest",
    "InvoiceCreateRequest",
    "PurchaseCreateRequest",
    "PaymentRequest",
    "ProductCreateRequest",
    "OrderItemRequest",
    "OnlineOrderRequest",
    # Responses
    "HealthResponse",
    "InvoiceResponse",
    "PurchaseBillResponse",
    "DeletionResponse",
    "AccountResponse",
    "JournalEntryResponse",
    "TrialBalanceRowResponse",
    "AccountLedgerRowResponse",
    "ProfitLossResponse",
    "BalanceSheetResponse",
    "TaxSummaryResponse",
    "RecomputeResponse",
    "DashboardResponse",
    "ProductResponse",
]
