"""
타입 정의 모듈

거래 문서와 결제에서 공통으로 사용하는 Enum 정의
모든 Enum은 str을 상속하여 문자열 직렬화 가능
"""

from enum import Enum


class PaymentMethod(str, Enum):
    """결제 수단

    정산 계정 기준으로 현금(CASH)과 은행(BANK) 두 그룹으로 나뉨.
    """

    CASH = "CASH"
    BANK_TRANSFER = "BANK_TRANSFER"
    CHEQUE = "CHEQUE"

    # 전자지갑 (네팔)
    ESEWA = "ESEWA"
    KHALTI = "KHALTI"
    FONEPAY = "FONEPAY"


class SettlementBucket(str, Enum):
    """결제 수단별 정산 계정 그룹"""

    CASH = "CASH"
    BANK = "BANK"


# 결제 수단 → 정산 그룹
PAYMENT_METHOD_BUCKETS: dict[PaymentMethod, SettlementBucket] = {
    PaymentMethod.CASH: SettlementBucket.CASH,
    PaymentMethod.BANK_TRANSFER: SettlementBucket.BANK,
    PaymentMethod.CHEQUE: SettlementBucket.BANK,
    PaymentMethod.ESEWA: SettlementBucket.BANK,
    PaymentMethod.KHALTI: SettlementBucket.BANK,
    PaymentMethod.FONEPAY: SettlementBucket.BANK,
}


class DocumentSource(str, Enum):
    """판매 문서 출처"""

    MANUAL = "MANUAL"  # 백오피스에서 직접 발행
    ONLINE_STORE = "ONLINE_STORE"  # 온라인 스토어 주문


class InvoiceType(str, Enum):
    """세금계산서 유형"""

    TAX_INVOICE = "TAX_INVOICE"  # VAT 포함
    ABBREVIATED_INVOICE = "ABBREVIATED_INVOICE"  # VAT 없음 (간이)
