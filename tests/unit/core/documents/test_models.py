"""문서 모델 테스트"""

from datetime import date
from decimal import Decimal

import pytest

from core.documents.models import LineItem, Payment, to_decimal
from core.types import PaymentMethod


class TestToDecimal:
    """Decimal 변환 테스트"""

    def test_float_via_str(self) -> None:
        assert to_decimal(0.1) == Decimal("0.1")

    def test_passthrough(self) -> None:
        value = Decimal("5.50")
        assert to_decimal(value) is value


class TestPayment:
    """Payment 테스트"""

    def test_create_assigns_id(self) -> None:
        payment = Payment.create("600", "CASH", date(2024, 1, 20))

        assert payment.id.startswith("PAY-")
        assert payment.amount == Decimal("600")
        assert payment.method == PaymentMethod.CASH
        assert payment.date == date(2024, 1, 20)

    def test_unknown_method_rejected(self) -> None:
        with pytest.raises(ValueError):
            Payment.create("100", "BITCOIN")

    def test_frozen(self) -> None:
        payment = Payment.create("100")

        with pytest.raises(AttributeError):
            payment.amount = Decimal("1")  # type: ignore

    def test_dict_round_trip(self) -> None:
        payment = Payment.create("250.75", PaymentMethod.KHALTI, reference="KH-9", note="advance")
        assert Payment.from_dict(payment.to_dict()) == payment


class TestLineItemRecord:
    """LineItem 직렬화 테스트"""

    def test_to_dict_includes_amount(self) -> None:
        item = LineItem("Tea", Decimal("2"), Decimal("400"), product_id="p-tea")
        data = item.to_dict()

        assert data["amount"] == "800.00"
        assert data["product_id"] == "p-tea"
        assert LineItem.from_dict(data) == item
