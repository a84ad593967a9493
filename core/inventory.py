"""
온라인 스토어 상품 재고

스토어 주문으로 생성된 세금계산서가 재고를 차감할 때 사용.
차감은 0 아래로 내려가지 않는다.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, replace
from decimal import Decimal
from typing import Any, Iterable

logger = logging.getLogger(__name__)


class ProductNotFoundError(Exception):
    """존재하지 않는 상품"""

    pass


@dataclass(frozen=True)
class Product:
    """스토어 상품"""

    id: str
    name: str
    price: Decimal
    stock: int
    is_taxable: bool = True

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "price": str(self.price),
            "stock": self.stock,
            "is_taxable": self.is_taxable,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Product:
        return cls(
            id=data["id"],
            name=data["name"],
            price=Decimal(str(data["price"])),
            stock=int(data["stock"]),
            is_taxable=bool(data.get("is_taxable", True)),
        )


class ProductCatalog:
    """상품 목록 + 재고"""

    def __init__(self, products: Iterable[Product] | None = None):
        self._lock = threading.Lock()
        self._products: dict[str, Product] = {p.id: p for p in products or []}

    def add(self, product: Product) -> None:
        with self._lock:
            self._products[product.id] = product

    def get(self, product_id: str) -> Product:
        product = self._products.get(product_id)
        if product is None:
            raise ProductNotFoundError(f"Unknown product: {product_id}")
        return product

    def products(self) -> list[Product]:
        return list(self._products.values())

    def decrement_stock(self, quantities: dict[str, Decimal]) -> dict[str, int]:
        """재고 차감 (0 하한)

        목록에 없는 상품 ID는 무시한다.

        Args:
            quantities: product_id → 판매 수량

        Returns:
            product_id → 차감 후 재고 (일치한 상품만)
        """
        updated: dict[str, int] = {}
        with self._lock:
            for product_id, quantity in quantities.items():
                product = self._products.get(product_id)
                if product is None:
                    logger.warning(f"Stock decrement skipped, unknown product: {product_id}")
                    continue
                new_stock = max(0, product.stock - int(quantity))
                self._products[product_id] = replace(product, stock=new_stock)
                updated[product_id] = new_stock
        return updated
