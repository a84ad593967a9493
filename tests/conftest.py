"""
pytest 공통 fixture 정의

원장/문서 관리자, 임시 settings.yaml, 웹 테스트 클라이언트
"""

import tempfile
from decimal import Decimal
from pathlib import Path

import pytest

from core.config.loader import Settings
from core.documents.manager import DocumentLifecycleManager
from core.documents.models import LineItem
from core.inventory import Product, ProductCatalog
from core.ledger.store import LedgerStore


@pytest.fixture
def temp_dir() -> Path:
    """OS 독립적인 임시 디렉토리 생성"""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def temp_settings_file(temp_dir: Path) -> Path:
    """테스트용 settings.yaml 파일 생성"""
    settings_content = """# 테스트용 settings.yaml
company:
  name: "Everest Supplies Pvt Ltd"
  address: "Lalitpur, Nepal"
  pan: "609876543"
  fiscal_year: "2081/82"
  currency: "NPR"

accounting:
  vat_rate: "0.13"
"""
    settings_path = temp_dir / "settings.yaml"
    settings_path.write_text(settings_content, encoding="utf-8")
    return settings_path


@pytest.fixture(autouse=True)
def reset_settings():
    """Settings 싱글턴 초기화 (테스트 간 격리)"""
    Settings.reset()
    yield
    Settings.reset()


@pytest.fixture
def ledger() -> LedgerStore:
    """기본 계정과목표를 가진 빈 원장"""
    return LedgerStore()


@pytest.fixture
def catalog() -> ProductCatalog:
    """스토어 상품 목록"""
    return ProductCatalog([
        Product(id="p-tea", name="Ilam Tea 500g", price=Decimal("400"), stock=10),
        Product(id="p-rice", name="Jeera Masino Rice 5kg", price=Decimal("900"), stock=3, is_taxable=False),
    ])


@pytest.fixture
def manager(ledger: LedgerStore, catalog: ProductCatalog) -> DocumentLifecycleManager:
    """문서 생명주기 관리자 (VAT 13%, FY 2080/81)"""
    return DocumentLifecycleManager(
        ledger=ledger,
        vat_rate=Decimal("0.13"),
        fiscal_year="2080/81",
        catalog=catalog,
    )


@pytest.fixture
def consulting_item() -> LineItem:
    """과세 품목 1,000"""
    return LineItem(description="Consulting", quantity=Decimal("1"), rate=Decimal("1000"))


@pytest.fixture
def supplies_item() -> LineItem:
    """과세 품목 500"""
    return LineItem(description="Office supplies", quantity=Decimal("5"), rate=Decimal("100"))
