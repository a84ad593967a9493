"""
하드코딩 상수 - 변경될 일이 거의 없는 고정값

중요: 경로는 반드시 pathlib.Path 사용 (Windows/Linux 크로스 플랫폼)
금액은 반드시 Decimal 사용 (float 금지)
"""

from decimal import Decimal
from pathlib import Path


# 프로젝트 루트 (이 파일 기준 2단계 상위: core/constants.py → ledgerbook/)
PROJECT_ROOT: Path = Path(__file__).resolve().parent.parent


class Defaults:
    """기본값 상수"""

    COMPANY_NAME: str = "My Nepal Business Pvt Ltd"
    COMPANY_ADDRESS: str = "Kathmandu, Nepal"
    COMPANY_PAN: str = "600000000"
    FISCAL_YEAR: str = "2080/81"
    CURRENCY: str = "NPR"

    # 부가가치세율 (13%)
    VAT_RATE: Decimal = Decimal("0.13")

    WEB_HOST: str = "127.0.0.1"
    WEB_PORT: int = 8000

    LOG_LEVEL: str = "INFO"


class Money:
    """금액 계산 상수

    두 허용 오차는 서로 독립적으로 유지한다 (통합 금지).
    """

    # 소수점 2자리 (paisa 단위)
    QUANTUM: Decimal = Decimal("0.01")

    # 잔액이 이 값 이하이면 완납(PAID)으로 간주
    FULLY_PAID_TOLERANCE: Decimal = Decimal("0.5")

    # |자산 - (부채 + 자본)| 이 이 값 미만이면 대차평형
    BALANCE_SHEET_TOLERANCE: Decimal = Decimal("1")

    ZERO: Decimal = Decimal("0")


class Paths:
    """프로젝트 경로 상수 (pathlib 사용 - OS 독립적)"""

    # 디렉토리
    CONFIG_DIR: Path = PROJECT_ROOT / "config"
    DATA_DIR: Path = PROJECT_ROOT / "data"
    LOGS_DIR: Path = PROJECT_ROOT / "logs"
    WEB_LOGS_DIR: Path = LOGS_DIR / "web"

    # 설정 파일
    SETTINGS_FILE: Path = CONFIG_DIR / "settings.yaml"
