"""
설정 로더

settings.yaml 로드 및 회사/회계 설정 생성
"""

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any

import yaml

from core.constants import Defaults, Paths


@dataclass(frozen=True)
class CompanySettings:
    """회사 설정 (settings.yaml에서 로드)

    불변 데이터 구조로 설정 변경 방지
    """

    company_name: str
    address: str
    pan: str
    fiscal_year: str
    currency: str
    vat_rate: Decimal

    @classmethod
    def default(cls) -> "CompanySettings":
        """기본 설정 (settings.yaml이 없을 때)"""
        return cls(
            company_name=Defaults.COMPANY_NAME,
            address=Defaults.COMPANY_ADDRESS,
            pan=Defaults.COMPANY_PAN,
            fiscal_year=Defaults.FISCAL_YEAR,
            currency=Defaults.CURRENCY,
            vat_rate=Defaults.VAT_RATE,
        )


class SettingsLoadError(Exception):
    """Settings 로드 실패 예외"""

    pass


def _parse_vat_rate(value: Any) -> Decimal:
    """VAT 세율 파싱 (0 이상 1 미만)"""
    try:
        rate = Decimal(str(value))
    except (InvalidOperation, ValueError) as e:
        raise SettingsLoadError(f"유효하지 않은 vat_rate입니다: '{value}'") from e

    if rate < 0 or rate >= 1:
        raise SettingsLoadError(
            f"vat_rate는 0 이상 1 미만이어야 합니다: {rate}"
        )
    return rate


def load_company_settings(path: Path | None = None) -> CompanySettings:
    """settings.yaml 파일 로드

    파일이 없으면 기본값을 사용한다.

    Args:
        path: settings.yaml 경로 (None이면 기본 경로 사용)

    Returns:
        CompanySettings 인스턴스

    Raises:
        SettingsLoadError: 형식이 잘못된 경우
    """
    if path is None:
        path = Paths.SETTINGS_FILE

    if not path.exists():
        return CompanySettings.default()

    try:
        content = path.read_text(encoding="utf-8")
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise SettingsLoadError(f"settings.yaml 파싱 실패: {e}") from e

    if data is None:
        return CompanySettings.default()

    if not isinstance(data, dict):
        raise SettingsLoadError("settings.yaml 최상위는 mapping이어야 합니다")

    company = data.get("company") or {}
    accounting = data.get("accounting") or {}

    fiscal_year = str(company.get("fiscal_year", Defaults.FISCAL_YEAR))
    if "/" not in fiscal_year:
        raise SettingsLoadError(
            f"fiscal_year 형식이 잘못되었습니다 (예: 2080/81): '{fiscal_year}'"
        )

    return CompanySettings(
        company_name=str(company.get("name", Defaults.COMPANY_NAME)),
        address=str(company.get("address", Defaults.COMPANY_ADDRESS)),
        pan=str(company.get("pan", Defaults.COMPANY_PAN)),
        fiscal_year=fiscal_year,
        currency=str(company.get("currency", Defaults.CURRENCY)),
        vat_rate=_parse_vat_rate(accounting.get("vat_rate", Defaults.VAT_RATE)),
    )


class Settings:
    """애플리케이션 설정 (싱글턴 패턴)

    settings.yaml을 로드하고 관련 설정을 제공
    """

    _instance: "Settings | None" = None
    _company: CompanySettings | None = None

    def __new__(cls, settings_path: Path | None = None) -> "Settings":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self, settings_path: Path | None = None) -> None:
        if self._company is None:
            type(self)._company = load_company_settings(settings_path)

    @property
    def company(self) -> CompanySettings:
        """회사 설정 전체"""
        assert self._company is not None
        return self._company

    @property
    def fiscal_year(self) -> str:
        """현재 회계연도 (예: 2080/81)"""
        return self.company.fiscal_year

    @property
    def vat_rate(self) -> Decimal:
        """VAT 세율"""
        return self.company.vat_rate

    @property
    def currency(self) -> str:
        """통화 코드"""
        return self.company.currency

    @classmethod
    def reset(cls) -> None:
        """싱글턴 인스턴스 초기화 (테스트용)"""
        cls._instance = None
        cls._company = None


def get_settings(settings_path: Path | None = None) -> Settings:
    """Settings 인스턴스 반환

    Args:
        settings_path: settings.yaml 경로 (None이면 기본 경로 사용)

    Returns:
        Settings 싱글턴 인스턴스
    """
    return Settings(settings_path)
