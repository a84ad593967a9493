"""
의존성 주입

FastAPI의 Depends를 사용한 의존성 관리.
"""

from fastapi import HTTPException

from core.config.loader import Settings, get_settings
from core.documents.manager import DocumentLifecycleManager


def get_app_settings() -> Settings:
    """애플리케이션 설정 반환"""
    return get_settings()


# =========================================================================
# DocumentLifecycleManager (프로세스 전역)
# =========================================================================

# lifespan에서 설정되는 전역 관리자 인스턴스
_manager: DocumentLifecycleManager | None = None


def set_manager(manager: DocumentLifecycleManager | None) -> None:
    """DocumentLifecycleManager 설정

    앱 시작 시 호출하여 전역 인스턴스 설정 (테스트에서는 직접 주입).

    Args:
        manager: DocumentLifecycleManager 인스턴스 (None이면 해제)
    """
    global _manager
    _manager = manager


def get_manager() -> DocumentLifecycleManager:
    """DocumentLifecycleManager 반환

    Raises:
        HTTPException: 초기화 전이면 503
    """
    if _manager is None:
        raise HTTPException(
            status_code=503,
            detail="Ledger is not initialized",
        )
    return _manager


def is_manager_ready() -> bool:
    """관리자 초기화 여부"""
    return _manager is not None
