"""
Dashboard 라우트

핵심 재무 지표 (매출, 비용, VAT, 채권/채무, 현금)
"""

from fastapi import APIRouter, Depends

from core.documents.manager import DocumentLifecycleManager
from web.dependencies import get_manager
from web.models.responses import DashboardResponse

router = APIRouter(prefix="/api", tags=["Dashboard"])


@router.get("/dashboard", response_model=DashboardResponse)
async def get_dashboard(
    manager: DocumentLifecycleManager = Depends(get_manager),
) -> DashboardResponse:
    """대시보드 지표 조회

    모든 값은 현재 계정 잔액에서 계산.
    """
    return DashboardResponse.model_validate(manager.dashboard_stats().to_dict())
