"""
FastAPI 애플리케이션

라우터 등록 및 앱 설정.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from core.config.loader import get_settings
from core.documents.manager import DocumentLifecycleManager
from core.logging import setup_logging
from web.dependencies import get_manager, is_manager_ready, set_manager
from web.routes import dashboard, health, invoices, ledger, purchases, store

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """앱 생명주기 관리

    관리자가 주입되지 않았으면 settings.yaml 기준으로 새 원장을 만든다.
    """
    setup_logging("web")
    settings = get_settings()

    created = False
    if not is_manager_ready():
        set_manager(DocumentLifecycleManager.from_settings(settings))
        created = True
        logger.info(
            f"Web: 원장 초기화 완료 ({settings.company.company_name}, "
            f"FY {settings.fiscal_year}, VAT {settings.vat_rate})"
        )

    yield

    if created:
        manager = get_manager()
        logger.info(
            f"Web: 종료 (documents={len(manager.list_invoices()) + len(manager.list_purchase_bills())}, "
            f"entries={len(manager.ledger)})"
        )
        set_manager(None)


app = FastAPI(
    title="Ledgerbook API",
    description="소규모 사업자용 복식부기 백오피스 API",
    version=health.API_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# CORS 설정 (개발용)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# =========================================================================
# API 라우터 등록
# =========================================================================

app.include_router(health.router)
app.include_router(dashboard.router)
app.include_router(invoices.router)
app.include_router(purchases.router)
app.include_router(store.router)
app.include_router(ledger.router)
