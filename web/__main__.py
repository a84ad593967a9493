"""
Ledgerbook 웹 서버 진입점

실행 방법:
    python -m web

로깅은 앱 lifespan에서 setup_logging("web")으로 초기화된다.
"""

import uvicorn

from core.constants import Defaults

if __name__ == "__main__":
    uvicorn.run(
        "web.app:app",
        host=Defaults.WEB_HOST,
        port=Defaults.WEB_PORT,
        log_level=Defaults.LOG_LEVEL.lower(),
        reload=False,
    )
