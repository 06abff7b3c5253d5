"""
Web 진입점

실행 방법:
    python -m web
"""

import uvicorn

from core.config.loader import get_settings
from core.constants import Defaults
from core.logging import setup_logging

if __name__ == "__main__":
    settings = get_settings()
    setup_logging(settings.environment)

    # log_config=None: 위에서 구성한 루트 핸들러를 그대로 사용
    uvicorn.run(
        "web.app:create_app",
        factory=True,
        host=Defaults.WEB_HOST,
        port=Defaults.WEB_PORT,
        log_config=None,
        reload=False,
    )
