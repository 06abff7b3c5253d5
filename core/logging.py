"""
로깅 설정

콘솔 + 일 단위 롤링 파일 로그.
uvicorn 로거도 루트 핸들러로 모아 접근 로그가 같은 파일에 남는다.

사용법:
    from core.logging import setup_logging
    setup_logging(settings.environment)
"""

import logging
import sys
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path

from core.constants import Paths
from core.types import AppEnvironment

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
LOG_FILE_NAME = "web.log"
LOG_FILE_BACKUP_COUNT = 14

# 요청/쿼리마다 로그를 남기는 라이브러리 로거
NOISY_LOGGERS = [
    "aiosqlite",
    "httpcore",
    "httpx",
    "asyncio",
    "multipart",
]

# 자체 핸들러 대신 루트로 전파시킬 서버 로거
SERVER_LOGGERS = [
    "uvicorn",
    "uvicorn.error",
    "uvicorn.access",
]


def console_level_for(environment: AppEnvironment | str) -> int:
    """환경별 콘솔 로그 레벨 (개발: DEBUG, 운영: INFO)"""
    if AppEnvironment(environment) == AppEnvironment.DEVELOPMENT:
        return logging.DEBUG
    return logging.INFO


def setup_logging(
    environment: AppEnvironment | str,
    log_dir: Path | None = None,
    file_level: int = logging.INFO,
) -> logging.Logger:
    """루트 로거 초기화

    Args:
        environment: 실행 환경 (콘솔 레벨 결정)
        log_dir: 로그 디렉토리 (None이면 logs/web)
        file_level: 파일 로그 레벨

    Returns:
        설정된 루트 Logger
    """
    log_file = (log_dir or Paths.WEB_LOGS_DIR) / LOG_FILE_NAME
    log_file.parent.mkdir(parents=True, exist_ok=True)
    console_level = console_level_for(environment)

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    root_logger.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    file_handler = TimedRotatingFileHandler(
        filename=log_file,
        when="midnight",
        backupCount=LOG_FILE_BACKUP_COUNT,
        encoding="utf-8",
    )
    file_handler.suffix = "%Y-%m-%d"  # web.log.2026-10-19
    file_handler.setLevel(file_level)
    file_handler.setFormatter(formatter)
    root_logger.addHandler(file_handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    for name in SERVER_LOGGERS:
        server_logger = logging.getLogger(name)
        server_logger.handlers.clear()
        server_logger.propagate = True

    root_logger.info(
        f"로깅 초기화 완료: env={AppEnvironment(environment).value} "
        f"console={logging.getLevelName(console_level)} file={log_file}"
    )
    return root_logger
