"""
로깅 설정 테스트
"""

import logging
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path

import pytest

from core.logging import LOG_FILE_NAME, console_level_for, setup_logging
from core.types import AppEnvironment


@pytest.fixture
def restore_root_logger():
    """테스트 후 루트 로거 원복"""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


class TestConsoleLevel:
    def test_development_is_debug(self) -> None:
        assert console_level_for(AppEnvironment.DEVELOPMENT) == logging.DEBUG

    def test_production_is_info(self) -> None:
        assert console_level_for("production") == logging.INFO


class TestSetupLogging:
    """setup_logging"""

    def test_creates_file_and_handlers(self, tmp_path: Path, restore_root_logger) -> None:
        log_dir = tmp_path / "logs"

        root = setup_logging(AppEnvironment.PRODUCTION, log_dir=log_dir)

        assert (log_dir / LOG_FILE_NAME).exists()
        file_handlers = [h for h in root.handlers if isinstance(h, TimedRotatingFileHandler)]
        assert len(file_handlers) == 1
        assert len(root.handlers) == 2

    def test_server_loggers_propagate(self, tmp_path: Path, restore_root_logger) -> None:
        access = logging.getLogger("uvicorn.access")
        access.propagate = False

        setup_logging(AppEnvironment.DEVELOPMENT, log_dir=tmp_path)

        assert access.propagate is True
        assert logging.getLogger("aiosqlite").level == logging.WARNING

    def test_repeated_setup_does_not_duplicate(self, tmp_path: Path, restore_root_logger) -> None:
        setup_logging(AppEnvironment.DEVELOPMENT, log_dir=tmp_path)
        root = setup_logging(AppEnvironment.DEVELOPMENT, log_dir=tmp_path)

        assert len(root.handlers) == 2
