"""로깅 설정 테스트"""

import logging
import logging.handlers
from pathlib import Path
from typing import Iterator

import pytest

from core.logging import LOG_FILE_BACKUP_COUNT, get_log_file_path, setup_logging


@pytest.fixture
def restore_root_logger() -> Iterator[None]:
    """루트 로거 핸들러/레벨 복원"""
    root = logging.getLogger()
    saved_handlers = list(root.handlers)
    saved_level = root.level
    yield
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    for handler in saved_handlers:
        root.addHandler(handler)
    root.setLevel(saved_level)


class TestSetupLogging:
    """setup_logging 테스트"""

    def test_creates_log_file(self, tmp_path: Path, restore_root_logger: None) -> None:
        """로그 디렉토리/파일 생성"""
        log_dir = tmp_path / "logs"

        setup_logging("ledger_test", log_dir=log_dir)

        assert log_dir.exists()
        assert get_log_file_path("ledger_test", log_dir).exists()

    def test_handlers(self, tmp_path: Path, restore_root_logger: None) -> None:
        """콘솔 + 파일 핸들러 2개, 재호출 시 중복 없음"""
        setup_logging("ledger_test", log_dir=tmp_path)
        root = setup_logging("ledger_test", console_level="WARNING", log_dir=tmp_path)

        assert len(root.handlers) == 2
        assert root.handlers[0].level == logging.WARNING

        file_handler = root.handlers[1]
        assert isinstance(file_handler, logging.handlers.TimedRotatingFileHandler)
        assert file_handler.backupCount == LOG_FILE_BACKUP_COUNT

    def test_file_level_filters(self, tmp_path: Path, restore_root_logger: None) -> None:
        """파일 레벨 미만 로그는 기록하지 않음"""
        root = setup_logging("ledger_test", file_level="WARNING", log_dir=tmp_path)

        logging.getLogger("core.test").info("skipped-message")
        logging.getLogger("core.test").warning("kept-message")
        for handler in root.handlers:
            handler.flush()

        content = get_log_file_path("ledger_test", tmp_path).read_text(encoding="utf-8")
        assert "kept-message" in content
        assert "skipped-message" not in content

    def test_noisy_loggers_quieted(self, tmp_path: Path, restore_root_logger: None) -> None:
        """aiosqlite 로거는 WARNING"""
        setup_logging("ledger_test", log_dir=tmp_path)

        assert logging.getLogger("aiosqlite").level == logging.WARNING


class TestGetLogFilePath:
    """get_log_file_path 테스트"""

    def test_path(self, tmp_path: Path) -> None:
        """<process_name>.log"""
        assert get_log_file_path("ledger", tmp_path) == tmp_path / "ledger.log"
