"""open_ledger / init_logging 통합 테스트"""

import logging
from decimal import Decimal
from pathlib import Path

import pytest

from core.config.loader import Settings
from core.engine.bootstrap import init_logging, open_ledger
from core.types import SubmitOutcome


class TestOpenLedger:
    """open_ledger 테스트"""

    @pytest.mark.asyncio
    async def test_persists_across_reopen(
        self,
        temp_settings_file: Path,
        temp_dir: Path,
        reset_settings: None,
    ) -> None:
        """재시작 후에도 기록 유지"""
        settings = Settings(temp_settings_file)

        async with open_ledger(settings) as engine:
            engine.update_draft(amount="9.99", category="Books", date="2024-03-10")
            assert await engine.submit_draft() is SubmitOutcome.ADDED

        assert (temp_dir / "data" / "expenses.db").exists()

        async with open_ledger(settings) as engine:
            assert len(engine.records) == 1
            record = engine.records[0]
            assert record.amount == Decimal("9.99")
            assert record.category == "Books"
            assert record.date == "2024-03-10"

    @pytest.mark.asyncio
    async def test_closes_connection(self, temp_settings_file: Path, reset_settings: None) -> None:
        """컨텍스트 종료 시 연결 해제"""
        async with open_ledger(Settings(temp_settings_file)) as engine:
            db = engine.store.db
            assert db.is_connected is True

        assert db.is_connected is False


class TestInitLogging:
    """init_logging 테스트"""

    def test_uses_settings_level(
        self,
        temp_settings_file: Path,
        reset_settings: None,
        monkeypatch: pytest.MonkeyPatch,
        tmp_path: Path,
    ) -> None:
        """설정 로그 레벨 적용"""
        monkeypatch.setattr("core.constants.Paths.LOGS_DIR", tmp_path / "logs")
        root = logging.getLogger()
        saved_handlers = list(root.handlers)
        saved_level = root.level

        try:
            result = init_logging(Settings(temp_settings_file))

            assert result is root
            assert all(h.level == logging.DEBUG for h in root.handlers)
            assert (tmp_path / "logs" / "ledger.log").exists()
        finally:
            for handler in list(root.handlers):
                root.removeHandler(handler)
                handler.close()
            for handler in saved_handlers:
                root.addHandler(handler)
            root.setLevel(saved_level)
