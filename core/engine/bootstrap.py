"""
Ledger Bootstrap

설정 로드, DB 연결, Store/Engine 조립.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.config.loader import Settings, get_settings
from core.constants import Defaults
from core.engine.ledger_engine import LedgerEngine
from core.ledger.store import ExpenseStore
from core.logging import setup_logging

logger = logging.getLogger(__name__)


def init_logging(settings: Settings | None = None) -> logging.Logger:
    """설정의 로그 레벨로 콘솔/파일 로깅 초기화"""
    if settings is None:
        settings = get_settings()

    return setup_logging(
        Defaults.PROCESS_NAME,
        console_level=settings.log_level,
        file_level=settings.log_level,
    )


@asynccontextmanager
async def open_ledger(settings: Settings | None = None) -> AsyncIterator[LedgerEngine]:
    """초기화된 LedgerEngine 제공

    스키마 보장/마이그레이션 및 작업 집합 적재까지 마친 엔진을 반환하고,
    종료 시 DB 연결을 닫는다.

    사용 예시:
    ```python
    async with open_ledger() as engine:
        engine.update_draft(amount="9.99", category="Books")
        await engine.submit_draft()
    ```

    Raises:
        StorageError: DB 초기화 실패
    """
    if settings is None:
        settings = get_settings()

    tz = settings.tzinfo

    async with SQLiteAdapter(settings.db_path) as db:
        engine = LedgerEngine(ExpenseStore(db, tz), tz)
        await engine.initialize()
        logger.info(f"Ledger 준비 완료: {settings.db_path} ({len(engine.records)}건)")
        yield engine
