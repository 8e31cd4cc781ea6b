"""
pytest 공통 fixture 정의

고정 타임존(KST) + 고정 시각 기준으로 날짜 의존 동작을 결정적으로 테스트.
"""

import tempfile
from pathlib import Path
from typing import AsyncGenerator, Iterator

import pytest
import pytest_asyncio

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.config.loader import Settings
from core.engine.ledger_engine import LedgerEngine
from core.ledger.store import ExpenseStore
from tests.helpers import FIXED_NOW, KST


@pytest.fixture
def temp_dir() -> Iterator[Path]:
    """OS 독립적인 임시 디렉토리 생성"""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def temp_settings_file(temp_dir: Path) -> Path:
    """테스트용 settings.yaml 파일 생성"""
    db_path = (temp_dir / "data" / "expenses.db").as_posix()
    settings_content = f"""# 테스트용 settings.yaml
database:
  path: "{db_path}"
timezone: UTC
logging:
  level: debug
"""
    settings_path = temp_dir / "settings.yaml"
    settings_path.write_text(settings_content, encoding="utf-8")
    return settings_path


@pytest.fixture
def reset_settings() -> Iterator[None]:
    """Settings 싱글턴 초기화 (테스트 전후)"""
    Settings.reset()
    yield
    Settings.reset()


@pytest_asyncio.fixture
async def db(tmp_path: Path) -> AsyncGenerator[SQLiteAdapter, None]:
    """테스트용 임시 DB (파일)"""
    adapter = SQLiteAdapter(tmp_path / "ledger.db")
    await adapter.connect()
    yield adapter
    await adapter.close()


@pytest.fixture
def store(db: SQLiteAdapter) -> ExpenseStore:
    """ExpenseStore 인스턴스 (KST)"""
    return ExpenseStore(db, KST)


@pytest_asyncio.fixture
async def engine(store: ExpenseStore) -> LedgerEngine:
    """초기화된 LedgerEngine (시각 고정)"""
    ledger_engine = LedgerEngine(store, KST, clock=lambda: FIXED_NOW)
    await ledger_engine.initialize()
    return ledger_engine
