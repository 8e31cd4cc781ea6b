"""
Expense 저장소

expenses 테이블 행 단위 CRUD.
검증은 하지 않음 (LedgerEngine 책임).
"""

from __future__ import annotations

import logging
from datetime import tzinfo
from decimal import Decimal
from typing import TYPE_CHECKING, Any

from core.constants import Tables
from core.ledger.schema import init_expense_schema
from core.ledger.types import ExpenseRecord
from core.utils.timezone import local_zone, today_iso

if TYPE_CHECKING:
    from adapters.db.sqlite_adapter import SQLiteAdapter

logger = logging.getLogger(__name__)

_SELECT_COLUMNS = "id, amount, category, note, date"


def _row_to_record(row: tuple[Any, ...]) -> ExpenseRecord:
    """DB 행 → ExpenseRecord"""
    return ExpenseRecord(
        id=int(row[0]),
        amount=Decimal(str(row[1])),
        category=row[2],
        note=row[3],
        date=row[4],
    )


class ExpenseStore:
    """Expense 저장소

    모든 메서드는 DB 실패 시 StorageError를 그대로 전파 (재시도 없음).

    Args:
        db: SQLite 어댑터
        tz: 마이그레이션 백필 날짜 계산 타임존 (None이면 로컬)

    사용 예시:
    ```python
    async with SQLiteAdapter(db_path) as db:
        store = ExpenseStore(db)
        await store.initialize()

        expense_id = await store.insert(Decimal("12.5"), "Food", "lunch", "2024-03-10")
        records = await store.list_all()
    ```
    """

    def __init__(self, db: SQLiteAdapter, tz: tzinfo | None = None):
        self.db = db
        self.tz = tz if tz is not None else local_zone()

    async def initialize(self, today: str | None = None) -> bool:
        """스키마 보장 + date 컬럼 마이그레이션

        매 프로세스 시작 시 호출해도 안전.

        Args:
            today: 레거시 행 백필 날짜 (None이면 self.tz 기준 오늘)

        Returns:
            마이그레이션 실행 여부
        """
        if today is None:
            today = today_iso(self.tz)
        return await init_expense_schema(self.db, today)

    async def list_all(self) -> list[ExpenseRecord]:
        """전체 기록 조회 (id 내림차순, 최근 생성 순)"""
        rows = await self.db.fetchall(
            f"""
            SELECT {_SELECT_COLUMNS}
            FROM {Tables.EXPENSES}
            ORDER BY id DESC
            """
        )
        return [_row_to_record(row) for row in rows]

    async def get(self, expense_id: int) -> ExpenseRecord | None:
        """단일 기록 조회"""
        row = await self.db.fetchone(
            f"SELECT {_SELECT_COLUMNS} FROM {Tables.EXPENSES} WHERE id = ?",
            (expense_id,),
        )
        return _row_to_record(row) if row else None

    async def insert(
        self,
        amount: Decimal,
        category: str,
        note: str | None,
        date: str | None,
    ) -> int:
        """기록 추가

        Returns:
            생성된 id
        """
        async with self.db.transaction():
            cursor = await self.db.execute(
                f"""
                INSERT INTO {Tables.EXPENSES} (amount, category, note, date)
                VALUES (?, ?, ?, ?)
                """,
                (str(amount), category, note, date),
            )
            expense_id = cursor.lastrowid

        logger.info(f"Expense 추가: id={expense_id} amount={amount} category={category}")
        return int(expense_id)

    async def update(
        self,
        expense_id: int,
        amount: Decimal,
        category: str,
        note: str | None,
        date: str | None,
    ) -> None:
        """기록 수정 (id 제외 전체 필드 덮어쓰기)

        없는 id면 no-op.
        """
        async with self.db.transaction():
            cursor = await self.db.execute(
                f"""
                UPDATE {Tables.EXPENSES}
                SET amount = ?, category = ?, note = ?, date = ?
                WHERE id = ?
                """,
                (str(amount), category, note, date, expense_id),
            )

        if cursor.rowcount == 0:
            logger.debug(f"Expense 수정 대상 없음: id={expense_id}")
        else:
            logger.info(f"Expense 수정: id={expense_id}")

    async def delete(self, expense_id: int) -> None:
        """기록 삭제 (없는 id면 no-op)"""
        async with self.db.transaction():
            cursor = await self.db.execute(
                f"DELETE FROM {Tables.EXPENSES} WHERE id = ?",
                (expense_id,),
            )

        if cursor.rowcount == 0:
            logger.debug(f"Expense 삭제 대상 없음: id={expense_id}")
        else:
            logger.info(f"Expense 삭제: id={expense_id}")
