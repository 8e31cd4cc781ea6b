"""
지출 기록 스키마 초기화

프로세스 시작 시마다 호출되어 expenses 테이블을 보장.
CREATE IF NOT EXISTS 패턴으로 안전하게 동작하며,
date 컬럼이 없는 기존 DB는 컬럼 추가 + 오늘 날짜로 백필.
"""

import logging
from typing import TYPE_CHECKING

from core.constants import Tables

if TYPE_CHECKING:
    from adapters.db.sqlite_adapter import SQLiteAdapter

logger = logging.getLogger(__name__)


async def init_expense_schema(db: "SQLiteAdapter", today: str) -> bool:
    """expenses 스키마 초기화 (테이블 + 마이그레이션 + 인덱스)

    Args:
        db: SQLiteAdapter 인스턴스
        today: 백필에 사용할 오늘 날짜 (YYYY-MM-DD)

    Returns:
        date 컬럼 마이그레이션 실행 여부

    Raises:
        StorageError: DB 실패
    """
    await _create_expense_table(db)
    migrated = await migrate_add_date_column(db, today)

    # 인덱스는 date 컬럼이 보장된 뒤에 생성
    await db.execute(
        f"CREATE INDEX IF NOT EXISTS {Tables.EXPENSES_DATE_INDEX} "
        f"ON {Tables.EXPENSES}(date)"
    )
    await db.commit()

    logger.info("Expense 스키마 초기화 완료")
    return migrated


async def _create_expense_table(db: "SQLiteAdapter") -> None:
    """expenses 테이블 생성

    date는 생성 시점에는 NULL 허용 (마이그레이션 후 항상 채워짐).
    amount는 NUMERIC: 정수는 INTEGER, 그 외는 REAL(double, 유효숫자 약 15자리)로 저장.
    """
    await db.execute(f"""
        CREATE TABLE IF NOT EXISTS {Tables.EXPENSES} (
            id               INTEGER PRIMARY KEY AUTOINCREMENT,
            amount           NUMERIC NOT NULL,
            category         TEXT NOT NULL,
            note             TEXT,
            date             TEXT
        )
    """)
    await db.commit()


async def migrate_add_date_column(db: "SQLiteAdapter", today: str) -> bool:
    """date 컬럼 마이그레이션

    컬럼이 없을 때만 ALTER + 백필을 한 트랜잭션으로 실행.
    이미 있으면 no-op.

    Args:
        db: SQLiteAdapter 인스턴스
        today: 백필 값 (실행 단위로 하나의 값)

    Returns:
        실행 여부
    """
    columns = await db.get_column_names(Tables.EXPENSES)
    if "date" in columns:
        logger.debug("date 컬럼 존재 - 마이그레이션 생략")
        return False

    async with db.transaction():
        await db.execute("BEGIN")
        await db.execute(f"ALTER TABLE {Tables.EXPENSES} ADD COLUMN date TEXT")
        cursor = await db.execute(
            f"""
            UPDATE {Tables.EXPENSES}
            SET date = ?
            WHERE date IS NULL OR date = ''
            """,
            (today,),
        )
        backfilled = cursor.rowcount

    logger.info(
        f"date 컬럼 마이그레이션 완료: {backfilled}건 백필 (date={today})",
    )
    return True
