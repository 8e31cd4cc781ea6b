"""
SQLite 어댑터

WAL 모드로 SQLite 연결 관리.
모든 I/O 실패는 StorageError로 변환하여 호출자에게 전파 (재시도 없음).

주의: SQLite alias로 time, count 사용 금지 (예약어)
"""

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, AsyncIterator

import aiosqlite

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """저장소 초기화/조회/쓰기 실패 예외"""

    pass


async def create_connection(db_path: Path | str) -> aiosqlite.Connection:
    """SQLite 연결 생성 (WAL 모드)

    Args:
        db_path: DB 파일 경로 (":memory:" 허용)

    Returns:
        aiosqlite 연결 객체

    Raises:
        StorageError: 디렉토리 생성 또는 연결 실패
    """
    db_path_str = str(db_path)

    try:
        # 디렉토리가 없으면 생성
        if db_path_str != ":memory:":
            Path(db_path).parent.mkdir(parents=True, exist_ok=True)

        conn = await aiosqlite.connect(db_path_str)

        # WAL 모드 설정
        await conn.execute("PRAGMA journal_mode=WAL")

        # 동시 접근 설정
        await conn.execute("PRAGMA busy_timeout=30000")  # 30초 대기
    except (aiosqlite.Error, OSError) as e:
        raise StorageError(f"DB 연결 실패: {db_path_str}: {e}") from e

    logger.info(
        "SQLite 연결 생성",
        extra={"db_path": db_path_str},
    )

    return conn


class SQLiteAdapter:
    """SQLite 어댑터

    WAL 모드로 SQLite 연결 관리.
    트랜잭션 컨텍스트 매니저 제공.

    Args:
        db_path: DB 파일 경로

    사용 예시:
    ```python
    async with SQLiteAdapter(db_path) as adapter:
        async with adapter.transaction():
            await adapter.execute("INSERT INTO ...")
    ```
    """

    def __init__(self, db_path: Path | str):
        self.db_path = db_path if str(db_path) == ":memory:" else Path(db_path)
        self._conn: aiosqlite.Connection | None = None

    @property
    def is_connected(self) -> bool:
        """연결 상태 확인"""
        return self._conn is not None

    async def connect(self) -> None:
        """연결 생성"""
        if self._conn is not None:
            return

        self._conn = await create_connection(self.db_path)

    async def close(self) -> None:
        """연결 종료"""
        if self._conn is not None:
            await self._conn.close()
            self._conn = None
            logger.info("SQLite 연결 종료")

    def _require_conn(self) -> aiosqlite.Connection:
        if self._conn is None:
            raise StorageError("Not connected to database")
        return self._conn

    async def execute(
        self,
        sql: str,
        parameters: tuple[Any, ...] | None = None,
    ) -> aiosqlite.Cursor:
        """SQL 실행"""
        conn = self._require_conn()

        try:
            if parameters:
                return await conn.execute(sql, parameters)
            return await conn.execute(sql)
        except aiosqlite.Error as e:
            raise StorageError(f"SQL 실행 실패: {e}") from e

    async def fetchone(
        self,
        sql: str,
        parameters: tuple[Any, ...] | None = None,
    ) -> tuple[Any, ...] | None:
        """단일 행 조회"""
        cursor = await self.execute(sql, parameters)
        try:
            return await cursor.fetchone()
        except aiosqlite.Error as e:
            raise StorageError(f"조회 실패: {e}") from e

    async def fetchall(
        self,
        sql: str,
        parameters: tuple[Any, ...] | None = None,
    ) -> list[tuple[Any, ...]]:
        """전체 행 조회"""
        cursor = await self.execute(sql, parameters)
        try:
            return list(await cursor.fetchall())
        except aiosqlite.Error as e:
            raise StorageError(f"조회 실패: {e}") from e

    async def commit(self) -> None:
        """커밋"""
        if self._conn is not None:
            try:
                await self._conn.commit()
            except aiosqlite.Error as e:
                raise StorageError(f"커밋 실패: {e}") from e

    async def rollback(self) -> None:
        """롤백"""
        if self._conn is not None:
            try:
                await self._conn.rollback()
            except aiosqlite.Error as e:
                raise StorageError(f"롤백 실패: {e}") from e

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[aiosqlite.Connection]:
        """트랜잭션 컨텍스트 매니저

        성공 시 자동 커밋, 예외 시 자동 롤백.

        사용 예시:
        ```python
        async with adapter.transaction():
            await adapter.execute("INSERT INTO ...")
            # 성공 시 자동 커밋
        ```
        """
        conn = self._require_conn()

        try:
            yield conn
            await self.commit()
        except Exception:
            await self.rollback()
            raise

    async def get_table_info(self, table_name: str) -> list[dict[str, Any]]:
        """테이블 정보 조회"""
        rows = await self.fetchall(f"PRAGMA table_info({table_name})")

        columns = []
        for row in rows:
            columns.append({
                "cid": row[0],
                "name": row[1],
                "type": row[2],
                "notnull": bool(row[3]),
                "default_value": row[4],
                "pk": bool(row[5]),
            })

        return columns

    async def get_column_names(self, table_name: str) -> set[str]:
        """테이블 컬럼 이름 집합"""
        return {c["name"] for c in await self.get_table_info(table_name)}

    # -------------------------------------------------------------------------
    # 컨텍스트 매니저
    # -------------------------------------------------------------------------

    async def __aenter__(self) -> "SQLiteAdapter":
        await self.connect()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()
