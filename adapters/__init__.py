"""
어댑터 레이어

외부 자원(로컬 SQLite 파일)과의 연동을 담당.
"""

from adapters.db import SQLiteAdapter, StorageError

__all__ = [
    "SQLiteAdapter",
    "StorageError",
]
