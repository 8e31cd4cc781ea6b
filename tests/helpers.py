"""
테스트 공통 상수/헬퍼
"""

from datetime import datetime, timedelta, timezone
from decimal import Decimal

from core.ledger.types import ExpenseRecord

# KST 타임존 (UTC+9)
KST = timezone(timedelta(hours=9))

# 2024-03-12 (화요일) 10:00 KST
FIXED_NOW = datetime(2024, 3, 12, 10, 0, 0, tzinfo=KST)
FIXED_TODAY = "2024-03-12"


def make_record(
    record_id: int,
    amount: str,
    category: str = "Food",
    date: str | None = FIXED_TODAY,
    note: str | None = None,
) -> ExpenseRecord:
    """ExpenseRecord 생성 헬퍼"""
    return ExpenseRecord(
        id=record_id,
        amount=Decimal(amount),
        category=category,
        note=note,
        date=date,
    )
