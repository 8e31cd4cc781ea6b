"""
지출 Ledger

expenses 테이블 스키마/마이그레이션, 행 단위 CRUD, 기간 필터, 집계.

사용 예시:
```python
from core.ledger import ExpenseStore, compute_totals, filter_records

store = ExpenseStore(db, tz)
await store.initialize()

records = await store.list_all()
week = list(filter_records(records, FilterMode.THIS_WEEK, now))
totals = compute_totals(week)
```
"""

from core.ledger.aggregation import (
    build_category_series,
    build_chart_data,
    category_label,
    compute_totals,
)
from core.ledger.filters import (
    filter_records,
    is_canonical_date,
    matches_filter,
    parse_iso_date,
    start_of_week,
)
from core.ledger.schema import init_expense_schema, migrate_add_date_column
from core.ledger.store import ExpenseStore
from core.ledger.types import CategoryTotal, Draft, ExpenseRecord, LedgerTotals

__all__ = [
    # 핵심 클래스
    "ExpenseStore",
    "ExpenseRecord",
    "Draft",
    "CategoryTotal",
    "LedgerTotals",
    # 스키마
    "init_expense_schema",
    "migrate_add_date_column",
    # 필터
    "parse_iso_date",
    "is_canonical_date",
    "start_of_week",
    "matches_filter",
    "filter_records",
    # 집계
    "category_label",
    "compute_totals",
    "build_category_series",
    "build_chart_data",
]
