"""
집계

필터 결과에 대한 총합 및 카테고리별 합계.
캐시 없이 호출 시마다 재계산.
"""

from decimal import Decimal
from typing import Any, Iterable

from core.constants import Defaults
from core.ledger.types import CategoryTotal, ExpenseRecord, LedgerTotals


def category_label(category: str | None) -> str:
    """집계 버킷 이름 (비어 있으면 Uncategorized)"""
    if category is None:
        return Defaults.UNCATEGORIZED
    label = category.strip()
    return label or Defaults.UNCATEGORIZED


def compute_totals(records: Iterable[ExpenseRecord]) -> LedgerTotals:
    """총합 + 카테고리별 합계

    Example:
        Food 10, Food 5, Books 20 → total=35, {Food: 15, Books: 20}
    """
    total = Decimal("0")
    by_category: dict[str, Decimal] = {}

    for record in records:
        total += record.amount
        label = category_label(record.category)
        by_category[label] = by_category.get(label, Decimal("0")) + record.amount

    return LedgerTotals(total=total, by_category=by_category)


def build_category_series(records: Iterable[ExpenseRecord]) -> list[CategoryTotal]:
    """차트용 (label, value) 순서열 (카테고리 첫 등장 순)"""
    return compute_totals(records).as_series()


def build_chart_data(records: Iterable[ExpenseRecord]) -> dict[str, Any]:
    """차트 데이터

    Returns:
        labels, values 포함 차트 데이터 (데이터가 없으면 빈 리스트)
    """
    series = build_category_series(records)
    return {
        "labels": [item.label for item in series],
        "values": [item.value for item in series],
    }
