"""
Ledger 타입 정의

지출 기록, 입력 초안, 집계 결과 데이터 구조
"""

from dataclasses import dataclass, field
from decimal import Decimal


@dataclass(frozen=True)
class ExpenseRecord:
    """지출 기록 (영속 엔티티)

    id는 Store가 부여하며 이후 변경 불가.
    note는 비어 있으면 None, date는 YYYY-MM-DD 텍스트.
    """

    id: int
    amount: Decimal
    category: str
    note: str | None
    date: str | None


@dataclass
class Draft:
    """입력 중인 기록 초안

    사용자가 입력한 그대로의 텍스트. 검증은 Engine이 submit 시점에 수행.
    """

    amount: str = ""
    category: str = ""
    note: str = ""
    date: str = ""


@dataclass(frozen=True)
class CategoryTotal:
    """카테고리별 합계 (차트 입력 단위)"""

    label: str
    value: Decimal


@dataclass(frozen=True)
class LedgerTotals:
    """필터 적용된 목록의 집계 결과

    by_category는 필터 결과에서 카테고리가 처음 등장한 순서를 유지.
    """

    total: Decimal
    by_category: dict[str, Decimal] = field(default_factory=dict)

    def as_series(self) -> list[CategoryTotal]:
        """(label, value) 순서열"""
        return [CategoryTotal(label, value) for label, value in self.by_category.items()]
