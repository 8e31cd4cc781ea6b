"""
Engine 상태 컨테이너

화면 단위 가변 상태(작업 집합, 필터, 편집 세션, 초안)를 한 곳에 모음.
"""

from dataclasses import dataclass, field

from core.domain.state_machines import EditSessionStateMachine
from core.ledger.types import Draft, ExpenseRecord
from core.types import FilterMode


@dataclass
class EngineState:
    """LedgerEngine 소유 상태

    records는 Store의 읽기 캐시. 변경 후에는 항상 통째로 교체.
    """

    records: list[ExpenseRecord] = field(default_factory=list)
    filter_mode: FilterMode = FilterMode.ALL
    session: EditSessionStateMachine = field(default_factory=EditSessionStateMachine)
    draft: Draft = field(default_factory=Draft)

    def find(self, record_id: int) -> ExpenseRecord | None:
        """작업 집합에서 id로 조회"""
        for record in self.records:
            if record.id == record_id:
                return record
        return None
