"""
타입 정의 모듈

Enum 등 핵심 타입 정의
모든 Enum은 str을 상속하여 문자열 직렬화 가능
"""

from enum import Enum


class FilterMode(str, Enum):
    """목록 조회 기간 필터"""

    ALL = "ALL"
    THIS_WEEK = "THIS_WEEK"  # 일요일 시작 주
    THIS_MONTH = "THIS_MONTH"

    @property
    def label(self) -> str:
        """화면 표시용 이름"""
        return _FILTER_LABELS[self]


_FILTER_LABELS: dict[FilterMode, str] = {
    FilterMode.ALL: "All",
    FilterMode.THIS_WEEK: "This Week",
    FilterMode.THIS_MONTH: "This Month",
}


class SessionState(str, Enum):
    """편집 세션 상태"""

    IDLE = "IDLE"  # 신규 기록 작성
    EDITING = "EDITING"  # 기존 기록 수정


class SubmitOutcome(str, Enum):
    """submit_draft 처리 결과"""

    ADDED = "ADDED"
    UPDATED = "UPDATED"
    REJECTED = "REJECTED"  # 검증 실패 (Store 호출 없음)
