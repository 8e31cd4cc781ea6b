"""
State Machines

편집 세션 상태 전이 관리.
IDLE(신규 작성) / EDITING(기존 기록 수정) 두 상태.
"""

import logging
from enum import Enum

from core.types import SessionState

logger = logging.getLogger(__name__)


class StateMachineError(Exception):
    """상태 전이 오류"""
    pass


class StateMachine:
    """상태 머신 기본 클래스

    Args:
        initial_state: 초기 상태
        transitions: 허용된 전이 정의 {from_state: [to_states]}
        name: 머신 이름 (로깅용)
    """

    def __init__(
        self,
        initial_state: str | Enum,
        transitions: dict[str, list[str]],
        name: str = "StateMachine",
    ):
        self._state = initial_state.value if isinstance(initial_state, Enum) else initial_state
        self._transitions = transitions
        self._name = name
        self._history: list[tuple[str, str]] = []

    @property
    def state(self) -> str:
        """현재 상태"""
        return self._state

    def can_transition(self, to_state: str | Enum) -> bool:
        """전이 가능 여부 확인"""
        target = to_state.value if isinstance(to_state, Enum) else to_state
        allowed = self._transitions.get(self._state, [])
        return target in allowed

    def transition(self, to_state: str | Enum) -> str:
        """상태 전이

        Args:
            to_state: 목표 상태

        Returns:
            새 상태

        Raises:
            StateMachineError: 허용되지 않은 전이
        """
        target = to_state.value if isinstance(to_state, Enum) else to_state

        if not self.can_transition(target):
            allowed = self._transitions.get(self._state, [])
            raise StateMachineError(
                f"{self._name}: Cannot transition from {self._state} to {target}. "
                f"Allowed: {allowed}"
            )

        old_state = self._state
        self._state = target
        self._history.append((old_state, target))

        logger.debug(
            f"{self._name}: {old_state} → {target}",
        )

        return target

    @property
    def history(self) -> list[tuple[str, str]]:
        """상태 전이 이력"""
        return self._history.copy()


class EditSessionStateMachine(StateMachine):
    """편집 세션 상태 머신

    전이 규칙:
    - IDLE → EDITING: 기존 기록 선택
    - EDITING → EDITING: 편집 중 다른 기록 선택
    - EDITING → IDLE: 수정 커밋, 취소, 대상 기록 삭제

    신규 추가는 IDLE에서만 가능하며 상태는 IDLE로 유지.
    """

    TRANSITIONS: dict[str, list[str]] = {
        "IDLE": ["EDITING"],
        "EDITING": ["EDITING", "IDLE"],
    }

    def __init__(self) -> None:
        super().__init__(
            initial_state=SessionState.IDLE,
            transitions=self.TRANSITIONS,
            name="EditSessionStateMachine",
        )
        self._active_id: int | None = None

    @property
    def active_id(self) -> int | None:
        """편집 대상 기록 id (IDLE이면 None)"""
        return self._active_id

    @property
    def is_editing(self) -> bool:
        """편집 중 여부"""
        return self._state == SessionState.EDITING.value

    def begin(self, record_id: int) -> None:
        """기존 기록 편집 시작"""
        self.transition(SessionState.EDITING)
        self._active_id = record_id

    def reset(self) -> None:
        """IDLE로 복귀 (이미 IDLE이면 변화 없음)"""
        if self.is_editing:
            self.transition(SessionState.IDLE)
        self._active_id = None
