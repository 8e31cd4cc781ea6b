"""
Ledger Engine

ExpenseStore 위의 오케스트레이션 계층.
- 입력 검증 및 추가/수정 분기 (편집 세션 상태 기준)
- 변경 후 작업 집합 전체 재적재
- 기간 필터 및 집계 (읽기 전용 파생 값)

모든 Store 호출은 순차적으로 await 되며, 이전 변경의 refresh()가
끝나기 전에 다음 변경을 시작하지 않는다.
"""

import logging
import math
from dataclasses import dataclass, fields, replace
from datetime import datetime, tzinfo
from decimal import Decimal, InvalidOperation
from typing import Any, Callable

from core.engine.state import EngineState
from core.ledger.aggregation import build_chart_data, compute_totals
from core.ledger.filters import filter_records, is_canonical_date
from core.ledger.store import ExpenseStore
from core.ledger.types import CategoryTotal, Draft, ExpenseRecord, LedgerTotals
from core.types import FilterMode, SessionState, SubmitOutcome
from core.utils.timezone import now_in

logger = logging.getLogger(__name__)

_DRAFT_FIELDS = frozenset(f.name for f in fields(Draft))


@dataclass(frozen=True)
class _ValidatedExpense:
    """검증 통과한 필드 값"""

    amount: Decimal
    category: str
    note: str | None
    date: str


def parse_amount(text: str) -> Decimal | None:
    """금액 텍스트 → Decimal (양의 유한수만)

    amount 컬럼은 NUMERIC이라 정수가 아닌 값은 REAL(double)로 저장됨.
    double로 정확히 되돌아오지 않는 값(유효숫자 약 15자리 초과,
    0으로 언더플로, 무한대로 오버플로)은 저장 후 값이 달라지므로 거부.

    Example:
        >>> parse_amount("12.5")
        Decimal('12.5')
        >>> parse_amount("1e-400") is None
        True
    """
    try:
        amount = Decimal(text.strip())
    except (InvalidOperation, AttributeError):
        return None

    if not amount.is_finite() or amount <= 0:
        return None

    stored = float(amount)
    if not math.isfinite(stored) or stored <= 0:
        return None
    if Decimal(repr(stored)) != amount:
        return None
    return amount


def format_amount(amount: Decimal) -> str:
    """Decimal → 편집용 텍스트 (지수 표기 없음)"""
    return format(amount, "f")


class LedgerEngine:
    """Ledger Engine

    작업 집합, 필터, 편집 세션, 초안을 EngineState 하나로 관리.
    UI는 파생 값만 읽고, 변경은 intent 메서드로만 요청.

    Args:
        store: ExpenseStore
        tz: 주/월 경계 및 "오늘" 계산 타임존
        clock: 현재 시각 함수 (테스트용, 기본 datetime.now(tz))

    사용 예시:
    ```python
    engine = LedgerEngine(ExpenseStore(db, tz), tz)
    await engine.initialize()

    engine.update_draft(amount="12.5", category="Food")
    await engine.submit_draft()

    engine.set_filter(FilterMode.THIS_WEEK)
    totals = engine.totals()
    ```
    """

    def __init__(
        self,
        store: ExpenseStore,
        tz: tzinfo,
        clock: Callable[[], datetime] | None = None,
    ):
        self.store = store
        self.tz = tz
        self._clock = clock
        self._state = EngineState()
        self._state.draft = self._blank_draft()

    # -------------------------------------------------------------------------
    # 시간
    # -------------------------------------------------------------------------

    def now(self) -> datetime:
        """엔진 타임존 기준 현재 시각"""
        if self._clock is None:
            return now_in(self.tz)
        current = self._clock()
        if current.tzinfo is None:
            return current.replace(tzinfo=self.tz)
        return current.astimezone(self.tz)

    def today(self) -> str:
        """엔진 타임존 기준 오늘 (YYYY-MM-DD)"""
        return self.now().date().isoformat()

    def _blank_draft(self) -> Draft:
        return Draft(date=self.today())

    # -------------------------------------------------------------------------
    # 읽기 전용 상태
    # -------------------------------------------------------------------------

    @property
    def records(self) -> list[ExpenseRecord]:
        """작업 집합 (id 내림차순)"""
        return list(self._state.records)

    @property
    def filter_mode(self) -> FilterMode:
        """현재 필터"""
        return self._state.filter_mode

    @property
    def session_state(self) -> SessionState:
        """편집 세션 상태"""
        return SessionState(self._state.session.state)

    @property
    def active_id(self) -> int | None:
        """편집 대상 id"""
        return self._state.session.active_id

    @property
    def is_editing(self) -> bool:
        return self._state.session.is_editing

    @property
    def draft(self) -> Draft:
        """초안 사본 (직접 수정해도 엔진 상태는 바뀌지 않음)"""
        return replace(self._state.draft)

    # -------------------------------------------------------------------------
    # Store 연동
    # -------------------------------------------------------------------------

    async def initialize(self) -> None:
        """스키마 보장 후 작업 집합 적재 (시작 시 1회)"""
        await self.store.initialize(self.today())
        await self.refresh()

    async def refresh(self) -> None:
        """Store에서 전체 재적재 후 작업 집합 교체"""
        self._state.records = await self.store.list_all()
        logger.debug(f"작업 집합 재적재: {len(self._state.records)}건")

    # -------------------------------------------------------------------------
    # 초안 / 편집 세션
    # -------------------------------------------------------------------------

    def update_draft(self, **changes: str) -> Draft:
        """초안 필드 변경

        Raises:
            TypeError: 알 수 없는 필드
        """
        unknown = set(changes) - _DRAFT_FIELDS
        if unknown:
            raise TypeError(f"Unknown draft field(s): {sorted(unknown)}")

        self._state.draft = replace(self._state.draft, **changes)
        return self.draft

    def _validate(self, draft: Draft) -> tuple[_ValidatedExpense | None, str | None]:
        """초안 검증 (추가/수정 공통)

        Returns:
            (검증 결과, 거부 사유) 중 하나만 값이 있음
        """
        amount = parse_amount(draft.amount)
        if amount is None:
            return None, f"invalid amount: {draft.amount!r}"

        category = draft.category.strip()
        if not category:
            return None, "empty category"

        note = draft.note.strip() or None

        date = draft.date.strip()
        if not date:
            date = self.today()
        elif not is_canonical_date(date):
            # 거부하지 않고 그대로 저장 (기간 필터에서만 제외됨)
            logger.warning(f"비정규 날짜 형식 저장: {date!r}")

        return _ValidatedExpense(amount, category, note, date), None

    async def submit_draft(self, draft: Draft | None = None) -> SubmitOutcome:
        """초안 제출 (추가/수정 단일 진입점)

        IDLE이면 insert, EDITING이면 update. 성공 시 세션 IDLE 복귀,
        초안 초기화, refresh(). 검증 실패 시 Store 호출 없이 초안 유지.

        Args:
            draft: 제출할 초안 (None이면 현재 초안)

        Returns:
            ADDED / UPDATED / REJECTED

        Raises:
            StorageError: DB 실패 (상태는 변경되지 않음)
        """
        if draft is not None:
            self._state.draft = replace(draft)

        validated, reason = self._validate(self._state.draft)
        if validated is None:
            logger.info(f"초안 거부: {reason}")
            return SubmitOutcome.REJECTED

        session = self._state.session
        if session.is_editing:
            assert session.active_id is not None
            await self.store.update(
                session.active_id,
                validated.amount,
                validated.category,
                validated.note,
                validated.date,
            )
            outcome = SubmitOutcome.UPDATED
        else:
            await self.store.insert(
                validated.amount,
                validated.category,
                validated.note,
                validated.date,
            )
            outcome = SubmitOutcome.ADDED

        self._reset_session()
        await self.refresh()
        return outcome

    def begin_edit(self, record_id: int) -> bool:
        """기존 기록 편집 시작

        작업 집합에 없는 id면 no-op (오래된 UI 참조 방어).

        Returns:
            편집 시작 여부
        """
        record = self._state.find(record_id)
        if record is None:
            logger.debug(f"편집 대상 없음 (무시): id={record_id}")
            return False

        self._state.session.begin(record.id)
        self._state.draft = Draft(
            amount=format_amount(record.amount),
            category=record.category,
            note=record.note or "",
            date=record.date or self.today(),
        )
        return True

    def cancel_edit(self) -> None:
        """편집 취소 (Store 접근 없음)"""
        self._reset_session()

    def _reset_session(self) -> None:
        self._state.session.reset()
        self._state.draft = self._blank_draft()

    async def delete_record(self, record_id: int) -> None:
        """기록 삭제 후 재적재

        삭제 대상이 편집 중인 기록이면 세션을 IDLE로 되돌리고 초안 초기화.
        """
        await self.store.delete(record_id)

        if self._state.session.active_id == record_id:
            logger.info(f"편집 중인 기록 삭제 - 세션 초기화: id={record_id}")
            self._reset_session()

        await self.refresh()

    # -------------------------------------------------------------------------
    # 필터 / 집계
    # -------------------------------------------------------------------------

    def set_filter(self, mode: FilterMode | str) -> None:
        """필터 변경 (I/O 없음)

        Raises:
            ValueError: 알 수 없는 필터
        """
        self._state.filter_mode = FilterMode(mode)

    def filtered_view(self) -> list[ExpenseRecord]:
        """현재 필터/시각 기준 기록 (작업 집합 순서 유지)"""
        return list(filter_records(self._state.records, self._state.filter_mode, self.now()))

    def totals(self) -> LedgerTotals:
        """필터 결과 총합 + 카테고리별 합계 (매 호출 재계산)"""
        return compute_totals(self.filtered_view())

    def category_series(self) -> list[CategoryTotal]:
        """차트용 (label, value) 순서열"""
        return self.totals().as_series()

    def chart_data(self) -> dict[str, Any]:
        """차트용 labels/values"""
        return build_chart_data(self.filtered_view())
