"""
Ledger Engine 패키지

편집 세션 상태 머신, 추가/수정/삭제 오케스트레이션, 필터/집계 파생 값.
"""

from core.engine.bootstrap import init_logging, open_ledger
from core.engine.ledger_engine import LedgerEngine, format_amount, parse_amount
from core.engine.state import EngineState

__all__ = [
    "LedgerEngine",
    "EngineState",
    "open_ledger",
    "init_logging",
    "parse_amount",
    "format_amount",
]
