"""
유틸리티 패키지

타임존 처리 등 공통 유틸리티
"""

from core.utils.timezone import (
    LocalZone,
    local_zone,
    now_in,
    resolve_zone,
    today_iso,
)

__all__ = [
    "LocalZone",
    "local_zone",
    "now_in",
    "resolve_zone",
    "today_iso",
]
