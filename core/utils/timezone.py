"""
타임존 유틸리티

주/월 경계 계산은 명시적으로 전달된 타임존 기준.
시스템 시간대를 암묵적으로 읽는 곳은 LocalZone 하나뿐.
"""

import time
from datetime import datetime, timedelta, timezone, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

_EPOCH = datetime(1970, 1, 1)


class LocalZone(tzinfo):
    """시스템 로컬 타임존 (DST 반영)

    오프셋을 고정하지 않고 시각마다 OS 시간대 규칙으로 다시 계산.
    장시간 실행 중 서머타임이 바뀌어도 "오늘"과 주/월 경계가 맞게 유지됨.
    """

    def _offset_at(self, timestamp: float) -> timedelta:
        return timedelta(seconds=time.localtime(timestamp).tm_gmtoff)

    def utcoffset(self, dt: datetime | None) -> timedelta:
        if dt is None:
            return self._offset_at(time.time())
        # 벽시계 시각 → 타임스탬프 (tm_isdst=-1: OS가 DST 판단)
        wall = (dt.year, dt.month, dt.day, dt.hour, dt.minute, dt.second, 0, 0, -1)
        return self._offset_at(time.mktime(wall))

    def dst(self, dt: datetime | None) -> timedelta:
        if dt is None:
            return timedelta(0)
        wall = (dt.year, dt.month, dt.day, dt.hour, dt.minute, dt.second, 0, 0, -1)
        is_dst = time.localtime(time.mktime(wall)).tm_isdst > 0
        return timedelta(hours=1) if is_dst else timedelta(0)

    def tzname(self, dt: datetime | None) -> str:
        if dt is None:
            return time.tzname[time.localtime().tm_isdst > 0]
        return time.tzname[self.dst(dt) > timedelta(0)]

    def fromutc(self, dt: datetime) -> datetime:
        utc_wall = dt.replace(tzinfo=None)
        offset = self._offset_at((utc_wall - _EPOCH).total_seconds())
        return (utc_wall + offset).replace(tzinfo=self)

    def __repr__(self) -> str:
        return "LocalZone()"


def local_zone() -> tzinfo:
    """현재 프로세스의 로컬 타임존 (DST 전환을 따라가는 tzinfo)"""
    return LocalZone()


def resolve_zone(name: str | None) -> tzinfo:
    """IANA 이름을 tzinfo로 변환

    Args:
        name: "Asia/Seoul" 등. None/빈 문자열이면 로컬 타임존

    Returns:
        tzinfo

    Raises:
        ValueError: 알 수 없는 타임존 이름
    """
    if not name:
        return local_zone()
    if name.upper() == "UTC":
        return timezone.utc

    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ValueError(f"알 수 없는 타임존: {name}") from e


def now_in(tz: tzinfo) -> datetime:
    """지정 타임존의 현재 시각"""
    return datetime.now(tz)


def today_iso(tz: tzinfo, now: datetime | None = None) -> str:
    """지정 타임존 기준 오늘 날짜 (YYYY-MM-DD)

    Example:
        >>> today_iso(timezone.utc, datetime(2024, 3, 12, 23, 0, tzinfo=timezone.utc))
        '2024-03-12'
    """
    if now is None:
        now = now_in(tz)
    elif now.tzinfo is not None:
        now = now.astimezone(tz)
    return now.date().isoformat()
