"""타임존 유틸리티 테스트"""

import time
from datetime import datetime, timedelta, timezone
from typing import Iterator

import pytest

from core.utils.timezone import local_zone, now_in, resolve_zone, today_iso
from tests.helpers import KST


class TestResolveZone:
    """resolve_zone 테스트"""

    def test_utc(self) -> None:
        """UTC 별칭"""
        assert resolve_zone("UTC") is timezone.utc
        assert resolve_zone("utc") is timezone.utc

    def test_iana_name(self) -> None:
        """IANA 이름"""
        tz = resolve_zone("Asia/Seoul")

        assert datetime(2024, 3, 12, tzinfo=tz).utcoffset() == timedelta(hours=9)

    @pytest.mark.parametrize("name", [None, ""])
    def test_empty_is_local(self, name: str | None) -> None:
        """None/빈 문자열 → 로컬 타임존"""
        now = datetime(2024, 3, 12, 12, 0, tzinfo=timezone.utc)

        assert now.astimezone(resolve_zone(name)).utcoffset() == now.astimezone(local_zone()).utcoffset()

    def test_unknown(self) -> None:
        """알 수 없는 이름"""
        with pytest.raises(ValueError, match="알 수 없는 타임존"):
            resolve_zone("Nowhere/Atlantis")


class TestTodayIso:
    """today_iso 테스트"""

    def test_converts_to_zone(self) -> None:
        """UTC 토요일 밤 → KST 일요일"""
        now = datetime(2024, 3, 16, 20, 0, tzinfo=timezone.utc)

        assert today_iso(KST, now) == "2024-03-17"
        assert today_iso(timezone.utc, now) == "2024-03-16"

    def test_naive_taken_as_is(self) -> None:
        """naive datetime은 그대로 사용"""
        assert today_iso(KST, datetime(2024, 1, 5, 23, 59)) == "2024-01-05"

    def test_now_in_is_aware(self) -> None:
        """now_in은 tz-aware"""
        assert now_in(KST).utcoffset() == timedelta(hours=9)


@pytest.fixture
def new_york_tz(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """프로세스 TZ를 America/New_York으로 고정 (종료 후 복원)"""
    if not hasattr(time, "tzset"):
        pytest.skip("time.tzset 미지원 플랫폼")
    monkeypatch.setenv("TZ", "America/New_York")
    time.tzset()
    yield
    monkeypatch.undo()
    time.tzset()


class TestLocalZone:
    """LocalZone 테스트 (서머타임 전환)"""

    def test_offset_follows_dst(self, new_york_tz: None) -> None:
        """1월 UTC-5, 7월 UTC-4"""
        tz = local_zone()

        assert datetime(2024, 1, 15, 12, 0, tzinfo=tz).utcoffset() == timedelta(hours=-5)
        assert datetime(2024, 7, 15, 12, 0, tzinfo=tz).utcoffset() == timedelta(hours=-4)

    def test_fromutc_across_dst(self, new_york_tz: None) -> None:
        """UTC → 로컬 변환에 시각별 오프셋 적용"""
        tz = local_zone()

        winter = datetime(2024, 1, 15, 17, 0, tzinfo=timezone.utc).astimezone(tz)
        summer = datetime(2024, 7, 15, 16, 0, tzinfo=timezone.utc).astimezone(tz)

        assert (winter.hour, summer.hour) == (12, 12)

    def test_today_near_midnight(self, new_york_tz: None) -> None:
        """1월 04:30 UTC는 뉴욕 전날 23:30"""
        now = datetime(2024, 1, 16, 4, 30, tzinfo=timezone.utc)

        assert today_iso(local_zone(), now) == "2024-01-15"
        assert today_iso(resolve_zone(None), now) == "2024-01-15"
