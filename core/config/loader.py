"""
설정 로더

settings.yaml 로드 및 애플리케이션 설정 생성
"""

from dataclasses import dataclass
from datetime import tzinfo
from pathlib import Path

import yaml

from core.constants import PROJECT_ROOT, Defaults, Paths
from core.utils.timezone import resolve_zone

_VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class AppConfig:
    """애플리케이션 설정 (settings.yaml에서 로드)

    불변 데이터 구조로 설정 변경 방지
    """

    db_path: Path
    timezone: str | None
    log_level: str


class ConfigLoadError(Exception):
    """설정 로드 실패 예외"""

    pass


def default_config() -> AppConfig:
    """settings.yaml이 없을 때 사용하는 기본 설정"""
    return AppConfig(
        db_path=Paths.DEFAULT_DB,
        timezone=None,
        log_level=Defaults.LOG_LEVEL,
    )


def load_app_config(path: Path | None = None) -> AppConfig:
    """settings.yaml 파일 로드

    Args:
        path: settings.yaml 경로 (None이면 기본 경로 사용)

    Returns:
        AppConfig 인스턴스. 파일이 없으면 기본값

    Raises:
        ConfigLoadError: 형식이 잘못되었거나 값이 유효하지 않은 경우
    """
    if path is None:
        path = Paths.SETTINGS_FILE

    if not path.exists():
        return default_config()

    try:
        content = path.read_text(encoding="utf-8")
        data = yaml.safe_load(content)
    except (OSError, yaml.YAMLError) as e:
        raise ConfigLoadError(f"settings.yaml 파싱 실패: {e}") from e

    if data is None:
        return default_config()
    if not isinstance(data, dict):
        raise ConfigLoadError("settings.yaml 최상위는 매핑이어야 합니다")

    # database.path
    db_section = data.get("database") or {}
    if not isinstance(db_section, dict):
        raise ConfigLoadError("settings.yaml의 'database'는 매핑이어야 합니다")

    db_path_value = db_section.get("path")
    if db_path_value:
        db_path = Path(str(db_path_value))
        if not db_path.is_absolute():
            db_path = PROJECT_ROOT / db_path
    else:
        db_path = Paths.DEFAULT_DB

    # timezone
    tz_name = data.get("timezone")
    if tz_name is not None:
        tz_name = str(tz_name)
        try:
            resolve_zone(tz_name)
        except ValueError as e:
            raise ConfigLoadError(str(e)) from e

    # logging.level
    log_section = data.get("logging") or {}
    if not isinstance(log_section, dict):
        raise ConfigLoadError("settings.yaml의 'logging'은 매핑이어야 합니다")
    log_level = str(log_section.get("level", Defaults.LOG_LEVEL)).upper()
    if log_level not in _VALID_LOG_LEVELS:
        raise ConfigLoadError(
            f"유효하지 않은 로그 레벨입니다: '{log_level}'. "
            f"유효한 값: {list(_VALID_LOG_LEVELS)}"
        )

    return AppConfig(
        db_path=db_path,
        timezone=tz_name,
        log_level=log_level,
    )


class Settings:
    """애플리케이션 설정 (싱글턴 패턴)

    settings.yaml을 로드하고 관련 설정을 제공
    """

    _instance: "Settings | None" = None
    _config: AppConfig | None = None

    def __new__(cls, settings_path: Path | None = None) -> "Settings":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self, settings_path: Path | None = None) -> None:
        if self._config is None:
            self._config = load_app_config(settings_path)

    @property
    def config(self) -> AppConfig:
        """원본 설정"""
        assert self._config is not None
        return self._config

    @property
    def db_path(self) -> Path:
        """DB 경로"""
        return self.config.db_path

    @property
    def tzinfo(self) -> tzinfo:
        """주/월 경계 계산에 사용하는 타임존"""
        return resolve_zone(self.config.timezone)

    @property
    def log_level(self) -> str:
        """로그 레벨"""
        return self.config.log_level

    @classmethod
    def reset(cls) -> None:
        """싱글턴 인스턴스 초기화 (테스트용)"""
        cls._instance = None
        cls._config = None


def get_settings(settings_path: Path | None = None) -> Settings:
    """Settings 인스턴스 반환

    Args:
        settings_path: settings.yaml 경로 (None이면 기본 경로 사용)

    Returns:
        Settings 싱글턴 인스턴스
    """
    return Settings(settings_path)
