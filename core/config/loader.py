"""
설정 로더

settings.yaml 로드 및 DB/Ledger/Web 설정 생성
"""

import logging
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any

import yaml

from core.constants import PROJECT_ROOT, Defaults, Paths
from core.types import BalanceStrategy

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DatabaseConfig:
    """DB 설정"""

    path: Path


@dataclass(frozen=True)
class LedgerConfig:
    """원장 동작 설정

    불변 데이터 구조로 런타임 설정 변경 방지
    """

    balance_strategy: BalanceStrategy
    enforce_payment_limit: bool
    payment_tolerance: Decimal


@dataclass(frozen=True)
class WebConfig:
    """Web 서버 설정"""

    host: str
    port: int
    cors_origins: tuple[str, ...]


@dataclass(frozen=True)
class AppConfig:
    """전체 설정 묶음"""

    database: DatabaseConfig
    ledger: LedgerConfig
    web: WebConfig


class SettingsLoadError(Exception):
    """Settings 로드 실패 예외"""

    pass


def _section(data: dict[str, Any], name: str) -> dict[str, Any]:
    """YAML 섹션 추출 (없으면 빈 dict)"""
    section = data.get(name) or {}
    if not isinstance(section, dict):
        raise SettingsLoadError(f"settings.yaml의 '{name}' 섹션은 매핑이어야 합니다")
    return section


def _resolve_path(raw: str | Path) -> Path:
    """상대 경로는 프로젝트 루트 기준으로 변환"""
    path = Path(raw)
    if not path.is_absolute():
        path = PROJECT_ROOT / path
    return path


def parse_settings(data: dict[str, Any]) -> AppConfig:
    """dict → AppConfig 변환

    Args:
        data: settings.yaml 내용

    Returns:
        AppConfig 인스턴스

    Raises:
        SettingsLoadError: 값이 유효하지 않은 경우
    """
    db_section = _section(data, "database")
    ledger_section = _section(data, "ledger")
    web_section = _section(data, "web")

    db_path = db_section.get("path")
    database = DatabaseConfig(
        path=_resolve_path(db_path) if db_path else Paths.DEFAULT_DB,
    )

    # balance_strategy 검증
    strategy_str = str(ledger_section.get("balance_strategy", Defaults.BALANCE_STRATEGY)).lower()
    try:
        strategy = BalanceStrategy(strategy_str)
    except ValueError as e:
        valid = [s.value for s in BalanceStrategy]
        raise SettingsLoadError(
            f"유효하지 않은 balance_strategy입니다: '{strategy_str}'. 유효한 값: {valid}"
        ) from e

    try:
        tolerance = Decimal(str(ledger_section.get("payment_tolerance", Defaults.PAYMENT_TOLERANCE)))
    except InvalidOperation as e:
        raise SettingsLoadError("payment_tolerance는 숫자여야 합니다") from e
    if tolerance < 0:
        raise SettingsLoadError("payment_tolerance는 0 이상이어야 합니다")

    ledger = LedgerConfig(
        balance_strategy=strategy,
        enforce_payment_limit=bool(
            ledger_section.get("enforce_payment_limit", Defaults.ENFORCE_PAYMENT_LIMIT)
        ),
        payment_tolerance=tolerance,
    )

    try:
        port = int(web_section.get("port", Defaults.WEB_PORT))
    except (TypeError, ValueError) as e:
        raise SettingsLoadError("web.port는 정수여야 합니다") from e

    origins = web_section.get("cors_origins", ["*"])
    if isinstance(origins, str):
        origins = [origins]

    web = WebConfig(
        host=str(web_section.get("host", Defaults.WEB_HOST)),
        port=port,
        cors_origins=tuple(str(o) for o in origins),
    )

    return AppConfig(database=database, ledger=ledger, web=web)


def load_settings(path: Path | None = None) -> AppConfig:
    """settings.yaml 파일 로드

    파일이 없으면 기본값 사용.

    Args:
        path: settings.yaml 경로 (None이면 기본 경로 사용)

    Returns:
        AppConfig 인스턴스

    Raises:
        SettingsLoadError: 형식이 잘못된 경우
    """
    if path is None:
        path = Paths.SETTINGS_FILE

    if not path.exists():
        logger.info(f"settings.yaml 없음, 기본 설정 사용: {path}")
        return parse_settings({})

    try:
        content = path.read_text(encoding="utf-8")
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise SettingsLoadError(f"settings.yaml 파싱 실패: {e}") from e

    if data is None:
        return parse_settings({})

    if not isinstance(data, dict):
        raise SettingsLoadError("settings.yaml 최상위는 매핑이어야 합니다")

    return parse_settings(data)


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
            self._config = load_settings(settings_path)

    @property
    def config(self) -> AppConfig:
        """전체 설정"""
        assert self._config is not None
        return self._config

    @property
    def db_path(self) -> Path:
        """DB 경로"""
        return self.config.database.path

    @property
    def ledger(self) -> LedgerConfig:
        """원장 설정"""
        return self.config.ledger

    @property
    def balance_strategy(self) -> BalanceStrategy:
        """잔액 관리 전략"""
        return self.config.ledger.balance_strategy

    @property
    def web(self) -> WebConfig:
        """Web 서버 설정"""
        return self.config.web

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
