"""
core/config/loader.py 테스트

settings.yaml 로드, 검증, 기본값 테스트
"""

from decimal import Decimal
from pathlib import Path

import pytest

from core.config.loader import (
    LedgerConfig,
    Settings,
    SettingsLoadError,
    get_settings,
    load_settings,
    parse_settings,
)
from core.constants import PROJECT_ROOT, Defaults, Paths
from core.types import BalanceStrategy


class TestLedgerConfig:
    """LedgerConfig 데이터클래스 테스트"""

    def test_frozen(self) -> None:
        """불변성 확인"""
        config = LedgerConfig(
            balance_strategy=BalanceStrategy.STORED,
            enforce_payment_limit=True,
            payment_tolerance=Decimal("0.01"),
        )

        with pytest.raises(AttributeError):
            config.enforce_payment_limit = False  # type: ignore


class TestParseSettings:
    """parse_settings 테스트"""

    def test_defaults(self) -> None:
        """빈 설정 → 기본값"""
        config = parse_settings({})

        assert config.database.path == Paths.DEFAULT_DB
        assert config.ledger.balance_strategy == BalanceStrategy.STORED
        assert config.ledger.enforce_payment_limit is True
        assert config.ledger.payment_tolerance == Decimal("0.01")
        assert config.web.host == Defaults.WEB_HOST
        assert config.web.port == Defaults.WEB_PORT
        assert config.web.cors_origins == ("*",)

    def test_relative_db_path_resolved_from_project_root(self) -> None:
        """상대 경로는 프로젝트 루트 기준"""
        config = parse_settings({"database": {"path": "data/custom.db"}})

        assert config.database.path == PROJECT_ROOT / "data" / "custom.db"

    def test_strategy_case_insensitive(self) -> None:
        """전략 값 대소문자 무시"""
        config = parse_settings({"ledger": {"balance_strategy": "DERIVED"}})

        assert config.ledger.balance_strategy == BalanceStrategy.DERIVED

    def test_invalid_strategy(self) -> None:
        """유효하지 않은 전략"""
        with pytest.raises(SettingsLoadError, match="balance_strategy"):
            parse_settings({"ledger": {"balance_strategy": "cached"}})

    def test_negative_tolerance(self) -> None:
        """음수 허용 오차"""
        with pytest.raises(SettingsLoadError, match="payment_tolerance"):
            parse_settings({"ledger": {"payment_tolerance": "-1"}})

    def test_invalid_port(self) -> None:
        """정수가 아닌 포트"""
        with pytest.raises(SettingsLoadError, match="port"):
            parse_settings({"web": {"port": "abc"}})

    def test_section_must_be_mapping(self) -> None:
        """섹션이 매핑이 아닌 경우"""
        with pytest.raises(SettingsLoadError, match="ledger"):
            parse_settings({"ledger": ["stored"]})

    def test_single_cors_origin_string(self) -> None:
        """cors_origins 문자열 하나"""
        config = parse_settings({"web": {"cors_origins": "http://localhost:5173"}})

        assert config.web.cors_origins == ("http://localhost:5173",)


class TestLoadSettings:
    """load_settings 테스트"""

    def test_load_file(self, temp_settings_file: Path, temp_dir: Path) -> None:
        """정상 파일 로드"""
        config = load_settings(temp_settings_file)

        assert config.database.path == temp_dir / "ledger.db"
        assert config.ledger.balance_strategy == BalanceStrategy.STORED
        assert config.web.host == "0.0.0.0"
        assert config.web.port == 9000
        assert config.web.cors_origins == ("http://localhost:5173",)

    def test_load_derived(self, temp_settings_file_derived: Path) -> None:
        """derived 전략 + 결제 한도 해제"""
        config = load_settings(temp_settings_file_derived)

        assert config.ledger.balance_strategy == BalanceStrategy.DERIVED
        assert config.ledger.enforce_payment_limit is False

    def test_missing_file_uses_defaults(self, temp_dir: Path) -> None:
        """파일 없음 → 기본값"""
        config = load_settings(temp_dir / "missing.yaml")

        assert config.ledger.balance_strategy == BalanceStrategy.STORED

    def test_empty_file_uses_defaults(self, temp_dir: Path) -> None:
        """빈 파일 → 기본값"""
        path = temp_dir / "empty.yaml"
        path.write_text("", encoding="utf-8")

        config = load_settings(path)

        assert config.database.path == Paths.DEFAULT_DB

    def test_invalid_yaml(self, temp_dir: Path) -> None:
        """YAML 파싱 실패"""
        path = temp_dir / "broken.yaml"
        path.write_text("ledger: [unclosed", encoding="utf-8")

        with pytest.raises(SettingsLoadError, match="파싱 실패"):
            load_settings(path)

    def test_top_level_not_mapping(self, temp_dir: Path) -> None:
        """최상위가 리스트"""
        path = temp_dir / "list.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")

        with pytest.raises(SettingsLoadError):
            load_settings(path)

    def test_invalid_strategy_file(self, temp_settings_file_invalid_strategy: Path) -> None:
        """잘못된 전략 파일"""
        with pytest.raises(SettingsLoadError):
            load_settings(temp_settings_file_invalid_strategy)


class TestSettings:
    """Settings 싱글턴 테스트"""

    def test_singleton(self, temp_settings_file: Path) -> None:
        """같은 인스턴스 반환"""
        first = get_settings(temp_settings_file)
        second = get_settings()

        assert first is second
        assert second.balance_strategy == BalanceStrategy.STORED

    def test_properties(self, temp_settings_file: Path, temp_dir: Path) -> None:
        """속성 접근"""
        settings = get_settings(temp_settings_file)

        assert settings.db_path == temp_dir / "ledger.db"
        assert settings.ledger.payment_tolerance == Decimal("0.01")
        assert settings.web.port == 9000

    def test_reset(self, temp_settings_file: Path, temp_settings_file_derived: Path) -> None:
        """reset 후 다른 파일 로드"""
        get_settings(temp_settings_file)
        Settings.reset()

        settings = get_settings(temp_settings_file_derived)

        assert settings.balance_strategy == BalanceStrategy.DERIVED
