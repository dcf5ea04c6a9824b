"""
pytest 공통 fixture 정의

설정 파일, 임시 디렉토리 등 전 계층 공용 fixture
"""

import tempfile
from pathlib import Path

import pytest

from core.config.loader import Settings


@pytest.fixture
def temp_dir() -> Path:
    """OS 독립적인 임시 디렉토리 생성"""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture(autouse=True)
def reset_settings():
    """테스트마다 Settings 싱글턴 초기화"""
    Settings.reset()
    yield
    Settings.reset()


@pytest.fixture
def temp_settings_file(temp_dir: Path) -> Path:
    """테스트용 settings.yaml 파일 생성 (stored 전략)"""
    content = f"""# 테스트용 settings.yaml
database:
  path: {temp_dir / "ledger.db"}

ledger:
  balance_strategy: stored
  enforce_payment_limit: true
  payment_tolerance: "0.01"

web:
  host: 0.0.0.0
  port: 9000
  cors_origins:
    - "http://localhost:5173"
"""
    settings_path = temp_dir / "settings.yaml"
    settings_path.write_text(content, encoding="utf-8")
    return settings_path


@pytest.fixture
def temp_settings_file_derived(temp_dir: Path) -> Path:
    """테스트용 settings.yaml 파일 생성 (derived 전략, 결제 한도 미적용)"""
    content = """ledger:
  balance_strategy: derived
  enforce_payment_limit: false
"""
    settings_path = temp_dir / "settings_derived.yaml"
    settings_path.write_text(content, encoding="utf-8")
    return settings_path


@pytest.fixture
def temp_settings_file_invalid_strategy(temp_dir: Path) -> Path:
    """잘못된 전략의 settings.yaml 파일 생성"""
    content = """ledger:
  balance_strategy: cached
"""
    settings_path = temp_dir / "settings_invalid.yaml"
    settings_path.write_text(content, encoding="utf-8")
    return settings_path
