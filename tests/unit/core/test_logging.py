"""
core/logging.py 테스트
"""

import logging
import sys
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path

import pytest

from core import logging as core_logging
from core.constants import Paths
from core.logging import (
    NOISY_LOGGERS,
    LedgerContextFormatter,
    get_log_file_path,
    setup_logging,
)


class TestGetLogFilePath:
    """get_log_file_path 테스트"""

    def test_web(self) -> None:
        assert get_log_file_path("web") == Paths.WEB_LOGS_DIR / "web.log"

    def test_script(self) -> None:
        assert get_log_file_path("check_balances") == Paths.LOGS_DIR / "check_balances.log"


class TestSetupLogging:
    """setup_logging 테스트"""

    @pytest.fixture
    def restore_root_logger(self):
        """루트 로거 핸들러 복원"""
        root = logging.getLogger()
        handlers = list(root.handlers)
        level = root.level
        yield
        for handler in root.handlers:
            handler.close()
        root.handlers[:] = handlers
        root.setLevel(level)

    def test_handlers(self, tmp_path: Path, monkeypatch, restore_root_logger) -> None:
        """콘솔 + 일별 파일 핸들러 구성"""
        log_file = tmp_path / "logs" / "test.log"
        monkeypatch.setattr(core_logging, "get_log_file_path", lambda name: log_file)

        root = setup_logging("test", console_level=logging.WARNING)

        assert log_file.parent.exists()
        file_handlers = [h for h in root.handlers if isinstance(h, TimedRotatingFileHandler)]
        assert len(file_handlers) == 1
        assert file_handlers[0].level == logging.INFO
        console_handlers = [h for h in root.handlers if not isinstance(h, TimedRotatingFileHandler)]
        assert console_handlers[0].level == logging.WARNING
        for name in NOISY_LOGGERS:
            assert logging.getLogger(name).level == logging.WARNING


class TestLedgerContextFormatter:
    """LedgerContextFormatter 테스트"""

    def _record(self, msg: str, **extra) -> logging.LogRecord:
        record = logging.LogRecord("web.services", logging.INFO, __file__, 1, msg, None, None)
        for key, value in extra.items():
            setattr(record, key, value)
        return record

    def test_appends_context(self) -> None:
        """extra 컨텍스트를 정해진 순서로 덧붙임"""
        formatter = LedgerContextFormatter("%(message)s")
        record = self._record("결제 등록", movement_ids=[10, 11], customer_id=3)

        assert formatter.format(record) == "결제 등록 | customer_id=3 movement_ids=[10, 11]"

    def test_without_context(self) -> None:
        formatter = LedgerContextFormatter("%(message)s")

        assert formatter.format(self._record("로깅 초기화")) == "로깅 초기화"

    def test_ignores_unknown_extra(self) -> None:
        formatter = LedgerContextFormatter("%(message)s")
        record = self._record("연결", readonly=True, movement_id=7)

        assert formatter.format(record) == "연결 | movement_id=7"

    def test_traceback_after_context(self) -> None:
        """예외 traceback은 컨텍스트 뒤에 출력"""
        formatter = LedgerContextFormatter("%(message)s")
        try:
            raise ValueError("boom")
        except ValueError:
            record = logging.LogRecord(
                "web", logging.ERROR, __file__, 1, "실패", None, sys.exc_info()
            )
        record.customer_id = 1

        lines = formatter.format(record).splitlines()

        assert lines[0] == "실패 | customer_id=1"
        assert lines[-1] == "ValueError: boom"
