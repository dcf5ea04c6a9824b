"""
로깅 설정 유틸리티

Web 프로세스와 관리 스크립트에서 사용하는 공통 로깅 설정.
- 콘솔: Defaults.LOG_LEVEL (기본 INFO)
- 파일: INFO 레벨 (TimedRotatingFileHandler, daily)
- 서비스가 extra로 넘긴 원장 컨텍스트(customer_id, movement_id 등)를
  메시지 뒤에 key=value로 덧붙임

사용법:
    from core.logging import setup_logging
    setup_logging("web")

    logger.info("결제 등록", extra={"customer_id": 3, "movement_ids": [10, 11]})
    # ... | web.services.movement_service | 결제 등록 | customer_id=3 movement_ids=[10, 11]
"""

import logging
import sys
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path

from core.constants import Defaults, Paths


LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
LOG_FILE_BACKUP_COUNT = 7  # 최대 7일치 파일 유지

# 로그 레코드에 붙는 원장 컨텍스트 (출력 순서)
CONTEXT_FIELDS = (
    "customer_id",
    "movement_id",
    "movement_ids",
    "movement_type",
    "db_path",
)

# 불필요한 로그를 생성하는 로거 목록 (레벨 조정 대상)
NOISY_LOGGERS = [
    "aiosqlite",      # DB 쿼리마다 executing/completed 로그
    "uvicorn.access",  # 요청마다 access 로그 (서비스 로그와 중복)
    "asyncio",
]


class LedgerContextFormatter(logging.Formatter):
    """원장 컨텍스트를 메시지 뒤에 덧붙이는 Formatter

    traceback은 기존처럼 마지막 줄 이후에 출력된다.
    """

    def formatMessage(self, record: logging.LogRecord) -> str:
        message = super().formatMessage(record)
        context = " ".join(
            f"{field}={getattr(record, field)}"
            for field in CONTEXT_FIELDS
            if getattr(record, field, None) is not None
        )
        return f"{message} | {context}" if context else message


def get_log_file_path(process_name: str) -> Path:
    """로그 파일 경로 반환

    Args:
        process_name: 프로세스 이름 ("web" 또는 스크립트 이름)

    Returns:
        로그 파일 Path
    """
    if process_name == "web":
        return Paths.WEB_LOGS_DIR / f"{process_name}.log"
    return Paths.LOGS_DIR / f"{process_name}.log"


def setup_logging(
    process_name: str,
    console_level: int | str = Defaults.LOG_LEVEL,
    file_level: int | str = logging.INFO,
) -> logging.Logger:
    """로깅 설정 초기화

    Args:
        process_name: 프로세스 이름
        console_level: 콘솔 로그 레벨
        file_level: 파일 로그 레벨

    Returns:
        설정된 루트 Logger
    """
    log_file = get_log_file_path(process_name)
    log_file.parent.mkdir(parents=True, exist_ok=True)

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)  # 핸들러에서 필터링
    root_logger.handlers.clear()

    formatter = LedgerContextFormatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    # 매일 자정 롤링, 백업 파일: web.log.2026-10-18
    file_handler = TimedRotatingFileHandler(
        filename=log_file,
        when="midnight",
        interval=1,
        backupCount=LOG_FILE_BACKUP_COUNT,
        encoding="utf-8",
    )
    file_handler.suffix = "%Y-%m-%d"
    file_handler.setLevel(file_level)
    file_handler.setFormatter(formatter)
    root_logger.addHandler(file_handler)

    for logger_name in NOISY_LOGGERS:
        logging.getLogger(logger_name).setLevel(logging.WARNING)

    root_logger.info(f"로깅 초기화 완료: {process_name} → {log_file}")

    return root_logger
