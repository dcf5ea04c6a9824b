"""
의존성 주입

FastAPI의 Depends를 사용한 의존성 관리.
요청마다 DB 연결을 열고 응답 후 닫는다.
"""

from typing import AsyncGenerator

from fastapi import Depends

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.config.loader import Settings, get_settings
from web.services.customer_service import CustomerService
from web.services.movement_service import MovementService


def get_app_settings() -> Settings:
    """애플리케이션 설정 반환"""
    return get_settings()


async def get_db(
    settings: Settings = Depends(get_app_settings),
) -> AsyncGenerator[SQLiteAdapter, None]:
    """DB 세션 반환 (읽기 전용)

    고객 목록, movement 내역 등 조회 API용.
    """
    async with SQLiteAdapter(settings.db_path, readonly=True) as db:
        yield db


async def get_db_write(
    settings: Settings = Depends(get_app_settings),
) -> AsyncGenerator[SQLiteAdapter, None]:
    """DB 세션 반환 (쓰기 가능)

    고객/movement 생성·수정·삭제 시 사용.
    """
    async with SQLiteAdapter(settings.db_path, readonly=False) as db:
        yield db


def get_customer_reader(
    db: SQLiteAdapter = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
) -> CustomerService:
    """조회용 CustomerService"""
    return CustomerService(db, settings.ledger)


def get_customer_writer(
    db: SQLiteAdapter = Depends(get_db_write),
    settings: Settings = Depends(get_app_settings),
) -> CustomerService:
    """변경용 CustomerService"""
    return CustomerService(db, settings.ledger)


def get_movement_reader(
    db: SQLiteAdapter = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
) -> MovementService:
    """조회용 MovementService"""
    return MovementService(db, settings.ledger)


def get_movement_writer(
    db: SQLiteAdapter = Depends(get_db_write),
    settings: Settings = Depends(get_app_settings),
) -> MovementService:
    """변경용 MovementService"""
    return MovementService(db, settings.ledger)
