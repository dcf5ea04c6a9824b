"""
통합 테스트 공용 fixture

임시 SQLite 원장 DB (stored / derived 전략)
"""

from decimal import Decimal
from pathlib import Path

import pytest
import pytest_asyncio

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.config.loader import LedgerConfig
from core.ledger.schema import init_ledger_schema
from core.types import BalanceStrategy


def make_ledger_config(
    strategy: BalanceStrategy,
    enforce_payment_limit: bool = True,
) -> LedgerConfig:
    """테스트용 LedgerConfig 생성"""
    return LedgerConfig(
        balance_strategy=strategy,
        enforce_payment_limit=enforce_payment_limit,
        payment_tolerance=Decimal("0.01"),
    )


@pytest.fixture(params=[BalanceStrategy.STORED, BalanceStrategy.DERIVED], ids=["stored", "derived"])
def strategy(request) -> BalanceStrategy:
    """두 잔액 전략 모두로 실행"""
    return request.param


@pytest_asyncio.fixture
async def db(tmp_path: Path, strategy: BalanceStrategy) -> SQLiteAdapter:
    """전략별 스키마가 초기화된 임시 DB"""
    adapter = SQLiteAdapter(tmp_path / "test_ledger.db")
    await adapter.connect()
    await init_ledger_schema(adapter, strategy)
    yield adapter
    await adapter.close()


@pytest.fixture
def ledger_config(strategy: BalanceStrategy) -> LedgerConfig:
    """전략별 LedgerConfig (결제 한도 적용)"""
    return make_ledger_config(strategy)
