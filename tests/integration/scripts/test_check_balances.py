"""scripts/check_balances.py 통합 테스트"""

import importlib.util
from decimal import Decimal
from pathlib import Path

import pytest

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.config.loader import LedgerConfig
from core.constants import PROJECT_ROOT
from core.ledger.store import LedgerStore
from core.types import BalanceStrategy
from web.services.customer_service import CustomerService
from web.services.movement_service import MovementService


def _load_script():
    path = PROJECT_ROOT / "scripts" / "check_balances.py"
    spec = importlib.util.spec_from_file_location("check_balances", path)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


check_balances = _load_script()


async def _seed(db: SQLiteAdapter, config: LedgerConfig) -> int:
    customer = await CustomerService(db, config).create_customer("Ana")
    movements = MovementService(db, config)
    await movements.register_debt(customer.id, "100")
    await movements.register_payment(customer.id, cash="30", transfer="10")
    return customer.id


@pytest.mark.asyncio
async def test_consistent_db(db: SQLiteAdapter, ledger_config: LedgerConfig) -> None:
    """정상 DB → 0"""
    await _seed(db, ledger_config)

    assert await check_balances.main(db.db_path) == 0


@pytest.mark.asyncio
async def test_missing_db(tmp_path: Path) -> None:
    """DB 파일 없음 → 1"""
    assert await check_balances.main(tmp_path / "missing.db") == 1


@pytest.mark.asyncio
async def test_not_a_ledger_db(tmp_path: Path) -> None:
    """ledger_meta 테이블 없음 → 1"""
    db_path = tmp_path / "other.db"
    async with SQLiteAdapter(db_path) as other:
        await other.execute("CREATE TABLE notes (id INTEGER)")
        await other.commit()

    assert await check_balances.main(db_path) == 1


class TestStoredDrift:
    """stored DB 잔액 불일치"""

    @pytest.fixture
    def strategy(self) -> BalanceStrategy:
        return BalanceStrategy.STORED

    @pytest.mark.asyncio
    async def test_detects_mismatch(self, db: SQLiteAdapter, ledger_config: LedgerConfig) -> None:
        customer_id = await _seed(db, ledger_config)
        store = LedgerStore(db)
        async with store.unit_of_work():
            await store.set_stored_balance(customer_id, Decimal("1"))

        assert await check_balances.main(db.db_path) == 1
