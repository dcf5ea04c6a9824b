"""
원장 스키마 초기화

Web 시작 시 자동으로 customers / movements / ledger_meta 테이블 생성.
CREATE IF NOT EXISTS 패턴으로 안전하게 동작.

잔액 전략은 DB마다 고정: 최초 초기화 시 ledger_meta에 기록하고,
이후 다른 전략으로 열면 LedgerConfigError.
"""

import logging
from typing import TYPE_CHECKING

from core.ledger.errors import LedgerConfigError
from core.types import BalanceStrategy

if TYPE_CHECKING:
    from adapters.db.sqlite_adapter import SQLiteAdapter

logger = logging.getLogger(__name__)

META_BALANCE_STRATEGY = "balance_strategy"


async def init_ledger_schema(db: "SQLiteAdapter", strategy: BalanceStrategy) -> None:
    """원장 스키마 초기화 (테이블 + 인덱스 + 전략 기록)

    Args:
        db: 쓰기 가능한 SQLiteAdapter
        strategy: 설정된 잔액 전략

    Raises:
        LedgerConfigError: DB에 기록된 전략과 설정이 다른 경우
    """
    await _create_ledger_tables(db)
    await _check_balance_strategy(db, strategy)
    await db.commit()
    logger.info(f"원장 스키마 초기화 완료 (balance_strategy={strategy.value})")


async def _create_ledger_tables(db: "SQLiteAdapter") -> None:
    """원장 테이블 생성"""

    # customers 테이블
    # current_account_balance는 STORED 전략에서만 갱신됨
    await db.execute("""
        CREATE TABLE IF NOT EXISTS customers (
            id                      INTEGER PRIMARY KEY AUTOINCREMENT,
            name                    TEXT NOT NULL,
            address                 TEXT,
            phone                   TEXT,
            city                    TEXT,
            current_account_balance TEXT NOT NULL DEFAULT '0.00',
            created_at              TEXT NOT NULL DEFAULT (datetime('now'))
        )
    """)

    # movements 테이블
    await db.execute("""
        CREATE TABLE IF NOT EXISTS movements (
            id               INTEGER PRIMARY KEY AUTOINCREMENT,
            customer_id      INTEGER NOT NULL,
            type             TEXT NOT NULL CHECK (type IN ('DEBIT', 'CREDIT')),
            method           TEXT NOT NULL,
            amount           TEXT NOT NULL,
            date             TEXT NOT NULL,
            description      TEXT NOT NULL DEFAULT '',
            created_at       TEXT NOT NULL DEFAULT (datetime('now')),
            updated_at       TEXT NOT NULL DEFAULT (datetime('now')),
            FOREIGN KEY (customer_id) REFERENCES customers(id) ON DELETE CASCADE
        )
    """)

    # ledger_meta 테이블 (DB 단위 고정 설정)
    await db.execute("""
        CREATE TABLE IF NOT EXISTS ledger_meta (
            meta_key         TEXT PRIMARY KEY,
            meta_value       TEXT NOT NULL,
            created_at       TEXT NOT NULL DEFAULT (datetime('now'))
        )
    """)

    await db.execute("""
        CREATE INDEX IF NOT EXISTS ix_movements_customer_date
        ON movements(customer_id, date DESC, id DESC)
    """)

    await db.execute("""
        CREATE INDEX IF NOT EXISTS ix_customers_name
        ON customers(name COLLATE NOCASE)
    """)


async def _check_balance_strategy(db: "SQLiteAdapter", strategy: BalanceStrategy) -> None:
    """DB에 기록된 전략 확인 (없으면 기록)"""
    row = await db.fetchone(
        "SELECT meta_value FROM ledger_meta WHERE meta_key = ?",
        (META_BALANCE_STRATEGY,),
    )

    if row is None:
        await db.execute(
            "INSERT INTO ledger_meta (meta_key, meta_value) VALUES (?, ?)",
            (META_BALANCE_STRATEGY, strategy.value),
        )
        return

    if row[0] != strategy.value:
        await db.rollback()
        raise LedgerConfigError(
            f"DB는 balance_strategy='{row[0]}'로 초기화되었지만 "
            f"설정은 '{strategy.value}'입니다. 전략은 DB마다 고정입니다."
        )
