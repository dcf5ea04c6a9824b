#!/usr/bin/env python3
"""잔액 정합성 점검 스크립트

stored 전략 DB에서 customers.current_account_balance와
movement 합산(Σ DEBIT - Σ CREDIT)이 일치하는지 확인.
불일치가 있으면 exit code 1.
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.config.loader import get_settings
from core.ledger.schema import META_BALANCE_STRATEGY
from core.ledger.store import LedgerStore
from core.logging import setup_logging
from core.types import BalanceStrategy

logger = logging.getLogger("check_balances")


async def main(db_path: Path) -> int:
    """점검 실행

    Returns:
        exit code (0: 정상, 1: 불일치 발견)
    """
    if not db_path.exists():
        logger.error(f"DB 파일 없음: {db_path}")
        return 1

    async with SQLiteAdapter(db_path, readonly=True) as db:
        if not await db.table_exists("ledger_meta"):
            logger.error(f"원장 DB가 아님 (ledger_meta 없음): {db_path}")
            return 1

        row = await db.fetchone(
            "SELECT meta_value FROM ledger_meta WHERE meta_key = ?",
            (META_BALANCE_STRATEGY,),
        )
        strategy = row[0] if row else None

        if strategy != BalanceStrategy.STORED.value:
            logger.info(f"balance_strategy={strategy}: 저장된 잔액이 없어 점검 대상 아님")
            return 0

        store = LedgerStore(db)
        mismatches = await store.find_balance_mismatches()

    if not mismatches:
        logger.info("잔액 정합성 확인 완료 ✓")
        return 0

    for m in mismatches:
        logger.error(
            f"불일치: customer={m['customer_id']} ({m['name']}) "
            f"stored={m['stored']} computed={m['computed']}"
        )
    logger.error(f"불일치 고객 수: {len(mismatches)}")
    return 1


if __name__ == "__main__":
    parser = argparse.ArgumentParser(
        description="고객 잔액 정합성 점검"
    )
    parser.add_argument(
        "--db",
        type=Path,
        default=None,
        help="DB 파일 경로 (기본: settings.yaml의 database.path)",
    )
    args = parser.parse_args()

    setup_logging("check_balances")
    target = args.db or get_settings().db_path

    sys.exit(asyncio.run(main(target)))
