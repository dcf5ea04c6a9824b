"""CustomerService 통합 테스트"""

from decimal import Decimal

import pytest

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.config.loader import LedgerConfig
from core.ledger.errors import InvalidArgumentError, NotFoundError
from web.services.customer_service import CustomerService
from web.services.movement_service import MovementService


@pytest.fixture
def service(db: SQLiteAdapter, ledger_config: LedgerConfig) -> CustomerService:
    return CustomerService(db, ledger_config)


class TestCreateCustomer:
    """고객 생성"""

    @pytest.mark.asyncio
    async def test_trims_fields(self, service: CustomerService) -> None:
        customer = await service.create_customer(
            "  Juan Pérez ", address=" Calle 1 ", phone="", city="   "
        )

        assert customer.name == "Juan Pérez"
        assert customer.address == "Calle 1"
        assert customer.phone is None
        assert customer.city is None
        assert customer.balance == Decimal("0.00")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("name", [None, "", "   "])
    async def test_name_required(self, service: CustomerService, name) -> None:
        with pytest.raises(InvalidArgumentError) as exc_info:
            await service.create_customer(name)

        assert exc_info.value.field == "name"
        assert await service.list_customers() == []


class TestQueries:
    """고객 조회"""

    @pytest.mark.asyncio
    async def test_get_with_balance(
        self, db: SQLiteAdapter, ledger_config: LedgerConfig, service: CustomerService
    ) -> None:
        customer = await service.create_customer("Ana")
        await MovementService(db, ledger_config).register_debt(customer.id, "42,10")

        loaded = await service.get_customer(customer.id)

        assert loaded.balance == Decimal("42.10")

    @pytest.mark.asyncio
    async def test_get_missing(self, service: CustomerService) -> None:
        with pytest.raises(NotFoundError, match="Customer not found: 999"):
            await service.get_customer(999)

    @pytest.mark.asyncio
    async def test_list_sorted(self, service: CustomerService) -> None:
        for name in ("Zoe", "ana", "Mario"):
            await service.create_customer(name)

        customers = await service.list_customers()

        assert [c.name for c in customers] == ["ana", "Mario", "Zoe"]

    @pytest.mark.asyncio
    async def test_summary(
        self, db: SQLiteAdapter, ledger_config: LedgerConfig, service: CustomerService
    ) -> None:
        movements = MovementService(db, ledger_config)
        ana = await service.create_customer("Ana")
        bruno = await service.create_customer("Bruno")
        await service.create_customer("Carla")
        await movements.register_debt(ana.id, "100")
        await movements.register_payment(ana.id, cash="40")
        await movements.register_debt(bruno.id, "15.50")

        summary = await service.get_summary()

        assert summary == {"customer_count": 3, "total_balance": Decimal("75.50")}

    @pytest.mark.asyncio
    async def test_summary_empty(self, service: CustomerService) -> None:
        assert await service.get_summary() == {"customer_count": 0, "total_balance": Decimal("0")}


class TestDeleteCustomer:
    """고객 삭제"""

    @pytest.mark.asyncio
    async def test_delete_with_movements(
        self, db: SQLiteAdapter, ledger_config: LedgerConfig, service: CustomerService
    ) -> None:
        movements = MovementService(db, ledger_config)
        customer = await service.create_customer("Ana")
        debt = (await movements.register_debt(customer.id, "10")).movements[0]

        await service.delete_customer(customer.id)

        with pytest.raises(NotFoundError):
            await service.get_customer(customer.id)
        assert await movements.store.get_movement(debt.id) is None

    @pytest.mark.asyncio
    async def test_delete_missing(self, service: CustomerService) -> None:
        with pytest.raises(NotFoundError):
            await service.delete_customer(999)
