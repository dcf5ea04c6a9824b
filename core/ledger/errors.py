"""
Ledger 예외 정의

HTTP 매핑 (web.app 예외 핸들러):
- InvalidArgumentError, PaymentExceedsBalanceError → 400
- NotFoundError → 404
- StorageFailureError → 500 (상세 내용은 로그에만 기록)
"""


class LedgerError(Exception):
    """Ledger 기본 예외"""
    pass


class InvalidArgumentError(LedgerError):
    """입력값 오류

    Args:
        field: 문제가 된 필드 이름
        message: 오류 메시지
    """

    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field
        self.message = message


class PaymentExceedsBalanceError(InvalidArgumentError):
    """결제 금액이 현재 잔액을 초과"""

    def __init__(self, message: str = "Payment exceeds the customer's current balance."):
        super().__init__("amount", message)


class NotFoundError(LedgerError):
    """고객 또는 movement 없음"""

    def __init__(self, entity: str, entity_id: int):
        super().__init__(f"{entity} not found: {entity_id}")
        self.entity = entity
        self.entity_id = entity_id


class StorageFailureError(LedgerError):
    """DB 트랜잭션 실패 (롤백 완료)"""
    pass


class LedgerConfigError(LedgerError):
    """DB에 기록된 잔액 전략과 설정이 다른 경우"""
    pass
