"""
Web 서비스 패키지

비즈니스 로직 처리
"""

from web.services.customer_service import CustomerService
from web.services.movement_service import MovementResult, MovementService

__all__ = [
    "CustomerService",
    "MovementResult",
    "MovementService",
]
