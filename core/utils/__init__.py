"""
유틸리티 패키지

금액 정규화, 날짜 처리 등 공통 유틸리티
"""

from core.utils.amount import (
    CENTS,
    ZERO,
    format_amount,
    quantize,
    to_amount,
)
from core.utils.dates import (
    parse_date,
    today,
)

__all__ = [
    "CENTS",
    "ZERO",
    "format_amount",
    "quantize",
    "to_amount",
    "parse_date",
    "today",
]
