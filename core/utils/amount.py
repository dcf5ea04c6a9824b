"""
금액 정규화 유틸리티

폼에서 들어오는 지역 형식 금액 문자열("$ 1.234,50" 등)을
Decimal로 변환한다. 모든 금액 필드(amount, cash, transfer)는
검증/저장 전에 반드시 to_amount()를 거친다.
"""

import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

# 소수점 2자리 고정
CENTS = Decimal("0.01")
ZERO = Decimal("0.00")

_DISALLOWED_CHARS = re.compile(r"[^\d.,-]")
# 콤마 없이 "123.4" / "123.45" 형태면 점을 소수점으로 간주
_DOT_DECIMAL = re.compile(r"^\d*\.\d{1,2}$")


def quantize(value: Decimal) -> Decimal:
    """소수점 2자리로 반올림 (ROUND_HALF_UP)"""
    return value.quantize(CENTS, rounding=ROUND_HALF_UP)


def to_amount(raw: str | int | float | Decimal | None) -> Decimal:
    """입력값을 Decimal 금액으로 정규화

    규칙:
    - None/빈 문자열/해석 불가 → 0
    - 소수점 2자리로 표현할 수 없는 큰 값(28자리 초과) → 0
    - 숫자 타입은 재해석 없이 그대로 변환 (멱등성 보장)
    - 문자열은 숫자, '.', ',', '-' 외 문자 제거
    - 콤마가 있으면: '.'은 천 단위 구분자, 마지막 ','가 소수점
    - 콤마가 없으면: 끝자리 1~2자리 앞의 단일 '.'만 소수점, 그 외 '.'은 천 단위 구분자
    - 선행 '-'만 부호로 인정

    Args:
        raw: 사용자 입력 금액

    Returns:
        소수점 2자리 Decimal (음수 가능, 검증은 호출측 책임)

    Example:
        >>> to_amount("$ 1.234,50")
        Decimal('1234.50')
        >>> to_amount("1.500")
        Decimal('1500.00')
    """
    value = _to_decimal(raw)
    if value is None or not value.is_finite():
        return ZERO

    try:
        return quantize(value)
    except InvalidOperation:
        # 소수점 2자리로 표현할 수 없는 크기 (정밀도 28자리 초과)
        return ZERO


def _to_decimal(raw: str | int | float | Decimal | None) -> Decimal | None:
    """입력값 → Decimal (해석 불가면 None)"""
    if raw is None or isinstance(raw, bool):
        return None

    if isinstance(raw, Decimal):
        return raw

    if isinstance(raw, (int, float)):
        return Decimal(str(raw))

    cleaned = _DISALLOWED_CHARS.sub("", str(raw))
    negative = cleaned.startswith("-")
    cleaned = cleaned.replace("-", "")

    if "," in cleaned:
        integer_part, _, fraction = cleaned.rpartition(",")
        integer_part = integer_part.replace(".", "").replace(",", "")
        cleaned = f"{integer_part}.{fraction}"
    elif not _DOT_DECIMAL.match(cleaned):
        cleaned = cleaned.replace(".", "")

    if cleaned in ("", "."):
        return None

    try:
        value = Decimal(cleaned)
    except InvalidOperation:
        return None

    return -value if negative else value


def format_amount(value: Decimal) -> str:
    """API 응답용 문자열 (소수점 2자리)"""
    return f"{quantize(value):.2f}"
