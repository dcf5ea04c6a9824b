"""
날짜 유틸리티

movement 날짜는 달력 날짜(YYYY-MM-DD)로 저장한다.
"""

from datetime import date, datetime


def today() -> date:
    """오늘 날짜 (로컬 기준)"""
    return date.today()


def parse_date(raw: str | date | None) -> date | None:
    """입력값을 date로 변환

    "2026-03-01" 또는 ISO datetime("2026-03-01T10:00:00Z")을 허용.
    None/빈 문자열이면 None 반환.

    Raises:
        ValueError: 날짜 형식이 잘못된 경우
    """
    if raw is None:
        return None
    if isinstance(raw, datetime):
        return raw.date()
    if isinstance(raw, date):
        return raw

    text = str(raw).strip()
    if not text:
        return None

    # datetime 문자열("YYYY-MM-DDTHH:MM..." 또는 공백 구분)이면 날짜 부분만 사용
    if len(text) > 10 and text[10] in ("T", " "):
        text = text[:10]
    return date.fromisoformat(text)
