"""
core/utils/dates.py 테스트
"""

from datetime import date, datetime

import pytest

from core.utils.dates import parse_date, today


class TestParseDate:
    """parse_date 테스트"""

    def test_iso_date(self) -> None:
        """YYYY-MM-DD"""
        assert parse_date("2026-03-01") == date(2026, 3, 1)

    def test_iso_datetime_keeps_date_part(self) -> None:
        """ISO datetime 문자열은 날짜 부분만 사용"""
        assert parse_date("2026-03-01T23:10:00.000Z") == date(2026, 3, 1)

    def test_date_and_datetime_objects(self) -> None:
        """date/datetime 객체"""
        assert parse_date(date(2026, 1, 2)) == date(2026, 1, 2)
        assert parse_date(datetime(2026, 1, 2, 15, 0)) == date(2026, 1, 2)

    @pytest.mark.parametrize("raw", [None, "", "   "])
    def test_empty_is_none(self, raw) -> None:
        """빈 값 → None"""
        assert parse_date(raw) is None

    def test_space_separated_datetime(self) -> None:
        """공백 구분 datetime 문자열"""
        assert parse_date("2026-03-01 10:00") == date(2026, 3, 1)

    @pytest.mark.parametrize("raw", ["01/03/2026", "2026-03-01xyz", "2026-13-01"])
    def test_invalid_raises(self, raw: str) -> None:
        """형식 오류 / 날짜 뒤 잘못된 문자 → ValueError"""
        with pytest.raises(ValueError):
            parse_date(raw)


def test_today() -> None:
    """today는 date.today와 동일"""
    assert today() == date.today()
