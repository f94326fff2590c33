from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Optional
from zoneinfo import ZoneInfo
import re

from config.settings import settings
from src.common.exceptions import ValidationError
from .diaries_models import TimeUnit

DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


@dataclass(frozen=True)
class DateRange:
    """[start, end) 구간. end는 종료일 다음 날 00:00"""
    start: datetime
    end: datetime


def service_tz() -> ZoneInfo:
    return ZoneInfo(settings.TIMEZONE)


def parse_date(value: Optional[str], field: str) -> Optional[date]:
    """YYYY-MM-DD 형식만 허용"""
    if value is None or value == "":
        return None
    if not DATE_PATTERN.match(value):
        raise ValidationError(f"{field} must be a valid ISO 8601 date string (YYYY-MM-DD)")
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise ValidationError(f"{field} must be a valid ISO 8601 date string (YYYY-MM-DD)")


def to_range(start: date, end: date) -> DateRange:
    """시작일 00:00 ~ 종료일 23:59:59 (양 끝 포함)"""
    if start > end:
        raise ValidationError("startDate must not be after endDate")
    tz = service_tz()
    return DateRange(
        start=datetime.combine(start, time.min, tzinfo=tz),
        end=datetime.combine(end + timedelta(days=1), time.min, tzinfo=tz),
    )


def _months_ago(moment: datetime, months: int) -> datetime:
    year, month = divmod(moment.month - 1 - months, 12)
    year += moment.year
    month += 1
    # 말일 보정 (3/31 -> 2/28)
    for day in range(moment.day, 0, -1):
        try:
            return moment.replace(year=year, month=month, day=day)
        except ValueError:
            continue
    return moment


def resolve_bucket_range(unit: TimeUnit, start_date: Optional[str], end_date: Optional[str]) -> Optional[DateRange]:
    """
    목록 조회 구간 결정
    - Day: 날짜 무시 (커서 페이지 조회) -> None
    - Week/Month: 시작/종료일 모두 필요
    """
    if unit == TimeUnit.DAY:
        return None

    messages = []
    if not start_date:
        messages.append("startDate should not be empty")
    if not end_date:
        messages.append("endDate should not be empty")
    if messages:
        raise ValidationError(messages)

    return to_range(parse_date(start_date, "startDate"), parse_date(end_date, "endDate"))


def resolve_stats_range(start_date: Optional[str], end_date: Optional[str],
                        months: int = 1, now: Optional[datetime] = None) -> DateRange:
    """
    통계 조회 구간 결정
    - 형식이 잘못된 날짜는 ValidationError
    - 둘 중 하나라도 없으면 현재로부터 months 개월 전 ~ 현재
    """
    start = parse_date(start_date, "startDate")
    end = parse_date(end_date, "endDate")
    if start and end:
        return to_range(start, end)

    now = now or datetime.now(service_tz())
    return DateRange(start=_months_ago(now, months), end=now)
