import re
from datetime import date, datetime, timedelta

MONTH_PATTERN = r"^\d{4}-(0[1-9]|1[0-2])$"
_MONTH_RE = re.compile(MONTH_PATTERN)


def parse_month(month: str) -> tuple[int, int]:
    if not _MONTH_RE.match(month):
        raise ValueError(f"Invalid month '{month}', expected YYYY-MM")
    year, month_num = month.split("-")
    return int(year), int(month_num)


def format_month(year: int, month_num: int) -> str:
    return f"{year:04d}-{month_num:02d}"


def current_month(today: date | None = None) -> str:
    today = today or datetime.now().date()
    return format_month(today.year, today.month)


def month_range(month: str) -> tuple[datetime, datetime]:
    """First and last instant of a YYYY-MM month."""
    year, month_num = parse_month(month)
    first_day = datetime(year, month_num, 1)
    last_day = (first_day + timedelta(days=32)).replace(day=1) - timedelta(days=1)
    last_day = last_day.replace(hour=23, minute=59, second=59, microsecond=999999)
    return first_day, last_day


def shift_month(month: str, offset: int) -> str:
    year, month_num = parse_month(month)
    index = year * 12 + (month_num - 1) + offset
    return format_month(index // 12, index % 12 + 1)


def previous_month(month: str) -> str:
    return shift_month(month, -1)


def next_month(month: str) -> str:
    return shift_month(month, 1)


def months_between(start: str, end: str) -> int:
    start_year, start_num = parse_month(start)
    end_year, end_num = parse_month(end)
    return (end_year - start_year) * 12 + (end_num - start_num)


def wall_clock(value: datetime) -> datetime:
    # stored columns are naive; keep the wall-clock time the client sent
    return value.replace(tzinfo=None) if value.tzinfo else value
