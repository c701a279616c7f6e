import calendar
import re
import datetime as dt

from app.models.enums import Frequency

MONTH_KEY = re.compile(r"^\d{4}-\d{2}$")


def month_key(day: dt.date) -> str:
    return day.strftime("%Y-%m")


def add_months(day: dt.date, months: int) -> dt.date:
    """Mismo día N meses después; si el mes es más corto, el último día del mes."""
    index = day.month - 1 + months
    year, month = day.year + index // 12, index % 12 + 1
    last_day = calendar.monthrange(year, month)[1]
    return day.replace(year=year, month=month, day=min(day.day, last_day))


def add_period(day: dt.date, frequency: Frequency) -> dt.date:
    if frequency == Frequency.monthly:
        return add_months(day, 1)
    elif frequency == Frequency.weekly:
        return day + dt.timedelta(days=7)
    elif frequency == Frequency.bi_weekly:
        return day + dt.timedelta(days=14)
    raise ValueError(f"Frecuencia desconocida: {frequency}")


def months_until(start: dt.date, end: dt.date) -> int:
    return (end.year - start.year) * 12 + (end.month - start.month)


def month_bounds(month: str) -> tuple:
    """Primer y último día de un mes YYYY-MM."""
    year, number = (int(part) for part in month.split("-"))
    first = dt.date(year, number, 1)
    return first, first.replace(day=calendar.monthrange(year, number)[1])


def is_month_key(value) -> bool:
    if not isinstance(value, str) or not MONTH_KEY.fullmatch(value):
        return False
    return int(value[:4]) >= 1 and 1 <= int(value[5:]) <= 12
