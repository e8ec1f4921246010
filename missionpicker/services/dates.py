from datetime import date, datetime, timedelta

DAY_KEY_FORMAT = "%Y-%m-%d"


def as_date(value) -> date:
    """Coerce a date, datetime or YYYY-MM-DD string to a date; fail fast otherwise."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return datetime.strptime(value, DAY_KEY_FORMAT).date()
        except ValueError:
            raise ValueError(f"Invalid day key {value!r}, expected YYYY-MM-DD") from None
    raise ValueError(f"Expected a date or YYYY-MM-DD string, got {type(value).__name__}")


def day_key(value) -> str:
    return as_date(value).strftime(DAY_KEY_FORMAT)


def week_start(value) -> date:
    """Get the Sunday on or before the given date."""
    d = as_date(value)
    # date.weekday() is Monday=0..Sunday=6; shift so Sunday=0
    days_since_sunday = (d.weekday() + 1) % 7
    return d - timedelta(days=days_since_sunday)


def month_start(value) -> date:
    return as_date(value).replace(day=1)


def week_label(week_start_date) -> str:
    start = as_date(week_start_date)
    end = start + timedelta(days=6)
    return f"{day_key(start)} ~ {day_key(end)}"


def month_label(month_start_date) -> str:
    return as_date(month_start_date).strftime("%Y-%m")
