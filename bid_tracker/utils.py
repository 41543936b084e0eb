# bid_tracker/utils.py
from datetime import date, datetime, time
from typing import Iterable, List, Optional


def is_blank(value: Optional[str]) -> bool:
    return not value or not str(value).strip()


def history_key(company: str, role: str) -> str:
    """Case-insensitive lookup key for a (company, role) pair."""
    return f"{(company or '').lower()}:{(role or '').lower()}"


def unique(items: Iterable[str]) -> List[str]:
    out = []
    seen = set()
    for x in items or []:
        if x in seen:
            continue
        seen.add(x)
        out.append(x)
    return out


def today_midnight() -> datetime:
    return datetime.combine(date.today(), time.min)


def as_date(value) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def plural(count: int, word: str) -> str:
    return word if count == 1 else f"{word}s"
