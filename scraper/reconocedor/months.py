from dataclasses import dataclass
from datetime import date
from typing import List, Optional

from dateutil.relativedelta import relativedelta

MONTH_NAMES = [
    "january", "february", "march", "april", "may", "june",
    "july", "august", "september", "october", "november", "december",
]


@dataclass(frozen=True)
class MonthQuery:
    url: str
    month: str
    year: int
    index: int = 0


def generate_month_queries(
    base_url: str, start: date, end: date, today: Optional[date] = None
) -> List[MonthQuery]:
    """
    One search URL per calendar month, ``{base_url}/{month}/{year}``, from the
    later of ``today`` and ``start`` up to ``end`` inclusive. Past months are
    never queried.
    """
    today = today or date.today()
    first = max(today, start).replace(day=1)
    base_url = base_url.rstrip("/")
    out: List[MonthQuery] = []
    current = first
    while current <= end:
        month = MONTH_NAMES[current.month - 1]
        out.append(MonthQuery(
            url=f"{base_url}/{month}/{current.year}",
            month=month,
            year=current.year,
            index=len(out),
        ))
        current += relativedelta(months=1)
    return out
