# formatting.py
from datetime import date
from typing import Iterable, List, Tuple, Union

ELLIPSIS = "..."

MONTH_ABBR = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")

DATE_PATTERNS = {
  "en-US": "{month} {day}, {year}",
  "en-GB": "{day} {month} {year}",
}


def format_currency(amount: int) -> str:
  """Cents to en-US dollars, e.g. 123456 -> "$1,234.56"."""
  sign = "-" if amount < 0 else ""
  return f"{sign}${abs(amount) / 100:,.2f}"


def format_date(date_str: str, locale: str = "en-US") -> str:
  pattern = DATE_PATTERNS.get(locale)
  if pattern is None:
    raise ValueError(f"Unsupported locale: {locale}")
  # accept full timestamps too, only the calendar day is shown
  d = date.fromisoformat(date_str[:10])
  return pattern.format(month=MONTH_ABBR[d.month - 1], day=d.day, year=d.year)


def generate_pagination(current_page: int, total_pages: int) -> List[Union[int, str]]:
  if total_pages <= 7:
    return list(range(1, total_pages + 1))

  if current_page <= 3:
    return [1, 2, 3, ELLIPSIS, total_pages - 1, total_pages]

  if current_page >= total_pages - 2:
    return [1, 2, ELLIPSIS, total_pages - 2, total_pages - 1, total_pages]

  return [1, ELLIPSIS, current_page - 1, current_page, current_page + 1, ELLIPSIS, total_pages]


def generate_y_axis(revenue: Iterable[int]) -> Tuple[List[str], int]:
  """Chart labels in thousands, from the rounded-up highest month down to $0K."""
  values = list(revenue)
  highest = max(values) if values else 0
  top_label = -(-highest // 1000) * 1000
  labels = [f"${i // 1000}K" for i in range(top_label, -1, -1000)]
  return labels, top_label
