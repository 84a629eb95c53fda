# normalize.py
from datetime import datetime, timezone
from decimal import Decimal, ROUND_HALF_UP


def to_minor_units(amount: float) -> int:
  # str() keeps 19.99 as "19.99" so it lands on 1999, not 1998
  cents = Decimal(str(amount)) * 100
  return int(cents.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def today() -> str:
  return datetime.now(timezone.utc).date().isoformat()
