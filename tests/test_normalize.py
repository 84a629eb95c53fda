import re
from datetime import datetime, timezone

import pytest

from normalize import to_minor_units, today


@pytest.mark.parametrize("amount", [0.01, 0.1, 1, 5, 12.34, 99.99, 1234.56, 100000])
def test_minor_units_match_rounded_cents(amount):
  cents = to_minor_units(amount)

  assert isinstance(cents, int)
  assert cents == round(amount * 100)
  assert cents > 0


def test_minor_units_do_not_truncate_float_error():
  # 19.99 * 100 == 1998.9999999999998
  assert to_minor_units(19.99) == 1999
  assert to_minor_units(0.29) == 29


def test_minor_units_round_half_up():
  assert to_minor_units(0.005) == 1
  assert to_minor_units(0.125) == 13


def test_today_is_utc_iso_date():
  value = today()

  assert re.fullmatch(r"\d{4}-\d{2}-\d{2}", value)
  assert value == datetime.now(timezone.utc).date().isoformat()
