# errors.py
from typing import Dict, List


class InvoicingError(Exception):
  pass


class ValidationError(InvoicingError):
  """Field-level failure. Raised before anything touches storage."""

  def __init__(self, errors: Dict[str, List[str]]):
    self.errors = errors
    super().__init__(", ".join(sorted(errors)))


class DatabaseError(InvoicingError):
  pass


class SeedingError(InvoicingError):
  pass
