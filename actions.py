# actions.py
"""
Invoice form handlers.

Each handler validates the raw form fields, normalizes the amount and date,
writes through the gateway and, only when the write went through, invalidates
the cached invoice list. The caller gets back a result and decides what to do
with it (redirect, show field errors, show the message).
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Union

from cache import ViewCache
from errors import DatabaseError, ValidationError
from gateway import InvoiceGateway
from normalize import to_minor_units, today
from validation import validate_invoice_form

logger = logging.getLogger(__name__)

INVOICES_PATH = "/dashboard/invoices"


@dataclass
class Ok:
  redirect_to: Optional[str] = None
  message: Optional[str] = None


@dataclass
class ValidationFailed:
  errors: Dict[str, List[str]] = field(default_factory=dict)
  message: str = ""


@dataclass
class PersistenceFailed:
  message: str


MutationResult = Union[Ok, ValidationFailed, PersistenceFailed]


def create_invoice(gateway: InvoiceGateway, cache: ViewCache, form_data: Mapping[str, Any]) -> MutationResult:
  try:
    form = validate_invoice_form(form_data)
  except ValidationError as exc:
    return ValidationFailed(errors=exc.errors, message="Missing Fields. Failed to Create Invoice.")

  amount = to_minor_units(form.amount)
  date = today()

  try:
    invoice_id = gateway.insert_invoice(form.customer_id, amount, form.status, date)
  except DatabaseError:
    return PersistenceFailed(message="Database Error: Failed to Create Invoice.")

  logger.info("Created invoice %s for customer %s (%d)", invoice_id, form.customer_id, amount)
  cache.revalidate_path(INVOICES_PATH)
  return Ok(redirect_to=INVOICES_PATH)


def update_invoice(gateway: InvoiceGateway, cache: ViewCache, invoice_id: str, form_data: Mapping[str, Any]) -> MutationResult:
  try:
    form = validate_invoice_form(form_data)
  except ValidationError as exc:
    return ValidationFailed(errors=exc.errors, message="Missing Fields. Failed to Update Invoice.")

  amount = to_minor_units(form.amount)

  try:
    gateway.update_invoice(invoice_id, form.customer_id, amount, form.status)
  except DatabaseError:
    return PersistenceFailed(message="Database Error: Failed to Update Invoice.")

  logger.info("Updated invoice %s", invoice_id)
  cache.revalidate_path(INVOICES_PATH)
  return Ok(redirect_to=INVOICES_PATH)


def delete_invoice(gateway: InvoiceGateway, cache: ViewCache, invoice_id: str) -> MutationResult:
  try:
    gateway.delete_invoice(invoice_id)
  except DatabaseError:
    return PersistenceFailed(message="Database Error: Failed to Delete Invoice.")

  logger.info("Deleted invoice %s", invoice_id)
  cache.revalidate_path(INVOICES_PATH)
  # deleted in place from the list, nothing to navigate to
  return Ok(message="Deleted Invoice.")
