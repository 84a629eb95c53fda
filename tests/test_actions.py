from sqlmodel import select

import placeholder_data
from actions import INVOICES_PATH, Ok, PersistenceFailed, ValidationFailed, create_invoice, delete_invoice, update_invoice
from errors import DatabaseError
from gateway import InvoiceGateway
from models import Invoice
from normalize import today

LEE = placeholder_data.customers[2]["id"]


class FailingGateway:
  def __init__(self):
    self.calls = []

  def insert_invoice(self, *args):
    self.calls.append(("insert", args))
    raise DatabaseError("boom")

  def update_invoice(self, *args):
    self.calls.append(("update", args))
    raise DatabaseError("boom")

  def delete_invoice(self, *args):
    self.calls.append(("delete", args))
    raise DatabaseError("boom")


def _warm(cache):
  cache.get_or_render(INVOICES_PATH, ("", 1), lambda: {"invoices": []})


def test_create_persists_and_redirects(gateway, seeded_session, cache):
  _warm(cache)

  result = create_invoice(gateway, cache, {"customerId": LEE, "amount": "19.99", "status": "pending"})

  assert result == Ok(redirect_to=INVOICES_PATH)
  invoice = seeded_session.exec(select(Invoice).where(Invoice.amount == 1999)).one()
  assert invoice.customer_id == LEE
  assert invoice.status == "pending"
  assert invoice.date.isoformat() == today()
  assert not cache.is_cached(INVOICES_PATH)


def test_create_validation_failure_touches_nothing(cache):
  gateway = FailingGateway()
  _warm(cache)

  result = create_invoice(gateway, cache, {"customerId": LEE, "amount": "0", "status": "paid"})

  assert isinstance(result, ValidationFailed)
  assert result.errors == {"amount": ["Please enter an amount greater than $0."]}
  assert result.message == "Missing Fields. Failed to Create Invoice."
  assert gateway.calls == []
  assert cache.is_cached(INVOICES_PATH)


def test_create_database_failure_keeps_cache(cache):
  gateway = FailingGateway()
  _warm(cache)

  result = create_invoice(gateway, cache, {"customerId": LEE, "amount": "5", "status": "paid"})

  assert result == PersistenceFailed(message="Database Error: Failed to Create Invoice.")
  assert gateway.calls == [("insert", (LEE, 500, "paid", today()))]
  assert cache.is_cached(INVOICES_PATH, ("", 1))


def test_create_with_real_store_failure(bare_session, cache):
  _warm(cache)

  result = create_invoice(InvoiceGateway(bare_session), cache, {"customerId": LEE, "amount": "5", "status": "paid"})

  assert isinstance(result, PersistenceFailed)
  assert cache.is_cached(INVOICES_PATH)


def test_update_replaces_customer_amount_status(gateway, seeded_session, cache):
  invoice_id = gateway.insert_invoice(LEE, 100, "pending", "2024-01-01")
  other = placeholder_data.customers[1]["id"]
  _warm(cache)

  result = update_invoice(gateway, cache, invoice_id, {"customerId": other, "amount": "2.5", "status": "paid"})

  assert result == Ok(redirect_to=INVOICES_PATH)
  seeded_session.expire_all()
  invoice = seeded_session.get(Invoice, invoice_id)
  assert (invoice.customer_id, invoice.amount, invoice.status) == (other, 250, "paid")
  assert not cache.is_cached(INVOICES_PATH)


def test_update_validation_failure(cache):
  result = update_invoice(FailingGateway(), cache, "abc", {"customerId": LEE, "amount": "1", "status": "cancelled"})

  assert isinstance(result, ValidationFailed)
  assert result.message == "Missing Fields. Failed to Update Invoice."
  assert result.errors == {"status": ["Please select an invoice status."]}


def test_update_database_failure(cache):
  _warm(cache)

  result = update_invoice(FailingGateway(), cache, "abc", {"customerId": LEE, "amount": "1", "status": "paid"})

  assert result == PersistenceFailed(message="Database Error: Failed to Update Invoice.")
  assert cache.is_cached(INVOICES_PATH)


def test_delete_invalidates_without_redirect(gateway, seeded_session, cache):
  invoice_id = gateway.insert_invoice(LEE, 100, "pending", "2024-01-01")
  _warm(cache)

  result = delete_invoice(gateway, cache, invoice_id)

  assert result == Ok(redirect_to=None, message="Deleted Invoice.")
  seeded_session.expire_all()
  assert seeded_session.get(Invoice, invoice_id) is None
  assert not cache.is_cached(INVOICES_PATH)


def test_delete_database_failure(cache):
  _warm(cache)

  result = delete_invoice(FailingGateway(), cache, "abc")

  assert result == PersistenceFailed(message="Database Error: Failed to Delete Invoice.")
  assert cache.is_cached(INVOICES_PATH)
