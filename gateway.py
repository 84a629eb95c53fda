# gateway.py
import logging
import math
from typing import List, Optional, Tuple

from sqlalchemy import String, cast, func, or_, text
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, col, select

from errors import DatabaseError
from models import Customer, Invoice, Revenue, new_id

logger = logging.getLogger(__name__)

ITEMS_PER_PAGE = 6
MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")

INSERT_INVOICE = text(
  "INSERT INTO invoices (id, customer_id, amount, status, date) "
  "VALUES (:id, :customer_id, :amount, :status, :date)"
)
UPDATE_INVOICE = text(
  "UPDATE invoices SET customer_id = :customer_id, amount = :amount, status = :status "
  "WHERE id = :id"
)
DELETE_INVOICE = text("DELETE FROM invoices WHERE id = :id")


class InvoiceGateway:
  """Invoice reads and writes bound to one request's session."""

  def __init__(self, session: Session):
    self.session = session

  def _write(self, statement, params: dict, action: str) -> None:
    try:
      self.session.execute(statement, params)
      self.session.commit()
    except (SQLAlchemyError, OverflowError) as exc:
      # sqlite3 raises OverflowError itself for ints past 64 bits
      self.session.rollback()
      logger.exception("Failed to %s invoice %s", action, params.get("id"))
      raise DatabaseError(f"Failed to {action} invoice") from exc

  def insert_invoice(self, customer_id: str, amount: int, status: str, date: str) -> str:
    invoice_id = new_id()
    self._write(INSERT_INVOICE, {
      "id": invoice_id,
      "customer_id": customer_id,
      "amount": amount,
      "status": status,
      "date": date,
    }, "create")
    return invoice_id

  def update_invoice(self, invoice_id: str, customer_id: str, amount: int, status: str) -> None:
    self._write(UPDATE_INVOICE, {
      "id": invoice_id,
      "customer_id": customer_id,
      "amount": amount,
      "status": status,
    }, "update")

  def delete_invoice(self, invoice_id: str) -> None:
    self._write(DELETE_INVOICE, {"id": invoice_id}, "delete")

  # reads

  def _filtered(self, statement, query: str):
    if not query:
      return statement
    pattern = f"%{query.strip()}%"
    return statement.where(or_(
      col(Customer.name).ilike(pattern),
      col(Customer.email).ilike(pattern),
      cast(Invoice.amount, String).ilike(pattern),
      cast(Invoice.date, String).ilike(pattern),
      col(Invoice.status).ilike(pattern),
    ))

  def fetch_filtered_invoices(self, query: str = "", page: int = 1) -> List[Tuple[Invoice, Customer]]:
    offset = (max(page, 1) - 1) * ITEMS_PER_PAGE
    statement = select(Invoice, Customer).join(Customer, col(Customer.id) == col(Invoice.customer_id))
    statement = self._filtered(statement, query)
    statement = statement.order_by(col(Invoice.date).desc(), col(Invoice.id)).offset(offset).limit(ITEMS_PER_PAGE)
    try:
      return list(self.session.exec(statement).all())
    except SQLAlchemyError as exc:
      logger.exception("Failed to fetch invoices")
      raise DatabaseError("Failed to fetch invoices") from exc

  def fetch_invoices_pages(self, query: str = "") -> int:
    statement = select(func.count()).select_from(Invoice).join(Customer, col(Customer.id) == col(Invoice.customer_id))
    statement = self._filtered(statement, query)
    try:
      count = self.session.exec(statement).one()
    except SQLAlchemyError as exc:
      logger.exception("Failed to count invoices")
      raise DatabaseError("Failed to fetch total number of invoices") from exc
    return math.ceil(count / ITEMS_PER_PAGE)

  def fetch_invoice_by_id(self, invoice_id: str) -> Optional[Invoice]:
    try:
      return self.session.get(Invoice, invoice_id)
    except SQLAlchemyError as exc:
      logger.exception("Failed to fetch invoice %s", invoice_id)
      raise DatabaseError("Failed to fetch invoice") from exc

  def fetch_customers(self) -> List[Customer]:
    try:
      return list(self.session.exec(select(Customer).order_by(col(Customer.name))).all())
    except SQLAlchemyError as exc:
      logger.exception("Failed to fetch customers")
      raise DatabaseError("Failed to fetch all customers") from exc

  def fetch_revenue(self) -> List[Revenue]:
    try:
      rows = self.session.exec(select(Revenue)).all()
    except SQLAlchemyError as exc:
      logger.exception("Failed to fetch revenue")
      raise DatabaseError("Failed to fetch revenue data") from exc
    return sorted(rows, key=lambda r: MONTHS.index(r.month) if r.month in MONTHS else len(MONTHS))
