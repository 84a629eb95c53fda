# seed.py
import logging
import uuid
from datetime import date
from typing import Dict, Iterable, List

import bcrypt
from sqlalchemy import text
from sqlalchemy.dialects import postgresql, sqlite
from sqlmodel import Session, SQLModel

import placeholder_data
from errors import SeedingError
from models import Customer, Invoice, Revenue, User, new_id

logger = logging.getLogger(__name__)

BCRYPT_ROUNDS = 10

DELETE_DUPLICATE_INVOICES = text("""
  DELETE FROM invoices
  WHERE id IN (
    SELECT id FROM (
      SELECT
        id,
        ROW_NUMBER() OVER (PARTITION BY customer_id, amount, date ORDER BY id) AS row_num
      FROM invoices
    ) ranked
    WHERE row_num > 1
  )
""")

# seed invoices without an id get one derived from their contents, so a re-run maps onto the same rows
SEED_INVOICE_NAMESPACE = uuid.UUID("6f1b0d7e-3c2a-4f5e-9b8d-2a7c4e1f0b93")


def hash_password(password: str) -> str:
  return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=BCRYPT_ROUNDS)).decode("utf-8")


def _insert_or_skip(session: Session, model, rows: List[Dict], conflict_column: str) -> None:
  if not rows:
    return
  dialect = session.get_bind().dialect.name
  if dialect == "postgresql":
    insert = postgresql.insert
  elif dialect == "sqlite":
    insert = sqlite.insert
  else:
    raise SeedingError(f"Conflict-skip inserts are not supported on {dialect}")
  statement = insert(model.__table__).on_conflict_do_nothing(index_elements=[conflict_column])
  session.execute(statement, rows)


def ensure_schema(session: Session) -> None:
  connection = session.connection()
  if connection.dialect.name == "postgresql":
    connection.execute(text('CREATE EXTENSION IF NOT EXISTS "uuid-ossp"'))
  SQLModel.metadata.create_all(connection)


def seed_users(session: Session, users: Iterable[Dict]) -> None:
  rows = [
    {"id": u.get("id") or new_id(), "name": u["name"], "email": u["email"], "password": hash_password(u["password"])}
    for u in users
  ]
  _insert_or_skip(session, User, rows, "id")


def seed_customers(session: Session, customers: Iterable[Dict]) -> None:
  rows = [{**c, "id": c.get("id") or new_id()} for c in customers]
  _insert_or_skip(session, Customer, rows, "id")


def seed_invoice_id(customer_id: str, amount: int, day: date) -> str:
  return str(uuid.uuid5(SEED_INVOICE_NAMESPACE, f"{customer_id}:{amount}:{day.isoformat()}"))


def seed_invoices(session: Session, invoices: Iterable[Dict]) -> None:
  rows = []
  for i in invoices:
    day = date.fromisoformat(i["date"]) if isinstance(i["date"], str) else i["date"]
    rows.append({
      "id": i.get("id") or seed_invoice_id(i["customer_id"], i["amount"], day),
      "customer_id": i["customer_id"],
      "amount": i["amount"],
      "status": i["status"],
      "date": day,
    })
  _insert_or_skip(session, Invoice, rows, "id")


def seed_revenue(session: Session, revenue: Iterable[Dict]) -> None:
  _insert_or_skip(session, Revenue, [dict(r) for r in revenue], "month")


def delete_duplicate_invoices(session: Session) -> int:
  """Keep the lowest id per (customer, amount, date) and delete the rest."""
  result = session.execute(DELETE_DUPLICATE_INVOICES)
  return result.rowcount


def seed_database(session: Session, data=placeholder_data) -> None:
  """
  Create the tables and load the demo rows in a single transaction.

  Safe to run repeatedly: every insert skips rows that already exist, and
  any invoices sharing a (customer, amount, date) are collapsed to one at the end.
  Any failure rolls the whole run back and is raised as SeedingError.
  """
  logger.info("Seeding database")
  try:
    ensure_schema(session)
    seed_users(session, data.users)
    seed_customers(session, data.customers)
    seed_invoices(session, data.invoices)
    seed_revenue(session, data.revenue)
    removed = delete_duplicate_invoices(session)
    session.commit()
  except Exception as exc:
    session.rollback()
    logger.exception("Seeding failed, transaction rolled back")
    raise SeedingError(str(exc)) from exc
  logger.info("Database seeded (%d duplicate invoices removed)", removed)
