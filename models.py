# models.py
import datetime
from uuid import uuid4

from sqlalchemy import CheckConstraint
from sqlmodel import SQLModel, Field


def new_id() -> str:
  return str(uuid4())


class User(SQLModel, table=True):
  __tablename__ = "users"

  id: str = Field(default_factory=new_id, primary_key=True)
  name: str = Field(max_length=255)
  email: str = Field(unique=True)
  password: str  # bcrypt hash


class Customer(SQLModel, table=True):
  __tablename__ = "customers"

  id: str = Field(default_factory=new_id, primary_key=True)
  name: str = Field(max_length=255)
  email: str = Field(max_length=255)
  image_url: str = Field(max_length=255)


class Invoice(SQLModel, table=True):
  __tablename__ = "invoices"
  __table_args__ = (
    CheckConstraint("amount >= 1", name="invoices_amount_positive"),
    CheckConstraint("status IN ('pending', 'paid')", name="invoices_status_check"),
  )

  id: str = Field(default_factory=new_id, primary_key=True)
  customer_id: str = Field(foreign_key="customers.id", index=True)
  amount: int  # minor units
  status: str = Field(max_length=255)  # pending|paid
  date: datetime.date


class Revenue(SQLModel, table=True):
  __tablename__ = "revenue"

  month: str = Field(primary_key=True, max_length=4)  # Jan, Feb, ...
  revenue: int
