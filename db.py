# db.py
import os
from dotenv import load_dotenv
from sqlalchemy import event
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import create_engine, Session

load_dotenv()

DATABASE_URL = os.getenv("DATABASE_URL", "").strip()
if not DATABASE_URL:
  raise RuntimeError("DATABASE_URL is not set in backend .env")


def make_engine(url: str) -> Engine:
  if not url.startswith("sqlite"):
    return create_engine(url, echo=False, pool_pre_ping=True)
  kwargs = {"connect_args": {"check_same_thread": False}}
  if url in ("sqlite://", "sqlite:///:memory:"):
    # one shared connection, otherwise every checkout sees an empty database
    kwargs["poolclass"] = StaticPool
  engine = create_engine(url, echo=False, **kwargs)

  @event.listens_for(engine, "connect")
  def _on_connect(dbapi_connection, connection_record):
    # the driver stops issuing its own BEGIN/COMMIT, so CREATE TABLE stays in our transaction
    dbapi_connection.isolation_level = None
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()

  @event.listens_for(engine, "begin")
  def _on_begin(conn):
    conn.exec_driver_sql("BEGIN")

  return engine


engine = make_engine(DATABASE_URL)

def get_session():
  with Session(engine) as session:
    yield session
