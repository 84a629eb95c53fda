# tests/conftest.py
import os

os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session, SQLModel

import models  # noqa: F401
from cache import ViewCache
from db import get_session, make_engine
from gateway import InvoiceGateway
from seed import seed_database


@pytest.fixture
def engine():
  engine = make_engine("sqlite://")
  yield engine
  engine.dispose()


@pytest.fixture
def bare_session(engine):
  """A session on a database with no tables at all."""
  with Session(engine) as session:
    yield session


@pytest.fixture
def session(engine):
  SQLModel.metadata.create_all(engine)
  with Session(engine) as session:
    yield session


@pytest.fixture
def seeded_session(engine):
  with Session(engine) as session:
    seed_database(session)
    yield session


@pytest.fixture
def gateway(seeded_session):
  return InvoiceGateway(seeded_session)


@pytest.fixture
def cache():
  return ViewCache()


@pytest.fixture
def client(engine):
  from main import app

  def override_session():
    with Session(engine) as session:
      yield session

  app.dependency_overrides[get_session] = override_session
  app.state.view_cache = ViewCache()
  yield TestClient(app)
  app.dependency_overrides.clear()
