"""Test fixtures for Plotkeeper: in-memory SQLite, stores and an API client."""
from __future__ import annotations

import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("APP_ENV", "test")
os.environ["AUTH_REQUIRED"] = "false"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import plotkeeper.models  # noqa: F401
from plotkeeper.database import Base, build_engine, get_db
from plotkeeper.models import FieldType
from plotkeeper.services import (
    CategoryAssignmentStore, FieldDefinitionStore, FieldValueStore,
    PlotCategoryStore, PlotStore, RowAggregator, RowCategoryStore,
)


@pytest.fixture
def engine():
    engine = build_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def plot_categories(db):
    return PlotCategoryStore(db)


@pytest.fixture
def row_categories(db):
    return RowCategoryStore(db)


@pytest.fixture
def plots(db):
    return PlotStore(db)


@pytest.fixture
def field_definitions(db):
    return FieldDefinitionStore(db)


@pytest.fixture
def field_values(db):
    return FieldValueStore(db)


@pytest.fixture
def assignments(db):
    return CategoryAssignmentStore(db)


@pytest.fixture
def aggregator(db):
    return RowAggregator(db)


@pytest.fixture
def north_field(plots, plot_categories):
    """Plot 'North Field' tagged with the 'Vegetables' plot category."""
    vegetables = plot_categories.create("Vegetables", color="#22c55e")
    return plots.create("North Field", category_id=vegetables.id)


@pytest.fixture
def crop_field(field_definitions):
    return field_definitions.create("Crop", FieldType.TEXT)


@pytest.fixture
def client(session_factory):
    from plotkeeper.main import app

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
