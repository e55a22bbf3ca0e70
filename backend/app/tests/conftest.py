"""Shared pytest fixtures."""

import os
from datetime import date

import pytest

# Point the app at SQLite before importing app modules
os.environ.setdefault("DATABASE_URL", "sqlite://")

from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from app.core.database import get_db  # noqa: E402
from app.main import app  # noqa: E402
from app.models import Base, Document  # noqa: E402


@pytest.fixture
def engine():
    """In-memory SQLite engine shared by every connection of one test."""
    eng = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=eng)
    yield eng
    Base.metadata.drop_all(bind=eng)
    eng.dispose()


@pytest.fixture
def db(engine):
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(engine) -> TestClient:
    """FastAPI test client bound to the test database."""
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    def override_get_db():
        session = TestingSession()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def add_documents(db):
    """Insert documents given as dicts; missing fields get harmless defaults."""

    def _add(*rows):
        docs = []
        for i, row in enumerate(rows):
            data = {
                "title": f"Document {i}",
                "text": "",
                "folder_path": "",
                "file_link": f"files/doc-{i}.pdf",
                **row,
            }
            if isinstance(data["document_date"], str):
                data["document_date"] = date.fromisoformat(data["document_date"])
            docs.append(Document(**data))
        db.add_all(docs)
        db.commit()
        return docs

    return _add
