# tests/conftest.py
import os

os.environ.setdefault("RUN_MIGRATIONS_ON_STARTUP", "0")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.main import api
from app.api import deps
from app.db.base import Base
from app.db.session import get_db
from app.core.security_password import hash_password
from app.models.user import User, UserRole


@pytest.fixture()
def db():
    """Banco SQLite em memória, recriado a cada teste."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


def _make_user(db, *, email, role, password="senha-forte-123", name=None):
    user = User(
        name=name or email.split("@")[0].title(),
        email=email,
        role=role,
        active=True,
        hashed_password=hash_password(password),
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture()
def admin_user(db):
    return _make_user(db, email="admin@academia.go.gov.br", role=UserRole.admin.value, name="Admin")


@pytest.fixture()
def teacher_user(db):
    return _make_user(db, email="prof@academia.go.gov.br", role=UserRole.teacher.value, name="Professora")


def _override_db(db):
    def _get_db():
        yield db
    return _get_db


@pytest.fixture()
def anon_client(db):
    """Cliente sem operador logado (autenticação real por token)."""
    api.dependency_overrides[get_db] = _override_db(db)
    with TestClient(api) as client:
        yield client
    api.dependency_overrides.clear()


@pytest.fixture()
def client(db, admin_user):
    """Cliente autenticado como administrador."""
    api.dependency_overrides[get_db] = _override_db(db)
    api.dependency_overrides[deps.get_current_user] = lambda: admin_user
    with TestClient(api) as client:
        yield client
    api.dependency_overrides.clear()


@pytest.fixture()
def teacher_client(db, teacher_user):
    """Cliente autenticado como professor."""
    api.dependency_overrides[get_db] = _override_db(db)
    api.dependency_overrides[deps.get_current_user] = lambda: teacher_user
    with TestClient(api) as client:
        yield client
    api.dependency_overrides.clear()
