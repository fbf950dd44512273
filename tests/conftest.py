import os
import sys

# settings are read once on import
os.environ.setdefault("SECRET_KEY", "test-secret")
os.environ.setdefault("LOGIN_RATE_LIMIT", "1000/minute")

CURRENT_DIR = os.path.dirname(__file__)
PROJECT_ROOT = os.path.dirname(CURRENT_DIR)
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from boletin.domain.entities import Rol
from boletin.infrastructure.db import get_db, enable_sqlite_foreign_keys
from boletin.infrastructure.models import Base, UsuarioORM
from boletin.infrastructure.security import PasswordHasher, create_access_token
from boletin.interfaces.http.routers.auth import limiter
from boletin.main import app
from boletin.seed import seed


@pytest.fixture
def engine():
    """In-memory SQLite shared by every session of one test"""
    eng = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(eng)
    Base.metadata.create_all(bind=eng)
    yield eng
    eng.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def seeded(db):
    """Seeded store plus one student; returns ids by role"""
    seed(db)
    alumno = UsuarioORM(
        email="alumno@colegio.edu",
        nombre="Alumno Uno",
        clave=PasswordHasher().hash("alumno123"),
        rol=Rol.ALUMNO.value,
        curso="5A",
    )
    db.add(alumno)
    db.commit()
    ids = {r.rol: r.id for r in db.query(UsuarioORM).all()}
    db.commit()
    return {
        "admin": ids[Rol.ADMIN.value],
        "profesor": ids[Rol.PROFESOR.value],
        "alumno": ids[Rol.ALUMNO.value],
    }


@pytest.fixture
def client(session_factory):
    def _get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _get_db
    limiter.reset()
    yield TestClient(app)
    app.dependency_overrides.clear()


def auth_header(user_id: int, rol: Rol) -> dict:
    return {"Authorization": f"Bearer {create_access_token(user_id=user_id, rol=rol)}"}


@pytest.fixture
def admin_headers(seeded):
    return auth_header(seeded["admin"], Rol.ADMIN)


@pytest.fixture
def profesor_headers(seeded):
    return auth_header(seeded["profesor"], Rol.PROFESOR)


@pytest.fixture
def alumno_headers(seeded):
    return auth_header(seeded["alumno"], Rol.ALUMNO)
