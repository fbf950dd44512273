"""One-shot idempotent seed: ``python -m boletin.seed``.

Creates the schema, the default admin and teacher accounts and the subject list.
Rows that already exist (by email, or by subject name) are left alone.
"""
import structlog
from sqlalchemy.orm import Session

from .infrastructure.db import engine, SessionLocal
from .infrastructure.models import Base, MateriaORM
from .infrastructure.repositories import UserRepository
from .infrastructure.security import PasswordHasher
from .domain.entities import Rol

logger = structlog.get_logger()

USUARIOS = [
    ("admin@colegio.edu", "Administrador", "admin123", Rol.ADMIN),
    ("profe@colegio.edu", "Profesor Juan", "prof123", Rol.PROFESOR),
]

MATERIAS = [
    "Matemáticas",
    "Inglés Técnico",
    "Marco Jurídico y Derechos del Trabajador",
    "Asistencia 2",
    "Hardware 4",
    "Prácticas Profesionalizantes 2",
    "Programación 4",
    "Redes 3",
]


def seed(db: Session, hasher: PasswordHasher | None = None) -> None:
    hasher = hasher or PasswordHasher()
    repo = UserRepository(db)
    for email, nombre, clave, rol in USUARIOS:
        if repo.get_by_email(email):
            continue
        repo.create(nombre, email, hasher.hash(clave), rol, None)
        logger.info("seed_user_created", email=email, rol=rol.value)

    existing = {nombre for (nombre,) in db.query(MateriaORM.nombre).all()}
    missing = [nombre for nombre in MATERIAS if nombre not in existing]
    db.add_all(MateriaORM(nombre=nombre) for nombre in missing)
    db.commit()
    logger.info("seed_materias_created", count=len(missing))


def main() -> None:
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        seed(db)
    finally:
        db.close()
    logger.info("seed_complete")


if __name__ == "__main__":
    main()
