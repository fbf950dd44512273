from sqlalchemy import and_, select
from sqlalchemy.dialects import mysql, postgresql, sqlite
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from .models import UsuarioORM, MateriaORM, NotaORM
from ..domain.entities import User, Rol, GradeEntry, GRADE_FIELDS
from ..domain.errors import EmailAlreadyInUse, UserNotFound
from ..application.use_cases.authenticate_user import IUserRepository
from ..application.use_cases.save_report import IReportRepository

EMAIL_INDEX = "ix_usuarios_email"

def to_domain(u: UsuarioORM) -> User:
    return User(id=u.id, email=u.email, nombre=u.nombre, rol=Rol(u.rol), curso=u.curso)

def _is_duplicate_email(exc: IntegrityError, dialect_name: str) -> bool:
    if dialect_name == "mysql":
        # ER_DUP_ENTRY; email is the only unique key besides the primary key
        return exc.orig.args[0] == 1062
    if dialect_name == "postgresql":
        return getattr(exc.orig.diag, "constraint_name", None) == EMAIL_INDEX
    # sqlite names the column, not the index: "UNIQUE constraint failed: usuarios.email"
    return "UNIQUE constraint failed: usuarios.email" in str(exc.orig)


class UserRepository(IUserRepository):
    def __init__(self, db: Session): self.db = db

    def get_by_email(self, email: str) -> User | None:
        row = self.db.query(UsuarioORM).filter(UsuarioORM.email == email).first()
        return to_domain(row) if row else None

    def get_with_hash(self, email: str) -> tuple[User, str] | None:
        row = self.db.query(UsuarioORM).filter(UsuarioORM.email == email).first()
        return (to_domain(row), row.clave) if row else None

    def list_users(self, rol: Rol | None = None) -> list[User]:
        q = self.db.query(UsuarioORM)
        if rol is not None:
            q = q.filter(UsuarioORM.rol == rol.value)
        return [to_domain(r) for r in q.order_by(UsuarioORM.id).all()]

    def create(self, nombre: str, email: str, password_hash: str, rol: Rol, curso: str | None) -> User:
        row = UsuarioORM(nombre=nombre, email=email, clave=password_hash, rol=rol.value, curso=curso)
        self.db.add(row)
        self._commit()
        self.db.refresh(row)
        return to_domain(row)

    def update(self, user_id: int, **fields) -> User:
        row = self.db.get(UsuarioORM, user_id)
        if not row:
            raise UserNotFound(f"User {user_id} not found")
        for name, value in fields.items():
            setattr(row, name, value.value if isinstance(value, Rol) else value)
        self._commit()
        self.db.refresh(row)
        return to_domain(row)

    def delete(self, user_id: int) -> None:
        row = self.db.get(UsuarioORM, user_id)
        if not row:
            raise UserNotFound(f"User {user_id} not found")
        self.db.delete(row)
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

    def _commit(self) -> None:
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            if _is_duplicate_email(e, self.db.get_bind().dialect.name):
                raise EmailAlreadyInUse("Email already in use") from e
            raise
        except Exception:
            self.db.rollback()
            raise


def _upsert(dialect_name: str, values: dict):
    """Dialect-native INSERT ... ON CONFLICT/DUPLICATE KEY overwriting every grade slot."""
    if dialect_name == "mysql":
        stmt = mysql.insert(NotaORM).values(**values)
        return stmt.on_duplicate_key_update({f: stmt.inserted[f] for f in GRADE_FIELDS})
    if dialect_name == "postgresql":
        stmt = postgresql.insert(NotaORM).values(**values)
    elif dialect_name == "sqlite":
        stmt = sqlite.insert(NotaORM).values(**values)
    else:
        raise NotImplementedError(f"No upsert for dialect {dialect_name!r}")
    return stmt.on_conflict_do_update(
        index_elements=["alumno_id", "materia_id"],
        set_={f: stmt.excluded[f] for f in GRADE_FIELDS},
    )


class ReportRepository(IReportRepository):
    def __init__(self, db: Session): self.db = db

    def report_for(self, alumno_id: int) -> list[dict]:
        q = (select(MateriaORM.id.label("materiaId"),
                    MateriaORM.nombre.label("materiaNombre"),
                    NotaORM.id.label("notaId"),
                    *[getattr(NotaORM, f) for f in GRADE_FIELDS])
             .outerjoin(NotaORM, and_(NotaORM.materia_id == MateriaORM.id,
                                      NotaORM.alumno_id == alumno_id))
             .order_by(MateriaORM.id))
        return [dict(r._mapping) for r in self.db.execute(q).all()]

    def save_batch(self, alumno_id: int, entries: list[GradeEntry]) -> None:
        dialect_name = self.db.get_bind().dialect.name
        try:
            for entry in entries:
                values = {"alumno_id": alumno_id, "materia_id": entry.materia_id, **entry.slots}
                self.db.execute(_upsert(dialect_name, values))
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
