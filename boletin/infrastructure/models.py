from sqlalchemy import ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column
from .db import Base


class UsuarioORM(Base):
    __tablename__ = "usuarios"
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)
    nombre: Mapped[str] = mapped_column(String(255), nullable=False)
    clave: Mapped[str] = mapped_column(String(255), nullable=False)
    rol: Mapped[str] = mapped_column(String(16), nullable=False, index=True)
    curso: Mapped[str | None] = mapped_column(String(64), nullable=True)

    def __repr__(self) -> str:
        return f"UsuarioORM(id={self.id!r}, email={self.email!r}, rol={self.rol!r})"


class MateriaORM(Base):
    __tablename__ = "materias"
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    # not unique: duplicate subject names are allowed by the store
    nombre: Mapped[str] = mapped_column(String(255), nullable=False)


class NotaORM(Base):
    __tablename__ = "notas"
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    alumno_id: Mapped[int] = mapped_column(ForeignKey("usuarios.id"), nullable=False, index=True)
    materia_id: Mapped[int] = mapped_column(ForeignKey("materias.id"), nullable=False)
    informe1: Mapped[str] = mapped_column(String(32), default="")
    informe2: Mapped[str] = mapped_column(String(32), default="")
    cuatri1: Mapped[str] = mapped_column(String(32), default="")
    informe1_c2: Mapped[str] = mapped_column(String(32), default="")
    informe2_c2: Mapped[str] = mapped_column(String(32), default="")
    cuatri2: Mapped[str] = mapped_column(String(32), default="")
    rec_dic: Mapped[str] = mapped_column(String(32), default="")
    rec_feb: Mapped[str] = mapped_column(String(32), default="")
    nota_final: Mapped[str] = mapped_column(String(32), default="")
    __table_args__ = (UniqueConstraint("alumno_id", "materia_id", name="uq_alumno_materia"),)
