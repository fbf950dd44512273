from dataclasses import dataclass
from enum import Enum


class Rol(str, Enum):
    ADMIN = "ADMIN"
    PROFESOR = "PROFESOR"
    ALUMNO = "ALUMNO"


# Free-text slots of a grade record, in report order.
GRADE_FIELDS = (
    "informe1", "informe2", "cuatri1",
    "informe1_c2", "informe2_c2", "cuatri2",
    "rec_dic", "rec_feb", "nota_final",
)


@dataclass(frozen=True)
class User:
    id: int | None
    email: str
    nombre: str
    rol: Rol
    curso: str | None = None


@dataclass(frozen=True)
class GradeEntry:
    materia_id: int
    slots: dict[str, str]


@dataclass(frozen=True)
class Claims:
    id: int
    rol: Rol
