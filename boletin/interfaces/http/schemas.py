from pydantic import BaseModel, EmailStr, Field, field_validator
from ...domain.entities import Rol

class LoginReq(BaseModel):
    email: str | None = None
    clave: str | None = None

class UsuarioOut(BaseModel):
    id: int
    email: str
    nombre: str
    rol: Rol
    curso: str | None = None
    class Config: from_attributes = True

class LoginResp(BaseModel):
    message: str
    token: str
    usuario: UsuarioOut

class UsuariosResp(BaseModel):
    usuarios: list[UsuarioOut]

class AlumnosResp(BaseModel):
    alumnos: list[UsuarioOut]

class UsuarioIn(BaseModel):
    nombre: str | None = None
    email: EmailStr | None = None
    clave: str | None = None
    rol: str | None = None
    curso: str | None = None

class PerfilUpdate(BaseModel):
    nombre: str | None = None
    email: EmailStr | None = None
    clave: str | None = None

class MessageResp(BaseModel):
    message: str

class CreatedResp(MessageResp):
    id: int

class PerfilResp(MessageResp):
    usuario: UsuarioOut

class NotaIn(BaseModel):
    materiaId: int
    informe1: str | None = None
    informe2: str | None = None
    cuatri1: str | None = None
    informe1_c2: str | None = None
    informe2_c2: str | None = None
    cuatri2: str | None = None
    rec_dic: str | None = None
    rec_feb: str | None = None
    nota_final: str | None = None

    @field_validator("*", mode="before")
    @classmethod
    def numbers_as_text(cls, v, info):
        # grades are free text, but clients often post 7 or 8.5
        if info.field_name != "materiaId" and isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v

class BoletinReq(BaseModel):
    alumnoId: int | None = None
    notas: list[NotaIn] | None = None

class BoletinRow(BaseModel):
    materiaId: int
    materiaNombre: str
    notaId: int | None = None
    informe1: str | None = None
    informe2: str | None = None
    cuatri1: str | None = None
    informe1_c2: str | None = None
    informe2_c2: str | None = None
    cuatri2: str | None = None
    rec_dic: str | None = None
    rec_feb: str | None = None
    nota_final: str | None = None

class BoletinResp(BaseModel):
    boletin: list[BoletinRow] = Field(default_factory=list)
