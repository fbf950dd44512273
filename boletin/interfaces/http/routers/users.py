import structlog
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ....infrastructure.db import get_db
from ....infrastructure.repositories import UserRepository
from ....infrastructure.security import PasswordHasher
from ....application.use_cases.manage_users import CreateUser, UpdateOwnProfile, UpdateUser, DeleteUser
from ....domain.entities import Claims, Rol
from ....domain.errors import EmailAlreadyInUse, InvalidRole, SelfDeletion, UserNotFound
from ..authz import get_claims, require_admin, require_admin_or_teacher
from ..schemas import (AlumnosResp, CreatedResp, MessageResp, PerfilResp, PerfilUpdate,
                       UsuarioIn, UsuarioOut, UsuariosResp)

logger = structlog.get_logger()

router = APIRouter(prefix="/api", tags=["usuarios"])


def server_error(e: Exception) -> HTTPException:
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                         detail={"message": "Server error.", "error": str(e)})


@router.get("/usuarios", response_model=UsuariosResp, dependencies=[Depends(require_admin)])
def list_users(db: Session = Depends(get_db)):
    try:
        rows = UserRepository(db).list_users()
    except SQLAlchemyError as e:
        raise server_error(e)
    return UsuariosResp(usuarios=[UsuarioOut.model_validate(u) for u in rows])


@router.get("/alumnos", response_model=AlumnosResp, dependencies=[Depends(require_admin_or_teacher)])
def list_students(db: Session = Depends(get_db)):
    try:
        rows = UserRepository(db).list_users(rol=Rol.ALUMNO)
    except SQLAlchemyError as e:
        raise server_error(e)
    return AlumnosResp(alumnos=[UsuarioOut.model_validate(u) for u in rows])


@router.post("/usuarios", response_model=CreatedResp, status_code=status.HTTP_201_CREATED,
             dependencies=[Depends(require_admin)])
def create_user(payload: UsuarioIn, db: Session = Depends(get_db)):
    if not payload.nombre or not payload.email or not payload.clave or not payload.rol:
        raise HTTPException(status_code=400,
                            detail="All fields (nombre, email, clave, rol) are required.")
    uc = CreateUser(repo=UserRepository(db), hasher=PasswordHasher())
    try:
        user = uc.execute(payload.nombre, payload.email, payload.clave, payload.rol, payload.curso)
    except InvalidRole as e:
        raise HTTPException(status_code=400, detail=str(e))
    except EmailAlreadyInUse:
        raise HTTPException(status_code=409, detail="Email is already in use.")
    except SQLAlchemyError as e:
        raise server_error(e)
    logger.info("user_created", user_id=user.id, rol=user.rol.value)
    return CreatedResp(message="User created successfully.", id=user.id)


# must be registered before /usuarios/{user_id}
@router.put("/usuarios/me", response_model=PerfilResp)
def update_me(payload: PerfilUpdate, claims: Claims = Depends(get_claims), db: Session = Depends(get_db)):
    if not payload.nombre or not payload.email:
        raise HTTPException(status_code=400, detail="Nombre and email are required.")
    uc = UpdateOwnProfile(repo=UserRepository(db), hasher=PasswordHasher())
    try:
        user = uc.execute(claims.id, payload.nombre, payload.email, payload.clave)
    except EmailAlreadyInUse:
        raise HTTPException(status_code=409, detail="Email is already in use by another account.")
    except UserNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except SQLAlchemyError as e:
        raise server_error(e)
    logger.info("user_updated", user_id=user.id, self_service=True)
    return PerfilResp(message="Profile updated successfully.", usuario=UsuarioOut.model_validate(user))


@router.put("/usuarios/{user_id}", response_model=MessageResp, dependencies=[Depends(require_admin)])
def update_user(user_id: int, payload: UsuarioIn, db: Session = Depends(get_db)):
    if not payload.nombre or not payload.email or not payload.rol:
        raise HTTPException(status_code=400, detail="Nombre, email and rol are required.")
    uc = UpdateUser(repo=UserRepository(db), hasher=PasswordHasher())
    try:
        uc.execute(user_id, payload.nombre, payload.email, payload.rol,
                   curso=payload.curso, password=payload.clave)
    except InvalidRole as e:
        raise HTTPException(status_code=400, detail=str(e))
    except EmailAlreadyInUse:
        raise HTTPException(status_code=409, detail="Email is already in use.")
    except UserNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except SQLAlchemyError as e:
        raise server_error(e)
    logger.info("user_updated", user_id=user_id, self_service=False)
    return MessageResp(message="User updated successfully.")


@router.delete("/usuarios/{user_id}", response_model=MessageResp)
def delete_user(user_id: int, claims: Claims = Depends(require_admin), db: Session = Depends(get_db)):
    try:
        DeleteUser(repo=UserRepository(db)).execute(claims.id, user_id)
    except SelfDeletion as e:
        raise HTTPException(status_code=400, detail=str(e))
    except UserNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except SQLAlchemyError as e:
        raise server_error(e)
    logger.info("user_deleted", user_id=user_id, by=claims.id)
    return MessageResp(message="User deleted successfully.")
