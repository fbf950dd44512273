import structlog
from fastapi import APIRouter, Depends, HTTPException, Request, status
from slowapi import Limiter
from slowapi.util import get_remote_address
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ....infrastructure.db import get_db
from ....infrastructure.metrics import login_attempts_total
from ....infrastructure.repositories import UserRepository
from ....infrastructure.security import PasswordHasher, create_access_token
from ....application.use_cases.authenticate_user import AuthenticateUser
from ....domain.errors import InvalidCredentials
from ..schemas import LoginReq, LoginResp, UsuarioOut
from ....config import settings

logger = structlog.get_logger()

router = APIRouter(prefix="/api", tags=["auth"])
limiter = Limiter(key_func=get_remote_address)

@router.post("/login", response_model=LoginResp)
@limiter.limit(lambda: settings.LOGIN_RATE_LIMIT)
def login(request: Request, payload: LoginReq, db: Session = Depends(get_db)):
    if not payload.email or not payload.clave:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST,
                            detail="Email and password are required.")
    uc = AuthenticateUser(repo=UserRepository(db), hasher=PasswordHasher())
    try:
        user = uc.execute(payload.email, payload.clave)
    except InvalidCredentials as e:
        login_attempts_total.labels(result="rejected").inc()
        logger.warning("login_failed", email=payload.email)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(e))
    except SQLAlchemyError as e:
        raise HTTPException(status_code=500, detail={"message": "Server error.", "error": str(e)})

    login_attempts_total.labels(result="accepted").inc()
    logger.info("login_succeeded", user_id=user.id, rol=user.rol.value)
    token = create_access_token(user_id=user.id, rol=user.rol)
    return LoginResp(message="Login successful", token=token, usuario=UsuarioOut.model_validate(user))
