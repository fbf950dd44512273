from fastapi import Depends, Header, HTTPException, status
from jose import JWTError
from ...domain.entities import Claims, Rol
from ...infrastructure.security import decode_token


def get_claims(authorization: str | None = Header(default=None)) -> Claims:
    if not authorization:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="No token provided.")
    parts = authorization.split(" ")
    if len(parts) < 2 or not parts[1]:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Malformed token.")
    try:
        return decode_token(parts[1])
    except JWTError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid or expired token.")

def require_admin(claims: Claims = Depends(get_claims)) -> Claims:
    if claims.rol is not Rol.ADMIN:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN,
                            detail="Access denied. ADMIN role required.")
    return claims

def require_admin_or_teacher(claims: Claims = Depends(get_claims)) -> Claims:
    if claims.rol not in (Rol.ADMIN, Rol.PROFESOR):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN,
                            detail="Access denied. ADMIN or PROFESOR role required.")
    return claims
