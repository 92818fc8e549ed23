# app/utils/auth.py
from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer

from app.dao import UserDAO
from app.models.user import UserRole
from app.schemas.user import UserRecord
from app.utils.dependencies import get_user_dao
from app.utils.security import decode_access_token

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login")

def get_current_user(
    token: str = Depends(oauth2_scheme),
    user_dao: UserDAO = Depends(get_user_dao)
) -> UserRecord:
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    payload = decode_access_token(token)
    if not payload:
        raise credentials_exception

    username = payload.get("sub")
    if username is None:
        raise credentials_exception

    user = user_dao.find_by_username(username)
    if user is None:
        raise credentials_exception

    return user

def require_manager(current_user: UserRecord = Depends(get_current_user)) -> UserRecord:
    """Only ADMIN and MANAGER users pass"""
    if not current_user.is_manager_or_above:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Access denied: Insufficient permissions"
        )
    return current_user

def require_admin(current_user: UserRecord = Depends(get_current_user)) -> UserRecord:
    """Only ADMIN users pass"""
    if current_user.role != UserRole.ADMIN:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Access denied: Administrator privileges required"
        )
    return current_user
