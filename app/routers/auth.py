from fastapi import APIRouter, HTTPException, Depends, status
import logging

from app.config.settings import settings
from app.dao import UserDAO
from app.models.user import UserRole
from app.schemas.user import UserCreate, UserLogin, UserRecord
from app.schemas.tokens import Token
from app.utils.dependencies import get_user_dao
from app.utils.security import hash_password, create_access_token

router = APIRouter()
logger = logging.getLogger(__name__)

def _token_for(user: UserRecord) -> dict:
    token = create_access_token(data={"sub": user.username, "role": user.role.value})
    return {
        "access_token": token,
        "token_type": "bearer",
        "expires_in": settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        "user": user,
    }

@router.post("/register", response_model=Token, status_code=status.HTTP_201_CREATED)
def register(user: UserCreate, user_dao: UserDAO = Depends(get_user_dao)):
    # Elevated accounts are created from user management
    if user.role != UserRole.EMPLOYEE:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only administrators can create MANAGER or ADMIN accounts"
        )
    if user_dao.username_exists(user.username):
        raise HTTPException(status_code=400, detail="Username already exists")
    if user_dao.email_exists(user.email):
        raise HTTPException(status_code=400, detail="Email already exists")

    new_user = UserRecord(
        username=user.username,
        password_hash=hash_password(user.password),
        email=user.email,
        role=user.role,
        full_name=user.full_name,
    )
    if not user_dao.save(new_user):
        raise HTTPException(status_code=500, detail="Registration failed. Please try again.")

    logger.info("Registered user %s (%s)", new_user.username, new_user.role.value)
    saved = user_dao.find_by_id(new_user.id) or new_user
    return _token_for(saved)

@router.post("/login", response_model=Token)
def login(credentials: UserLogin, user_dao: UserDAO = Depends(get_user_dao)):
    if not credentials.username.strip():
        raise HTTPException(status_code=400, detail="Please enter username")
    if not credentials.password:
        raise HTTPException(status_code=400, detail="Please enter password")

    user = user_dao.authenticate(credentials.username.strip(), credentials.password)
    if user is None:
        raise HTTPException(status_code=400, detail="Invalid username or password")

    logger.info("User %s logged in", user.username)
    return _token_for(user)
