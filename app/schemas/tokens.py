# app/schemas/tokens.py
from pydantic import BaseModel
from app.schemas.user import UserRecord

class Token(BaseModel):
    """Login/registration response: a bearer JWT plus the signed-in user"""
    access_token: str
    token_type: str = "bearer"
    expires_in: int  # seconds
    user: UserRecord
