from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Optional
from datetime import datetime
import re

from app.models.user import UserRole

EMAIL_PATTERN = re.compile(r"^[A-Za-z0-9+_.-]+@(.+)$")


class UserRecord(BaseModel):
    """A row of the users table"""
    id: Optional[int] = None
    username: str
    password_hash: str = Field(default="", exclude=True)
    email: str
    role: UserRole = UserRole.EMPLOYEE
    full_name: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {
        "from_attributes": True
    }

    @property
    def display_name(self) -> str:
        return self.full_name or self.username

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    @property
    def is_manager_or_above(self) -> bool:
        return self.role in (UserRole.MANAGER, UserRole.ADMIN)

    def can_assign_to(self, target: Optional["UserRecord"]) -> bool:
        if target is None:
            return False
        return self.role.can_assign_to(target.role)

    def is_valid(self) -> bool:
        return bool(
            self.username and self.username.strip()
            and self.password_hash
            and self.email and EMAIL_PATTERN.match(self.email)
            and self.role is not None
            and self.full_name and self.full_name.strip()
        )


class UserCreate(BaseModel):
    username: str = Field(..., min_length=1, max_length=50)
    password: str = Field(..., min_length=6)
    email: EmailStr
    full_name: str = Field(..., min_length=1, max_length=100)
    role: UserRole = UserRole.EMPLOYEE

    @field_validator('username', 'full_name')
    @classmethod
    def strip_text(cls, v):
        v = v.strip()
        if not v:
            raise ValueError('must not be blank')
        return v


class UserLogin(BaseModel):
    username: str
    password: str


class UserUpdate(BaseModel):
    username: Optional[str] = Field(None, min_length=1, max_length=50)
    email: Optional[EmailStr] = None
    full_name: Optional[str] = Field(None, min_length=1, max_length=100)
    role: Optional[UserRole] = None


class PasswordChange(BaseModel):
    new_password: str = Field(..., min_length=6)
