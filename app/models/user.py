# app/models/user.py
from sqlalchemy import Column, Integer, String, DateTime, Enum
from sqlalchemy.sql import func
from app.database import Base
import enum


class UserRole(str, enum.Enum):
    EMPLOYEE = "EMPLOYEE"
    MANAGER = "MANAGER"
    ADMIN = "ADMIN"

    @property
    def display_name(self) -> str:
        return _ROLE_DISPLAY_NAMES[self]

    @property
    def level(self) -> int:
        return _ROLE_LEVELS[self]

    def can_assign_to(self, target: "UserRole") -> bool:
        """A role may assign work to roles at or below its own level"""
        return self.level >= target.level


_ROLE_DISPLAY_NAMES = {
    UserRole.ADMIN: "Administrator",
    UserRole.MANAGER: "Manager",
    UserRole.EMPLOYEE: "Employee",
}

_ROLE_LEVELS = {
    UserRole.ADMIN: 3,
    UserRole.MANAGER: 2,
    UserRole.EMPLOYEE: 1,
}


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(50), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    email = Column(String(100), unique=True, index=True, nullable=False)
    role = Column(Enum(UserRole), default=UserRole.EMPLOYEE, nullable=False, index=True)
    full_name = Column(String(100), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
