# app/dao/user_dao.py
import logging
from typing import Dict, List, Optional

from sqlalchemy import func, or_, select, update

from app.config.settings import settings
from app.dao.base import BaseDAO
from app.models.user import User, UserRole
from app.schemas.user import UserRecord
from app.utils.security import hash_password, verify_password

logger = logging.getLogger(__name__)


class UserDAO(BaseDAO[UserRecord]):
    table = User.__table__

    def default_order(self):
        return (self.table.c.full_name, self.table.c.id)

    def _map_row(self, row) -> UserRecord:
        return UserRecord(
            id=row.id,
            username=row.username,
            password_hash=row.password_hash,
            email=row.email,
            role=row.role,
            full_name=row.full_name,
            created_at=row.created_at,
            updated_at=row.updated_at,
        )

    def _insert_values(self, user: UserRecord) -> dict:
        return {
            "username": user.username.strip(),
            "password_hash": user.password_hash,
            "email": user.email.strip(),
            "role": user.role,
            "full_name": user.full_name.strip(),
        }

    def _update_values(self, user: UserRecord) -> dict:
        values = self._insert_values(user)
        values["updated_at"] = func.now()
        return values

    # ---- finders ----

    def find_by_username(self, username: str) -> Optional[UserRecord]:
        stmt = select(self.table).where(self.table.c.username == username)
        return self._fetch_one(stmt, "finding user by username")

    def find_by_email(self, email: str) -> Optional[UserRecord]:
        stmt = select(self.table).where(self.table.c.email == email)
        return self._fetch_one(stmt, "finding user by email")

    def find_by_role(self, role: UserRole) -> List[UserRecord]:
        stmt = (
            select(self.table)
            .where(self.table.c.role == role)
            .order_by(*self.default_order())
        )
        return self._fetch_all(stmt, "finding users by role")

    def search(self, term: str) -> List[UserRecord]:
        """Partial, case-insensitive match on username, full name or email"""
        c = self.table.c
        stmt = (
            select(self.table)
            .where(or_(
                c.username.icontains(term, autoescape=True),
                c.full_name.icontains(term, autoescape=True),
                c.email.icontains(term, autoescape=True),
            ))
            .order_by(*self.default_order())
        )
        return self._fetch_all(stmt, "searching users")

    def get_assignable_users(self) -> List[UserRecord]:
        """Users that can receive task assignments"""
        stmt = (
            select(self.table)
            .where(self.table.c.role.in_([UserRole.EMPLOYEE, UserRole.MANAGER]))
            .order_by(*self.default_order())
        )
        return self._fetch_all(stmt, "finding assignable users")

    def get_task_assigners(self) -> List[UserRecord]:
        """Users that can hand out tasks"""
        stmt = (
            select(self.table)
            .where(self.table.c.role.in_([UserRole.MANAGER, UserRole.ADMIN]))
            .order_by(*self.default_order())
        )
        return self._fetch_all(stmt, "finding task assigners")

    # ---- existence checks and aggregates ----

    def username_exists(self, username: str) -> bool:
        stmt = select(func.count()).select_from(self.table).where(self.table.c.username == username)
        return self._scalar(stmt, "checking username existence", default=0) > 0

    def email_exists(self, email: str) -> bool:
        stmt = select(func.count()).select_from(self.table).where(self.table.c.email == email)
        return self._scalar(stmt, "checking email existence", default=0) > 0

    def count_by_role(self) -> Dict[UserRole, int]:
        stmt = select(self.table.c.role, func.count()).group_by(self.table.c.role)
        counts = {role: 0 for role in UserRole}
        for role, total in self._fetch_rows(stmt, "counting users by role"):
            counts[UserRole(role)] = total
        return counts

    # ---- authentication and direct mutations ----

    def authenticate(self, username: str, password: str) -> Optional[UserRecord]:
        user = self.find_by_username(username)
        if user is not None and verify_password(password, user.password_hash):
            return user
        return None

    def update_password(self, user_id: int, new_password: str) -> bool:
        if not new_password or len(new_password) < settings.MIN_PASSWORD_LENGTH:
            return False
        stmt = (
            update(self.table)
            .where(self.table.c.id == user_id)
            .values(password_hash=hash_password(new_password), updated_at=func.now())
        )
        return self._execute_write(stmt, "updating user password")

    def create_default_admin(self) -> Optional[UserRecord]:
        """Create the administrator account when no users exist yet"""
        if self.count() > 0:
            return None

        admin_settings = settings.DEFAULT_ADMIN
        admin = UserRecord(
            username=admin_settings['username'],
            password_hash=hash_password(admin_settings['password']),
            email=admin_settings['email'],
            role=UserRole.ADMIN,
            full_name=admin_settings['full_name'],
        )
        if not self.save(admin):
            logger.error("Could not create default admin user")
            return None

        logger.info("Default admin user created (username: %s)", admin.username)
        return admin
