# app/routers/user.py
from fastapi import APIRouter, Depends, HTTPException, Query, status
from typing import Dict, List, Optional
import logging

from app.dao import ProjectDAO, TaskDAO, UserDAO
from app.models.user import UserRole
from app.schemas.task import UserTaskStatistics
from app.schemas.user import PasswordChange, UserCreate, UserRecord, UserUpdate
from app.utils.auth import get_current_user, require_admin, require_manager
from app.utils.dependencies import get_project_dao, get_task_dao, get_user_dao
from app.utils.security import hash_password

router = APIRouter()
logger = logging.getLogger(__name__)

def _get_user_or_404(user_dao: UserDAO, user_id: int) -> UserRecord:
    user = user_dao.find_by_id(user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user

@router.get("/me", response_model=UserRecord)
def get_current_user_info(current_user: UserRecord = Depends(get_current_user)):
    """Get current user information"""
    return current_user

@router.get("/assignable", response_model=List[UserRecord])
def get_assignable_users(
    user_dao: UserDAO = Depends(get_user_dao),
    current_user: UserRecord = Depends(require_manager)
):
    """Users the current user may hand tasks to"""
    return [user for user in user_dao.get_assignable_users() if current_user.can_assign_to(user)]

@router.get("/assigners", response_model=List[UserRecord])
def get_task_assigners(
    user_dao: UserDAO = Depends(get_user_dao),
    current_user: UserRecord = Depends(require_manager)
):
    return user_dao.get_task_assigners()

@router.get("/stats", response_model=Dict[str, int])
def get_user_stats(
    user_dao: UserDAO = Depends(get_user_dao),
    current_user: UserRecord = Depends(require_admin)
):
    """Number of users per role plus the overall total"""
    counts = {role.value: total for role, total in user_dao.count_by_role().items()}
    counts["total"] = sum(counts.values())
    return counts

@router.get("/search", response_model=List[UserRecord])
def search_users(
    q: str = Query(..., min_length=1),
    user_dao: UserDAO = Depends(get_user_dao),
    current_user: UserRecord = Depends(require_admin)
):
    return user_dao.search(q)

@router.get("/", response_model=List[UserRecord])
def get_all_users(
    role: Optional[UserRole] = None,
    user_dao: UserDAO = Depends(get_user_dao),
    current_user: UserRecord = Depends(require_admin)
):
    """Get all users, optionally filtered by role"""
    if role is not None:
        return user_dao.find_by_role(role)
    return user_dao.find_all()

@router.get("/{user_id}", response_model=UserRecord)
def get_user(
    user_id: int,
    user_dao: UserDAO = Depends(get_user_dao),
    current_user: UserRecord = Depends(require_admin)
):
    return _get_user_or_404(user_dao, user_id)

@router.get("/{user_id}/task-stats", response_model=UserTaskStatistics)
def get_user_task_stats(
    user_id: int,
    user_dao: UserDAO = Depends(get_user_dao),
    task_dao: TaskDAO = Depends(get_task_dao),
    current_user: UserRecord = Depends(get_current_user)
):
    """Assigned/completed/overdue counts; employees may only see their own"""
    if user_id != current_user.id and not current_user.is_manager_or_above:
        raise HTTPException(status_code=403, detail="Access denied: Insufficient permissions")
    _get_user_or_404(user_dao, user_id)
    return task_dao.get_user_task_statistics(user_id)

@router.post("/", response_model=UserRecord, status_code=status.HTTP_201_CREATED)
def create_user(
    user: UserCreate,
    user_dao: UserDAO = Depends(get_user_dao),
    current_user: UserRecord = Depends(require_admin)
):
    """Create a user with any role - ADMIN only"""
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
        raise HTTPException(status_code=500, detail="Failed to create user")

    logger.info("User %s created by %s", new_user.username, current_user.username)
    return user_dao.find_by_id(new_user.id) or new_user

@router.put("/{user_id}", response_model=UserRecord)
def update_user(
    user_id: int,
    changes: UserUpdate,
    user_dao: UserDAO = Depends(get_user_dao),
    current_user: UserRecord = Depends(require_admin)
):
    user = _get_user_or_404(user_dao, user_id)

    if changes.username and changes.username != user.username:
        existing = user_dao.find_by_username(changes.username)
        if existing and existing.id != user_id:
            raise HTTPException(status_code=400, detail="Username already exists")
        user.username = changes.username
    if changes.email and changes.email != user.email:
        existing = user_dao.find_by_email(changes.email)
        if existing and existing.id != user_id:
            raise HTTPException(status_code=400, detail="Email already exists")
        user.email = changes.email
    if changes.full_name:
        user.full_name = changes.full_name
    if changes.role is not None:
        if user_id == current_user.id and changes.role != UserRole.ADMIN:
            raise HTTPException(status_code=400, detail="You cannot remove your own administrator role")
        user.role = changes.role

    if not user_dao.save(user):
        raise HTTPException(status_code=500, detail="Failed to update user")
    return user_dao.find_by_id(user_id) or user

@router.post("/{user_id}/password", status_code=status.HTTP_204_NO_CONTENT)
def reset_password(
    user_id: int,
    body: PasswordChange,
    user_dao: UserDAO = Depends(get_user_dao),
    current_user: UserRecord = Depends(require_admin)
):
    _get_user_or_404(user_dao, user_id)
    if not user_dao.update_password(user_id, body.new_password):
        raise HTTPException(status_code=500, detail="Failed to reset password")
    logger.info("Password of user %s reset by %s", user_id, current_user.username)

@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(
    user_id: int,
    user_dao: UserDAO = Depends(get_user_dao),
    project_dao: ProjectDAO = Depends(get_project_dao),
    current_user: UserRecord = Depends(require_admin)
):
    if user_id == current_user.id:
        raise HTTPException(status_code=400, detail="You cannot delete your own account")
    _get_user_or_404(user_dao, user_id)
    # Projects keep their creator; tasks assigned to the user become unassigned
    if project_dao.find_by_creator(user_id):
        raise HTTPException(status_code=400, detail="User still owns projects and cannot be deleted")
    if not user_dao.delete_by_id(user_id):
        raise HTTPException(status_code=500, detail="Failed to delete user")
    logger.info("User %s deleted by %s", user_id, current_user.username)
