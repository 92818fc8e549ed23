# app/routers/dashboard.py
from fastapi import APIRouter, Depends
from typing import List
from datetime import date

from app.dao import ProjectDAO, TaskDAO, UserDAO
from app.models.project import ProjectStatus
from app.models.task import TaskStatus
from app.schemas.dashboard import (
    Activity,
    DashboardOverview,
    GlobalOverview,
    Navigation,
    NavigationItem,
    PersonalOverview,
)
from app.schemas.task import TaskRecord
from app.schemas.user import UserRecord
from app.utils.auth import get_current_user
from app.utils.dependencies import get_project_dao, get_task_dao, get_user_dao

router = APIRouter()

RECENT_ACTIVITY_LIMIT = 10

NAVIGATION_ITEMS = [
    NavigationItem(view="dashboard", label="Dashboard"),
    NavigationItem(view="projects", label="Projects"),
    NavigationItem(view="tasks", label="Tasks"),
    NavigationItem(view="users", label="Users"),
]

def _activity_message(task: TaskRecord) -> str:
    assignee = task.assigned_user.full_name if task.assigned_user else "Unassigned"
    return f"Status: {task.status.display_name} | Assigned to: {assignee}"

@router.get("/navigation", response_model=Navigation)
def get_navigation(current_user: UserRecord = Depends(get_current_user)):
    """Views the sidebar offers to the current user"""
    items = [
        item for item in NAVIGATION_ITEMS
        if item.view != "users" or current_user.is_manager_or_above
    ]
    return Navigation(
        username=current_user.username,
        full_name=current_user.full_name,
        role=current_user.role,
        role_display_name=current_user.role.display_name,
        items=items,
    )

@router.get("/overview", response_model=DashboardOverview)
def get_overview(
    user_dao: UserDAO = Depends(get_user_dao),
    project_dao: ProjectDAO = Depends(get_project_dao),
    task_dao: TaskDAO = Depends(get_task_dao),
    current_user: UserRecord = Depends(get_current_user)
):
    """
    Dashboard statistics.
    ADMIN and MANAGER get organisation-wide numbers, EMPLOYEE their own.
    """
    today = date.today()

    if current_user.is_manager_or_above:
        task_stats = task_dao.get_task_statistics(today)
        return DashboardOverview(
            scope="global",
            user_role=current_user.role,
            global_stats=GlobalOverview(
                total_projects=project_dao.count(),
                active_projects=len(project_dao.find_by_status(ProjectStatus.ACTIVE)),
                total_tasks=task_stats.total_tasks,
                pending_tasks=task_stats.todo_tasks,
                overdue_tasks=task_stats.overdue_tasks,
                total_users=user_dao.count(),
            ),
        )

    my_tasks = task_dao.find_by_assigned_user(current_user.id)
    return DashboardOverview(
        scope="personal",
        user_role=current_user.role,
        personal_stats=PersonalOverview(
            my_tasks=len(my_tasks),
            completed=sum(1 for t in my_tasks if t.status == TaskStatus.COMPLETED),
            in_progress=sum(1 for t in my_tasks if t.status == TaskStatus.IN_PROGRESS),
            overdue=sum(1 for t in my_tasks if t.is_overdue(today)),
            due_today=sum(1 for t in my_tasks if t.due_date == today and not t.status.is_final),
        ),
    )

@router.get("/activities", response_model=List[Activity])
def get_recent_activities(
    task_dao: TaskDAO = Depends(get_task_dao),
    current_user: UserRecord = Depends(get_current_user)
):
    """Most recently updated tasks in the user's scope"""
    assigned_user_id = None if current_user.is_manager_or_above else current_user.id
    tasks = task_dao.find_recently_updated(RECENT_ACTIVITY_LIMIT, assigned_user_id=assigned_user_id)
    return [Activity(task=task, message=_activity_message(task)) for task in tasks]
