# app/schemas/dashboard.py
from pydantic import BaseModel
from typing import List, Optional

from app.models.user import UserRole
from .task import TaskRecord


class NavigationItem(BaseModel):
    view: str
    label: str


class Navigation(BaseModel):
    username: str
    full_name: str
    role: UserRole
    role_display_name: str
    default_view: str = "dashboard"
    items: List[NavigationItem]


class GlobalOverview(BaseModel):
    total_projects: int
    active_projects: int
    total_tasks: int
    pending_tasks: int
    overdue_tasks: int
    total_users: int


class PersonalOverview(BaseModel):
    my_tasks: int
    completed: int
    in_progress: int
    overdue: int
    due_today: int


class DashboardOverview(BaseModel):
    scope: str  # "global" or "personal"
    user_role: UserRole
    global_stats: Optional[GlobalOverview] = None
    personal_stats: Optional[PersonalOverview] = None


class Activity(BaseModel):
    task: TaskRecord
    message: str
