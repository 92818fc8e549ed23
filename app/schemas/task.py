# app/schemas/task.py
from pydantic import BaseModel, Field
from datetime import date, datetime
from typing import Optional

from app.models.task import TaskStatus, TaskPriority
from .project import ProjectRecord
from .user import UserRecord


class TaskRecord(BaseModel):
    """A row of the tasks table with project and users resolved"""
    id: Optional[int] = None
    title: str
    description: Optional[str] = None
    status: TaskStatus = TaskStatus.TODO
    priority: TaskPriority = TaskPriority.MEDIUM
    project: Optional[ProjectRecord] = None
    assigned_user: Optional[UserRecord] = None
    assigner: Optional[UserRecord] = None
    due_date: Optional[date] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {
        "from_attributes": True
    }

    @property
    def display_name(self) -> str:
        return self.title

    @property
    def project_id(self) -> Optional[int]:
        return self.project.id if self.project else None

    @property
    def assigned_user_id(self) -> Optional[int]:
        return self.assigned_user.id if self.assigned_user else None

    @property
    def assigner_id(self) -> Optional[int]:
        return self.assigner.id if self.assigner else None

    @property
    def is_assigned(self) -> bool:
        return self.assigned_user is not None

    @property
    def is_updatable(self) -> bool:
        return not self.status.is_final

    def is_overdue(self, today: Optional[date] = None) -> bool:
        today = today or date.today()
        return (
            self.due_date is not None
            and self.due_date < today
            and not self.status.is_final
        )

    def days_until_due(self, today: Optional[date] = None) -> Optional[int]:
        if self.due_date is None:
            return None
        return (self.due_date - (today or date.today())).days

    def is_valid(self) -> bool:
        return bool(
            self.title and self.title.strip()
            and self.status is not None
            and self.priority is not None
        )


class TaskCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    status: TaskStatus = TaskStatus.TODO
    priority: TaskPriority = TaskPriority.MEDIUM
    project_id: Optional[int] = None
    assigned_user_id: Optional[int] = None
    due_date: Optional[date] = None


class TaskUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    status: Optional[TaskStatus] = None
    priority: Optional[TaskPriority] = None
    project_id: Optional[int] = None
    due_date: Optional[date] = None


class TaskStatusUpdate(BaseModel):
    status: TaskStatus


class TaskAssign(BaseModel):
    assigned_user_id: int


class TaskStatistics(BaseModel):
    total_tasks: int = 0
    todo_tasks: int = 0
    in_progress_tasks: int = 0
    completed_tasks: int = 0
    overdue_tasks: int = 0


class UserTaskStatistics(BaseModel):
    assigned_tasks: int = 0
    completed_tasks: int = 0
    overdue_tasks: int = 0
