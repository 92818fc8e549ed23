from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

from app.models.project import ProjectStatus
from .user import UserRecord


class ProjectRecord(BaseModel):
    """A row of the projects table with its creator resolved"""
    id: Optional[int] = None
    name: str
    description: Optional[str] = None
    status: ProjectStatus = ProjectStatus.ACTIVE
    creator: Optional[UserRecord] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {
        "from_attributes": True
    }

    @property
    def display_name(self) -> str:
        return self.name

    @property
    def can_add_tasks(self) -> bool:
        return self.status.can_add_tasks

    @property
    def is_updatable(self) -> bool:
        return self.status != ProjectStatus.COMPLETED

    def is_valid(self) -> bool:
        return bool(
            self.name and self.name.strip()
            and self.status is not None
            and self.creator is not None and self.creator.id is not None
        )


class ProjectCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = None
    status: ProjectStatus = ProjectStatus.ACTIVE
    creator_id: Optional[int] = None


class ProjectUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = None
    status: Optional[ProjectStatus] = None
    creator_id: Optional[int] = None


class ProjectStatusUpdate(BaseModel):
    status: ProjectStatus


class ProjectStatistics(BaseModel):
    total_tasks: int = 0
    completed_tasks: int = 0
    in_progress_tasks: int = 0
    todo_tasks: int = 0

    @property
    def completion_percentage(self) -> float:
        if not self.total_tasks:
            return 0.0
        return self.completed_tasks / self.total_tasks * 100.0


class ProjectWithTaskCounts(BaseModel):
    project: ProjectRecord
    task_count: int = 0
    completed_count: int = 0
