# app/dao/project_dao.py
from typing import List, Optional

from sqlalchemy import case, func, select, update
from sqlalchemy.orm import Session

from app.dao.base import BaseDAO
from app.dao.user_dao import UserDAO
from app.models.project import Project, ProjectStatus
from app.models.task import Task, TaskStatus
from app.schemas.project import ProjectRecord, ProjectStatistics, ProjectWithTaskCounts

tasks_table = Task.__table__


def _count_status(status: TaskStatus):
    return func.coalesce(
        func.sum(case((tasks_table.c.status == status, 1), else_=0)), 0
    )


class ProjectDAO(BaseDAO[ProjectRecord]):
    table = Project.__table__

    def __init__(self, db: Session, user_dao: Optional[UserDAO] = None):
        super().__init__(db)
        self.user_dao = user_dao or UserDAO(db)

    def default_order(self):
        return (self.table.c.created_at.desc(), self.table.c.id.desc())

    def _map_row(self, row) -> ProjectRecord:
        return ProjectRecord(
            id=row.id,
            name=row.name,
            description=row.description,
            status=row.status,
            creator=self._related(self.user_dao, row.creator_id),
            created_at=row.created_at,
            updated_at=row.updated_at,
        )

    def _insert_values(self, project: ProjectRecord) -> dict:
        return {
            "name": project.name.strip(),
            "description": project.description,
            "status": project.status,
            "creator_id": project.creator.id,
        }

    def _update_values(self, project: ProjectRecord) -> dict:
        values = self._insert_values(project)
        values["updated_at"] = func.now()
        return values

    # ---- finders ----

    def find_by_status(self, status: ProjectStatus) -> List[ProjectRecord]:
        stmt = (
            select(self.table)
            .where(self.table.c.status == status)
            .order_by(*self.default_order())
        )
        return self._fetch_all(stmt, "finding projects by status")

    def find_by_creator(self, user_id: int) -> List[ProjectRecord]:
        stmt = (
            select(self.table)
            .where(self.table.c.creator_id == user_id)
            .order_by(*self.default_order())
        )
        return self._fetch_all(stmt, "finding projects by creator")

    def find_by_name(self, name: str) -> Optional[ProjectRecord]:
        stmt = select(self.table).where(self.table.c.name == name)
        return self._fetch_one(stmt, "finding project by name")

    def search_by_name(self, term: str) -> List[ProjectRecord]:
        stmt = (
            select(self.table)
            .where(self.table.c.name.icontains(term, autoescape=True))
            .order_by(self.table.c.name)
        )
        return self._fetch_all(stmt, "searching projects by name")

    def get_active_projects(self) -> List[ProjectRecord]:
        """Projects that still accept new tasks"""
        accepting = [status for status in ProjectStatus if status.can_add_tasks]
        stmt = (
            select(self.table)
            .where(self.table.c.status.in_(accepting))
            .order_by(self.table.c.name)
        )
        return self._fetch_all(stmt, "finding active projects")

    # ---- checks and aggregates ----

    def project_name_exists(self, name: str, exclude_id: Optional[int] = None) -> bool:
        stmt = select(func.count()).select_from(self.table).where(self.table.c.name == name)
        if exclude_id is not None:
            stmt = stmt.where(self.table.c.id != exclude_id)
        return self._scalar(stmt, "checking project name existence", default=0) > 0

    def get_project_statistics(self, project_id: int) -> ProjectStatistics:
        stmt = select(
            func.count().label("total_tasks"),
            _count_status(TaskStatus.COMPLETED).label("completed_tasks"),
            _count_status(TaskStatus.IN_PROGRESS).label("in_progress_tasks"),
            _count_status(TaskStatus.TODO).label("todo_tasks"),
        ).select_from(tasks_table).where(tasks_table.c.project_id == project_id)

        rows = self._fetch_rows(stmt, "getting project statistics")
        if not rows:
            return ProjectStatistics()
        row = rows[0]
        return ProjectStatistics(
            total_tasks=row.total_tasks or 0,
            completed_tasks=row.completed_tasks or 0,
            in_progress_tasks=row.in_progress_tasks or 0,
            todo_tasks=row.todo_tasks or 0,
        )

    def get_projects_with_task_counts(self) -> List[ProjectWithTaskCounts]:
        stmt = (
            select(
                self.table,
                func.count(tasks_table.c.id).label("task_count"),
                _count_status(TaskStatus.COMPLETED).label("completed_count"),
            )
            .select_from(self.table.outerjoin(tasks_table, tasks_table.c.project_id == self.table.c.id))
            .group_by(*self.table.c)
            .order_by(*self.default_order())
        )
        rows = self._fetch_rows(stmt, "getting projects with task counts")
        self._lookups = {}
        try:
            return [
                ProjectWithTaskCounts(
                    project=self._map_row(row),
                    task_count=row.task_count or 0,
                    completed_count=row.completed_count or 0,
                )
                for row in rows
            ]
        finally:
            self._lookups = None

    # ---- direct mutations ----

    def update_status(self, project_id: int, status: ProjectStatus) -> bool:
        stmt = (
            update(self.table)
            .where(self.table.c.id == project_id)
            .values(status=status, updated_at=func.now())
        )
        return self._execute_write(stmt, "updating project status")
