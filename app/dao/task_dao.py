# app/dao/task_dao.py
from datetime import date
from typing import List, Optional

from sqlalchemy import case, func, select, update
from sqlalchemy.orm import Session

from app.dao.base import BaseDAO
from app.dao.project_dao import ProjectDAO
from app.dao.user_dao import UserDAO
from app.models.task import Task, TaskPriority, TaskStatus
from app.schemas.task import TaskRecord, TaskStatistics, UserTaskStatistics

FINAL_STATUSES = [status for status in TaskStatus if status.is_final]


class TaskDAO(BaseDAO[TaskRecord]):
    table = Task.__table__

    def __init__(
        self,
        db: Session,
        user_dao: Optional[UserDAO] = None,
        project_dao: Optional[ProjectDAO] = None,
    ):
        super().__init__(db)
        self.user_dao = user_dao or UserDAO(db)
        self.project_dao = project_dao or ProjectDAO(db, self.user_dao)

    # ---- ordering helpers ----

    @property
    def _priority_level(self):
        """Priority as its numeric level so URGENT sorts above HIGH"""
        c = self.table.c
        return case(*[(c.priority == p, p.level) for p in TaskPriority], else_=0)

    @property
    def _due_date_asc(self):
        # Undated tasks go last
        c = self.table.c
        return (c.due_date.is_(None), c.due_date.asc())

    def default_order(self):
        return (self.table.c.created_at.desc(), self.table.c.id.desc())

    # ---- contract ----

    def _map_row(self, row) -> TaskRecord:
        # Project and users come from their DAOs, once per distinct id within a query
        return TaskRecord(
            id=row.id,
            title=row.title,
            description=row.description,
            status=row.status,
            priority=row.priority,
            project=self._related(self.project_dao, row.project_id),
            assigned_user=self._related(self.user_dao, row.assigned_user_id),
            assigner=self._related(self.user_dao, row.assigner_id),
            due_date=row.due_date,
            created_at=row.created_at,
            updated_at=row.updated_at,
        )

    def _insert_values(self, task: TaskRecord) -> dict:
        return {
            "title": task.title.strip(),
            "description": task.description,
            "status": task.status,
            "priority": task.priority,
            "project_id": task.project_id,
            "assigned_user_id": task.assigned_user_id,
            "assigner_id": task.assigner_id,
            "due_date": task.due_date,
        }

    def _update_values(self, task: TaskRecord) -> dict:
        values = self._insert_values(task)
        values["updated_at"] = func.now()
        return values

    # ---- finders ----

    def find_by_status(self, status: TaskStatus) -> List[TaskRecord]:
        stmt = (
            select(self.table)
            .where(self.table.c.status == status)
            .order_by(*self.default_order())
        )
        return self._fetch_all(stmt, "finding tasks by status")

    def find_by_assigned_user(self, user_id: int) -> List[TaskRecord]:
        stmt = (
            select(self.table)
            .where(self.table.c.assigned_user_id == user_id)
            .order_by(*self._due_date_asc, self._priority_level.desc(), self.table.c.id)
        )
        return self._fetch_all(stmt, "finding tasks by assigned user")

    def find_by_project(self, project_id: int) -> List[TaskRecord]:
        stmt = (
            select(self.table)
            .where(self.table.c.project_id == project_id)
            .order_by(self._priority_level.desc(), *self._due_date_asc, self.table.c.id)
        )
        return self._fetch_all(stmt, "finding tasks by project")

    def find_by_priority(self, priority: TaskPriority) -> List[TaskRecord]:
        stmt = (
            select(self.table)
            .where(self.table.c.priority == priority)
            .order_by(*self._due_date_asc, self.table.c.id)
        )
        return self._fetch_all(stmt, "finding tasks by priority")

    def find_overdue_tasks(self, today: Optional[date] = None) -> List[TaskRecord]:
        c = self.table.c
        stmt = (
            select(self.table)
            .where(c.due_date < (today or date.today()), c.status.not_in(FINAL_STATUSES))
            .order_by(c.due_date.asc(), c.id)
        )
        return self._fetch_all(stmt, "finding overdue tasks")

    def find_tasks_due_today(self, today: Optional[date] = None) -> List[TaskRecord]:
        c = self.table.c
        stmt = (
            select(self.table)
            .where(c.due_date == (today or date.today()), c.status.not_in(FINAL_STATUSES))
            .order_by(self._priority_level.desc(), c.id)
        )
        return self._fetch_all(stmt, "finding tasks due today")

    def search_by_title(self, term: str) -> List[TaskRecord]:
        stmt = (
            select(self.table)
            .where(self.table.c.title.icontains(term, autoescape=True))
            .order_by(self.table.c.title, self.table.c.id)
        )
        return self._fetch_all(stmt, "searching tasks by title")

    def get_unassigned_tasks(self) -> List[TaskRecord]:
        stmt = (
            select(self.table)
            .where(self.table.c.assigned_user_id.is_(None))
            .order_by(self._priority_level.desc(), *self.default_order())
        )
        return self._fetch_all(stmt, "finding unassigned tasks")

    def find_recently_updated(self, limit: int = 10, assigned_user_id: Optional[int] = None) -> List[TaskRecord]:
        c = self.table.c
        stmt = select(self.table)
        if assigned_user_id is not None:
            stmt = stmt.where(c.assigned_user_id == assigned_user_id)
        stmt = stmt.order_by(c.updated_at.desc(), c.id.desc()).limit(limit)
        return self._fetch_all(stmt, "finding recently updated tasks")

    # ---- direct mutations ----

    def update_status(self, task_id: int, status: TaskStatus) -> bool:
        stmt = (
            update(self.table)
            .where(self.table.c.id == task_id)
            .values(status=status, updated_at=func.now())
        )
        return self._execute_write(stmt, "updating task status")

    def assign_task(self, task_id: int, assigned_user_id: int, assigner_id: int) -> bool:
        stmt = (
            update(self.table)
            .where(self.table.c.id == task_id)
            .values(assigned_user_id=assigned_user_id, assigner_id=assigner_id, updated_at=func.now())
        )
        return self._execute_write(stmt, "assigning task")

    def unassign_task(self, task_id: int) -> bool:
        stmt = (
            update(self.table)
            .where(self.table.c.id == task_id)
            .values(assigned_user_id=None, assigner_id=None, updated_at=func.now())
        )
        return self._execute_write(stmt, "unassigning task")

    # ---- aggregates ----

    def _overdue_flag(self, today: date):
        c = self.table.c
        return case(
            ((c.due_date < today) & c.status.not_in(FINAL_STATUSES), 1),
            else_=0,
        )

    def _status_flag(self, status: TaskStatus):
        return case((self.table.c.status == status, 1), else_=0)

    def get_task_statistics(self, today: Optional[date] = None) -> TaskStatistics:
        today = today or date.today()
        stmt = select(
            func.count().label("total_tasks"),
            func.sum(self._status_flag(TaskStatus.TODO)).label("todo_tasks"),
            func.sum(self._status_flag(TaskStatus.IN_PROGRESS)).label("in_progress_tasks"),
            func.sum(self._status_flag(TaskStatus.COMPLETED)).label("completed_tasks"),
            func.sum(self._overdue_flag(today)).label("overdue_tasks"),
        ).select_from(self.table)

        rows = self._fetch_rows(stmt, "getting task statistics")
        if not rows:
            return TaskStatistics()
        row = rows[0]
        return TaskStatistics(
            total_tasks=row.total_tasks or 0,
            todo_tasks=row.todo_tasks or 0,
            in_progress_tasks=row.in_progress_tasks or 0,
            completed_tasks=row.completed_tasks or 0,
            overdue_tasks=row.overdue_tasks or 0,
        )

    def get_user_task_statistics(self, user_id: int, today: Optional[date] = None) -> UserTaskStatistics:
        today = today or date.today()
        stmt = (
            select(
                func.count().label("assigned_tasks"),
                func.sum(self._status_flag(TaskStatus.COMPLETED)).label("completed_tasks"),
                func.sum(self._overdue_flag(today)).label("overdue_tasks"),
            )
            .select_from(self.table)
            .where(self.table.c.assigned_user_id == user_id)
        )

        rows = self._fetch_rows(stmt, "getting user task statistics")
        if not rows:
            return UserTaskStatistics()
        row = rows[0]
        return UserTaskStatistics(
            assigned_tasks=row.assigned_tasks or 0,
            completed_tasks=row.completed_tasks or 0,
            overdue_tasks=row.overdue_tasks or 0,
        )
