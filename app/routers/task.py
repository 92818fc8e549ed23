# app/routers/task.py
from fastapi import APIRouter, Depends, HTTPException, Query, status
from typing import List, Optional
from datetime import date
import logging

from app.dao import ProjectDAO, TaskDAO, UserDAO
from app.models.task import TaskPriority, TaskStatus
from app.schemas.project import ProjectRecord
from app.schemas.task import TaskAssign, TaskCreate, TaskRecord, TaskStatusUpdate, TaskUpdate
from app.schemas.user import UserRecord
from app.utils.auth import get_current_user, require_manager
from app.utils.dependencies import get_project_dao, get_task_dao, get_user_dao

router = APIRouter()
logger = logging.getLogger(__name__)

def _get_task_or_404(task_dao: TaskDAO, task_id: int) -> TaskRecord:
    task = task_dao.find_by_id(task_id)
    if not task:
        raise HTTPException(status_code=404, detail="Task not found")
    return task

def _own_tasks(tasks: List[TaskRecord], user: UserRecord) -> List[TaskRecord]:
    """Managers see everything, employees only what is assigned to them"""
    if user.is_manager_or_above:
        return tasks
    return [task for task in tasks if task.assigned_user_id == user.id]

def _project_accepting_tasks(project_dao: ProjectDAO, project_id: int) -> ProjectRecord:
    project = project_dao.find_by_id(project_id)
    if not project:
        raise HTTPException(status_code=400, detail="Project not found")
    if not project.can_add_tasks:
        raise HTTPException(
            status_code=400,
            detail=f"Cannot add tasks to a {project.status.display_name.lower()} project"
        )
    return project

def _assignee_for(user_dao: UserDAO, user_id: int, current_user: UserRecord) -> UserRecord:
    assignee = user_dao.find_by_id(user_id)
    if not assignee:
        raise HTTPException(status_code=400, detail="Assigned user not found")
    if not current_user.can_assign_to(assignee):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"A {current_user.role.display_name} cannot assign tasks to a {assignee.role.display_name}"
        )
    return assignee

@router.get("/", response_model=List[TaskRecord])
def get_tasks(
    status: Optional[TaskStatus] = None,
    priority: Optional[TaskPriority] = None,
    project_id: Optional[int] = None,
    task_dao: TaskDAO = Depends(get_task_dao),
    current_user: UserRecord = Depends(get_current_user)
):
    """
    List tasks.
    ADMIN and MANAGER see every task, EMPLOYEE only their own.
    Optional filters: status, priority, project_id.
    """
    if current_user.is_manager_or_above:
        if status is not None:
            tasks = task_dao.find_by_status(status)
        elif priority is not None:
            tasks = task_dao.find_by_priority(priority)
        elif project_id is not None:
            tasks = task_dao.find_by_project(project_id)
        else:
            tasks = task_dao.find_all()
    else:
        tasks = task_dao.find_by_assigned_user(current_user.id)

    if status is not None:
        tasks = [t for t in tasks if t.status == status]
    if priority is not None:
        tasks = [t for t in tasks if t.priority == priority]
    if project_id is not None:
        tasks = [t for t in tasks if t.project_id == project_id]
    return tasks

@router.get("/overdue", response_model=List[TaskRecord])
def get_overdue_tasks(
    task_dao: TaskDAO = Depends(get_task_dao),
    current_user: UserRecord = Depends(get_current_user)
):
    return _own_tasks(task_dao.find_overdue_tasks(date.today()), current_user)

@router.get("/due-today", response_model=List[TaskRecord])
def get_tasks_due_today(
    task_dao: TaskDAO = Depends(get_task_dao),
    current_user: UserRecord = Depends(get_current_user)
):
    return _own_tasks(task_dao.find_tasks_due_today(date.today()), current_user)

@router.get("/unassigned", response_model=List[TaskRecord])
def get_unassigned_tasks(
    task_dao: TaskDAO = Depends(get_task_dao),
    current_user: UserRecord = Depends(require_manager)
):
    return task_dao.get_unassigned_tasks()

@router.get("/search", response_model=List[TaskRecord])
def search_tasks(
    q: str = Query(..., min_length=1),
    task_dao: TaskDAO = Depends(get_task_dao),
    current_user: UserRecord = Depends(get_current_user)
):
    """Search task titles"""
    return _own_tasks(task_dao.search_by_title(q), current_user)

@router.get("/{task_id}", response_model=TaskRecord)
def get_task(
    task_id: int,
    task_dao: TaskDAO = Depends(get_task_dao),
    current_user: UserRecord = Depends(get_current_user)
):
    task = _get_task_or_404(task_dao, task_id)
    if not current_user.is_manager_or_above and task.assigned_user_id != current_user.id:
        raise HTTPException(status_code=403, detail="Access denied: Insufficient permissions")
    return task

@router.post("/", response_model=TaskRecord, status_code=status.HTTP_201_CREATED)
def create_task(
    task: TaskCreate,
    task_dao: TaskDAO = Depends(get_task_dao),
    project_dao: ProjectDAO = Depends(get_project_dao),
    user_dao: UserDAO = Depends(get_user_dao),
    current_user: UserRecord = Depends(require_manager)
):
    """Create a task - ADMIN and MANAGER only. The creator becomes the assigner."""
    title = task.title.strip()
    if not title:
        raise HTTPException(status_code=400, detail="Task title is required")

    project = None
    if task.project_id is not None:
        project = _project_accepting_tasks(project_dao, task.project_id)

    assignee = None
    if task.assigned_user_id is not None:
        if task.status.is_final:
            raise HTTPException(
                status_code=400,
                detail=f"Cannot assign a {task.status.display_name.lower()} task"
            )
        assignee = _assignee_for(user_dao, task.assigned_user_id, current_user)

    new_task = TaskRecord(
        title=title,
        description=task.description,
        status=task.status,
        priority=task.priority,
        project=project,
        assigned_user=assignee,
        assigner=current_user if assignee else None,
        due_date=task.due_date,
    )
    if not task_dao.save(new_task):
        raise HTTPException(status_code=500, detail="Failed to create task")

    logger.info("Task '%s' created by %s", new_task.title, current_user.username)
    return task_dao.find_by_id(new_task.id) or new_task

@router.put("/{task_id}", response_model=TaskRecord)
def update_task(
    task_id: int,
    changes: TaskUpdate,
    task_dao: TaskDAO = Depends(get_task_dao),
    project_dao: ProjectDAO = Depends(get_project_dao),
    current_user: UserRecord = Depends(require_manager)
):
    task = _get_task_or_404(task_dao, task_id)

    if changes.title is not None:
        title = changes.title.strip()
        if not title:
            raise HTTPException(status_code=400, detail="Task title is required")
        task.title = title
    if changes.description is not None:
        task.description = changes.description
    if changes.status is not None:
        task.status = changes.status
    if changes.priority is not None:
        task.priority = changes.priority
    if "project_id" in changes.model_fields_set and changes.project_id != task.project_id:
        if changes.project_id is None:
            task.project = None
        else:
            task.project = _project_accepting_tasks(project_dao, changes.project_id)
    if "due_date" in changes.model_fields_set:
        task.due_date = changes.due_date

    if not task_dao.save(task):
        raise HTTPException(status_code=500, detail="Failed to update task")
    return task_dao.find_by_id(task_id) or task

@router.patch("/{task_id}/status", response_model=TaskRecord)
def update_task_status(
    task_id: int,
    body: TaskStatusUpdate,
    task_dao: TaskDAO = Depends(get_task_dao),
    current_user: UserRecord = Depends(get_current_user)
):
    """Change the status - the assignee, ADMIN or MANAGER"""
    task = _get_task_or_404(task_dao, task_id)
    if not current_user.is_manager_or_above and task.assigned_user_id != current_user.id:
        raise HTTPException(status_code=403, detail="You can only update tasks assigned to you")

    if not task_dao.update_status(task_id, body.status):
        raise HTTPException(status_code=500, detail="Failed to update task status")
    logger.info("Task %s moved to %s by %s", task_id, body.status.value, current_user.username)
    return task_dao.find_by_id(task_id)

@router.post("/{task_id}/assign", response_model=TaskRecord)
def assign_task(
    task_id: int,
    body: TaskAssign,
    task_dao: TaskDAO = Depends(get_task_dao),
    user_dao: UserDAO = Depends(get_user_dao),
    current_user: UserRecord = Depends(require_manager)
):
    task = _get_task_or_404(task_dao, task_id)
    if task.status.is_final:
        raise HTTPException(
            status_code=400,
            detail=f"Cannot reassign a {task.status.display_name.lower()} task"
        )
    assignee = _assignee_for(user_dao, body.assigned_user_id, current_user)

    if not task_dao.assign_task(task_id, assignee.id, current_user.id):
        raise HTTPException(status_code=500, detail="Failed to assign task")
    logger.info("Task %s assigned to %s by %s", task_id, assignee.username, current_user.username)
    return task_dao.find_by_id(task_id)

@router.post("/{task_id}/unassign", response_model=TaskRecord)
def unassign_task(
    task_id: int,
    task_dao: TaskDAO = Depends(get_task_dao),
    current_user: UserRecord = Depends(get_current_user)
):
    """Remove the assignee - the assignee, ADMIN or MANAGER"""
    task = _get_task_or_404(task_dao, task_id)
    if not current_user.is_manager_or_above and task.assigned_user_id != current_user.id:
        raise HTTPException(status_code=403, detail="You can only unassign tasks assigned to you")
    if not task.is_assigned:
        raise HTTPException(status_code=400, detail="Task is not assigned")
    if task.status.is_final:
        raise HTTPException(
            status_code=400,
            detail=f"Cannot reassign a {task.status.display_name.lower()} task"
        )
    if not task_dao.unassign_task(task_id):
        raise HTTPException(status_code=500, detail="Failed to unassign task")
    return task_dao.find_by_id(task_id)

@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_task(
    task_id: int,
    task_dao: TaskDAO = Depends(get_task_dao),
    current_user: UserRecord = Depends(require_manager)
):
    _get_task_or_404(task_dao, task_id)
    if not task_dao.delete_by_id(task_id):
        raise HTTPException(status_code=500, detail="Failed to delete task")
    logger.info("Task %s deleted by %s", task_id, current_user.username)
