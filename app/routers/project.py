# app/routers/project.py
from fastapi import APIRouter, Depends, HTTPException, Query, status
from typing import List
import logging

from app.dao import ProjectDAO, TaskDAO, UserDAO
from app.schemas.project import (
    ProjectCreate,
    ProjectRecord,
    ProjectStatistics,
    ProjectStatusUpdate,
    ProjectUpdate,
    ProjectWithTaskCounts,
)
from app.schemas.task import TaskRecord
from app.schemas.user import UserRecord
from app.utils.auth import get_current_user, require_manager
from app.utils.dependencies import get_project_dao, get_task_dao, get_user_dao

router = APIRouter()
logger = logging.getLogger(__name__)

def _get_project_or_404(project_dao: ProjectDAO, project_id: int) -> ProjectRecord:
    project = project_dao.find_by_id(project_id)
    if not project:
        raise HTTPException(status_code=404, detail="Project not found")
    return project

def _resolve_creator(user_dao: UserDAO, creator_id: int, current_user: UserRecord) -> UserRecord:
    """Only administrators may name someone else as the creator"""
    if creator_id == current_user.id:
        return current_user
    if not current_user.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only administrators can change the project creator"
        )
    creator = user_dao.find_by_id(creator_id)
    if not creator:
        raise HTTPException(status_code=400, detail="Creator not found")
    return creator

@router.get("/", response_model=List[ProjectWithTaskCounts])
def get_projects(
    project_dao: ProjectDAO = Depends(get_project_dao),
    current_user: UserRecord = Depends(get_current_user)
):
    """All projects, newest first, with their task counts"""
    return project_dao.get_projects_with_task_counts()

@router.get("/active", response_model=List[ProjectRecord])
def get_active_projects(
    project_dao: ProjectDAO = Depends(get_project_dao),
    current_user: UserRecord = Depends(get_current_user)
):
    """Projects that still accept new tasks"""
    return project_dao.get_active_projects()

@router.get("/search", response_model=List[ProjectRecord])
def search_projects(
    q: str = Query(..., min_length=1),
    project_dao: ProjectDAO = Depends(get_project_dao),
    current_user: UserRecord = Depends(get_current_user)
):
    return project_dao.search_by_name(q)

@router.get("/{project_id}", response_model=ProjectRecord)
def get_project(
    project_id: int,
    project_dao: ProjectDAO = Depends(get_project_dao),
    current_user: UserRecord = Depends(get_current_user)
):
    return _get_project_or_404(project_dao, project_id)

@router.get("/{project_id}/statistics", response_model=ProjectStatistics)
def get_project_statistics(
    project_id: int,
    project_dao: ProjectDAO = Depends(get_project_dao),
    current_user: UserRecord = Depends(get_current_user)
):
    _get_project_or_404(project_dao, project_id)
    return project_dao.get_project_statistics(project_id)

@router.get("/{project_id}/tasks", response_model=List[TaskRecord])
def get_project_tasks(
    project_id: int,
    project_dao: ProjectDAO = Depends(get_project_dao),
    task_dao: TaskDAO = Depends(get_task_dao),
    current_user: UserRecord = Depends(get_current_user)
):
    """Tasks of a project, most urgent first"""
    _get_project_or_404(project_dao, project_id)
    return task_dao.find_by_project(project_id)

@router.post("/", response_model=ProjectRecord, status_code=status.HTTP_201_CREATED)
def create_project(
    project: ProjectCreate,
    project_dao: ProjectDAO = Depends(get_project_dao),
    user_dao: UserDAO = Depends(get_user_dao),
    current_user: UserRecord = Depends(require_manager)
):
    """Create a new project - ADMIN and MANAGER only"""
    name = project.name.strip()
    if not name:
        raise HTTPException(status_code=400, detail="Project name is required")
    if project_dao.project_name_exists(name):
        raise HTTPException(status_code=400, detail="Project name already exists")

    creator = current_user
    if project.creator_id is not None:
        creator = _resolve_creator(user_dao, project.creator_id, current_user)

    new_project = ProjectRecord(
        name=name,
        description=project.description,
        status=project.status,
        creator=creator,
    )
    if not project_dao.save(new_project):
        raise HTTPException(status_code=500, detail="Failed to create project")

    logger.info("Project '%s' created by %s", new_project.name, current_user.username)
    return project_dao.find_by_id(new_project.id) or new_project

@router.put("/{project_id}", response_model=ProjectRecord)
def update_project(
    project_id: int,
    changes: ProjectUpdate,
    project_dao: ProjectDAO = Depends(get_project_dao),
    user_dao: UserDAO = Depends(get_user_dao),
    current_user: UserRecord = Depends(require_manager)
):
    project = _get_project_or_404(project_dao, project_id)

    if changes.name is not None:
        name = changes.name.strip()
        if not name:
            raise HTTPException(status_code=400, detail="Project name is required")
        if project_dao.project_name_exists(name, exclude_id=project_id):
            raise HTTPException(status_code=400, detail="Project name already exists")
        project.name = name
    if changes.description is not None:
        project.description = changes.description
    if changes.status is not None:
        project.status = changes.status
    if changes.creator_id is not None and (project.creator is None or changes.creator_id != project.creator.id):
        project.creator = _resolve_creator(user_dao, changes.creator_id, current_user)

    if not project_dao.save(project):
        raise HTTPException(status_code=500, detail="Failed to update project")
    return project_dao.find_by_id(project_id) or project

@router.patch("/{project_id}/status", response_model=ProjectRecord)
def update_project_status(
    project_id: int,
    body: ProjectStatusUpdate,
    project_dao: ProjectDAO = Depends(get_project_dao),
    current_user: UserRecord = Depends(require_manager)
):
    _get_project_or_404(project_dao, project_id)
    if not project_dao.update_status(project_id, body.status):
        raise HTTPException(status_code=500, detail="Failed to update project status")
    return project_dao.find_by_id(project_id)

@router.delete("/{project_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_project(
    project_id: int,
    project_dao: ProjectDAO = Depends(get_project_dao),
    current_user: UserRecord = Depends(require_manager)
):
    """Delete a project together with its tasks"""
    _get_project_or_404(project_dao, project_id)
    if not project_dao.delete_by_id(project_id):
        raise HTTPException(status_code=500, detail="Failed to delete project")
    logger.info("Project %s deleted by %s", project_id, current_user.username)
