# app/utils/dependencies.py
# DAO providers for route handlers. All DAOs of one request share its session.

from fastapi import Depends
from sqlalchemy.orm import Session

from app.dao import ProjectDAO, TaskDAO, UserDAO
from app.database import get_db


def get_user_dao(db: Session = Depends(get_db)) -> UserDAO:
    return UserDAO(db)


def get_project_dao(db: Session = Depends(get_db)) -> ProjectDAO:
    return ProjectDAO(db)


def get_task_dao(db: Session = Depends(get_db)) -> TaskDAO:
    return TaskDAO(db)
