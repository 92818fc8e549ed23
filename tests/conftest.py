# tests/conftest.py

import os

# Point the application at a throwaway database before anything imports it
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("SECRET_KEY", "test-secret-key")

from datetime import date
from typing import Callable, Dict, Optional

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from app.dao import ProjectDAO, TaskDAO, UserDAO
from app.database import Base, get_db, init_db, make_engine
from app.models.project import ProjectStatus
from app.models.task import TaskPriority, TaskStatus
from app.models.user import UserRole
from app.schemas.project import ProjectRecord
from app.schemas.task import TaskRecord
from app.schemas.user import UserRecord
from app.utils.security import hash_password

TODAY = date(2024, 6, 15)
PASSWORD = "password123"


@pytest.fixture()
def engine():
    """Fresh in-memory database per test"""
    engine = make_engine("sqlite://")
    init_db(engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture()
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def user_dao(db) -> UserDAO:
    return UserDAO(db)


@pytest.fixture()
def project_dao(db, user_dao) -> ProjectDAO:
    return ProjectDAO(db, user_dao)


@pytest.fixture()
def task_dao(db, user_dao, project_dao) -> TaskDAO:
    return TaskDAO(db, user_dao, project_dao)


@pytest.fixture()
def make_user(user_dao) -> Callable[..., UserRecord]:
    def _make(username: str, role: UserRole = UserRole.EMPLOYEE, **overrides) -> UserRecord:
        user = UserRecord(
            username=username,
            password_hash=hash_password(overrides.pop("password", PASSWORD)),
            email=overrides.pop("email", f"{username}@company.com"),
            role=role,
            full_name=overrides.pop("full_name", username.title()),
        )
        assert user_dao.save(user)
        return user

    return _make


@pytest.fixture()
def make_project(project_dao) -> Callable[..., ProjectRecord]:
    def _make(name: str, creator: UserRecord, status: ProjectStatus = ProjectStatus.ACTIVE, **overrides) -> ProjectRecord:
        project = ProjectRecord(
            name=name,
            description=overrides.pop("description", f"{name} description"),
            status=status,
            creator=creator,
        )
        assert project_dao.save(project)
        return project

    return _make


@pytest.fixture()
def make_task(task_dao) -> Callable[..., TaskRecord]:
    def _make(
        title: str,
        project: Optional[ProjectRecord] = None,
        assigned_user: Optional[UserRecord] = None,
        assigner: Optional[UserRecord] = None,
        status: TaskStatus = TaskStatus.TODO,
        priority: TaskPriority = TaskPriority.MEDIUM,
        due_date: Optional[date] = None,
    ) -> TaskRecord:
        task = TaskRecord(
            title=title,
            status=status,
            priority=priority,
            project=project,
            assigned_user=assigned_user,
            assigner=assigner,
            due_date=due_date,
        )
        assert task_dao.save(task)
        return task

    return _make


@pytest.fixture()
def client(session_factory) -> TestClient:
    """API client whose requests run against the per-test database"""
    from main import app

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture()
def users(make_user) -> Dict[str, UserRecord]:
    """One account per role"""
    return {
        "admin": make_user("admin", UserRole.ADMIN),
        "manager": make_user("manager", UserRole.MANAGER),
        "employee": make_user("employee", UserRole.EMPLOYEE),
        "other": make_user("other", UserRole.EMPLOYEE),
    }


@pytest.fixture()
def auth_headers(client) -> Callable[[str], Dict[str, str]]:
    def _headers(username: str, password: str = PASSWORD) -> Dict[str, str]:
        response = client.post("/auth/login", json={"username": username, "password": password})
        assert response.status_code == 200, response.text
        return {"Authorization": f"Bearer {response.json()['access_token']}"}

    return _headers
