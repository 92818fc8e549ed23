"""
Master Database Seeding Script
Creates database tables and populates them with demo data
"""

import sys
from datetime import datetime
from typing import Dict

from app.config.settings import settings
from app.dao import ProjectDAO, TaskDAO, UserDAO
from app.database import SessionLocal
from app.models.project import ProjectStatus
from app.models.user import UserRole
from app.schemas.project import ProjectRecord
from app.schemas.task import TaskRecord
from app.schemas.user import UserRecord
from app.utils.logging_config import setup_logging
from app.utils.security import hash_password
from create_tables import create_tables

# Import demo data
from demo_users import DEMO_USERS
from demo_projects import DEMO_PROJECTS
from demo_tasks import DEMO_TASKS


def banner(title: str) -> None:
    print(f"\n{'='*60}")
    print(f"🚀 {title}")
    print(f"{'='*60}")


def seed_demo_users(user_dao: UserDAO) -> Dict[str, UserRecord]:
    """Create demo users, returning every known user by username"""
    banner("Creating Demo Users")
    created = 0

    for user_data in DEMO_USERS:
        if user_dao.username_exists(user_data["username"]):
            print(f"[SKIP] User {user_data['username']} already exists, skipping...")
            continue

        user = UserRecord(
            username=user_data["username"],
            password_hash=hash_password(user_data["password"]),
            email=user_data["email"],
            role=UserRole(user_data["role"]),
            full_name=user_data["full_name"],
        )
        if not user_dao.save(user):
            print(f"[ERROR] Could not create user {user_data['username']}")
            continue

        created += 1
        print(f"[SUCCESS] Created user: {user.full_name} ({user.role.display_name})")

    print(f"\n[SUCCESS] Successfully created {created} demo users!")
    return {user.username: user for user in user_dao.find_all()}


def seed_demo_projects(project_dao: ProjectDAO, users: Dict[str, UserRecord]) -> Dict[str, ProjectRecord]:
    """Create demo projects, returning every known project by name"""
    banner("Creating Demo Projects")
    created = 0

    for project_data in DEMO_PROJECTS:
        if project_dao.project_name_exists(project_data["name"]):
            print(f"[SKIP] Project {project_data['name']} already exists, skipping...")
            continue

        creator = users.get(project_data["creator"])
        if creator is None:
            print(f"[ERROR] Creator {project_data['creator']} not found, skipping project {project_data['name']}")
            continue

        project = ProjectRecord(
            name=project_data["name"],
            description=project_data["description"],
            status=ProjectStatus(project_data["status"]),
            creator=creator,
        )
        if not project_dao.save(project):
            print(f"[ERROR] Could not create project {project_data['name']}")
            continue

        created += 1
        print(f"[SUCCESS] Created project: {project.name} ({project.status.display_name})")

    print(f"\n[SUCCESS] Successfully created {created} demo projects!")
    return {project.name: project for project in project_dao.find_all()}


def seed_demo_tasks(task_dao: TaskDAO, users: Dict[str, UserRecord], projects: Dict[str, ProjectRecord]) -> int:
    banner("Creating Demo Tasks")
    existing = {task.title for task in task_dao.find_all()}
    created = 0

    for task_data in DEMO_TASKS:
        if task_data["title"] in existing:
            print(f"[SKIP] Task {task_data['title']} already exists, skipping...")
            continue

        task = TaskRecord(
            title=task_data["title"],
            description=task_data["description"],
            status=task_data["status"],
            priority=task_data["priority"],
            project=projects.get(task_data["project"]),
            assigned_user=users.get(task_data["assigned_to"]) if task_data["assigned_to"] else None,
            assigner=users.get(task_data["assigner"]) if task_data["assigner"] else None,
            due_date=task_data["due_date"],
        )
        if not task_dao.save(task):
            print(f"[ERROR] Could not create task {task_data['title']}")
            continue

        created += 1
        print(f"[SUCCESS] Created task: {task.title} ({task.status.display_name}, {task.priority.display_name})")

    print(f"\n[SUCCESS] Successfully created {created} demo tasks!")
    return created


def main():
    setup_logging(settings.LOG_LEVEL)
    print("Task Manager demo data seeding")

    banner("Creating Database Tables")
    if not create_tables():
        print("\n[WARNING] Could not create the database schema. Please check the errors above.")
        sys.exit(1)

    db = SessionLocal()
    try:
        user_dao = UserDAO(db)
        project_dao = ProjectDAO(db, user_dao)
        task_dao = TaskDAO(db, user_dao, project_dao)

        users = seed_demo_users(user_dao)
        projects = seed_demo_projects(project_dao, users)
        seed_demo_tasks(task_dao, users, projects)

        # Summary
        banner("SEEDING SUMMARY")
        print(f"Users: {user_dao.count()}")
        print(f"Projects: {project_dao.count()}")
        print(f"Tasks: {task_dao.count()}")
    finally:
        db.close()

    print(f"\n[INFO] Login Credentials:")
    print(f"   - Admin: {settings.DEFAULT_ADMIN['username']} / {settings.DEFAULT_ADMIN['password']}")
    print(f"   - All other users: password123")
    print(f"\nCompleted at: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")


if __name__ == "__main__":
    main()
