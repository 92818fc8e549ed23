# tests/test_project_dao.py

import pytest

from app.models.project import ProjectStatus
from app.models.task import TaskStatus
from app.models.user import UserRole
from app.schemas.project import ProjectRecord


@pytest.fixture()
def manager(make_user):
    return make_user("manager", UserRole.MANAGER)


def test_insert_then_find_resolves_creator(project_dao, make_project, manager) -> None:
    project = make_project("Website Redesign", manager, description="New UI")

    found = project_dao.find_by_id(project.id)
    assert found.name == "Website Redesign"
    assert found.description == "New UI"
    assert found.status == ProjectStatus.ACTIVE
    assert found.creator.id == manager.id
    assert found.creator.username == "manager"
    assert project_dao.find_by_name("Website Redesign").id == project.id


def test_project_without_creator_is_invalid(project_dao) -> None:
    assert not project_dao.save(ProjectRecord(name="Orphan"))
    assert project_dao.count() == 0


def test_project_name_exists(project_dao, make_project, manager) -> None:
    assert not project_dao.project_name_exists("Alpha")
    alpha = make_project("Alpha", manager)

    assert project_dao.project_name_exists("Alpha")
    assert not project_dao.project_name_exists("Alpha", exclude_id=alpha.id)

    beta = make_project("Beta", manager)
    assert project_dao.project_name_exists("Alpha", exclude_id=beta.id)

    assert project_dao.delete_by_id(alpha.id)
    assert not project_dao.project_name_exists("Alpha")


def test_update_status_changes_only_target(project_dao, make_project, manager) -> None:
    alpha = make_project("Alpha", manager)
    beta = make_project("Beta", manager)

    assert project_dao.update_status(alpha.id, ProjectStatus.PAUSED)

    assert project_dao.find_by_id(alpha.id).status == ProjectStatus.PAUSED
    assert project_dao.find_by_id(beta.id).status == ProjectStatus.ACTIVE
    assert not project_dao.update_status(999, ProjectStatus.PAUSED)


def test_status_and_creator_queries(project_dao, make_project, make_user, manager) -> None:
    other = make_user("other", UserRole.MANAGER)
    make_project("Alpha", manager)
    make_project("Beta", manager, status=ProjectStatus.PAUSED)
    make_project("Gamma", other, status=ProjectStatus.COMPLETED)

    assert [p.name for p in project_dao.find_by_status(ProjectStatus.PAUSED)] == ["Beta"]
    assert {p.name for p in project_dao.find_by_creator(manager.id)} == {"Alpha", "Beta"}
    assert [p.name for p in project_dao.get_active_projects()] == ["Alpha", "Beta"]


def test_find_all_is_newest_first(project_dao, make_project, manager) -> None:
    for name in ("First", "Second", "Third"):
        make_project(name, manager)
    assert [p.name for p in project_dao.find_all()] == ["Third", "Second", "First"]


def test_search_by_name(project_dao, make_project, manager) -> None:
    make_project("Mobile App", manager)
    make_project("Website", manager)
    make_project("App Store Listing", manager)

    assert [p.name for p in project_dao.search_by_name("app")] == ["App Store Listing", "Mobile App"]
    assert project_dao.search_by_name("_") == []


def test_statistics_match_manual_counts(project_dao, make_project, make_task, manager) -> None:
    project = make_project("Alpha", manager)
    empty = make_project("Empty", manager)
    statuses = [
        TaskStatus.TODO, TaskStatus.TODO, TaskStatus.IN_PROGRESS,
        TaskStatus.COMPLETED, TaskStatus.COMPLETED, TaskStatus.COMPLETED,
        TaskStatus.CANCELLED,
    ]
    for i, status in enumerate(statuses):
        make_task(f"Task {i}", project=project, status=status)

    stats = project_dao.get_project_statistics(project.id)
    assert stats.total_tasks == len(statuses)
    assert stats.todo_tasks == statuses.count(TaskStatus.TODO)
    assert stats.in_progress_tasks == statuses.count(TaskStatus.IN_PROGRESS)
    assert stats.completed_tasks == statuses.count(TaskStatus.COMPLETED)

    empty_stats = project_dao.get_project_statistics(empty.id)
    assert empty_stats.total_tasks == 0
    assert empty_stats.completed_tasks == 0
    assert empty_stats.completion_percentage == 0.0


def test_projects_with_task_counts(project_dao, make_project, make_task, manager) -> None:
    alpha = make_project("Alpha", manager)
    make_project("Beta", manager)
    make_task("One", project=alpha, status=TaskStatus.COMPLETED)
    make_task("Two", project=alpha)

    counts = {row.project.name: (row.task_count, row.completed_count)
              for row in project_dao.get_projects_with_task_counts()}
    assert counts == {"Alpha": (2, 1), "Beta": (0, 0)}


def test_deleting_project_removes_its_tasks(project_dao, task_dao, make_project, make_task, manager) -> None:
    alpha = make_project("Alpha", manager)
    make_task("One", project=alpha)
    loose = make_task("Loose")

    assert project_dao.delete_by_id(alpha.id)
    assert [t.id for t in task_dao.find_all()] == [loose.id]
