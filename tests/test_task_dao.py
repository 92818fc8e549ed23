# tests/test_task_dao.py

from datetime import timedelta

import pytest
from sqlalchemy import event

from app.models.task import TaskPriority, TaskStatus
from app.models.user import UserRole

from .conftest import TODAY


@pytest.fixture()
def people(make_user):
    return {
        "manager": make_user("manager", UserRole.MANAGER),
        "alice": make_user("alice"),
        "bob": make_user("bob"),
    }


@pytest.fixture()
def project(make_project, people):
    return make_project("Alpha", people["manager"])


def test_insert_then_find_resolves_references(task_dao, make_task, project, people) -> None:
    task = make_task(
        "Write docs",
        project=project,
        assigned_user=people["alice"],
        assigner=people["manager"],
        priority=TaskPriority.HIGH,
        due_date=TODAY,
    )

    found = task_dao.find_by_id(task.id)
    assert found.title == "Write docs"
    assert found.status == TaskStatus.TODO
    assert found.priority == TaskPriority.HIGH
    assert found.due_date == TODAY
    assert found.project_id == project.id
    assert found.project.creator.id == people["manager"].id
    assert found.assigned_user_id == people["alice"].id
    assert found.assigner_id == people["manager"].id


def test_task_without_relationships(task_dao, make_task) -> None:
    task = make_task("Standalone")
    found = task_dao.find_by_id(task.id)
    assert found.project is None
    assert found.assigned_user is None
    assert found.assigner is None
    assert found.due_date is None


def test_update_status_changes_only_target(task_dao, make_task) -> None:
    first = make_task("First")
    second = make_task("Second")

    assert task_dao.update_status(first.id, TaskStatus.IN_PROGRESS)

    assert task_dao.find_by_id(first.id).status == TaskStatus.IN_PROGRESS
    assert task_dao.find_by_id(second.id).status == TaskStatus.TODO
    assert not task_dao.update_status(999, TaskStatus.COMPLETED)


def test_assignment_changes_only_target(task_dao, make_task, people) -> None:
    first = make_task("First")
    second = make_task("Second")

    assert task_dao.assign_task(first.id, people["alice"].id, people["manager"].id)
    assigned = task_dao.find_by_id(first.id)
    assert assigned.assigned_user_id == people["alice"].id
    assert assigned.assigner_id == people["manager"].id
    assert task_dao.find_by_id(second.id).assigned_user is None

    assert task_dao.unassign_task(first.id)
    unassigned = task_dao.find_by_id(first.id)
    assert unassigned.assigned_user is None
    assert unassigned.assigner is None


def test_find_by_assigned_user_orders_by_due_date_then_priority(task_dao, make_task, people) -> None:
    alice = people["alice"]
    make_task("No date", assigned_user=alice, priority=TaskPriority.URGENT)
    make_task("Later", assigned_user=alice, due_date=TODAY + timedelta(days=5))
    make_task("Soon low", assigned_user=alice, due_date=TODAY, priority=TaskPriority.LOW)
    make_task("Soon urgent", assigned_user=alice, due_date=TODAY, priority=TaskPriority.URGENT)
    make_task("Bob's", assigned_user=people["bob"], due_date=TODAY)

    titles = [t.title for t in task_dao.find_by_assigned_user(alice.id)]
    assert titles == ["Soon urgent", "Soon low", "Later", "No date"]


def test_find_by_project_orders_by_priority(task_dao, make_task, project) -> None:
    make_task("Low", project=project, priority=TaskPriority.LOW)
    make_task("Urgent", project=project, priority=TaskPriority.URGENT)
    make_task("Medium", project=project, priority=TaskPriority.MEDIUM)
    make_task("High", project=project, priority=TaskPriority.HIGH)
    make_task("Elsewhere")

    assert [t.title for t in task_dao.find_by_project(project.id)] == ["Urgent", "High", "Medium", "Low"]


def test_status_and_priority_filters(task_dao, make_task) -> None:
    make_task("A", status=TaskStatus.IN_PROGRESS, priority=TaskPriority.HIGH)
    make_task("B", status=TaskStatus.TODO, priority=TaskPriority.HIGH)
    make_task("C", status=TaskStatus.IN_PROGRESS, priority=TaskPriority.LOW)

    assert {t.title for t in task_dao.find_by_status(TaskStatus.IN_PROGRESS)} == {"A", "C"}
    assert {t.title for t in task_dao.find_by_priority(TaskPriority.HIGH)} == {"A", "B"}


def test_overdue_and_due_today(task_dao, make_task) -> None:
    make_task("Late", due_date=TODAY - timedelta(days=1))
    make_task("Late but done", due_date=TODAY - timedelta(days=3), status=TaskStatus.COMPLETED)
    make_task("Late but cancelled", due_date=TODAY - timedelta(days=3), status=TaskStatus.CANCELLED)
    make_task("Today", due_date=TODAY, priority=TaskPriority.LOW)
    make_task("Today urgent", due_date=TODAY, priority=TaskPriority.URGENT)
    make_task("Today done", due_date=TODAY, status=TaskStatus.COMPLETED)
    make_task("Future", due_date=TODAY + timedelta(days=1))
    make_task("Undated")

    assert [t.title for t in task_dao.find_overdue_tasks(TODAY)] == ["Late"]
    assert [t.title for t in task_dao.find_tasks_due_today(TODAY)] == ["Today urgent", "Today"]


def test_search_and_unassigned(task_dao, make_task, people) -> None:
    make_task("Fix login bug", assigned_user=people["alice"])
    make_task("Login page copy")
    make_task("Deploy")

    assert [t.title for t in task_dao.search_by_title("LOGIN")] == ["Fix login bug", "Login page copy"]
    assert {t.title for t in task_dao.get_unassigned_tasks()} == {"Login page copy", "Deploy"}


def test_find_recently_updated(task_dao, make_task, people) -> None:
    for i in range(12):
        make_task(f"Task {i}", assigned_user=people["alice"] if i % 2 else None)

    recent = task_dao.find_recently_updated(10)
    assert len(recent) == 10
    assert recent[0].title == "Task 11"

    mine = task_dao.find_recently_updated(10, assigned_user_id=people["alice"].id)
    assert len(mine) == 6
    assert all(t.assigned_user_id == people["alice"].id for t in mine)


def test_statistics_match_manual_counts(task_dao, make_task, people) -> None:
    alice = people["alice"]
    specs = [
        (TaskStatus.TODO, TODAY - timedelta(days=2), alice),
        (TaskStatus.TODO, None, None),
        (TaskStatus.IN_PROGRESS, TODAY - timedelta(days=1), alice),
        (TaskStatus.IN_PROGRESS, TODAY + timedelta(days=1), people["bob"]),
        (TaskStatus.COMPLETED, TODAY - timedelta(days=5), alice),
        (TaskStatus.CANCELLED, TODAY - timedelta(days=5), None),
    ]
    for i, (status, due, assignee) in enumerate(specs):
        make_task(f"Task {i}", status=status, due_date=due, assigned_user=assignee)

    tasks = task_dao.find_all()
    stats = task_dao.get_task_statistics(TODAY)
    assert stats.total_tasks == len(tasks)
    assert stats.todo_tasks == sum(1 for t in tasks if t.status == TaskStatus.TODO)
    assert stats.in_progress_tasks == sum(1 for t in tasks if t.status == TaskStatus.IN_PROGRESS)
    assert stats.completed_tasks == sum(1 for t in tasks if t.status == TaskStatus.COMPLETED)
    assert stats.overdue_tasks == sum(1 for t in tasks if t.is_overdue(TODAY)) == 2

    mine = [t for t in tasks if t.assigned_user_id == alice.id]
    user_stats = task_dao.get_user_task_statistics(alice.id, TODAY)
    assert user_stats.assigned_tasks == len(mine) == 3
    assert user_stats.completed_tasks == 1
    assert user_stats.overdue_tasks == sum(1 for t in mine if t.is_overdue(TODAY)) == 2


def test_statistics_on_empty_table(task_dao, people) -> None:
    stats = task_dao.get_task_statistics(TODAY)
    assert (stats.total_tasks, stats.overdue_tasks) == (0, 0)
    assert task_dao.get_user_task_statistics(people["alice"].id, TODAY).assigned_tasks == 0


def test_deleting_user_unassigns_tasks(user_dao, task_dao, make_task, people) -> None:
    task = make_task("Orphaned", assigned_user=people["bob"], assigner=people["manager"])

    assert user_dao.delete_by_id(people["bob"].id)
    found = task_dao.find_by_id(task.id)
    assert found is not None
    assert found.assigned_user is None
    assert found.assigner_id == people["manager"].id


def test_listing_loads_shared_references_once(engine, task_dao, make_task, project, people) -> None:
    for n in range(4):
        make_task("Task %d" % n, project=project, assigned_user=people["alice"], assigner=people["manager"])

    statements = []

    def count_statement(conn, cursor, statement, parameters, context, executemany):
        statements.append(statement)

    event.listen(engine, "before_cursor_execute", count_statement)
    try:
        tasks = task_dao.find_all()
    finally:
        event.remove(engine, "before_cursor_execute", count_statement)

    assert len(tasks) == 4
    # tasks, project, project creator, assignee, assigner
    assert len(statements) <= 5
    assert all(t.project.creator.id == people["manager"].id for t in tasks)
    assert all(t.assigned_user.username == "alice" for t in tasks)
    assert all(t.assigner.username == "manager" for t in tasks)
