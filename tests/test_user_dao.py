# tests/test_user_dao.py

from app.config.settings import settings
from app.models.user import UserRole
from app.schemas.user import UserRecord
from app.utils.security import hash_password, verify_password


def test_insert_then_find_returns_same_user(user_dao, make_user) -> None:
    alice = make_user("alice", UserRole.MANAGER, full_name="Alice Smith")

    assert alice.id is not None
    found = user_dao.find_by_id(alice.id)
    assert found is not None
    assert (found.username, found.email, found.role, found.full_name) == (
        "alice", "alice@company.com", UserRole.MANAGER, "Alice Smith"
    )
    assert found.created_at is not None
    assert user_dao.find_by_username("alice").id == alice.id
    assert user_dao.find_by_email("alice@company.com").id == alice.id


def test_missing_user_is_none(user_dao) -> None:
    assert user_dao.find_by_id(999) is None
    assert user_dao.find_by_username("ghost") is None


def test_invalid_user_is_not_saved(user_dao) -> None:
    user = UserRecord(username="bad", password_hash="x", email="no-at-sign", full_name="Bad")
    assert not user_dao.save(user)
    assert user.id is None
    assert user_dao.count() == 0
    assert not user_dao.save(None)


def test_duplicate_username_is_rejected(user_dao, make_user) -> None:
    make_user("alice")
    clash = UserRecord(
        username="alice", password_hash=hash_password("secret1"),
        email="other@company.com", full_name="Another Alice",
    )
    assert not user_dao.save(clash)
    assert user_dao.count() == 1


def test_existence_checks_follow_state(user_dao, make_user) -> None:
    assert not user_dao.username_exists("bob")
    assert not user_dao.email_exists("bob@company.com")

    bob = make_user("bob")
    assert user_dao.username_exists("bob")
    assert user_dao.email_exists("bob@company.com")

    assert user_dao.delete_by_id(bob.id)
    assert not user_dao.username_exists("bob")
    assert not user_dao.email_exists("bob@company.com")


def test_update_changes_only_target(user_dao, make_user) -> None:
    alice = make_user("alice")
    bob = make_user("bob")

    alice.full_name = "Alice Renamed"
    alice.role = UserRole.MANAGER
    assert user_dao.save(alice)

    assert user_dao.find_by_id(alice.id).full_name == "Alice Renamed"
    assert user_dao.find_by_id(alice.id).role == UserRole.MANAGER
    assert user_dao.find_by_id(bob.id).full_name == bob.full_name
    assert user_dao.count() == 2


def test_find_all_orders_by_full_name(user_dao, make_user) -> None:
    make_user("zed", full_name="Zed")
    make_user("amy", full_name="Amy")
    make_user("max", full_name="Max")
    assert [u.full_name for u in user_dao.find_all()] == ["Amy", "Max", "Zed"]


def test_role_queries(user_dao, make_user) -> None:
    make_user("admin", UserRole.ADMIN)
    make_user("manager", UserRole.MANAGER)
    make_user("emp1", UserRole.EMPLOYEE)
    make_user("emp2", UserRole.EMPLOYEE)

    assert {u.username for u in user_dao.find_by_role(UserRole.EMPLOYEE)} == {"emp1", "emp2"}
    assert {u.username for u in user_dao.get_assignable_users()} == {"manager", "emp1", "emp2"}
    assert {u.username for u in user_dao.get_task_assigners()} == {"admin", "manager"}
    assert user_dao.count_by_role() == {
        UserRole.ADMIN: 1,
        UserRole.MANAGER: 1,
        UserRole.EMPLOYEE: 2,
    }


def test_count_by_role_includes_empty_roles(user_dao, make_user) -> None:
    make_user("emp", UserRole.EMPLOYEE)
    assert user_dao.count_by_role()[UserRole.ADMIN] == 0


def test_search_is_partial_and_case_insensitive(user_dao, make_user) -> None:
    make_user("jsmith", full_name="John Smith", email="john@example.org")
    make_user("mjones", full_name="Mary Jones")

    assert [u.username for u in user_dao.search("SMITH")] == ["jsmith"]
    assert [u.username for u in user_dao.search("example.org")] == ["jsmith"]
    assert {u.username for u in user_dao.search("j")} == {"jsmith", "mjones"}
    assert user_dao.search("%") == []


def test_authenticate(user_dao, make_user) -> None:
    make_user("alice", password="correct-horse")

    assert user_dao.authenticate("alice", "correct-horse").username == "alice"
    assert user_dao.authenticate("alice", "wrong") is None
    assert user_dao.authenticate("ghost", "correct-horse") is None


def test_update_password(user_dao, make_user) -> None:
    alice = make_user("alice")

    assert not user_dao.update_password(alice.id, "short")
    assert user_dao.update_password(alice.id, "new-password")
    stored = user_dao.find_by_id(alice.id)
    assert verify_password("new-password", stored.password_hash)
    assert not user_dao.update_password(999, "new-password")


def test_create_default_admin_only_when_empty(user_dao) -> None:
    admin = user_dao.create_default_admin()
    assert admin is not None
    assert admin.role == UserRole.ADMIN
    assert admin.username == settings.DEFAULT_ADMIN["username"]
    assert user_dao.authenticate(admin.username, settings.DEFAULT_ADMIN["password"]) is not None

    assert user_dao.create_default_admin() is None
    assert user_dao.count() == 1
