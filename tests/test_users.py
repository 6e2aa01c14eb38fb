import pytest

from apartment_manager.core.errors import AuthenticationError, ConstraintError, NotFoundError, ValidationError
from apartment_manager.services.users import UserService


@pytest.fixture
def users(users_db) -> UserService:
    return UserService(users_db)


def test_password_is_stored_hashed(users):
    user = users.save_user("admin", "changeme")

    assert user.hashed_password != "changeme"
    assert users.authenticate("admin", "changeme") is True
    assert users.authenticate("admin", "wrong") is False
    assert users.authenticate("nobody", "changeme") is False


def test_login_raises_on_bad_credentials(users):
    users.save_user("admin", "changeme")

    assert users.login("admin", "changeme").username == "admin"
    with pytest.raises(AuthenticationError, match="invalid credentials"):
        users.login("admin", "nope")


def test_username_and_password_are_required(users):
    with pytest.raises(ValidationError, match="required"):
        users.save_user("", "secret")
    with pytest.raises(ValidationError):
        users.save_user("clerk", "")
    assert users.count() == 0


def test_duplicate_username_is_a_constraint_error(users):
    users.save_user("clerk", "one")

    with pytest.raises(ConstraintError):
        users.save_user("clerk", "two")
    assert users.count() == 1


def test_update_existing_user(users):
    user = users.save_user("clerk", "one")

    users.save_user("treasurer", "two", user_id=user.id)

    assert [u.username for u in users.list()] == ["treasurer"]
    assert users.authenticate("treasurer", "two")
    assert not users.authenticate("treasurer", "one")


def test_update_unknown_user(users):
    with pytest.raises(NotFoundError):
        users.save_user("clerk", "one", user_id=42)


def test_delete_user(users):
    user = users.save_user("clerk", "one")

    assert users.delete_user(user.id) is True
    assert users.delete_user(user.id) is False
    with pytest.raises(NotFoundError):
        users.get(user.id)
