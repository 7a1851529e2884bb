import pytest
from werkzeug.security import check_password_hash

from designflow.core.enums import Role
from designflow.core.exceptions import NotFoundError, ValidationError


def test_create_user_defaults(container):
    user = container.user_service.create_user(name="  Designer 04 - Ana ")

    assert user.name == "Designer 04 - Ana"
    assert user.role == Role.DESIGNER
    assert user.active
    assert user.user_id.startswith("user-")
    assert check_password_hash(user.password_hash, "123")


def test_create_admin_with_password(container):
    user = container.user_service.create_user(name="Chefe", password="s3nha", role="ADM")

    assert user.role == Role.ADMIN
    assert check_password_hash(user.password_hash, "s3nha")


def test_create_user_rejects_bad_input(container):
    with pytest.raises(ValidationError):
        container.user_service.create_user(name=" ")
    with pytest.raises(ValidationError):
        container.user_service.create_user(name="X", role="ROOT")


def test_update_rehashes_password_and_keeps_other_fields(container, repos):
    container.user_service.update_user("d1", password="outra", avatar_color="#fff")

    user = repos.users.get_by_id("d1")
    assert check_password_hash(user.password_hash, "outra")
    assert user.avatar_color == "#fff"
    assert user.name == "Designer 01 - Davi"


def test_update_unknown_user(container):
    with pytest.raises(NotFoundError):
        container.user_service.update_user("ghost", name="X")


def test_designers_list_excludes_admins(container):
    assert [u.user_id for u in container.user_service.list_designers()] == ["d1", "d2"]


def test_delete_is_soft_by_default(container, repos):
    container.user_service.delete_user("d1")

    assert repos.users.get_by_id("d1").active is False
    assert repos.users.cascaded == []


def test_cascade_delete_removes_user(container, repos):
    container.user_service.delete_user("d2", cascade=True)

    assert repos.users.get_by_id("d2") is None
    assert repos.users.cascaded == ["d2"]


def test_delete_unknown_user(container):
    with pytest.raises(NotFoundError):
        container.user_service.delete_user("ghost")
    with pytest.raises(NotFoundError):
        container.user_service.delete_user("ghost", cascade=True)


def test_non_text_name_or_password_is_a_validation_error(container, repos):
    with pytest.raises(ValidationError):
        container.user_service.create_user(name=42)
    with pytest.raises(ValidationError):
        container.user_service.create_user(name="Ana", password=123)
    with pytest.raises(ValidationError):
        container.user_service.update_user("d1", password=123)
    with pytest.raises(ValidationError):
        container.user_service.update_user("d1", name={"first": "Davi"})

    assert check_password_hash(repos.users.get_by_id("d1").password_hash, "123")
