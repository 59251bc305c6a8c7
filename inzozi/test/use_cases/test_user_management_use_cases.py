# inzozi/test/use_cases/test_user_management_use_cases.py

# pytest inzozi/test/use_cases/test_user_management_use_cases.py -v

import uuid

import pytest
from fastapi_pagination import Params

from inzozi.adapters.outbound.security.password_manager import PasswordManager
from inzozi.application.dtos.user_dto import UserCreateByManager, UserUpdate
from inzozi.application.use_cases.user_management_use_cases import AsyncUserManagementService
from inzozi.domain.exceptions import (
    InvalidRoleException,
    OrgUnitMismatchException,
    OrgUnitRequiredException,
    ResourceAlreadyExistsException,
    RoleNotManagedException,
)
from inzozi.domain.models.role import RoleName
from inzozi.domain.services.role_hierarchy_service import RoleHierarchyService
from inzozi.test.conftest import SCHOOL_A, SCHOOL_B, TEST_PASSWORD_HASH


@pytest.fixture
def service(mailer, user_repo):
    return AsyncUserManagementService(None, mailer, user_repo, frontend_url="https://apply.inzozi.rw")


@pytest.fixture
def manager_scope(school_manager):
    return RoleHierarchyService.resolve_managed_roles(school_manager.role_name, school_manager.school_id)


@pytest.fixture
def admin_scope(system_admin):
    return RoleHierarchyService.resolve_managed_roles(system_admin.role_name, system_admin.school_id)


def _new_user(user_repo, role=RoleName.ADMISSION_MANAGER, **overrides):
    data = {
        "first_name": "Aline",
        "last_name": "Uwase",
        "email": "aline@school-a.rw",
        "role_id": user_repo.roles[role].id,
        "school_id": SCHOOL_A,
    }
    data.update(overrides)
    return UserCreateByManager(**data)


@pytest.mark.asyncio
async def test_create_generates_password_and_mails_it(service, user_repo, mailer, manager_scope):
    user, temporary_password = await service.create_user(manager_scope, _new_user(user_repo))

    assert user.role_name == RoleName.ADMISSION_MANAGER
    assert user.school_id == SCHOOL_A
    assert len(temporary_password) == 12
    assert await PasswordManager.verify_password(temporary_password, user.password)

    assert mailer.sent[0]["to"] == "aline@school-a.rw"
    assert temporary_password in mailer.sent[0]["html"]


@pytest.mark.asyncio
async def test_create_with_explicit_password(service, user_repo, manager_scope):
    user, temporary_password = await service.create_user(
        manager_scope, _new_user(user_repo, password="Chosen-Pass1")
    )

    assert temporary_password is None
    assert await PasswordManager.verify_password("Chosen-Pass1", user.password)


@pytest.mark.asyncio
async def test_create_survives_mail_failure(service, user_repo, mailer, manager_scope):
    mailer.fail = True

    user, _ = await service.create_user(manager_scope, _new_user(user_repo))

    assert await user_repo.get_by_id(None, user.id) is user


@pytest.mark.asyncio
async def test_create_outside_managed_roles(service, user_repo, manager_scope):
    with pytest.raises(RoleNotManagedException) as exc:
        await service.create_user(manager_scope, _new_user(user_repo, role=RoleName.INSPECTOR))
    assert exc.value.message == "You are not authorized to create INSPECTOR users"


@pytest.mark.asyncio
async def test_create_without_school_for_scoped_manager(service, user_repo, manager_scope):
    with pytest.raises(OrgUnitRequiredException):
        await service.create_user(manager_scope, _new_user(user_repo, school_id=None))


@pytest.mark.asyncio
async def test_create_for_other_school(service, user_repo, manager_scope):
    with pytest.raises(OrgUnitMismatchException):
        await service.create_user(manager_scope, _new_user(user_repo, school_id=SCHOOL_B))


@pytest.mark.asyncio
async def test_create_with_unknown_role(service, user_repo, manager_scope):
    with pytest.raises(InvalidRoleException):
        await service.create_user(manager_scope, _new_user(user_repo, role_id=uuid.uuid4()))


@pytest.mark.asyncio
async def test_create_duplicate_email(service, user_repo, manager_scope, admission_manager):
    with pytest.raises(ResourceAlreadyExistsException) as exc:
        await service.create_user(manager_scope, _new_user(user_repo, email=admission_manager.email))
    assert exc.value.message == "User with this email already exists"


@pytest.mark.asyncio
async def test_admin_creates_inspector_without_school(service, user_repo, admin_scope):
    user, _ = await service.create_user(
        admin_scope, _new_user(user_repo, role=RoleName.INSPECTOR, email="insp@inzozi.rw", school_id=None)
    )
    assert user.role_name == RoleName.INSPECTOR


@pytest.mark.asyncio
async def test_list_is_confined_to_scope(service, user_repo, manager_scope, admission_manager, inspector):
    user_repo.add_user(RoleName.ADMISSION_MANAGER, "other@school-b.rw", school_id=SCHOOL_B)

    users, meta = await service.list_users(manager_scope, Params(page=1, size=10))

    assert users == [admission_manager]
    assert meta["total_users"] == 1
    assert meta["total_pages"] == 1
    assert meta["has_next_page"] is False


@pytest.mark.asyncio
async def test_list_pagination_newest_first(service, user_repo, manager_scope):
    created = [
        user_repo.add_user(RoleName.ADMISSION_MANAGER, f"am{i}@school-a.rw", school_id=SCHOOL_A)
        for i in range(5)
    ]

    users, meta = await service.list_users(manager_scope, Params(page=2, size=2))

    assert users == [created[2], created[1]]
    assert meta == {
        "current_page": 2,
        "total_pages": 3,
        "total_users": 5,
        "users_per_page": 2,
        "has_next_page": True,
        "has_prev_page": True,
    }


@pytest.mark.asyncio
async def test_list_search(service, user_repo, manager_scope):
    user_repo.add_user(RoleName.ADMISSION_MANAGER, "jean@school-a.rw", school_id=SCHOOL_A, first_name="Jean")
    user_repo.add_user(RoleName.ADMISSION_MANAGER, "claire@school-a.rw", school_id=SCHOOL_A, first_name="Claire")

    users, _ = await service.list_users(manager_scope, Params(page=1, size=10), search="clai")

    assert [u.email for u in users] == ["claire@school-a.rw"]


@pytest.mark.asyncio
async def test_list_filters(service, manager_scope):
    with pytest.raises(RoleNotManagedException):
        await service.list_users(manager_scope, Params(page=1, size=10), role="INSPECTOR")
    with pytest.raises(InvalidRoleException):
        await service.list_users(manager_scope, Params(page=1, size=10), role="JANITOR")
    with pytest.raises(OrgUnitMismatchException):
        await service.list_users(manager_scope, Params(page=1, size=10), school_id=SCHOOL_B)


@pytest.mark.asyncio
async def test_update_fields_and_email_conflict(service, manager_scope, admission_manager, school_manager):
    user = await service.update_user(manager_scope, admission_manager, UserUpdate(first_name="Clarisse"))
    assert user.first_name == "Clarisse"

    with pytest.raises(ResourceAlreadyExistsException) as exc:
        await service.update_user(manager_scope, admission_manager, UserUpdate(email=school_manager.email))
    assert exc.value.message == "Email already in use"


@pytest.mark.asyncio
async def test_update_ignores_null_for_required_fields(service, manager_scope, admission_manager):
    original = (admission_manager.first_name, admission_manager.last_name, admission_manager.email)

    user = await service.update_user(
        manager_scope, admission_manager, UserUpdate(first_name=None, last_name=None, email=None, phone=None)
    )

    assert (user.first_name, user.last_name, user.email) == original
    assert user.phone is None


@pytest.mark.asyncio
async def test_update_cannot_assign_unmanaged_role(service, user_repo, manager_scope, admission_manager):
    with pytest.raises(RoleNotManagedException) as exc:
        await service.update_user(
            manager_scope, admission_manager, UserUpdate(role_id=user_repo.roles[RoleName.SCHOOL_MANAGER].id)
        )
    assert exc.value.message == "You are not authorized to assign SCHOOL_MANAGER role"
    assert admission_manager.role_name == RoleName.ADMISSION_MANAGER


@pytest.mark.asyncio
async def test_update_cannot_move_user_to_other_school(service, manager_scope, admission_manager):
    with pytest.raises(OrgUnitMismatchException):
        await service.update_user(manager_scope, admission_manager, UserUpdate(school_id=SCHOOL_B))
    assert admission_manager.school_id == SCHOOL_A


@pytest.mark.asyncio
async def test_admin_may_relocate_inspector(service, user_repo, admin_scope):
    inspector = user_repo.add_user(RoleName.INSPECTOR, "insp2@inzozi.rw")
    user = await service.update_user(admin_scope, inspector, UserUpdate(school_id=SCHOOL_B))
    assert user.school_id == SCHOOL_B


@pytest.mark.asyncio
async def test_delete_is_soft(service, user_repo, admission_manager):
    await service.delete_user(admission_manager)

    assert admission_manager.deleted_at is not None
    assert await user_repo.get_by_id(None, admission_manager.id) is None
    assert await user_repo.get_by_email(None, admission_manager.email) is None


@pytest.mark.asyncio
async def test_reset_user_password_mails_new_password(service, mailer, admission_manager):
    sent = await service.reset_user_password(admission_manager)

    assert sent is True
    assert admission_manager.password != TEST_PASSWORD_HASH
    assert mailer.sent[-1]["to"] == admission_manager.email
    assert "Password Has Been Reset" in mailer.sent[-1]["subject"]


@pytest.mark.asyncio
async def test_stats(service, user_repo, manager_scope, admission_manager):
    user_repo.add_user(RoleName.ADMISSION_MANAGER, "second@school-a.rw", school_id=SCHOOL_A)
    user_repo.add_user(RoleName.ADMISSION_MANAGER, "other@school-b.rw", school_id=SCHOOL_B)

    stats = await service.get_user_stats(manager_scope)

    assert stats == {"total_users": 2, "role_breakdown": {"ADMISSION_MANAGER": 2}}


@pytest.mark.asyncio
async def test_available_roles(service, user_repo):
    result = await service.get_available_roles(RoleName.SYSTEM_ADMIN)

    assert result["can_manage"] is True
    assert result["current_user_role"] == "SYSTEM_ADMIN"
    assert [r["name"] for r in result["available_roles"]] == ["INSPECTOR"]
    assert result["available_roles"][0]["id"] == str(user_repo.roles[RoleName.INSPECTOR].id)


@pytest.mark.asyncio
async def test_available_roles_for_non_manager(service):
    result = await service.get_available_roles(RoleName.INSPECTOR)

    assert result == {"available_roles": [], "current_user_role": "INSPECTOR", "can_manage": False}
