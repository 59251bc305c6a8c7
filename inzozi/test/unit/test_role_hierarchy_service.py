# inzozi/test/unit/test_role_hierarchy_service.py

# pytest inzozi/test/unit/test_role_hierarchy_service.py -v

from types import SimpleNamespace

import pytest

from inzozi.domain.exceptions import (
    InsufficientPermissionsException,
    OrgUnitMismatchException,
    OrgUnitRequiredException,
    RoleNotManagedException,
)
from inzozi.domain.models.principal import ManagedScope
from inzozi.domain.models.role import RoleName
from inzozi.domain.services.role_hierarchy_service import RoleHierarchyService

SCHOOL_1 = "school-1"
SCHOOL_2 = "school-2"


def _target(role, school_id=None):
    return SimpleNamespace(role_name=role, school_id=school_id)


def test_system_admin_manages_inspectors_everywhere():
    scope = RoleHierarchyService.resolve_managed_roles(RoleName.SYSTEM_ADMIN)

    assert scope == ManagedScope(roles=frozenset({RoleName.INSPECTOR}))
    assert not scope.is_org_scoped


def test_school_manager_is_confined_to_own_school():
    scope = RoleHierarchyService.resolve_managed_roles(RoleName.SCHOOL_MANAGER, SCHOOL_1)

    assert scope.roles == frozenset({RoleName.ADMISSION_MANAGER})
    assert scope.school_id == SCHOOL_1


@pytest.mark.parametrize("role", [RoleName.INSPECTOR, RoleName.ADMISSION_MANAGER, None])
def test_roles_without_subordinates_cannot_manage(role):
    with pytest.raises(InsufficientPermissionsException) as exc:
        RoleHierarchyService.resolve_managed_roles(role, SCHOOL_1)
    assert exc.value.message == "Insufficient permissions for user management"


def test_school_manager_without_school_cannot_manage():
    with pytest.raises(InsufficientPermissionsException):
        RoleHierarchyService.resolve_managed_roles(RoleName.SCHOOL_MANAGER, None)


def test_create_role_owned_by_other_top_tier_is_rejected_by_name():
    scope = RoleHierarchyService.resolve_managed_roles(RoleName.SYSTEM_ADMIN)

    with pytest.raises(RoleNotManagedException) as exc:
        RoleHierarchyService.authorize_create(scope, RoleName.ADMISSION_MANAGER, SCHOOL_1)
    assert exc.value.message == "You are not authorized to create ADMISSION_MANAGER users"


def test_school_manager_cannot_create_inspector():
    scope = RoleHierarchyService.resolve_managed_roles(RoleName.SCHOOL_MANAGER, SCHOOL_1)

    with pytest.raises(RoleNotManagedException) as exc:
        RoleHierarchyService.authorize_create(scope, RoleName.INSPECTOR, SCHOOL_1)
    assert "not authorized to create INSPECTOR" in exc.value.message


def test_scoped_create_without_school_requires_org_unit():
    scope = RoleHierarchyService.resolve_managed_roles(RoleName.SCHOOL_MANAGER, SCHOOL_1)

    with pytest.raises(OrgUnitRequiredException) as exc:
        RoleHierarchyService.authorize_create(scope, RoleName.ADMISSION_MANAGER, None)
    assert exc.value.message == "School ID is required when creating ADMISSION_MANAGER"


def test_scoped_create_for_other_school_is_rejected():
    scope = RoleHierarchyService.resolve_managed_roles(RoleName.SCHOOL_MANAGER, SCHOOL_1)

    with pytest.raises(OrgUnitMismatchException) as exc:
        RoleHierarchyService.authorize_create(scope, RoleName.ADMISSION_MANAGER, SCHOOL_2)
    assert exc.value.message == "You can only create users for your school"


def test_scoped_create_in_own_school_is_allowed():
    scope = RoleHierarchyService.resolve_managed_roles(RoleName.SCHOOL_MANAGER, SCHOOL_1)
    RoleHierarchyService.authorize_create(scope, RoleName.ADMISSION_MANAGER, SCHOOL_1)


def test_unscoped_create_without_school_is_allowed():
    scope = RoleHierarchyService.resolve_managed_roles(RoleName.SYSTEM_ADMIN)
    RoleHierarchyService.authorize_create(scope, RoleName.INSPECTOR, None)


@pytest.mark.parametrize(
    "target_role, target_school, allowed",
    [
        (RoleName.ADMISSION_MANAGER, SCHOOL_1, True),
        (RoleName.ADMISSION_MANAGER, SCHOOL_2, False),
        (RoleName.ADMISSION_MANAGER, None, False),
        (RoleName.INSPECTOR, SCHOOL_1, False),
        (RoleName.SCHOOL_MANAGER, SCHOOL_1, False),
        (RoleName.SYSTEM_ADMIN, None, False),
    ],
)
def test_scope_containment_for_existing_targets(target_role, target_school, allowed):
    """An org-scoped manager may act on a target iff role is managed and school matches."""
    scope = RoleHierarchyService.resolve_managed_roles(RoleName.SCHOOL_MANAGER, SCHOOL_1)
    target = _target(target_role, target_school)

    if allowed:
        RoleHierarchyService.authorize_on_existing(scope, target)
    else:
        with pytest.raises((RoleNotManagedException, OrgUnitMismatchException)):
            RoleHierarchyService.authorize_on_existing(scope, target)


def test_existing_target_message_names_action_and_role():
    scope = RoleHierarchyService.resolve_managed_roles(RoleName.SYSTEM_ADMIN)

    with pytest.raises(RoleNotManagedException) as exc:
        RoleHierarchyService.authorize_on_existing(scope, _target(RoleName.SCHOOL_MANAGER), action="delete")
    assert exc.value.message == "You are not authorized to delete SCHOOL_MANAGER users"


def test_existing_target_in_other_school():
    scope = RoleHierarchyService.resolve_managed_roles(RoleName.SCHOOL_MANAGER, SCHOOL_1)

    with pytest.raises(OrgUnitMismatchException) as exc:
        RoleHierarchyService.authorize_on_existing(scope, _target(RoleName.ADMISSION_MANAGER, SCHOOL_2))
    assert exc.value.message == "You can only manage users within your school"


def test_uuid_and_string_school_ids_compare_equal():
    import uuid
    school = uuid.uuid4()
    scope = RoleHierarchyService.resolve_managed_roles(RoleName.SCHOOL_MANAGER, school)

    RoleHierarchyService.authorize_on_existing(scope, _target(RoleName.ADMISSION_MANAGER, str(school)))


def test_assign_outside_managed_set():
    scope = RoleHierarchyService.resolve_managed_roles(RoleName.SCHOOL_MANAGER, SCHOOL_1)

    with pytest.raises(RoleNotManagedException) as exc:
        RoleHierarchyService.authorize_assign(scope, RoleName.SCHOOL_MANAGER)
    assert exc.value.message == "You are not authorized to assign SCHOOL_MANAGER role"


def test_relocate_only_checked_for_scoped_managers():
    admin_scope = RoleHierarchyService.resolve_managed_roles(RoleName.SYSTEM_ADMIN)
    manager_scope = RoleHierarchyService.resolve_managed_roles(RoleName.SCHOOL_MANAGER, SCHOOL_1)

    RoleHierarchyService.authorize_relocate(admin_scope, SCHOOL_2)
    RoleHierarchyService.authorize_relocate(manager_scope, SCHOOL_1)
    with pytest.raises(OrgUnitMismatchException):
        RoleHierarchyService.authorize_relocate(manager_scope, SCHOOL_2)
