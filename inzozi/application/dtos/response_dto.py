# inzozi/application/dtos/response_dto.py

"""
Response envelopes.

Every endpoint answers with ``{"success": bool, "message": str, "data": ...}``.
"""

from typing import Dict, Generic, List, Optional, TypeVar

from pydantic import Field

from inzozi.application.dtos.base_dto import CustomBaseModel
from inzozi.application.dtos.user_dto import UserOutput

T = TypeVar("T")


class ApiResponse(CustomBaseModel, Generic[T]):
    success: bool = True
    message: str
    data: Optional[T] = None


class UserData(CustomBaseModel):
    user: UserOutput


class LoginData(CustomBaseModel):
    user: UserOutput
    token: str = Field(..., description="Bearer token for the Authorization header.")


class ForgotPasswordData(CustomBaseModel):
    token: str = Field(..., description="Single-use reset ticket.")


class CreatedUserData(CustomBaseModel):
    user: UserOutput
    temporary_password: Optional[str] = Field(
        None, description="Generated password, only present when none was supplied."
    )


class PaginationMeta(CustomBaseModel):
    current_page: int
    total_pages: int
    total_users: int
    users_per_page: int
    has_next_page: bool
    has_prev_page: bool


class UserListData(CustomBaseModel):
    users: List[UserOutput]
    pagination: PaginationMeta


class UserStatsData(CustomBaseModel):
    total_users: int
    role_breakdown: Dict[str, int]


class AvailableRole(CustomBaseModel):
    id: Optional[str] = None
    name: str
    description: Optional[str] = None


class AvailableRolesData(CustomBaseModel):
    available_roles: List[AvailableRole]
    current_user_role: Optional[str] = None
    can_manage: bool
