# inzozi/application/dtos/user_dto.py

"""
Schemas for user data.

This module defines DTOs (Data Transfer Objects) for validating and
serializing data related to users: self-registration, login, accounts
created by a manager and their updates.
"""

from uuid import UUID
from datetime import datetime
from typing import Optional, Literal
from pydantic import (
    field_validator,
    EmailStr,
    Field,
)

from inzozi.application.dtos.base_dto import CustomBaseModel
from inzozi.shared.utils.input_validation import InputValidator

Gender = Literal["Male", "Female", "Other"]


def _check_password(v: Optional[str]) -> Optional[str]:
    if v is None:
        return v
    is_valid, errors = InputValidator.validate_password(v)
    if not is_valid:
        raise ValueError("; ".join(errors))
    return v


def _check_name(v: Optional[str], field: str) -> Optional[str]:
    if v is None:
        return v
    v = InputValidator.sanitize_name(v)
    is_valid, error_msg = InputValidator.validate_name(v, field=field)
    if not is_valid:
        raise ValueError(error_msg)
    return v


def _check_phone(v: Optional[str]) -> Optional[str]:
    if v is None or v == "":
        return None
    is_valid, error_msg = InputValidator.validate_phone(v)
    if not is_valid:
        raise ValueError(error_msg)
    return InputValidator.normalize_phone(v)


class UserProfileFields(CustomBaseModel):
    """
    Schema base for personal data.

    Shared by registration and manager-created accounts.
    """
    first_name: str = Field(..., description="First name of the user.")
    last_name: str = Field(..., description="Last name of the user.")
    email: EmailStr = Field(..., description="Email of the user. Must be unique.")
    gender: Optional[Gender] = Field(None, description="Male, Female or Other.")
    phone: Optional[str] = Field(None, description="Rwandan mobile number (07XXXXXXXX or +2507XXXXXXXX).")
    province: Optional[str] = Field(None, max_length=100)
    district: Optional[str] = Field(None, max_length=100)
    sector: Optional[str] = Field(None, max_length=100)
    cell: Optional[str] = Field(None, max_length=100)
    village: Optional[str] = Field(None, max_length=100)

    @field_validator("first_name")
    def validate_first_name(cls, v):
        return _check_name(v, "First name")

    @field_validator("last_name")
    def validate_last_name(cls, v):
        return _check_name(v, "Last name")

    @field_validator("phone")
    def validate_phone(cls, v):
        return _check_phone(v)


class UserRegister(UserProfileFields):
    """
    Schema for self-registration.

    The role is not chosen by the caller: every self-registered account
    gets the default role.
    """
    password: str = Field(..., description="Password: 8-72 characters with upper, lower, digit and special.")

    @field_validator("password")
    def validate_password_security(cls, v):
        """
        Validates the password to ensure minimum security requirements.

        Raises:
            ValueError: If the password doesn't meet requirements
        """
        return _check_password(v)


class UserLogin(CustomBaseModel):
    """
    Schema for user login.

    Used for user authentication via email and password.
    """

    email: EmailStr = Field(
        ...,
        description="Email of the user. Must be a valid and registered email.",
    )
    password: str = Field(
        ...,
        description="User's password used for authentication."
    )


class UserCreateByManager(UserProfileFields):
    """
    Schema for a manager creating a subordinate account.

    When ``password`` is omitted a temporary one is generated and emailed.
    """
    role_id: UUID = Field(..., description="Role of the new user; must be one the caller manages.")
    school_id: Optional[UUID] = Field(None, description="School of the new user.")
    password: Optional[str] = Field(None, description="Initial password; generated when omitted.")

    @field_validator("password")
    def validate_password_security(cls, v):
        return _check_password(v)


class UserUpdate(CustomBaseModel):
    """
    Schema for a manager updating a subordinate account.

    Every field is optional; only the ones sent are changed.
    """
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[EmailStr] = None
    gender: Optional[Gender] = None
    phone: Optional[str] = None
    province: Optional[str] = Field(None, max_length=100)
    district: Optional[str] = Field(None, max_length=100)
    sector: Optional[str] = Field(None, max_length=100)
    cell: Optional[str] = Field(None, max_length=100)
    village: Optional[str] = Field(None, max_length=100)
    role_id: Optional[UUID] = Field(None, description="New role; must stay inside the caller's managed set.")
    school_id: Optional[UUID] = Field(None, description="New school; scoped managers cannot move users out.")

    @field_validator("first_name")
    def validate_first_name(cls, v):
        return _check_name(v, "First name")

    @field_validator("last_name")
    def validate_last_name(cls, v):
        return _check_name(v, "Last name")

    @field_validator("phone")
    def validate_phone(cls, v):
        return _check_phone(v)


class RoleOutput(CustomBaseModel):
    id: UUID
    name: str
    description: Optional[str] = None


class UserOutput(CustomBaseModel):
    """
    Schema for returning user data.

    Used to return user data in APIs without exposing the password hash.
    """
    id: UUID = Field(..., description="User's unique identifier.")
    first_name: str
    last_name: str
    email: EmailStr
    gender: Optional[str] = None
    phone: Optional[str] = None
    province: Optional[str] = None
    district: Optional[str] = None
    sector: Optional[str] = None
    cell: Optional[str] = None
    village: Optional[str] = None
    profile_image: Optional[str] = None
    school_id: Optional[UUID] = None
    role: Optional[RoleOutput] = None
    created_at: Optional[datetime] = Field(None, description="User creation date and time.")
    updated_at: Optional[datetime] = Field(None, description="Date and time of the last update.")
