# inzozi/application/dtos/auth_dto.py

from pydantic import AliasChoices, EmailStr, Field

from inzozi.application.dtos.base_dto import CustomBaseModel


class ForgotPasswordRequest(CustomBaseModel):
    email: EmailStr = Field(..., description="Email of the account to reset.")


class ResetPasswordRequest(CustomBaseModel):
    """
    Second half of the self-service reset.

    ``token`` is the single-use ticket from the emailed link. Password
    strength is checked by the reset service so a weak password is a 400.
    """
    token: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("token", "ticket"),
        description="Reset ticket received by email.",
    )
    new_password: str = Field(
        ...,
        validation_alias=AliasChoices("new_password", "newPassword", "password"),
        description="New password: 8-72 characters with upper, lower, digit and special.",
    )
