# inzozi/shared/utils/messages_utils.py

"""
Message catalogue for validation feedback and API responses.
"""

from typing import Dict

DEFAULT_LANGUAGE = "en"

MESSAGES: Dict[str, Dict[str, str]] = {
    # Password validation
    "password_empty": {
        "en": "Password cannot be empty.",
    },
    "password_too_short": {
        "en": "Password must be at least {min} characters long.",
    },
    "password_too_long": {
        "en": "Password is too long (maximum {max} characters).",
    },
    "password_missing_uppercase": {
        "en": "Password must contain at least one uppercase letter.",
    },
    "password_missing_lowercase": {
        "en": "Password must contain at least one lowercase letter.",
    },
    "password_missing_number": {
        "en": "Password must contain at least one number.",
    },
    "password_missing_special": {
        "en": "Password must contain at least one special character (!@#$%^&*).",
    },

    # Names / phone
    "name_empty": {
        "en": "{field} cannot be empty.",
    },
    "name_too_long": {
        "en": "{field} is too long (maximum {max} characters).",
    },
    "name_invalid_chars": {
        "en": "{field} contains invalid characters.",
    },
    "phone_invalid": {
        "en": "Phone number must look like 07XXXXXXXX or +2507XXXXXXXX.",
    },

    # Auth responses
    "registration_successful": {"en": "Registration successful"},
    "login_successful": {"en": "Login successful"},
    "logout_successful": {"en": "Logged out successfully"},
    "email_in_use": {"en": "Email already in use"},
    "invalid_credentials": {"en": "Invalid credentials"},
    "incorrect_password": {"en": "Incorrect password"},
    "reset_link_sent": {"en": "Password reset link sent to your email"},
    "password_updated": {"en": "Password updated successfully"},
    "profile_retrieved": {"en": "Profile retrieved successfully"},

    # Gate
    "authorization_header_missing": {"en": "Authorization header missing"},
    "token_missing": {"en": "Token missing"},
    "unauthorized": {"en": "Unauthorized"},
    "access_denied": {"en": "Access denied"},
    "forbidden_resource": {"en": "You do not have permission to access this resource"},

    # User management
    "user_not_found": {"en": "User not found"},
    "user_email_exists": {"en": "User with this email already exists"},
    "user_created": {"en": "{role} user created successfully"},
    "users_retrieved": {"en": "Users retrieved successfully"},
    "user_retrieved": {"en": "User retrieved successfully"},
    "user_updated": {"en": "User updated successfully"},
    "user_deleted": {"en": "{role} user deleted successfully"},
    "user_password_reset": {"en": "Password reset successfully"},
    "user_password_sent": {"en": "New password has been sent to user's email"},
    "stats_retrieved": {"en": "User statistics retrieved successfully"},
    "roles_retrieved": {"en": "Available roles retrieved successfully"},

    "internal_error": {"en": "Internal server error"},
    "validation_error": {"en": "Validation error"},
}


def get_message(key: str, language: str = DEFAULT_LANGUAGE, **kwargs) -> str:
    """
    Look up ``key`` in the catalogue and format it with ``kwargs``.

    Unknown languages fall back to English; unknown keys return the key.
    """
    entry = MESSAGES.get(key)
    if entry is None:
        return key
    template = entry.get(language) or entry[DEFAULT_LANGUAGE]
    return template.format(**kwargs) if kwargs else template
