# inzozi/shared/utils/error_responses.py

# OpenAPI documentation for failure responses (uniform envelope)


def _envelope(message: str) -> dict:
    return {"success": False, "message": message, "data": None}


common_errors = {
    500: {
        "description": "Internal server error",
        "content": {"application/json": {"example": _envelope("Internal server error")}},
    }
}

auth_errors = {
    400: {
        "description": "Bad Request (invalid or expired reset token)",
        "content": {"application/json": {"example": _envelope("Invalid or expired token")}},
    },
    401: {
        "description": "Unauthorized (invalid credentials or token)",
        "content": {
            "application/json": {
                "examples": {
                    "missing_header": {
                        "summary": "Missing header",
                        "value": _envelope("Authorization header missing"),
                    },
                    "invalid_token": {
                        "summary": "Invalid, expired or revoked token",
                        "value": _envelope("Unauthorized"),
                    },
                    "invalid_credentials": {
                        "summary": "Unknown email",
                        "value": _envelope("Invalid credentials"),
                    },
                    "incorrect_password": {
                        "summary": "Wrong password",
                        "value": _envelope("Incorrect password"),
                    },
                }
            }
        },
    },
    404: {
        "description": "User not found",
        "content": {"application/json": {"example": _envelope("User not found")}},
    },
    409: {
        "description": "Conflict (email already in use)",
        "content": {"application/json": {"example": _envelope("Email already in use")}},
    },
    **common_errors,
}

user_errors = {
    400: {
        "description": "Bad Request",
        "content": {
            "application/json": {
                "examples": {
                    "school_required": {
                        "summary": "School required",
                        "value": _envelope("School ID is required when creating ADMISSION_MANAGER"),
                    },
                    "invalid_role": {
                        "summary": "Invalid role",
                        "value": _envelope("Invalid role specified"),
                    },
                }
            }
        },
    },
    401: {
        "description": "Unauthorized",
        "content": {"application/json": {"example": _envelope("Unauthorized")}},
    },
    403: {
        "description": "Forbidden (outside the caller's managed roles or school)",
        "content": {
            "application/json": {
                "examples": {
                    "no_rights": {
                        "summary": "No management rights",
                        "value": _envelope("Insufficient permissions for user management"),
                    },
                    "role_not_managed": {
                        "summary": "Role not managed",
                        "value": _envelope("You are not authorized to manage INSPECTOR users"),
                    },
                    "other_school": {
                        "summary": "Other school",
                        "value": _envelope("You can only manage users within your school"),
                    },
                }
            }
        },
    },
    404: {
        "description": "User not found",
        "content": {"application/json": {"example": _envelope("User not found")}},
    },
    409: {
        "description": "Conflict (email already in use)",
        "content": {"application/json": {"example": _envelope("User with this email already exists")}},
    },
    **common_errors,
}
