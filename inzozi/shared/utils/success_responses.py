# inzozi/shared/utils/success_responses.py

# OpenAPI documentation for successful responses (uniform envelope)

_USER_EXAMPLE = {
    "id": "3fa85f64-5717-4562-b3fc-2c963f66afa6",
    "first_name": "Aline",
    "last_name": "Uwase",
    "email": "aline@inzozi.rw",
    "role": {"id": "7c9e6679-7425-40de-944b-e07fc1f90ae7", "name": "ADMISSION_MANAGER"},
    "school_id": "9b2f4c1e-2d7a-4e0b-8f1e-6f1f2b9c0d11",
    "created_at": "2025-01-01T08:00:00Z",
}

common_success = {
    200: {
        "description": "Request processed successfully",
        "content": {
            "application/json": {
                "example": {"success": True, "message": "Operation completed successfully.", "data": None}
            }
        },
    }
}

auth_success = {
    201: {
        "description": "User registered",
        "content": {
            "application/json": {
                "example": {"success": True, "message": "Registration successful", "data": {"user": _USER_EXAMPLE}}
            }
        },
    },
    **common_success,
}

user_success = {
    201: {
        "description": "User created",
        "content": {
            "application/json": {
                "example": {
                    "success": True,
                    "message": "ADMISSION_MANAGER user created successfully",
                    "data": {"user": _USER_EXAMPLE, "temporary_password": "Xy7#kLm2Qp9@"},
                }
            }
        },
    },
    **common_success,
}
