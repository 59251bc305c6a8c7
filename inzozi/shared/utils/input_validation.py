# inzozi/shared/utils/input_validation.py

import regex
import re
from typing import Optional, Tuple, List
from inzozi.shared.utils.messages_utils import get_message


class InputValidator:
    """
    Validation and sanitisation of user input.

    Regular expressions for names and phone numbers, plus password strength
    rules shared by registration, manager-created accounts and resets.
    """

    # ─────────────────────────────────────────────────────────────
    # Limits
    MAX_NAME_LENGTH = 100
    MAX_PASSWORD_LENGTH = 72  # bcrypt only looks at the first 72 bytes
    MIN_PASSWORD_LENGTH = 8

    # ─────────────────────────────────────────────────────────────
    # Patterns

    # Any Unicode letter or combining mark, plus space, dot, hyphen, apostrophe
    NAME_PATTERN = regex.compile(
        r"^[\p{L}\p{M} .'-]+$",
        flags=regex.UNICODE
    )

    # Rwandan mobile numbers: 07XXXXXXXX, optionally with the +250 / 250 prefix
    PHONE_PATTERN = re.compile(
        r"^(?:\+?250|0)7[2389]\d{7}$"
    )

    SPECIAL_CHARACTERS = "!@#$%^&*()_+-=[]{}|;:,.<>?/"

    # ─────────────────────────────────────────────────────────────

    @classmethod
    def validate_password(cls, password: str, language: str = "en") -> Tuple[bool, Optional[List[str]]]:
        """
        Check a password against the strength rules.

        Returns:
            (is_valid, list of error messages or None)
        """
        errors: List[str] = []

        if not password:
            errors.append(get_message("password_empty", language))
        else:
            if len(password) < cls.MIN_PASSWORD_LENGTH:
                errors.append(
                    get_message("password_too_short", language, min=cls.MIN_PASSWORD_LENGTH)
                )
            if len(password.encode("utf-8")) > cls.MAX_PASSWORD_LENGTH:
                errors.append(
                    get_message("password_too_long", language, max=cls.MAX_PASSWORD_LENGTH)
                )
            if not any(c.isupper() for c in password):
                errors.append(get_message("password_missing_uppercase", language))
            if not any(c.islower() for c in password):
                errors.append(get_message("password_missing_lowercase", language))
            if not any(c.isdigit() for c in password):
                errors.append(get_message("password_missing_number", language))
            if not any(c in cls.SPECIAL_CHARACTERS for c in password):
                errors.append(get_message("password_missing_special", language))

        if errors:
            return False, errors

        return True, None

    @classmethod
    def sanitize_name(cls, name: str) -> str:
        sanitized = re.sub(r'\s+', ' ', name.strip())
        return sanitized[:cls.MAX_NAME_LENGTH]

    @classmethod
    def validate_name(cls, name: str, field: str = "Name", language: str = "en") -> Tuple[bool, Optional[str]]:
        if not name or not name.strip():
            return False, get_message("name_empty", language, field=field)
        if len(name) > cls.MAX_NAME_LENGTH:
            return False, get_message("name_too_long", language, field=field, max=cls.MAX_NAME_LENGTH)
        if not cls.NAME_PATTERN.match(name):
            return False, get_message("name_invalid_chars", language, field=field)
        return True, None

    @classmethod
    def normalize_phone(cls, phone: str) -> str:
        return re.sub(r"[\s-]", "", phone or "")

    @classmethod
    def validate_phone(cls, phone: str, language: str = "en") -> Tuple[bool, Optional[str]]:
        if not cls.PHONE_PATTERN.match(cls.normalize_phone(phone)):
            return False, get_message("phone_invalid", language)
        return True, None
